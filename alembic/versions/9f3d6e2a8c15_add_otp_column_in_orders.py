"""add_otp_column_in_orders

Revision ID: 9f3d6e2a8c15
Revises: 4c1e9a7d2b30
Create Date: 2024-07-25 08:12:22.406715

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9f3d6e2a8c15'
down_revision: Union[str, Sequence[str], None] = '4c1e9a7d2b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # One-time code shown to the customer and checked by the deliveryman
    op.add_column('orders', sa.Column('otp', sa.SmallInteger(), nullable=True))


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_column('orders', 'otp')
