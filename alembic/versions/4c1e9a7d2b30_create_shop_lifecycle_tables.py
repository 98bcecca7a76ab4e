"""create_shop_lifecycle_tables

Revision ID: 4c1e9a7d2b30
Revises:
Create Date: 2024-07-10 09:14:52.118403

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e9a7d2b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('uuid', sa.String(length=36), nullable=False),
    sa.Column('firstname', sa.String(length=100), nullable=True),
    sa.Column('lastname', sa.String(length=100), nullable=True),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('uuid')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'roles',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=50), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name')
    )

    op.create_table(
        'user_roles',
    sa.Column('user_id', sa.Integer(), nullable=False),
    sa.Column('role_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('user_id', 'role_id')
    )

    op.create_table(
        'languages',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=100), nullable=False),
    sa.Column('locale', sa.String(length=10), nullable=False),
    sa.Column('default', sa.Boolean(), nullable=False),
    sa.Column('active', sa.Boolean(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('locale')
    )

    op.create_table(
        'shops',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('uuid', sa.String(length=36), nullable=False, comment='Public shop identifier'),
    sa.Column('user_id', sa.Integer(), nullable=False, comment='Seller who owns the shop'),
    sa.Column('phone', sa.String(length=30), nullable=True),
    sa.Column('tax', sa.Float(), nullable=False),
    sa.Column('percentage', sa.Float(), nullable=False, comment='Marketplace commission in percent'),
    sa.Column('min_amount', sa.Float(), nullable=False),
    sa.Column('price', sa.Float(), nullable=False, comment='Base delivery price'),
    sa.Column('price_per_km', sa.Float(), nullable=False),
    sa.Column('open', sa.Boolean(), nullable=False),
    sa.Column('visibility', sa.Boolean(), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('location', sa.JSON(), nullable=True, comment='{"latitude": ..., "longitude": ...}'),
    sa.Column('logo_img', sa.String(length=500), nullable=True),
    sa.Column('background_img', sa.String(length=500), nullable=True),
    sa.Column('delivery_type', sa.String(length=20), nullable=False),
    sa.Column('delivery_time', sa.JSON(), nullable=True, comment='Delivery window {"from", "to", "type"}'),
    sa.Column('verify', sa.Boolean(), nullable=False),
    sa.Column('type', sa.SmallInteger(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('uuid')
    )
    op.create_index(op.f('ix_shops_user_id'), 'shops', ['user_id'], unique=False)
    op.create_index(op.f('ix_shops_deleted_at'), 'shops', ['deleted_at'], unique=False)

    op.create_table(
        'shop_translations',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('locale', sa.String(length=10), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=True),
    sa.Column('description', sa.String(length=2000), nullable=True),
    sa.Column('address', sa.String(length=500), nullable=True),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('shop_id', 'locale', name='uq_shop_translations_shop_locale')
    )
    op.create_index(op.f('ix_shop_translations_shop_id'), 'shop_translations', ['shop_id'], unique=False)

    op.create_table(
        'shop_tags',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('img', sa.String(length=500), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'shop_tag_translations',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('tag_id', sa.Integer(), nullable=False),
    sa.Column('locale', sa.String(length=10), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.ForeignKeyConstraint(['tag_id'], ['shop_tags.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('tag_id', 'locale', name='uq_shop_tag_translations_tag_locale')
    )
    op.create_index(op.f('ix_shop_tag_translations_tag_id'), 'shop_tag_translations', ['tag_id'], unique=False)

    op.create_table(
        'shop_tag_assignments',
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('tag_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['tag_id'], ['shop_tags.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('shop_id', 'tag_id')
    )

    op.create_table(
        'galleries',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('loadable_type', sa.String(length=50), nullable=False),
    sa.Column('loadable_id', sa.Integer(), nullable=False),
    sa.Column('type', sa.String(length=50), nullable=False),
    sa.Column('path', sa.String(length=500), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_galleries_loadable', 'galleries', ['loadable_type', 'loadable_id'], unique=False)

    op.create_table(
        'invitations',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=False),
    sa.Column('role', sa.String(length=50), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_invitations_shop_id'), 'invitations', ['shop_id'], unique=False)
    op.create_index(op.f('ix_invitations_user_id'), 'invitations', ['user_id'], unique=False)

    op.create_table(
        'orders',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=True),
    sa.Column('total_price', sa.Float(), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_orders_shop_id'), 'orders', ['shop_id'], unique=False)
    op.create_index(op.f('ix_orders_user_id'), 'orders', ['user_id'], unique=False)

    op.create_table(
        'point_histories',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('order_id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=True),
    sa.Column('price', sa.Float(), nullable=False),
    sa.Column('value', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_point_histories_order_id'), 'point_histories', ['order_id'], unique=False)

    op.create_table(
        'shop_subscriptions',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('price', sa.Float(), nullable=False),
    sa.Column('active', sa.Boolean(), nullable=False),
    sa.Column('expired_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('shop_id')
    )

    op.create_table(
        'shop_working_days',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('day', sa.String(length=10), nullable=False, comment='monday..sunday'),
    sa.Column('from', sa.String(length=5), nullable=False),
    sa.Column('to', sa.String(length=5), nullable=False),
    sa.Column('disabled', sa.Boolean(), nullable=False),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shop_working_days_shop_id'), 'shop_working_days', ['shop_id'], unique=False)

    op.create_table(
        'shop_closed_dates',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.Integer(), nullable=False),
    sa.Column('date', sa.Date(), nullable=False),
    sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shop_closed_dates_shop_id'), 'shop_closed_dates', ['shop_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_shop_closed_dates_shop_id'), table_name='shop_closed_dates')
    op.drop_table('shop_closed_dates')
    op.drop_index(op.f('ix_shop_working_days_shop_id'), table_name='shop_working_days')
    op.drop_table('shop_working_days')
    op.drop_table('shop_subscriptions')
    op.drop_index(op.f('ix_point_histories_order_id'), table_name='point_histories')
    op.drop_table('point_histories')
    op.drop_index(op.f('ix_orders_user_id'), table_name='orders')
    op.drop_index(op.f('ix_orders_shop_id'), table_name='orders')
    op.drop_table('orders')
    op.drop_index(op.f('ix_invitations_user_id'), table_name='invitations')
    op.drop_index(op.f('ix_invitations_shop_id'), table_name='invitations')
    op.drop_table('invitations')
    op.drop_index('ix_galleries_loadable', table_name='galleries')
    op.drop_table('galleries')
    op.drop_table('shop_tag_assignments')
    op.drop_index(op.f('ix_shop_tag_translations_tag_id'), table_name='shop_tag_translations')
    op.drop_table('shop_tag_translations')
    op.drop_table('shop_tags')
    op.drop_index(op.f('ix_shop_translations_shop_id'), table_name='shop_translations')
    op.drop_table('shop_translations')
    op.drop_index(op.f('ix_shops_deleted_at'), table_name='shops')
    op.drop_index(op.f('ix_shops_user_id'), table_name='shops')
    op.drop_table('shops')
    op.drop_table('languages')
    op.drop_table('user_roles')
    op.drop_table('roles')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
