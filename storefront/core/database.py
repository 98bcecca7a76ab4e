"""
Database connection and session management
Uses SQLAlchemy async engine for PostgreSQL
Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from storefront.core.config import settings


# Validate DATABASE_URL is set
if not settings.DATABASE_URL:
    raise ValueError(
        "DATABASE_URL environment variable is not set. "
        "Please set it in your .env file or environment variables."
    )

# asyncpg-specific connection arguments
# Reference: https://magicstack.github.io/asyncpg/current/api/index.html#connection
connect_args = {}
if settings.DATABASE_URL.startswith("postgresql+asyncpg://"):
    connect_args = {
        "command_timeout": 60,
        "server_settings": {
            "application_name": "storefront",
        },
    }

# Using NullPool - each session gets a fresh connection
# Reference: https://docs.sqlalchemy.org/en/20/core/pooling.html#switching-pool-implementations
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,  # Set to True for SQL query logging (useful for debugging)
    poolclass=NullPool,
    connect_args=connect_args,
)


# Create async session factory
# Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html#session-basics
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Keep objects accessible after commit
    autoflush=False,
)


# Base class for all database models
# Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models"""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Provide a database session for one unit of work.

    Commits on success, rolls back on error and always closes the session.
    Services only flush; the commit belongs here.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
