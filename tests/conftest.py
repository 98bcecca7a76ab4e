import itertools
import os

# Settings are read at import time; tests never touch this URL
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./storefront-test.db")

import pytest
import pytest_asyncio
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from storefront.core.database import Base
from storefront.models import Language, Role, Shop, Tag, TagTranslation, User
from storefront.services.shop import ShopService


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}", poolclass=NullPool
    )

    # Let SQLAlchemy emit BEGIN itself so SAVEPOINTs work on SQLite
    # Reference: https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#serializable-isolation-savepoints-transactional-ddl
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def roles(db):
    roles = {name: Role(name=name) for name in ("admin", "seller", "user", "deliveryman")}
    db.add_all(roles.values())
    await db.flush()
    return roles


@pytest_asyncio.fixture
async def languages(db):
    db.add_all(
        [
            Language(title="English", locale="en", default=True),
            Language(title="Français", locale="fr"),
        ]
    )
    await db.flush()


@pytest.fixture
def make_user(db, roles):
    counter = itertools.count(1)

    async def _make_user(*role_names):
        n = next(counter)
        user = User(email=f"user{n}@example.com", firstname=f"First{n}", lastname=f"Last{n}")
        user.roles = [roles[name] for name in role_names]
        db.add(user)
        await db.flush()
        return user

    return _make_user


@pytest.fixture
def make_shop(db):
    async def _make_shop(owner, **fields):
        shop = Shop(user_id=owner.id, **fields)
        db.add(shop)
        await db.flush()
        return shop

    return _make_shop


@pytest.fixture
def make_tag(db):
    async def _make_tag(**titles):
        tag = Tag()
        db.add(tag)
        await db.flush()
        # Insert translations separately so the collection stays unloaded
        db.add_all(
            [TagTranslation(tag_id=tag.id, locale=locale, title=title) for locale, title in titles.items()]
        )
        await db.flush()
        return tag

    return _make_tag


@pytest.fixture
def shop_service():
    return ShopService()


@pytest.fixture
def count_rows(db):
    async def _count_rows(model, *criteria):
        result = await db.execute(select(func.count()).select_from(model).where(*criteria))
        return result.scalar_one()

    return _count_rows
