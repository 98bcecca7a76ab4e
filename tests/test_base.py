import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core import database
from storefront.core.config import settings
from storefront.core.exceptions import RoleNotFoundException, ServiceException
from storefront.core.messages import get_message
from storefront.models import Role
from storefront.services.base import (
    ErrorKind,
    ResponseCode,
    describe_exception,
    service_err,
    service_ok,
)


class TestServiceResult:
    def test_success_envelope(self):
        result = service_ok({"deleted": [1], "failed": []})

        assert result.ok is True
        assert result.to_dict() == {
            "status": True,
            "code": "OK",
            "data": {"deleted": [1], "failed": []},
        }

    def test_error_envelope_omits_data(self):
        result = service_err(ErrorKind.CONFLICT, ResponseCode.ERROR_206.value, "taken")

        assert result.ok is False
        assert result.error == ErrorKind.CONFLICT
        assert result.to_dict() == {"status": False, "code": "ERROR_206", "message": "taken"}


class TestMessages:
    def test_known_locale(self):
        assert get_message("ERROR_404", "en") == "Not found"

    def test_unknown_locale_falls_back_to_default(self):
        assert get_message("ERROR_404", "xx") == get_message("ERROR_404", settings.DEFAULT_LOCALE)

    def test_unknown_code_returns_code(self):
        assert get_message("ERROR_999", "en") == "ERROR_999"


class TestDescribeException:
    def test_service_exception_message_is_kept(self):
        message = describe_exception(RoleNotFoundException("owner"), "ERROR_404", "en")

        assert message == "Role 'owner' does not exist"

    def test_other_exceptions_use_catalog_message(self):
        message = describe_exception(ValueError("secret dsn"), "ERROR_501", "en")

        assert message == get_message("ERROR_501", "en")

    def test_details_exposed_when_enabled(self, monkeypatch):
        monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAILS", True)
        try:
            raise ServiceException("Invalid tag", code=422)
        except ServiceException as e:
            message = describe_exception(e, "ERROR_422", "en")

        assert message.startswith("Invalid tag: ServiceException: Invalid tag ")
        assert "test_base.py:" in message


class TestGetDb:
    async def test_commits_on_success(self, engine, monkeypatch):
        session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(database, "async_session_maker", session_maker)

        async for session in database.get_db():
            session.add(Role(name="seller"))

        async with session_maker() as check:
            result = await check.execute(select(Role.name))
            assert result.scalars().all() == ["seller"]

    async def test_rolls_back_on_error(self, engine, monkeypatch):
        session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(database, "async_session_maker", session_maker)

        sessions = database.get_db()
        session = await sessions.__anext__()
        session.add(Role(name="seller"))
        await session.flush()

        with pytest.raises(RuntimeError):
            await sessions.athrow(RuntimeError("request failed"))

        async with session_maker() as check:
            result = await check.execute(select(Role.name))
            assert result.scalars().all() == []
