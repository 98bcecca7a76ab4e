"""
Result envelope for service operations.

Lifecycle operations never raise across their boundary; they return a
ServiceResult whose `to_dict()` is the `{status, code, message?, data?}`
envelope handed to callers.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from storefront.core.config import settings
from storefront.core.exceptions import ServiceException
from storefront.core.messages import get_message

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ResponseCode(str, Enum):
    """Envelope codes shared with the rest of the platform."""

    NO_ERROR = "OK"
    ERROR_400 = "ERROR_400"
    ERROR_404 = "ERROR_404"
    # User already owns a shop
    ERROR_206 = "ERROR_206"
    # User is an administrator
    ERROR_207 = "ERROR_207"
    ERROR_501 = "ERROR_501"


class ErrorKind(str, Enum):
    """Exhaustive failure kinds of the shop lifecycle."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"
    BAD_REQUEST = "bad_request"


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        status: True if the operation succeeded
        code: Envelope code (ResponseCode value or ERROR_<n>)
        data: Success payload
        error: Failure kind (None on success)
        message: Human-readable message (optional on success)
    """

    status: bool
    code: str
    data: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status

    def to_dict(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"status": self.status, "code": self.code}
        if self.message is not None:
            envelope["message"] = self.message
        if self.data is not None:
            envelope["data"] = self.data
        return envelope


def service_ok(data: Optional[T] = None) -> ServiceResult[T]:
    return ServiceResult(status=True, code=ResponseCode.NO_ERROR.value, data=data)


def service_err(
    error: ErrorKind, code: str, message: Optional[str] = None
) -> ServiceResult:
    return ServiceResult(status=False, code=code, error=error, message=message)


def describe_exception(exc: BaseException, code: str, locale: Optional[str] = None) -> str:
    """
    Build the message for an envelope produced from a caught exception.

    Business exceptions carry safe text and are passed through. Anything else
    is reduced to the catalog message unless EXPOSE_ERROR_DETAILS is enabled,
    in which case the exception text and its origin (file:line) are appended.
    """
    if isinstance(exc, ServiceException):
        message = exc.message
    else:
        message = get_message(code, locale)

    if settings.EXPOSE_ERROR_DETAILS:
        frames = traceback.extract_tb(exc.__traceback__)
        origin = f" {frames[-1].filename}:{frames[-1].lineno}" if frames else ""
        message = f"{message}: {type(exc).__name__}: {exc}{origin}"

    return message
