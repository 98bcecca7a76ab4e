from typing import Optional


class ServiceException(Exception):
    """
    Base exception for business-rule failures raised inside services.

    `code` is an optional numeric error code; lifecycle operations turn it
    into an `ERROR_<code>` envelope code.
    """
    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message
        self.code = code
        super().__init__(self.message)


class RoleNotFoundException(ServiceException):
    """
    Exception raised when a role name has no matching row
    """
    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role '{role_name}' does not exist", code=404)
