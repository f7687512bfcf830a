"""
Domain errors raised by the service layer.

Every error is an HTTPException so services can raise them the same way they
raise plain HTTPExceptions, and FastAPI renders them without extra handlers.
"""

from typing import Optional
from fastapi import HTTPException, status


class OutMentorError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=type(self).status_code, detail=detail or self.default_detail)


class RoleMismatch(OutMentorError):
    default_detail = "Connections must pair one mentor with one team"


class SelfReport(OutMentorError):
    default_detail = "You cannot report your own profile"


class InvalidOperation(OutMentorError):
    default_detail = "You cannot follow your own profile"


class InvalidState(OutMentorError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Operation not allowed in the current state"


class NotFound(OutMentorError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class StoreFailure(OutMentorError):
    """The persistence call failed. The original exception is kept as ``cause``."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Store operation failed"

    def __init__(self, detail: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(detail)
        self.cause = cause
