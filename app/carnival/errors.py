"""Error taxonomy shared by controllers and routes.

Controllers raise these; the handler registered in ``main`` turns them into
``{"success": false, "error": ...}`` bodies with the matching status code.
"""

from typing import Optional

from fastapi import status


class CarnivalError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: Optional[str] = None

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        if error_code:
            self.error_code = error_code
        super().__init__(message)


class Unauthorized(CarnivalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized", error_code: Optional[str] = None):
        super().__init__(message, error_code)


class Forbidden(CarnivalError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"


class NotFound(CarnivalError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ValidationFailed(CarnivalError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class Conflict(CarnivalError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "CONFLICT"


class UpstreamError(CarnivalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "UPSTREAM_ERROR"
