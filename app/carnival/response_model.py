from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

INTERNAL_ERROR_MESSAGE = "Internal server error"


def ResponseModel(data: dict, status_code: int = status.HTTP_200_OK):
    """Successful response: ``{"success": true, **data}``."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": True, **data}),
    )


def PlainResponseModel(data: Any, status_code: int = status.HTTP_200_OK):
    # bare object or list, no success envelope
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


def ErrorResponseModel(error: str, code: int, error_code: Optional[str] = None):
    body = {"success": False, "error": error}
    if error_code:
        body["code"] = error_code
    return JSONResponse(status_code=code, content=body)


def CarnivalErrorResponse(exc):
    return ErrorResponseModel(exc.message, exc.status_code, exc.error_code)


def InternalErrorResponse():
    return ErrorResponseModel(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
