"""
Response envelope.

Every JSON body is {success, data?, error?, message?}.
"""
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
) -> JSONResponse:
    content = {"success": True}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def error_response(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    content = {"success": False, "error": error}
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)
