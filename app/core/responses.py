from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


INTERNAL_ERROR = "Internal server error"


def success(data: Any = None, status_code: int = 200, message: Optional[str] = None) -> JSONResponse:
    content = {"success": True, "data": data}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def failure(error: str, status_code: int, **extra: Any) -> JSONResponse:
    content = {"success": False, "error": error}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def server_error(exc: Exception) -> JSONResponse:
    return failure(str(exc) or INTERNAL_ERROR, 500)
