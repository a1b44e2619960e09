"""Uniform ``{success, message, data}`` response envelope."""
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(success: bool, message: str, data: Any = None) -> dict:
    return {"success": success, "message": message, "data": data if data is not None else {}}


def success(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope(True, message, data)))


def created(message: str, data: Any = None) -> JSONResponse:
    return success(message, data, status_code=201)


def failure(message: str, status_code: int = 400, data: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope(False, message, data)))
