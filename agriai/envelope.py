from __future__ import annotations

from typing import Any, Iterable, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel


class ApiError(Exception):
    def __init__(self, status_code: int, message: str = "Something went wrong", errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def api_response(data: Any, message: str = "Success", status_code: int = 200) -> JSONResponse:
    """Wrap `data` in the {statusCode, data, message, success} envelope."""
    body = {
        "statusCode": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400,
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, by_alias=True))


def error_response(status_code: int, message: str, errors: Optional[List[Any]] = None) -> JSONResponse:
    body = {
        "statusCode": status_code,
        "data": None,
        "message": message,
        "success": False,
        "errors": errors or [],
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(payload: Any, names: Iterable[str]) -> None:
    """Raise a 400 naming every required field when any of them is missing.

    Zero and False are present values; only None and blank strings are missing.
    """
    names = list(names)
    if any(_is_blank(getattr(payload, n, None)) for n in names):
        raise ApiError(400, "Required fields: " + ", ".join(to_camel(n) for n in names))


def camel_keys(trends: dict) -> dict:
    """{snake_metric: Trend} -> {camelMetric: {"trend", "change"}}"""
    return {to_camel(k): t.as_dict() for k, t in trends.items()}
