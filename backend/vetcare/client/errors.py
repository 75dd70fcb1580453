"""Module: errors."""

from typing import Any

import httpx
from pydantic import ValidationError

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class ApiRequestError(Exception):
    """Failed HTTP call. ``status`` is None when the request never got a response."""

    def __init__(self, status: int | None, message: str | None = None, payload: Any = None) -> None:
        super().__init__(message or f"Request failed with status {status}")
        self.status = status
        self.message = message
        self.payload = payload


def _server_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    if isinstance(body.get("message"), str):
        return body["message"]
    detail = body.get("detail")
    if isinstance(detail, str):
        return detail
    # FastAPI validation errors: [{"loc": [...], "msg": "..."}]
    if isinstance(detail, list) and detail and isinstance(detail[0], dict):
        return detail[0].get("msg")
    return None


def raise_for_response(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = None
    raise ApiRequestError(response.status_code, _server_message(body), body)


def error_message(exc: BaseException, fallback: str = GENERIC_ERROR_MESSAGE) -> str:
    if isinstance(exc, ApiRequestError) and exc.message:
        return exc.message
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            return errors[0]["msg"]
    return fallback
