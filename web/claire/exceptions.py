from __future__ import annotations

import json
from typing import Any

from fastapi import HTTPException, status

GENERIC_FAILURE_MESSAGE = "Request failed"


class AppError(HTTPException):
    """Base application error."""

    def __init__(self, detail: Any, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(status_code=status_code, detail=detail)


class QueryValidationError(AppError):
    """User input is unusable; raised before any request leaves the process."""

    def __init__(self, detail: str = "Validation error") -> None:
        super().__init__(detail=detail, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


class UpstreamError(AppError):
    """The Q&A service answered with a non-2xx status."""

    def __init__(self, upstream_status: int, body: Any = None) -> None:
        self.upstream_status = upstream_status
        self.body = body
        detail = body if body not in (None, "", {}, []) else GENERIC_FAILURE_MESSAGE
        super().__init__(detail=detail, status_code=status.HTTP_502_BAD_GATEWAY)


class UpstreamUnavailableError(AppError):
    """The Q&A service could not be reached at all."""

    def __init__(self, detail: str = GENERIC_FAILURE_MESSAGE) -> None:
        super().__init__(detail=detail, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def error_message(detail: Any) -> str:
    """Turn an error detail (string or parsed JSON body) into display text."""
    if detail is None or detail == "":
        return GENERIC_FAILURE_MESSAGE
    if isinstance(detail, str):
        return detail
    return json.dumps(detail, ensure_ascii=False, default=str)
