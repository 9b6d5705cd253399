from __future__ import annotations

from claire.exceptions import (
    AppError,
    QueryValidationError,
    UpstreamError,
    UpstreamUnavailableError,
    error_message,
)


def test_error_status_codes() -> None:
    assert AppError("x").status_code == 500
    assert QueryValidationError().status_code == 422
    assert UpstreamError(upstream_status=404).status_code == 502
    assert UpstreamUnavailableError().status_code == 503


def test_upstream_error_without_body_uses_generic_detail() -> None:
    for body in (None, "", {}, []):
        assert UpstreamError(upstream_status=500, body=body).detail == "Request failed"


def test_upstream_error_keeps_body() -> None:
    err = UpstreamError(upstream_status=400, body="bad documents field")
    assert err.detail == "bad documents field"
    assert err.upstream_status == 400


def test_error_message() -> None:
    assert error_message(None) == "Request failed"
    assert error_message("") == "Request failed"
    assert error_message("plain") == "plain"
    assert error_message({"detail": "boom"}) == '{"detail": "boom"}'
    assert error_message(["a", 1]) == '["a", 1]'
