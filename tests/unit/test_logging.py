from __future__ import annotations

import logging

import pytest
from httpx import AsyncClient

from claire.logging_config import setup_logging
from claire.middleware.logging import REQUEST_ID_HEADER


def test_setup_logging_sets_root_level() -> None:
    setup_logging("WARNING")
    assert logging.getLogger().level == logging.WARNING
    setup_logging("INFO")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_unknown_level_falls_back_to_info() -> None:
    setup_logging("NOT-A-LEVEL", json_logs=True)
    assert logging.getLogger().level == logging.INFO


@pytest.mark.anyio
async def test_request_id_is_echoed(api_client: AsyncClient) -> None:
    resp = await api_client.get("/about", headers={REQUEST_ID_HEADER: "abc-123"})
    assert resp.headers[REQUEST_ID_HEADER] == "abc-123"


@pytest.mark.anyio
async def test_request_id_is_generated(api_client: AsyncClient) -> None:
    resp = await api_client.get("/about")
    assert len(resp.headers[REQUEST_ID_HEADER]) == 32
