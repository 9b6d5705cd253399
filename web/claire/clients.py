from __future__ import annotations

import httpx
import structlog

from claire.config import settings

logger = structlog.get_logger()

_qa_client: httpx.AsyncClient | None = None


def get_qa_client() -> httpx.AsyncClient:
    """Get or create the singleton HTTP client for the Q&A service.

    Returns:
        The shared ``httpx.AsyncClient``. Created on first call and reused
        on subsequent calls (singleton pattern).
    """
    global _qa_client
    if _qa_client is None:
        _qa_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.QA_TIMEOUT_SECONDS))
        logger.info("qa_client_created", base_url=settings.QA_BASE_URL)
    return _qa_client


async def close_clients() -> None:
    """Close all singleton clients. Called on app shutdown."""
    global _qa_client
    if _qa_client:
        await _qa_client.aclose()
        _qa_client = None
        logger.info("qa_client_closed")
