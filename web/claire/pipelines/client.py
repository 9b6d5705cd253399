from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from claire.clients import get_qa_client
from claire.config import settings
from claire.exceptions import GENERIC_FAILURE_MESSAGE, UpstreamError, UpstreamUnavailableError
from claire.metrics import qa_request_duration, qa_requests_total

logger = structlog.get_logger()


def _auth_headers() -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {settings.QA_API_TOKEN.get_secret_value()}",
    }


def _decode_body(response: httpx.Response) -> Any:
    """Parse a response body as JSON, falling back to its text; empty bodies give ``None``."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


async def get_answers(
    documents: str | list[Any],
    questions: list[str],
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Send one question-answering request to the remote Q&A service.

    A single attempt is made; there is no retry. The timeout is whatever
    ``QA_TIMEOUT_SECONDS`` configures on the shared client.

    Args:
        documents: A document URL, or a list of document texts.
        questions: The questions to answer, in display order.
        client: HTTP client to use. Defaults to the shared singleton.

    Returns:
        The decoded response payload. Its shape is not fixed; see
        ``claire.pipelines.normalizer``.

    Raises:
        UpstreamError: The service answered with a non-2xx status.
        UpstreamUnavailableError: The request never got a response.
    """
    http = client or get_qa_client()
    url = settings.qa_run_url
    payload = {"documents": documents, "questions": questions}

    logger.info(
        "qa_request_sent",
        url=url,
        question_count=len(questions),
        document_kind="url" if isinstance(documents, str) else "texts",
    )

    start_time = time.perf_counter()
    try:
        response = await http.post(url, json=payload, headers=_auth_headers())
    except httpx.HTTPError as exc:
        qa_requests_total.labels(outcome="unavailable").inc()
        logger.error("qa_request_failed", url=url, error=str(exc))
        raise UpstreamUnavailableError(GENERIC_FAILURE_MESSAGE) from exc
    finally:
        qa_request_duration.observe(time.perf_counter() - start_time)

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    body = _decode_body(response)

    if not response.is_success:
        qa_requests_total.labels(outcome="error").inc()
        logger.error(
            "qa_request_rejected",
            url=url,
            status_code=response.status_code,
            duration_ms=duration_ms,
            body_preview=str(body)[:500],
        )
        raise UpstreamError(upstream_status=response.status_code, body=body)

    qa_requests_total.labels(outcome="ok").inc()
    logger.info("qa_response_received", status_code=response.status_code, duration_ms=duration_ms)
    return body
