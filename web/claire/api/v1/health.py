from __future__ import annotations

import httpx
import structlog
from fastapi import APIRouter

from claire.config import settings
from claire.schemas.health import HealthResponse, ServiceStatus

logger = structlog.get_logger()
router = APIRouter()


async def _check_qa_service() -> ServiceStatus:
    try:
        async with httpx.AsyncClient(timeout=settings.QA_HEALTH_TIMEOUT_SECONDS) as client:
            resp = await client.get(f"{settings.QA_BASE_URL.rstrip('/')}/")
            if resp.status_code < 500:
                return ServiceStatus(status="healthy")
            return ServiceStatus(status="unhealthy", detail=f"HTTP {resp.status_code}")
    except Exception as e:
        logger.error("health_check_qa_service_failed", error=str(e))
        return ServiceStatus(status="unhealthy", detail=str(e))


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report whether the Q&A service answers at its base URL."""
    qa_service = await _check_qa_service()

    return HealthResponse(
        status="healthy" if qa_service.status == "healthy" else "degraded",
        qa_service=qa_service,
    )
