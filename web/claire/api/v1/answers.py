from __future__ import annotations

import structlog
from fastapi import APIRouter

from claire.pipelines.client import get_answers
from claire.pipelines.normalizer import normalize_payload
from claire.schemas.answers import AnswersRequest, AnswersResponse

logger = structlog.get_logger()
router = APIRouter(tags=["answers"])


@router.post("/answers", response_model=AnswersResponse)
async def fetch_answers(request_body: AnswersRequest) -> AnswersResponse:
    """Forward documents and questions to the Q&A service and normalize the reply.

    Upstream failures surface as ``AppError`` responses (502 for a non-2xx
    reply, 503 when the service is unreachable) with the upstream body as
    ``detail`` when there was one.

    Args:
        request_body: Documents (URL or texts) and at least one question.

    Returns:
        AnswersResponse with the normalized entries, the raw payload and the
        detected payload shape.
    """
    raw = await get_answers(request_body.documents, request_body.questions)
    shape, entries = normalize_payload(raw, request_body.questions)

    logger.info("answers_served", shape=shape.value, entry_count=len(entries))
    return AnswersResponse(entries=entries, raw=raw, shape=shape.value)
