from claire.schemas.answers import AnswerEntry, AnswersRequest, AnswersResponse
from claire.schemas.health import HealthResponse, ServiceStatus

__all__ = [
    "AnswerEntry",
    "AnswersRequest",
    "AnswersResponse",
    "HealthResponse",
    "ServiceStatus",
]
