from __future__ import annotations

import enum
import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from claire.metrics import answers_rendered_total, payload_shapes_total
from claire.schemas.answers import AnswerEntry

logger = structlog.get_logger()

# Field names probed on the payload and on each item, in priority order
ARRAY_FIELDS = ("answers", "data", "result", "output", "items")
QUESTION_FIELDS = ("question", "prompt", "query")
ANSWER_FIELDS = ("answer", "output", "response")
TEXT_FIELD = "text"

_SCALAR_TYPES = (str, int, float, bool)


class PayloadShape(str, enum.Enum):
    EMPTY = "empty"
    SEQUENCE = "sequence"
    WRAPPED_ARRAY = "wrapped_array"
    SINGLE_ANSWER = "single_answer"
    OBJECT_VALUES = "object_values"
    SCALAR = "scalar"


@dataclass(frozen=True)
class ExtractedPayload:
    """The items found in a payload and the shape that produced them."""

    shape: PayloadShape
    items: list[Any]


def _match_empty(raw: Any) -> list[Any] | None:
    if raw is None or raw is False or raw == "" or raw == {}:
        return []
    return None


def _match_sequence(raw: Any) -> list[Any] | None:
    if isinstance(raw, list):
        return list(raw)
    return None


def _match_wrapped_array(raw: Any) -> list[Any] | None:
    if not isinstance(raw, dict):
        return None
    for field in ARRAY_FIELDS:
        value = raw.get(field)
        if isinstance(value, list):
            return list(value)
    return None


def _match_single_answer(raw: Any) -> list[Any] | None:
    if isinstance(raw, dict) and isinstance(raw.get("answer"), _SCALAR_TYPES):
        return [raw]
    return None


def _match_object_values(raw: Any) -> list[Any] | None:
    if isinstance(raw, dict):
        return list(raw.values())
    return None


def _match_scalar(raw: Any) -> list[Any] | None:
    return [raw]


# First match wins
_MATCHERS: tuple[tuple[PayloadShape, Callable[[Any], list[Any] | None]], ...] = (
    (PayloadShape.EMPTY, _match_empty),
    (PayloadShape.SEQUENCE, _match_sequence),
    (PayloadShape.WRAPPED_ARRAY, _match_wrapped_array),
    (PayloadShape.SINGLE_ANSWER, _match_single_answer),
    (PayloadShape.OBJECT_VALUES, _match_object_values),
    (PayloadShape.SCALAR, _match_scalar),
)


def extract_items(raw: Any) -> ExtractedPayload:
    """Find the list of answer items inside an arbitrary JSON payload.

    Args:
        raw: Decoded response body of the Q&A service.

    Returns:
        The detected shape and the extracted items. Never raises; an
        unrecognised payload is treated as a single item.
    """
    for shape, matcher in _MATCHERS:
        items = matcher(raw)
        if items is not None:
            return ExtractedPayload(shape=shape, items=items)
    return ExtractedPayload(shape=PayloadShape.SCALAR, items=[raw])


def classify_payload(raw: Any) -> PayloadShape:
    return extract_items(raw).shape


def to_display_text(value: Any) -> str:
    """Strings pass through; any other value becomes stable JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, ensure_ascii=False, indent=2, default=str)


def question_for(item: Any, index: int, questions: Sequence[str]) -> str:
    if isinstance(item, dict):
        for field in QUESTION_FIELDS:
            value = item.get(field)
            if isinstance(value, str) and value.strip():
                return value
    if index < len(questions) and questions[index]:
        return questions[index]
    return f"Question {index + 1}"


def answer_for(item: Any) -> str:
    if isinstance(item, dict):
        for field in ANSWER_FIELDS:
            if item.get(field) is not None:
                return to_display_text(item[field])
        if isinstance(item.get(TEXT_FIELD), str):
            return item[TEXT_FIELD]
    return to_display_text(item)


def normalize_payload(raw: Any, questions: Sequence[str]) -> tuple[PayloadShape, list[AnswerEntry]]:
    """Like :func:`normalize`, also returning the detected payload shape."""
    extracted = extract_items(raw)
    entries = [
        AnswerEntry(question=question_for(item, i, questions), answer=answer_for(item))
        for i, item in enumerate(extracted.items)
    ]

    payload_shapes_total.labels(shape=extracted.shape.value).inc()
    answers_rendered_total.inc(len(entries))
    logger.info(
        "payload_normalized",
        shape=extracted.shape.value,
        item_count=len(entries),
        question_count=len(questions),
    )
    return extracted.shape, entries


def normalize(raw: Any, questions: Sequence[str]) -> list[AnswerEntry]:
    """Turn a Q&A service payload into ordered question/answer pairs.

    One entry is produced per extracted item; entries are never synthesized
    for questions the payload did not answer.

    Args:
        raw: Decoded response body. Any JSON value is accepted.
        questions: The submitted questions, used as positional labels.

    Returns:
        The normalized entries, in payload order.
    """
    return normalize_payload(raw, questions)[1]
