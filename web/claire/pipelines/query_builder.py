from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

import structlog

from claire.exceptions import QueryValidationError

logger = structlog.get_logger()

MISSING_FIELDS_MESSAGE = "Please provide both a URL and questions."
NO_QUESTIONS_MESSAGE = "Provide at least one question (one per line)."

_LINE_BREAK = re.compile(r"\r?\n")
# A line holding only three or more dashes separates pasted documents
_DOCUMENT_SEPARATOR = re.compile(r"^[ \t]*-{3,}[ \t]*\r?$", re.MULTILINE)


@dataclass(frozen=True)
class Query:
    """One submission to the Q&A service."""

    documents: str | list[Any]
    questions: list[str]

    def as_payload(self) -> dict[str, Any]:
        return {"documents": self.documents, "questions": list(self.questions)}


def parse_questions(text: str) -> list[str]:
    """Split questions text into one question per non-blank line, in input order."""
    return [line.strip() for line in _LINE_BREAK.split(text or "") if line.strip()]


def parse_documents(text: str) -> list[Any]:
    """Turn the pasted documents text into a list of documents.

    A JSON array is used as-is and any other JSON value becomes a single
    document. Text that is not JSON is split on ``---`` separator lines.

    Args:
        text: Raw contents of the documents textarea.

    Returns:
        The documents list; empty when the text is blank.
    """
    text = text or ""
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    else:
        if isinstance(parsed, list):
            return parsed
        if isinstance(parsed, str):
            return [parsed]
        return [json.dumps(parsed, ensure_ascii=False)]

    parts = [part.strip() for part in _DOCUMENT_SEPARATOR.split(text)]
    parts = [part for part in parts if part]
    if parts:
        return parts
    return [text.strip()] if text.strip() else []


def build_url_query(url: str, questions_text: str) -> Query:
    """Build the query for the Home page form: one document URL plus questions.

    Raises:
        QueryValidationError: If the URL or the questions are missing.
    """
    url = (url or "").strip()
    if not url or not (questions_text or "").strip():
        raise QueryValidationError(MISSING_FIELDS_MESSAGE)

    questions = parse_questions(questions_text)
    if not questions:
        raise QueryValidationError(NO_QUESTIONS_MESSAGE)

    return Query(documents=url, questions=questions)


def build_text_query(documents_text: str, questions_text: str) -> Query:
    """Build the query for the answer fetcher form: pasted documents plus questions.

    Raises:
        QueryValidationError: If no question survives parsing.
    """
    questions = parse_questions(questions_text)
    if not questions:
        raise QueryValidationError(NO_QUESTIONS_MESSAGE)

    documents = parse_documents(documents_text)
    logger.debug("text_query_built", document_count=len(documents), question_count=len(questions))
    return Query(documents=documents, questions=questions)
