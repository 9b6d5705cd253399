from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class AnswerEntry(BaseModel):
    question: str
    answer: str


class AnswersRequest(BaseModel):
    documents: str | list[str]
    questions: list[str] = Field(..., min_length=1)

    @field_validator("questions")
    @classmethod
    def _drop_blank_questions(cls, value: list[str]) -> list[str]:
        questions = [q.strip() for q in value if q.strip()]
        if not questions:
            raise ValueError("Provide at least one question")
        return questions


class AnswersResponse(BaseModel):
    entries: list[AnswerEntry]
    raw: Any = None
    shape: str
