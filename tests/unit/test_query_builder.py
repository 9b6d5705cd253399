from __future__ import annotations

import pytest

from claire.exceptions import QueryValidationError
from claire.pipelines.query_builder import (
    MISSING_FIELDS_MESSAGE,
    NO_QUESTIONS_MESSAGE,
    Query,
    build_text_query,
    build_url_query,
    parse_documents,
    parse_questions,
)


def test_parse_questions_keeps_order_and_drops_blank_lines() -> None:
    text = "  What is covered?\n\n\r\nWhat is excluded?  \r\n   \nWaiting period?"
    assert parse_questions(text) == ["What is covered?", "What is excluded?", "Waiting period?"]


def test_parse_questions_blank_text() -> None:
    assert parse_questions("") == []
    assert parse_questions(" \n \n") == []


def test_parse_documents_json_array_is_used_as_is() -> None:
    assert parse_documents('["doc one", "doc two"]') == ["doc one", "doc two"]


def test_parse_documents_json_string_is_one_document() -> None:
    assert parse_documents('"just one"') == ["just one"]


def test_parse_documents_other_json_values_use_their_json_text() -> None:
    assert parse_documents("42") == ["42"]
    assert parse_documents("true") == ["true"]
    assert parse_documents('{"title": "Policy"}') == ['{"title": "Policy"}']


def test_parse_documents_splits_on_dash_lines() -> None:
    text = "First document.\n\n---\n\nSecond document.\n-----\nThird document."
    assert parse_documents(text) == ["First document.", "Second document.", "Third document."]


def test_parse_documents_inline_dashes_do_not_split() -> None:
    assert parse_documents("A range of 2---3 days applies.") == ["A range of 2---3 days applies."]


def test_parse_documents_drops_empty_segments() -> None:
    assert parse_documents("---\nOnly document\n---\n") == ["Only document"]


def test_parse_documents_plain_text_is_one_document() -> None:
    assert parse_documents("  The whole policy text.  ") == ["The whole policy text."]


def test_parse_documents_separator_only_text_is_kept_whole() -> None:
    assert parse_documents("---") == ["---"]
    assert parse_documents("") == []


def test_build_url_query_sends_url_as_single_document() -> None:
    query = build_url_query(" https://example.com/policy.pdf ", "Q1\nQ2\n")
    assert query == Query(documents="https://example.com/policy.pdf", questions=["Q1", "Q2"])
    assert query.as_payload() == {"documents": "https://example.com/policy.pdf", "questions": ["Q1", "Q2"]}


@pytest.mark.parametrize(("url", "questions"), [("", "Q1"), ("https://example.com/a.pdf", ""), ("  ", "  ")])
def test_build_url_query_requires_url_and_questions(url: str, questions: str) -> None:
    with pytest.raises(QueryValidationError) as exc_info:
        build_url_query(url, questions)
    assert exc_info.value.detail == MISSING_FIELDS_MESSAGE
    assert exc_info.value.status_code == 422


def test_build_text_query_requires_a_question() -> None:
    with pytest.raises(QueryValidationError, match="at least one question"):
        build_text_query("some document", "\n  \n")


def test_build_text_query_allows_empty_documents() -> None:
    query = build_text_query("", "Q1")
    assert query.documents == []
    assert query.questions == ["Q1"]


def test_no_questions_message() -> None:
    assert NO_QUESTIONS_MESSAGE == "Provide at least one question (one per line)."
