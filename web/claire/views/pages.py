from __future__ import annotations

import json
from typing import Any

import structlog
from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse

from claire.exceptions import AppError, QueryValidationError, error_message
from claire.metrics import query_validation_failures_total
from claire.pipelines.client import get_answers
from claire.pipelines.normalizer import normalize
from claire.pipelines.query_builder import build_text_query, build_url_query
from claire.views.templating import templates

logger = structlog.get_logger()
router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)

SUCCESS_TOAST = "Answers retrieved successfully!"
FAILURE_TOAST = "An error occurred while fetching answers."


def _toast(level: str, message: str) -> dict[str, str]:
    return {"level": level, "message": message}


def _raw_json(raw: Any) -> str:
    return json.dumps(raw, indent=2, ensure_ascii=False, default=str)


def _render(request: Request, name: str, context: dict[str, Any], status_code: int = status.HTTP_200_OK):
    return templates.TemplateResponse(request=request, name=name, context=context, status_code=status_code)


@router.get("/")
async def home(request: Request):
    """Landing page with the document URL form."""
    return _render(request, "home.html", {"url": "", "questions_text": "", "entries": []})


@router.post("/")
async def submit_home(request: Request, url: str = Form(""), questions: str = Form("")):
    """Ask questions about the document at a URL and show the answers on the landing page."""
    context: dict[str, Any] = {"url": url, "questions_text": questions, "entries": []}

    try:
        query = build_url_query(url, questions)
    except QueryValidationError as exc:
        query_validation_failures_total.labels(page="home").inc()
        context["toast"] = _toast("error", exc.detail)
        return _render(request, "home.html", context, status_code=exc.status_code)

    try:
        raw = await get_answers(query.documents, query.questions)
    except AppError as exc:
        logger.warning("home_query_failed", status_code=exc.status_code)
        context["toast"] = _toast("error", FAILURE_TOAST)
        context["error"] = error_message(exc.detail)
        return _render(request, "home.html", context, status_code=exc.status_code)

    context["entries"] = normalize(raw, query.questions)
    context["toast"] = _toast("success", SUCCESS_TOAST)
    return _render(request, "home.html", context)


@router.get("/answers")
async def answers_page(request: Request):
    """Answer fetcher for pasted document text."""
    return _render(request, "answers.html", {"documents_text": "", "questions_text": ""})


@router.post("/answers")
async def submit_answers(request: Request, documents: str = Form(""), questions: str = Form("")):
    """Ask questions about pasted documents; shows the raw payload next to the normalized answers."""
    context: dict[str, Any] = {"documents_text": documents, "questions_text": questions}

    try:
        query = build_text_query(documents, questions)
    except QueryValidationError as exc:
        query_validation_failures_total.labels(page="answers").inc()
        context["error"] = exc.detail
        return _render(request, "answers.html", context, status_code=exc.status_code)

    try:
        raw = await get_answers(query.documents, query.questions)
    except AppError as exc:
        logger.warning("answers_query_failed", status_code=exc.status_code)
        context["error"] = error_message(exc.detail)
        context["toast"] = _toast("error", FAILURE_TOAST)
        return _render(request, "answers.html", context, status_code=exc.status_code)

    context["result"] = {
        "raw_json": _raw_json(raw),
        "entries": normalize(raw, query.questions),
    }
    return _render(request, "answers.html", context)


@router.get("/about")
async def about(request: Request):
    return _render(request, "about.html", {})
