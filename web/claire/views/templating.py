from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates

from claire.config import settings
from claire.pipelines.formatter import render_answer

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Autoescape stays on; answers reach the page only through the answer_html filter
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["answer_html"] = render_answer
templates.env.globals["app_title"] = settings.APP_TITLE
