from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from markupsafe import Markup, escape

_LINE_BREAK = re.compile(r"\r?\n")
_BULLET = re.compile(r"^\s*[-*•]\s+(.*)$")
# Bold is tried first so "**x**" never reads as two empty italics
_EMPHASIS = re.compile(r"\*\*(.+?)\*\*|\*(.+?)\*")

SPACER_HTML = '<div class="answer-spacer"></div>'


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


@dataclass(frozen=True)
class Italic:
    text: str


Span = Union[Text, Bold, Italic]


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class BulletList:
    items: tuple[tuple[Span, ...], ...]


@dataclass(frozen=True)
class Spacer:
    pass


AnswerBlock = Union[Paragraph, BulletList, Spacer]


def parse_inline(text: str) -> tuple[Span, ...]:
    """Split one line into plain, bold and italic spans."""
    spans: list[Span] = []
    position = 0
    for match in _EMPHASIS.finditer(text):
        if match.start() > position:
            spans.append(Text(text[position : match.start()]))
        if match.group(1) is not None:
            spans.append(Bold(match.group(1)))
        else:
            spans.append(Italic(match.group(2)))
        position = match.end()
    if position < len(text):
        spans.append(Text(text[position:]))
    return tuple(spans)


def parse_answer(answer: str) -> list[AnswerBlock]:
    """Build the block tree for one answer.

    Blank lines close any open bullet list and add a spacer. Consecutive
    bullet lines (``-``, ``*`` or ``•`` followed by whitespace) share one
    list. Every other line is a paragraph.

    Args:
        answer: Answer text as produced by the normalizer.

    Returns:
        Blocks in source order. Span text is raw, not escaped.
    """
    if not answer:
        return []

    blocks: list[AnswerBlock] = []
    list_items: list[tuple[Span, ...]] = []

    def flush_list() -> None:
        if list_items:
            blocks.append(BulletList(items=tuple(list_items)))
            list_items.clear()

    for line in _LINE_BREAK.split(answer):
        if not line.strip():
            flush_list()
            blocks.append(Spacer())
            continue

        bullet = _BULLET.match(line)
        if bullet:
            list_items.append(parse_inline(bullet.group(1).strip()))
            continue

        flush_list()
        blocks.append(Paragraph(spans=parse_inline(line.strip())))

    flush_list()
    return blocks


def _span_html(span: Span) -> Markup:
    if isinstance(span, Bold):
        return Markup("<strong>%s</strong>") % span.text
    if isinstance(span, Italic):
        return Markup("<em>%s</em>") % span.text
    return escape(span.text)


def _spans_html(spans: tuple[Span, ...]) -> Markup:
    return Markup("").join(_span_html(span) for span in spans)


def _block_html(block: AnswerBlock) -> Markup:
    if isinstance(block, Paragraph):
        return Markup("<p>%s</p>") % _spans_html(block.spans)
    if isinstance(block, BulletList):
        items = Markup("").join(Markup("<li>%s</li>") % _spans_html(item) for item in block.items)
        return Markup("<ul>%s</ul>") % items
    return Markup(SPACER_HTML)


def render_answer(answer: str) -> Markup:
    """Render one answer as minimally styled HTML.

    All source text is escaped (``& < > " '``) before it is wrapped in
    markup, so nothing in the answer can inject structure. The result is
    deterministic for a given input.
    """
    return Markup("").join(_block_html(block) for block in parse_answer(answer))
