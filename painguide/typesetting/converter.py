"""Markdown to HTML conversion with single newlines kept as spaces."""

from __future__ import annotations

import logging

from markdown_it import MarkdownIt

logger = logging.getLogger(__name__)

_MD_PARSER: MarkdownIt | None = None


def _build_markdown_parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True, "breaks": False, "typographer": False})
    md.enable(["table", "strikethrough"])
    return md


def get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        _MD_PARSER = _build_markdown_parser()
    return _MD_PARSER


def markdown_to_html(markdown: str) -> str:
    html = get_markdown_parser().render(markdown or "")
    logger.info("Converted markdown (%s chars) to HTML (%s chars)", len(markdown or ""), len(html))
    return html
