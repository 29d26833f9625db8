"""Orchestrates the guide-to-PDF pipeline."""

from __future__ import annotations

import logging
from typing import Tuple

from painguide.content.images import annotate_images
from painguide.content.loader import ContentCache, clean_markdown, load_document
from painguide.content.placeholders import resolve_placeholders
from painguide.errors import GuideNotFoundError
from painguide.models.document import GuideDocument
from painguide.models.request import PdfRequest
from painguide.rendering.browser_pool import BrowserPool
from painguide.rendering.rasterizer import rasterize
from painguide.rendering.template import build_document
from painguide.typesetting.bibliography import rebuild_bibliography
from painguide.typesetting.converter import markdown_to_html
from painguide.typesetting.glue import run_glue
from painguide.typesetting.sentinels import (
    assert_no_sentinels,
    strip_sentinels,
    tokenize_bibliography,
)
from painguide.utils.pdf_inspect import summarize_pdf

logger = logging.getLogger(__name__)


class GuidePdfGenerator:
    """Turns a guide request into PDF bytes.

    Text stages run synchronously; only rasterization touches the browser.
    Enhanced guides additionally get bibliography sentinels, the rebuilt
    reference list and the in-browser glue pass.
    """

    def __init__(self, cache: ContentCache | None = None, pool: BrowserPool | None = None) -> None:
        self.cache = cache if cache is not None else ContentCache()
        self.pool = pool if pool is not None else BrowserPool()

    def load(self, request: PdfRequest) -> GuideDocument:
        raw = self.cache.get(request.tier, request.guide_id)
        if raw is None:
            raise GuideNotFoundError(request.tier, request.guide_id)
        document = load_document(raw, request.tier, request.guide_id)
        logger.info(
            "Loaded %s/%s (%s chars, title=%r)",
            request.tier,
            request.guide_id,
            len(document.body),
            document.title,
        )
        return document

    def render_markdown(self, document: GuideDocument, request: PdfRequest) -> str:
        markdown = clean_markdown(document.body, name=request.name, on_date=request.date)
        markdown = resolve_placeholders(markdown, request.responses)
        markdown = annotate_images(markdown, request.guide_id, request.tier)
        if request.tier == "enhanced":
            markdown = tokenize_bibliography(markdown)
        return markdown

    def prepare_html(self, request: PdfRequest) -> Tuple[GuideDocument, str]:
        """Run every text stage and return the final document HTML."""
        document = self.load(request)
        if document.subtitle:
            subtitle = resolve_placeholders(document.subtitle, request.responses)
            document = document.model_copy(update={"subtitle": subtitle})
        content_html = markdown_to_html(self.render_markdown(document, request))
        if request.tier == "enhanced":
            content_html = rebuild_bibliography(content_html)
        full_html = build_document(
            content_html,
            document,
            name=request.name,
            on_date=request.date,
            pain_score=request.responses.pain_score,
        )
        if request.tier == "enhanced":
            full_html = strip_sentinels(full_html)
            assert_no_sentinels(full_html)
        logger.info("Assembled HTML document (%s chars)", len(full_html))
        return document, full_html

    async def _finish_enhanced(self, page) -> None:
        await run_glue(page)
        assert_no_sentinels(await page.content())

    async def generate(self, request: PdfRequest) -> bytes:
        logger.info("Generating %s PDF for %s", request.tier, request.guide_id)
        _, full_html = self.prepare_html(request)
        before_print = self._finish_enhanced if request.tier == "enhanced" else None
        pdf = await rasterize(self.pool, full_html, request.tier, before_print=before_print)
        summary = summarize_pdf(pdf)
        logger.info(
            "Generated %s/%s: %s pages, %s bytes",
            request.tier,
            request.guide_id,
            summary.page_count,
            summary.size_bytes,
        )
        return pdf
