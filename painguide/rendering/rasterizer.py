"""Paginate assembled HTML to a PDF buffer in a pooled browser page."""

from __future__ import annotations

import html
import logging
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from painguide.config import settings
from painguide.errors import PdfGenerationError

logger = logging.getLogger(__name__)

PDF_MARGINS = {"top": "0.75in", "right": "0.5in", "bottom": "1in", "left": "0.5in"}
HEADER_TEMPLATE = "<div></div>"
IMAGES_COMPLETE = "() => Array.from(document.images).every((img) => img.complete)"

BeforePrint = Callable[[Page], Awaitable[None]]


def footer_template(brand_line: Optional[str] = None) -> str:
    brand = html.escape(brand_line if brand_line is not None else settings.brand_line)
    return (
        '<div style="font-size: 9px; width: 100%; padding: 0 0.5in; color: #666;'
        ' display: flex; justify-content: space-between;">'
        f"<span>{brand}</span>"
        '<span>Page <span class="pageNumber"></span> of <span class="totalPages"></span></span>'
        "</div>"
    )


def scale_for(tier: str) -> float:
    if tier == "monograph":
        return settings.pdf_scale_monograph
    if tier == "enhanced":
        return settings.pdf_scale_enhanced
    return 1.0


async def wait_for_images(page: Page, timeout_ms: Optional[int] = None) -> bool:
    """Wait briefly for every <img> to finish.

    Running out of time is logged and tolerated; any other page failure is
    raised as ``PdfGenerationError``.
    """
    timeout = settings.image_wait_timeout_ms if timeout_ms is None else timeout_ms
    try:
        await page.wait_for_function(IMAGES_COMPLETE, timeout=timeout)
        return True
    except PlaywrightTimeoutError:
        logger.warning("Images not complete after %sms; continuing without them", timeout)
        return False
    except PlaywrightError as exc:
        logger.error("Page failed while waiting for images: %s", exc)
        raise PdfGenerationError(f"Failed while waiting for images: {exc}") from exc


async def _print_page(
    page: Page,
    document_html: str,
    tier: str,
    before_print: Optional[BeforePrint],
) -> bytes:
    try:
        await page.set_viewport_size(
            {"width": settings.viewport_width, "height": settings.viewport_height}
        )
        await page.set_content(
            document_html,
            wait_until="networkidle",
            timeout=settings.content_load_timeout_ms,
        )
    except PlaywrightError as exc:
        logger.error("Loading HTML into page failed: %s", exc)
        raise PdfGenerationError(f"Failed to load document: {exc}") from exc

    await wait_for_images(page)

    if before_print is not None:
        try:
            await before_print(page)
        except PlaywrightError as exc:
            logger.error("Page script failed: %s", exc)
            raise PdfGenerationError(f"Failed to prepare page: {exc}") from exc

    scale = scale_for(tier)
    try:
        pdf = await page.pdf(
            format="A4",
            print_background=True,
            display_header_footer=True,
            header_template=HEADER_TEMPLATE,
            footer_template=footer_template(),
            margin=PDF_MARGINS,
            scale=scale,
            prefer_css_page_size=False,
        )
    except PlaywrightError as exc:
        logger.error("PDF rasterization failed: %s", exc)
        raise PdfGenerationError(f"Failed to render PDF: {exc}") from exc

    logger.info("Rasterized %s PDF at scale %s (%s bytes)", tier, scale, len(pdf))
    return pdf


async def rasterize(
    pool,
    document_html: str,
    tier: str,
    before_print: Optional[BeforePrint] = None,
) -> bytes:
    """Render ``document_html`` to PDF bytes using a page from ``pool``.

    ``before_print`` runs against the loaded page right before pagination.
    Browser failures, including launching the browser or opening a page,
    surface as ``PdfGenerationError``; the page is always returned to the
    pool closed.
    """
    try:
        async with pool.page() as page:
            return await _print_page(page, document_html, tier, before_print)
    except PlaywrightError as exc:
        logger.error("Browser page unavailable: %s", exc)
        raise PdfGenerationError(f"Browser unavailable: {exc}") from exc
