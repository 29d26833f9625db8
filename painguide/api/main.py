"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Response

from painguide.content.loader import ContentCache
from painguide.errors import (
    GuideFormatError,
    GuideNotFoundError,
    PdfGenerationError,
    SentinelLeakError,
)
from painguide.models.request import PdfRequest
from painguide.pipeline import GuidePdfGenerator
from painguide.rendering.browser_pool import BrowserPool

logger = logging.getLogger(__name__)

content_cache = ContentCache()
browser_pool = BrowserPool()
generator = GuidePdfGenerator(cache=content_cache, pool=browser_pool)


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await browser_pool.close()


app = FastAPI(
    title="PainGuide",
    description="Tiered pain assessment guide PDF service",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
def health() -> dict[str, str]:
    """Simple readiness probe."""
    return {"status": "ok"}


@app.post("/guides/pdf")
async def guide_pdf(payload: PdfRequest) -> Response:
    """Render one guide for a patient and return the PDF."""
    try:
        pdf = await generator.generate(payload)
    except GuideNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except GuideFormatError as exc:
        logger.error("Guide %s/%s is malformed: %s", payload.tier, payload.guide_id, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except SentinelLeakError as exc:
        logger.error("Refusing to deliver %s/%s: %s", payload.tier, payload.guide_id, exc)
        raise HTTPException(status_code=500, detail="Escape tokens leaked into the document.") from exc
    except PdfGenerationError as exc:
        logger.error("PDF generation failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    filename = f"{payload.guide_id}-{payload.tier}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
