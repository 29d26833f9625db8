"""Models describing rendered output and render-time diagnostics."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GlueReport(BaseModel):
    """Read-only counts collected at the end of the in-browser glue pass."""

    container_found: bool = True
    br_elements: int = 0
    literal_br: int = 0
    tokenized: int = 0
    round_trip_mismatches: int = 0
    cites: int = 0
    glues: int = 0
    tail_glues: int = 0
    bib_items: int = 0
    warnings: list[str] = Field(default_factory=list)


class PdfSummary(BaseModel):
    """Basic facts about a generated PDF buffer."""

    page_count: int
    size_bytes: int
    title: str | None = None
