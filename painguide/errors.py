"""Exceptions raised by the guide PDF pipeline."""

from __future__ import annotations

from typing import Sequence


class GuidePdfError(Exception):
    """Base class for every fatal pipeline failure."""


class GuideNotFoundError(GuidePdfError):
    """No markdown document exists for the requested tier and guide."""

    def __init__(self, tier: str, guide_id: str) -> None:
        super().__init__(f"Guide content not found: {tier}/{guide_id}")
        self.tier = tier
        self.guide_id = guide_id


class SentinelLeakError(GuidePdfError):
    """Escape tokens survived into the HTML handed to the rasterizer."""

    def __init__(self, fragments: Sequence[str]) -> None:
        self.fragments = list(fragments)
        sample = " | ".join(self.fragments[:3])
        super().__init__(
            f"Sentinels still present in final HTML ({len(self.fragments)} found): {sample}"
        )


class PdfGenerationError(GuidePdfError):
    """The browser failed while loading, scripting or printing the page."""


class GuideFormatError(GuidePdfError):
    """The guide file exists but its frontmatter cannot be parsed."""
