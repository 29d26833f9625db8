"""Typed models shared across the application."""

from .document import GUIDE_DISPLAY_NAMES, GUIDE_IDS, TIERS, GuideDocument, Tier
from .pdf import GlueReport, PdfSummary
from .request import AssessmentResponses, PdfRequest

__all__ = [
    "AssessmentResponses",
    "GUIDE_DISPLAY_NAMES",
    "GUIDE_IDS",
    "GlueReport",
    "GuideDocument",
    "PdfRequest",
    "PdfSummary",
    "TIERS",
    "Tier",
]
