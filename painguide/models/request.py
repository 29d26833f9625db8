"""Request models for PDF generation."""

from __future__ import annotations

from datetime import date as Date
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .document import Tier

Answer = Union[str, List[str]]


class AssessmentResponses(BaseModel):
    """Answers to the assessment questionnaire plus the reported pain score."""

    answers: Dict[str, Answer] = Field(default_factory=dict)
    pain_score: Optional[float] = Field(default=None, ge=0, le=10)

    def get(self, question_id: str) -> Optional[str]:
        """Return a scalar answer, or None when missing or multi-valued."""
        value = self.answers.get(question_id)
        if isinstance(value, str) and value:
            return value
        return None

    def get_list(self, question_id: str) -> List[str]:
        """Return a multi-select answer as a list (scalars are wrapped)."""
        value = self.answers.get(question_id)
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        return list(value)


class PdfRequest(BaseModel):
    """Incoming PDF generation payload."""

    guide_id: str = Field(..., min_length=1, pattern=r"^[a-z0-9_]+$")
    tier: Tier
    name: Optional[str] = None
    date: Optional[Date] = None
    responses: AssessmentResponses = Field(default_factory=AssessmentResponses)
