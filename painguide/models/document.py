"""Document-level data models."""

from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel

Tier = Literal["free", "enhanced", "monograph"]

TIERS: Tuple[str, ...] = ("free", "enhanced", "monograph")

GUIDE_IDS: Tuple[str, ...] = (
    "sciatica",
    "upper_lumbar_radiculopathy",
    "si_joint_dysfunction",
    "canal_stenosis",
    "central_disc_bulge",
    "facet_arthropathy",
    "muscular_nslbp",
    "lumbar_instability",
    "urgent_symptoms",
)

GUIDE_DISPLAY_NAMES: Dict[str, str] = {
    "sciatica": "Sciatica",
    "upper_lumbar_radiculopathy": "Upper Lumbar Radiculopathy",
    "si_joint_dysfunction": "SI Joint Dysfunction",
    "canal_stenosis": "Canal Stenosis",
    "central_disc_bulge": "Central Disc Bulge",
    "facet_arthropathy": "Facet Arthropathy",
    "muscular_nslbp": "Muscular / NSLBP",
    "lumbar_instability": "Lumbar Instability",
    "urgent_symptoms": "Urgent Symptoms",
}


class GuideDocument(BaseModel):
    """A guide split into its YAML frontmatter and markdown body."""

    tier: Tier
    guide_id: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body: str

    model_config = {"frozen": True}
