"""Insert exercise illustrations and anatomical diagrams into monograph markdown."""

from __future__ import annotations

import logging
import re
from typing import List, Optional
from urllib.parse import quote

from painguide.config import settings
from painguide.content.illustrations import anatomical_images_for, find_exercise_image

logger = logging.getLogger(__name__)

EXERCISE_SECTION_START = re.compile(
    r"^#{1,3}\s+.*?(Movement Plan|Movement Program|Exercise|Week \d+|Section 7)",
    re.IGNORECASE,
)
EXERCISE_SECTION_END = re.compile(
    r"^#{1,3}\s+.*?(Section [89]|Section 1[0-9]|Posture|Safety|Comfort|Medication"
    r"|Professional|Prognosis|Tracking|References)",
    re.IGNORECASE,
)
EXERCISE_LINE_PATTERNS = (
    re.compile(r"^-\s*\*\*([^*]+)\*\*:"),
    re.compile(r"^\*\*([^*]+)\*\*:"),
    re.compile(r"^-\s*\*\*([^*]+)\*\*"),
    re.compile(r"^-\s*([A-Z][^:]+):"),
    re.compile(r"^\d+\.\s*\*\*([^*]+)\*\*"),
    re.compile(r"^\d+\.\s*([A-Z][^:]+):"),
)
HEADING_SPLIT = re.compile(r"^(#{1,3}\s+.+)$", re.MULTILINE)
HEADING_LINE = re.compile(r"^#{1,3}\s+")
ANATOMY_HEADING = re.compile(r"understanding|anatomy|what is", re.IGNORECASE)
SECTION_ONE_HEADING = re.compile(r"section 1\b", re.IGNORECASE)


def image_url(base: str, filename: str) -> str:
    return f"{base}/{quote(filename)}"


def match_exercise_line(line: str) -> Optional[str]:
    """Return the normalized exercise name announced by a list/bold line."""
    for pattern in EXERCISE_LINE_PATTERNS:
        match = pattern.match(line)
        if match:
            name = match.group(1).strip()
            if name.endswith(":"):
                name = name[:-1].strip()
            return name
    return None


def add_exercise_images(markdown: str, base_url: Optional[str] = None) -> str:
    base = base_url or settings.exercise_image_base
    output: List[str] = []
    in_section = False
    added = 0
    for line in markdown.split("\n"):
        if EXERCISE_SECTION_START.match(line):
            in_section = True
        if in_section and EXERCISE_SECTION_END.match(line):
            in_section = False
        output.append(line)
        if not in_section:
            continue
        name = match_exercise_line(line)
        if not name:
            continue
        filename = find_exercise_image(name)
        logger.debug("Exercise %r matched image %r", name, filename)
        if filename:
            output.extend(["", f"![{name}]({image_url(base, filename)})", ""])
            added += 1
    logger.info("Added %s exercise images", added)
    return "\n".join(output)


def add_anatomical_image(markdown: str, condition: str, base_url: Optional[str] = None) -> str:
    """Insert the condition's first diagram under the first qualifying heading."""
    images = anatomical_images_for(condition)
    if not images:
        return markdown
    base = base_url or settings.anatomical_image_base
    sections = HEADING_SPLIT.split(markdown)
    for index, part in enumerate(sections):
        if not HEADING_LINE.match(part) or index + 1 >= len(sections):
            continue
        title = part.lower()
        qualifies = bool(ANATOMY_HEADING.search(title)) or (
            bool(SECTION_ONE_HEADING.search(title)) and "week" not in title
        )
        if not qualifies:
            continue
        diagram = f"![Anatomical diagram]({image_url(base, images[0])})"
        sections[index + 1] = f"\n\n{diagram}\n\n{sections[index + 1]}"
        logger.info("Added anatomical image %s under %r", images[0], part.strip())
        break
    return "".join(sections)


def annotate_images(markdown: str, condition: str, tier: str) -> str:
    """Add illustrations to monograph content; other tiers pass through.

    Any failure returns the markdown unmodified so a missing image never
    blocks delivery.
    """
    if tier != "monograph":
        return markdown
    try:
        annotated = add_exercise_images(markdown)
        return add_anatomical_image(annotated, condition)
    except Exception:
        logger.exception("Image annotation failed for %s; using original markdown", condition)
        return markdown
