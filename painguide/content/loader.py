"""Load guide markdown from disk into a process-lifetime cache."""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import yaml

from painguide.config import settings
from painguide.errors import GuideFormatError
from painguide.models.document import GUIDE_IDS, TIERS, GuideDocument

logger = logging.getLogger(__name__)

SAFE_ID_PATTERN = re.compile(r"^[a-z0-9_]+$")
FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
SECTION_MARKER_PATTERNS = (
    re.compile(r">>EXECUTIVE_SUMMARY[\s\S]*?>>END"),
    re.compile(r">>KEY_POINTS[\s\S]*?>>END"),
    re.compile(r"<!--[\s\S]*?-->"),
)


class ContentCache:
    """Guide markdown keyed by (tier, guide id).

    The table is populated once, on first access, from
    ``<root>/<tier>/<guide_id>.md``. Cached entries are never re-read; a miss
    triggers one direct file read before the guide is declared missing.
    """

    def __init__(
        self,
        root: Path | None = None,
        tiers: Iterable[str] = TIERS,
        guide_ids: Iterable[str] = GUIDE_IDS,
    ) -> None:
        self.root = Path(root or settings.content_root_path)
        self.tiers = tuple(tiers)
        self.guide_ids = tuple(guide_ids)
        self._table: Dict[Tuple[str, str], str] = {}
        self._populated = False

    def _path_for(self, tier: str, guide_id: str) -> Path:
        return self.root / tier / f"{guide_id}.md"

    def _read(self, tier: str, guide_id: str) -> Optional[str]:
        path = self._path_for(tier, guide_id)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not load %s/%s.md: %s", tier, guide_id, exc)
            return None

    def populate(self) -> int:
        """Eagerly read every known (tier, guide) combination."""
        self._populated = True
        loaded = 0
        for tier in self.tiers:
            for guide_id in self.guide_ids:
                if (tier, guide_id) in self._table:
                    continue
                text = self._read(tier, guide_id)
                if text is None:
                    continue
                self._table[(tier, guide_id)] = text
                loaded += 1
                logger.debug("Loaded %s/%s.md", tier, guide_id)
        logger.info("Content cache populated with %s guides from %s", len(self._table), self.root)
        return loaded

    def get(self, tier: str, guide_id: str) -> Optional[str]:
        """Return raw markdown for the guide, or None when it does not exist."""
        if not self._populated:
            self.populate()
        key = (tier, guide_id)
        cached = self._table.get(key)
        if cached is not None:
            return cached
        if not SAFE_ID_PATTERN.match(tier) or not SAFE_ID_PATTERN.match(guide_id):
            logger.error("Rejected content lookup for %r/%r", tier, guide_id)
            return None
        logger.info("Content not pre-loaded, attempting direct read for %s/%s", tier, guide_id)
        text = self._read(tier, guide_id)
        if text is None:
            logger.error("Guide content not found: %s/%s", tier, guide_id)
            return None
        self._table[key] = text
        return text

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)


def parse_frontmatter(raw: str) -> Tuple[Dict[str, object], str]:
    """Split ``---``-delimited YAML frontmatter from the markdown body."""
    match = FRONTMATTER_PATTERN.match(raw)
    if not match:
        return {}, raw
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        raise GuideFormatError(f"Malformed frontmatter: {exc}") from exc
    if not isinstance(data, dict):
        logger.warning("Ignoring non-mapping frontmatter block")
        data = {}
    return data, raw[match.end():]


def load_document(raw: str, tier: str, guide_id: str) -> GuideDocument:
    data, body = parse_frontmatter(raw)
    title = data.get("title")
    subtitle = data.get("subtitle")
    return GuideDocument(
        tier=tier,
        guide_id=guide_id,
        title=str(title) if title else None,
        subtitle=str(subtitle) if subtitle else None,
        body=body,
    )


def format_long_date(value: date) -> str:
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def clean_markdown(body: str, name: Optional[str] = None, on_date: Optional[date] = None) -> str:
    """Strip section markers and comments, then fill the static placeholders."""
    cleaned = body
    for pattern in SECTION_MARKER_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = cleaned.replace("[Name Placeholder]", name or "Patient")
    cleaned = cleaned.replace("[Date Placeholder]", format_long_date(on_date or date.today()))
    return cleaned
