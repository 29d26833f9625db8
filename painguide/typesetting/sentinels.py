"""Reversible escapes that carry DOIs and number ranges through markdown conversion.

Inside the bibliography, ``DOI: 10.xxxx/...`` becomes ``[[DOI|10.xxxx/...]]`` and
``123-456`` becomes ``[[RANGE|123-456]]``. ``strip_sentinels`` turns every form,
including ones that lost a bracket on the way, back into plain text, and
``assert_no_sentinels`` is the gate run on the final HTML.
"""

from __future__ import annotations

import logging
import re
from typing import List

from painguide.errors import SentinelLeakError

logger = logging.getLogger(__name__)

BIBLIOGRAPHY_HEADING = "## Bibliography"

DOI_PATTERN = re.compile(
    r"(?:\bdoi:\s*|https?://(?:dx\.)?doi\.org/)(10\.\d{4,9}/[^\s\]]+?)(?=[.,;)]*(?:\s|$))",
    re.IGNORECASE,
)
RANGE_PATTERN = re.compile(r"(?<![\w./])(\d{1,5})[ \t]*[-–—][ \t]*(\d{1,5})(?![\w/])")
SENTINEL_TOKEN = re.compile(r"\[\[(?:DOI|RANGE)\|[^\]]*\]\]")

STRIP_RULES = (
    (re.compile(r"\[\[?DOI\|[^\]\s<]*\]{0,2}"), "[DOI]"),
    (re.compile(r"\[\[?RANGE\|(\d+)\s*[-–—‑]\s*(\d+)\]{0,2}"), r"\1-\2"),
    (re.compile(r"\[\[?RANGE\|([^\]\s<]*)\]{0,2}"), r"\1"),
    (re.compile(r"\[\[DOI\]{0,2}"), "[DOI]"),
    (re.compile(r"\[\[RANGE\]{0,2}"), ""),
)
LEAK_PATTERN = re.compile(r"\[\[(?:DOI|RANGE)|\[(?:DOI|RANGE)\|")
MAX_STRIP_PASSES = 8


def _tokenize_ranges(text: str) -> str:
    # Ranges are only tokenized outside existing sentinels so DOI payloads stay intact.
    pieces: List[str] = []
    last = 0
    for match in SENTINEL_TOKEN.finditer(text):
        pieces.append(RANGE_PATTERN.sub(r"[[RANGE|\1-\2]]", text[last:match.start()]))
        pieces.append(match.group(0))
        last = match.end()
    pieces.append(RANGE_PATTERN.sub(r"[[RANGE|\1-\2]]", text[last:]))
    return "".join(pieces)


def tokenize_bibliography(markdown: str) -> str:
    """Escape DOIs and numeric ranges from ``## Bibliography`` to the end."""
    index = markdown.find(BIBLIOGRAPHY_HEADING)
    if index < 0:
        return markdown
    head, bibliography = markdown[:index], markdown[index:]
    if "[[DOI|" not in bibliography:
        bibliography = DOI_PATTERN.sub(r"[[DOI|\1]]", bibliography)
    if "[[RANGE|" not in bibliography:
        bibliography = _tokenize_ranges(bibliography)
    logger.info(
        "Tokenized bibliography: %s DOI, %s range sentinels",
        bibliography.count("[[DOI|"),
        bibliography.count("[[RANGE|"),
    )
    return head + bibliography


def strip_sentinels(html: str) -> str:
    """Reverse every sentinel form to plain text. Idempotent."""
    text = html
    for _ in range(MAX_STRIP_PASSES):
        updated = text
        for pattern, replacement in STRIP_RULES:
            updated = pattern.sub(replacement, updated)
        if updated == text:
            break
        text = updated
    return text


def find_sentinels(html: str, context: int = 30) -> List[str]:
    fragments: List[str] = []
    for match in LEAK_PATTERN.finditer(html):
        start = max(match.start() - context, 0)
        fragments.append(html[start:match.end() + context])
    return fragments


def assert_no_sentinels(html: str) -> None:
    fragments = find_sentinels(html)
    if fragments:
        logger.error("Sentinel leak detected: %s", fragments[:3])
        raise SentinelLeakError(fragments)
