"""Re-segment the rendered bibliography into one ``<li>`` per citation.

Two situations reach this module. Either the markdown converter already
produced an ``<ol>`` after the heading, whose items may hold several fused
citations, or the references arrived as loose paragraphs that need a list
built from scratch. Both paths share ``split_entries`` and ``format_entry``
so running the rebuilder over its own output changes nothing.
"""

from __future__ import annotations

import html
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from painguide.typesetting.sentinels import strip_sentinels

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
TITLE_PATTERN = re.compile(r"^\s*(bibliography|references)\s*$", re.IGNORECASE)
DISCLAIMER_MARKERS = ("DISCLAIMER", "educational guide", "medical advice")
MIN_ENTRY_LENGTH = 20

DOI_TEXT_PATTERNS = (
    re.compile(r"\bdoi:\s*\S*?(?=[.,;]*(?:\s|$))", re.IGNORECASE),
    re.compile(r"https?://(?:dx\.)?doi\.org/\S*?(?=[.,;]*(?:\s|$))", re.IGNORECASE),
    re.compile(r"\bdoi\.org/\S*?(?=[.,;]*(?:\s|$))", re.IGNORECASE),
)
AUTHOR_START = r"[A-Z][A-Za-z'`\-]+,?\s+[A-Z]{1,3}\.?(?=[\s,.(])"
YEAR_AUTHOR_SPLIT = re.compile(r"(?<=\(\d{4}\)\.)\s+(?=" + AUTHOR_START + ")")
YEAR_SUFFIX_AUTHOR_SPLIT = re.compile(r"(?<=\(\d{4}[a-z]\)\.)\s+(?=" + AUTHOR_START + ")")
DOI_BOUNDARY_SPLIT = re.compile(r"(?:(?<=\[DOI\])|(?<=\[DOI\]\.))\s+(?=(?:\d{1,3}\.\s+)?[A-Z])")
NUMBERED_MARKER = re.compile(r"(?:^|(?<=[.?!])\s+)(\d{1,3})\.\s+(?=[A-Z])")
LEADING_NUMBER = re.compile(r"^\s*\d{1,3}\.\s*")
DOI_SPACING = re.compile(r"\s*\[DOI\]")
RANGE_PATTERN = re.compile(r"(\d{1,4})\s*[-–—‑]\s*(\d{1,4})")
WHITESPACE = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """Flatten whitespace and collapse every DOI form to ``[DOI]``."""
    text = strip_sentinels(raw.replace("\u00a0", " "))
    for pattern in DOI_TEXT_PATTERNS:
        text = pattern.sub("[DOI]", text)
    return WHITESPACE.sub(" ", text).strip()


def _split_numbered(text: str) -> List[str]:
    """Split "1. ... 2. ..." runs; markers must count up from 1."""
    chain = []
    expected = 1
    for match in NUMBERED_MARKER.finditer(text):
        if int(match.group(1)) == expected:
            chain.append(match)
            expected += 1
    if len(chain) < 2:
        return [text]
    pieces = []
    prefix = text[:chain[0].start()].strip()
    if prefix:
        pieces.append(prefix)
    for index, match in enumerate(chain):
        end = chain[index + 1].start() if index + 1 < len(chain) else len(text)
        pieces.append(text[match.end():end])
    return pieces


def _split_on_year(text: str) -> List[str]:
    pieces = []
    for part in YEAR_AUTHOR_SPLIT.split(text):
        pieces.extend(YEAR_SUFFIX_AUTHOR_SPLIT.split(part))
    return pieces


def split_entries(raw: str) -> List[str]:
    """Break a blob of reference text into individual citation strings.

    Year-then-author boundaries are tried first; each resulting chunk is
    then split on a numbered-list run, and chunks that run did not resolve
    are split at DOI boundaries. Fragments shorter than 20 characters are
    dropped.
    """
    text = normalize_text(raw)
    if not text:
        return []
    entries: List[str] = []
    for chunk in _split_on_year(text):
        numbered = _split_numbered(chunk)
        if len(numbered) > 1:
            entries.extend(numbered)
            continue
        entries.extend(DOI_BOUNDARY_SPLIT.split(chunk))
    cleaned = [entry.strip() for entry in entries]
    return [entry for entry in cleaned if len(entry) >= MIN_ENTRY_LENGTH]


def format_entry(entry: str) -> str:
    """Return the inner HTML of one bibliography ``<li>``."""
    text = WHITESPACE.sub(" ", LEADING_NUMBER.sub("", entry)).strip()
    text = DOI_SPACING.sub(" [DOI]", text).strip()
    if not text.endswith((".", "?", "!")):
        text += "."
    escaped = html.escape(text, quote=False)
    return RANGE_PATTERN.sub(r'<span class="norun">\1&#8209;\2</span>', escaped)


def build_list(entries: List[str]) -> Tag:
    items = "".join(f"<li>{format_entry(entry)}</li>" for entry in entries)
    fragment = BeautifulSoup(f'<ol class="bibliography">{items}</ol>', "html.parser")
    return fragment.ol


def _is_title(node: Tag) -> bool:
    # Headings, or a paragraph holding nothing but the title (often in <strong>).
    return bool(TITLE_PATTERN.match(node.get_text()))


def find_heading(soup: BeautifulSoup) -> Optional[Tag]:
    for node in soup.find_all(HEADING_TAGS + ["p"]):
        if _is_title(node):
            return node
    return None


def _is_disclaimer(node) -> bool:
    text = node.get_text() if isinstance(node, Tag) else str(node)
    return any(marker in text for marker in DISCLAIMER_MARKERS)


def _collect_until_heading(start: Tag) -> List[Tag]:
    """Element siblings after ``start`` up to the next heading or disclaimer."""
    block: List[Tag] = []
    for sibling in start.find_next_siblings():
        if sibling.name in HEADING_TAGS or _is_disclaimer(sibling):
            break
        block.append(sibling)
    return block


def _flatten(nodes: List[Tag]) -> str:
    return " ".join(node.get_text() for node in nodes)


def _next_element(node: Tag) -> Optional[Tag]:
    sibling = node.find_next_sibling()
    return sibling if isinstance(sibling, Tag) else None


def rebuild_bibliography(html_text: str) -> str:
    """Rebuild the bibliography list; returns the input when nothing qualifies."""
    soup = BeautifulSoup(html_text, "html.parser")
    heading = find_heading(soup)
    if heading is None:
        logger.info("No bibliography heading found; leaving HTML unchanged")
        return html_text

    existing = _next_element(heading)
    if existing is not None and existing.name == "ol":
        entries: List[str] = []
        for li in existing.find_all("li", recursive=False):
            entries.extend(split_entries(li.get_text()))
        extras = _collect_until_heading(existing)
        extra_entries = split_entries(_flatten(extras)) if extras else []
        entries.extend(extra_entries)
        if not entries:
            logger.warning("Bibliography list produced no usable entries; leaving HTML unchanged")
            return html_text
        if extra_entries:
            for node in extras:
                node.decompose()
        existing.replace_with(build_list(entries))
        logger.info(
            "Rebuilt existing bibliography list: %s entries (%s from trailing content)",
            len(entries),
            len(extra_entries),
        )
        return str(soup)

    block = _collect_until_heading(heading)
    if not block:
        return html_text
    entries = split_entries(_flatten(block))
    if not entries:
        logger.warning("Bibliography text produced no usable entries; leaving HTML unchanged")
        return html_text
    for node in block:
        node.decompose()
    heading.insert_after(build_list(entries))
    logger.info("Built bibliography list from loose text: %s entries", len(entries))
    return str(soup)
