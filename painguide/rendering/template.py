"""Full print document around the converted guide body."""

from __future__ import annotations

import html
from datetime import date
from typing import Optional

from painguide.config import settings
from painguide.content.loader import format_long_date
from painguide.models.document import GUIDE_DISPLAY_NAMES, GuideDocument

BASE_CSS = """
@page { size: A4; margin: 1in; }
body {
  font-family: 'Times New Roman', serif;
  font-size: 12pt;
  line-height: 1.6;
  color: #333;
  background-color: #ffffff;
  margin: 0;
  padding: 0;
}
h1, h2, h3, h4 {
  font-family: Arial, sans-serif;
  color: #1a5490;
  margin-top: 24pt;
  margin-bottom: 12pt;
  font-weight: bold;
}
h1 { font-size: 18pt; border-bottom: 2px solid #1a5490; padding-bottom: 6pt; }
h2 { font-size: 14pt; border-bottom: 1px solid #1a5490; padding-bottom: 4pt; }
h3 { font-size: 12pt; }
p { margin: 0 0 12pt 0; text-align: justify; text-indent: 0; }
ul, ol { margin: 0 0 12pt 0; padding-left: 36pt; }
li { margin-bottom: 6pt; line-height: 1.6; }
table { border-collapse: collapse; margin: 0 0 12pt 0; }
th, td { border: 1px solid #c8d6e5; padding: 4pt 8pt; }
.cover-page { position: relative; text-align: center; padding-top: 3in; page-break-after: always; }
.cover-title { font-size: 24pt; color: #1a5490; margin-bottom: 24pt; border-bottom: none; }
.cover-credit { margin-top: 96pt; font-size: 10pt; }
.tier-badge { display: inline-block; padding: 4pt 12pt; border-radius: 4pt; font-weight: bold; margin-top: 12pt; }
.tier-enhanced { background-color: #2c7fb8; color: white; }
.tier-monograph { background-color: #1a5490; color: white; }
.bibliography {
  font-size: 10pt;
  line-height: 1.4;
  margin: 0;
  padding-left: 1.5rem;
  list-style: decimal;
  word-break: keep-all;
  overflow-wrap: normal;
  hyphens: none;
}
.bibliography li { margin-bottom: 0.6rem; list-style-position: outside; }
img {
  max-width: 300px !important;
  max-height: 300px !important;
  width: auto !important;
  height: auto !important;
  display: block !important;
  margin: 20px auto !important;
  page-break-inside: avoid;
  object-fit: contain;
}
img[src*="/exercises/"] {
  max-width: 250px !important;
  max-height: 250px !important;
  margin: 15px auto !important;
}
img[src*="/anatomical/"] {
  max-width: 350px !important;
  max-height: 350px !important;
}
"""

ENHANCED_CSS = """
.cite, .nowrap, .glue { white-space: nowrap; display: inline-block; }
.bibliography .norun { display: inline-block; white-space: nowrap; }
@media print { a[href]::after { content: none !important; } }
"""

TIER_BADGES = {
    "enhanced": '<span class="tier-badge tier-enhanced">ENHANCED CLINICAL GUIDE</span>',
    "monograph": '<span class="tier-badge tier-monograph">COMPREHENSIVE MONOGRAPH</span>',
}

ENHANCED_INTRO = (
    "<p>Thank you for using PainOptix™ to better understand your back pain. "
    "This Enhanced Clinical Guide provides detailed, evidence-based information "
    "about your condition.</p>"
)


def cover_title(document: GuideDocument) -> str:
    if document.tier == "enhanced":
        return f"Learn About {GUIDE_DISPLAY_NAMES.get(document.guide_id, 'Your Back Pain')}"
    if document.title:
        return document.title
    return document.guide_id.replace("_", " ").upper()


def format_pain_score(score: Optional[float]) -> str:
    if score is None:
        return "N/A"
    value = int(score) if float(score).is_integer() else score
    return f"{value}/10"


def render_cover(
    document: GuideDocument,
    name: Optional[str] = None,
    on_date: Optional[date] = None,
    pain_score: Optional[float] = None,
    credit: Optional[str] = None,
) -> str:
    credit_line = settings.cover_credit if credit is None else credit
    parts = [
        '<div class="cover-page">',
        f'<h1 class="cover-title">{html.escape(cover_title(document))}</h1>',
    ]
    if document.tier == "enhanced":
        parts.append(ENHANCED_INTRO)
    elif document.subtitle:
        parts.append(f"<h2>{html.escape(document.subtitle)}</h2>")
    parts.append(TIER_BADGES.get(document.tier, ""))
    parts.append(
        '<p style="margin-top: 48pt;">'
        f"<strong>Prepared for:</strong> {html.escape(name or 'Patient')}<br/>"
        f"<strong>Date:</strong> {format_long_date(on_date or date.today())}<br/>"
        f"<strong>Initial Pain Score:</strong> {format_pain_score(pain_score)}"
        "</p>"
    )
    if credit_line:
        parts.append(f'<p class="cover-credit">{html.escape(credit_line)}</p>')
    parts.append("</div>")
    return "\n".join(part for part in parts if part)


def build_document(
    content_html: str,
    document: GuideDocument,
    name: Optional[str] = None,
    on_date: Optional[date] = None,
    pain_score: Optional[float] = None,
    base_href: Optional[str] = None,
) -> str:
    """Wrap converted guide HTML in the print stylesheet and cover page."""
    css = BASE_CSS + (ENHANCED_CSS if document.tier == "enhanced" else "")
    base = (base_href or settings.image_base_url).rstrip("/") + "/"
    cover = render_cover(document, name=name, on_date=on_date, pain_score=pain_score)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        f'<base href="{html.escape(base)}">\n'
        '<meta charset="utf-8" />\n'
        f"<title>{html.escape(cover_title(document))}</title>\n"
        f"<style>{css}</style>\n"
        "</head>\n"
        "<body>\n"
        f"{cover}\n"
        f'<main class="guide-content">\n{content_html}\n</main>\n'
        "</body>\n"
        "</html>\n"
    )
