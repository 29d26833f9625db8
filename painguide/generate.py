"""Render a single guide to a PDF file from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from painguide.config import settings
from painguide.errors import GuidePdfError
from painguide.models.document import TIERS
from painguide.models.request import AssessmentResponses, PdfRequest
from painguide.pipeline import GuidePdfGenerator
from painguide.rendering.browser_pool import BrowserPool
from painguide.utils.pdf_inspect import extract_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="painguide-generate", description=__doc__)
    parser.add_argument("guide_id", help="Guide identifier, e.g. sciatica")
    parser.add_argument("tier", choices=TIERS)
    parser.add_argument("output", type=Path, help="Destination PDF path")
    parser.add_argument("--name", default=None, help="Patient name for the cover page")
    parser.add_argument("--pain-score", type=float, default=None)
    parser.add_argument(
        "--responses",
        type=Path,
        default=None,
        help="JSON file mapping question ids (Q1..Q16) to answers",
    )
    return parser


def load_responses(path: Optional[Path], pain_score: Optional[float]) -> AssessmentResponses:
    answers = {}
    if path is not None:
        answers = json.loads(path.read_text(encoding="utf-8"))
    return AssessmentResponses(answers=answers, pain_score=pain_score)


async def _generate(request: PdfRequest, output: Path) -> int:
    pool = BrowserPool(max_pages=1)
    try:
        pdf = await GuidePdfGenerator(pool=pool).generate(request)
    finally:
        await pool.close()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf)
    pages = extract_text(pdf)
    words = sum(len(text.split()) for text in pages)
    logger.info("Wrote %s (%s bytes, %s pages, %s words)", output, len(pdf), len(pages), words)
    return len(pdf)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)
    request = PdfRequest(
        guide_id=args.guide_id,
        tier=args.tier,
        name=args.name,
        responses=load_responses(args.responses, args.pain_score),
    )
    try:
        asyncio.run(_generate(request, args.output))
    except GuidePdfError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
