"""Markdown conversion and typographic post-processing for guide PDFs."""

from .bibliography import rebuild_bibliography, split_entries
from .converter import markdown_to_html
from .glue import run_glue
from .sentinels import assert_no_sentinels, strip_sentinels, tokenize_bibliography

__all__ = [
    "assert_no_sentinels",
    "markdown_to_html",
    "rebuild_bibliography",
    "run_glue",
    "split_entries",
    "strip_sentinels",
    "tokenize_bibliography",
]
