"""Guide content loading and markdown preparation."""

from .images import annotate_images
from .loader import ContentCache, clean_markdown, load_document, parse_frontmatter
from .placeholders import resolve_placeholders

__all__ = [
    "ContentCache",
    "annotate_images",
    "clean_markdown",
    "load_document",
    "parse_frontmatter",
    "resolve_placeholders",
]
