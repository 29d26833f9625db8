from contextlib import asynccontextmanager
from pathlib import Path

import fitz
import pytest

from painguide.content.loader import ContentCache


SAMPLE_FREE = """---
title: Understanding Sciatica
subtitle: A guide for {{painLocation}}
---
>>EXECUTIVE_SUMMARY
Internal summary that never ships.
>>END

# Understanding Sciatica

Prepared for [Name Placeholder] on [Date Placeholder].

Your pain is felt in {{painLocation}} and gets worse with {{painTrigger}}.
<!-- editor note -->
"""

SAMPLE_ENHANCED = """---
title: Sciatica Enhanced
---
# What Is Sciatica

Pain radiates {{radiationPattern}} [Chou et al., 2007].

## Bibliography

1. Smith J. (2020). Title one of the study. DOI: 10.1000/abc.
2. Doe R. (2021). Title two of the review. Spine. pp. 10-15.
"""


def make_pdf_bytes(pages: int = 2) -> bytes:
    doc = fitz.open()
    for index in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {index + 1}")
    data = doc.tobytes()
    doc.close()
    return data


class FakePage:
    """Records calls made by the rasterizer and returns canned results."""

    def __init__(self, pdf_bytes=None, content_error=None, image_error=None, html=None):
        self.pdf_bytes = pdf_bytes if pdf_bytes is not None else make_pdf_bytes()
        self.content_error = content_error
        self.image_error = image_error
        self.html = html
        self.calls = []
        self.closed = False
        self.pdf_options = None
        self.viewport = None

    async def set_viewport_size(self, size):
        self.viewport = size
        self.calls.append("set_viewport_size")

    async def set_content(self, html, wait_until=None, timeout=None):
        self.calls.append("set_content")
        if self.content_error is not None:
            raise self.content_error
        if self.html is None:
            self.html = html

    async def wait_for_function(self, expression, timeout=None):
        self.calls.append("wait_for_function")
        if self.image_error is not None:
            raise self.image_error

    async def evaluate(self, script):
        self.calls.append("evaluate")
        return {"container_found": True, "bib_items": 5, "tokenized": 3}

    async def content(self):
        return self.html or ""

    async def pdf(self, **options):
        self.calls.append("pdf")
        self.pdf_options = options
        return self.pdf_bytes

    async def close(self):
        self.closed = True


class FakePool:
    def __init__(self, page=None):
        self.page_obj = page or FakePage()
        self.checkouts = 0

    @asynccontextmanager
    async def page(self):
        self.checkouts += 1
        try:
            yield self.page_obj
        finally:
            await self.page_obj.close()


def write_guide(root: Path, tier: str, guide_id: str, text: str) -> Path:
    path = root / tier / f"{guide_id}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def guide_root(tmp_path):
    write_guide(tmp_path, "free", "sciatica", SAMPLE_FREE)
    write_guide(tmp_path, "enhanced", "sciatica", SAMPLE_ENHANCED)
    return tmp_path


@pytest.fixture
def content_cache(guide_root):
    return ContentCache(root=guide_root)


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def fake_pool(fake_page):
    return FakePool(fake_page)


@pytest.fixture
def pdf_bytes():
    return make_pdf_bytes()
