import fitz

from painguide.utils.pdf_inspect import extract_text, summarize_pdf

from conftest import make_pdf_bytes


def test_summary_counts_pages_and_bytes():
    data = make_pdf_bytes(pages=3)

    summary = summarize_pdf(data)

    assert summary.page_count == 3
    assert summary.size_bytes == len(data)
    assert summary.title is None


def test_summary_reads_title_metadata():
    doc = fitz.open()
    doc.new_page()
    doc.set_metadata({"title": "Learn About Sciatica"})
    data = doc.tobytes()
    doc.close()

    assert summarize_pdf(data).title == "Learn About Sciatica"


def test_extract_text_per_page():
    pages = extract_text(make_pdf_bytes(pages=2))

    assert len(pages) == 2
    assert "Page 2" in pages[1]
