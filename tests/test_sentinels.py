import pytest

from painguide.errors import SentinelLeakError
from painguide.typesetting.sentinels import (
    assert_no_sentinels,
    find_sentinels,
    strip_sentinels,
    tokenize_bibliography,
)


BODY = """# Guide

Walk 10-15 minutes a day. DOI: 10.9999/keep-body.

## Bibliography

1. Smith J. (2020). Title one. DOI: 10.1000/abc.
2. Doe R. (2021). Title two. Spine. 2017;166(7):514–530.
3. Roe P. (2019). Title three. https://doi.org/10.1016/j.spinee.2019.01.002
"""


def test_tokenizes_only_the_bibliography():
    tokenized = tokenize_bibliography(BODY)
    head, _, bibliography = tokenized.partition("## Bibliography")

    assert "Walk 10-15 minutes" in head
    assert "DOI: 10.9999/keep-body." in head
    assert "[[DOI|10.1000/abc]]." in bibliography
    assert "[[RANGE|514-530]]" in bibliography
    assert "[[DOI|10.1016/j.spinee.2019.01.002]]" in bibliography


def test_ranges_inside_doi_payloads_are_left_alone():
    text = "## Bibliography\n\nA. DOI: 10.1000/abc-12-34 and pages 5-9."

    tokenized = tokenize_bibliography(text)

    assert "[[DOI|10.1000/abc-12-34]]" in tokenized
    assert "[[RANGE|5-9]]" in tokenized
    assert tokenized.count("[[RANGE|") == 1


def test_tokenizer_is_idempotent():
    once = tokenize_bibliography(BODY)

    assert tokenize_bibliography(once) == once


def test_documents_without_bibliography_are_untouched():
    assert tokenize_bibliography("# Guide\n\n10-15 reps") == "# Guide\n\n10-15 reps"


def test_strip_restores_plain_text():
    html = "<li>Title. [[DOI|10.1000/abc]]. pp. [[RANGE|10-15]].</li>"

    assert strip_sentinels(html) == "<li>Title. [DOI]. pp. 10-15.</li>"


@pytest.mark.parametrize(
    "html",
    [
        "[[DOI|10.1000/abc]]",
        "[[DOI|10.1000/abc]",
        "[DOI|10.1000/abc]]",
        "[[DOI|10.1000/abc",
        "[[DOI]]",
        "[[[DOI|x]]]",
        "[[RANGE|10–15]]",
        "[[RANGE|10-15",
        "[RANGE|10-15]]",
        "[[RANGE|odd]]",
        "[[RANGE]]",
        "[[[[RANGE|1-2]]]]",
        "<p>[[DOI|a]] and [[RANGE|3—4]] and [[DOI</p>",
    ],
)
def test_strip_leaves_no_markers(html):
    stripped = strip_sentinels(html)

    assert "[[DOI" not in stripped
    assert "[[RANGE" not in stripped
    assert find_sentinels(stripped) == []
    assert strip_sentinels(stripped) == stripped


def test_assert_no_sentinels_reports_up_to_three_fragments():
    html = " ".join(f"entry {n} [[DOI|10.1000/{n}]]" for n in range(5))

    with pytest.raises(SentinelLeakError) as excinfo:
        assert_no_sentinels(html)

    assert len(excinfo.value.fragments) == 5
    assert "(5 found)" in str(excinfo.value)
    assert str(excinfo.value).count(" | ") == 2


def test_assert_no_sentinels_accepts_clean_html():
    assert_no_sentinels("<p>Title. [DOI]. pp. 10-15.</p>")
