import asyncio
import json
import logging

import pytest

from painguide import generate
from painguide.errors import GuideNotFoundError
from painguide.models.request import PdfRequest

from conftest import make_pdf_bytes


def test_parser_accepts_options(tmp_path):
    args = generate.build_parser().parse_args(
        ["sciatica", "monograph", str(tmp_path / "out.pdf"), "--name", "Ada", "--pain-score", "7"]
    )

    assert args.guide_id == "sciatica"
    assert args.tier == "monograph"
    assert args.pain_score == 7.0


def test_parser_rejects_unknown_tier(tmp_path):
    with pytest.raises(SystemExit):
        generate.build_parser().parse_args(["sciatica", "gold", str(tmp_path / "out.pdf")])


def test_load_responses_reads_json(tmp_path):
    path = tmp_path / "responses.json"
    path.write_text(json.dumps({"Q1": "back_only", "Q6": ["numbness"]}), encoding="utf-8")

    responses = generate.load_responses(path, 5)

    assert responses.get("Q1") == "back_only"
    assert responses.get_list("Q6") == ["numbness"]
    assert responses.pain_score == 5


def test_main_builds_request_and_writes(tmp_path, monkeypatch):
    seen = {}

    async def fake_generate(request, output):
        seen["request"] = request
        seen["output"] = output
        return 0

    monkeypatch.setattr(generate, "_generate", fake_generate)
    output = tmp_path / "guide.pdf"

    code = generate.main(["canal_stenosis", "enhanced", str(output), "--name", "Ada"])

    assert code == 0
    assert seen["request"].guide_id == "canal_stenosis"
    assert seen["request"].name == "Ada"
    assert seen["output"] == output


def test_main_reports_pipeline_errors(tmp_path, monkeypatch):
    async def failing(request, output):
        raise GuideNotFoundError(request.tier, request.guide_id)

    monkeypatch.setattr(generate, "_generate", failing)

    assert generate.main(["missing_guide", "free", str(tmp_path / "x.pdf")]) == 1


class _StubPool:
    def __init__(self, max_pages=None):
        self.closed = False

    async def close(self):
        self.closed = True


def test_generate_writes_pdf_and_logs_page_text(tmp_path, monkeypatch, caplog):
    pools = []

    def make_pool(max_pages=None):
        pool = _StubPool(max_pages)
        pools.append(pool)
        return pool

    class StubGenerator:
        def __init__(self, pool=None):
            self.pool = pool

        async def generate(self, request):
            return make_pdf_bytes(3)

    monkeypatch.setattr(generate, "BrowserPool", make_pool)
    monkeypatch.setattr(generate, "GuidePdfGenerator", StubGenerator)
    output = tmp_path / "nested" / "guide.pdf"
    request = PdfRequest(guide_id="sciatica", tier="free")

    with caplog.at_level(logging.INFO, logger="painguide.generate"):
        size = asyncio.run(generate._generate(request, output))

    assert output.read_bytes()[:5] == b"%PDF-"
    assert size == output.stat().st_size
    assert pools[0].closed
    # "Page N" is two words per page
    assert "3 pages, 6 words" in caplog.text
