import pytest
from fastapi.testclient import TestClient

from painguide.api import main
from painguide.errors import (
    GuideFormatError,
    GuideNotFoundError,
    PdfGenerationError,
    SentinelLeakError,
)


class _StubGenerator:
    def __init__(self, result=b"%PDF-1.7 stub", error=None):
        self.result = result
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def client():
    return TestClient(main.app)


def _payload(**overrides):
    payload = {
        "guide_id": "sciatica",
        "tier": "enhanced",
        "name": "Ada",
        "responses": {"answers": {"Q1": "back_only", "Q2": ["sitting_long"]}, "pain_score": 6},
    }
    payload.update(overrides)
    return payload


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_pdf_is_returned(client, monkeypatch):
    stub = _StubGenerator()
    monkeypatch.setattr(main, "generator", stub)

    response = client.post("/guides/pdf", json=_payload())

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content == b"%PDF-1.7 stub"
    assert 'filename="sciatica-enhanced.pdf"' in response.headers["content-disposition"]
    assert stub.requests[0].responses.get_list("Q2") == ["sitting_long"]


@pytest.mark.parametrize(
    "error, status",
    [
        (GuideNotFoundError("free", "sciatica"), 404),
        (GuideFormatError("Malformed frontmatter: bad indent"), 500),
        (SentinelLeakError(["[[DOI|10.1000/x]]"]), 500),
        (PdfGenerationError("Failed to load document: timeout"), 502),
    ],
)
def test_errors_map_to_status_codes(client, monkeypatch, error, status):
    monkeypatch.setattr(main, "generator", _StubGenerator(error=error))

    response = client.post("/guides/pdf", json=_payload())

    assert response.status_code == status


def test_invalid_payload_is_rejected(client):
    response = client.post("/guides/pdf", json=_payload(tier="platinum"))

    assert response.status_code == 422


def test_guide_ids_must_be_safe(client):
    response = client.post("/guides/pdf", json=_payload(guide_id="../etc/passwd"))

    assert response.status_code == 422
