from io import BytesIO

import docx
import pytest

from core.constraint import DOCX_MIME_TYPE
from core.markdraft.exporters.docx import DocxExporter

SAMPLE = "# Title\n\nHello **world**."


def test_index_serves_client_page(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'id="markdownInput"' in response.text


def test_static_assets_are_served(client) -> None:
    response = client.get("/static/script.js")
    assert response.status_code == 200
    assert "convertToPdfBtn" in response.text


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_returns_error_body(client) -> None:
    response = client.get("/convert/odt")
    assert response.status_code in {404, 405}
    assert "error" in response.json()


def test_convert_docx(client) -> None:
    response = client.post("/convert/docx", json={"markdown": SAMPLE})
    assert response.status_code == 200
    assert response.headers["content-type"] == DOCX_MIME_TYPE
    assert response.headers["content-disposition"] == 'attachment; filename="MarkDraft_converted.docx"'
    document = docx.Document(BytesIO(response.content))
    text = "\n".join(paragraph.text for paragraph in document.paragraphs)
    assert "Title" in text
    assert "Hello world." in text


def test_convert_docx_is_repeatable(client) -> None:
    first = client.post("/convert/docx", json={"markdown": SAMPLE})
    second = client.post("/convert/docx", json={"markdown": SAMPLE})
    texts = [
        [p.text for p in docx.Document(BytesIO(response.content)).paragraphs]
        for response in (first, second)
    ]
    assert texts[0] == texts[1]


@pytest.mark.parametrize(
    ("payload", "filename"),
    [
        ({"markdown": SAMPLE}, "MarkDraft_portrait.pdf"),
        ({"markdown": SAMPLE, "orientation": "portrait"}, "MarkDraft_portrait.pdf"),
        ({"markdown": SAMPLE, "orientation": "landscape"}, "MarkDraft_landscape.pdf"),
        ({"markdown": SAMPLE, "orientation": ""}, "MarkDraft_portrait.pdf"),
        ({"markdown": SAMPLE, "orientation": None}, "MarkDraft_portrait.pdf"),
        ({"markdown": SAMPLE, "orientation": False}, "MarkDraft_portrait.pdf"),
        ({"markdown": SAMPLE, "orientation": 0}, "MarkDraft_portrait.pdf"),
        ({"markdown": SAMPLE, "orientation": "LANDSCAPE"}, "MarkDraft_landscape.pdf"),
    ],
)
def test_convert_pdf(client, engine, payload, filename) -> None:
    response = client.post("/convert/pdf", json=payload)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == f'attachment; filename="{filename}"'
    assert response.content.startswith(b"%PDF")
    assert engine.open == 0


@pytest.mark.parametrize("endpoint", ["/convert/docx", "/convert/pdf"])
@pytest.mark.parametrize("payload", [{}, {"markdown": ""}, {"markdown": "   \n "}, {"markdown": None}])
def test_missing_markdown_is_rejected_before_rendering(client, engine, endpoint, payload) -> None:
    response = client.post(endpoint, json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Markdown content is required."}
    assert engine.launches == 0


@pytest.mark.parametrize("endpoint", ["/convert/docx", "/convert/pdf"])
def test_empty_body_is_treated_as_missing_markdown(client, endpoint) -> None:
    response = client.post(endpoint, content=b"")
    assert response.status_code == 400
    assert response.json() == {"error": "Markdown content is required."}


@pytest.mark.parametrize("orientation", ["sideways", True, 1, ["landscape"]])
def test_invalid_orientation_is_rejected(client, engine, orientation) -> None:
    response = client.post("/convert/pdf", json={"markdown": SAMPLE, "orientation": orientation})
    assert response.status_code == 400
    assert response.json() == {"error": "Orientation must be 'portrait' or 'landscape'."}
    assert engine.launches == 0


@pytest.mark.parametrize("body", [b"{not json", b'{"markdown": 12}', b"[1, 2]"])
def test_malformed_body(client, engine, body) -> None:
    response = client.post("/convert/pdf", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body."}
    assert engine.launches == 0


def test_oversized_body(client, config, engine) -> None:
    config.runtime.max_body_mb = 1
    response = client.post("/convert/pdf", json={"markdown": "x" * (1024 * 1024 + 1)})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body is too large."}
    assert engine.launches == 0


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("Timeout 30000ms exceeded.", "PDF generation timed out or the rendering engine failed."),
        ("Out of memory", "PDF generation failed due to insufficient memory resources."),
        ("Target closed", "Failed to generate PDF document."),
    ],
)
def test_pdf_engine_failure(make_client, failing_engine, message, expected) -> None:
    engine = failing_engine("print", message)
    response = make_client(engine).post("/convert/pdf", json={"markdown": SAMPLE})
    assert response.status_code == 500
    assert response.json()["error"].startswith(expected)
    assert engine.launches == 1
    assert engine.open == 0


def test_docx_failure(client, monkeypatch) -> None:
    def explode(self, html):
        raise RuntimeError("corrupt numbering part")

    monkeypatch.setattr(DocxExporter, "build", explode)
    response = client.post("/convert/docx", json={"markdown": SAMPLE})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create Word document."}


def test_unexpected_error_is_generic(make_client) -> None:
    class BrokenRenderer:
        def render(self, markdown):
            raise KeyError("renderer state")

    client = make_client(renderer=BrokenRenderer(), raise_server_exceptions=False)
    response = client.post("/convert/docx", json={"markdown": SAMPLE})
    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected server error occurred."}
