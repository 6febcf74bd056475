import json

import httpx
import pytest
from fastapi.testclient import TestClient

from docsum.config import Config
from docsum.main import create_app
from docsum.model_client import RemoteSummarizer

API_BASE = "https://proxy.test/v1"


ARTICLE = (
    "The city council met on Monday to discuss the new transit plan. "
    "Several residents spoke in favour of extending the tram line. "
    "Others worried about the cost of construction. "
    "The mayor promised a public consultation before any final vote. "
    "Engineers presented three possible routes for the extension. "
    "The northern route would serve the university campus. "
    "The southern route would pass through the old industrial district. "
    "A third option would combine parts of both. "
    "Funding is expected to come partly from regional grants. "
    "The council will vote on the preferred route next spring."
)


def _completion_body(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class RecordingHandler:
    """httpx MockTransport handler that replays canned responses and keeps the requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


def _remote_for(handler, **kwargs) -> RemoteSummarizer:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RemoteSummarizer(
        "test-key",
        base_url=API_BASE,
        model="test-model",
        http_client=http_client,
        **kwargs,
    )


@pytest.fixture
def article():
    return ARTICLE


@pytest.fixture
def make_client():
    def _make(service=None, raise_server_exceptions=True, **cfg):
        app = create_app(Config(**cfg), service)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make


def _one_page_pdf(text: str) -> bytes:
    """Minimal single-page PDF with one Helvetica text run; offsets computed so the xref is exact."""
    content = f"BT /F1 10 Tf 36 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % num + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += b"%010d 00000 n \n" % off
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


@pytest.fixture
def api_base():
    return API_BASE


@pytest.fixture
def completion():
    return _completion_body


@pytest.fixture
def recorder():
    return RecordingHandler


@pytest.fixture
def make_remote():
    return _remote_for


@pytest.fixture
def pdf_bytes():
    return _one_page_pdf
