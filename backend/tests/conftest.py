import json

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from dependencies import get_http_client
from main import app

MOCK_ENTRIES = [
    {"keywords": ["anxious", "panic"], "response": "Try box breathing.", "tag": "breathing"},
    {"keywords": ["stress", "anxious"], "response": "Try Child's Pose."},
    {"keywords": ["sleep"], "response": "Try Legs-Up-the-Wall."},
]


class Upstream:
    """httpx.MockTransport handler that records requests and replays one canned reply."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.reply = httpx.Response(200, json={"text": "hello from upstream"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture()
def settings(tmp_path) -> Settings:
    mock_data = tmp_path / "mock_data.json"
    mock_data.write_text(json.dumps(MOCK_ENTRIES))

    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>Serene</h1>")

    return Settings(
        static_dir=static_dir,
        mock_data_path=mock_data,
        sessions_file=tmp_path / "data" / "sessions.json",
    )


@pytest.fixture()
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture()
def client(settings, upstream):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = lambda: http_client

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
