import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

import pytest

from assistantkit.api import ClientConfig, Transport
from assistantkit.moderation import (
    InvalidModerationModelError,
    ModerationModel,
    ModerationRequest,
    ModerationResponse,
    ModerationsAPI,
    ResultCategories,
)

_RULES = [
    ("hate", "hate"),
    ("harass", "harassment"),
    ("suicide", "self-harm"),
    ("drink bleach", "self-harm/instructions"),
    ("porn", "sexual"),
    ("kill", "violence"),
    ("corpse", "violence/graphic"),
]


def _moderate(body):
    text = body.get("input", "")
    categories, scores = {}, {}
    for needle, key in _RULES:
        if needle in text:
            categories[key] = True
            scores[key] = 1
            break
    return {
        "id": "1",
        "model": body.get("model", ""),
        "results": [{"categories": categories, "category_scores": scores, "flagged": True}],
    }


class _Handler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = json.loads(self.rfile.read(length)) if length else {}
        self.server.requests.append((urlsplit(self.path).path, body))
        data = json.dumps(_moderate(body)).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, *args):
        pass


class _Server(ThreadingHTTPServer):
    def __init__(self):
        super().__init__(("127.0.0.1", 0), _Handler)
        self.requests = []


@pytest.fixture
def server():
    srv = _Server()
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()


@pytest.fixture
def api(server):
    host, port = server.server_address
    return ModerationsAPI(Transport(ClientConfig(auth_token="token", base_url=f"http://{host}:{port}/v1")))


def test_moderations(api, server):
    response = api.create(ModerationRequest(model=ModerationModel.TEXT_STABLE, input="I want to kill them."))
    assert response.model == "text-moderation-stable"
    assert response.results[0].flagged is True
    assert response.results[0].categories.violence is True
    assert response.results[0].categories.hate is False
    assert response.results[0].category_scores.violence == 1.0
    assert server.requests[-1] == (
        "/v1/moderations",
        {"input": "I want to kill them.", "model": "text-moderation-stable"},
    )


@pytest.mark.parametrize(
    "model",
    [
        ModerationModel.TEXT_STABLE,
        ModerationModel.TEXT_LATEST,
        ModerationModel.OMNI_20240926,
        ModerationModel.OMNI_LATEST,
        "omni-moderation-latest",
        "",
    ],
)
def test_supported_models(api, model):
    response = api.create(ModerationRequest(model=model, input="I want to kill them."))
    assert len(response.results) == 1


@pytest.mark.parametrize("model", ["gpt-3.5-turbo", ModerationModel.TEXT_001])
def test_unsupported_models_raise_without_request(api, server, model):
    with pytest.raises(InvalidModerationModelError):
        api.create(ModerationRequest(model=model, input="I want to kill them."))
    assert server.requests == []


def test_empty_model_is_omitted_from_body(api, server):
    response = api.create(ModerationRequest(input="a corpse"))
    assert response.model == ""
    assert response.results[0].categories.violence_graphic is True
    path, body = server.requests[-1]
    assert path == "/v1/moderations"
    assert body == {"input": "a corpse"}


def test_category_keys_round_trip():
    categories = ResultCategories(self_harm_intent=True, sexual_minors=True)
    data = categories.to_dict()
    assert data["self-harm/intent"] is True
    assert data["sexual/minors"] is True
    assert data["hate"] is False
    assert ResultCategories.from_dict(data) == categories


def test_response_parsing_with_slash_keys():
    response = ModerationResponse.from_dict(
        {
            "id": "x",
            "model": "m",
            "results": [
                {
                    "categories": {"hate/threatening": True},
                    "category_scores": {"harassment/threatening": 0.5},
                    "flagged": False,
                }
            ],
        }
    )
    result = response.results[0]
    assert result.categories.hate_threatening is True
    assert result.category_scores.harassment_threatening == 0.5
    assert result.flagged is False