import json

import pytest
import requests

from dealscore.adapters import mistral_client as mc
from dealscore.adapters.config import AppConfig
from dealscore.adapters.mistral_client import MistralClient, MistralError, make_mistral_client


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", headers=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.headers = headers or {}

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _ok(content: str) -> FakeResponse:
    return FakeResponse(payload={"choices": [{"message": {"content": content}}]})


@pytest.fixture
def calls(monkeypatch):
    """Queue of responses/exceptions returned by requests.post, plus recorded kwargs."""
    state = {"queue": [], "sent": []}

    def fake_post(url, **kwargs):
        state["sent"].append((url, kwargs))
        item = state["queue"].pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(mc.requests, "post", fake_post)
    monkeypatch.setattr(mc.time, "sleep", lambda s: None)
    return state


def _client(**kw) -> MistralClient:
    return MistralClient(api_key="sk-test", base_url="https://api.example/v1/", **kw)


def test_chat_json_posts_expected_body(calls):
    calls["queue"].append(_ok('{"verdict": "Pass"}'))

    content = _client(model="mistral-large-latest", temperature=0.3).chat_json("hello")

    assert content == '{"verdict": "Pass"}'
    url, kwargs = calls["sent"][0]
    assert url == "https://api.example/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["json"]["response_format"] == {"type": "json_object"}
    assert kwargs["json"]["temperature"] == 0.3
    assert kwargs["json"]["messages"] == [{"role": "user", "content": "hello"}]
    assert kwargs["timeout"] == 15.0


def test_client_error_status_raises_without_retry(calls):
    calls["queue"].append(FakeResponse(status_code=401, text="unauthorized"))

    with pytest.raises(MistralError, match="401"):
        _client(max_retries=3).chat_json("x")
    assert len(calls["sent"]) == 1


def test_transient_status_is_retried(calls):
    calls["queue"] += [FakeResponse(status_code=503, headers={"Retry-After": "1"}), _ok("{}")]

    assert _client(max_retries=1).chat_json("x") == "{}"
    assert len(calls["sent"]) == 2


def test_network_errors_exhaust_retries(calls):
    calls["queue"] += [requests.ConnectionError("down"), requests.Timeout("slow")]

    with pytest.raises(MistralError, match="after retries"):
        _client(max_retries=1).chat_json("x")


def test_malformed_payload_raises(calls):
    calls["queue"].append(FakeResponse(payload={"choices": []}))

    with pytest.raises(MistralError, match="Unexpected"):
        _client().chat_json("x")


def test_make_client_requires_key():
    with pytest.raises(MistralError):
        make_mistral_client(AppConfig(MISTRAL_API_KEY=None))


def test_blank_key_counts_as_missing():
    assert AppConfig(MISTRAL_API_KEY="   ").MISTRAL_API_KEY is None


def test_retry_after_beyond_timeout_fails_fast(calls, monkeypatch):
    slept = []
    monkeypatch.setattr(mc.time, "sleep", slept.append)
    calls["queue"] += [FakeResponse(status_code=429, headers={"Retry-After": "3600"}), _ok("{}")]

    with pytest.raises(MistralError, match="Retry-After"):
        _client(max_retries=1, timeout_s=15.0).chat_json("x")
    assert slept == []
    assert len(calls["sent"]) == 1


def test_retry_after_within_timeout_is_honoured(calls, monkeypatch):
    slept = []
    monkeypatch.setattr(mc.time, "sleep", slept.append)
    calls["queue"] += [FakeResponse(status_code=429, headers={"Retry-After": "10"}), _ok("{}")]

    assert _client(max_retries=1, timeout_s=15.0).chat_json("x") == "{}"
    assert slept == [10.0]
