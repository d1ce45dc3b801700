import json

import pytest
import requests

from srtsum.core import llm_client
from srtsum.core.llm_client import ServiceError, chat_completion


def _response(status: int, body) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.url = "http://test/v1/chat/completions"
    r._content = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")
    return r


def _ok(content: str = "- a bullet"):
    return _response(200, {"choices": [{"message": {"role": "assistant", "content": content}}]})


class FakePost:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr(llm_client.time, "sleep", sleeps.append)
    return sleeps


def test_request_shape_and_content(monkeypatch):
    post = FakePost(_ok("  - one\n- two \n"))
    monkeypatch.setattr(llm_client.requests, "post", post)

    out = chat_completion("hello", model="m1", base_url="http://test/v1/", api_key="k", timeout=7)

    assert out == "- one\n- two"
    call = post.calls[0]
    assert call["url"] == "http://test/v1/chat/completions"
    assert call["json"]["model"] == "m1"
    assert call["json"]["messages"] == [{"role": "user", "content": "hello"}]
    assert call["json"]["stream"] is False
    assert call["headers"] == {"Authorization": "Bearer k"}
    assert call["timeout"] == 7


def test_system_message_is_prepended(monkeypatch):
    post = FakePost(_ok())
    monkeypatch.setattr(llm_client.requests, "post", post)
    chat_completion("hi", system="be brief", api_key="")
    assert post.calls[0]["json"]["messages"][0] == {"role": "system", "content": "be brief"}
    assert post.calls[0]["headers"] == {}


def test_transient_errors_are_retried_with_backoff(monkeypatch, no_sleep):
    post = FakePost(
        _response(503, "overloaded"),
        requests.ConnectionError("refused"),
        _ok("- finally"),
    )
    monkeypatch.setattr(llm_client.requests, "post", post)

    assert chat_completion("p", max_retries=3, backoff=0.5) == "- finally"
    assert len(post.calls) == 3
    assert no_sleep == [0.5, 1.0]


def test_gives_up_after_max_retries(monkeypatch):
    post = FakePost(_response(500, "a"), _response(502, "b"))
    monkeypatch.setattr(llm_client.requests, "post", post)

    with pytest.raises(ServiceError) as exc:
        chat_completion("p", max_retries=2)
    assert "Service response: b" in str(exc.value)
    assert len(post.calls) == 2


def test_client_errors_are_not_retried(monkeypatch):
    post = FakePost(_response(400, "model not found"), _ok())
    monkeypatch.setattr(llm_client.requests, "post", post)

    with pytest.raises(ServiceError, match="model not found"):
        chat_completion("p", max_retries=5)
    assert len(post.calls) == 1


@pytest.mark.parametrize(
    "body",
    [
        {"choices": []},
        {"message": {"content": "ollama native shape"}},
        {"choices": [{"message": {"content": None}}]},
        "not json at all",
    ],
)
def test_malformed_bodies_raise_service_error(monkeypatch, body):
    post = FakePost(_response(200, body))
    monkeypatch.setattr(llm_client.requests, "post", post)

    with pytest.raises(ServiceError):
        chat_completion("p", max_retries=3)
    assert len(post.calls) == 1


def test_make_generator_binds_settings(monkeypatch):
    post = FakePost(_ok("- x"))
    monkeypatch.setattr(llm_client.requests, "post", post)

    generate = llm_client.make_generator(model="tiny", base_url="http://other/v1")
    assert generate("prompt") == "- x"
    assert post.calls[0]["url"] == "http://other/v1/chat/completions"
    assert post.calls[0]["json"]["model"] == "tiny"


def test_dropped_connection_is_retried(monkeypatch, no_sleep):
    post = FakePost(requests.exceptions.ChunkedEncodingError("connection broken"), _ok("- recovered"))
    monkeypatch.setattr(llm_client.requests, "post", post)

    assert chat_completion("p", max_retries=3, backoff=1.0) == "- recovered"
    assert len(post.calls) == 2
    assert no_sleep == [1.0]


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.TooManyRedirects("loop"),
        requests.exceptions.MissingSchema("no scheme"),
        requests.exceptions.InvalidURL("bad url"),
    ],
)
def test_other_request_errors_become_service_error(monkeypatch, error):
    post = FakePost(error, _ok())
    monkeypatch.setattr(llm_client.requests, "post", post)

    with pytest.raises(ServiceError) as exc:
        chat_completion("p", max_retries=3)
    assert exc.value.__cause__ is error
    assert len(post.calls) == 1
