"""Tests for provider payloads, response parsing and error classification."""

import asyncio
import json
import types

import aiohttp
import pytest

from vocab_forge import providers
from vocab_forge.errors import ProviderCallFailed, ProviderUnavailable
from vocab_forge.models import GenerationRequest
from vocab_forge.prompts import build_word_prompt
from vocab_forge.providers import (
    CohereInvoker,
    GeminiInvoker,
    HuggingFaceInvoker,
    HttpProviderInvoker,
    OpenAIInvoker,
    build_invoker,
    candidates_from_items,
    classify_status,
)
from vocab_forge.utils import has_credential, parse_json_array, strip_code_fences
from tests import conftest

ITEMS = [
    {"term": "perro", "translation": "собака", "english": "dog",
     "example": "El perro corre.", "difficulty": "A1"},
    {"term": "gato", "translation": "кот", "english": "cat", "example": "El gato duerme."},
]


@pytest.fixture
def request_():
    return GenerationRequest(known_language="ru", target_language="es", level="A2",
                             topic="animals", count=5, exclusions=["casa"])


def test_candidates_from_items_maps_fields():
    candidates = candidates_from_items(ITEMS, "A2")

    assert [c.term for c in candidates] == ["perro", "gato"]
    assert candidates[0].gloss == "dog"
    assert candidates[0].difficulty == "A1"
    assert candidates[1].difficulty == "A2"


def test_candidates_without_term_or_translation_dropped():
    items = [{"term": "", "translation": "x"}, {"term": "sol"}, "noise", {"term": "sol", "translation": "солнце"}]
    candidates = candidates_from_items(items, "A1")

    assert [(c.term, c.translation) for c in candidates] == [("sol", "солнце")]
    assert candidates[0].gloss is None


def test_strip_code_fences():
    assert strip_code_fences("```json\n[1]\n```") == "[1]"
    assert strip_code_fences("```\n[1]\n```") == "[1]"
    assert strip_code_fences("[1]") == "[1]"


def test_parse_json_array_recovers_from_prose():
    text = "Here are your words:\n" + json.dumps(ITEMS) + "\nEnjoy!"
    assert parse_json_array(text) == ITEMS


@pytest.mark.parametrize("text", ["not json at all", '{"term": "perro"}', "[broken"])
def test_parse_json_array_rejects_non_arrays(text):
    with pytest.raises(ValueError):
        parse_json_array(text)


@pytest.mark.parametrize("status,kind", [
    (401, ProviderCallFailed.AUTH_MISSING),
    (403, ProviderCallFailed.AUTH_MISSING),
    (429, ProviderCallFailed.RATE_LIMITED),
    (500, ProviderCallFailed.HTTP_STATUS),
    (404, ProviderCallFailed.HTTP_STATUS),
])
def test_classify_status(status, kind):
    error = classify_status("cohere", status, "body")

    assert error.kind == kind
    assert error.status == status
    assert error.provider == "cohere"


def test_has_credential_rejects_placeholders():
    assert has_credential("sk-abc123")
    assert not has_credential(None)
    assert not has_credential("  ")
    assert not has_credential("your-gemini-key")
    assert not has_credential("sk-xxxxxxxxxxxx")
    assert not has_credential("paste-your-key-here")
    assert not has_credential("YOUR_COHERE_KEY")
    assert has_credential("sk-wherever42")
    assert has_credential("hf_thereabc")


def test_prompt_mentions_topic_level_and_exclusions():
    prompt = build_word_prompt("ru", "es", "A2", 5, topic="animals", exclusions={"casa", "perro"})

    assert "Spanish" in prompt and "Russian" in prompt
    assert "CEFR level A2" in prompt
    assert "Topic: animals" in prompt
    assert "casa, perro" in prompt


def test_gemini_payload_and_parse(request_):
    invoker = GeminiInvoker(api_key="g-key")
    payload = invoker.build_payload(request_)

    assert "animals" in payload["contents"][0]["parts"][0]["text"]
    assert invoker.params() == {"key": "g-key"}

    data = {"candidates": [{"content": {"parts": [{"text": "```json\n" + json.dumps(ITEMS) + "\n```"}]}}]}
    candidates = invoker.parse_response(data, "A2")
    assert [c.term for c in candidates] == ["perro", "gato"]


def test_cohere_parse():
    invoker = CohereInvoker(api_key="c-key")
    candidates = invoker.parse_response({"generations": [{"text": json.dumps(ITEMS)}]}, "A1")
    assert len(candidates) == 2


def test_huggingface_error_body_is_malformed():
    invoker = HuggingFaceInvoker(api_key="hf-key")

    with pytest.raises(ValueError):
        invoker.parse_response({"error": "Model is currently loading"})
    assert len(invoker.parse_response([{"generated_text": json.dumps(ITEMS)}])) == 2


def test_unexpected_shape_is_malformed():
    with pytest.raises(ValueError):
        GeminiInvoker(api_key="g-key").parse_response({"candidates": []})


def test_invoke_without_key_is_unavailable(request_):
    invoker = CohereInvoker(api_key=None)

    with pytest.raises(ProviderUnavailable):
        asyncio.run(invoker.invoke(request_, timeout=1))


def test_invoke_parses_sent_response(request_):
    invoker = CohereInvoker(api_key="c-key")
    sent = []

    async def fake_send(payload, timeout):
        sent.append((payload, timeout))
        return {"generations": [{"text": json.dumps(ITEMS)}]}

    invoker.send = fake_send
    candidates = asyncio.run(invoker.invoke(request_, timeout=7))

    assert [c.term for c in candidates] == ["perro", "gato"]
    assert sent[0][1] == 7
    assert "animals" in sent[0][0]["prompt"]


@pytest.mark.parametrize("text", ["[]", "sorry, I cannot help", '[{"term": ""}]'])
def test_invoke_with_unusable_response_fails(request_, text):
    invoker = CohereInvoker(api_key="c-key")

    async def fake_send(payload, timeout):
        return {"generations": [{"text": text}]}

    invoker.send = fake_send
    with pytest.raises(ProviderCallFailed) as exc_info:
        asyncio.run(invoker.invoke(request_, timeout=1))
    assert exc_info.value.kind == ProviderCallFailed.MALFORMED_RESPONSE


def test_openai_invoker_uses_chat_client(request_, monkeypatch):
    calls = []

    async def fake_call_chat(model, messages, timeout, api_key, temperature):
        calls.append((model, messages, api_key))
        return json.dumps(ITEMS)

    monkeypatch.setattr(providers.openai_client, "call_chat", fake_call_chat)
    invoker = OpenAIInvoker(api_key="sk-test", model="gpt-4o-mini")

    candidates = asyncio.run(invoker.invoke(request_, timeout=5))

    assert len(candidates) == 2
    model, messages, api_key = calls[0]
    assert model == "gpt-4o-mini"
    assert api_key == "sk-test"
    assert messages[0]["role"] == "system"
    assert "animals" in messages[1]["content"]


def test_build_invoker():
    assert isinstance(build_invoker("gemini", "k"), GeminiInvoker)
    with pytest.raises(ValueError):
        build_invoker("unknown", "k")


class StubResponse:
    def __init__(self, status=200, body="", data=None):
        self.status = status
        self.body = body
        self.data = data

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def text(self):
        return self.body

    async def json(self, content_type="application/json"):
        if self.data is None:
            return json.loads(self.body)
        return self.data


class StubSession:
    """Stands in for ``aiohttp.ClientSession``: ``post`` returns or raises ``outcome``."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.posts = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


def stub_session(monkeypatch, outcome):
    session = StubSession(outcome)
    monkeypatch.setattr(providers.aiohttp, "ClientSession", lambda **kwargs: session)
    return session


def send_cohere(timeout=5):
    invoker = CohereInvoker(api_key="c-key")
    return asyncio.run(invoker.send({"prompt": "words"}, timeout))


def test_send_returns_decoded_json(monkeypatch):
    session = stub_session(monkeypatch, StubResponse(data={"generations": []}))

    assert send_cohere() == {"generations": []}
    url, kwargs = session.posts[0]
    assert url == CohereInvoker.URL
    assert kwargs["json"] == {"prompt": "words"}
    assert kwargs["headers"]["Authorization"] == "Bearer c-key"


@pytest.mark.parametrize("status,kind", [
    (401, ProviderCallFailed.AUTH_MISSING),
    (429, ProviderCallFailed.RATE_LIMITED),
    (503, ProviderCallFailed.HTTP_STATUS),
])
def test_send_classifies_error_status(monkeypatch, status, kind):
    stub_session(monkeypatch, StubResponse(status=status, body="nope"))

    with pytest.raises(ProviderCallFailed) as exc_info:
        send_cohere()
    assert exc_info.value.kind == kind
    assert exc_info.value.status == status


def test_send_non_json_body_is_malformed(monkeypatch):
    stub_session(monkeypatch, StubResponse(body="<html>gateway</html>"))

    with pytest.raises(ProviderCallFailed) as exc_info:
        send_cohere()
    assert exc_info.value.kind == ProviderCallFailed.MALFORMED_RESPONSE


def test_send_timeout(monkeypatch):
    stub_session(monkeypatch, asyncio.TimeoutError())

    with pytest.raises(ProviderCallFailed) as exc_info:
        send_cohere(timeout=2)
    assert exc_info.value.kind == ProviderCallFailed.TIMEOUT
    assert "2" in str(exc_info.value)


def test_send_connector_error_is_network(monkeypatch):
    key = types.SimpleNamespace(host="api.cohere.ai", port=443, ssl=True)
    stub_session(monkeypatch, aiohttp.ClientConnectorError(key, OSError(111, "Connection refused")))

    with pytest.raises(ProviderCallFailed) as exc_info:
        send_cohere()
    assert exc_info.value.kind == ProviderCallFailed.NETWORK


def test_http_invoker_requires_url():
    class NoUrl(HttpProviderInvoker):
        name = "nourl"

        def build_payload(self, request):
            return {}

        def extract_text(self, data):
            return data

    with pytest.raises(TypeError):
        NoUrl(api_key="k")


def test_live_guard_skips_unless_enabled(monkeypatch):
    monkeypatch.setattr(conftest, "LIVE_TESTING", False)

    with pytest.raises(pytest.skip.Exception):
        conftest.live_guard()
