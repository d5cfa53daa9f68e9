"""Word providers.

Each ``ProviderInvoker`` turns a ``GenerationRequest`` into one provider's wire
format, sends it, and parses the answer back into ``WordCandidate`` records.
Every failure leaves as ``ProviderUnavailable`` or a classified
``ProviderCallFailed`` so the orchestrator can treat providers uniformly.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import aiohttp
import openai
import structlog

from . import openai_client
from .config import (
    COHERE_MODEL,
    GEMINI_MODEL,
    HUGGING_FACE_MODEL,
    MODEL_NAME,
    TEMPERATURE,
)
from .errors import ProviderCallFailed, ProviderUnavailable
from .models import GenerationRequest, WordCandidate
from .prompts import SYSTEM_WORD_GENERATOR, build_word_prompt
from .utils import has_credential, parse_json_array

log = structlog.get_logger()


def candidates_from_items(items: List[Any], default_difficulty: str) -> List[WordCandidate]:
    """Normalise parsed JSON items. Items without a term or translation are dropped."""
    candidates = []
    for item in items:
        if not isinstance(item, dict):
            continue
        term = str(item.get("term") or "").strip()
        translation = str(item.get("translation") or "").strip()
        if not term or not translation:
            continue
        gloss = str(item.get("english") or item.get("gloss") or "").strip() or None
        candidates.append(WordCandidate(
            term=term,
            translation=translation,
            gloss=gloss,
            example=str(item.get("example") or "").strip(),
            difficulty=str(item.get("difficulty") or default_difficulty).strip(),
        ))
    return candidates


def classify_status(provider: str, status: int, body: str = "") -> ProviderCallFailed:
    """Map a non-2xx HTTP status to a classified failure."""
    if status in (401, 403):
        kind = ProviderCallFailed.AUTH_MISSING
    elif status == 429:
        kind = ProviderCallFailed.RATE_LIMITED
    else:
        kind = ProviderCallFailed.HTTP_STATUS
    return ProviderCallFailed(provider, kind, f"HTTP {status}: {body[:200]}", status=status)


class ProviderInvoker(ABC):
    """Knows how to call one word provider."""

    name = ""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 temperature: float = TEMPERATURE):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature

    def build_prompt(self, request: GenerationRequest) -> str:
        return build_word_prompt(
            request.known_language,
            request.target_language,
            request.level.value,
            request.count,
            topic=request.topic,
            exclusions=request.exclusions,
        )

    @abstractmethod
    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        """Provider-specific request body."""

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pull the model's text out of the provider response."""

    @abstractmethod
    async def send(self, payload: Dict[str, Any], timeout: float) -> Any:
        """Deliver the payload and return the decoded response."""

    def parse_response(self, data: Any, default_difficulty: str = "A1") -> List[WordCandidate]:
        """Decode a raw response into candidates. Raises ValueError on malformed input."""
        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ValueError(f"Unexpected response shape: {e!r}") from e
        if not text:
            raise ValueError("Empty response text")
        return candidates_from_items(parse_json_array(text), default_difficulty)

    async def invoke(self, request: GenerationRequest, timeout: float) -> List[WordCandidate]:
        if not has_credential(self.api_key):
            raise ProviderUnavailable(self.name, "no API key configured")

        payload = self.build_payload(request)
        data = await self.send(payload, timeout)

        try:
            candidates = self.parse_response(data, request.level.value)
        except ValueError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.MALFORMED_RESPONSE, str(e)) from e
        if not candidates:
            raise ProviderCallFailed(self.name, ProviderCallFailed.MALFORMED_RESPONSE,
                                     "no usable candidates in response")
        return candidates


class OpenAIInvoker(ProviderInvoker):
    """OpenAI chat completions through the official SDK."""

    name = "openai"

    def __init__(self, api_key: Optional[str] = None, model: str = MODEL_NAME, **kwargs):
        super().__init__(api_key=api_key, model=model, **kwargs)

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_WORD_GENERATOR},
                {"role": "user", "content": self.build_prompt(request)},
            ],
        }

    def extract_text(self, data: Any) -> str:
        return data

    async def send(self, payload: Dict[str, Any], timeout: float) -> Any:
        try:
            return await openai_client.call_chat(
                payload["model"], payload["messages"],
                timeout=timeout, api_key=self.api_key, temperature=self.temperature,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.AUTH_MISSING, str(e)) from e
        except openai.RateLimitError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.RATE_LIMITED, str(e), status=429) from e
        except openai.APITimeoutError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.TIMEOUT, str(e)) from e
        except openai.APIConnectionError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.NETWORK, str(e)) from e
        except openai.APIStatusError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.HTTP_STATUS, str(e),
                                     status=e.status_code) from e


class HttpProviderInvoker(ProviderInvoker):
    """Provider reached with a JSON POST over aiohttp."""

    @abstractmethod
    def url(self) -> str:
        """Endpoint the payload is posted to."""

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def params(self) -> Dict[str, str]:
        return {}

    async def send(self, payload: Dict[str, Any], timeout: float) -> Any:
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
                async with session.post(
                    self.url(),
                    headers=self.headers(),
                    params=self.params(),
                    json=payload,
                ) as response:
                    if response.status >= 300:
                        body = await response.text()
                        raise classify_status(self.name, response.status, body)
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise ProviderCallFailed(self.name, ProviderCallFailed.MALFORMED_RESPONSE,
                                                 f"response body is not JSON: {e}") from e
        except asyncio.TimeoutError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.TIMEOUT,
                                     f"no response within {timeout}s") from e
        except aiohttp.ClientError as e:
            raise ProviderCallFailed(self.name, ProviderCallFailed.NETWORK, str(e)) from e


class GeminiInvoker(HttpProviderInvoker):
    name = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(self, api_key: Optional[str] = None, model: str = GEMINI_MODEL, **kwargs):
        super().__init__(api_key=api_key, model=model, **kwargs)

    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model}:generateContent"

    def headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def params(self) -> Dict[str, str]:
        return {"key": self.api_key}

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": self.build_prompt(request)}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 2048,
            },
        }

    def extract_text(self, data: Any) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]


class CohereInvoker(HttpProviderInvoker):
    name = "cohere"
    URL = "https://api.cohere.ai/v1/generate"

    def __init__(self, api_key: Optional[str] = None, model: str = COHERE_MODEL, **kwargs):
        super().__init__(api_key=api_key, model=model, **kwargs)

    def url(self) -> str:
        return self.URL

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.build_prompt(request),
            "max_tokens": 2048,
            "temperature": self.temperature,
        }

    def extract_text(self, data: Any) -> str:
        return data["generations"][0]["text"]


class HuggingFaceInvoker(HttpProviderInvoker):
    name = "huggingface"
    BASE_URL = "https://api-inference.huggingface.co/models"

    def __init__(self, api_key: Optional[str] = None, model: str = HUGGING_FACE_MODEL, **kwargs):
        super().__init__(api_key=api_key, model=model, **kwargs)

    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model}"

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "inputs": self.build_prompt(request),
            "parameters": {
                "max_new_tokens": 1500,
                "temperature": self.temperature,
                "return_full_text": False,
            },
        }

    def extract_text(self, data: Any) -> str:
        if isinstance(data, dict) and "error" in data:
            raise KeyError(data["error"])
        return data[0]["generated_text"]


INVOKER_CLASSES = {
    OpenAIInvoker.name: OpenAIInvoker,
    GeminiInvoker.name: GeminiInvoker,
    CohereInvoker.name: CohereInvoker,
    HuggingFaceInvoker.name: HuggingFaceInvoker,
}


def build_invoker(name: str, api_key: Optional[str]) -> ProviderInvoker:
    try:
        cls = INVOKER_CLASSES[name]
    except KeyError:
        raise ValueError(f"Unknown provider {name!r}") from None
    return cls(api_key=api_key)
