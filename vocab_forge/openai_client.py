"""OpenAI API client with retry logic."""

import asyncio
from typing import Dict, List, Optional

import openai
import structlog
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from .config import OPENAI_API_KEY, PROVIDER_MAX_RETRIES, TEMPERATURE

log = structlog.get_logger()

_clients: Dict[str, openai.OpenAI] = {}


def get_client(api_key: Optional[str] = None) -> openai.OpenAI:
    """Return a cached client for ``api_key`` (defaults to OPENAI_API_KEY)."""
    key = api_key or OPENAI_API_KEY
    if not key:
        raise ValueError("OPENAI_API_KEY is not configured")
    if key not in _clients:
        _clients[key] = openai.OpenAI(api_key=key, max_retries=0)
    return _clients[key]


def create_openai_retry_decorator(attempts: int = PROVIDER_MAX_RETRIES):
    """Create a retry decorator for transient OpenAI failures.

    Rate limits are not retried here: the orchestrator moves on to the next
    provider instead of hammering this one.
    """
    return retry(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
        retry=retry_if_exception_type((
            openai.APITimeoutError,
            openai.APIConnectionError,
            openai.InternalServerError,
        )),
    )


async def call_chat(model: str, messages: List[Dict[str, str]], timeout: float = 60,
                    api_key: Optional[str] = None, temperature: float = TEMPERATURE) -> str:
    """Call OpenAI Chat API with retry logic."""
    client = get_client(api_key)

    @create_openai_retry_decorator()
    async def _make_api_call():
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None,
            lambda: client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                timeout=timeout,
            )
        )
        return response.choices[0].message.content or ""

    try:
        return await _make_api_call()
    except RetryError as e:
        # Extract the actual exception from the retry error
        actual_exception = e.last_attempt.exception()
        log.error("OpenAI API call failed after retries",
                  error=str(actual_exception),
                  model=model,
                  attempts=e.last_attempt.attempt_number)
        raise actual_exception
