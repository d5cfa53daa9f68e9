"""Pytest configuration and fixtures."""

import asyncio
import hashlib
import pathlib
from typing import List, Optional, Tuple

import pytest
import vcr

from vocab_forge.config import LIVE_TESTING
from vocab_forge.cooldown import CooldownGuard
from vocab_forge.image_jobs import ImageProvider
from vocab_forge.ledger import DedupLedger
from vocab_forge.models import GenerationRequest, ImageJobStatus, WordCandidate
from vocab_forge.orchestrator import GenerationOrchestrator
from vocab_forge.registry import ProviderDescriptor, ProviderRegistry

# Calculate hash of prompts.py for cassette invalidation
PROMPTS_HASH = hashlib.sha256(
    (pathlib.Path(__file__).resolve().parent.parent / "vocab_forge" / "prompts.py").read_bytes()
).hexdigest()[:8]


def cassette(name: str) -> str:
    """Generate cassette filename with prompt hash."""
    return f"{name}_{PROMPTS_HASH}.yaml"


@pytest.fixture
def my_vcr():
    """VCR fixture for recording/replaying HTTP interactions."""
    return vcr.VCR(
        cassette_library_dir="tests/fixtures",
        filter_headers=[("authorization", "DUMMY")],
        filter_query_parameters=[("key", "DUMMY")],
        record_mode="once",
    )


def live_guard():
    """Check if live testing is enabled."""
    if not LIVE_TESTING:
        pytest.skip("Live LLM disabled (set VOCAB_FORGE_LIVE=1)")


def word(term: str, translation: str, gloss: Optional[str] = None) -> WordCandidate:
    return WordCandidate(term=term, translation=translation, gloss=gloss or term)


class FakeInvoker:
    """Scripted provider: each call takes the next result (a list or an exception); the last repeats."""

    def __init__(self, name: str, *results, delay: float = 0.0):
        self.name = name
        self.results = list(results)
        self.delay = delay
        self.calls: List[GenerationRequest] = []

    async def invoke(self, request: GenerationRequest, timeout: float) -> List[WordCandidate]:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return list(result)


def make_registry(*invokers: FakeInvoker, priorities=None, enabled=None) -> ProviderRegistry:
    registry = ProviderRegistry()
    for i, invoker in enumerate(invokers):
        registry.register(ProviderDescriptor(
            name=invoker.name,
            priority=(priorities or {}).get(invoker.name, (i + 1) * 10),
            invoker=invoker,
            enabled=(enabled or {}).get(invoker.name, True),
            credential="test-key",
        ))
    return registry


def make_orchestrator(*invokers: FakeInvoker, **kwargs) -> GenerationOrchestrator:
    registry_kwargs = {k: kwargs.pop(k) for k in ("priorities", "enabled") if k in kwargs}
    kwargs.setdefault("guard", CooldownGuard(0))
    kwargs.setdefault("ledger", DedupLedger())
    return GenerationOrchestrator(make_registry(*invokers, **registry_kwargs), **kwargs)


class FakeClock:
    """Manual clock paired with a sleep that advances it."""

    def __init__(self, now: float = 1000.0):
        self.now = now
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeImageProvider(ImageProvider):
    """Returns scripted poll results in order, then ``default`` forever."""

    name = "fake"

    def __init__(self, polls=(), default: Tuple[ImageJobStatus, Optional[str]] = (ImageJobStatus.RUNNING, None),
                 fail_submit_for: Tuple[str, ...] = ()):
        self.polls = list(polls)
        self.default = default
        self.fail_submit_for = fail_submit_for
        self.submitted: List[str] = []
        self.poll_count = 0

    async def submit(self, prompt: str, style: str, width: int, height: int) -> str:
        if any(marker in prompt for marker in self.fail_submit_for):
            raise RuntimeError("submit rejected")
        self.submitted.append(prompt)
        return f"job-{len(self.submitted)}"

    async def poll(self, job_id: str):
        self.poll_count += 1
        result = self.polls.pop(0) if self.polls else self.default
        if isinstance(result, Exception):
            raise result
        return result


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def ru_es_request():
    return GenerationRequest(known_language="ru", target_language="es", level="A1")


@pytest.fixture
def clock():
    return FakeClock()
