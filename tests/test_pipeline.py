"""Tests for the caller-facing pipeline."""

import asyncio

import pytest

from vocab_forge.errors import Busy, RotationExhausted
from vocab_forge.image_jobs import ImageJobRunner
from vocab_forge.models import GenerationRequest, ImageJobStatus
from vocab_forge.pipeline import VocabPipeline, build_pipeline, build_registry
from vocab_forge.providers import CohereInvoker, GeminiInvoker
from tests.conftest import FakeImageProvider, FakeInvoker, make_orchestrator, make_registry, no_sleep, word

GATO = word("gato", "кошка", "cat")
PERRO = word("perro", "собака", "dog")


def make_pipeline(*invokers, image_provider=None, **kwargs):
    runner = ImageJobRunner(provider=image_provider, poll_interval=3, max_poll_attempts=5, sleep=no_sleep)
    return VocabPipeline(make_orchestrator(*invokers), image_runner=runner, **kwargs)


@pytest.fixture
def request_():
    return GenerationRequest(known_language="ru", target_language="es", topic="animals")


def test_generate_cards_pairs_words_with_images(request_):
    image_provider = FakeImageProvider(default=(ImageJobStatus.COMPLETE, "https://img.example/x.png"),
                                       fail_submit_for=("dog",))
    pipeline = make_pipeline(FakeInvoker("llm", [GATO, PERRO]), image_provider=image_provider)

    cards = asyncio.run(pipeline.generate_cards(request_))

    assert [c.word.term for c in cards] == ["gato", "perro"]
    assert cards[0].image.image_url == "https://img.example/x.png"
    assert cards[1].image.is_fallback


def test_generate_cards_without_images(request_):
    pipeline = make_pipeline(FakeInvoker("llm", [GATO]))

    cards = asyncio.run(pipeline.generate_cards(request_, with_images=False))

    assert len(cards) == 1
    assert cards[0].image is None


def test_generate_raises_rotation_exhausted():
    pipeline = make_pipeline(FakeInvoker("llm", [GATO]), max_attempts=2)
    request = GenerationRequest(known_language="ru", target_language="es", exclusions=["gato"])

    with pytest.raises(RotationExhausted) as exc_info:
        asyncio.run(pipeline.generate(request))
    assert exc_info.value.attempts == 2


def test_generate_raises_busy_for_concurrent_caller(request_):
    pipeline = make_pipeline(FakeInvoker("llm", [GATO], delay=0.05))

    async def run():
        return await asyncio.gather(
            pipeline.generate(request_, caller_id="alice"),
            pipeline.generate(request_, caller_id="alice"),
            return_exceptions=True,
        )

    first, second = asyncio.run(run())
    assert first.attempts == 1
    assert isinstance(second, Busy)


def test_session_stats_and_reset(request_):
    pipeline = make_pipeline(FakeInvoker("llm", [GATO]))
    asyncio.run(pipeline.generate(request_))

    assert pipeline.usage_stats() == {"ru-es-A1": 2}

    pipeline.reset_session("ru-es-A1")
    assert pipeline.usage_stats() == {}

    result = asyncio.run(pipeline.generate(request_))
    assert [c.term for c in result.candidates] == ["gato"]


def test_provider_status_includes_images():
    pipeline = make_pipeline(FakeInvoker("llm", [GATO]), image_provider=FakeImageProvider())

    status = pipeline.provider_status()

    assert status["llm"]["available"] is True
    assert status["images"] == {"provider": "fake", "available": True, "stock_fallback": False}


def test_build_registry_from_settings():
    registry = build_registry({
        "cohere": {"enabled": True, "priority": 30, "credential": "c-key"},
        "gemini": {"enabled": True, "priority": 5, "credential": None},
    })

    descriptors = registry.list_by_priority()
    assert [d.name for d in descriptors] == ["gemini", "cohere"]
    assert isinstance(descriptors[0].invoker, GeminiInvoker)
    assert isinstance(descriptors[1].invoker, CohereInvoker)
    assert registry.first_available().name == "cohere"


def test_build_pipeline_wires_given_registry():
    registry = make_registry(FakeInvoker("llm", [GATO]))

    pipeline = build_pipeline(registry=registry, cooldown_seconds=0, max_attempts=4)

    assert pipeline.registry is registry
    assert pipeline.max_attempts == 4
    assert pipeline.orchestrator.guard.cooldown_seconds == 0


def test_build_pipeline_without_images_has_no_image_provider():
    pipeline = build_pipeline(registry=make_registry(), with_images=False)
    assert pipeline.image_runner.provider is None
