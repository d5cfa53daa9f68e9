"""Tests for topic rotation after fully-duplicate generations."""

import asyncio
import random

import pytest

from vocab_forge.errors import AllDuplicates, Busy, ProviderCallFailed, RotationExhausted
from vocab_forge.models import GenerationRequest, GenerationResult
from vocab_forge.rotation import TopicRotationPolicy
from vocab_forge.templates import TOPICS
from tests.conftest import FakeInvoker, make_orchestrator, word

CASA = word("casa", "дом", "house")
GATO = word("gato", "кошка", "cat")
PERRO = word("perro", "собака", "dog")


def animals_request(**kwargs):
    return GenerationRequest(known_language="ru", target_language="es", topic="animals", **kwargs)


def test_first_attempt_success_reports_one_attempt():
    policy = TopicRotationPolicy(make_orchestrator(FakeInvoker("llm", [GATO])))

    result = asyncio.run(policy.generate_with_rotation(animals_request()))

    assert result.attempts == 1
    assert result.topic == "animals"


def test_duplicates_then_new_words_after_rotation():
    invoker = FakeInvoker("llm", [CASA], [GATO])
    policy = TopicRotationPolicy(make_orchestrator(invoker), rng=random.Random(7))

    result = asyncio.run(policy.generate_with_rotation(animals_request(exclusions=["casa"]),
                                                       max_attempts=3))

    assert result.attempts == 2
    assert [c.term for c in result.candidates] == ["gato"]
    assert result.topic in TOPICS
    assert result.topic != "animals"
    assert invoker.calls[1].topic == result.topic
    assert invoker.calls[1].exclusions == frozenset({"casa"})


def test_rotation_is_bounded():
    invoker = FakeInvoker("llm", [CASA])
    policy = TopicRotationPolicy(make_orchestrator(invoker), rng=random.Random(1))

    with pytest.raises(RotationExhausted) as exc_info:
        asyncio.run(policy.generate_with_rotation(animals_request(exclusions=["casa"]),
                                                  max_attempts=3))

    error = exc_info.value
    assert error.attempts == 3
    assert len(invoker.calls) == 3
    assert error.topics_tried[0] == "animals"
    assert all(a != b for a, b in zip(error.topics_tried, error.topics_tried[1:]))
    assert "Try a different topic or level" in str(error)


def test_single_attempt_never_rotates():
    invoker = FakeInvoker("llm", [CASA])
    policy = TopicRotationPolicy(make_orchestrator(invoker))

    with pytest.raises(RotationExhausted):
        asyncio.run(policy.generate_with_rotation(animals_request(exclusions=["casa"]),
                                                  max_attempts=1))
    assert len(invoker.calls) == 1


def test_invalid_max_attempts():
    policy = TopicRotationPolicy(make_orchestrator())
    with pytest.raises(ValueError):
        asyncio.run(policy.generate_with_rotation(animals_request(), max_attempts=0))


class BusyOrchestrator:
    def __init__(self):
        self.calls = 0

    async def generate(self, request, caller_id="default"):
        self.calls += 1
        raise Busy(caller_id, 1.0)


def test_busy_propagates_without_rotation():
    orchestrator = BusyOrchestrator()
    policy = TopicRotationPolicy(orchestrator)

    with pytest.raises(Busy):
        asyncio.run(policy.generate_with_rotation(animals_request()))
    assert orchestrator.calls == 1


class DuplicateThenOkOrchestrator:
    def __init__(self, duplicates):
        self.duplicates = duplicates
        self.topics = []

    async def generate(self, request, caller_id="default"):
        self.topics.append(request.topic)
        if len(self.topics) <= self.duplicates:
            raise AllDuplicates("llm", request.topic)
        return GenerationResult(candidates=[GATO], provider_used="llm", topic=request.topic)


def test_request_without_topic_rotates_into_pool():
    orchestrator = DuplicateThenOkOrchestrator(duplicates=1)
    policy = TopicRotationPolicy(orchestrator, rng=random.Random(3))
    request = GenerationRequest(known_language="ru", target_language="es")

    result = asyncio.run(policy.generate_with_rotation(request))

    assert orchestrator.topics[0] is None
    assert orchestrator.topics[1] in TOPICS
    assert result.attempts == 2


@pytest.mark.parametrize("seed", range(10))
def test_next_topic_never_repeats_current(seed):
    policy = TopicRotationPolicy(make_orchestrator(), rng=random.Random(seed))

    assert policy.next_topic("animals") != "animals"
    assert policy.next_topic("Animals") != "animals"


def test_single_topic_pool_returns_current():
    policy = TopicRotationPolicy(make_orchestrator(), topics=["animals"])
    assert policy.next_topic("animals") == "animals"


def test_empty_topic_pool_rejected():
    with pytest.raises(ValueError):
        TopicRotationPolicy(make_orchestrator(), topics=[])


def test_fallthrough_then_rotation_scenario():
    failing = FakeInvoker("p1", ProviderCallFailed("p1", ProviderCallFailed.NETWORK, "down"))
    working = FakeInvoker("p2", [CASA, PERRO], [PERRO], [GATO])
    orchestrator = make_orchestrator(failing, working)
    policy = TopicRotationPolicy(orchestrator, rng=random.Random(5))
    request = GenerationRequest(known_language="ru", target_language="es", level="A1",
                                exclusions=["casa"])

    first = asyncio.run(policy.generate_with_rotation(request))

    assert first.provider_used == "p2"
    assert [c.term for c in first.candidates] == ["perro"]
    assert {"casa", "perro"} <= orchestrator.ledger.seen("ru-es-A1")

    second = asyncio.run(policy.generate_with_rotation(request))

    assert second.attempts == 2
    assert second.topic in TOPICS
    assert [c.term for c in second.candidates] == ["gato"]
