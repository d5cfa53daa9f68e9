"""Retry fully-duplicate generations with a different topic."""

import random
from typing import List, Optional, Sequence

import structlog

from .config import MAX_GENERATION_ATTEMPTS
from .cooldown import DEFAULT_CALLER
from .errors import AllDuplicates, RotationExhausted
from .models import GenerationRequest, GenerationResult
from .orchestrator import GenerationOrchestrator
from .templates import TOPICS

log = structlog.get_logger()


class TopicRotationPolicy:
    """Re-issues a request with a new random topic after an ``AllDuplicates`` result.

    Attempts run one after another through the same orchestrator, so the dedup
    ledger and the cooldown guard see them in order.
    """

    def __init__(self, orchestrator: GenerationOrchestrator,
                 topics: Sequence[str] = TOPICS,
                 rng: Optional[random.Random] = None):
        if not topics:
            raise ValueError("topic pool must not be empty")
        self.orchestrator = orchestrator
        self.topics = list(topics)
        self.rng = rng or random.Random()

    def next_topic(self, current: Optional[str]) -> Optional[str]:
        """Uniform pick from the pool, never the current topic."""
        current_key = current.strip().lower() if current else None
        choices = [t for t in self.topics if t.lower() != current_key]
        if not choices:
            return current
        return self.rng.choice(choices)

    async def generate_with_rotation(self, request: GenerationRequest,
                                     max_attempts: int = MAX_GENERATION_ATTEMPTS,
                                     caller_id: str = DEFAULT_CALLER) -> GenerationResult:
        """Run up to ``max_attempts`` orchestrations. ``Busy`` propagates unchanged."""
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        current = request
        topics_tried: List[Optional[str]] = []
        for attempt in range(1, max_attempts + 1):
            topics_tried.append(current.topic)
            try:
                result = await self.orchestrator.generate(current, caller_id=caller_id)
            except AllDuplicates as e:
                log.info("Generation returned only duplicates",
                         attempt=attempt, max_attempts=max_attempts,
                         provider=e.provider_used, topic=current.topic)
                if attempt == max_attempts:
                    break
                topic = self.next_topic(current.topic)
                log.info("Rotating topic", previous=current.topic, topic=topic)
                current = request.with_topic(topic)
                continue

            return result.model_copy(update={"attempts": attempt})

        log.error("Topic rotation exhausted", attempts=max_attempts,
                  session_key=request.session_key, topics=topics_tried)
        raise RotationExhausted(max_attempts, topics_tried)
