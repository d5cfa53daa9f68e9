"""Deterministic word generator backed by the built-in template tables."""

import random
import re
from typing import AbstractSet, List, Optional

import structlog

from .models import GenerationRequest, WordCandidate
from .templates import TEMPLATE_VERSION, TOPIC_KEYWORDS, TOPIC_WORDS, WORD_TEMPLATES
from .utils import normalize, stable_seed

log = structlog.get_logger()

LOCAL_PROVIDER = "local"


def match_topic(topic: Optional[str]) -> Optional[str]:
    """Map a free-text topic to a template topic name, or None."""
    if not topic:
        return None
    key = normalize(topic)
    if key in TOPIC_WORDS:
        return key

    for keyword, name in TOPIC_KEYWORDS.items():
        # Whole words only, plural allowed ("pets" but not "carpet").
        if re.search(rf"\b{re.escape(keyword)}s?\b", key):
            return name

    # Loose match on shared words ("animal facts" -> "animals").
    input_words = [w for w in key.split() if len(w) > 3]
    for name in TOPIC_WORDS:
        for word in name.split():
            if len(word) <= 3:
                continue
            if any(word in w or w in word for w in input_words):
                return name
    return None


def select_templates(request: GenerationRequest) -> List[WordCandidate]:
    """Template pool for the request: topic table first, then level, then A1.

    Returns an empty list when nothing exists for the language pair.
    """
    pair = request.language_pair
    level = request.level.value
    entries = []

    topic_name = match_topic(request.topic)
    if topic_name:
        entries = TOPIC_WORDS[topic_name].get(pair, [])
        if not entries:
            log.debug("Topic has no templates for pair", topic=topic_name, pair=pair)

    if not entries:
        entries = WORD_TEMPLATES.get(level, {}).get(pair, [])
    if not entries and level != "A1":
        entries = WORD_TEMPLATES["A1"].get(pair, [])
        if entries:
            log.debug("Using A1 templates as fallback", pair=pair, level=level)

    return [
        WordCandidate(term=term, translation=translation, gloss=gloss,
                      example=example, difficulty=level)
        for term, translation, gloss, example in entries
    ]


def _is_excluded(candidate: WordCandidate, excluded: AbstractSet[str]) -> bool:
    term, translation = candidate.keys()
    return term in excluded or translation in excluded


def count_unused(request: GenerationRequest, excluded: AbstractSet[str]) -> int:
    """Number of pool entries whose term and translation are both outside ``excluded``."""
    return sum(1 for c in select_templates(request) if not _is_excluded(c, excluded))


def generate_local(request: GenerationRequest, excluded: AbstractSet[str]) -> List[WordCandidate]:
    """Pick up to ``request.count`` unused templates.

    Never raises. The order is a shuffle seeded from the request, so equal
    inputs always give equal output.
    """
    try:
        available = [c for c in select_templates(request) if not _is_excluded(c, excluded)]
        rng = random.Random(stable_seed(request.session_key, request.topic or "", TEMPLATE_VERSION))
        rng.shuffle(available)
        selected = available[:request.count]
    except Exception as e:
        log.error("Local template generation failed", error=str(e))
        return []

    log.info("Local templates selected",
             session_key=request.session_key,
             topic=request.topic,
             available=len(available),
             selected=len(selected))
    return selected
