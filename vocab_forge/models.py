"""Data models for the vocabulary generation engine."""

from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_WORD_COUNT
from .errors import InvalidJobTransition


class ProficiencyLevel(str, Enum):
    """CEFR proficiency levels."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class GenerationRequest(BaseModel):
    """One request for new vocabulary. Created fresh per call, never mutated."""

    model_config = ConfigDict(frozen=True)

    known_language: str
    target_language: str
    level: ProficiencyLevel = ProficiencyLevel.A1
    topic: Optional[str] = None
    count: int = Field(default=DEFAULT_WORD_COUNT, ge=1, le=50)
    exclusions: FrozenSet[str] = frozenset()

    @field_validator("known_language", "target_language")
    @classmethod
    def _lower_code(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("language code must not be empty")
        return value

    @field_validator("topic")
    @classmethod
    def _clean_topic(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("exclusions", mode="before")
    @classmethod
    def _normalize_exclusions(cls, value):
        if value is None:
            return frozenset()
        return frozenset(w.strip().lower() for w in value if w and w.strip())

    @property
    def session_key(self) -> str:
        return f"{self.known_language}-{self.target_language}-{self.level.value}"

    @property
    def language_pair(self) -> str:
        return f"{self.known_language}-{self.target_language}"

    def with_topic(self, topic: Optional[str]) -> "GenerationRequest":
        """Return a copy of this request with a different topic."""
        return self.model_copy(update={"topic": topic})

    def is_excluded(self, text: str) -> bool:
        return text.strip().lower() in self.exclusions


class WordCandidate(BaseModel):
    """A proposed vocabulary item, before or after dedup filtering."""

    model_config = ConfigDict(frozen=True)

    term: str  # target language
    translation: str  # known language
    gloss: Optional[str] = None  # pivot language (English), used for image prompts
    example: str = ""
    difficulty: str = ProficiencyLevel.A1.value

    def keys(self) -> Tuple[str, str]:
        """Lower-cased term and translation, as stored in the dedup ledger."""
        return self.term.strip().lower(), self.translation.strip().lower()


class GenerationResult(BaseModel):
    """Candidates that survived filtering, with the provider that supplied them."""

    candidates: List[WordCandidate]
    provider_used: str
    topic: Optional[str] = None
    attempts: int = 1


class ImageJobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (ImageJobStatus.COMPLETE, ImageJobStatus.FAILED, ImageJobStatus.TIMED_OUT)


class ImageJob(BaseModel):
    """An image generation job tracked by polling until it reaches a terminal state."""

    id: Optional[str] = None  # provider-assigned, None until submitted
    prompt: str
    style: str
    status: ImageJobStatus = ImageJobStatus.PENDING
    image_url: Optional[str] = None
    poll_count: int = 0

    def transition(self, status: ImageJobStatus, image_url: Optional[str] = None) -> None:
        """Move the job forward. Terminal jobs are never resurrected."""
        if self.status.is_terminal:
            raise InvalidJobTransition(
                f"job {self.id} is {self.status.value}, cannot move to {status.value}"
            )
        if status == ImageJobStatus.PENDING and self.status != ImageJobStatus.PENDING:
            raise InvalidJobTransition(f"job {self.id} cannot go back to pending")
        self.status = status
        if image_url:
            self.image_url = image_url


class ImageResult(BaseModel):
    """Resolved image reference for one prompt. ``source`` says where it came from."""

    prompt: str
    image_url: str
    source: str  # leonardo | pexels | fallback
    status: ImageJobStatus
    job_id: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.status != ImageJobStatus.COMPLETE


class GeneratedCard(BaseModel):
    """A candidate paired with its illustration."""

    word: WordCandidate
    image: Optional[ImageResult] = None
