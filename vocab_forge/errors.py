"""Exception types raised by the generation engine.

Only ``Busy`` and ``RotationExhausted`` are meant to reach callers; everything
else is absorbed by falling back to the next provider, the local templates or
a fallback image.
"""

from typing import List, Optional


class VocabForgeError(Exception):
    """Base class for all engine errors."""


class ProviderError(VocabForgeError):
    """A word provider could not produce candidates."""

    def __init__(self, provider: str, message: str = ""):
        self.provider = provider
        super().__init__(f"{provider}: {message}" if message else provider)


class ProviderUnavailable(ProviderError):
    """Provider is disabled or has no credential. Not logged as an error."""


class ProviderCallFailed(ProviderError):
    """Network, HTTP, timeout or parse failure while calling a provider."""

    AUTH_MISSING = "auth_missing"
    RATE_LIMITED = "rate_limited"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    TIMEOUT = "timeout"

    def __init__(self, provider: str, kind: str, message: str = "",
                 status: Optional[int] = None):
        self.kind = kind
        self.status = status
        super().__init__(provider, f"[{kind}] {message}".strip())


class AllDuplicates(VocabForgeError):
    """A generation succeeded but every candidate was already known or seen."""

    def __init__(self, provider_used: str, topic: Optional[str] = None):
        self.provider_used = provider_used
        self.topic = topic
        super().__init__(f"All candidates from {provider_used} were duplicates (topic={topic!r})")


class RotationExhausted(VocabForgeError):
    """Topic rotation ran out of attempts without producing new words."""

    def __init__(self, attempts: int, topics_tried: List[Optional[str]]):
        self.attempts = attempts
        self.topics_tried = topics_tried
        super().__init__(
            f"No new words after {attempts} attempts. "
            "Try a different topic or level."
        )


class Busy(VocabForgeError):
    """A generation for the same caller is in flight or the cooldown has not elapsed."""

    def __init__(self, caller_id: str, retry_after: float = 0.0):
        self.caller_id = caller_id
        self.retry_after = retry_after
        super().__init__(
            f"Generation already in progress for {caller_id!r}"
            + (f", retry in {retry_after:.1f}s" if retry_after else "")
        )


class ImageJobError(VocabForgeError):
    """An image job ended without an image. Always absorbed into a fallback."""

    def __init__(self, job_id: Optional[str], message: str = ""):
        self.job_id = job_id
        super().__init__(f"image job {job_id}: {message}")


class ImageJobFailed(ImageJobError):
    pass


class ImageJobTimedOut(ImageJobError):
    pass


class InvalidJobTransition(VocabForgeError):
    """Attempt to move an image job out of a terminal state."""
