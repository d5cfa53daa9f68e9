"""Per-session record of terms already shown to the learner."""

import threading
from typing import Dict, FrozenSet, Iterable, Optional, Set

import structlog

from .models import WordCandidate
from .utils import normalize

log = structlog.get_logger()


class DedupLedger:
    """Keyed store of lower-cased terms/translations surfaced per session key.

    Sessions are created lazily and only ever grow until ``reset`` is called.
    One instance is owned by each orchestrator; there is no module-level state.
    """

    def __init__(self):
        self._sessions: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def seen(self, session_key: str) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._sessions.setdefault(session_key, set()))

    def is_seen(self, session_key: str, text: str) -> bool:
        with self._lock:
            return normalize(text) in self._sessions.get(session_key, ())

    def merge(self, session_key: str, candidates: Iterable[WordCandidate]) -> int:
        """Record candidates as surfaced. Returns the new size of the session."""
        with self._lock:
            used = self._sessions.setdefault(session_key, set())
            for candidate in candidates:
                used.update(candidate.keys())
            size = len(used)
        log.debug("Ledger updated", session_key=session_key, size=size)
        return size

    def reset(self, session_key: Optional[str] = None) -> None:
        """Forget one session, or every session when no key is given."""
        with self._lock:
            if session_key is None:
                self._sessions.clear()
            else:
                self._sessions.pop(session_key, None)
        log.info("Ledger reset", session_key=session_key or "*")

    def usage_stats(self) -> Dict[str, int]:
        with self._lock:
            return {key: len(words) for key, words in self._sessions.items()}

    def __contains__(self, session_key: str) -> bool:
        with self._lock:
            return session_key in self._sessions
