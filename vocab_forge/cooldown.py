"""Spacing and mutual exclusion for generation calls per logical caller."""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Dict, Optional

import structlog

from .config import GENERATION_COOLDOWN_SECONDS
from .errors import Busy

log = structlog.get_logger()

DEFAULT_CALLER = "default"


class _CallerState:
    __slots__ = ("last_invocation", "in_flight")

    def __init__(self):
        self.last_invocation: Optional[float] = None
        self.in_flight = False


class CooldownGuard:
    """Enforces a minimum gap between generations and one in-flight call per caller.

    A call arriving inside the cooldown window either waits out the remainder
    (``wait=True``, the slot is reserved while it waits) or fails with ``Busy``.
    A call arriving while another one for the same caller is in flight always
    fails with ``Busy``.
    """

    def __init__(self,
                 cooldown_seconds: float = GENERATION_COOLDOWN_SECONDS,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.cooldown_seconds = max(0.0, cooldown_seconds)
        self._clock = clock
        self._sleep = sleep
        self._states: Dict[str, _CallerState] = {}

    def remaining(self, caller_id: str = DEFAULT_CALLER) -> float:
        """Seconds left in the cooldown window for ``caller_id``."""
        state = self._states.get(caller_id)
        if state is None or state.last_invocation is None:
            return 0.0
        elapsed = self._clock() - state.last_invocation
        return max(0.0, self.cooldown_seconds - elapsed)

    def in_flight(self, caller_id: str = DEFAULT_CALLER) -> bool:
        state = self._states.get(caller_id)
        return bool(state and state.in_flight)

    @asynccontextmanager
    async def permit(self, caller_id: str = DEFAULT_CALLER, wait: bool = True):
        state = self._states.setdefault(caller_id, _CallerState())
        remaining = self.remaining(caller_id)

        # No await between the check and the reservation below.
        if state.in_flight:
            log.warning("Generation rejected, already in flight", caller_id=caller_id)
            raise Busy(caller_id, remaining)
        if remaining > 0 and not wait:
            raise Busy(caller_id, remaining)

        state.in_flight = True
        try:
            if remaining > 0:
                log.info("Cooldown active, deferring generation",
                         caller_id=caller_id, wait_s=round(remaining, 3))
                await self._sleep(remaining)
            state.last_invocation = self._clock()
            yield
        finally:
            state.in_flight = False
