"""Provider fallback chain with session-level deduplication."""

import asyncio
import time
from typing import AbstractSet, Callable, List, Optional, Tuple

import structlog

from .config import LEDGER_RESET_THRESHOLD, PROVIDER_TIMEOUT_SECONDS
from .cooldown import DEFAULT_CALLER, CooldownGuard
from .errors import AllDuplicates, ProviderCallFailed, ProviderUnavailable
from .ledger import DedupLedger
from .local_generator import LOCAL_PROVIDER, count_unused, generate_local
from .models import GenerationRequest, GenerationResult, WordCandidate
from .registry import ProviderRegistry

log = structlog.get_logger()

LocalGenerator = Callable[[GenerationRequest, AbstractSet[str]], List[WordCandidate]]


class GenerationOrchestrator:
    """Tries providers strictly in priority order and filters out known words.

    Providers are never called in parallel: a slower, higher-priority provider
    wins over a faster, lower-priority one. When every provider fails the local
    template generator is used, which cannot fail.
    """

    def __init__(self,
                 registry: ProviderRegistry,
                 ledger: Optional[DedupLedger] = None,
                 guard: Optional[CooldownGuard] = None,
                 local_generator: LocalGenerator = generate_local,
                 provider_timeout: float = PROVIDER_TIMEOUT_SECONDS,
                 ledger_reset_threshold: int = LEDGER_RESET_THRESHOLD):
        self.registry = registry
        self.ledger = ledger if ledger is not None else DedupLedger()
        self.guard = guard if guard is not None else CooldownGuard()
        self.local_generator = local_generator
        self.provider_timeout = provider_timeout
        self.ledger_reset_threshold = ledger_reset_threshold

    async def generate(self, request: GenerationRequest,
                       caller_id: str = DEFAULT_CALLER,
                       wait: bool = True) -> GenerationResult:
        """Produce novel candidates for ``request``.

        Raises ``Busy`` when the caller already has a generation in flight (or
        the cooldown has not elapsed and ``wait`` is False) and
        ``AllDuplicates`` when every candidate was already known.
        """
        async with self.guard.permit(caller_id, wait=wait):
            raw, provider_used = await self._fetch_candidates(request)
            return self._filter_and_record(request, raw, provider_used)

    async def _fetch_candidates(self, request: GenerationRequest) -> Tuple[List[WordCandidate], str]:
        for descriptor in self.registry.list_by_priority():
            if not descriptor.is_available():
                log.debug("Provider unavailable, skipping", provider=descriptor.name,
                          enabled=descriptor.enabled, has_key=descriptor.has_key)
                continue

            t0 = time.perf_counter()
            try:
                candidates = await asyncio.wait_for(
                    descriptor.invoker.invoke(request, self.provider_timeout),
                    timeout=self.provider_timeout,
                )
            except ProviderUnavailable as e:
                log.debug("Provider reported unavailable", provider=descriptor.name, reason=str(e))
                continue
            except ProviderCallFailed as e:
                log.warning("Provider call failed, trying next", provider=descriptor.name,
                            kind=e.kind, error=str(e))
                continue
            except asyncio.TimeoutError:
                log.warning("Provider call timed out, trying next", provider=descriptor.name,
                            timeout_s=self.provider_timeout)
                continue

            elapsed = 1000 * (time.perf_counter() - t0)
            log.info("Provider succeeded", provider=descriptor.name,
                     count=len(candidates), elapsed_ms=round(elapsed, 1))
            return candidates, descriptor.name

        log.info("No provider succeeded, using local templates", session_key=request.session_key)
        return self._local_candidates(request), LOCAL_PROVIDER

    def _local_candidates(self, request: GenerationRequest) -> List[WordCandidate]:
        session_key = request.session_key
        excluded = set(request.exclusions) | self.ledger.seen(session_key)

        # Small pools (topic tables) reset once half of them is used up.
        available = count_unused(request, request.exclusions)
        threshold = min(self.ledger_reset_threshold, max(1, available // 2))
        unused = count_unused(request, excluded)
        # Nothing to recycle when the pool itself is empty.
        if available and unused < threshold:
            # Session exhausted: forget what was shown, keep only the caller's known words.
            log.info("Template pool nearly exhausted, resetting session ledger",
                     session_key=session_key, unused=unused, threshold=threshold)
            self.ledger.reset(session_key)
            excluded = set(request.exclusions)

        return self.local_generator(request, excluded)

    def _filter_and_record(self, request: GenerationRequest, raw: List[WordCandidate],
                           provider_used: str) -> GenerationResult:
        session_key = request.session_key
        seen = self.ledger.seen(session_key)

        novel, dropped = [], []
        batch_keys = set()
        for candidate in raw:
            keys = candidate.keys()
            if any(k in request.exclusions or k in seen or k in batch_keys for k in keys):
                dropped.append(candidate)
                continue
            if len(novel) >= request.count:
                break
            batch_keys.update(keys)
            novel.append(candidate)

        if not novel:
            log.info("All candidates were duplicates", provider=provider_used,
                     session_key=session_key, topic=request.topic, returned=len(raw))
            raise AllDuplicates(provider_used, request.topic)

        # Words the caller already had are recorded too, alongside the surfaced ones.
        self.ledger.merge(session_key, novel + dropped)
        log.info("Generation completed", provider=provider_used, session_key=session_key,
                 returned=len(raw), novel=len(novel))
        return GenerationResult(candidates=novel, provider_used=provider_used, topic=request.topic)
