"""Caller-facing entry point: words first, images after."""

from typing import Dict, List, Optional, Sequence

import structlog

from .config import (
    GENERATION_COOLDOWN_SECONDS,
    IMAGE_MAX_POLL_ATTEMPTS,
    IMAGE_POLL_INTERVAL,
    IMAGE_REQUEST_TIMEOUT,
    IMAGE_SIZE,
    IMAGE_STYLE,
    LEDGER_RESET_THRESHOLD,
    LEONARDO_API_KEY,
    LEONARDO_ENABLED,
    LEONARDO_MODEL,
    MAX_GENERATION_ATTEMPTS,
    MAX_PARALLEL_IMAGE_JOBS,
    PEXELS_API_KEY,
    PROVIDER_SETTINGS,
    PROVIDER_TIMEOUT_SECONDS,
)
from .cooldown import DEFAULT_CALLER, CooldownGuard
from .image_jobs import ImageJobRunner, LeonardoImageProvider
from .ledger import DedupLedger
from .models import GeneratedCard, GenerationRequest, GenerationResult, ImageResult, WordCandidate
from .orchestrator import GenerationOrchestrator
from .pexels_client import search_pexels_images
from .providers import build_invoker
from .registry import ProviderDescriptor, ProviderRegistry
from .rotation import TopicRotationPolicy
from .utils import has_credential

log = structlog.get_logger()


class VocabPipeline:
    """Composes the orchestrator, topic rotation and image runner.

    Only ``RotationExhausted`` and ``Busy`` escape ``generate``; everything
    else is absorbed by a fallback.
    """

    def __init__(self,
                 orchestrator: GenerationOrchestrator,
                 image_runner: Optional[ImageJobRunner] = None,
                 rotation: Optional[TopicRotationPolicy] = None,
                 max_attempts: int = MAX_GENERATION_ATTEMPTS):
        self.orchestrator = orchestrator
        self.image_runner = image_runner or ImageJobRunner()
        self.rotation = rotation or TopicRotationPolicy(orchestrator)
        self.max_attempts = max_attempts

    @property
    def registry(self) -> ProviderRegistry:
        return self.orchestrator.registry

    @property
    def ledger(self) -> DedupLedger:
        return self.orchestrator.ledger

    async def generate(self, request: GenerationRequest,
                       caller_id: str = DEFAULT_CALLER,
                       max_attempts: Optional[int] = None) -> GenerationResult:
        attempts = max_attempts if max_attempts is not None else self.max_attempts
        log.info("Generating words",
                 session_key=request.session_key,
                 topic=request.topic,
                 count=request.count,
                 exclusions=len(request.exclusions),
                 caller_id=caller_id)
        return await self.rotation.generate_with_rotation(request, max_attempts=attempts,
                                                          caller_id=caller_id)

    async def generate_images(self, candidates: Sequence[WordCandidate],
                              style: str = IMAGE_STYLE) -> List[ImageResult]:
        return await self.image_runner.generate_images(candidates, style)

    async def generate_cards(self, request: GenerationRequest,
                             with_images: bool = True,
                             style: str = IMAGE_STYLE,
                             caller_id: str = DEFAULT_CALLER) -> List[GeneratedCard]:
        """Generate words, then illustrate them. Words never wait on a failing image."""
        result = await self.generate(request, caller_id=caller_id)
        if not with_images:
            return [GeneratedCard(word=c) for c in result.candidates]

        images = await self.generate_images(result.candidates, style)
        return [GeneratedCard(word=c, image=i) for c, i in zip(result.candidates, images)]

    def reset_session(self, session_key: Optional[str] = None) -> None:
        self.ledger.reset(session_key)

    def usage_stats(self) -> Dict[str, int]:
        return self.ledger.usage_stats()

    def provider_status(self) -> Dict[str, Dict[str, object]]:
        status = self.registry.status()
        provider = self.image_runner.provider
        status["images"] = {
            "provider": provider.name if provider else None,
            "available": provider is not None,
            "stock_fallback": self.image_runner.stock_search is not None,
        }
        return status


def build_registry(settings: Optional[Dict[str, dict]] = None) -> ProviderRegistry:
    """Registry of every known provider, ranked by the configured priority."""
    settings = settings if settings is not None else PROVIDER_SETTINGS
    registry = ProviderRegistry()
    for name, options in settings.items():
        credential = options.get("credential")
        registry.register(ProviderDescriptor(
            name=name,
            priority=options.get("priority", 100),
            invoker=build_invoker(name, credential),
            enabled=options.get("enabled", True),
            credential=credential,
        ))

    available = [d.name for d in registry.list_by_priority() if d.is_available()]
    log.info("Provider registry built", providers=len(registry), available=available)
    return registry


def build_image_runner(with_images: bool = True) -> ImageJobRunner:
    provider = None
    if with_images and LEONARDO_ENABLED and has_credential(LEONARDO_API_KEY):
        provider = LeonardoImageProvider(LEONARDO_API_KEY, model=LEONARDO_MODEL,
                                         request_timeout=IMAGE_REQUEST_TIMEOUT)
    stock_search = search_pexels_images if has_credential(PEXELS_API_KEY) else None
    return ImageJobRunner(
        provider=provider,
        poll_interval=IMAGE_POLL_INTERVAL,
        max_poll_attempts=IMAGE_MAX_POLL_ATTEMPTS,
        request_timeout=IMAGE_REQUEST_TIMEOUT,
        image_size=IMAGE_SIZE,
        stock_search=stock_search,
        max_parallel=MAX_PARALLEL_IMAGE_JOBS,
    )


def build_pipeline(registry: Optional[ProviderRegistry] = None,
                   cooldown_seconds: float = GENERATION_COOLDOWN_SECONDS,
                   max_attempts: int = MAX_GENERATION_ATTEMPTS,
                   with_images: bool = True) -> VocabPipeline:
    """Wire a pipeline from configuration."""
    orchestrator = GenerationOrchestrator(
        registry if registry is not None else build_registry(),
        ledger=DedupLedger(),
        guard=CooldownGuard(cooldown_seconds),
        provider_timeout=PROVIDER_TIMEOUT_SECONDS,
        ledger_reset_threshold=LEDGER_RESET_THRESHOLD,
    )
    return VocabPipeline(orchestrator, image_runner=build_image_runner(with_images),
                         max_attempts=max_attempts)
