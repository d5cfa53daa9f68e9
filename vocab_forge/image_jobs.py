"""Asynchronous image jobs: submit, poll until a terminal state, fall back on failure.

Image generation must never block word generation, so ``ImageJobRunner``
always resolves to an image reference: the generated image, a stock photo, or
one of ``FALLBACK_IMAGES``.
"""

import asyncio
import random
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import aiohttp
import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from .config import (
    IMAGE_MAX_POLL_ATTEMPTS,
    IMAGE_POLL_INTERVAL,
    IMAGE_REQUEST_TIMEOUT,
    IMAGE_SIZE,
    IMAGE_STYLE,
    LEONARDO_MODEL,
    MAX_PARALLEL_IMAGE_JOBS,
)
from .errors import ImageJobError, ImageJobFailed, ImageJobTimedOut
from .models import ImageJob, ImageJobStatus, ImageResult, WordCandidate
from .prompts import build_image_prompt
from .utils import stable_seed

log = structlog.get_logger()

FALLBACK_IMAGES = [
    "https://images.pexels.com/photos/102104/pexels-photo-102104.jpeg?w=400&h=300&fit=crop",
    "https://images.pexels.com/photos/1108099/pexels-photo-1108099.jpeg?w=400&h=300&fit=crop",
    "https://images.pexels.com/photos/106399/pexels-photo-106399.jpeg?w=400&h=300&fit=crop",
    "https://images.pexels.com/photos/159711/books-bookstore-book-reading-159711.jpeg?w=400&h=300&fit=crop",
    "https://images.pexels.com/photos/1239291/pexels-photo-1239291.jpeg?w=200&h=200&fit=crop&crop=face",
]

StockSearch = Callable[..., Awaitable[List[str]]]


def parse_size(size: str) -> Tuple[int, int]:
    """'512x512' -> (512, 512)."""
    try:
        width, height = (int(part) for part in size.lower().split("x"))
    except ValueError:
        raise ValueError(f"Unsupported image size {size!r}") from None
    return width, height


class ImageProvider(ABC):
    """Boundary to an asynchronous image generation service."""

    name = ""

    @abstractmethod
    async def submit(self, prompt: str, style: str, width: int, height: int) -> str:
        """Create a job and return its id."""

    @abstractmethod
    async def poll(self, job_id: str) -> Tuple[ImageJobStatus, Optional[str]]:
        """Return the job status and, when complete, the image URL."""


class LeonardoImageProvider(ImageProvider):
    """Leonardo.ai generations API."""

    name = "leonardo"
    API_BASE_URL = "https://cloud.leonardo.ai/api/rest/v1"

    MODELS = {
        "leonardo-xl": {"id": "6bef9f1b-29cb-40c7-b9df-32b51c1f67d3", "name": "Leonardo Diffusion XL"},
        "leonardo-diffusion": {"id": "ac614f96-1082-45bf-be9d-757f2d31c174", "name": "Leonardo Diffusion"},
        "leonardo-creative": {"id": "e316348f-7773-490e-adcd-46757c738eb7", "name": "Leonardo Creative"},
        "flux": {
            "id": "b2614463-296c-462a-9586-aafdb8f00e36",
            "name": "FLUX",
            "styleUUID": "111dc692-d470-4eec-b791-3475abac4c46",
        },
    }

    STATUS_MAP = {
        "PENDING": ImageJobStatus.RUNNING,
        "COMPLETE": ImageJobStatus.COMPLETE,
        "FAILED": ImageJobStatus.FAILED,
    }

    def __init__(self, api_key: str, model: str = LEONARDO_MODEL,
                 request_timeout: float = IMAGE_REQUEST_TIMEOUT):
        self.api_key = api_key
        self.model = model if model in self.MODELS else "flux"
        self.request_timeout = request_timeout

    def _headers(self):
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, prompt: str, width: int, height: int) -> dict:
        model = self.MODELS[self.model]
        payload = {
            "prompt": prompt,
            "modelId": model["id"],
            "width": width,
            "height": height,
            "num_images": 1,
            "seed": stable_seed(prompt) & 0x7FFFFFFF,
        }
        if self.model == "flux":
            payload.update(contrast=3.5, ultra=True, enhancePrompt=True, styleUUID=model["styleUUID"])
        else:
            payload["guidance_scale"] = 4
        return payload

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=1, max=5, jitter=1),
        retry=retry_if_exception_type(aiohttp.ClientConnectorError),
        reraise=True,
    )
    async def submit(self, prompt: str, style: str, width: int, height: int) -> str:
        # Only connection failures are retried: no job can exist yet.
        payload = self.build_payload(prompt, width, height)
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(f"{self.API_BASE_URL}/generations",
                                    headers=self._headers(), json=payload) as response:
                if response.status != 200:
                    body = await response.text()
                    raise ImageJobFailed(None, f"submit failed with HTTP {response.status}: {body[:200]}")
                data = await response.json()

        job_id = (data.get("sdGenerationJob") or {}).get("generationId")
        if not job_id:
            raise ImageJobFailed(None, "no generation job created")
        log.info("Image job submitted", provider=self.name, job_id=job_id, style=style)
        return job_id

    async def poll(self, job_id: str) -> Tuple[ImageJobStatus, Optional[str]]:
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(f"{self.API_BASE_URL}/generations/{job_id}",
                                   headers=self._headers()) as response:
                if response.status != 200:
                    raise ImageJobFailed(job_id, f"poll failed with HTTP {response.status}")
                data = await response.json()
        return self.parse_status(job_id, data)

    def parse_status(self, job_id: str, data: dict) -> Tuple[ImageJobStatus, Optional[str]]:
        generation = data.get("generations_by_pk")
        if not generation:
            raise ImageJobFailed(job_id, "generation not found")
        status = self.STATUS_MAP.get(generation.get("status"), ImageJobStatus.RUNNING)
        images = generation.get("generated_images") or []
        url = images[0].get("url") if images else None
        return status, url


class ImageJobRunner:
    """Runs one polled job per prompt and always resolves to an image reference."""

    def __init__(self,
                 provider: Optional[ImageProvider] = None,
                 poll_interval: float = IMAGE_POLL_INTERVAL,
                 max_poll_attempts: int = IMAGE_MAX_POLL_ATTEMPTS,
                 request_timeout: float = IMAGE_REQUEST_TIMEOUT,
                 deadline: Optional[float] = None,
                 image_size: str = IMAGE_SIZE,
                 stock_search: Optional[StockSearch] = None,
                 fallback_images: Sequence[str] = FALLBACK_IMAGES,
                 max_parallel: int = MAX_PARALLEL_IMAGE_JOBS,
                 rng: Optional[random.Random] = None,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        if max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be at least 1")
        if not fallback_images:
            raise ValueError("at least one fallback image is required")
        self.provider = provider
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self.request_timeout = request_timeout
        # Overall budget for one job's polling task.
        self.deadline = deadline if deadline is not None else (
            poll_interval * max_poll_attempts + request_timeout * 2
        )
        self.width, self.height = parse_size(image_size)
        self.stock_search = stock_search
        self.fallback_images = list(fallback_images)
        self.max_parallel = max(1, max_parallel)
        self.rng = rng or random.Random()
        self._sleep = sleep

    async def generate_image(self, prompt: str, style: str = IMAGE_STYLE,
                             query: Optional[str] = None) -> ImageResult:
        """Generate one image. ``query`` is used for the stock photo fallback."""
        job = ImageJob(prompt=prompt, style=style)

        if self.provider is None:
            log.debug("No image provider configured, using fallback image")
            job.transition(ImageJobStatus.FAILED)
            return await self._fallback(job, query)

        try:
            job.id = await asyncio.wait_for(
                self.provider.submit(prompt, style, self.width, self.height),
                timeout=self.request_timeout,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.warning("Image job submission failed", error=str(e), prompt=prompt[:80])
            job.transition(ImageJobStatus.FAILED)
            return await self._fallback(job, query)

        try:
            await asyncio.wait_for(self._poll_until_terminal(job), timeout=self.deadline)
        except asyncio.TimeoutError:
            if not job.status.is_terminal:
                job.transition(ImageJobStatus.TIMED_OUT)
            error = ImageJobTimedOut(job.id, f"deadline of {self.deadline}s exceeded")
        except ImageJobError as e:
            error = e
        else:
            log.info("Image job complete", job_id=job.id, polls=job.poll_count)
            return ImageResult(prompt=prompt, image_url=job.image_url, source=self.provider.name,
                               status=job.status, job_id=job.id)

        log.warning("Image job did not complete, using fallback",
                    job_id=job.id, status=job.status.value, polls=job.poll_count, error=str(error))
        return await self._fallback(job, query)

    async def _poll_until_terminal(self, job: ImageJob) -> None:
        """Returns once the job is complete, raises ``ImageJobError`` otherwise."""
        for attempt in range(1, self.max_poll_attempts + 1):
            job.poll_count = attempt
            try:
                status, url = await asyncio.wait_for(self.provider.poll(job.id),
                                                     timeout=self.request_timeout)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # Polling is safe to repeat; a failed poll just uses up a cycle.
                log.debug("Image poll failed", job_id=job.id, attempt=attempt, error=str(e))
            else:
                if status == ImageJobStatus.COMPLETE and url:
                    job.transition(ImageJobStatus.COMPLETE, url)
                    return
                if status == ImageJobStatus.FAILED:
                    job.transition(ImageJobStatus.FAILED)
                    raise ImageJobFailed(job.id, "provider reported failure")
                if status == ImageJobStatus.RUNNING and job.status == ImageJobStatus.PENDING:
                    job.transition(ImageJobStatus.RUNNING)

            if attempt < self.max_poll_attempts:
                await self._sleep(self.poll_interval)

        job.transition(ImageJobStatus.TIMED_OUT)
        raise ImageJobTimedOut(job.id, f"not complete after {self.max_poll_attempts} polls")

    async def _fallback(self, job: ImageJob, query: Optional[str]) -> ImageResult:
        if self.stock_search is not None and query:
            urls = await self.stock_search(query, count=1)
            if urls:
                return ImageResult(prompt=job.prompt, image_url=urls[0], source="pexels",
                                   status=job.status, job_id=job.id)
        return self.static_fallback(job.prompt, job.status, job.id)

    def static_fallback(self, prompt: str, status: ImageJobStatus = ImageJobStatus.FAILED,
                        job_id: Optional[str] = None) -> ImageResult:
        return ImageResult(prompt=prompt, image_url=self.rng.choice(self.fallback_images),
                           source="fallback", status=status, job_id=job_id)

    async def generate_images(self, candidates: Sequence[WordCandidate],
                              style: str = IMAGE_STYLE) -> List[ImageResult]:
        """One concurrent job per candidate. Output is aligned with the input."""
        semaphore = asyncio.Semaphore(self.max_parallel)

        async def run_one(candidate: WordCandidate) -> ImageResult:
            word = candidate.gloss or candidate.term
            async with semaphore:
                return await self.generate_image(build_image_prompt(word, style), style, query=word)

        results = await asyncio.gather(*(run_one(c) for c in candidates), return_exceptions=True)

        images = []
        for candidate, result in zip(candidates, results):
            if isinstance(result, BaseException):
                log.error("Image job crashed, using fallback", term=candidate.term, error=str(result))
                result = self.static_fallback(build_image_prompt(candidate.gloss or candidate.term, style))
            images.append(result)
        log.info("Image batch completed", count=len(images),
                 generated=sum(1 for i in images if not i.is_fallback))
        return images
