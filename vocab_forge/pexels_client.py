"""Pexels API client, used as a stock photo fallback for failed image jobs."""

import aiohttp
import structlog
from typing import List, Optional

from .config import IMAGE_REQUEST_TIMEOUT, PEXELS_API_KEY
from .utils import has_credential

log = structlog.get_logger()

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"


def photo_urls(data: dict, count: int) -> List[str]:
    """Pick one URL per photo, smallest size first."""
    urls = []
    for photo in data.get("photos", [])[:count]:
        src = photo.get("src", {})
        url = src.get("small", src.get("medium", src.get("large")))
        if url:
            urls.append(url)
    return urls


async def search_pexels_images(query: str, count: int = 3,
                               api_key: Optional[str] = None,
                               timeout: float = IMAGE_REQUEST_TIMEOUT) -> List[str]:
    """Search Pexels for images and return URLs. Returns [] on any failure."""
    key = api_key or PEXELS_API_KEY
    if not has_credential(key):
        log.debug("Pexels API key not configured, skipping image search")
        return []

    headers = {"Authorization": key}
    params = {
        "query": query,
        "per_page": count,
        "orientation": "landscape",
        "size": "medium",
    }

    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.get(PEXELS_SEARCH_URL, headers=headers, params=params) as response:
                if response.status != 200:
                    log.error("Pexels API request failed", status=response.status, query=query)
                    return []
                data = await response.json()
    except Exception as e:
        log.error("Pexels search failed", error=str(e), query=query)
        return []

    image_urls = photo_urls(data, count)
    log.info("Pexels search completed", query=query, found=len(image_urls))
    return image_urls
