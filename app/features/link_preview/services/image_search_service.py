import re
from typing import List, Optional, Sequence

import httpx

from app.features.link_preview.schemas.link_preview import (
    ErrorKind,
    ImageSearchResult,
    PipelineError,
    PipelineStage,
)
from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger(__name__)

SPECIAL_CHARS_PATTERN = re.compile(r"[&/\\#,+()$~%.'\":*?<>{}|—]")

# Positions (in the growing list) where root-domain images are spliced in
ROOT_DOMAIN_INSERT_POSITIONS = (2, 5, 10, 15, 20)


def build_page_search_string(title: str, sld: str) -> str:
    """
    Derive an image query from a page title.

    Every case-insensitive occurrence of `sld` is removed first; if nothing
    but whitespace would remain the original title is used. Special
    characters are then replaced by spaces and the result trimmed.
    """
    search_string = title
    if sld:
        stripped = re.sub(re.escape(sld), "", title, flags=re.IGNORECASE)
        if stripped.strip():
            search_string = stripped

    return SPECIAL_CHARS_PATTERN.sub(" ", search_string).strip()


def merge_image_results(page_images: Sequence[str], root_domain_images: Sequence[str]) -> List[str]:
    """Splice the first root-domain images into the page results at fixed positions."""
    merged = list(page_images)
    for source_index, position in enumerate(ROOT_DOMAIN_INSERT_POSITIONS):
        if source_index >= len(root_domain_images):
            break
        merged.insert(position, root_domain_images[source_index])
    return merged


class ImageSearchService:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    def _error(self, query: str, stage: PipelineStage, message: str, **detail) -> ImageSearchResult:
        logger.warning(f"Image search for {query!r} failed: {message}")
        return ImageSearchResult(
            query=query,
            error=PipelineError(
                kind=ErrorKind.IMAGE_SEARCH_ERROR,
                stage=stage,
                message=message,
                detail=detail or None,
            ),
        )

    async def search(self, query: str, stage: PipelineStage) -> ImageSearchResult:
        """Query Bing Image Search and return content URLs in ranked order."""
        if not query:
            return self._error(query, stage, "No search string for image")

        if not settings.AZURE_BING_SEARCH_KEY:
            return self._error(query, stage, "Image search API key is not configured")

        params = {"q": query, "aspect": settings.IMAGE_SEARCH_ASPECT}
        if settings.IMAGE_SEARCH_COUNT:
            params["count"] = settings.IMAGE_SEARCH_COUNT

        try:
            async with httpx.AsyncClient(
                timeout=settings.IMAGE_SEARCH_TIMEOUT,
                transport=self.transport,
            ) as client:
                response = await client.get(
                    settings.BING_IMAGE_SEARCH_URL,
                    params=params,
                    headers={"Ocp-Apim-Subscription-Key": settings.AZURE_BING_SEARCH_KEY},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            return self._error(
                query,
                stage,
                f"Image search returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            )
        except httpx.HTTPError as e:
            return self._error(query, stage, f"Image search request failed: {str(e) or type(e).__name__}")
        except ValueError as e:
            return self._error(query, stage, f"Image search returned invalid JSON: {str(e)}")

        values = payload.get("value") if isinstance(payload, dict) else None
        if not isinstance(values, list):
            return self._error(query, stage, "Image search response has no results")

        results = [item["contentUrl"] for item in values if isinstance(item, dict) and item.get("contentUrl")]
        logger.info(f"Image search for {query!r} returned {len(results)} results")
        return ImageSearchResult(query=query, results=results)
