from typing import List, Optional

from app.features.link_preview.schemas.link_preview import (
    ImageSearchResult,
    LinkPreviewOutcome,
    MetaTags,
    PipelineError,
    PipelineStage,
    PreviewResult,
    RootDomain,
)
from app.features.link_preview.services.domain_service import DomainService
from app.features.link_preview.services.image_search_service import (
    ImageSearchService,
    build_page_search_string,
    merge_image_results,
)
from app.features.link_preview.services.scraper_service import ScraperService
from app.platform.logger import get_logger

logger = get_logger(__name__)


class LinkPreviewService:
    """
    Builds a link preview for an already validated target URL.

    Stages run in order: root domain resolution, root-domain image search,
    metadata scrape, page-specific image search, assembly. Only root domain
    resolution raises; every later failure is recorded and the richest
    available result is returned.
    """

    def __init__(
        self,
        scraper: Optional[ScraperService] = None,
        image_search: Optional[ImageSearchService] = None,
    ):
        self.scraper = scraper or ScraperService()
        self.image_search = image_search or ImageSearchService()

    async def search_root_domain_images(self, root_domain: RootDomain) -> ImageSearchResult:
        return await self.image_search.search(root_domain.sld, PipelineStage.ROOT_DOMAIN_SEARCH)

    async def search_page_images(self, meta_tags: MetaTags, root_domain: RootDomain) -> Optional[ImageSearchResult]:
        """Returns None when the title has nothing to search for."""
        if not meta_tags.title.strip():
            logger.info(f"No usable title for {meta_tags.url}, skipping page image search")
            return None

        query = build_page_search_string(meta_tags.title, root_domain.sld)
        return await self.image_search.search(query, PipelineStage.PAGE_SEARCH)

    async def build_preview(self, target_url: str) -> LinkPreviewOutcome:
        root_domain = DomainService.get_root_domain(target_url)
        errors: List[PipelineError] = []

        root_search = await self.search_root_domain_images(root_domain)
        if root_search.error:
            errors.append(root_search.error)

        scrape = await self.scraper.scrape_meta_tags(target_url)
        if not scrape.data:
            errors.extend(scrape.errors)
            return self.assemble(None, root_search, None, errors)

        page_search = await self.search_page_images(scrape.data, root_domain)
        if page_search and page_search.error:
            errors.append(page_search.error)

        return self.assemble(scrape.data, root_search, page_search, errors)

    @staticmethod
    def assemble(
        meta_tags: Optional[MetaTags],
        root_search: ImageSearchResult,
        page_search: Optional[ImageSearchResult],
        errors: List[PipelineError],
    ) -> LinkPreviewOutcome:
        if page_search and page_search.ok:
            return LinkPreviewOutcome(
                result=PreviewResult(
                    meta_tags=meta_tags,
                    image_search=page_search.query,
                    image_results=merge_image_results(page_search.results, root_search.results),
                ),
                errors=errors or None,
            )

        # Fall back to the root-domain images alone
        return LinkPreviewOutcome(
            result=PreviewResult(
                meta_tags=meta_tags,
                image_search=page_search.query if page_search else root_search.query,
                image_results=list(root_search.results),
            ),
            errors=errors,
        )
