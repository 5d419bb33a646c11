from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    FETCH_ERROR = "fetch_error"
    RENDER_ERROR = "render_error"
    IMAGE_SEARCH_ERROR = "image_search_error"


class PipelineStage(str, Enum):
    ROOT_DOMAIN_SEARCH = "root_domain_search"
    FETCH = "fetch"
    RENDER = "render"
    PAGE_SEARCH = "page_search"


class PipelineError(BaseModel):
    """A recoverable failure recorded while building a preview"""
    kind: ErrorKind
    message: str
    stage: PipelineStage
    detail: Optional[Dict[str, Any]] = None


class MetaTags(BaseModel):
    """Social and meta-tag metadata scraped from a page"""
    model_config = ConfigDict(populate_by_name=True)

    url: str
    title: str = ""
    favicon: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    author: Optional[str] = None
    site_name: Optional[str] = Field(default=None, alias="siteName")


class ScrapeResult(BaseModel):
    data: Optional[MetaTags] = None
    errors: List[PipelineError] = Field(default_factory=list)


class RootDomain(BaseModel):
    domain: str  # registrable domain, e.g. "example.com"
    sld: str  # second-level label, e.g. "example"


class ImageSearchResult(BaseModel):
    query: str
    results: List[str] = Field(default_factory=list)
    error: Optional[PipelineError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PreviewResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meta_tags: Optional[MetaTags] = Field(default=None, alias="metaTags")
    image_search: str = Field(default="", alias="imageSearch")
    image_results: List[str] = Field(default_factory=list, alias="imageResults")


class LinkPreviewOutcome(BaseModel):
    """Assembled preview plus whatever went wrong along the way.

    `errors` is None for a full success and a (possibly empty) list for a
    partial one.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "result": {
                    "metaTags": {
                        "url": "https://example.com/article",
                        "title": "Example Article",
                        "description": "An article on example.com",
                    },
                    "imageSearch": "Article",
                    "imageResults": [
                        "https://images.example.net/p0.jpg",
                        "https://images.example.net/p1.jpg",
                        "https://images.example.net/root0.jpg",
                    ],
                },
            }
        }
    )

    result: PreviewResult
    errors: Optional[List[PipelineError]] = None
