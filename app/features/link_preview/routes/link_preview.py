from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from app.features.link_preview.services.link_preview_service import LinkPreviewService
from app.features.link_preview.services.request_validator import RequestValidator
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)

router = APIRouter(prefix="/link-preview", tags=["Link Preview"])

# Every verb is routed here so unsupported ones get the JSON envelope
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


def get_link_preview_service() -> LinkPreviewService:
    return LinkPreviewService()


def _url_values(request: Request, path_value: Optional[str]) -> List[str]:
    values = [path_value] if path_value else []
    values.extend(request.query_params.getlist("url"))
    return values


async def _handle(request: Request, service: LinkPreviewService, path_value: Optional[str] = None):
    target_url = RequestValidator.validate(_url_values(request, path_value), request.method)

    logger.info(f"Building link preview for {target_url}")
    outcome = await service.build_preview(target_url)

    return api_response(
        result=outcome.result,
        errors=outcome.errors,
        status_code=status.HTTP_200_OK,
    )


@router.api_route("", methods=ROUTED_METHODS)
async def link_preview_from_query(
    request: Request,
    service: LinkPreviewService = Depends(get_link_preview_service),
):
    return await _handle(request, service)


@router.api_route("/{url:path}", methods=ROUTED_METHODS)
async def link_preview(
    url: str,
    request: Request,
    service: LinkPreviewService = Depends(get_link_preview_service),
):
    return await _handle(request, service, url)
