import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.response import api_response


class LinkPreviewError(Exception):
    """Request-level failure that aborts the pipeline with an error envelope."""

    kind = "link_preview_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Link preview failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(LinkPreviewError):
    kind = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Only one url can be checked"


class InvalidUrlError(LinkPreviewError):
    kind = "invalid_url"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid web url"


class MethodNotAllowedError(LinkPreviewError):
    kind = "method_not_allowed"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"Method {method} not allowed")


# Root domain resolution failures abort the whole request
class RootDomainNotFoundError(LinkPreviewError):
    kind = "root_domain_not_found"
    default_message = "Root domain not found"


class SldNotFoundError(LinkPreviewError):
    kind = "sld_not_found"
    default_message = "sld not found"


class DomainParseError(LinkPreviewError):
    kind = "domain_parse_error"
    default_message = "Domain could not be parsed"


def add_exception_handlers(app):
    @app.exception_handler(LinkPreviewError)
    async def link_preview_exception_handler(request: Request, exc: LinkPreviewError):
        if exc.status_code >= 500:
            logging.error(f"{exc.kind}: {exc.message} ({request.url.path})")
        return api_response(error=exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(error=str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            error="Validation failed",
            errors=exc.errors(),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.exception(f"Unhandled exception: {exc}")
        return api_response(
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
