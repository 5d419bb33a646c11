import asyncio
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

import httpx
from bs4 import BeautifulSoup
from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.support.ui import WebDriverWait

from app.features.link_preview.schemas.link_preview import (
    ErrorKind,
    MetaTags,
    PipelineError,
    PipelineStage,
    ScrapeResult,
)
from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.utils.url_validator import normalize_url

logger = get_logger(__name__)


class ScraperService:
    """
    Fetches a page's HTML and extracts its meta tags.

    A plain HTTP GET is tried first; when it yields no document the page is
    rendered in headless Chrome instead (JavaScript-rendered or bot-guarded
    sites). Failures on either path are recorded, never raised.
    """

    META_FIELDS = ("description", "image", "author", "site_name")

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def fetch_html(self, url: str) -> Tuple[Optional[str], Optional[PipelineError]]:
        request_url = normalize_url(url)
        try:
            async with httpx.AsyncClient(
                timeout=settings.HTTP_FETCH_TIMEOUT,
                follow_redirects=True,
                headers={"User-Agent": settings.SCRAPER_USER_AGENT},
                transport=self.transport,
            ) as client:
                response = await client.get(request_url)
                response.raise_for_status()
                return response.text or None, None

        except httpx.HTTPStatusError as e:
            # Request made and server responded with an error status
            status_code = e.response.status_code
            logger.warning(f"Fetch of {request_url} returned HTTP {status_code}")
            return None, PipelineError(
                kind=ErrorKind.FETCH_ERROR,
                stage=PipelineStage.FETCH,
                message=f"Server responded with HTTP {status_code}",
                detail={"reason": "response", "status_code": status_code},
            )
        except httpx.RequestError as e:
            # Request was sent but no response was received
            logger.warning(f"No response fetching {request_url}: {e!r}")
            return None, PipelineError(
                kind=ErrorKind.FETCH_ERROR,
                stage=PipelineStage.FETCH,
                message=f"No response received: {str(e) or type(e).__name__}",
                detail={"reason": "no_response"},
            )
        except Exception as e:
            # Something went wrong while setting up the request
            logger.warning(f"Could not build request for {request_url}: {e!r}")
            return None, PipelineError(
                kind=ErrorKind.FETCH_ERROR,
                stage=PipelineStage.FETCH,
                message=f"Request setup failed: {str(e) or type(e).__name__}",
                detail={"reason": "request_setup"},
            )

    @staticmethod
    def build_driver() -> webdriver.Chrome:
        chrome_options = Options()
        chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--disable-gpu")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        # Look like a regular browser to bot-guarded sites
        chrome_options.add_argument("--disable-blink-features=AutomationControlled")
        chrome_options.add_argument(f"--user-agent={settings.SCRAPER_USER_AGENT}")
        chrome_options.add_experimental_option("excludeSwitches", ["enable-automation"])
        chrome_options.add_experimental_option("useAutomationExtension", False)

        if settings.CHROMEDRIVER_PATH:
            driver_service = Service(executable_path=settings.CHROMEDRIVER_PATH)
            return webdriver.Chrome(service=driver_service, options=chrome_options)
        return webdriver.Chrome(options=chrome_options)

    @staticmethod
    @contextmanager
    def headless_browser() -> Iterator[webdriver.Chrome]:
        """Yield a headless Chrome driver that is quit on every exit path."""
        driver = ScraperService.build_driver()
        try:
            yield driver
        finally:
            try:
                driver.quit()
            except WebDriverException as e:
                logger.warning(f"Failed to quit headless browser: {e!r}")

    @staticmethod
    def render_page(url: str) -> Optional[str]:
        """Load `url` in headless Chrome and return the rendered outer HTML."""
        timeout = settings.RENDER_PAGE_LOAD_TIMEOUT
        with ScraperService.headless_browser() as driver:
            driver.set_page_load_timeout(timeout)
            driver.get(url)
            WebDriverWait(driver, timeout).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
            return driver.execute_script(
                "return document.documentElement ? document.documentElement.outerHTML : null"
            )

    async def render_html(self, url: str) -> Tuple[Optional[str], Optional[PipelineError]]:
        try:
            html = await asyncio.to_thread(ScraperService.render_page, url)
            return html or None, None
        except TimeoutException as e:
            message = f"Timeout loading page: {e.msg or 'page did not settle'}"
        except WebDriverException as e:
            message = f"WebDriver error: {e.msg or type(e).__name__}"
        except Exception as e:
            message = f"Unexpected error: {str(e) or type(e).__name__}"

        logger.warning(f"Headless render of {url} failed: {message}")
        return None, PipelineError(
            kind=ErrorKind.RENDER_ERROR,
            stage=PipelineStage.RENDER,
            message=message,
        )

    @staticmethod
    def extract_meta_tags(html: str, url: str) -> MetaTags:
        soup = BeautifulSoup(html, "html.parser")

        def attr(selector: str, name: str) -> Optional[str]:
            element = soup.select_one(selector)
            return element.get(name) if element else None

        def get_metatag(name: str) -> Optional[str]:
            return (
                attr(f'meta[name="{name}"]', "content")
                or attr(f'meta[name="og:{name}"]', "content")
                or attr(f'meta[property="og:{name}"]', "content")
                or attr(f'meta[name="twitter:{name}"]', "content")
                or None
            )

        title = soup.select_one("title")
        fields = {name: get_metatag(name) for name in ScraperService.META_FIELDS}

        return MetaTags(
            url=url,
            title=title.get_text() if title else "",
            favicon=attr('link[rel="shortcut icon"]', "href"),
            **fields,
        )

    async def scrape_meta_tags(self, url: str) -> ScrapeResult:
        errors = []

        html, error = await self.fetch_html(url)
        if error:
            errors.append(error)

        if not html:
            logger.info(f"Falling back to headless render for {url}")
            html, error = await self.render_html(url)
            if error:
                errors.append(error)

        if not html:
            return ScrapeResult(errors=errors)

        return ScrapeResult(data=self.extract_meta_tags(html, url))
