import os
import asyncio
import logging
from typing import Any, Callable, Mapping, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from docsmith.errors import BadRequestError, InternalError, NotFoundError, RenderTimeoutError
from docsmith.templates import get_template_module

logger = logging.getLogger(__name__)

RENDER_TIMEOUT_ENV = "RENDER_TIMEOUT_MS"
DEFAULT_RENDER_TIMEOUT_MS = 30000

# Extra time allowed for launching and closing the browser on top of the
# content deadline.
LAUNCH_GRACE_SECONDS = 15


async def _block_navigation(route):
    """Abort anything that would navigate the page away from the set content."""
    if route.request.is_navigation_request():
        await route.abort()
    else:
        await route.continue_()


class RenderService:
    """
    Turns a registered template into a PDF.

    Every call launches its own headless Chromium and closes it before
    returning, on success, failure and timeout alike.
    """

    def __init__(self, timeout_ms: Optional[int] = None, playwright_factory: Callable = async_playwright):
        if timeout_ms is None:
            timeout_ms = int(os.environ.get(RENDER_TIMEOUT_ENV, DEFAULT_RENDER_TIMEOUT_MS))
        self.timeout_ms = timeout_ms
        self.playwright_factory = playwright_factory

    def build_html(self, slug: str, theme: str, field_values: Optional[Mapping[str, Any]]) -> str:
        module = get_template_module(slug)
        if not module:
            raise NotFoundError(f"Document type '{slug}' not found.")

        missing = module.missing_fields(field_values)
        if missing:
            logger.debug(f"[RENDER_PDF] '{slug}' rendered without values for: {', '.join(missing)}")

        html = module.generate(field_values).get(theme)
        if html is None:
            raise BadRequestError(
                f"Invalid theme '{theme}'.",
                {"available_themes": sorted(module.themes)},
            )
        return html

    async def render(self, slug: str, theme: str, field_values: Optional[Mapping[str, Any]]) -> bytes:
        html = self.build_html(slug, theme, field_values)
        return await self.html_to_pdf(html)

    async def html_to_pdf(self, html: str) -> bytes:
        deadline = self.timeout_ms / 1000 + LAUNCH_GRACE_SECONDS
        try:
            return await asyncio.wait_for(self._print(html), timeout=deadline)
        except (PlaywrightTimeoutError, asyncio.TimeoutError) as e:
            logger.error(f"[RENDER_PDF] timed out after {self.timeout_ms} ms: {e}")
            raise RenderTimeoutError("PDF generation timed out.") from e
        except PlaywrightError as e:
            logger.error(f"[RENDER_PDF] browser error: {e}")
            raise InternalError(
                "An internal error occurred during PDF generation.", debug=str(e)
            ) from e

    async def _print(self, html: str) -> bytes:
        async with self.playwright_factory() as playwright:
            browser = await playwright.chromium.launch(headless=True, args=["--no-sandbox"])
            try:
                page = await browser.new_page()
                try:
                    await page.route("**/*", _block_navigation)
                    await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                    return await page.pdf(format="A4", print_background=True)
                finally:
                    await page.close()
            finally:
                await browser.close()
