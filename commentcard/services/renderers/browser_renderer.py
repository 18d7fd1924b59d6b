"""
Browser Card Renderer - headless Chromium screenshot pipeline (Playwright).

Higher fidelity than the Pillow backend (real CSS layout, system emoji and
font fallback) at the cost of one browser process per request. The process
is acquired through `browser_session()` and closed on every exit path,
including errors and timeouts.
"""
import asyncio
import contextlib
from typing import AsyncIterator

from loguru import logger
from playwright.async_api import Browser, Error as PlaywrightError, async_playwright

from commentcard.config import settings
from commentcard.core.errors import RenderError
from commentcard.models.schemas import Comment, LayoutSpec
from commentcard.services.renderers.base import RenderBackend
from commentcard.services.renderers.html_template import build_card_html

LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
    '--no-first-run',
    '--no-zygote',
    '--disable-extensions',
    '--disable-background-timer-throttling',
    '--disable-backgrounding-occluded-windows',
    '--disable-renderer-backgrounding',
    '--disable-features=TranslateUI',
]


class BrowserRenderer(RenderBackend):
    """Screenshots the `.card` element of a generated HTML page."""

    name = "browser"

    def __init__(self, executable_path: str = None, timeout: float = None, max_concurrency: int = None):
        self.executable_path = executable_path if executable_path is not None else settings.BROWSER_EXECUTABLE_PATH
        self.timeout = timeout or settings.RENDER_TIMEOUT
        self._semaphore = asyncio.Semaphore(max_concurrency or settings.BROWSER_MAX_CONCURRENCY)

    @contextlib.asynccontextmanager
    async def browser_session(self) -> AsyncIterator[Browser]:
        """Launch one Chromium process and always close it."""
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(
                headless=True,
                args=LAUNCH_ARGS,
                executable_path=self.executable_path or None,
            )
            logger.debug("[BrowserRenderer] Browser launched")
            try:
                yield browser
            finally:
                await browser.close()
                logger.debug("[BrowserRenderer] Browser closed")

    async def render(self, layout: LayoutSpec, text: str, comment: Comment) -> bytes:
        async with self._semaphore:
            try:
                return await asyncio.wait_for(self._screenshot(layout, text, comment), timeout=self.timeout)
            except asyncio.TimeoutError as e:
                logger.error(f"[BrowserRenderer] Render timed out after {self.timeout}s")
                raise RenderError() from e
            except RenderError:
                raise
            except PlaywrightError as e:
                logger.exception(f"[BrowserRenderer] Playwright failure: {e}")
                raise RenderError() from e

    async def _screenshot(self, layout: LayoutSpec, text: str, comment: Comment) -> bytes:
        html = build_card_html(layout, text, comment)
        css_width = layout.width / layout.scale
        css_height = layout.height / layout.scale

        async with self.browser_session() as browser:
            context = await browser.new_context(
                viewport={"width": int(css_width) + 100, "height": max(1200, int(css_height) + 100)},
                device_scale_factor=layout.scale,
            )
            try:
                page = await context.new_page()
                await page.set_content(html, wait_until="networkidle")
                # Fonts and the avatar must be ready before the capture
                await page.evaluate("document.fonts.ready.then(() => true)")

                card = await page.query_selector(".card")
                if card is None:
                    logger.error("[BrowserRenderer] Card element not found in rendered page")
                    raise RenderError()
                return await card.screenshot(type="png", omit_background=True)
            finally:
                await context.close()

