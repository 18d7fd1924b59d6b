import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from commentcard.core.errors import RenderError
from commentcard.models.schemas import Comment, StyleConfig
from commentcard.services.layout_composer import compose
from commentcard.services.renderers import browser_renderer
from commentcard.services.renderers.browser_renderer import BrowserRenderer
from commentcard.services.renderers.html_template import build_card_html

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake"


class _FakePlaywrightManager:
    def __init__(self, playwright):
        self.playwright = playwright

    async def __aenter__(self):
        return self.playwright

    async def __aexit__(self, *exc):
        return False


@pytest.fixture
def comment(sample_item):
    return Comment.model_validate(sample_item)


@pytest.fixture
def fake_browser(monkeypatch):
    card = MagicMock()
    card.screenshot = AsyncMock(return_value=FAKE_PNG)

    page = MagicMock()
    page.set_content = AsyncMock()
    page.evaluate = AsyncMock(return_value=True)
    page.query_selector = AsyncMock(return_value=card)

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    monkeypatch.setattr(browser_renderer, "async_playwright", lambda: _FakePlaywrightManager(playwright))
    browser.page = page
    browser.context = context
    return browser


@pytest.mark.asyncio
async def test_screenshot_and_close(fake_browser, comment):
    layout = compose(StyleConfig(scale=2), "hello")
    png = await BrowserRenderer(timeout=5, max_concurrency=1).render(layout, "hello", comment)

    assert png == FAKE_PNG
    fake_browser.close.assert_awaited_once()
    fake_browser.context.close.assert_awaited_once()
    kwargs = fake_browser.new_context.await_args.kwargs
    assert kwargs["device_scale_factor"] == 2
    fake_browser.page.query_selector.assert_awaited_once_with(".card")


@pytest.mark.asyncio
async def test_missing_card_element_closes_browser(fake_browser, comment):
    fake_browser.page.query_selector.return_value = None
    layout = compose(StyleConfig(), "hello")

    with pytest.raises(RenderError) as exc_info:
        await BrowserRenderer(timeout=5).render(layout, "hello", comment)
    assert exc_info.value.message == "Error generating image"
    fake_browser.close.assert_awaited_once()
    fake_browser.context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_timeout_closes_browser(fake_browser, comment):
    async def hang(*args, **kwargs):
        await asyncio.sleep(10)

    fake_browser.page.set_content.side_effect = hang
    layout = compose(StyleConfig(), "hello")

    with pytest.raises(RenderError):
        await BrowserRenderer(timeout=0.05).render(layout, "hello", comment)
    fake_browser.close.assert_awaited_once()
    fake_browser.context.close.assert_awaited_once()


def test_html_escapes_user_content(comment):
    layout = compose(StyleConfig(), "<script>alert(1)</script>")
    html = build_card_html(layout, "<script>alert(1)</script>", comment)
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


def test_html_uses_css_pixels_and_alignment(comment):
    layout = compose(StyleConfig(scale=2, vertical_align="end"), "hello")
    html = build_card_html(layout, "hello", comment)
    assert f"width: {layout.width / 2:.2f}px" in html
    assert "justify-content: flex-end" in html
    assert "42 likes" in html


def test_html_hides_optional_rows(comment):
    layout = compose(StyleConfig(show_author_image=False, show_like_count=False), "hello")
    html = build_card_html(layout, "hello", comment)
    assert 'class="avatar"' not in html
    assert "likes" not in html
