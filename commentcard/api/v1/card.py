"""
Card rendering endpoints.

All variants share one pipeline: decode `data` -> normalize text -> compose
layout -> render with the selected backend. They only differ in which
backend they pick.
"""
import time
from fastapi import APIRouter, Request
from fastapi.responses import Response
from loguru import logger

from commentcard.api.v1.params import parse_comment_data, parse_style_params
from commentcard.config import settings
from commentcard.core.errors import CardServiceError
from commentcard.services.layout_composer import compose
from commentcard.services.renderers.factory import RendererFactory
from commentcard.utils.text_normalizer import normalize

router = APIRouter(tags=["Card"])

# Identical query -> identical image, so clients may cache forever
CACHE_HEADERS = {"Cache-Control": "public, max-age=31536000, immutable"}


async def render_card(request: Request, backend: str) -> Response:
    try:
        renderer = RendererFactory.get(backend)
    except KeyError as e:
        raise CardServiceError(f"Unknown renderer '{backend}'", 404) from e

    query = request.query_params
    comment = parse_comment_data(query.get("data"))
    style = parse_style_params(query)
    text = normalize(comment.snippet.textDisplay)
    layout = compose(style, text)

    started = time.perf_counter()
    png = await renderer.render(layout, text, comment)
    logger.info(
        f"[{renderer.name}] Rendered {layout.width}x{layout.height} card "
        f"({len(png)} bytes) in {time.perf_counter() - started:.2f}s"
    )
    return Response(content=png, media_type="image/png", headers=CACHE_HEADERS)


@router.get("/card-comment")
async def card_comment(request: Request):
    """Render with the configured default backend (Pillow unless overridden)."""
    return await render_card(request, settings.DEFAULT_RENDERER)


@router.get("/card-comment-browser")
async def card_comment_browser(request: Request):
    """Render through headless Chromium."""
    return await render_card(request, "browser")


@router.get("/card-comment/{backend}")
async def card_comment_with_backend(backend: str, request: Request):
    return await render_card(request, backend)
