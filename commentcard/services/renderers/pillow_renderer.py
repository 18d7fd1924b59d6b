"""
Pillow Card Renderer
====================

Draws the card straight from the LayoutSpec with PIL.ImageDraw: rounded
background, circular avatar, author/date header, wrapped body text and the
like-count footer. No browser involved, so it is cheap enough to run on every
request.

Drawing is CPU-bound and runs in a worker thread; only the avatar download
happens on the event loop.
"""
import asyncio
import io
from functools import lru_cache
from typing import List, Optional

import httpx
from loguru import logger
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from commentcard.config import settings
from commentcard.core.errors import RenderError
from commentcard.models.schemas import Comment, LayoutSpec
from commentcard.services.renderers import theme
from commentcard.services.renderers.base import RenderBackend
from commentcard.utils.date_format import format_published_date

# Smallest body size (relative to the layout font) used when fitting text
MIN_BODY_SCALE = 0.5


@lru_cache(maxsize=32)
def _load_font(path: str, size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.debug(f"[PillowRenderer] Font {path} unavailable, using Pillow default at {size}px")
        return ImageFont.load_default(size=size)


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    """
    Greedy word wrap using real glyph measurements.

    Existing line breaks are kept; blank lines stay blank. A word wider than
    the box is force-broken between characters.
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if draw.textlength(candidate, font=font) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            # Force break very long words
            current = ""
            for ch in word:
                if current and draw.textlength(current + ch, font=font) > max_width:
                    lines.append(current)
                    current = ch
                else:
                    current += ch
        lines.append(current)
    return lines


def body_bottom(layout: LayoutSpec) -> int:
    """Lowest y the body text may reach (above the footer row when shown)."""
    footer_block = layout.footer_height + layout.gap if layout.show_like_count else 0
    return layout.height - layout.padding - footer_block


class PillowRenderer(RenderBackend):
    """Server-side rasterizer; the lightweight default backend."""

    name = "pillow"

    def __init__(self, font_path: str = None, bold_font_path: str = None, avatar_timeout: float = 10.0):
        self.font_path = font_path or settings.FONT_PATH
        self.bold_font_path = bold_font_path or settings.FONT_BOLD_PATH
        self.avatar_timeout = avatar_timeout

    async def render(self, layout: LayoutSpec, text: str, comment: Comment) -> bytes:
        avatar = None
        if layout.show_author_image and comment.snippet.authorProfileImageUrl:
            avatar = await self._fetch_avatar(comment.snippet.authorProfileImageUrl)
        try:
            return await asyncio.to_thread(self._draw_card, layout, text, comment, avatar)
        except Exception as e:
            logger.exception(f"[PillowRenderer] Drawing failed: {e}")
            raise RenderError() from e

    async def _fetch_avatar(self, url: str) -> Optional[bytes]:
        """Download the author avatar; a failed download just drops the avatar."""
        try:
            async with httpx.AsyncClient(timeout=self.avatar_timeout, follow_redirects=True) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.content
        except httpx.HTTPError as e:
            logger.warning(f"[PillowRenderer] Avatar download failed ({url}): {e}")
            return None

    def _draw_card(self, layout: LayoutSpec, text: str, comment: Comment, avatar: Optional[bytes]) -> bytes:
        img = Image.new("RGBA", (layout.width, layout.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        draw.rounded_rectangle(
            (0, 0, layout.width - 1, layout.height - 1),
            radius=layout.border_radius,
            fill=layout.background_color,
        )

        base_size = max(1, round(layout.font_size))
        meta_size = max(1, round(layout.font_size * theme.META_TEXT_RATIO))
        name_font = _load_font(self.bold_font_path, max(1, round(layout.font_size * theme.AUTHOR_NAME_RATIO)))
        meta_font = _load_font(self.font_path, meta_size)
        muted = theme.muted_color(layout.text_color)
        box = layout.content_box

        # Header
        header_top = max(layout.padding, box.y - layout.gap - layout.header_height)
        text_x = box.x
        if layout.show_author_image:
            diameter = round(layout.header_height * theme.AVATAR_RATIO)
            avatar_y = header_top + (layout.header_height - diameter) // 2
            self._paste_avatar(img, avatar, box.x, avatar_y, diameter, muted)
            text_x = box.x + diameter + round(theme.AVATAR_MARGIN * layout.scale)

        rows_height = base_size * 1.2 + meta_size * 1.2
        name_y = header_top + max(0, (layout.header_height - rows_height) / 2)
        draw.text((text_x, name_y), comment.snippet.authorDisplayName, font=name_font, fill=layout.text_color)
        draw.text(
            (text_x, name_y + base_size * 1.2),
            format_published_date(comment.snippet.publishedAt, layout.date_format),
            font=meta_font,
            fill=muted,
        )

        # Body
        bottom = body_bottom(layout)
        lines, body_font, body_size, line_height = self.fit_body(draw, text, layout, bottom - box.y)
        y = float(box.y)
        for line in lines:
            if y + body_size > bottom:
                logger.warning("[PillowRenderer] Text overflowed the card; truncating")
                break
            draw.text((box.x, y), line, font=body_font, fill=layout.text_color)
            y += line_height

        # Footer
        if layout.show_like_count:
            footer_y = box.y + box.h + layout.gap + (layout.footer_height - meta_size) / 2
            draw.text((box.x, footer_y), f"{comment.snippet.likeCount} likes", font=meta_font, fill=muted)

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    def fit_body(self, draw: ImageDraw.ImageDraw, text: str, layout: LayoutSpec, available_height: float):
        """
        Wrap the body text at the layout font size, stepping the size down
        until every line fits `available_height` (floor: MIN_BODY_SCALE).

        Returns:
            (lines, font, font_size, line_height)
        """
        size = max(1, round(layout.font_size))
        min_size = max(1, round(layout.font_size * MIN_BODY_SCALE))
        while True:
            font = _load_font(self.bold_font_path, size)
            lines = wrap_text(draw, text, font, layout.content_box.w)
            line_height = size * theme.LINE_HEIGHT
            if (len(lines) - 1) * line_height + size <= available_height or size <= min_size:
                break
            size -= 1
        if size < round(layout.font_size):
            logger.debug(f"[PillowRenderer] Body text shrunk to {size}px to fit {len(lines)} lines")
        return lines, font, size, line_height

    @staticmethod
    def _paste_avatar(img: Image.Image, avatar: Optional[bytes], x: int, y: int, diameter: int, fallback: str):
        mask = Image.new("L", (diameter, diameter), 0)
        ImageDraw.Draw(mask).ellipse((0, 0, diameter - 1, diameter - 1), fill=255)

        picture = None
        if avatar:
            try:
                with Image.open(io.BytesIO(avatar)) as source:
                    picture = source.convert("RGBA").resize((diameter, diameter), Image.Resampling.LANCZOS)
            except (UnidentifiedImageError, OSError) as e:
                logger.warning(f"[PillowRenderer] Avatar is not a readable image: {e}")
        if picture is None:
            # Placeholder disc keeps the header layout stable
            picture = Image.new("RGBA", (diameter, diameter), fallback)
        img.paste(picture, (x, y), mask)
