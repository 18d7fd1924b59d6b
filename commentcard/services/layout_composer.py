"""
Card Layout Composer: resolves a StyleConfig into a LayoutSpec.

The composer owns every size decision (presets, scale, auto-size, aspect
ratio, vertical alignment) so that the Pillow and browser backends draw the
exact same geometry. It is a pure function of its inputs.
"""
import math
from typing import Optional

from commentcard.core.errors import InputError
from commentcard.models.schemas import ContentBox, LayoutSpec, StyleConfig
from commentcard.utils import height_estimator as est

CARD_SIZES = {
    "small": 400,
    "medium": 600,
    "large": 800,
    "xlarge": 1000,
}
DEFAULT_SIZE = "medium"
DEFAULT_FIXED_HEIGHT = 400


def _round_px(value: float) -> int:
    # Half-up, matching browser pixel rounding
    return int(math.floor(value + 0.5))


def _is_valid_dimension(value: float) -> bool:
    return math.isfinite(value) and value > 0


def resolve_base_width(style: StyleConfig) -> float:
    """Explicit width wins; unknown preset names fall back to medium."""
    if style.width is not None and style.width > 0:
        return style.width
    return CARD_SIZES.get(style.size, CARD_SIZES[DEFAULT_SIZE])


def _content_height_floor(text: str, width: float, font_size: float, padding: float, style: StyleConfig) -> int:
    return est.estimate_height(
        text,
        width,
        font_size,
        padding,
        style.show_author_image,
        style.show_like_count,
    )


def _apply_aspect_ratio(width: float, content_height: float, aspect_ratio: Optional[float]) -> float:
    if aspect_ratio and math.isfinite(aspect_ratio) and aspect_ratio > 0:
        # Content height is a floor, never cropped by the ratio
        return max(width / aspect_ratio, content_height)
    return content_height


def compose(style: StyleConfig, text: str = "", height: Optional[float] = None) -> LayoutSpec:
    """
    Build the LayoutSpec for one card.

    Args:
        style: Unscaled visual parameters
        text: Normalized comment text (drives auto-size and the content box)
        height: Explicit unscaled height, overriding `style.height` for fixed cards
    Returns:
        The resolved, scaled LayoutSpec.
    Raises:
        InputError: Resolved width, or fixed height, is not a positive finite number.
    """
    scale = style.scale
    width = resolve_base_width(style) * scale
    padding = style.padding * scale
    radius = style.card_radius * scale
    font_size = style.effective_font_size * scale

    if not _is_valid_dimension(width) or not all(math.isfinite(v) for v in (padding, radius, font_size)):
        raise InputError("Invalid image size")

    if style.auto_size:
        card_height = _content_height_floor(text, width, font_size, padding, style)
        card_height = _apply_aspect_ratio(width, card_height, style.aspect_ratio)
    else:
        explicit = height if height is not None else style.height
        if explicit is None:
            explicit = DEFAULT_FIXED_HEIGHT
        card_height = explicit * scale
        if not _is_valid_dimension(card_height):
            raise InputError("Invalid image size")
        if style.aspect_ratio:
            content_floor = _content_height_floor(text, width, font_size, padding, style)
            card_height = _apply_aspect_ratio(width, content_floor, style.aspect_ratio)

    final_width = _round_px(width)
    final_height = _round_px(card_height)
    return LayoutSpec(
        width=final_width,
        height=final_height,
        padding=_round_px(padding),
        background_color=style.background_color,
        text_color=style.text_color,
        border_radius=_round_px(radius),
        vertical_align=style.vertical_align,
        header_height=_round_px(est.header_height(font_size, style.show_author_image)),
        footer_height=_round_px(est.footer_height(font_size, style.show_like_count)),
        gap=_round_px(est.spacing_buffer(font_size) / 2),
        font_size=font_size,
        scale=scale,
        show_author_image=style.show_author_image,
        show_like_count=style.show_like_count,
        date_format=style.date_format,
        content_box=_content_box(text, final_width, final_height, font_size, padding, style),
    )


def _content_box(text: str, width: int, height: int, font_size: float, padding: float, style: StyleConfig) -> ContentBox:
    """Place the text block inside the padded card according to `vertical_align`."""
    header = est.header_height(font_size, style.show_author_image)
    footer = est.footer_height(font_size, style.show_like_count)
    gap = est.spacing_buffer(font_size) / 2
    text_height = est.text_block_height(text, width, font_size, padding)

    footer_block = gap + footer if footer else 0.0
    block_height = header + gap + text_height + footer_block
    free_space = max(0.0, height - 2 * padding - block_height)
    offset = {"start": 0.0, "center": free_space / 2, "end": free_space}[style.vertical_align]

    top = padding + offset + header + gap
    bottom_limit = height - padding - footer_block
    return ContentBox(
        x=_round_px(padding),
        y=_round_px(top),
        w=max(0, _round_px(width - 2 * padding)),
        h=max(0, _round_px(min(text_height, bottom_limit - top))),
    )
