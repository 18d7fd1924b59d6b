"""
Height Estimator: predicts the pixel height of a rendered card.

Real wrapping needs a laid-out font, which we only have after rendering.
Instead every line is assumed to hold `floor(available / (font_size * K))`
characters, and fixed header/footer/spacing allowances are added on top.
The allowances are generous: a little extra whitespace is acceptable,
clipped text is not.

All constants are approximation parameters tuned for common sans-serif
stacks at a 16px reference size, and scale linearly with the font size.
"""
import math

# Average glyph width / font size, sized for the bold body face
CHAR_WIDTH_RATIO = 0.6
DEFAULT_LINE_HEIGHT = 1.5

REFERENCE_FONT_SIZE = 16
HEADER_WITH_AVATAR = 52
HEADER_TEXT_ONLY = 40
FOOTER_HEIGHT = 32
SPACING_BUFFER = 24
MINIMUM_CARD_HEIGHT = 150


def _font_ratio(font_size_px: float) -> float:
    return font_size_px / REFERENCE_FONT_SIZE


def header_height(font_size_px: float, show_header: bool) -> float:
    """Author row: avatar + name/date when shown, name/date alone otherwise."""
    base = HEADER_WITH_AVATAR if show_header else HEADER_TEXT_ONLY
    return base * _font_ratio(font_size_px)


def footer_height(font_size_px: float, show_footer: bool) -> float:
    return FOOTER_HEIGHT * _font_ratio(font_size_px) if show_footer else 0.0


def spacing_buffer(font_size_px: float) -> float:
    return SPACING_BUFFER * _font_ratio(font_size_px)


def minimum_height(font_size_px: float) -> float:
    return MINIMUM_CARD_HEIGHT * _font_ratio(font_size_px)


def chars_per_line(content_width_px: float, font_size_px: float, padding_px: float) -> int:
    available_width = max(1.0, content_width_px - 2 * padding_px)
    avg_char_width = font_size_px * CHAR_WIDTH_RATIO
    return max(1, math.floor(available_width / avg_char_width))


def count_lines(text: str, per_line: int) -> int:
    """Number of rendered lines once each input line is wrapped at `per_line` chars."""
    total = 0
    for line in text.split("\n"):
        if not line.strip():
            total += 1
        else:
            total += max(1, math.ceil(len(line) / per_line))
    return total


def text_block_height(
    text: str,
    content_width_px: float,
    font_size_px: float,
    padding_px: float,
    line_height_multiplier: float = DEFAULT_LINE_HEIGHT,
) -> float:
    per_line = chars_per_line(content_width_px, font_size_px, padding_px)
    return count_lines(text, per_line) * font_size_px * line_height_multiplier


def estimate_height(
    text: str,
    content_width_px: float,
    font_size_px: float,
    padding_px: float,
    show_header: bool,
    show_footer: bool,
    line_height_multiplier: float = DEFAULT_LINE_HEIGHT,
) -> int:
    """
    Predict the total card height for already-normalized text.

    Args:
        text: Normalized comment text (`\\n` separated)
        content_width_px: Card width, padding included
        font_size_px: Body font size
        padding_px: Padding applied on every side
        show_header: Whether the author avatar is shown
        show_footer: Whether the like-count row is shown
        line_height_multiplier: CSS-style line height
    Returns:
        Height in pixels, never below the minimum card height.
    """
    text_height = text_block_height(
        text, content_width_px, font_size_px, padding_px, line_height_multiplier
    )
    content_height = (
        text_height
        + header_height(font_size_px, show_header)
        + footer_height(font_size_px, show_footer)
        + 2 * padding_px
        + spacing_buffer(font_size_px)
    )
    return math.ceil(max(minimum_height(font_size_px), content_height))
