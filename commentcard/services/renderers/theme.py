"""Colors and type ratios shared by the Pillow and browser card renderers."""

AUTHOR_NAME_RATIO = 1.0
META_TEXT_RATIO = 0.875
LINE_HEIGHT = 1.5
# Avatar diameter relative to the 52px-at-16px header row
AVATAR_RATIO = 40 / 52
AVATAR_MARGIN = 12


def is_dark(hex_color: str) -> bool:
    """Rough luminance check on a #rgb / #rrggbb color."""
    value = hex_color.lstrip("#")
    if len(value) in (3, 4):
        value = "".join(ch * 2 for ch in value[:3])
    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return True
    return (0.299 * r + 0.587 * g + 0.114 * b) < 128


def muted_color(text_color: str) -> str:
    """Secondary text (date, like count): grey on dark text, translucent white on light text."""
    return "#666666" if is_dark(text_color) else "#ffffffb3"
