"""
Text Normalizer: turns YouTube's `textDisplay` into plain card text.

`textDisplay` carries a small HTML subset (<br>, <a>, <b>, ...) plus character
references. The card renderers only understand plain text with `\\n` line
breaks, so markup is folded into line breaks or dropped, and references are
decoded. Every step runs on the output of the previous one.
"""
import re

_BR = re.compile(r"<br\s*/?>", re.IGNORECASE)
_P_CLOSE = re.compile(r"</p\s*>", re.IGNORECASE)
_P_OPEN = re.compile(r"<p(?:\s[^>]*)?>", re.IGNORECASE)
_BLOCK_CLOSE = re.compile(r"</(?:div|blockquote|h[1-6])\s*>", re.IGNORECASE)
_BLOCK_OPEN = re.compile(r"<(?:div|blockquote|h[1-6])(?:\s[^>]*)?>", re.IGNORECASE)
_INLINE = re.compile(r"</?(?:strong|b|em|i|u|span|a|code|pre)(?:\s[^>]*)?>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]*>")
_EXTRA_BREAKS = re.compile(r"\n{3,}")
_BLANKS_AROUND_BREAK = re.compile(r"[ \t]*\n[ \t]*")
_NUMERIC_REF = re.compile(r"&#(\d+);")
_NAMED_REF = re.compile(r"&([a-z]+);", re.IGNORECASE)

NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
    "hellip": "...",
    "mdash": "—",
    "ndash": "–",
    "rsquo": "’",
    "lsquo": "‘",
    "rdquo": "”",
    "ldquo": "“",
}


def _decode_numeric(match: re.Match) -> str:
    code_point = int(match.group(1))
    # Out-of-range and surrogate code points stay literal
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)
    return chr(code_point)


def _decode_named(match: re.Match) -> str:
    return NAMED_ENTITIES.get(match.group(1).lower(), match.group(0))


def strip_markup(text: str) -> str:
    """Fold block markup into line breaks and drop every other tag."""
    text = _BR.sub("\n", text)
    text = _P_CLOSE.sub("\n\n", text)
    text = _P_OPEN.sub("", text)
    text = _BLOCK_CLOSE.sub("\n", text)
    text = _BLOCK_OPEN.sub("", text)
    text = _INLINE.sub("", text)
    return _ANY_TAG.sub("", text)


def decode_entities(text: str) -> str:
    """Decode `&#N;` references, then the fixed table of named ones."""
    text = _NUMERIC_REF.sub(_decode_numeric, text)
    return _NAMED_REF.sub(_decode_named, text)


def normalize(raw: str) -> str:
    """
    Convert raw comment text into display-ready plain text.

    Args:
        raw: Comment text, possibly containing HTML tags and references.
    Returns:
        Trimmed text using `\\n` as the only line separator.
    """
    if not raw:
        return ""
    text = strip_markup(raw)
    text = _EXTRA_BREAKS.sub("\n\n", text)
    text = _BLANKS_AROUND_BREAK.sub("\n", text)
    text = decode_entities(text)
    return text.strip()
