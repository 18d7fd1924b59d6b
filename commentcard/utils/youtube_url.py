from typing import Optional
from urllib.parse import urlparse, parse_qs

YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com"}


def extract_comment_id(url: str) -> Optional[str]:
    """Return the `lc` (linked comment) id of a YouTube URL, or None."""
    try:
        parsed = urlparse(url.strip())
    except (AttributeError, ValueError):
        return None
    if parsed.hostname not in YOUTUBE_HOSTS:
        return None
    values = parse_qs(parsed.query).get("lc")
    if not values or not values[0]:
        return None
    return values[0]


def validate_youtube_url(url: str) -> bool:
    return extract_comment_id(url) is not None
