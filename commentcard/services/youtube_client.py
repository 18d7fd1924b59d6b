"""
Comment Fetch Service - resolves a comment id through the YouTube Data API v3.

API Ref: https://developers.google.com/youtube/v3/docs/comments/list
"""
from typing import Optional

import httpx
from loguru import logger

from commentcard.config import settings
from commentcard.core.errors import UpstreamQuotaError, UpstreamServiceError
from commentcard.models.schemas import Comment
from commentcard.services.quota import QuotaGuard

# Upstream status -> user message (status is reported unchanged)
_ERROR_MESSAGES = {
    400: "Invalid comment ID. Please check the URL and try again.",
    401: "YouTube API authentication failed. Please contact support.",
    403: "YouTube API quota exceeded. Please try again later.",
    404: "Comment not found. Please check the URL and try again.",
}


class YouTubeClient:
    """Fetches comments, counting every upstream call against the daily quota."""

    def __init__(self, quota: Optional[QuotaGuard] = None, api_key: str = None, base_url: str = None):
        self.quota = quota or QuotaGuard()
        self.api_key = api_key if api_key is not None else settings.YOUTUBE_API_KEY
        self.base_url = (base_url or settings.YOUTUBE_API_URL).rstrip("/")

    async def list_comments(self, comment_id: str) -> dict:
        """
        Call `comments.list` for one id.

        Returns:
            The raw upstream JSON body (`{"kind": ..., "items": [...]}`).
        Raises:
            UpstreamQuotaError: Local or upstream quota exhausted.
            UpstreamServiceError: Any other upstream failure, with its status code.
        """
        if not self.api_key:
            logger.error("[YouTube] YOUTUBE_API_KEY is not configured")
            raise UpstreamServiceError("YouTube API key is not configured", 500)

        await self.quota.check_and_increment()

        params = {"part": "snippet", "id": comment_id, "key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=settings.YOUTUBE_TIMEOUT) as client:
                resp = await client.get(f"{self.base_url}/comments", params=params)
        except httpx.TimeoutException as e:
            logger.error(f"[YouTube] Request timed out for {comment_id}: {e}")
            raise UpstreamServiceError("YouTube API did not respond in time. Please try again.", 504)
        except httpx.HTTPError as e:
            logger.error(f"[YouTube] Request failed for {comment_id}: {e}")
            raise UpstreamServiceError("Failed to fetch comment from YouTube API", 502)

        if resp.status_code != 200:
            self._raise_for_status(resp)

        data = resp.json()
        if not data.get("items"):
            logger.info(f"[YouTube] No comment found for id {comment_id}")
            raise UpstreamServiceError(_ERROR_MESSAGES[404], 404)
        return data

    async def get_comment(self, comment_id: str) -> Comment:
        """Fetch and parse the first item of the list response."""
        data = await self.list_comments(comment_id)
        return Comment.model_validate(data["items"][0])

    @staticmethod
    def _raise_for_status(resp: httpx.Response):
        status = resp.status_code
        upstream_message = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            upstream_message = body["error"].get("message")
        logger.warning(f"[YouTube] API error {status}: {upstream_message or resp.text[:200]}")

        if status == 429:
            raise UpstreamQuotaError("Too many requests. Please try again later.")
        if status in _ERROR_MESSAGES:
            raise UpstreamServiceError(_ERROR_MESSAGES[status], status)
        raise UpstreamServiceError(upstream_message or "Failed to fetch comment from YouTube API", status)
