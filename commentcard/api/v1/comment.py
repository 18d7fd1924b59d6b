"""
Comment fetch endpoint.
"""
from typing import Optional
from fastapi import APIRouter, Query
from loguru import logger

from commentcard.core.container import get_youtube_client
from commentcard.core.errors import InputError

router = APIRouter(tags=["Comment"])


@router.get("/comment")
async def get_comment(comment_id: Optional[str] = Query(default=None, alias="id")):
    """
    Fetch one comment by id.
    Returns the upstream `comments.list` body unchanged.
    """
    if not comment_id:
        raise InputError("Comment ID is required")
    logger.info(f"Fetching comment {comment_id}")
    return await get_youtube_client().list_comments(comment_id)
