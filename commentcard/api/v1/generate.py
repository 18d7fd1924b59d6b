"""
Preview URL builder: comment URL + style -> card image URL.
"""
from urllib.parse import urlencode

from fastapi import APIRouter
from loguru import logger

from commentcard.config import settings
from commentcard.core.container import get_youtube_client
from commentcard.core.errors import InputError
from commentcard.models.schemas import Comment, GenerateCardRequest, GenerateCardResponse
from commentcard.utils.youtube_url import extract_comment_id, validate_youtube_url

router = APIRouter(tags=["Generate"])

_CARD_PATHS = {
    "pillow": "/api/v1/card-comment/pillow",
    "browser": "/api/v1/card-comment-browser",
}


def build_preview_url(comment: Comment, req: GenerateCardRequest) -> str:
    """Serialize the comment and style into a card endpoint URL."""
    params = {
        "data": comment.model_dump_json(exclude_none=True),
        "size": req.size,
        "backgroundColor": req.background_color,
        "textColor": req.text_color,
        "showAuthorImage": "1" if req.show_author_image else "0",
        "showLikeCount": "1" if req.show_like_count else "0",
        "cardRadius": str(req.card_radius),
        "padding": str(req.padding),
        "dateFormat": req.date_format,
        "fontSize": str(req.font_size),
        "scaleFactor": str(req.scale_factor),
    }
    path = _CARD_PATHS.get(req.renderer, _CARD_PATHS["pillow"])
    return f"{settings.SITE_URL.rstrip('/')}{path}?{urlencode(params)}"


@router.post("/generate", response_model=GenerateCardResponse)
async def generate_comment_card(req: GenerateCardRequest):
    """
    Resolve a YouTube comment URL (`...watch?v=...&lc=<id>`) and return the
    URL of its rendered card.
    """
    if not req.url:
        raise InputError("YouTube comment URL is required")
    if not validate_youtube_url(req.url):
        raise InputError("Please enter a valid YouTube comment URL")

    comment_id = extract_comment_id(req.url)
    comment = await get_youtube_client().get_comment(comment_id)
    logger.info(f"Built preview URL for comment {comment_id}")
    return GenerateCardResponse(previewUrl=build_preview_url(comment, req))
