"""
Query-string parsing for the card endpoints.

Every StyleConfig field arrives as a string. Numbers that are missing,
non-numeric or negative fall back to their defaults; booleans are "1"/"0";
unknown enum values fall back to the default member.
"""
import json
import math
import re
from typing import Mapping, Optional

from pydantic import ValidationError

from commentcard.core.errors import InputError
from commentcard.models.schemas import HEX_COLOR_PATTERN, Comment, StyleConfig

_HEX_COLOR = re.compile(HEX_COLOR_PATTERN)
_VERTICAL_ALIGNS = {"start", "center", "end"}
_DATE_FORMATS = {"us", "fr"}


def get_number_param(value: Optional[str], fallback: float) -> float:
    if value is None or value.strip() == "":
        return fallback
    try:
        number = float(value)
    except ValueError:
        return fallback
    if math.isnan(number) or number < 0:
        return fallback
    return number


def get_optional_number(value: Optional[str]) -> Optional[float]:
    number = get_number_param(value, -1.0)
    return None if number < 0 else number


def get_color_param(value: Optional[str], fallback: str) -> str:
    if value and _HEX_COLOR.match(value.strip()):
        return value.strip()
    return fallback


def get_choice_param(value: Optional[str], choices: set, fallback: str) -> str:
    return value if value in choices else fallback


def parse_style_params(query: Mapping[str, str], default_scale: float = 2) -> StyleConfig:
    """Build a StyleConfig from card-endpoint query parameters."""
    height = get_optional_number(query.get("height"))
    auto_flag = query.get("autoSize")
    if auto_flag == "1":
        auto_size = True
    elif auto_flag == "0":
        auto_size = False
    else:
        auto_size = height is None

    aspect_ratio = get_optional_number(query.get("aspectRatio")) or None
    scale_raw = query.get("scale") if query.get("scale") is not None else query.get("scaleFactor")

    adjustment_raw = query.get("fontSizeAdjustment")
    try:
        adjustment = float(adjustment_raw) if adjustment_raw else 0.0
    except ValueError:
        adjustment = 0.0
    if not math.isfinite(adjustment):
        adjustment = 0.0

    return StyleConfig(
        size=query.get("size") or "medium",
        width=get_optional_number(query.get("width")),
        height=height,
        auto_size=auto_size,
        aspect_ratio=aspect_ratio,
        background_color=get_color_param(query.get("backgroundColor"), "#ffffff"),
        text_color=get_color_param(query.get("textColor"), "#000000"),
        card_radius=get_number_param(query.get("cardRadius"), 12),
        padding=get_number_param(query.get("padding"), 24),
        font_size=get_number_param(query.get("fontSize"), 16),
        font_size_adjustment=adjustment,
        scale=get_number_param(scale_raw, default_scale),
        show_author_image=query.get("showAuthorImage") != "0",
        show_like_count=query.get("showLikeCount") != "0",
        vertical_align=get_choice_param(query.get("verticalAlign"), _VERTICAL_ALIGNS, "center"),
        date_format=get_choice_param(query.get("dateFormat"), _DATE_FORMATS, "us"),
    )


def parse_comment_data(data: Optional[str]) -> Comment:
    """
    Decode the `data` parameter (JSON of one comments.list item).

    Raises:
        InputError: Missing, malformed, or not shaped like a comment.
    """
    if not data:
        raise InputError("Missing comment data")
    try:
        return Comment.model_validate(json.loads(data))
    except json.JSONDecodeError:
        raise InputError("Invalid comment data: not valid JSON")
    except ValidationError as e:
        raise InputError(f"Invalid comment data: {e.error_count()} invalid field(s)")
