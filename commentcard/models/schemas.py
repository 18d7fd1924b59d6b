from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VerticalAlign = Literal["start", "center", "end"]
DateFormat = Literal["us", "fr"]
# #rgb, #rgba, #rrggbb or #rrggbbaa
HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$"


# ─── Comment (YouTube comments.list item) ────────────────────────

class CommentSnippet(BaseModel):
    """The subset of the YouTube comment snippet a card needs."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    authorDisplayName: str = ""
    authorProfileImageUrl: str = ""
    publishedAt: str = ""
    textDisplay: str
    likeCount: int = Field(default=0, ge=0)


class Comment(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[str] = None
    snippet: CommentSnippet


# ─── Style & Layout ──────────────────────────────────────────────

class StyleConfig(BaseModel):
    """Visual parameters of a card, before scaling."""
    size: str = "medium"
    width: Optional[float] = None
    height: Optional[float] = None
    auto_size: bool = True
    aspect_ratio: Optional[float] = None
    background_color: str = Field(default="#ffffff", pattern=HEX_COLOR_PATTERN)
    text_color: str = Field(default="#000000", pattern=HEX_COLOR_PATTERN)
    card_radius: float = 12
    padding: float = 24
    font_size: float = 16
    font_size_adjustment: float = 0
    scale: float = 2
    show_author_image: bool = True
    show_like_count: bool = True
    vertical_align: VerticalAlign = "center"
    date_format: DateFormat = "us"

    @property
    def effective_font_size(self) -> float:
        return max(1.0, self.font_size + self.font_size_adjustment)


class ContentBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    w: int
    h: int


class LayoutSpec(BaseModel):
    """Fully resolved card geometry, in output pixels."""
    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    padding: int
    background_color: str
    text_color: str
    border_radius: int
    vertical_align: VerticalAlign
    header_height: int
    footer_height: int
    gap: int
    font_size: float
    scale: float
    show_author_image: bool
    show_like_count: bool
    date_format: DateFormat
    content_box: ContentBox


# ─── API payloads ────────────────────────────────────────────────

class GenerateCardRequest(BaseModel):
    """Body of POST /generate; accepts camelCase or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    renderer: str = "pillow"
    size: str = "medium"
    background_color: str = "#ffffff"
    text_color: str = "#000000"
    show_author_image: bool = True
    show_like_count: bool = True
    card_radius: int = 12
    padding: int = 24
    date_format: DateFormat = "fr"
    font_size: int = 16
    scale_factor: int = 2


class GenerateCardResponse(BaseModel):
    previewUrl: Optional[str] = None
    error: Optional[str] = None
