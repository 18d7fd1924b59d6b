"""
HTML/CSS card for the browser backend.

Sizes are written in CSS pixels (LayoutSpec values divided by the scale);
the page is then captured with `device_scale_factor=scale`, so the PNG comes
out at exactly the LayoutSpec dimensions with crisp high-DPI text.
"""
from html import escape

from commentcard.models.schemas import Comment, LayoutSpec
from commentcard.services.renderers import theme
from commentcard.utils.date_format import format_published_date

_JUSTIFY = {"start": "flex-start", "center": "center", "end": "flex-end"}


def _css_px(value: float, scale: float) -> str:
    return f"{value / scale:.2f}px"


def build_card_html(layout: LayoutSpec, text: str, comment: Comment) -> str:
    """Render the card markup; every user-supplied string is HTML-escaped."""
    s = layout.scale
    snippet = comment.snippet
    muted = theme.muted_color(layout.text_color)
    avatar_size = layout.header_height * theme.AVATAR_RATIO

    avatar_html = ""
    if layout.show_author_image and snippet.authorProfileImageUrl:
        avatar_html = (
            f'<img class="avatar" src="{escape(snippet.authorProfileImageUrl)}" '
            f'alt="" crossorigin="anonymous" />'
        )
    footer_html = ""
    if layout.show_like_count:
        footer_html = f'<div class="footer"><span class="like-icon">👍</span>{snippet.likeCount} likes</div>'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Comment Card</title>
<style>
    * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    body {{
        font-family: 'Inter', system-ui, -apple-system, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
        background: transparent;
    }}
    .card {{
        background-color: {layout.background_color};
        color: {layout.text_color};
        font-size: {_css_px(layout.font_size, s)};
        line-height: {theme.LINE_HEIGHT};
        padding: {_css_px(layout.padding, s)};
        border-radius: {_css_px(layout.border_radius, s)};
        width: {_css_px(layout.width, s)};
        height: {_css_px(layout.height, s)};
        display: flex;
        flex-direction: column;
        justify-content: {_JUSTIFY[layout.vertical_align]};
        gap: {_css_px(layout.gap, s)};
        overflow: hidden;
    }}
    .header {{
        display: flex;
        align-items: center;
        min-height: {_css_px(layout.header_height, s)};
        flex-shrink: 0;
    }}
    .avatar {{
        width: {_css_px(avatar_size, s)};
        height: {_css_px(avatar_size, s)};
        border-radius: 50%;
        margin-right: {theme.AVATAR_MARGIN}px;
        object-fit: cover;
    }}
    .author-name {{ font-weight: 600; line-height: 1.2; }}
    .publish-date {{
        color: {muted};
        font-size: {_css_px(layout.font_size * theme.META_TEXT_RATIO, s)};
        line-height: 1.2;
    }}
    .content {{
        font-weight: bold;
        white-space: pre-line;
        overflow-wrap: break-word;
        word-wrap: break-word;
    }}
    .footer {{
        display: flex;
        align-items: center;
        min-height: {_css_px(layout.footer_height, s)};
        color: {muted};
        font-size: {_css_px(layout.font_size * theme.META_TEXT_RATIO, s)};
        flex-shrink: 0;
    }}
    .like-icon {{ margin-right: 6px; }}
</style>
</head>
<body>
<div class="card">
    <div class="header">
        {avatar_html}
        <div class="author-info">
            <div class="author-name">{escape(snippet.authorDisplayName)}</div>
            <div class="publish-date">{escape(format_published_date(snippet.publishedAt, layout.date_format))}</div>
        </div>
    </div>
    <div class="content">{escape(text)}</div>
    {footer_html}
</div>
</body>
</html>"""
