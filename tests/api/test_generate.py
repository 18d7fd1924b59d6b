import json
from urllib.parse import parse_qs, urlparse

from commentcard.api.v1.params import parse_comment_data
from commentcard.core.errors import UpstreamServiceError
from commentcard.models.schemas import Comment

WATCH_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&lc=UgxKREWxIgDrw8w2e_Z4AaABAg"


def test_invalid_url(client, mock_youtube):
    response = client.post("/api/v1/generate", json={"url": "https://example.com/watch?lc=abc"})
    assert response.status_code == 400
    mock_youtube.get_comment.assert_not_awaited()


def test_empty_url(client):
    response = client.post("/api/v1/generate", json={"url": ""})
    assert response.status_code == 400


def test_preview_url(client, mock_youtube, sample_item):
    comment = Comment.model_validate(sample_item)
    mock_youtube.get_comment.return_value = comment

    response = client.post("/api/v1/generate", json={"url": WATCH_URL, "backgroundColor": "#000000"})

    assert response.status_code == 200
    preview = urlparse(response.json()["previewUrl"])
    assert preview.path == "/api/v1/card-comment/pillow"
    params = parse_qs(preview.query)
    assert json.loads(params["data"][0])["snippet"]["textDisplay"] == sample_item["snippet"]["textDisplay"]
    # The card endpoint decodes the same comment back
    assert parse_comment_data(params["data"][0]) == comment
    assert params["backgroundColor"] == ["#000000"]
    assert params["scaleFactor"] == ["2"]
    mock_youtube.get_comment.assert_awaited_once_with("UgxKREWxIgDrw8w2e_Z4AaABAg")


def test_preview_url_browser(client, mock_youtube, sample_item):
    mock_youtube.get_comment.return_value = Comment.model_validate(sample_item)
    response = client.post("/api/v1/generate", json={"url": WATCH_URL, "renderer": "browser"})
    assert urlparse(response.json()["previewUrl"]).path == "/api/v1/card-comment-browser"


def test_upstream_error_is_reported(client, mock_youtube):
    mock_youtube.get_comment.side_effect = UpstreamServiceError("Comment not found", 404)
    response = client.post("/api/v1/generate", json={"url": WATCH_URL})
    assert response.status_code == 404
    assert response.json() == {"error": "Comment not found"}
