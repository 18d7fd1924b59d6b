from commentcard.core.errors import UpstreamQuotaError, UpstreamServiceError


def test_missing_id(client):
    response = client.get("/api/v1/comment")
    assert response.status_code == 400
    assert response.json() == {"error": "Comment ID is required"}


def test_returns_upstream_body(client, mock_youtube, sample_item):
    body = {"kind": "youtube#commentListResponse", "items": [sample_item]}
    mock_youtube.list_comments.return_value = body

    response = client.get("/api/v1/comment?id=abc")

    assert response.status_code == 200
    assert response.json() == body
    mock_youtube.list_comments.assert_awaited_once_with("abc")


def test_not_found(client, mock_youtube):
    mock_youtube.list_comments.side_effect = UpstreamServiceError("Comment not found", 404)
    response = client.get("/api/v1/comment?id=abc")
    assert response.status_code == 404
    assert response.json() == {"error": "Comment not found"}


def test_quota_exceeded(client, mock_youtube):
    mock_youtube.list_comments.side_effect = UpstreamQuotaError()
    response = client.get("/api/v1/comment?id=abc")
    assert response.status_code == 429
    assert "error" in response.json()
