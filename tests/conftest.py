import json
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from commentcard.main import app
from commentcard.core.container import container, Services
from commentcard.core.service_registry import register_all_services

SAMPLE_ITEM = {
    "kind": "youtube#comment",
    "etag": "abc",
    "id": "UgxKREWxIgDrw8w2e_Z4AaABAg",
    "snippet": {
        "authorDisplayName": "@jane",
        "authorProfileImageUrl": "https://yt3.ggpht.com/avatar.jpg",
        "authorChannelUrl": "http://www.youtube.com/@jane",
        "textDisplay": "First line<br>Second &amp; last line",
        "textOriginal": "First line\nSecond & last line",
        "likeCount": 42,
        "publishedAt": "2024-03-07T10:15:00Z",
        "updatedAt": "2024-03-07T10:15:00Z",
    },
}


@pytest.fixture
def sample_item():
    return json.loads(json.dumps(SAMPLE_ITEM))


@pytest.fixture
def client():
    """FastAPI test client fixture with all services registered."""
    register_all_services()
    yield TestClient(app)
    container.reset()


@pytest.fixture
def mock_youtube():
    """Mock for YouTubeClient."""
    mock = MagicMock()
    mock.list_comments = AsyncMock()
    mock.get_comment = AsyncMock()
    container.override(Services.YOUTUBE, mock)
    yield mock
    container.reset()


@pytest.fixture
def mock_browser_renderer():
    """Mock for BrowserRenderer."""
    mock = MagicMock()
    mock.name = "browser"
    mock.render = AsyncMock(return_value=b"\x89PNG\r\n\x1a\nbrowser")
    container.override(Services.BROWSER_RENDERER, mock)
    yield mock
    container.reset()
