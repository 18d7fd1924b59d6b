from abc import ABC, abstractmethod
from commentcard.models.schemas import Comment, LayoutSpec


class RenderBackend(ABC):
    """A strategy that rasterizes a composed card into PNG bytes."""

    name: str = ""

    @abstractmethod
    async def render(self, layout: LayoutSpec, text: str, comment: Comment) -> bytes:
        """
        Render one card.

        Args:
            layout: Resolved geometry and colors
            text: Normalized comment text
            comment: Source comment (author, avatar, date, likes)
        Returns:
            PNG-encoded image bytes.
        Raises:
            RenderError: The backend failed; any resource it acquired is released.
        """
        pass

    async def close(self):
        """Release long-lived resources held by the backend, if any."""
        pass
