"""
Error kinds surfaced at the HTTP boundary.

Each error carries the status code and the short user-facing message the
exception handlers in ``commentcard.main`` send back. Internal details stay
in the logs.
"""


class CardServiceError(Exception):
    """Base class for every error the service reports to a caller."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InputError(CardServiceError, ValueError):
    """Missing/unparseable payload or an impossible card size."""

    status_code = 400
    default_message = "Bad request"


class UpstreamQuotaError(CardServiceError):
    """Daily quota exhausted, locally or at the YouTube API."""

    status_code = 429
    default_message = "Daily usage limit reached. Please try again tomorrow."


class UpstreamServiceError(CardServiceError):
    """YouTube API failure, mapped 1:1 to the upstream status code."""

    status_code = 500
    default_message = "Failed to fetch comment"


class RenderError(CardServiceError):
    status_code = 500
    default_message = "Error generating image"
