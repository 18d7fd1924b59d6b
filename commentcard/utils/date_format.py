from datetime import datetime


def format_published_date(published_at: str, date_format: str = "us") -> str:
    """
    Format an ISO-8601 timestamp the way en-US / fr-FR locales print dates.

    us -> 3/7/2024, fr -> 07/03/2024. Unparseable input is returned as-is.
    """
    if not published_at:
        return ""
    try:
        date = datetime.fromisoformat(published_at.replace("Z", "+00:00"))
    except ValueError:
        return published_at
    if date_format == "fr":
        return f"{date.day:02d}/{date.month:02d}/{date.year}"
    return f"{date.month}/{date.day}/{date.year}"
