"""
Service Registration: single place to import and register all services.

Kept out of main.py so the app module stays focused on lifecycle and the
service list is easy to scan.
"""

from commentcard.core.container import container, Services, get_quota


def register_all_services():
    """Import and register every service in the DI container."""

    # ── Upstream ─────────────────────────────────────────────
    from commentcard.services.quota import QuotaGuard
    from commentcard.services.youtube_client import YouTubeClient

    container.register(Services.QUOTA, QuotaGuard)
    container.register(Services.YOUTUBE, lambda: YouTubeClient(quota=get_quota()))

    # ── Render backends ──────────────────────────────────────
    from commentcard.services.renderers.pillow_renderer import PillowRenderer
    from commentcard.services.renderers.browser_renderer import BrowserRenderer

    container.register(Services.PILLOW_RENDERER, PillowRenderer)
    container.register(Services.BROWSER_RENDERER, BrowserRenderer)
