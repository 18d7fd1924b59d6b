from typing import Dict, List
from commentcard.core.container import container, Services
from commentcard.services.renderers.base import RenderBackend

# Backend name -> container service
_BACKENDS: Dict[str, str] = {
    "pillow": Services.PILLOW_RENDERER,
    "browser": Services.BROWSER_RENDERER,
}


class RendererFactory:
    """Selects a render backend by name (route or DEFAULT_RENDERER)."""

    @staticmethod
    def available() -> List[str]:
        return list(_BACKENDS)

    @classmethod
    def get(cls, name: str) -> RenderBackend:
        """
        Raises:
            KeyError: Unknown backend name.
        """
        key = (name or "").strip().lower()
        if key not in _BACKENDS:
            raise KeyError(f"Unknown renderer '{name}'. Available: {cls.available()}")
        return container.get(_BACKENDS[key])
