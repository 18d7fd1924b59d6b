"""ServiceContainer behaviour: isolation, laziness, overrides."""
import pytest

from commentcard.core.container import ServiceContainer, Services, container, get_quota
from commentcard.core.service_registry import register_all_services
from commentcard.services.renderers.factory import RendererFactory


def test_instance_isolation():
    """Two containers should NOT share state."""
    c2 = ServiceContainer()
    c2.register("test", lambda: "hello")

    assert c2.has("test"), "c2 should have 'test'"
    assert not container.has("test"), "global container should NOT have 'test'"


def test_lazy_singleton():
    calls = []
    c = ServiceContainer()
    c.register("svc", lambda: calls.append(1) or object())

    assert not c.is_instantiated("svc")
    first = c.get("svc")
    assert c.get("svc") is first
    assert calls == [1]


def test_override_and_reset():
    c = ServiceContainer()
    c.register("svc", lambda: "real")
    c.override("svc", "fake")
    assert c.get("svc") == "fake"
    c.reset()
    assert c.get("svc") == "real"


def test_unknown_service_raises():
    with pytest.raises(KeyError):
        ServiceContainer().get("nope")


def test_renderer_factory_resolves_backends():
    register_all_services()
    try:
        assert RendererFactory.get("pillow").name == "pillow"
        assert RendererFactory.get(" Browser ").name == "browser"
        assert container.get(Services.YOUTUBE).quota is get_quota()
        with pytest.raises(KeyError):
            RendererFactory.get("svg")
    finally:
        container.reset()
