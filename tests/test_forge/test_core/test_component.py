import logging

import pytest
import pydantic

from forge.core.component import Component, FrozenComponent, get_component_type, register_component
from forge.core.config import EngineConfig, configure_logging
from forge.core.errors import NotFoundError, OutOfRangeError, ValidationError, InvalidStateError


@register_component
class Marker(Component):
    label: str = ""
    count: int = 0

class Point(FrozenComponent):
    x: int = 0

def test_component_validation():
    with pytest.raises(pydantic.ValidationError):
        Marker(count={"invalid": "type"})

def test_component_forbids_extra_fields():
    with pytest.raises(pydantic.ValidationError):
        Marker(unknown=1)

def test_register_component_lookup():
    assert get_component_type("Marker") is Marker
    assert get_component_type("Nope") is None

def test_clone_is_independent():
    original = Marker(label="a", count=1)
    copy = original.clone()
    copy.count = 5
    assert original.count == 1

def test_frozen_component_rejects_assignment():
    point = Point(x=1)
    with pytest.raises(pydantic.ValidationError):
        point.x = 2

def test_error_hierarchy():
    assert issubclass(OutOfRangeError, NotFoundError)
    assert issubclass(OutOfRangeError, IndexError)
    assert issubclass(InvalidStateError, ValidationError)

def test_config_defaults():
    config = EngineConfig()
    assert config.hand_socket == "hand_r"
    assert config.back_socket == "back"
    assert config.validate_schemas is True

def test_configure_logging_accepts_level_name(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))

    configure_logging(EngineConfig(log_level="debug"))

    assert calls["level"] == logging.DEBUG
