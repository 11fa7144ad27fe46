"""Tests for the frame tween engine and engine provisioning."""

import pytest

from dom_keyframes.config import EngineConfig
from dom_keyframes.engine import (
    FrameTweenEngine,
    TweenContainer,
    create_engine,
    ensure_engine,
    supported_engine_names,
)
from dom_keyframes.engine.adapter import Container, EngineAdapter
from dom_keyframes.errors import EngineUnavailableError


class ManualEngine(EngineAdapter):
    """Engine that can never provision itself."""

    def is_available(self) -> bool:
        return False

    def create_container(self, vars):
        raise AssertionError("should not be called")


def _container() -> TweenContainer:
    return FrameTweenEngine().create_container({"useFrames": True, "paused": True})


def test_create_engine_defaults_to_frame_engine():
    engine = create_engine()

    assert isinstance(engine, FrameTweenEngine)
    assert engine.is_available()
    assert supported_engine_names() == ("frame",)


def test_create_engine_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown engine 'gsap'"):
        create_engine(EngineConfig(engine="gsap"))


def test_container_ids_are_unique():
    first = _container()
    second = _container()

    assert isinstance(first, Container)
    assert first.id != second.id


def test_add_tween_positions_children():
    container = _container()
    target = object()

    first = container.add_tween(target, {"x": 10, "ease": "Linear.easeNone"}, 0, duration=0)
    second = container.add_tween(target, {"x": 20}, 5, duration=10)

    assert container.children() == [first, second]
    assert (second.start_time(), second.end_time(), second.duration()) == (5, 15, 10)
    assert second.container_id == container.id
    assert second.index == 1
    assert second.properties() == {"x": 20}
    assert container.duration() == 15
    assert container.targets() == [target]


@pytest.mark.parametrize(
    "vars, offset, duration, message",
    [
        ({"x": 1}, 0, -1, "duration"),
        ({"x": 1}, -1, 1, "start offset"),
        ({"x": 1, "ease": "Bounce.easeOut"}, 0, 1, "Unknown ease"),
    ],
)
def test_add_tween_rejects_invalid_arguments(vars, offset, duration, message):
    container = _container()

    with pytest.raises(ValueError, match=message):
        container.add_tween(object(), vars, offset, duration=duration)

    assert container.children() == []


def test_empty_container_has_zero_duration():
    container = _container()

    assert container.duration() == 0
    assert container.values_at(0) == {}


def test_value_at_interpolates_from_previous_tween():
    container = _container()
    target = object()
    container.add_tween(target, {"opacity": 0}, 0, duration=0)
    container.add_tween(target, {"opacity": 1}, 0, duration=10)

    assert container.value_at("opacity", 0) == 0
    assert container.value_at("opacity", 5) == pytest.approx(0.5)
    assert container.value_at("opacity", 10) == 1
    assert container.value_at("opacity", 50) == 1
    assert container.value_at("scale", 5) is None


def test_value_at_holds_end_value_without_start_value():
    container = _container()
    container.add_tween(object(), {"y": 40}, 0, duration=20)

    assert container.value_at("y", 0) == 40
    assert container.value_at("y", 10) == 40


def test_value_at_applies_ease():
    container = _container()
    container.add_tween(object(), {"x": 0}, 0, duration=0)
    container.add_tween(object(), {"x": 100, "ease": "Power1.easeIn"}, 0, duration=10)

    assert container.value_at("x", 5) == pytest.approx(25)


def test_value_at_filters_by_target():
    container = _container()
    first, second = object(), object()
    container.add_tween(first, {"x": 1}, 0, duration=0)
    container.add_tween(second, {"x": 2}, 0, duration=0)

    assert container.value_at("x", 0, first) == 1
    assert container.value_at("x", 0, second) == 2
    assert container.property_names(first) == ("x",)


def test_boundaries_and_progress():
    container = _container()
    target = object()
    container.add_tween(target, {"x": 0}, 0, duration=0)
    container.add_tween(target, {"x": 10}, 0, duration=10)
    container.add_tween(target, {"y": 3}, 4, duration=6)

    assert container.boundaries() == [0.0, 4.0, 10.0]
    assert container.boundaries("x") == [0.0, 10.0]
    assert container.progress(0.5)["x"] == pytest.approx(5)
    assert container.progress(2.0) == {"x": 10, "y": 3}


def test_unavailable_engine_refuses_containers():
    engine = FrameTweenEngine(available=False)

    with pytest.raises(EngineUnavailableError):
        engine.create_container({})


def test_ensure_engine_provisions_missing_engine():
    engine = FrameTweenEngine(available=False)

    assert ensure_engine(engine, EngineConfig()) is engine
    assert engine.is_available()


def test_ensure_engine_respects_disabled_provisioning():
    engine = FrameTweenEngine(available=False)

    with pytest.raises(EngineUnavailableError, match="auto provisioning is disabled"):
        ensure_engine(engine, EngineConfig(auto_provision=False))

    assert not engine.is_available()


def test_ensure_engine_reports_engines_that_cannot_provision():
    with pytest.raises(EngineUnavailableError, match="cannot be provisioned"):
        ensure_engine(ManualEngine(), EngineConfig())
