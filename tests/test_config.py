"""Tests for engine configuration."""

import pytest

from dom_keyframes.config import EngineConfig
from dom_keyframes.convert import mapping_to_pairs, pairs_to_mapping


def test_defaults():
    config = EngineConfig()

    assert config.container_vars() == {"useFrames": True, "paused": True}
    assert config.ease == "Linear.easeNone"
    assert config.suppress_initial_render
    assert config.origin_policy == "carry"
    assert config.engine == "frame"


def test_unknown_origin_policy_is_rejected():
    with pytest.raises(ValueError, match="Unknown origin policy"):
        EngineConfig(origin_policy="guess")


def test_with_overrides_skips_none():
    config = EngineConfig().with_overrides(ease="Power1.easeOut", origin_policy=None)

    assert config.ease == "Power1.easeOut"
    assert config.origin_policy == "carry"


def test_from_env_reads_prefixed_variables():
    config = EngineConfig.from_env(
        {
            "DOM_KEYFRAMES_PAUSED": "false",
            "DOM_KEYFRAMES_EASE": "Sine.easeInOut",
            "DOM_KEYFRAMES_ORIGIN_POLICY": "STRICT",
            "DOM_KEYFRAMES_AUTO_PROVISION": "0",
            "UNRELATED": "1",
        }
    )

    assert config.container_vars() == {"useFrames": True, "paused": False}
    assert config.ease == "Sine.easeInOut"
    assert config.origin_policy == "strict"
    assert not config.auto_provision


def test_from_env_without_variables_uses_defaults():
    assert EngineConfig.from_env({}) == EngineConfig()


def test_from_env_rejects_invalid_booleans():
    with pytest.raises(ValueError, match="DOM_KEYFRAMES_USE_FRAMES"):
        EngineConfig.from_env({"DOM_KEYFRAMES_USE_FRAMES": "maybe"})


def test_pairs_conversion_keeps_order():
    pairs = mapping_to_pairs({"y": 1, "x": 2})

    assert pairs == (("y", 1), ("x", 2))
    assert list(pairs_to_mapping(pairs)) == ["y", "x"]
    assert pairs_to_mapping([("x", 1), ("x", 2)]) == {"x": 2}
