from __future__ import annotations

import pytest

from companion_text.config import (
    CompanionTextSettings,
    ConfigError,
    coerce_settings,
    default_settings,
    settings_from_json,
    settings_to_json,
    validate_settings,
)


def test_defaults() -> None:
    assert coerce_settings(None) == CompanionTextSettings(link_font_size=10)


def test_json_is_compact_and_parsed_back() -> None:
    raw = settings_to_json(CompanionTextSettings(link_font_size=14))
    assert raw == '{"link_font_size":14}'
    assert coerce_settings(raw).link_font_size == 14


def test_missing_key_uses_default() -> None:
    assert settings_from_json("{}") == default_settings()


@pytest.mark.parametrize("raw", ["not json", "[]", '{"link_font_size": "big"}', '{"link_font_size": 7}', '{"link_font_size": 17}'])
def test_invalid_settings_rejected(raw: str) -> None:
    with pytest.raises(ConfigError):
        settings_from_json(raw)


def test_bounds_are_inclusive() -> None:
    validate_settings(CompanionTextSettings(link_font_size=8))
    validate_settings(CompanionTextSettings(link_font_size=16))


def test_unsupported_value_type() -> None:
    with pytest.raises(ConfigError):
        coerce_settings(12)
