from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


LINK_FONT_SIZE_DEFAULT = 10
LINK_FONT_SIZE_MIN = 8
LINK_FONT_SIZE_MAX = 16


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class CompanionTextSettings:
    link_font_size: int = LINK_FONT_SIZE_DEFAULT


def default_settings() -> CompanionTextSettings:
    return CompanionTextSettings()


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def validate_settings(settings: CompanionTextSettings) -> None:
    size = settings.link_font_size
    _require(
        isinstance(size, int) and not isinstance(size, bool),
        "link_font_size must be an integer",
    )
    _require(
        LINK_FONT_SIZE_MIN <= size <= LINK_FONT_SIZE_MAX,
        f"link_font_size must be between {LINK_FONT_SIZE_MIN} and {LINK_FONT_SIZE_MAX}",
    )


def settings_to_json(settings: CompanionTextSettings) -> str:
    payload = {"link_font_size": settings.link_font_size}
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def settings_from_json(raw: str) -> CompanionTextSettings:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError("Invalid settings JSON") from exc

    if not isinstance(data, dict):
        raise ConfigError("Settings JSON must be an object")

    size = data.get("link_font_size", LINK_FONT_SIZE_DEFAULT)
    try:
        size = int(size)
    except (TypeError, ValueError) as exc:
        raise ConfigError("link_font_size must be an integer") from exc

    settings = CompanionTextSettings(link_font_size=size)
    validate_settings(settings)
    return settings


def coerce_settings(value: Any) -> CompanionTextSettings:
    if value is None:
        return default_settings()
    if isinstance(value, str):
        return settings_from_json(value)
    raise ConfigError("Unsupported settings value")
