from __future__ import annotations

from pathlib import Path
from typing import Any

from .config import CompanionTextSettings, ConfigError, coerce_settings, default_settings, settings_to_json
from .engine import normalize_op_kind
from .handlers import CompanionRegistry, default_registry
from .thumbs import CompanionLink, ThumbRegistry


SETTINGS_KEY = "settings_json"

registry: CompanionRegistry = default_registry()
thumbs = ThumbRegistry()


def ensure_plugin_defaults(api) -> None:  # type: ignore[no-untyped-def]
    """Register plugin options so defaults and stored values resolve correctly."""

    api.plugin_config.register_option(SETTINGS_KEY, settings_to_json(default_settings()))


def load_settings(api) -> CompanionTextSettings:  # type: ignore[no-untyped-def]
    try:
        return coerce_settings(api.plugin_config[SETTINGS_KEY])
    except ConfigError as exc:
        api.logger.error("Companion text: configuration error: %s", exc)
        return default_settings()


def on_pre_image_operation(api, op_type, src_path, dst_path=None):  # type: ignore[no-untyped-def]
    """Replay an image operation onto its companion files.

    Runs before the host touches the image. Never raises: companion sync is
    best effort and must not stop the host's own operation.
    """

    try:
        op = normalize_op_kind(op_type)
        stats = registry.mirror(op, Path(src_path), Path(dst_path) if dst_path is not None else None)
        if stats.errors:
            api.logger.warning(
                "Companion text: %d companion file(s) could not be processed for %s",
                stats.errors,
                src_path,
            )
    except (OSError, RuntimeError, TypeError, ValueError):
        api.logger.error("Companion text: processing failed", exc_info=True)


def is_file_alien(api, path) -> bool:  # type: ignore[no-untyped-def]
    """False when `path` is a companion we manage, so the host leaves it alone."""

    try:
        return registry.is_alien(Path(path))
    except (OSError, TypeError, ValueError):
        api.logger.debug("Companion text: alien check failed for %r", path, exc_info=True)
        return True


def companions_for(api, path) -> list[Path]:  # type: ignore[no-untyped-def]
    try:
        return registry.companions(Path(path))
    except (OSError, TypeError, ValueError):
        api.logger.debug("Companion text: companion lookup failed for %r", path, exc_info=True)
        return []


def on_thumb_created(api, thumb):  # type: ignore[no-untyped-def]
    from . import ui

    image_path = getattr(thumb, "filename", None)
    if not image_path:
        return

    ensure_plugin_defaults(api)
    font_size = load_settings(api).link_font_size

    def make_label(link: CompanionLink) -> Any:
        return ui.make_link_label(link.text, font_size, lambda: ui.open_companion(link.path))

    existing = thumbs.get(thumb)
    known = len(existing.links) if existing is not None else 0

    try:
        state = thumbs.attach(
            thumb,
            Path(image_path),
            registry.handlers,
            lambda _thumb: ui.make_wrapper_panel(),
            make_label,
        )
        if state is None:
            return
        for link in state.links[known:]:
            state.panel.layout().addWidget(link.label)
        if existing is None:
            api.add_thumb_header(thumb, state.panel)
    except (OSError, RuntimeError, AttributeError, TypeError):
        api.logger.error("Companion text: failed adding links for %s", image_path, exc_info=True)


def on_thumb_selection_changed(api, thumb, selected):  # type: ignore[no-untyped-def]
    from . import ui

    state = thumbs.get(thumb)
    if state is None:
        return
    for link in state.links:
        ui.set_link_selected(link.label, bool(selected))


def on_thumb_renamed(api, thumb, new_path):  # type: ignore[no-untyped-def]
    thumbs.rebind(thumb, Path(new_path), registry.handlers)
