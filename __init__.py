"""Companion Text File extension for the image viewer.

Entry point for the host is `enable(api)`.
Core logic lives in the `companion_text/` package.
"""

from __future__ import annotations

from .companion_text.options import CompanionTextOptionsPage
from .companion_text.plugin_hooks import (
    companions_for,
    ensure_plugin_defaults,
    is_file_alien,
    on_pre_image_operation,
    on_thumb_created,
    on_thumb_renamed,
    on_thumb_selection_changed,
)


def enable(api) -> None:  # type: ignore[no-untyped-def]
    api.logger.info("Companion text: extension enabled")

    ensure_plugin_defaults(api)
    api.register_options_page(CompanionTextOptionsPage)

    # Runs before the host moves/copies/links/deletes the image, so the
    # companion is still at its old path.
    api.register_pre_image_operation_processor(on_pre_image_operation)
    api.register_alien_file_filter(is_file_alien)
    api.register_companion_query(companions_for)

    api.register_thumb_created_processor(on_thumb_created)
    api.register_thumb_selection_processor(on_thumb_selection_changed)
    api.register_thumb_renamed_processor(on_thumb_renamed)


def disable() -> None:
    # The host drops registered processors on its own.
    pass
