"""Per-thumbnail companion state owned by the UI layer.

The host hands us its own thumbnail objects. We never store anything on them;
instead each one maps (weakly) to a `ThumbCompanions` record holding the
wrapper panel and the links we added.
"""

from __future__ import annotations

import os
import weakref
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from .handlers import CompanionHandler


LabelFactory = Callable[["CompanionLink"], Any]
PanelFactory = Callable[[Any], Any]


@dataclass
class CompanionLink:
    handler_label: str
    path: Path
    label: Any = None

    @property
    def text(self) -> str:
        return f"[{self.handler_label}]"


@dataclass
class ThumbCompanions:
    panel: Any
    links: list[CompanionLink] = field(default_factory=list)

    def link_for(self, handler_label: str) -> CompanionLink | None:
        for link in self.links:
            if link.handler_label == handler_label:
                return link
        return None


class ThumbRegistry:
    def __init__(self) -> None:
        self._states: "weakref.WeakKeyDictionary[Any, ThumbCompanions]" = weakref.WeakKeyDictionary()

    def get(self, thumb: Any) -> ThumbCompanions | None:
        return self._states.get(thumb)

    def attach(
        self,
        thumb: Any,
        image_path: os.PathLike[str] | str,
        handlers: list[CompanionHandler],
        make_panel: PanelFactory,
        make_label: LabelFactory,
    ) -> ThumbCompanions | None:
        """Add a link for every companion the image has.

        The wrapper panel is shared by all handlers and created on first use.
        Returns None when the image has no companions at all.
        """

        state = self._states.get(thumb)
        for handler in handlers:
            for companion in handler.companions(image_path):
                if state is None:
                    state = ThumbCompanions(panel=make_panel(thumb))
                    self._states[thumb] = state
                if state.link_for(handler.label) is not None:
                    continue
                link = CompanionLink(handler.label, companion)
                link.label = make_label(link)
                state.links.append(link)
        return state

    def rebind(
        self,
        thumb: Any,
        new_image_path: os.PathLike[str] | str,
        handlers: list[CompanionHandler],
    ) -> None:
        """Point existing links at the companions of the renamed image.

        Nothing is moved on disk here; the move was mirrored before the rename.
        """

        state = self._states.get(thumb)
        if state is None:
            return
        by_label = {h.label: h for h in handlers}
        for link in state.links:
            handler = by_label.get(link.handler_label)
            if handler is not None:
                link.path = handler.derive(new_image_path)

    def forget(self, thumb: Any) -> None:
        self._states.pop(thumb, None)
