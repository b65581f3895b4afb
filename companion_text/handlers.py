"""Companion file handlers.

A handler knows one kind of companion file: how to derive it from an image,
how to recognise it on disk, and how to replay image file operations onto
it. The host keeps a list of handlers in a `CompanionRegistry` and asks each
of them in turn.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Protocol

from .engine import (
    COMPANION_SUFFIX,
    IMAGE_EXTS_DEFAULT,
    OpKind,
    derive_companion_path,
    get_companions,
    is_companion_candidate,
)
from .fsops import MirrorStats, mirror_file_operation


PathArg = os.PathLike[str] | str


class CompanionHandler(Protocol):
    label: str

    def derive(self, primary_path: PathArg) -> Path: ...

    def is_companion(self, path: PathArg) -> bool: ...

    def companions(self, primary_path: PathArg) -> list[Path]: ...

    def mirror(self, op: OpKind, src: PathArg, dst: PathArg | None = None) -> MirrorStats: ...


@dataclass(frozen=True)
class TextCompanion:
    """Plain text notes stored next to an image as `<base>.txt`."""

    label: str = "text"
    suffix: str = COMPANION_SUFFIX
    image_exts: tuple[str, ...] = IMAGE_EXTS_DEFAULT

    def derive(self, primary_path: PathArg) -> Path:
        return derive_companion_path(primary_path, self.suffix)

    def is_companion(self, path: PathArg) -> bool:
        return is_companion_candidate(path, self.suffix, self.image_exts)

    def companions(self, primary_path: PathArg) -> list[Path]:
        return get_companions(primary_path, self.suffix)

    def mirror(self, op: OpKind, src: PathArg, dst: PathArg | None = None) -> MirrorStats:
        return mirror_file_operation(op, src, dst, self.suffix)


@dataclass
class CompanionRegistry:
    handlers: list[CompanionHandler] = field(default_factory=list)

    def register(self, handler: CompanionHandler) -> None:
        if any(h.label == handler.label for h in self.handlers):
            raise ValueError(f"Companion handler already registered: {handler.label!r}")
        self.handlers.append(handler)

    def __iter__(self) -> Iterator[CompanionHandler]:
        return iter(self.handlers)

    def is_companion(self, path: PathArg) -> bool:
        return any(h.is_companion(path) for h in self.handlers)

    def is_alien(self, path: PathArg) -> bool:
        return not self.is_companion(path)

    def companions(self, primary_path: PathArg) -> list[Path]:
        found: list[Path] = []
        for handler in self.handlers:
            found.extend(handler.companions(primary_path))
        return found

    def mirror(self, op: OpKind, src: PathArg, dst: PathArg | None = None) -> MirrorStats:
        applied = skipped = errors = 0
        for handler in self.handlers:
            stats = handler.mirror(op, src, dst)
            applied += stats.applied
            skipped += stats.skipped
            errors += stats.errors
        return MirrorStats(applied=applied, skipped=skipped, errors=errors)


def default_registry() -> CompanionRegistry:
    return CompanionRegistry(handlers=[TextCompanion()])
