from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .engine import COMPANION_SUFFIX, IMAGE_EXTS_DEFAULT, derive_companion_path, is_companion_candidate
from .fsops import is_broken_symlink


@dataclass(frozen=True)
class CleanupStats:
    removed_broken_links: int = 0
    skipped: int = 0
    errors: int = 0


def _iter_image_files(root: Path, image_exts: Iterable[str]) -> Iterable[Path]:
    exts = {f".{e}" for e in image_exts}
    for path in sorted(root.rglob("*")):
        if path.suffix in exts and path.is_file():
            yield path


def iter_companion_pairs(
    root: Path,
    image_exts: tuple[str, ...] = IMAGE_EXTS_DEFAULT,
    suffix: str = COMPANION_SUFFIX,
) -> Iterable[tuple[Path, Path]]:
    for image in _iter_image_files(root, image_exts):
        companion = derive_companion_path(image, suffix)
        if companion.exists():
            yield image, companion


def find_orphan_companions(
    root: Path,
    image_exts: tuple[str, ...] = IMAGE_EXTS_DEFAULT,
    suffix: str = COMPANION_SUFFIX,
) -> list[Path]:
    orphans: list[Path] = []
    for path in sorted(root.rglob("*")):
        if not path.name.lower().endswith(suffix.lower()):
            continue
        if not (path.is_file() or path.is_symlink()):
            continue
        if not is_companion_candidate(path, suffix, image_exts):
            orphans.append(path)
    return orphans


def cleanup_broken_companion_links(
    *,
    root: Path,
    suffix: str = COMPANION_SUFFIX,
    logger: logging.Logger,
) -> CleanupStats:
    removed = 0
    skipped = 0
    errors = 0

    for path in sorted(root.rglob("*")):
        if not path.is_symlink():
            continue

        try:
            if not is_broken_symlink(path):
                continue

            if not path.name.lower().endswith(suffix.lower()):
                skipped += 1
                continue

            path.unlink(missing_ok=True)
            removed += 1
            logger.info("Removed broken companion link: %s", path)

        except OSError as exc:
            errors += 1
            logger.error("Failed removing broken link %s: %s", path, exc)

    return CleanupStats(removed_broken_links=removed, skipped=skipped, errors=errors)
