from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .engine import COMPANION_SUFFIX, MirrorOp, OpKind, plan_companion_ops
from .logutil import get_logger

_logger = get_logger(__name__)


@dataclass(frozen=True)
class MirrorStats:
    applied: int = 0
    skipped: int = 0
    errors: int = 0


def is_broken_symlink(path: Path) -> bool:
    if not path.is_symlink():
        return False
    try:
        _ = path.resolve(strict=True)
        return False
    except FileNotFoundError:
        return True


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _same_path(a: Path, b: Path) -> bool:
    return os.path.abspath(a) == os.path.abspath(b)


def _same_target(a: Path, b: Path) -> bool:
    return os.path.realpath(a) == os.path.realpath(b)


def _clear_destination(dst: Path) -> None:
    """Remove an existing destination companion (or a dangling link to one)."""

    if dst.exists() or is_broken_symlink(dst):
        dst.unlink()
        _logger.debug("Removed existing companion: %s", dst)


def _apply_one(op: MirrorOp) -> bool:
    if op.kind == "delete":
        op.src.unlink()
        _logger.info("delete: %s", op.src)
        return True

    if op.dst is None:
        _logger.warning("Skip %s without destination: %s", op.kind, op.src)
        return False

    if _same_path(op.src, op.dst):
        _logger.debug("Skip %s onto itself: %s", op.kind, op.src)
        return False

    # src is a link to the real file at dst: clearing dst would lose the note.
    if _same_target(op.src, op.dst) and not op.dst.is_symlink():
        if op.kind == "move":
            op.src.unlink()
            _logger.info("move: dropped link %s, note stays at %s", op.src, op.dst)
            return True
        _logger.debug("Skip %s onto link target: %s -> %s", op.kind, op.src, op.dst)
        return False

    _logger.info("%s: %s -> %s", op.kind, op.src.absolute(), op.dst.absolute())
    _clear_destination(op.dst)
    _ensure_parent(op.dst)

    if op.kind == "copy":
        shutil.copy2(op.src, op.dst)
    elif op.kind == "move":
        shutil.move(str(op.src), str(op.dst))
    else:
        op.dst.symlink_to(op.src.absolute())
    return True


def apply_ops(ops: Iterable[MirrorOp]) -> MirrorStats:
    """Apply companion operations one file at a time.

    A failure is logged and counted, and never raised: the primary file
    operation is already under way and cannot be undone from here.
    """

    applied = 0
    skipped = 0
    errors = 0

    for op in ops:
        try:
            if _apply_one(op):
                applied += 1
            else:
                skipped += 1
        except OSError:
            errors += 1
            _logger.error(
                "Caught exception while processing companion file %s (%s)",
                op.src,
                op.kind,
                exc_info=True,
            )

    return MirrorStats(applied=applied, skipped=skipped, errors=errors)


def mirror_file_operation(
    op: OpKind,
    src_primary_path: os.PathLike[str] | str,
    dst_primary_path: os.PathLike[str] | str | None = None,
    suffix: str = COMPANION_SUFFIX,
) -> MirrorStats:
    ops = plan_companion_ops(
        op=op,
        src_primary_path=src_primary_path,
        dst_primary_path=dst_primary_path,
        suffix=suffix,
    )
    return apply_ops(ops)
