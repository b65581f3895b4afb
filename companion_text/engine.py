from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .logutil import get_logger


OpKind = Literal["copy", "move", "symlink", "delete"]

OP_KINDS: tuple[str, ...] = ("copy", "move", "symlink", "delete")

COMPANION_SUFFIX = ".txt"

# Matched exactly: "photo.Jpeg" does not pair with "photo.txt".
IMAGE_EXTS_DEFAULT: tuple[str, ...] = (
    "gif",
    "GIF",
    "jpg",
    "JPG",
    "jpeg",
    "JPEG",
    "png",
    "PNG",
    "tiff",
    "bmp",
)

# Operations on these are already operations on managed artifacts.
IGNORED_SOURCE_SUFFIXES: tuple[str, ...] = (".txt", ".json")

_logger = get_logger(__name__)


@dataclass(frozen=True)
class MirrorOp:
    kind: OpKind
    src: Path
    dst: Path | None = None


def normalize_op_kind(value: object) -> OpKind:
    """Map a host operation type to an OpKind.

    Accepts plain strings ("copy", "MOVE") and enum members whose name is one
    of COPY, MOVE, SYMLINK or DELETE.
    """

    name = value if isinstance(value, str) else getattr(value, "name", None)
    if not isinstance(name, str) or name.lower() not in OP_KINDS:
        raise ValueError(f"Unsupported operation type: {value!r}")
    return name.lower()  # type: ignore[return-value]


def _base_no_ext(path: Path) -> str:
    return path.stem


def derive_companion_path(
    primary_path: os.PathLike[str] | str,
    suffix: str = COMPANION_SUFFIX,
) -> Path:
    primary = Path(primary_path)
    return primary.parent / f"{_base_no_ext(primary)}{suffix}"


def _sibling_names(directory: Path) -> set[str]:
    # Exact listing, so the extension check stays case-sensitive on
    # case-insensitive filesystems too.
    try:
        return set(os.listdir(directory))
    except OSError:
        return set()


def is_companion_candidate(
    candidate_path: os.PathLike[str] | str,
    suffix: str = COMPANION_SUFFIX,
    image_exts: tuple[str, ...] = IMAGE_EXTS_DEFAULT,
) -> bool:
    candidate = Path(candidate_path)
    if not candidate.name.lower().endswith(suffix.lower()):
        return False

    base = _base_no_ext(candidate)
    siblings = _sibling_names(candidate.parent)
    return any(f"{base}.{ext}" in siblings for ext in image_exts)


def get_companions(
    primary_path: os.PathLike[str] | str,
    suffix: str = COMPANION_SUFFIX,
) -> list[Path]:
    companion = derive_companion_path(primary_path, suffix)
    if companion.exists():
        return [companion]
    return []


def is_ignored_source(path: os.PathLike[str] | str) -> bool:
    name = Path(path).name.lower()
    return name.endswith(IGNORED_SOURCE_SUFFIXES)


def plan_companion_ops(
    *,
    op: OpKind,
    src_primary_path: os.PathLike[str] | str,
    dst_primary_path: os.PathLike[str] | str | None = None,
    suffix: str = COMPANION_SUFFIX,
) -> list[MirrorOp]:
    """Work out which companion operation mirrors a primary file operation.

    Returns an empty list when there is nothing to do: the source is itself a
    managed artifact, it has no companion on disk, or a destination-based
    operation was requested without a destination.
    """

    if op not in OP_KINDS:
        raise ValueError(f"Unsupported operation type: {op!r}")

    if is_ignored_source(src_primary_path):
        _logger.debug("Ignoring %s on managed artifact: %s", op, src_primary_path)
        return []

    src_companion = derive_companion_path(src_primary_path, suffix)
    if not src_companion.exists():
        _logger.debug("No companion for %s", src_primary_path)
        return []

    if op == "delete":
        return [MirrorOp(kind="delete", src=src_companion)]

    if dst_primary_path is None:
        _logger.debug("No destination given for %s of %s", op, src_primary_path)
        return []

    dst_companion = derive_companion_path(dst_primary_path, suffix)
    return [MirrorOp(kind=op, src=src_companion, dst=dst_companion)]
