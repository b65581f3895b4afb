from __future__ import annotations

import logging
from pathlib import Path

from companion_text.scan import cleanup_broken_companion_links, find_orphan_companions, iter_companion_pairs


def _logger() -> logging.Logger:
    logger = logging.getLogger("test-companion-scan")
    logger.addHandler(logging.NullHandler())
    return logger


def test_lists_pairs_and_orphans(tmp_path: Path) -> None:
    album = tmp_path / "album"
    album.mkdir()
    (album / "a.jpg").write_bytes(b"")
    (album / "a.txt").write_text("a")
    (album / "b.png").write_bytes(b"")
    (album / "c.txt").write_text("orphan")
    (album / "d.Jpeg").write_bytes(b"")
    (album / "d.txt").write_text("quirk")

    assert list(iter_companion_pairs(tmp_path)) == [(album / "a.jpg", album / "a.txt")]
    assert find_orphan_companions(tmp_path) == [album / "c.txt", album / "d.txt"]


def test_cleanup_only_removes_broken_companion_links(tmp_path: Path) -> None:
    broken = tmp_path / "track.txt"
    other = tmp_path / "other.lnk"
    alive_target = tmp_path / "real.txt"
    alive_target.write_text("x")
    alive = tmp_path / "alive.txt"
    try:
        broken.symlink_to(tmp_path / "missing.txt")
        other.symlink_to(tmp_path / "missing.bin")
        alive.symlink_to(alive_target)
    except OSError:
        return

    stats = cleanup_broken_companion_links(root=tmp_path, logger=_logger())

    assert stats.removed_broken_links == 1
    assert stats.skipped == 1
    assert not broken.is_symlink()
    assert other.is_symlink()
    assert alive.read_text() == "x"
