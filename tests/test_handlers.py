from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from companion_text.fsops import MirrorStats
from companion_text.handlers import CompanionRegistry, TextCompanion, default_registry


@dataclass
class RecordingHandler:
    label: str = "recording"
    calls: list[tuple[str, Path, Path | None]] = field(default_factory=list)

    def derive(self, primary_path):
        return Path(primary_path).with_suffix(".rec")

    def is_companion(self, path):
        return Path(path).suffix == ".rec"

    def companions(self, primary_path):
        return [self.derive(primary_path)]

    def mirror(self, op, src, dst=None):
        self.calls.append((op, Path(src), Path(dst) if dst is not None else None))
        return MirrorStats(applied=1)


def test_text_companion_roundtrip_on_disk(tmp_path: Path) -> None:
    handler = TextCompanion()
    image = tmp_path / "photo.jpg"
    image.write_bytes(b"")
    handler.derive(image).write_text("note")

    assert handler.is_companion(tmp_path / "photo.txt")
    assert handler.companions(image) == [tmp_path / "photo.txt"]

    stats = handler.mirror("move", image, tmp_path / "renamed.jpg")
    assert stats.applied == 1
    assert (tmp_path / "renamed.txt").read_text() == "note"


def test_registry_dispatches_to_every_handler(tmp_path: Path) -> None:
    recorder = RecordingHandler()
    registry = CompanionRegistry(handlers=[TextCompanion(), recorder])
    image = tmp_path / "photo.jpg"
    image.write_bytes(b"")
    (tmp_path / "photo.txt").write_text("note")

    stats = registry.mirror("copy", image, tmp_path / "copy.jpg")

    assert stats.applied == 2
    assert recorder.calls == [("copy", image, tmp_path / "copy.jpg")]
    assert (tmp_path / "copy.txt").read_text() == "note"
    assert registry.companions(image) == [tmp_path / "photo.txt", tmp_path / "photo.rec"]


def test_registry_alien_check(tmp_path: Path) -> None:
    registry = CompanionRegistry(handlers=[TextCompanion(), RecordingHandler()])
    (tmp_path / "photo.png").write_bytes(b"")
    (tmp_path / "photo.txt").write_text("note")
    (tmp_path / "readme.txt").write_text("unrelated")

    assert not registry.is_alien(tmp_path / "photo.txt")
    assert not registry.is_alien(tmp_path / "anything.rec")
    assert registry.is_alien(tmp_path / "readme.txt")


def test_duplicate_handler_label_rejected() -> None:
    registry = default_registry()
    with pytest.raises(ValueError):
        registry.register(TextCompanion())
    registry.register(RecordingHandler())
    assert [h.label for h in registry] == ["text", "recording"]
