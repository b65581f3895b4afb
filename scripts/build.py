from __future__ import annotations

import hashlib
import tomllib
import zipfile
from pathlib import Path


def _read_manifest(manifest_path: Path) -> dict:
    data = tomllib.loads(manifest_path.read_text(encoding="utf-8"))

    for key in ("name", "version"):
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise RuntimeError(f"MANIFEST.toml missing {key}")
    return data


def _iter_extension_files(root: Path) -> list[Path]:
    files: list[Path] = []
    for rel in ("MANIFEST.toml", "__init__.py"):
        p = root / rel
        if p.is_file():
            files.append(p)

    pkg = root / "companion_text"
    if pkg.is_dir():
        for file_path in sorted(pkg.rglob("*.py")):
            if file_path.is_file():
                files.append(file_path)

    return files


def build() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    manifest = _read_manifest(repo_root / "MANIFEST.toml")

    dist = repo_root / "dist"
    dist.mkdir(exist_ok=True)

    out_zip = dist / f"{manifest['name']}_{manifest['version']}.zip"

    fixed_time = (1980, 1, 1, 0, 0, 0)

    with zipfile.ZipFile(out_zip, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
        for file_path in _iter_extension_files(repo_root):
            arcname = file_path.relative_to(repo_root).as_posix()
            info = zipfile.ZipInfo(arcname)
            info.date_time = fixed_time
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            zf.writestr(info, file_path.read_bytes())

    sha256 = hashlib.sha256(out_zip.read_bytes()).hexdigest()
    (dist / "SHA256SUMS").write_text(f"{sha256}  {out_zip.name}\n", encoding="utf-8")

    return out_zip


if __name__ == "__main__":
    path = build()
    print(path)
