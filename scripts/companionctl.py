from __future__ import annotations

"""companionctl: companion CLI for the Companion Text File extension.

Scans a directory tree and can:
- List image/companion pairs
- List orphan .txt files that no image claims
- Remove companion symlinks whose target is gone

This is a development utility and is not included in the extension ZIP.
"""

import argparse
import logging
import sys
from pathlib import Path

# Allow running as a script from the repo without installing a package.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


from companion_text.scan import (
    cleanup_broken_companion_links,
    find_orphan_companions,
    iter_companion_pairs,
)


def _read_version(repo_root: Path) -> str:
    import tomllib

    try:
        data = tomllib.loads((repo_root / "MANIFEST.toml").read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return "unknown"
    v = data.get("version")
    return v if isinstance(v, str) and v else "unknown"


def _configure_logging(verbosity: int) -> logging.Logger:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    return logging.getLogger("companionctl")


def _build_parser(version: str) -> argparse.ArgumentParser:
    desc = (
        f"companionctl {version} - inspect and tidy companion .txt files. "
        "Lists image/companion pairs and orphan notes, or removes broken companion symlinks."
    )

    p = argparse.ArgumentParser(prog="companionctl", description=desc)
    p.add_argument("root", type=Path, help="Root folder to scan")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    p.add_argument(
        "--version",
        action="version",
        version=f"companionctl {version}",
        help="Print version and exit",
    )

    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("list", help="Print every image that has a companion text file")
    sub.add_parser("orphans", help="Print .txt files with no matching image")
    sub.add_parser("cleanup", help="Remove broken companion symlinks")

    return p


def main(argv: list[str] | None = None) -> int:
    version = _read_version(_REPO_ROOT)

    args = _build_parser(version).parse_args(argv)
    logger = _configure_logging(args.verbose)

    root: Path = args.root
    if not root.exists():
        logger.error("Root does not exist: %s", root)
        return 2

    if args.cmd == "list":
        count = 0
        for image, companion in iter_companion_pairs(root):
            print(f"{image}\t{companion}")
            count += 1
        logger.info("Done: pairs=%d", count)
        return 0

    if args.cmd == "orphans":
        orphans = find_orphan_companions(root)
        for path in orphans:
            print(path)
        logger.info("Done: orphans=%d", len(orphans))
        return 0

    stats = cleanup_broken_companion_links(root=root, logger=logger)
    logger.info(
        "Done: removed_broken_links=%d skipped=%d errors=%d",
        stats.removed_broken_links,
        stats.skipped,
        stats.errors,
    )
    return 1 if stats.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
