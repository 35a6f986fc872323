#!/usr/bin/env python3
"""Copy the packaged JSON templates into the distributable output directory."""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SOURCE = ROOT / "src" / "tsbootstrap" / "resources" / "templates"
DEFAULT_DEST = ROOT / "dist" / "templates"


def copy_json_files(source: Path, dest: Path) -> list[Path]:
    """Copy every ``*.json`` entry of ``source`` into ``dest``.

    Best effort: the first error is reported on stderr and whatever was copied
    before it stays in place.
    """

    copied: list[Path] = []
    try:
        for entry in sorted(source.iterdir()):
            if not entry.name.endswith(".json"):
                continue
            if not dest.exists():
                dest.mkdir()
            target = dest / entry.name
            shutil.copyfile(entry, target)
            copied.append(target)
    except OSError as exc:
        print(f"Error copying JSON files: {exc}", file=sys.stderr)
    return copied


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--source", type=Path, default=DEFAULT_SOURCE, help="directory holding the templates")
    parser.add_argument("--dest", type=Path, default=DEFAULT_DEST, help="output directory for the copies")
    args = parser.parse_args(argv)

    for path in copy_json_files(args.source, args.dest):
        print(f"copied {path.name} -> {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
