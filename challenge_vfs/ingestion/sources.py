"""
Source Unit Discovery

Reads YAML files from a directory tree into SourceUnits, and builds the
reader for description files that records reference. This is the only
ingestion module that touches the filesystem; decoding and validation work
on already-read text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from challenge_vfs.types import FileReader, SourceUnit

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.yml", "*.yaml")


def discover_source_files(directory: str | Path, patterns: Iterable[str] = DEFAULT_PATTERNS) -> list[Path]:
    """
    Find source files below `directory`, recursively.

    Returns:
        Paths sorted by their POSIX path relative to `directory`, so the
        order does not depend on filesystem listing order
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Challenge source directory not found: {root}")

    found: set[Path] = set()
    for pattern in patterns:
        found.update(path for path in root.rglob(pattern) if path.is_file())
    return sorted(found, key=lambda path: path.relative_to(root).as_posix())


def read_source_units(directory: str | Path, patterns: Iterable[str] = DEFAULT_PATTERNS) -> list[SourceUnit]:
    """
    Read every source file below `directory`.

    Unit names are the files' POSIX paths relative to `directory`
    (e.g. "mock_data/challenge_12.yml"). A file that cannot be read or is
    not UTF-8 still yields a unit, carrying the reason in `error`, so the
    loader can report it without dropping the other units.
    """
    root = Path(directory)
    units = [_read_unit(root, path) for path in discover_source_files(root, patterns)]
    logger.debug(f"Read {len(units)} source units from {root}")
    return units


def _read_unit(root: Path, path: Path) -> SourceUnit:
    name = path.relative_to(root).as_posix()
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read source unit {name}: {e}")
        return SourceUnit(name=name, text="", error=f"cannot read file: {e}")
    return SourceUnit(name=name, text=text)


def description_file_candidates(root: Path, unit_name: str, relative: str) -> list[Path]:
    """
    Places a `description-markdown-path` value is looked up, in order:
    next to the unit, the source directory, its parent, the working
    directory and `docs/challenges` below it.
    """
    cwd = Path.cwd()
    bases = [
        (root / unit_name).parent,
        root,
        root.parent,
        cwd,
        cwd / "docs" / "challenges",
    ]
    return [base / relative for base in bases]


def make_file_reader(directory: str | Path) -> FileReader:
    """Build the loader's `read_file` callback for a source directory."""
    root = Path(directory)

    def read_file(unit: SourceUnit, relative: str) -> str:
        for candidate in description_file_candidates(root, unit.name, relative):
            if candidate.is_file():
                logger.debug(f"{unit.name}: reading {relative} from {candidate}")
                return candidate.read_bytes().decode("utf-8")
        raise FileNotFoundError(f"no such file: {relative}")

    return read_file
