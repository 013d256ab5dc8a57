"""
ChallengeRepository - Primary Entry Point

Owns one challenge source directory and the snapshot loaded from it.

A snapshot is (LoadResult, tree). It is built wholesale by load() and
swapped in atomically; existing Navigators keep the snapshot they were
created from.

Example:
    >>> repo = ChallengeRepository("./docs/challenges")
    >>> result = repo.load()
    >>> for error in result.errors:
    ...     print(error)
    >>> repo.list_directory("")
    ['API', 'Web']
    >>> print(repo.get_file_content("Web/mock-challenge-12"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, NamedTuple

from challenge_vfs.ingestion import load, make_file_reader, read_source_units
from challenge_vfs.query import collect_platforms, collect_tags, filter_challenges
from challenge_vfs.types import ChallengeRecord, DirectoryNode, LoadError, LoadResult, SourceUnit
from challenge_vfs.vfs import build_tree
from challenge_vfs.vfs import get_file_content as _get_file_content
from challenge_vfs.vfs import list_directory as _list_directory
from challenge_vfs.vfs.navigator import Navigator, PathLike

if TYPE_CHECKING:
    from challenge_vfs.api.shell import VFSShell
    from challenge_vfs.config.settings import VFSConfig

logger = logging.getLogger(__name__)


class Snapshot(NamedTuple):
    """Immutable result of one load: the corpus and its tree."""

    result: LoadResult
    tree: DirectoryNode
    by_key: dict[str, ChallengeRecord]


class ChallengeRepository:
    """
    A challenge corpus loaded from a directory of YAML source units.

    Args:
        path: Source directory. Defaults to config.source_dir.
        config: Optional configuration. Uses defaults if not provided.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        config: "VFSConfig | None" = None,
    ) -> None:
        # Lazy import to avoid circular imports
        if config is None:
            from challenge_vfs.config import VFSConfig
            config = VFSConfig()
        self._config = config
        self._path = Path(path if path is not None else config.source_dir).resolve()
        self._units: list[SourceUnit] | None = None
        self._snapshot: Snapshot | None = None

    @classmethod
    def from_units(
        cls,
        units: Iterable[SourceUnit],
        config: "VFSConfig | None" = None,
    ) -> "ChallengeRepository":
        """Repository over in-memory source units instead of a directory."""
        repo = cls(path=Path.cwd(), config=config)
        repo._units = list(units)
        return repo

    # === Loading ===

    def load(self) -> LoadResult:
        """
        Read, validate and index all source units, replacing any previous
        snapshot.

        Returns:
            LoadResult with accepted records and every reported error

        Raises:
            FileNotFoundError: If the source directory does not exist
        """
        units = self._units if self._units is not None else read_source_units(
            self._path, self._config.source_patterns
        )
        result = load(
            units,
            workers=self._config.load_workers,
            read_file=make_file_reader(self._path),
        )
        tree = build_tree(
            result.records,
            taxonomy=self._config.taxonomy_key,
            default_platform=self._config.default_platform,
            include_expired=self._config.include_expired,
        )
        by_key: dict[str, ChallengeRecord] = {}
        for record in result.records:
            by_key[record.key] = record
        for record in result.records:
            if record.id_alias:
                by_key.setdefault(record.id_alias, record)

        self._snapshot = Snapshot(result, tree, by_key)
        if result.errors:
            logger.warning(f"{len(result.errors)} problems while loading {self._path}")
        return result

    def reload(self) -> LoadResult:
        """Discard the current snapshot and load again."""
        self._snapshot = None
        return self.load()

    def _current(self) -> Snapshot:
        if self._snapshot is None:
            self.load()
        assert self._snapshot is not None
        return self._snapshot

    # === Properties ===

    @property
    def path(self) -> Path:
        """Path to the source directory."""
        return self._path

    @property
    def config(self) -> "VFSConfig":
        return self._config

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def result(self) -> LoadResult:
        return self._current().result

    @property
    def records(self) -> list[ChallengeRecord]:
        return self._current().result.records

    @property
    def errors(self) -> list[LoadError]:
        return self._current().result.errors

    @property
    def tree(self) -> DirectoryNode:
        return self._current().tree

    # === VFS ===

    def list_directory(self, path: PathLike = "") -> list[str]:
        return _list_directory(self.tree, path)

    def get_file_content(self, path: PathLike) -> str:
        return _get_file_content(self.tree, path)

    def navigator(self) -> Navigator:
        """A new cursor at the root of the current tree."""
        return Navigator(self.tree)

    def shell(self) -> "VFSShell":
        from challenge_vfs.api.shell import VFSShell
        return VFSShell(self.navigator())

    # === Queries ===

    def get(self, id_or_alias: str | int) -> ChallengeRecord | None:
        """Look up a record by id (12 or "12") or by alias."""
        return self._current().by_key.get(str(id_or_alias))

    def search(
        self,
        query: str | None = None,
        *,
        tags: Iterable[str] | None = None,
        difficulty: int | Iterable[int] | None = None,
        platform: str | None = None,
        include_expired: bool = True,
    ) -> list[ChallengeRecord]:
        return filter_challenges(
            self.records,
            tags=tags,
            difficulty=difficulty,
            platform=platform,
            query=query,
            include_expired=include_expired,
        )

    def stats(self) -> dict[str, Any]:
        """Counts describing the current snapshot."""
        snapshot = self._current()
        records = snapshot.result.records
        return {
            "records": len(records),
            "errors": len(snapshot.result.errors),
            "skipped": snapshot.result.skipped,
            "platforms": len(collect_platforms(records)),
            "tags": len(collect_tags(records)),
            "expired": sum(1 for record in records if record.is_expired),
        }
