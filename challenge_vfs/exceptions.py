"""
Exceptions

Raised failures. Content problems found while loading (bad elements,
failed validation, duplicates) are collected as LoadError records instead;
only unit-level decode failures and navigation failures are raised.

Hierarchy:
    ChallengeVFSError
    ├── SourceError
    │   ├── UnsupportedVersion
    │   └── MalformedSource
    └── VFSError
        ├── PathNotFound
        ├── NotADirectory
        └── NotAFile
"""

from __future__ import annotations

from typing import Any


class ChallengeVFSError(Exception):
    """Base class for all challenge-vfs errors."""


class SourceError(ChallengeVFSError):
    """A whole source unit could not be decoded."""

    def __init__(self, source_unit: str, message: str) -> None:
        super().__init__(f"{source_unit}: {message}")
        self.source_unit = source_unit
        self.message = message


class UnsupportedVersion(SourceError):
    """The source unit declares a format version this package cannot read."""

    def __init__(self, source_unit: str, version: Any) -> None:
        super().__init__(source_unit, f"unsupported source format version: {version!r}")
        self.version = version


class MalformedSource(SourceError):
    """The source unit is not a well-formed challenge document."""


class VFSError(ChallengeVFSError):
    """A virtual filesystem path could not be used for the requested operation."""

    reason = "invalid path"

    def __init__(self, path: str) -> None:
        super().__init__(f"{self.reason}: /{path}")
        self.path = path


class PathNotFound(VFSError):
    reason = "no such file or directory"


class NotADirectory(VFSError):
    reason = "not a directory"


class NotAFile(VFSError):
    reason = "is a directory"
