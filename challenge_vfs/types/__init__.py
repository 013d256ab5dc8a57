"""
Type Definitions

Pydantic models for all data structures.

Record Models (decoded from source units):
    - ChallengeRecord, Solution - One authored challenge and its write-ups
    - DescriptionFormat - Whether the description is plain text or Markdown

Error Models (collected, never raised):
    - ErrorKind - Error taxonomy
    - ValidationIssue - One failed record-level check
    - DecodeError - One element that could not be decoded
    - LoadError - Any problem attributed to a source unit and index

Result Models:
    - SourceUnit - One already-read source document
    - DecodeResult, LoadResult - Codec and loader outputs
    - FileReader - Reads files referenced by records (loader callback)

VFS Models:
    - DirectoryNode - Immutable branch/leaf of the browsing tree
    - NavigatorState - Serializable cursor position
    - TaxonomyKey - Which record attribute forms the top-level branches

All types are frozen pydantic BaseModel subclasses (or str enums).
"""

from challenge_vfs.types.challenges import (
    DEFAULT_PLATFORM,
    ChallengeRecord,
    DescriptionFormat,
    Solution,
)
from challenge_vfs.types.errors import DecodeError, ErrorKind, LoadError, ValidationIssue
from challenge_vfs.types.results import DecodeResult, FileReader, LoadResult, SourceUnit
from challenge_vfs.types.vfs import DirectoryNode, NavigatorState, TaxonomyKey

__all__ = [
    # Record Models
    "DEFAULT_PLATFORM",
    "ChallengeRecord",
    "DescriptionFormat",
    "Solution",
    # Error Models
    "ErrorKind",
    "ValidationIssue",
    "DecodeError",
    "LoadError",
    # Result Models
    "SourceUnit",
    "FileReader",
    "DecodeResult",
    "LoadResult",
    # VFS Models
    "DirectoryNode",
    "NavigatorState",
    "TaxonomyKey",
]
