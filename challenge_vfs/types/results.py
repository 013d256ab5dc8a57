"""
Pipeline Result Types

Input and output containers for the codec and loader stages.
"""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from challenge_vfs.types.challenges import ChallengeRecord
from challenge_vfs.types.errors import DecodeError, ErrorKind, LoadError


class SourceUnit(BaseModel):
    """
    One externally authored document, already read into memory.

    Attributes:
        name: Stable name used for attribution (e.g. relative file path)
        text: The YAML document text
        error: Why the document could not be read; `text` is empty then
    """

    name: str
    text: str
    error: str | None = None

    model_config = ConfigDict(frozen=True)


# (unit, path as written in the record) -> file text.
# Raises OSError or ValueError when the file cannot be read.
FileReader = Callable[[SourceUnit, str], str]


class DecodeResult(BaseModel):
    """Output of decoding one source unit."""

    version: int
    records: list[ChallengeRecord] = Field(default_factory=list)
    errors: list[DecodeError] = Field(default_factory=list)

    # Element index of each record, parallel to `records`
    indices: list[int] = Field(default_factory=list)


class LoadResult(BaseModel):
    """
    The corpus produced by one load.

    Attributes:
        records: Accepted records, in source-unit order then declaration order
        errors: Every rejected record / unit, attributed to its origin
        skipped: Number of records skipped because they were marked `ignored`
    """

    records: list[ChallengeRecord] = Field(default_factory=list)
    errors: list[LoadError] = Field(default_factory=list)
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    def errors_for(self, source_unit: str) -> list[LoadError]:
        """Errors attributed to one source unit."""
        return [e for e in self.errors if e.source_unit == source_unit]

    def errors_of_kind(self, kind: ErrorKind) -> list[LoadError]:
        return [e for e in self.errors if e.kind == kind]
