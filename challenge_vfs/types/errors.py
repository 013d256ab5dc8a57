"""
Error Types

Problems found while decoding, validating and de-duplicating records.
These are data, not exceptions: the loader collects them next to the
records it accepted so one bad record never blocks the others.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Error taxonomy for collected load problems."""

    # Unit level
    UNSUPPORTED_VERSION = "UnsupportedVersion"
    DECODE_ERROR = "DecodeError"

    # Record level (validator)
    OUT_OF_RANGE = "OutOfRange"
    INVALID_ENCODING = "InvalidEncoding"
    INVALID_URL = "InvalidUrl"
    EMPTY_TAG_SET = "EmptyTagSet"
    BLANK_TAG = "BlankTag"
    TIME_ORDER_VIOLATION = "TimeOrderViolation"
    MISSING_FIELD = "MissingField"
    MISSING_FILE = "MissingFile"

    # Corpus level
    DUPLICATE_ID = "DuplicateId"
    DUPLICATE_ALIAS = "DuplicateAlias"


class ValidationIssue(BaseModel):
    """One failed check on a single record."""

    kind: ErrorKind
    field: str = Field(..., description="Source key (or solutions[i].key) that failed")
    message: str

    model_config = ConfigDict(frozen=True)


class DecodeError(BaseModel):
    """
    An element of a source unit's `challenges` list that could not be decoded.

    Attributes:
        source_unit: Name of the source unit
        index: Position of the element in the `challenges` list
        cause: Human-readable description of the structural/type problem
    """

    source_unit: str
    index: int
    cause: str

    model_config = ConfigDict(frozen=True)


class LoadError(BaseModel):
    """
    Any problem reported by the loader, attributed to its origin.

    `index` is None for failures that concern the whole source unit
    (unsupported version, unreadable YAML).
    """

    kind: ErrorKind
    source_unit: str
    index: int | None = None
    field: str | None = None
    message: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        location = self.source_unit if self.index is None else f"{self.source_unit}[{self.index}]"
        target = f" ({self.field})" if self.field else ""
        return f"{location}: {self.kind.value}{target}: {self.message}"
