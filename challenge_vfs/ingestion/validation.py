"""
Record and Corpus Validation

Record-level checks (all run, none short-circuit):
    - difficulty_level in [1, 5]                   -> OutOfRange
    - base64_url decodes to an absolute URL        -> InvalidEncoding
    - tags non-empty                               -> EmptyTagSet
    - every tag non-blank after trimming           -> BlankTag
    - create_time <= update_time                   -> TimeOrderViolation
    - name non-empty                               -> MissingField
    - solution title non-empty                     -> MissingField
    - solution url absolute                        -> InvalidUrl

Corpus-level checks (after record-level filtering):
    - duplicate id        -> DuplicateId (later occurrence rejected)
    - duplicate id-alias  -> DuplicateAlias (later occurrence rejected)

Validation never mutates a record; it only classifies it.
"""

from __future__ import annotations

import logging
from typing import Iterable, NamedTuple

from challenge_vfs.types import ChallengeRecord, ErrorKind, LoadError, ValidationIssue
from challenge_vfs.utils.text import decode_base64_url, is_absolute_url

logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


class Candidate(NamedTuple):
    """A record that passed record-level validation, with its origin."""

    source_unit: str
    index: int
    record: ChallengeRecord


def validate(record: ChallengeRecord) -> list[ValidationIssue]:
    """
    Run every record-level check.

    Returns:
        All issues found, in check order; empty if the record is valid
    """
    issues: list[ValidationIssue] = []

    if not MIN_DIFFICULTY <= record.difficulty_level <= MAX_DIFFICULTY:
        issues.append(ValidationIssue(
            kind=ErrorKind.OUT_OF_RANGE,
            field="difficulty-level",
            message=(
                f"difficulty {record.difficulty_level} is outside "
                f"[{MIN_DIFFICULTY}, {MAX_DIFFICULTY}]"
            ),
        ))

    decoded = decode_base64_url(record.base64_url)
    if decoded is None:
        issues.append(ValidationIssue(
            kind=ErrorKind.INVALID_ENCODING,
            field="base64-url",
            message=f"{record.base64_url!r} is not valid base64",
        ))
    elif not is_absolute_url(decoded):
        issues.append(ValidationIssue(
            kind=ErrorKind.INVALID_ENCODING,
            field="base64-url",
            message=f"decodes to {decoded!r}, which is not an absolute URL",
        ))

    if not record.tags:
        issues.append(ValidationIssue(
            kind=ErrorKind.EMPTY_TAG_SET,
            field="tags",
            message="at least one tag is required",
        ))
    for position, tag in enumerate(record.tags):
        if not tag.strip():
            issues.append(ValidationIssue(
                kind=ErrorKind.BLANK_TAG,
                field=f"tags[{position}]",
                message="tag is blank",
            ))

    try:
        out_of_order = record.create_time > record.update_time
    except TypeError:
        # naive vs. timezone-aware timestamps cannot be ordered
        out_of_order = True
    if out_of_order:
        issues.append(ValidationIssue(
            kind=ErrorKind.TIME_ORDER_VIOLATION,
            field="update-time",
            message=(
                f"update-time {record.update_time} is not at or after "
                f"create-time {record.create_time}"
            ),
        ))

    if not record.name.strip():
        issues.append(ValidationIssue(
            kind=ErrorKind.MISSING_FIELD,
            field="name",
            message="name is required",
        ))

    for position, solution in enumerate(record.solutions):
        if not solution.title.strip():
            issues.append(ValidationIssue(
                kind=ErrorKind.MISSING_FIELD,
                field=f"solutions[{position}].title",
                message="solution title is required",
            ))
        if not is_absolute_url(solution.url):
            issues.append(ValidationIssue(
                kind=ErrorKind.INVALID_URL,
                field=f"solutions[{position}].url",
                message=f"{solution.url!r} is not an absolute URL",
            ))

    return issues


def is_valid(record: ChallengeRecord) -> bool:
    return not validate(record)


def reject_duplicates(candidates: Iterable[Candidate]) -> tuple[list[Candidate], list[LoadError]]:
    """
    Corpus-level uniqueness pass.

    The first occurrence of an id (or alias) wins; every later occurrence
    is rejected with DuplicateId (or DuplicateAlias) naming where the
    first one was declared.

    Args:
        candidates: Records that passed validate(), in corpus order

    Returns:
        (accepted candidates in input order, errors for rejected ones)
    """
    accepted: list[Candidate] = []
    errors: list[LoadError] = []
    seen_ids: dict[str, Candidate] = {}
    seen_aliases: dict[str, Candidate] = {}

    for candidate in candidates:
        record = candidate.record
        first = seen_ids.get(record.key)
        if first is not None:
            errors.append(LoadError(
                kind=ErrorKind.DUPLICATE_ID,
                source_unit=candidate.source_unit,
                index=candidate.index,
                field="id",
                message=(
                    f"id {record.key!r} already declared in "
                    f"{first.source_unit}[{first.index}]"
                ),
            ))
            continue

        alias = record.id_alias
        if alias:
            first = seen_aliases.get(alias)
            if first is not None:
                errors.append(LoadError(
                    kind=ErrorKind.DUPLICATE_ALIAS,
                    source_unit=candidate.source_unit,
                    index=candidate.index,
                    field="id-alias",
                    message=(
                        f"id-alias {alias!r} already declared in "
                        f"{first.source_unit}[{first.index}]"
                    ),
                ))
                continue
            seen_aliases[alias] = candidate

        seen_ids[record.key] = candidate
        accepted.append(candidate)

    if errors:
        logger.warning(f"Rejected {len(errors)} duplicate records")
    return accepted, errors
