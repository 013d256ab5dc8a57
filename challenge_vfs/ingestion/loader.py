"""
Repository Loader

Turns a sequence of source units into one corpus.

Stages:
    1. Per unit (independent, optionally on worker threads):
       decode -> skip ignored -> read description files -> validate
    2. Merge (single writer): results re-assembled in source-unit order
    3. Corpus pass: reject duplicate ids / aliases

Partial-failure semantics: a unit that fails to read or decode, or a
record that fails to decode or validate, is reported in LoadResult.errors
and excluded; everything else still loads.

The loader itself does no I/O. Description files named by
`description-markdown-path(_en)` are read through the `read_file`
callback (see ingestion.sources.make_file_reader).
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Iterable, NamedTuple

from challenge_vfs.exceptions import SourceError, UnsupportedVersion
from challenge_vfs.ingestion.codec import decode
from challenge_vfs.ingestion.validation import Candidate, reject_duplicates, validate
from challenge_vfs.types import (
    ChallengeRecord,
    DescriptionFormat,
    ErrorKind,
    FileReader,
    LoadError,
    LoadResult,
    SourceUnit,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

# (path field, text field, source key)
DESCRIPTION_FILES = (
    ("description_path", "description", "description-markdown-path"),
    ("description_en_path", "description_en", "description-markdown-path_en"),
)


class _UnitOutcome(NamedTuple):
    candidates: list[Candidate]
    errors: list[LoadError]
    skipped: int


def load(
    source_units: Iterable[SourceUnit],
    workers: int = 1,
    read_file: FileReader | None = None,
) -> LoadResult:
    """
    Load, validate and de-duplicate all source units.

    Args:
        source_units: Units in the order they should contribute records
        workers: Threads used for the per-unit stage (1 = inline)
        read_file: Reads description files referenced by records. Without
            one, records that reference a file are rejected with MissingFile.

    Returns:
        LoadResult whose records are ordered by source unit, then by
        declaration order inside the unit. Identical inputs always give
        identical results.
    """
    units = list(source_units)
    process = partial(_process_unit, read_file=read_file)

    if workers > 1 and len(units) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, which keeps the merge deterministic
            outcomes = list(executor.map(process, units))
    else:
        outcomes = [process(unit) for unit in units]

    candidates: list[Candidate] = []
    errors: list[LoadError] = []
    skipped = 0
    for outcome in outcomes:
        candidates.extend(outcome.candidates)
        errors.extend(outcome.errors)
        skipped += outcome.skipped

    accepted, duplicate_errors = reject_duplicates(candidates)
    errors.extend(duplicate_errors)

    result = LoadResult(
        records=[candidate.record for candidate in accepted],
        errors=errors,
        skipped=skipped,
    )
    logger.info(
        f"Loaded {len(result.records)} records from {len(units)} source units "
        f"({len(result.errors)} errors, {skipped} ignored)"
    )
    return result


def _process_unit(unit: SourceUnit, read_file: FileReader | None = None) -> _UnitOutcome:
    """Decode and validate one unit. Never raises for content problems."""
    if unit.error is not None:
        logger.warning(f"Skipping source unit {unit.name}: {unit.error}")
        error = LoadError(kind=ErrorKind.DECODE_ERROR, source_unit=unit.name, message=unit.error)
        return _UnitOutcome([], [error], 0)

    try:
        decoded = decode(unit.text, unit.name)
    except SourceError as e:
        kind = (
            ErrorKind.UNSUPPORTED_VERSION
            if isinstance(e, UnsupportedVersion)
            else ErrorKind.DECODE_ERROR
        )
        logger.warning(f"Skipping source unit {unit.name}: {e.message}")
        return _UnitOutcome([], [LoadError(kind=kind, source_unit=unit.name, message=e.message)], 0)

    errors = [
        LoadError(
            kind=ErrorKind.DECODE_ERROR,
            source_unit=err.source_unit,
            index=err.index,
            message=err.cause,
        )
        for err in decoded.errors
    ]
    candidates: list[Candidate] = []
    skipped = 0

    for index, record in zip(decoded.indices, decoded.records):
        if record.ignored:
            logger.debug(f"Ignoring {unit.name}[{index}] (id={record.key})")
            skipped += 1
            continue

        record, issues = resolve_description_files(unit, record, read_file)
        issues.extend(validate(record))
        if issues:
            logger.warning(
                f"Rejected {unit.name}[{index}] (id={record.key}): "
                + ", ".join(issue.kind.value for issue in issues)
            )
            errors.extend(
                LoadError(
                    kind=issue.kind,
                    source_unit=unit.name,
                    index=index,
                    field=issue.field,
                    message=issue.message,
                )
                for issue in issues
            )
            continue

        candidates.append(Candidate(unit.name, index, record))

    # decode errors and validation errors interleave by element index
    errors.sort(key=lambda err: err.index if err.index is not None else -1)
    return _UnitOutcome(candidates, errors, skipped)


def resolve_description_files(
    unit: SourceUnit,
    record: ChallengeRecord,
    read_file: FileReader | None,
) -> tuple[ChallengeRecord, list[ValidationIssue]]:
    """
    Replace file-backed descriptions with the files' text.

    A referenced file takes precedence over an inline description. The
    path fields are kept, so encoding the record still names the file.

    Returns:
        (record with descriptions filled in, MissingFile issues)
    """
    updates: dict[str, Any] = {}
    issues: list[ValidationIssue] = []

    for path_field, text_field, key in DESCRIPTION_FILES:
        path = getattr(record, path_field)
        if not path:
            continue
        if read_file is None:
            issues.append(ValidationIssue(
                kind=ErrorKind.MISSING_FILE,
                field=key,
                message=f"cannot read {path!r}: no file reader for this source",
            ))
            continue
        try:
            updates[text_field] = read_file(unit, path)
        except (OSError, ValueError) as e:
            issues.append(ValidationIssue(
                kind=ErrorKind.MISSING_FILE,
                field=key,
                message=f"cannot read {path!r}: {e}",
            ))

    if "description" in updates:
        updates["description_format"] = DescriptionFormat.MARKDOWN
    if updates:
        record = record.model_copy(update=updates)
    return record, issues
