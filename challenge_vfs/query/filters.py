"""
Challenge Filters

Combinable filters over a corpus. Every filter is optional; an unset
filter matches everything. Results keep corpus order.
"""

from __future__ import annotations

from typing import Iterable

from challenge_vfs.types import ChallengeRecord


def matches_query(record: ChallengeRecord, query: str) -> bool:
    """Case-insensitive substring match over the searchable fields."""
    needle = query.strip().casefold()
    if not needle:
        return True
    haystack = [
        record.name,
        record.name_en or "",
        record.description,
        record.description_en or "",
        record.platform,
        record.key,
        record.id_alias or "",
        *record.tags,
    ]
    return any(needle in field.casefold() for field in haystack)


def filter_challenges(
    records: Iterable[ChallengeRecord],
    *,
    tags: Iterable[str] | None = None,
    difficulty: int | Iterable[int] | None = None,
    platform: str | None = None,
    query: str | None = None,
    include_expired: bool = True,
) -> list[ChallengeRecord]:
    """
    Filter records.

    Args:
        records: Corpus records
        tags: Record must carry every one of these tags
        difficulty: A level, or any-of several levels
        platform: Exact platform name
        query: Free-text search (see matches_query)
        include_expired: If False, expired records are dropped

    Returns:
        Matching records in their original order
    """
    required_tags = set(tags or ())
    if difficulty is None:
        levels = None
    elif isinstance(difficulty, int):
        levels = {difficulty}
    else:
        levels = set(difficulty)

    result = []
    for record in records:
        if record.ignored:
            continue
        if not include_expired and record.is_expired:
            continue
        if required_tags and not required_tags.issubset(record.tags):
            continue
        if levels and record.difficulty_level not in levels:
            continue
        if platform and record.platform != platform:
            continue
        if query and not matches_query(record, query):
            continue
        result.append(record)
    return result


def collect_tags(records: Iterable[ChallengeRecord]) -> list[str]:
    """All distinct tags, sorted."""
    return sorted({tag for record in records for tag in record.tags})


def collect_platforms(records: Iterable[ChallengeRecord]) -> list[str]:
    """All distinct platforms, sorted."""
    return sorted({record.platform for record in records})
