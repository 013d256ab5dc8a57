"""
Tree Builder

Projects the flat corpus into the browsing hierarchy:

    /
    ├── {branch}/            one per distinct taxonomy value
    │   ├── {leaf}           one per record, named by slug of alias or id
    │   └── ...
    └── ...

Leaf name collisions inside a branch are resolved in corpus order: the
first record keeps `slug`, a later one with a numeric id gets `slug-<id>`,
others get the first free `slug-2`, `slug-3`, ...

The tree is derived state: the same corpus always yields an equal tree.
"""

from __future__ import annotations

import logging
from typing import Iterable

from challenge_vfs.types import DEFAULT_PLATFORM, ChallengeRecord, DirectoryNode, TaxonomyKey
from challenge_vfs.utils.text import branch_name, leaf_slug

logger = logging.getLogger(__name__)

ROOT_NAME = ""


def taxonomy_values(
    record: ChallengeRecord,
    taxonomy: TaxonomyKey,
    default_platform: str = DEFAULT_PLATFORM,
) -> list[str]:
    """Branch names a record is filed under, de-duplicated and sorted."""
    if taxonomy == TaxonomyKey.PLATFORM:
        return [branch_name(record.platform, default_platform)]
    if taxonomy == TaxonomyKey.TAG:
        names = {branch_name(tag, "") for tag in record.tags}
        names.discard("")
        return sorted(names)
    if taxonomy == TaxonomyKey.DIFFICULTY:
        return [f"level-{record.difficulty_level}"]
    raise ValueError(f"Unknown taxonomy: {taxonomy}")


def unique_name(base: str, taken: set[str], record_id: int | str | None = None) -> str:
    """
    `base` if free. Otherwise `base-<id>` for a numeric id, and failing
    that the first free `base-N` with N >= 2.
    """
    if base not in taken:
        return base
    if isinstance(record_id, int) and f"{base}-{record_id}" not in taken:
        return f"{base}-{record_id}"
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


def build_tree(
    records: Iterable[ChallengeRecord],
    taxonomy: TaxonomyKey | str = TaxonomyKey.PLATFORM,
    default_platform: str = DEFAULT_PLATFORM,
    include_expired: bool = True,
) -> DirectoryNode:
    """
    Build the directory tree for a corpus.

    Args:
        records: Validated records in corpus order
        taxonomy: Attribute used for the top-level branches
        default_platform: Branch for records with a blank platform
        include_expired: If False, expired records get no leaf

    Returns:
        Root branch (name "") whose children are sorted by name
    """
    taxonomy = TaxonomyKey(taxonomy)

    # branch name -> [(leaf name, record)] in corpus order
    branches: dict[str, list[tuple[str, ChallengeRecord]]] = {}
    taken: dict[str, set[str]] = {}

    for record in records:
        if record.is_expired and not include_expired:
            continue
        base = leaf_slug(record.id_alias or record.id)
        for value in taxonomy_values(record, taxonomy, default_platform):
            names = taken.setdefault(value, set())
            name = unique_name(base, names, record.id)
            if name != base:
                logger.debug(f"Leaf name {value}/{base} taken, using {name} for id={record.key}")
            names.add(name)
            branches.setdefault(value, []).append((name, record))

    children = [
        DirectoryNode.branch(value, [DirectoryNode.leaf(name, record) for name, record in leaves])
        for value, leaves in branches.items()
    ]
    root = DirectoryNode.branch(ROOT_NAME, children)
    logger.debug(
        f"Built tree by {taxonomy.value}: {len(children)} branches, "
        f"{sum(len(leaves) for leaves in branches.values())} leaves"
    )
    return root
