"""
Corpus Queries

Filtering and simple text search over loaded records.
"""

from challenge_vfs.query.filters import collect_platforms, collect_tags, filter_challenges, matches_query

__all__ = ["filter_challenges", "matches_query", "collect_tags", "collect_platforms"]
