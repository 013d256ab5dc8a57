"""
Ingestion Pipeline

Turns authored YAML documents into a validated, de-duplicated corpus.

Stages:
    sources: Directory -> SourceUnits (the only filesystem access)
    codec: SourceUnit text -> ChallengeRecords + DecodeErrors
    validation: Record-level checks and corpus-level uniqueness
    loader: Orchestrates the above with partial-failure semantics
"""

from challenge_vfs.ingestion.codec import decode, encode, encode_record
from challenge_vfs.ingestion.loader import load, resolve_description_files
from challenge_vfs.ingestion.sources import discover_source_files, make_file_reader, read_source_units
from challenge_vfs.ingestion.validation import is_valid, reject_duplicates, validate

__all__ = [
    "decode",
    "encode",
    "encode_record",
    "validate",
    "is_valid",
    "reject_duplicates",
    "load",
    "resolve_description_files",
    "discover_source_files",
    "read_source_units",
    "make_file_reader",
]
