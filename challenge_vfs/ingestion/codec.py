"""
Source Unit Codec

Decodes YAML source units into ChallengeRecords and encodes records back.

Document format:
    version: 1
    challenges:
      - id: 12
        id-alias: mock-challenge-12
        ...

Failure handling:
    - Unreadable YAML, non-mapping documents and a non-list `challenges`
      raise MalformedSource
    - Missing or unknown `version` raises UnsupportedVersion
    - A malformed element yields a DecodeError; its siblings still decode
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from challenge_vfs.exceptions import MalformedSource, UnsupportedVersion
from challenge_vfs.types import ChallengeRecord, DecodeError, DecodeResult, DescriptionFormat

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = frozenset({1})
CURRENT_VERSION = 1

# Emission order for encoded records
KEY_ORDER = [
    "id", "id-alias", "tags", "platform", "name", "name-en",
    "difficulty-level", "description", "description-markdown",
    "description-markdown-path", "description-markdown_en", "description-markdown-path_en",
    "base64-url", "is-expired", "ignored", "solutions",
    "create-time", "update-time",
]


def decode(source_text: str, source_unit: str = "<string>") -> DecodeResult:
    """
    Decode one source unit.

    Args:
        source_text: YAML document text
        source_unit: Name used to attribute errors

    Returns:
        DecodeResult with the declared version, the decoded records (with
        their element indices) and one DecodeError per malformed element

    Raises:
        MalformedSource: If the document itself is not a challenge document
        UnsupportedVersion: If `version` is missing or not supported
    """
    try:
        document = yaml.safe_load(source_text)
    except yaml.YAMLError as e:
        raise MalformedSource(source_unit, f"invalid YAML: {e}") from e

    if not isinstance(document, dict):
        raise MalformedSource(
            source_unit, f"expected a mapping at the top level, got {type(document).__name__}"
        )

    version = document.get("version")
    if isinstance(version, bool) or version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(source_unit, version)

    elements = document.get("challenges")
    if elements is None:
        elements = []
    if not isinstance(elements, list):
        raise MalformedSource(source_unit, "`challenges` must be a list")

    result = DecodeResult(version=version)
    for index, element in enumerate(elements):
        try:
            record = ChallengeRecord.model_validate(element)
        except ValidationError as e:
            cause = _describe_validation_error(e)
            logger.debug(f"{source_unit}[{index}] failed to decode: {cause}")
            result.errors.append(DecodeError(source_unit=source_unit, index=index, cause=cause))
            continue
        result.records.append(record)
        result.indices.append(index)

    logger.debug(
        f"Decoded {source_unit}: {len(result.records)} records, {len(result.errors)} errors"
    )
    return result


def _describe_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into 'loc: message; loc: message'."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<element>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def encode_record(record: ChallengeRecord) -> dict[str, Any]:
    """
    Convert a record to its source-format mapping.

    Optional keys are omitted when unset so encoded documents look like
    hand-authored ones.
    """
    data = record.model_dump(by_alias=True, mode="json")

    description_format = data.pop("description_format")
    if description_format == DescriptionFormat.MARKDOWN.value:
        data["description-markdown"] = data.pop("description")

    if data.get("id-alias") is None:
        data.pop("id-alias", None)
    for key in ("name-en", "description-markdown-path", "description-markdown_en", "description-markdown-path_en"):
        if data.get(key) is None:
            data.pop(key, None)
    if not data.get("ignored"):
        data.pop("ignored", None)

    for solution in data["solutions"]:
        if not solution.get("author"):
            solution.pop("author", None)

    ordered = {key: data[key] for key in KEY_ORDER if key in data}
    return ordered


def encode(records: Iterable[ChallengeRecord], version: int = CURRENT_VERSION) -> str:
    """
    Encode records as one source unit.

    decode(encode(records)).records == list(records) for any decodable records.
    """
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion("<encode>", version)
    document = {
        "version": version,
        "challenges": [encode_record(record) for record in records],
    }
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
