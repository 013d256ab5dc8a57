"""Shared fixtures: builders for challenge elements and source units."""

import base64
from typing import Any, Callable

import pytest
import yaml

from challenge_vfs.types import ChallengeRecord, SourceUnit


def b64(url: str) -> str:
    return base64.b64encode(url.encode("utf-8")).decode("ascii")


def challenge_element(id: Any = 1, **overrides: Any) -> dict[str, Any]:
    """A valid source-format challenge mapping; keys use source names."""
    element: dict[str, Any] = {
        "id": id,
        "id-alias": f"mock-challenge-{id}",
        "tags": ["XSS", "CSRF"],
        "platform": "Web",
        "name": f"Mock challenge #{id}",
        "difficulty-level": 3,
        "description": f"Description of challenge {id}.",
        "base64-url": b64(f"https://challenge.domain.com/quiz/{id}"),
        "is-expired": False,
        "solutions": [
            {
                "title": "Write-up",
                "url": "https://example.com/writeup",
                "source": "Blog",
                "author": "Alice",
            }
        ],
        "create-time": "2024-01-02 03:04:05",
        "update-time": "2024-02-03 04:05:06",
    }
    for key, value in overrides.items():
        if value is None:
            element.pop(key, None)
        else:
            element[key] = value
    return element


def unit_text(*elements: dict[str, Any], version: Any = 1) -> str:
    return yaml.safe_dump({"version": version, "challenges": list(elements)}, sort_keys=False)


@pytest.fixture
def make_element() -> Callable[..., dict[str, Any]]:
    return challenge_element


@pytest.fixture
def make_unit() -> Callable[..., SourceUnit]:
    def _make(name: str, *elements: dict[str, Any], version: Any = 1) -> SourceUnit:
        return SourceUnit(name=name, text=unit_text(*elements, version=version))

    return _make


@pytest.fixture
def make_record() -> Callable[..., ChallengeRecord]:
    def _make(id: Any = 1, **overrides: Any) -> ChallengeRecord:
        return ChallengeRecord.model_validate(challenge_element(id, **overrides))

    return _make


@pytest.fixture
def encode_url() -> Callable[[str], str]:
    return b64
