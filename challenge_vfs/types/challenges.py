"""
Challenge Record Types

Records are decoded from YAML source units (see ingestion.codec) and are
immutable once loaded.

Source key mapping:
    id                    -> id
    id-alias              -> id_alias
    name (or title)       -> name
    name-en               -> name_en
    difficulty-level      -> difficulty_level  (also accepts "difficulty")
    description           -> description, description_format="text"
    description-markdown  -> description, description_format="markdown"
    description-markdown-path     -> description_path (file read by the loader)
    description-markdown_en       -> description_en
    description-markdown-path_en  -> description_en_path
    base64-url            -> base64_url
    is-expired            -> is_expired
    create-time           -> create_time
    update-time           -> update_time

The models only enforce types. Value constraints (difficulty range,
non-empty tags, decodable URL, time ordering) are checked by
ingestion.validation so every violation of a record is reported at once.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from challenge_vfs.utils.text import decode_base64_url

DEFAULT_PLATFORM = "Web"


class DescriptionFormat(str, Enum):
    """Which source key carried the description."""

    TEXT = "text"
    MARKDOWN = "markdown"


class Solution(BaseModel):
    """
    A write-up or reference solution for a challenge.

    Attributes:
        title: Display title
        url: Absolute URL of the write-up
        source: Free-text label (e.g. "GitHub", "Blog")
        author: Author name, empty when unknown
    """

    title: str = ""
    url: str = ""
    source: str = ""
    author: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("title", "url", "source", "author", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ChallengeRecord(BaseModel):
    """
    One declaratively authored challenge.

    Identity:
        `id` is an opaque identifier (integer or string). `key` is its
        string form and is what corpus-level uniqueness is checked on.
        `id_alias` is an optional human-readable identifier, also unique.
    """

    id: int | str
    id_alias: str | None = Field(default=None, alias="id-alias")
    tags: tuple[str, ...] = ()
    platform: str = DEFAULT_PLATFORM
    name: str = Field(
        default="",
        validation_alias=AliasChoices("name", "title"),
        serialization_alias="name",
    )
    name_en: str | None = Field(default=None, alias="name-en")
    difficulty_level: int = Field(
        validation_alias=AliasChoices("difficulty-level", "difficulty", "difficulty_level"),
        serialization_alias="difficulty-level",
    )
    description: str = ""
    description_format: DescriptionFormat = DescriptionFormat.TEXT
    description_path: str | None = Field(default=None, alias="description-markdown-path")
    description_en: str | None = Field(default=None, alias="description-markdown_en")
    description_en_path: str | None = Field(default=None, alias="description-markdown-path_en")
    base64_url: str = Field(default="", alias="base64-url")
    is_expired: bool = Field(default=False, alias="is-expired")
    ignored: bool = False
    solutions: tuple[Solution, ...] = ()
    create_time: datetime = Field(alias="create-time")
    update_time: datetime = Field(alias="update-time")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=False,
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_description(cls, data: Any) -> Any:
        """Fold `description-markdown` into `description` + format flag."""
        if not isinstance(data, dict) or "description-markdown" not in data:
            return data
        data = dict(data)
        data["description"] = data.pop("description-markdown")
        data["description_format"] = DescriptionFormat.MARKDOWN
        return data

    @field_validator("id", "difficulty_level", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        # YAML true/false would otherwise be read as 1/0
        if isinstance(value, bool):
            raise ValueError(f"expected an integer, got boolean {value}")
        return value

    @field_validator("name", "description", "base64_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("platform", mode="before")
    @classmethod
    def _default_platform(cls, value: Any) -> Any:
        return DEFAULT_PLATFORM if value is None else value

    @field_validator("tags", "solutions", mode="before")
    @classmethod
    def _none_as_empty_sequence(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("create_time", "update_time", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError:
                raise ValueError(
                    f"expected a 'YYYY-MM-DD HH:MM:SS' timestamp, got {value!r}"
                ) from None
        # YAML loads unquoted dates as datetime.date
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime(value.year, value.month, value.day)
        return value

    @field_serializer("create_time", "update_time")
    def _format_timestamp(self, value: datetime) -> str:
        return value.isoformat(sep=" ")

    # === Derived values ===

    @property
    def key(self) -> str:
        """String form of `id`; 12 and "12" are the same challenge."""
        return str(self.id)

    @property
    def display_id(self) -> str:
        """Alias when present, otherwise the id."""
        return self.id_alias or self.key

    @property
    def external_link(self) -> str | None:
        """The decoded target URL, or None if `base64_url` does not decode."""
        return decode_base64_url(self.base64_url)

    @property
    def is_markdown(self) -> bool:
        return self.description_format == DescriptionFormat.MARKDOWN
