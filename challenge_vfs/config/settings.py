"""
VFSConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> repo = ChallengeRepository("./docs/challenges")

    >>> # Explicit configuration
    >>> config = VFSConfig(taxonomy="tag", load_workers=4)
    >>> repo = ChallengeRepository("./docs/challenges", config=config)

    >>> # From config file
    >>> config = VFSConfig.from_file("./challenge-vfs.toml")

Environment Variables:
    CHALLENGE_VFS_SOURCE_DIR - Directory holding the YAML source units
    CHALLENGE_VFS_SOURCE_PATTERNS - Comma-separated glob patterns
    CHALLENGE_VFS_TAXONOMY - Top-level branch key: platform, tag, difficulty
    CHALLENGE_VFS_DEFAULT_PLATFORM - Branch for records without a platform
    CHALLENGE_VFS_LOAD_WORKERS - Threads used to decode/validate units
    CHALLENGE_VFS_INCLUDE_EXPIRED - Whether expired challenges get leaves
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, cast

from challenge_vfs.types import DEFAULT_PLATFORM, TaxonomyKey

# tomllib is built-in for Python 3.11+, tomli is its 3.10 backport
try:
    import tomllib
except ImportError:
    import tomli as tomllib


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return cast(dict[str, Any], tomllib.load(f))


OPTION_NAMES = (
    "source_dir",
    "source_patterns",
    "load_workers",
    "taxonomy",
    "default_platform",
    "include_expired",
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


class VFSConfig:
    """Configuration for challenge-vfs."""

    # === Sources ===

    source_dir: str = "docs/challenges"
    """Directory holding the YAML source units (searched recursively)"""

    source_patterns: tuple[str, ...] = ("*.yml", "*.yaml")
    """Glob patterns selecting source files"""

    # === Loader ===

    load_workers: int = 1
    """Threads used for per-unit decode/validate (1 = inline)"""

    # === Tree ===

    taxonomy: str = TaxonomyKey.PLATFORM.value
    """Top-level branch key: "platform", "tag", "difficulty" """

    default_platform: str = DEFAULT_PLATFORM
    """Branch used for records with a blank platform"""

    include_expired: bool = True
    """Whether expired challenges get a leaf in the tree"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option

        Raises:
            ValueError: On unknown options or invalid values
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if key not in OPTION_NAMES:
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

        self._normalize()

    def _load_from_env(self) -> None:
        """Load configuration from CHALLENGE_VFS_* environment variables."""
        if source_dir := os.getenv("CHALLENGE_VFS_SOURCE_DIR"):
            self.source_dir = source_dir
        if patterns := os.getenv("CHALLENGE_VFS_SOURCE_PATTERNS"):
            self.source_patterns = tuple(p.strip() for p in patterns.split(",") if p.strip())
        if taxonomy := os.getenv("CHALLENGE_VFS_TAXONOMY"):
            self.taxonomy = taxonomy
        if platform := os.getenv("CHALLENGE_VFS_DEFAULT_PLATFORM"):
            self.default_platform = platform
        if workers := os.getenv("CHALLENGE_VFS_LOAD_WORKERS"):
            self.load_workers = int(workers)
        if include_expired := os.getenv("CHALLENGE_VFS_INCLUDE_EXPIRED"):
            self.include_expired = _parse_bool("CHALLENGE_VFS_INCLUDE_EXPIRED", include_expired)

    def _normalize(self) -> None:
        """Validate values and coerce them to their canonical types."""
        try:
            self.taxonomy = TaxonomyKey(self.taxonomy).value
        except ValueError:
            choices = ", ".join(key.value for key in TaxonomyKey)
            raise ValueError(f"taxonomy must be one of {choices}, got {self.taxonomy!r}") from None
        if isinstance(self.source_patterns, str):
            self.source_patterns = (self.source_patterns,)
        self.source_patterns = tuple(self.source_patterns)
        self.source_dir = str(self.source_dir)
        self.load_workers = int(self.load_workers)
        if self.load_workers < 1:
            raise ValueError(f"load_workers must be >= 1, got {self.load_workers}")

    @property
    def taxonomy_key(self) -> TaxonomyKey:
        return TaxonomyKey(self.taxonomy)

    @classmethod
    def from_file(cls, path: str | Path) -> "VFSConfig":
        """
        Load configuration from TOML file.

        Example TOML:
            [sources]
            dir = "docs/challenges"
            patterns = ["*.yml"]

            [loader]
            workers = 4

            [tree]
            taxonomy = "tag"
            include_expired = false

        Args:
            path: Path to TOML configuration file

        Returns:
            VFSConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        # section -> {toml key: config key}
        section_mapping = {
            "sources": {"dir": "source_dir", "patterns": "source_patterns"},
            "loader": {"workers": "load_workers"},
            "tree": {
                "taxonomy": "taxonomy",
                "default_platform": "default_platform",
                "include_expired": "include_expired",
            },
        }

        flat_config: dict[str, Any] = {}
        for section, keys in section_mapping.items():
            for key, value in data.get(section, {}).items():
                if key not in keys:
                    raise ValueError(f"Unknown configuration option: [{section}] {key}")
                flat_config[keys[key]] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "VFSConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """Save configuration to a TOML file readable by from_file()."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # json string literals are valid TOML basic strings
        patterns = ", ".join(json.dumps(pattern) for pattern in self.source_patterns)
        lines = [
            "# challenge-vfs configuration",
            "",
            "[sources]",
            f"dir = {json.dumps(self.source_dir)}",
            f"patterns = [{patterns}]",
            "",
            "[loader]",
            f"workers = {self.load_workers}",
            "",
            "[tree]",
            f"taxonomy = {json.dumps(self.taxonomy)}",
            f"default_platform = {json.dumps(self.default_platform)}",
            f"include_expired = {str(self.include_expired).lower()}",
            "",
        ]
        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "VFSConfig":
        """Return new config with specified overrides."""
        new_config = VFSConfig.__new__(VFSConfig)
        for key in OPTION_NAMES:
            setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if key not in OPTION_NAMES:
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        new_config._normalize()
        return new_config
