"""
challenge-vfs - Challenge Content Repository

Loads declaratively authored challenge records from YAML source units,
validates them, and exposes the validated corpus as a read-only virtual
filesystem for directory-browser style navigation.

Example:
    >>> from challenge_vfs import ChallengeRepository
    >>> repo = ChallengeRepository("./docs/challenges")
    >>> result = repo.load()
    >>> repo.list_directory("Web")
    ['mock-challenge-1', 'mock-challenge-2']
    >>> nav = repo.navigator()
    >>> nav.open("Web")
    ['mock-challenge-1', 'mock-challenge-2']
    >>> print(nav.open("mock-challenge-1"))

Main Classes:
    ChallengeRepository: Primary entry point (load, browse, search)
    Navigator: Stateful cursor over the directory tree
    VFSShell: Text command interface over a Navigator
    VFSConfig: Configuration management
"""

__version__ = "0.1.0"


# Public API - lazy imports keep `import challenge_vfs` cheap
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "ChallengeRepository":
        from challenge_vfs.api.repository import ChallengeRepository
        return ChallengeRepository

    if name == "VFSShell":
        from challenge_vfs.api.shell import VFSShell
        return VFSShell

    if name == "VFSConfig":
        from challenge_vfs.config.settings import VFSConfig
        return VFSConfig

    if name == "Navigator":
        from challenge_vfs.vfs.navigator import Navigator
        return Navigator

    # Pipeline functions
    if name in ("decode", "encode", "validate", "load"):
        from challenge_vfs import ingestion
        return getattr(ingestion, name)

    if name == "build_tree":
        from challenge_vfs.vfs.tree import build_tree
        return build_tree

    # Types
    if name in ("ChallengeRecord", "Solution", "DirectoryNode", "NavigatorState", "LoadResult"):
        from challenge_vfs import types
        return getattr(types, name)

    raise AttributeError(f"module 'challenge_vfs' has no attribute {name!r}")


__all__ = [
    # Main classes
    "ChallengeRepository",
    "Navigator",
    "VFSShell",
    "VFSConfig",

    # Pipeline functions
    "decode",
    "encode",
    "validate",
    "load",
    "build_tree",

    # Types
    "ChallengeRecord",
    "Solution",
    "DirectoryNode",
    "NavigatorState",
    "LoadResult",

    # Version
    "__version__",
]
