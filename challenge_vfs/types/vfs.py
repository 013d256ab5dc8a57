"""
VFS Types

The browsing tree and the cursor over it.

    DirectoryNode: built once per corpus load, never mutated
    NavigatorState: the current path, replaced (not mutated) on navigation
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator

from challenge_vfs.types.challenges import ChallengeRecord


class TaxonomyKey(str, Enum):
    """Record attribute that forms the top-level branches."""

    PLATFORM = "platform"
    TAG = "tag"
    DIFFICULTY = "difficulty"


class DirectoryNode(BaseModel):
    """
    A node of the virtual filesystem.

    A branch has `children` (ordered by name). A leaf has either a
    `record` (content rendered on demand) or literal `content`.
    """

    name: str
    children: tuple[DirectoryNode, ...] | None = None
    record: ChallengeRecord | None = None
    content: str | None = None

    model_config = ConfigDict(frozen=True)

    _index: dict[str, DirectoryNode] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_shape(self) -> DirectoryNode:
        present = [
            self.children is not None,
            self.record is not None,
            self.content is not None,
        ]
        if sum(present) != 1:
            raise ValueError("a node needs exactly one of children, record or content")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._index = {child.name: child for child in self.children or ()}

    @classmethod
    def branch(cls, name: str, children: list[DirectoryNode] | tuple[DirectoryNode, ...] = ()) -> DirectoryNode:
        """Create a branch; children are ordered lexicographically by name."""
        ordered = tuple(sorted(children, key=lambda node: node.name))
        names = [node.name for node in ordered]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate child names under {name!r}")
        return cls(name=name, children=ordered)

    @classmethod
    def leaf(cls, name: str, record: ChallengeRecord) -> DirectoryNode:
        return cls(name=name, record=record)

    @classmethod
    def file(cls, name: str, content: str) -> DirectoryNode:
        return cls(name=name, content=content)

    @property
    def is_branch(self) -> bool:
        return self.children is not None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def child(self, name: str) -> DirectoryNode | None:
        return self._index.get(name)

    def child_names(self) -> list[str]:
        return [child.name for child in self.children or ()]

    def iter_leaves(self, prefix: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], DirectoryNode]]:
        """Yield (path, leaf) pairs in depth-first, name order."""
        for child in self.children or ():
            path = prefix + (child.name,)
            if child.is_branch:
                yield from child.iter_leaves(path)
            else:
                yield path, child


class NavigatorState(BaseModel):
    """
    Cursor position in the tree: path segments from the root.

    The empty path is the root.
    """

    path: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_root(self) -> bool:
        return not self.path

    def push(self, *segments: str) -> NavigatorState:
        return NavigatorState(path=self.path + segments)

    def pop(self) -> NavigatorState:
        """Drop the last segment; the root stays the root."""
        return NavigatorState(path=self.path[:-1])

    def __str__(self) -> str:
        return "/" + "/".join(self.path)
