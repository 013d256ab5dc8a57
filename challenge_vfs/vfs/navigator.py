"""
VFS Navigator

Path resolution over a DirectoryNode tree, as pure functions plus a thin
stateful cursor.

Pure functions (take the tree, never mutate anything):
    split_path, resolve, list_directory, get_file_content, open_entry, go_back

Navigator (one per browsing session, not thread-safe):
    list_directory(path) / get_file_content(path)  - absolute, state untouched
    open(name)   - directory: descend and return its listing
                   file: return its content, stay in the current directory
    back()       - pop one segment; no-op at the root
    reset()      - return to the root

Paths are "/"-joined segments from the root. Leading/trailing and
repeated slashes are ignored, so "", "/" and "//" all mean the root.
"""

from __future__ import annotations

from typing import Sequence, Union

from challenge_vfs.exceptions import NotADirectory, NotAFile, PathNotFound
from challenge_vfs.types import DirectoryNode, NavigatorState
from challenge_vfs.vfs.render import leaf_content

PathLike = Union[str, Sequence[str]]

# Result of open(): a listing for directories, content for files
OpenResult = Union[list[str], str]


def split_path(path: PathLike) -> tuple[str, ...]:
    """Normalize a path string or segment sequence into segments."""
    if isinstance(path, str):
        segments = path.split("/")
    else:
        segments = [part for segment in path for part in segment.split("/")]
    return tuple(segment for segment in segments if segment)


def join_path(segments: Sequence[str]) -> str:
    return "/".join(segments)


def resolve(root: DirectoryNode, path: PathLike) -> DirectoryNode:
    """
    Resolve a path from the root.

    Raises:
        PathNotFound: If any segment does not exist, including a segment
            below a leaf
    """
    segments = split_path(path)
    node = root
    for depth, segment in enumerate(segments):
        child = node.child(segment) if node.is_branch else None
        if child is None:
            raise PathNotFound(join_path(segments[: depth + 1]))
        node = child
    return node


def list_directory(root: DirectoryNode, path: PathLike) -> list[str]:
    """
    Child names of the branch at `path`, in lexicographic order.

    Raises:
        PathNotFound: If nothing resolves
        NotADirectory: If `path` is a leaf
    """
    node = resolve(root, path)
    if not node.is_branch:
        raise NotADirectory(join_path(split_path(path)))
    return node.child_names()


def get_file_content(root: DirectoryNode, path: PathLike) -> str:
    """
    Content of the leaf at `path`.

    Raises:
        PathNotFound: If nothing resolves
        NotAFile: If `path` is a branch
    """
    node = resolve(root, path)
    if node.is_branch:
        raise NotAFile(join_path(split_path(path)))
    return leaf_content(node)


def open_entry(
    root: DirectoryNode,
    state: NavigatorState,
    name: str,
) -> tuple[NavigatorState, OpenResult]:
    """
    Open `name` relative to `state`.

    Returns:
        (new state, listing) for a branch, (unchanged state, content) for a leaf

    Raises:
        PathNotFound: If `name` does not resolve under the current path
    """
    segments = split_path(name)
    if not segments:
        return state, list_directory(root, state.path)

    node = resolve(root, state.path + segments)
    if node.is_branch:
        new_state = state.push(*segments)
        return new_state, node.child_names()
    return state, leaf_content(node)


def go_back(state: NavigatorState) -> NavigatorState:
    return state.pop()


class Navigator:
    """
    Stateful browsing cursor over a tree.

    The tree is shared read-only; only `state` changes, and only through
    open(), back() and reset(). A failed call leaves the state unchanged.

    Example:
        >>> nav = Navigator(tree)
        >>> nav.open("Web")
        ['mock-challenge-1', 'mock-challenge-12']
        >>> content = nav.open("mock-challenge-12")   # still in /Web
        >>> nav.back()
        ['API', 'Web']
        >>> nav.current_path
        ()
    """

    def __init__(self, root: DirectoryNode, state: NavigatorState | None = None) -> None:
        if not root.is_branch:
            raise NotADirectory(root.name)
        self._root = root
        self._state = state or NavigatorState()
        # Fail fast on a stale state (e.g. restored after a reload)
        list_directory(self._root, self._state.path)

    # === State ===

    @property
    def root(self) -> DirectoryNode:
        return self._root

    @property
    def state(self) -> NavigatorState:
        """Current position as a serializable value."""
        return self._state

    @property
    def current_path(self) -> tuple[str, ...]:
        return self._state.path

    def pwd(self) -> str:
        return str(self._state)

    # === Absolute access (state untouched) ===

    def list_directory(self, path: PathLike = "") -> list[str]:
        return list_directory(self._root, path)

    def get_file_content(self, path: PathLike) -> str:
        return get_file_content(self._root, path)

    # === Navigation ===

    def listing(self) -> list[str]:
        """Listing of the current directory."""
        return list_directory(self._root, self._state.path)

    def open(self, name: str) -> OpenResult:
        self._state, result = open_entry(self._root, self._state, name)
        return result

    def back(self) -> list[str]:
        """Go up one level and return the new listing. Never fails."""
        self._state = go_back(self._state)
        return self.listing()

    def reset(self) -> list[str]:
        self._state = NavigatorState()
        return self.listing()
