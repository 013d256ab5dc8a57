"""
Virtual Filesystem

Read-only hierarchical view over a loaded corpus.

Modules:
    tree: Corpus -> DirectoryNode projection
    navigator: Path resolution and the browsing cursor
    render: Leaf content rendering
"""

from challenge_vfs.vfs.navigator import (
    Navigator,
    get_file_content,
    go_back,
    list_directory,
    open_entry,
    resolve,
    split_path,
)
from challenge_vfs.vfs.render import leaf_content, render_record
from challenge_vfs.vfs.tree import build_tree

__all__ = [
    "build_tree",
    "Navigator",
    "resolve",
    "split_path",
    "list_directory",
    "get_file_content",
    "open_entry",
    "go_back",
    "render_record",
    "leaf_content",
]
