"""Tests for path resolution and the browsing cursor."""

import pytest

from challenge_vfs.exceptions import NotADirectory, NotAFile, PathNotFound
from challenge_vfs.types import DirectoryNode, NavigatorState
from challenge_vfs.vfs import (
    Navigator,
    build_tree,
    get_file_content,
    go_back,
    list_directory,
    open_entry,
    render_record,
    resolve,
    split_path,
)


@pytest.fixture
def records(make_record):
    return [
        make_record(12, platform="Web"),
        make_record(1, platform="Web"),
        make_record(7, platform="API"),
    ]


@pytest.fixture
def tree(records):
    return build_tree(records)


class TestPathFunctions:
    """Pure functions over the tree."""

    def test_split_path(self):
        assert split_path("") == ()
        assert split_path("/") == ()
        assert split_path("//Web//x/") == ("Web", "x")
        assert split_path(["Web", "a/b"]) == ("Web", "a", "b")

    def test_list_root(self, tree):
        assert list_directory(tree, "") == ["API", "Web"]
        assert list_directory(tree, "/") == ["API", "Web"]

    def test_list_branch(self, tree):
        assert list_directory(tree, "Web") == ["mock-challenge-1", "mock-challenge-12"]
        assert list_directory(tree, ["Web"]) == ["mock-challenge-1", "mock-challenge-12"]

    def test_file_content_is_rendered_record(self, tree, records):
        assert get_file_content(tree, "Web/mock-challenge-12") == render_record(records[0])

    def test_list_leaf_is_not_a_directory(self, tree):
        with pytest.raises(NotADirectory):
            list_directory(tree, "Web/mock-challenge-12")

    def test_missing_path(self, tree):
        with pytest.raises(PathNotFound) as exc_info:
            get_file_content(tree, "nonexistent/path")
        assert exc_info.value.path == "nonexistent"

    def test_read_branch_is_not_a_file(self, tree):
        with pytest.raises(NotAFile):
            get_file_content(tree, "Web")

    def test_path_below_leaf_not_found(self, tree):
        with pytest.raises(PathNotFound):
            resolve(tree, "Web/mock-challenge-12/extra")

    def test_literal_file_leaf(self):
        root = DirectoryNode.branch("", [DirectoryNode.file("README", "hello")])
        assert get_file_content(root, "README") == "hello"

    def test_open_entry_branch_pushes(self, tree):
        state, result = open_entry(tree, NavigatorState(), "Web")
        assert state.path == ("Web",)
        assert result == ["mock-challenge-1", "mock-challenge-12"]

    def test_open_entry_leaf_keeps_state(self, tree, records):
        start = NavigatorState(path=("Web",))
        state, result = open_entry(tree, start, "mock-challenge-12")
        assert state == start
        assert result == render_record(records[0])

    def test_go_back_at_root(self):
        assert go_back(NavigatorState()) == NavigatorState()


class TestNavigator:
    """Stateful cursor semantics."""

    def test_starts_at_root(self, tree):
        nav = Navigator(tree)
        assert nav.current_path == ()
        assert nav.pwd() == "/"
        assert nav.listing() == ["API", "Web"]

    def test_open_then_back_restores_path(self, tree):
        nav = Navigator(tree)
        nav.open("Web")
        assert nav.pwd() == "/Web"
        assert nav.back() == ["API", "Web"]
        assert nav.current_path == ()

    def test_back_at_root_is_noop(self, tree):
        nav = Navigator(tree)
        nav.back()
        nav.back()
        assert nav.state.is_root

    def test_open_leaf_does_not_move(self, tree, records):
        nav = Navigator(tree)
        nav.open("Web")
        content = nav.open("mock-challenge-12")
        assert content == render_record(records[0])
        assert nav.current_path == ("Web",)

    def test_failed_open_leaves_state_unchanged(self, tree):
        nav = Navigator(tree)
        nav.open("Web")
        with pytest.raises(PathNotFound):
            nav.open("missing")
        assert nav.current_path == ("Web",)

    def test_absolute_access_ignores_state(self, tree):
        nav = Navigator(tree)
        nav.open("API")
        assert nav.list_directory("Web") == ["mock-challenge-1", "mock-challenge-12"]
        assert nav.get_file_content("API/mock-challenge-7").startswith("# Mock challenge #7")
        assert nav.current_path == ("API",)

    def test_reset(self, tree):
        nav = Navigator(tree)
        nav.open("Web")
        assert nav.reset() == ["API", "Web"]
        assert nav.state == NavigatorState()

    def test_restore_state(self, tree):
        nav = Navigator(tree, NavigatorState(path=("Web",)))
        assert nav.listing() == ["mock-challenge-1", "mock-challenge-12"]

    def test_stale_state_rejected(self, tree):
        with pytest.raises(PathNotFound):
            Navigator(tree, NavigatorState(path=("Gone",)))

    def test_state_pointing_at_leaf_rejected(self, tree):
        with pytest.raises(NotADirectory):
            Navigator(tree, NavigatorState(path=("Web", "mock-challenge-12")))


class TestRenderRecord:
    """Leaf content for a record."""

    def test_sections(self, make_record):
        content = render_record(make_record(3))
        assert content.startswith("# Mock challenge #3\n")
        assert "- difficulty: 3/5" in content
        assert "- link: https://challenge.domain.com/quiz/3" in content
        assert "1. [Write-up](https://example.com/writeup) - Blog, by Alice" in content
        assert "## Description (English)" not in content

    def test_english_description(self, make_record):
        content = render_record(make_record(3, **{"description-markdown_en": "In English."}))
        assert "## Description (English)\n\nIn English." in content
        assert content.index("## Description (English)") < content.index("## Solutions")

    def test_no_solutions(self, make_record):
        assert "None yet." in render_record(make_record(3, solutions=[]))
