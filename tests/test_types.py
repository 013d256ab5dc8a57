"""Tests for record, error and VFS types."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from challenge_vfs.types import (
    ChallengeRecord,
    DescriptionFormat,
    DirectoryNode,
    ErrorKind,
    LoadError,
    LoadResult,
    NavigatorState,
    Solution,
)


class TestChallengeRecord:
    """Tests for ChallengeRecord decoding from source-format mappings."""

    def test_hyphenated_keys_map_to_fields(self, make_record):
        """Source keys like id-alias and difficulty-level populate fields."""
        record = make_record(12)
        assert record.id == 12
        assert record.id_alias == "mock-challenge-12"
        assert record.difficulty_level == 3
        assert record.is_expired is False
        assert record.tags == ("XSS", "CSRF")
        assert record.create_time == datetime(2024, 1, 2, 3, 4, 5)

    def test_populate_by_field_name(self):
        """Records can be constructed with python field names."""
        record = ChallengeRecord(
            id="alpha",
            name="Alpha",
            difficulty_level=1,
            create_time=datetime(2024, 1, 1),
            update_time=datetime(2024, 1, 1),
        )
        assert record.id == "alpha"
        assert record.platform == "Web"
        assert record.solutions == ()

    def test_title_accepted_for_name(self, make_element):
        element = make_element(1, name=None, title="From title")
        assert ChallengeRecord.model_validate(element).name == "From title"

    def test_difficulty_accepted_for_difficulty_level(self, make_element):
        element = make_element(1, **{"difficulty-level": None, "difficulty": 4})
        assert ChallengeRecord.model_validate(element).difficulty_level == 4

    def test_description_markdown_sets_format(self, make_element):
        """description-markdown is folded into description with a format flag."""
        element = make_element(1, description=None, **{"description-markdown": "# Hi"})
        record = ChallengeRecord.model_validate(element)
        assert record.description == "# Hi"
        assert record.description_format == DescriptionFormat.MARKDOWN
        assert record.is_markdown

    def test_plain_description_format(self, make_record):
        record = make_record(1)
        assert record.description_format == DescriptionFormat.TEXT
        assert not record.is_markdown

    def test_missing_id_is_rejected(self, make_element):
        element = make_element(1)
        del element["id"]
        with pytest.raises(ValidationError):
            ChallengeRecord.model_validate(element)

    def test_missing_difficulty_is_rejected(self, make_element):
        with pytest.raises(ValidationError):
            ChallengeRecord.model_validate(make_element(1, **{"difficulty-level": None}))

    def test_bad_timestamp_is_rejected(self, make_element):
        with pytest.raises(ValidationError):
            ChallengeRecord.model_validate(make_element(1, **{"create-time": "yesterday"}))

    def test_yaml_native_timestamps(self, make_element):
        """YAML may hand over datetime/date objects instead of strings."""
        element = make_element(
            1,
            **{"create-time": date(2024, 1, 2), "update-time": datetime(2024, 1, 3, 10, 0)},
        )
        record = ChallengeRecord.model_validate(element)
        assert record.create_time == datetime(2024, 1, 2)
        assert record.update_time == datetime(2024, 1, 3, 10, 0)

    def test_out_of_range_values_still_decode(self, make_element):
        """Value constraints are left to the validator."""
        element = make_element(1, tags=[], **{"difficulty-level": 7, "base64-url": "!!!"})
        record = ChallengeRecord.model_validate(element)
        assert record.difficulty_level == 7
        assert record.tags == ()

    def test_unknown_keys_ignored(self, make_element):
        record = ChallengeRecord.model_validate(make_element(1, number="42"))
        assert not hasattr(record, "number")

    def test_record_is_frozen(self, make_record):
        record = make_record(1)
        with pytest.raises(ValidationError):
            record.name = "changed"

    def test_key_and_display_id(self, make_record):
        record = make_record(7)
        assert record.key == "7"
        assert record.display_id == "mock-challenge-7"
        assert make_record(7, **{"id-alias": None}).display_id == "7"

    def test_external_link(self, make_record, encode_url):
        record = make_record(1, **{"base64-url": encode_url("https://ctf.example.org/x")})
        assert record.external_link == "https://ctf.example.org/x"
        assert make_record(1, **{"base64-url": "!!!"}).external_link is None

    def test_timestamps_serialize_as_source_format(self, make_record):
        data = make_record(1).model_dump(by_alias=True)
        assert data["create-time"] == "2024-01-02 03:04:05"


class TestSolution:
    """Tests for Solution type."""

    def test_author_defaults_to_empty(self):
        solution = Solution(title="T", url="https://example.com", source="GitHub")
        assert solution.author == ""

    def test_null_fields_become_empty(self):
        solution = Solution.model_validate({"title": "T", "url": "https://x.org", "author": None})
        assert solution.author == ""
        assert solution.source == ""


class TestLoadTypes:
    """Tests for LoadError and LoadResult."""

    def test_load_error_str_with_index(self):
        error = LoadError(
            kind=ErrorKind.OUT_OF_RANGE,
            source_unit="a.yml",
            index=2,
            field="difficulty-level",
            message="difficulty 7 is outside [1, 5]",
        )
        assert str(error) == "a.yml[2]: OutOfRange (difficulty-level): difficulty 7 is outside [1, 5]"

    def test_load_error_str_unit_level(self):
        error = LoadError(kind=ErrorKind.UNSUPPORTED_VERSION, source_unit="b.yml", message="v2")
        assert str(error) == "b.yml: UnsupportedVersion: v2"

    def test_error_kind_values_match_taxonomy(self):
        assert ErrorKind.DUPLICATE_ID.value == "DuplicateId"
        assert ErrorKind("TimeOrderViolation") == ErrorKind.TIME_ORDER_VIOLATION

    def test_load_result_helpers(self):
        result = LoadResult(errors=[
            LoadError(kind=ErrorKind.BLANK_TAG, source_unit="a.yml", index=0, message="x"),
            LoadError(kind=ErrorKind.DUPLICATE_ID, source_unit="b.yml", index=0, message="y"),
        ])
        assert not result.ok
        assert len(result.errors_for("a.yml")) == 1
        assert result.errors_of_kind(ErrorKind.DUPLICATE_ID)[0].source_unit == "b.yml"
        assert LoadResult().ok


class TestDirectoryNode:
    """Tests for DirectoryNode shape rules."""

    def test_branch_orders_children(self, make_record):
        node = DirectoryNode.branch("root", [
            DirectoryNode.file("b", "B"),
            DirectoryNode.file("a", "A"),
        ])
        assert node.child_names() == ["a", "b"]
        assert node.child("a").content == "A"
        assert node.child("missing") is None

    def test_empty_branch_is_branch(self):
        node = DirectoryNode.branch("empty")
        assert node.is_branch
        assert node.child_names() == []

    def test_leaf_requires_exactly_one_payload(self, make_record):
        with pytest.raises(ValidationError):
            DirectoryNode(name="x")
        with pytest.raises(ValidationError):
            DirectoryNode(name="x", record=make_record(1), content="both")

    def test_duplicate_child_names_rejected(self):
        with pytest.raises(ValueError):
            DirectoryNode.branch("root", [DirectoryNode.file("a", "1"), DirectoryNode.file("a", "2")])

    def test_iter_leaves(self, make_record):
        root = DirectoryNode.branch("", [
            DirectoryNode.branch("Web", [DirectoryNode.leaf("one", make_record(1))]),
            DirectoryNode.file("README", "hi"),
        ])
        paths = [path for path, _ in root.iter_leaves()]
        assert paths == [("README",), ("Web", "one")]

    def test_structural_equality(self, make_record):
        build = lambda: DirectoryNode.branch("", [DirectoryNode.leaf("a", make_record(1))])
        assert build() == build()


class TestNavigatorState:
    """Tests for NavigatorState value semantics."""

    def test_root_by_default(self):
        state = NavigatorState()
        assert state.is_root
        assert str(state) == "/"

    def test_push_and_pop(self):
        state = NavigatorState().push("Web", "sub")
        assert state.path == ("Web", "sub")
        assert str(state) == "/Web/sub"
        assert state.pop().path == ("Web",)

    def test_pop_at_root_stays_at_root(self):
        assert NavigatorState().pop() == NavigatorState()

    def test_json_round_trip(self):
        state = NavigatorState(path=("Web",))
        assert NavigatorState.model_validate_json(state.model_dump_json()) == state
