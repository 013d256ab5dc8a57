"""Tests for the repository loader (partial failure, ordering, duplicates)."""

from challenge_vfs.ingestion import load
from challenge_vfs.types import ErrorKind, SourceUnit


class TestLoadPartialFailure:
    """One bad record or unit never blocks the others."""

    def test_out_of_range_difficulty_excluded(self, make_element, make_unit):
        """difficulty-level: 7 -> OutOfRange, record excluded, load continues."""
        unit = make_unit(
            "a.yml",
            make_element(1),
            make_element(2, **{"difficulty-level": 7}),
            make_element(3),
        )
        result = load([unit])

        assert [r.id for r in result.records] == [1, 3]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.kind == ErrorKind.OUT_OF_RANGE
        assert (error.source_unit, error.index) == ("a.yml", 1)

    def test_invalid_base64_excluded(self, make_element, make_unit):
        result = load([make_unit("a.yml", make_element(1, **{"base64-url": "!!!"}), make_element(2))])
        assert [r.id for r in result.records] == [2]
        assert [e.kind for e in result.errors] == [ErrorKind.INVALID_ENCODING]

    def test_every_issue_of_a_record_reported(self, make_element, make_unit):
        unit = make_unit("a.yml", make_element(1, tags=[], **{"difficulty-level": 0}))
        result = load([unit])
        assert result.records == []
        assert {e.kind for e in result.errors} == {ErrorKind.OUT_OF_RANGE, ErrorKind.EMPTY_TAG_SET}
        assert all(e.index == 0 for e in result.errors)

    def test_unsupported_version_unit(self, make_element, make_unit):
        result = load([
            make_unit("old.yml", make_element(1), version=2),
            make_unit("new.yml", make_element(2)),
        ])
        assert [r.id for r in result.records] == [2]
        assert len(result.errors) == 1
        assert result.errors[0].kind == ErrorKind.UNSUPPORTED_VERSION
        assert result.errors[0].source_unit == "old.yml"
        assert result.errors[0].index is None

    def test_unreadable_unit(self, make_element, make_unit):
        result = load([
            SourceUnit(name="broken.yml", text="version: 1\nchallenges: [oops\n"),
            make_unit("ok.yml", make_element(1)),
        ])
        assert [r.id for r in result.records] == [1]
        assert result.errors[0].kind == ErrorKind.DECODE_ERROR
        assert result.errors[0].index is None

    def test_decode_and_validation_errors_ordered_by_index(self, make_element, make_unit):
        unit = make_unit(
            "a.yml",
            make_element(1, **{"difficulty-level": 9}),
            make_element(2, **{"difficulty-level": "x"}),
        )
        result = load([unit])
        assert [(e.index, e.kind) for e in result.errors] == [
            (0, ErrorKind.OUT_OF_RANGE),
            (1, ErrorKind.DECODE_ERROR),
        ]

    def test_ignored_records_skipped_silently(self, make_element, make_unit):
        unit = make_unit("a.yml", make_element(1, ignored=True), make_element(2))
        result = load([unit])
        assert [r.id for r in result.records] == [2]
        assert result.errors == []
        assert result.skipped == 1


class TestLoadDuplicates:
    """Corpus-level uniqueness across source units."""

    def test_duplicate_id_across_units(self, make_element, make_unit):
        """The second occurrence is reported; the first stays valid."""
        result = load([
            make_unit("first.yml", make_element(1)),
            make_unit("second.yml", make_element(1, **{"id-alias": "different"})),
        ])
        assert len(result.records) == 1
        assert result.records[0].id_alias == "mock-challenge-1"
        assert len(result.errors) == 1
        assert result.errors[0].kind == ErrorKind.DUPLICATE_ID
        assert result.errors[0].source_unit == "second.yml"

    def test_duplicate_alias_across_units(self, make_element, make_unit):
        result = load([
            make_unit("first.yml", make_element(1, **{"id-alias": "shared"})),
            make_unit("second.yml", make_element(2, **{"id-alias": "shared"})),
        ])
        assert [r.id for r in result.records] == [1]
        assert result.errors[0].kind == ErrorKind.DUPLICATE_ALIAS

    def test_invalid_record_does_not_claim_id(self, make_element, make_unit):
        """Only valid records take part in the uniqueness pass."""
        result = load([
            make_unit("first.yml", make_element(1, **{"difficulty-level": 9})),
            make_unit("second.yml", make_element(1)),
        ])
        assert [r.id for r in result.records] == [1]
        assert [e.kind for e in result.errors] == [ErrorKind.OUT_OF_RANGE]


class TestLoadDeterminism:
    """Ordering and idempotence."""

    def _units(self, make_element, make_unit):
        return [
            make_unit("b.yml", make_element(20), make_element(21)),
            make_unit("a.yml", make_element(10), make_element(11, **{"difficulty-level": 8})),
            make_unit("c.yml", make_element(30)),
        ]

    def test_source_unit_then_declaration_order(self, make_element, make_unit):
        result = load(self._units(make_element, make_unit))
        assert [r.id for r in result.records] == [20, 21, 10, 30]

    def test_idempotent(self, make_element, make_unit):
        units = self._units(make_element, make_unit)
        first, second = load(units), load(units)
        assert first.model_dump_json() == second.model_dump_json()

    def test_parallel_matches_sequential(self, make_element, make_unit):
        units = self._units(make_element, make_unit)
        units += [make_unit(f"extra_{i}.yml", make_element(100 + i)) for i in range(20)]
        sequential = load(units, workers=1)
        parallel = load(units, workers=4)
        assert parallel.model_dump_json() == sequential.model_dump_json()

    def test_empty_input(self):
        result = load([])
        assert result.records == []
        assert result.ok


class TestLoadUnreadableUnits:
    def test_unit_with_read_error_reported(self, make_element, make_unit):
        result = load([
            SourceUnit(name="bad.yml", text="", error="cannot read file: invalid utf-8"),
            make_unit("good.yml", make_element(1)),
        ])
        assert [r.id for r in result.records] == [1]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert (error.kind, error.source_unit, error.index) == (ErrorKind.DECODE_ERROR, "bad.yml", None)
        assert "invalid utf-8" in error.message


class TestDescriptionFiles:
    """Records whose description lives in a separate Markdown file."""

    @staticmethod
    def _reader(files):
        def read_file(unit, path):
            if path not in files:
                raise FileNotFoundError(f"no such file: {path}")
            return files[path]
        return read_file

    def test_file_replaces_inline_description(self, make_element, make_unit):
        element = make_element(1, **{
            "description-markdown-path": "one.md",
            "description-markdown-path_en": "one_en.md",
        })
        reader = self._reader({"one.md": "# From file", "one_en.md": "# In English"})
        record = load([make_unit("a.yml", element)], read_file=reader).records[0]
        assert record.description == "# From file"
        assert record.is_markdown
        assert record.description_en == "# In English"
        assert record.description_path == "one.md"

    def test_missing_file_rejects_record(self, make_element, make_unit):
        unit = make_unit(
            "a.yml",
            make_element(1, **{"description-markdown-path": "gone.md"}),
            make_element(2),
        )
        result = load([unit], read_file=self._reader({}))
        assert [r.id for r in result.records] == [2]
        error = result.errors[0]
        assert error.kind == ErrorKind.MISSING_FILE
        assert (error.index, error.field) == (0, "description-markdown-path")
        assert "gone.md" in error.message

    def test_without_reader_the_record_is_not_silently_emptied(self, make_element, make_unit):
        unit = make_unit("a.yml", make_element(1, **{"description-markdown-path_en": "en.md"}))
        result = load([unit])
        assert result.records == []
        assert result.errors_of_kind(ErrorKind.MISSING_FILE)[0].field == "description-markdown-path_en"

    def test_reader_receives_the_unit(self, make_element, make_unit):
        seen = []

        def read_file(unit, path):
            seen.append((unit.name, path))
            return "text"

        load([make_unit("dir/a.yml", make_element(1, **{"description-markdown-path": "x.md"}))], read_file=read_file)
        assert seen == [("dir/a.yml", "x.md")]
