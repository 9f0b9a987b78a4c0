"""
Tests for the output module.

Tests value formatting, the CSV, JSON and SQL emitters, and OutputWriter.
"""

import json
from datetime import date
from decimal import Decimal

import pytest

from mocksmith.config import SeedConfig
from mocksmith.errors import CancelledError, OutputError, ValidationError
from mocksmith.output import (
    CsvEmitter,
    EmitResult,
    JsonEmitter,
    OutputWriter,
    SqlEmitter,
    format_csv_value,
    format_sql_value,
    get_emitter,
    insert_statement,
)


@pytest.fixture
def sample_rows():
    """Rows with mixed value types."""
    return [
        {"id": 1, "name": "O'Brien", "active": True, "tags": ["a", "b"], "note": None},
        {"id": 2, "name": "Ada", "active": False, "tags": [], "note": "x"},
    ]


def cancelling(rows, after):
    """Yield ``after`` rows, then raise CancelledError."""
    for index, row in enumerate(rows):
        if index == after:
            raise CancelledError("seeding cancelled", table="t", row_index=index)
        yield row


def breaking(rows, after):
    """Yield ``after`` rows, then fail."""
    for index, row in enumerate(rows):
        if index == after:
            raise ValueError("bad row")
        yield row


class TestFormatting:
    """Tests for value formatting."""

    def test_csv_values(self):
        assert format_csv_value(None) == ""
        assert format_csv_value(True) == "true"
        assert format_csv_value(b"\x01\xff") == "01ff"
        assert format_csv_value({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'
        assert format_csv_value(date(2024, 1, 2)) == "2024-01-02"
        assert format_csv_value(3.5) == "3.5"

    def test_sql_literals(self):
        assert format_sql_value(None) == "NULL"
        assert format_sql_value(False) == "FALSE"
        assert format_sql_value(42) == "42"
        assert format_sql_value(Decimal("1.50")) == "1.50"
        assert format_sql_value("it's") == "'it''s'"
        assert format_sql_value(b"\xde\xad") == "X'dead'"
        assert format_sql_value({"k": "v'"}) == """'{"k":"v''"}'"""

    def test_insert_statement(self):
        statement = insert_statement('we"ird', {"id": 1, "name": "O'Brien"})
        assert statement == 'INSERT INTO "we""ird" ("id", "name") VALUES (1, \'O\'\'Brien\');'


class TestCsvEmitter:
    """Tests for CsvEmitter."""

    def test_write(self, tmp_path, sample_rows):
        result = CsvEmitter().emit(tmp_path, "people", iter(sample_rows))
        assert result.rows == 2
        assert result.columns == ["id", "name", "active", "tags", "note"]
        assert result.path == tmp_path / "people.csv"
        lines = result.path.read_text().splitlines()
        assert lines[0] == "id,name,active,tags,note"
        assert lines[1] == '1,O\'Brien,true,"[""a"",""b""]",'
        assert lines[2] == "2,Ada,false,[],x"

    def test_missing_and_extra_keys(self, tmp_path):
        rows = [{"a": 1, "b": 2}, {"a": 3, "c": 4}]
        CsvEmitter().emit(tmp_path, "t", rows)
        assert (tmp_path / "t.csv").read_text() == "a,b\n1,2\n3,\n"

    def test_single_header_across_batches(self, tmp_path):
        rows = [{"n": i} for i in range(5)]
        result = CsvEmitter(batch_size=2).emit(tmp_path, "t", rows)
        assert result.rows == 5
        assert result.path.read_text() == "n\n0\n1\n2\n3\n4\n"

    def test_zero_rows(self, tmp_path):
        result = CsvEmitter().emit(tmp_path, "empty", [])
        assert result.rows == 0
        assert result.columns == []
        assert result.path.read_text() == ""

    def test_cancel_flushes_partial_batch(self, tmp_path):
        rows = [{"n": i} for i in range(10)]
        with pytest.raises(CancelledError):
            CsvEmitter(batch_size=100).emit(tmp_path, "t", cancelling(rows, 3))
        assert (tmp_path / "t.csv").read_text() == "n\n0\n1\n2\n"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OutputError) as exc_info:
            CsvEmitter().emit(tmp_path / "nope", "t", [{"a": 1}])
        assert exc_info.value.table == "t"


class TestJsonEmitter:
    """Tests for JsonEmitter."""

    def test_write(self, tmp_path, sample_rows):
        result = JsonEmitter().emit(tmp_path, "people", sample_rows)
        assert json.loads(result.path.read_text()) == sample_rows
        assert result.path.read_text().startswith("[\n  {\n    \"id\": 1,")

    def test_zero_rows(self, tmp_path):
        result = JsonEmitter().emit(tmp_path, "empty", [])
        assert result.path.read_text() == "[]\n"

    def test_unicode_and_bytes(self, tmp_path):
        JsonEmitter().emit(tmp_path, "t", [{"city": "Zürich", "blob": b"\x00\x01"}])
        assert json.loads((tmp_path / "t.json").read_text(encoding="utf-8")) == [{"city": "Zürich", "blob": "0001"}]

    def test_cancel_leaves_valid_json(self, tmp_path):
        rows = [{"n": i} for i in range(5)]
        with pytest.raises(CancelledError):
            JsonEmitter().emit(tmp_path, "t", cancelling(rows, 2))
        assert json.loads((tmp_path / "t.json").read_text()) == [{"n": 0}, {"n": 1}]


class TestSqlEmitter:
    """Tests for SqlEmitter."""

    def test_write(self, tmp_path):
        result = SqlEmitter().emit(tmp_path, "users", [{"id": 1, "ok": True}, {"id": 2, "ok": None}])
        assert result.path.read_text() == (
            'INSERT INTO "users" ("id", "ok") VALUES (1, TRUE);\n'
            'INSERT INTO "users" ("id", "ok") VALUES (2, NULL);\n'
        )

    def test_zero_rows(self, tmp_path):
        result = SqlEmitter().emit(tmp_path, "empty", [])
        assert result.rows == 0
        assert result.path.read_text() == ""


class TestFailedStreams:
    """A stream that fails leaves no file behind."""

    @pytest.mark.parametrize("emitter", [CsvEmitter(batch_size=1), JsonEmitter(), SqlEmitter()])
    def test_partial_file_removed(self, tmp_path, emitter):
        rows = [{"n": i} for i in range(5)]
        with pytest.raises(ValueError):
            emitter.emit(tmp_path, "t", breaking(rows, 3))
        assert list(tmp_path.iterdir()) == []


class TestOutputWriter:
    """Tests for OutputWriter."""

    def test_emitter_by_format(self, tmp_path):
        assert isinstance(OutputWriter(SeedConfig(output_dir=tmp_path, output_format="json")).emitter,
                          JsonEmitter)
        assert isinstance(get_emitter("SQL"), SqlEmitter)

    def test_unknown_format(self):
        with pytest.raises(ValidationError):
            get_emitter("parquet")
        with pytest.raises(ValidationError):
            SeedConfig(output_format="parquet")

    def test_bad_batch_size(self):
        with pytest.raises(ValidationError):
            SeedConfig(batch_size=0)

    def test_run_id_directory(self, tmp_path):
        writer = OutputWriter(SeedConfig(output_dir=tmp_path, run_id="r1"))
        assert writer.get_output_dir() == tmp_path / "r1"
        assert not writer.get_output_dir().exists()
        writer.prepare()
        assert writer.get_output_dir().is_dir()

    def test_prepare_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        writer = OutputWriter(SeedConfig(output_dir=blocker / "sub"))
        with pytest.raises(OutputError):
            writer.prepare()

    def test_manifest(self, tmp_path):
        config = SeedConfig(output_dir=tmp_path, output_format="csv", run_id="r1", schema_path="schema.yaml")
        writer = OutputWriter(config)
        writer.prepare()
        result = EmitResult(table="users", path=writer.get_output_dir() / "users.csv", rows=3,
                            columns=["id", "name"])
        path = writer.write_manifest([result], seed=7)

        manifest = json.loads(path.read_text())
        assert manifest["run_id"] == "r1"
        assert manifest["seed"] == 7
        assert manifest["schema"] == "schema.yaml"
        assert manifest["tables"] == {"users": {"rows": 3, "columns": ["id", "name"], "file": "users.csv"}}
        assert "generated_at" in manifest
