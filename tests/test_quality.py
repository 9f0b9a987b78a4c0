"""Tests for seed reports."""

import json
from pathlib import Path

from mocksmith.config import EngineConfig, SeedConfig
from mocksmith.engine import build_engine
from mocksmith.output import EmitResult
from mocksmith.schema import parse_schema
from mocksmith.seeder import Seeder
from mocksmith.utils import SeedReport


def blog_schema(seed_rows=None):
    return parse_schema({"tables": [
        {"name": "users", "row_count": 2, "columns": [{"name": "id", "generator": "uuid"}]},
        {"name": "posts", "row_count": 4, "seed_rows": seed_rows or [], "columns": [
            {"name": "id", "generator": "uuid"},
            {"name": "author_id", "foreign_key": "users.id"},
        ]},
    ]})


class TestSeedReport:
    """Tests for SeedReport."""

    def test_integrity_without_relationships(self):
        report = SeedReport(parse_schema({"tables": [{"name": "t", "columns": [{"name": "a"}]}]}))
        report.record_row("t", {"a": 1})
        assert report.integrity_score == 1.0

    def test_orphan_counted(self):
        report = SeedReport(blog_schema())
        report.record_row("users", {"id": "u1"})
        report.record_row("posts", {"id": "p1", "author_id": "u1"})
        report.record_row("posts", {"id": "p2", "author_id": "ghost"})

        assert report.integrity_score == 0.5
        check = report.to_dict()["referential_integrity"][0]
        assert check["child_table"] == "posts"
        assert check["checked"] == 2
        assert check["orphan_count"] == 1
        assert check["sample_orphans"] == ["ghost"]

    def test_unhashable_values(self):
        report = SeedReport(blog_schema())
        report.record_row("users", {"id": {"k": [1]}})
        report.record_row("posts", {"id": "p1", "author_id": {"k": [1]}})
        assert report.integrity_score == 1.0

    def test_orphan_samples_capped(self):
        report = SeedReport(blog_schema())
        for index in range(10):
            report.record_row("posts", {"id": index, "author_id": f"x{index}"})
        check = report.to_dict()["referential_integrity"][0]
        assert check["orphan_count"] == 10
        assert len(check["sample_orphans"]) == 5

    def test_record_table_and_summary(self, tmp_path):
        report = SeedReport(blog_schema(), seed=3, run_id="r")
        report.record_table(EmitResult("users", tmp_path / "users.csv", rows=2, columns=["id"]))
        report.record_table(EmitResult("posts", tmp_path / "posts.csv", rows=4, columns=["id", "author_id"]))

        data = report.to_dict()
        assert data["summary"] == {"total_tables": 2, "total_rows": 6, "integrity_score": 1.0}
        assert data["seed"] == 3
        assert data["run_id"] == "r"
        assert Path(data["tables"]["posts"]["file"]).name == "posts.csv"

    def test_save(self, tmp_path):
        report = SeedReport(blog_schema(), seed=3)
        path = report.save(tmp_path / "reports")
        assert path == tmp_path / "reports" / "report.json"
        assert json.loads(path.read_text())["seed"] == 3


class TestSeededIntegrity:
    """Integrity scores of real seeder runs."""

    def run(self, tmp_path, schema):
        config = SeedConfig(output_dir=tmp_path, seed=11)
        return Seeder(build_engine(EngineConfig(seed=11)), config, show_progress=False).run(schema)

    def test_generated_references_are_whole(self, tmp_path):
        report = self.run(tmp_path, blog_schema())
        assert report.integrity_score == 1.0
        assert report.to_dict()["referential_integrity"][0]["checked"] == 4

    def test_seed_row_orphan_lowers_score(self, tmp_path):
        report = self.run(tmp_path, blog_schema(seed_rows=[{"id": "p0", "author_id": "nobody"}]))
        assert report.integrity_score == 0.75
        assert report.to_dict()["referential_integrity"][0]["sample_orphans"] == ["nobody"]
