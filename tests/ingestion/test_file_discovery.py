# -*- coding: utf-8 -*-
"""
File discovery tests.

Run: pytest tests/ingestion/test_file_discovery.py -v
"""
from pathlib import Path

import pytest

from ontocsv.ingestion.file_discovery import discover
from ontocsv.utils.exceptions import (
    CsvFileIncomplete,
    CsvFilesMissing,
    DirectoryUnreadable,
    OntologyFileMissing,
)


def make_dir(root: Path, files: dict) -> Path:
    """Create a directory holding the given {name: content} files."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (root / name).write_text(content, encoding="utf-8")
    return root


# ============================================================================
# Selection
# ============================================================================

class TestSelection:
    """Valid layouts"""

    def test_smaller_csv_is_categories(self, tmp_path):
        directory = make_dir(tmp_path / "in", {
            "onto.owl": "<rdf/>",
            "a_instances.csv": "x,y,z\nx,y,z\nx,y,z\n",
            "z_classes.csv": "A,B,C\n",
        })

        files = discover(directory)

        assert files.ontology_path == directory / "onto.owl"
        assert files.categories_path == directory / "z_classes.csv"
        assert files.instances_path == directory / "a_instances.csv"

    def test_extensions_case_insensitive(self, tmp_path):
        directory = make_dir(tmp_path / "in", {
            "ONTO.OWL": "<rdf/>",
            "classes.CSV": "A\n",
            "instances.Csv": "aaa\nbbb\n",
        })

        files = discover(directory)

        assert files.ontology_path.name == "ONTO.OWL"
        assert files.categories_path.name == "classes.CSV"
        assert files.instances_path.name == "instances.Csv"

    def test_other_files_and_subdirectories_ignored(self, tmp_path):
        directory = make_dir(tmp_path / "in", {
            "onto.owl": "<rdf/>",
            "classes.csv": "A\n",
            "instances.csv": "aaa\nbbb\n",
            "config.yml": "trim: true\n",
            "notes.txt": "hello",
        })
        (directory / "nested.csv").mkdir()
        make_dir(directory / "sub", {"other.owl": "<rdf/>", "tiny.csv": ""})

        files = discover(directory)

        assert files.categories_path.name == "classes.csv"
        assert files.instances_path.name == "instances.csv"

    def test_more_than_two_csv_uses_two_smallest(self, tmp_path, caplog):
        directory = make_dir(tmp_path / "in", {
            "onto.owl": "<rdf/>",
            "big.csv": "x" * 300,
            "medium.csv": "x" * 200,
            "small.csv": "x" * 100,
        })

        files = discover(directory)

        assert files.categories_path.name == "small.csv"
        assert files.instances_path.name == "medium.csv"
        assert "big.csv" in caplog.text

    def test_equal_sizes_ordered_by_name(self, tmp_path):
        directory = make_dir(tmp_path / "in", {
            "onto.owl": "<rdf/>",
            "b.csv": "12345",
            "a.csv": "12345",
        })

        files = discover(directory)

        assert files.categories_path.name == "a.csv"
        assert files.instances_path.name == "b.csv"

    @pytest.mark.parametrize("sizes", [(1, 1), (0, 10), (50, 3), (7, 7, 2), (4, 9, 9, 1)])
    def test_valid_layout_never_raises(self, tmp_path, sizes):
        """Categories file is never larger than the instances file"""
        files = {"onto.owl": "<rdf/>"}
        files.update({f"f{i}.csv": "x" * size for i, size in enumerate(sizes)})
        directory = make_dir(tmp_path / "in", files)

        selected = discover(directory)

        assert selected.categories_path != selected.instances_path
        assert selected.categories_path.stat().st_size <= selected.instances_path.stat().st_size


# ============================================================================
# Errors
# ============================================================================

class TestErrors:
    """Invalid layouts"""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryUnreadable) as exc_info:
            discover(tmp_path / "does_not_exist")
        assert str(exc_info.value).startswith("Inexistent or inaccessible directory")

    def test_path_is_a_file(self, tmp_path):
        path = tmp_path / "file.csv"
        path.write_text("A\n", encoding="utf-8")
        with pytest.raises(DirectoryUnreadable):
            discover(path)

    def test_no_ontology(self, tmp_path):
        directory = make_dir(tmp_path / "in", {"a.csv": "A\n", "b.csv": "aa\n"})
        with pytest.raises(OntologyFileMissing) as exc_info:
            discover(directory)
        assert str(exc_info.value).startswith("OWL ontology file not found")

    def test_no_csv(self, tmp_path):
        directory = make_dir(tmp_path / "in", {"onto.owl": "<rdf/>"})
        with pytest.raises(CsvFilesMissing) as exc_info:
            discover(directory)
        assert str(exc_info.value).startswith("CSV classes and instances files not found")

    def test_single_csv(self, tmp_path):
        directory = make_dir(tmp_path / "in", {"onto.owl": "<rdf/>", "a.csv": "A\n"})
        with pytest.raises(CsvFileIncomplete) as exc_info:
            discover(directory)
        assert str(exc_info.value) == (
            "Specified path must contain both class names and instance names csv files"
        )

    def test_ontology_checked_before_csv(self, tmp_path):
        directory = make_dir(tmp_path / "in", {"notes.txt": "nothing"})
        with pytest.raises(OntologyFileMissing):
            discover(directory)
