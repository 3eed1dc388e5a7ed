# -*- coding: utf-8 -*-
"""
Shared fixtures for the population test suite.

Builds small ontologies and CSV input directories under pytest's tmp_path.
"""
from pathlib import Path

import pytest

from ontocsv.graph.ontology_model import OntologyModel

NS = "http://example.org/test#"

ONTOLOGY_XML = """<?xml version="1.0"?>
<rdf:RDF xmlns="http://example.org/test#"
     xml:base="http://example.org/test"
     xmlns:owl="http://www.w3.org/2002/07/owl#"
     xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
     xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#">
    <owl:Ontology rdf:about="http://example.org/test"/>
    <owl:Class rdf:about="http://example.org/test#A"/>
    <owl:Class rdf:about="http://example.org/test#B"/>
    <owl:Class rdf:about="http://example.org/test#C"/>
    <owl:NamedIndividual rdf:about="http://example.org/test#existing_a">
        <rdf:type rdf:resource="http://example.org/test#A"/>
    </owl:NamedIndividual>
    <B rdf:about="http://example.org/test#existing_b">
        <rdfs:label>Existing B</rdfs:label>
    </B>
</rdf:RDF>
"""

CATEGORIES_CSV = "A,B,C\n"

INSTANCES_CSV = (
    "alpha,beta,gamma\n"
    '"Delta, Inc",,epsilon\n'
    "zeta\n"
    "This,line,will,be,skipped\n"
)


@pytest.fixture
def ontology_path(tmp_path: Path) -> Path:
    path = tmp_path / "ontology.owl"
    path.write_text(ONTOLOGY_XML, encoding="utf-8")
    return path


@pytest.fixture
def model(ontology_path: Path) -> OntologyModel:
    return OntologyModel.load(ontology_path)


@pytest.fixture
def write_file(tmp_path: Path):
    """Factory writing a UTF-8 file under tmp_path and returning its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    """Directory satisfying the layout contract: one .owl, two .csv."""
    directory = tmp_path / "input"
    directory.mkdir()
    (directory / "ontology.owl").write_text(ONTOLOGY_XML, encoding="utf-8")
    (directory / "classes.csv").write_text(CATEGORIES_CSV, encoding="utf-8")
    (directory / "instances.csv").write_text(INSTANCES_CSV, encoding="utf-8")
    return directory
