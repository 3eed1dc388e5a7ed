# -*- coding: utf-8 -*-
"""
OntoCSV source code package.

Populates an OWL ontology with named individuals read from a pair of CSV
files: a one-line header of class names and a body of instance records.
Contains input discovery and line parsing (ingestion), identifier
normalization (processing), and the rdflib-backed ontology model, correction
pass and population engine (graph).
"""

__version__ = "1.0.0"
