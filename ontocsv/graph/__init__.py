# -*- coding: utf-8 -*-
"""
Graph construction package for ontology population.

Contains ontology_model (rdflib graph wrapper), owl2_correction (re-typing of
existing individuals), instance_populator (parallel record-to-individual
engine) and population_processor (builder, orchestrator and CLI).
"""
