# -*- coding: utf-8 -*-
"""
OWL 2 named individual correction.

Source ontologies often type their individuals with a class only, or carry
labels that do not match the individual's name. This pass normalizes them
before population so that existing and new individuals look alike:

    1. Every existing individual is recorded as (class, individual) and fully
       detached (every triple it is the subject of is removed)
    2. Each recorded individual is re-created under its class, asserted as
       owl:NamedIndividual and labelled with its local name

The number of individuals is unchanged. Other facts about an individual
(object or data properties) do not survive the detach. Running the pass a
second time on the same model gives the same result as running it once.
"""
# Standard library
from collections import defaultdict
from typing import Dict, List

# Third-party
from rdflib import Literal, URIRef
from rdflib.namespace import RDFS

# Local
from ontocsv.graph.ontology_model import OntologyModel, local_name
from ontocsv.utils.logger import get_logger

logger = get_logger(__name__)

ExistingEntityIndex = Dict[URIRef, List[URIRef]]


def collect_and_detach(model: OntologyModel) -> ExistingEntityIndex:
    """Record existing individuals by class and remove their facts."""
    index: ExistingEntityIndex = defaultdict(list)

    # list_entities() materializes the listing before anything is removed
    for entity, category in model.list_entities():
        index[category].append(entity)
        model.remove_all_facts(entity)

    return index


def correct_named_individuals(model: OntologyModel) -> int:
    """
    Re-create every existing individual as an explicit owl:NamedIndividual.

    Args:
        model: Loaded ontology model, mutated in place

    Returns:
        Number of individuals re-created
    """
    index = collect_and_detach(model)

    count = 0
    for category, entities in index.items():
        for entity in entities:
            individual = model.create_entity(category, str(entity))
            model.assert_named_individual(individual)
            model.add_fact(individual, RDFS.label, Literal(local_name(individual)))
            count += 1
        logger.debug(f"Corrected {len(entities)} individuals of {local_name(category)}")

    logger.info(f"OWL 2 correction: {count} existing individuals re-created")
    return count
