# -*- coding: utf-8 -*-
"""
In-memory OWL ontology model backed by rdflib.

Wraps an rdflib Graph behind the small set of operations the correction pass
and the population engine need: listing and detaching existing individuals,
resolving classes, creating named individuals and bulk-adding facts. Also
loads the source ontology and writes the generated one.

The graph is not thread-safe for mutation. Workers only build triples; every
call that changes the graph is made from the orchestrating thread.

Example:
    from ontocsv.graph.ontology_model import OntologyModel

    model = OntologyModel.load("data/input/people.owl")
    person = model.get_category(model.namespace_prefix() + "Person")
    alice = model.create_entity(person, model.namespace_prefix() + "alice")
    model.assert_named_individual(alice)
    model.write("generated.owl")
"""
# Standard library
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

# Third-party
from rdflib import Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS
from rdflib.util import guess_format

# Local
from ontocsv.utils.config import OUTPUT_FORMAT, PARTIAL_SUFFIX
from ontocsv.utils.dataclasses import EntityTriple
from ontocsv.utils.exceptions import OntologyMalformed, OntologyUnreadable, OutputWriteError
from ontocsv.utils.logger import get_logger

logger = get_logger(__name__)

Triple = Tuple[URIRef, URIRef, Union[URIRef, Literal]]

# rdflib parser names by file suffix; anything else falls back to guess_format, then RDF/XML
PARSER_FORMATS = {
    ".owl": "xml",
    ".rdf": "xml",
    ".xml": "xml",
    ".ttl": "turtle",
    ".nt": "nt",
    ".n3": "n3",
    ".jsonld": "json-ld",
}

CLASS_TYPES = (OWL.Class, RDFS.Class)

_LOCAL_NAME = re.compile(r"[^#/]*$")


def local_name(uri: Union[str, URIRef]) -> str:
    """Part of an IRI after the last '#' or '/'."""
    return _LOCAL_NAME.search(str(uri)).group(0)


def individual_triples(entity: EntityTriple) -> List[Triple]:
    """The three facts a new named individual expands into."""
    return [
        (entity.entity, RDF.type, entity.category),
        (entity.entity, RDF.type, OWL.NamedIndividual),
        (entity.entity, RDFS.label, Literal(entity.label)),
    ]


class OntologyModel:
    """
    rdflib Graph wrapper for ontology population.

    Example:
        model = OntologyModel(Graph())
        model.bulk_add(individual_triples(entity))
    """

    def __init__(self, graph: Optional[Graph] = None, source: Optional[Path] = None):
        self.graph = graph if graph is not None else Graph()
        self.source = source

    # =========================================================================
    # LOADING AND WRITING
    # =========================================================================

    @classmethod
    def load(cls, path: Union[str, Path]) -> "OntologyModel":
        """
        Parse an ontology document into memory.

        Raises:
            OntologyUnreadable: File cannot be opened
            OntologyMalformed: rdflib cannot parse the content
        """
        path = Path(path)
        fmt = PARSER_FORMATS.get(path.suffix.lower()) or guess_format(str(path)) or "xml"

        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise OntologyUnreadable(path, e.strerror or str(e)) from e

        graph = Graph()
        try:
            graph.parse(data=data, format=fmt, publicID=path.resolve().as_uri())
        except Exception as e:
            # rdflib parsers raise SAX, syntax and plugin errors with no common base
            raise OntologyMalformed(path, str(e)) from e

        logger.info(f"Ontology {path} loaded into memory ({len(graph)} triples)")
        return cls(graph, source=path)

    def write(self, path: Union[str, Path], fmt: str = OUTPUT_FORMAT) -> Path:
        """
        Serialize the graph to a file, replacing it atomically.

        The document is written to a .part file first and moved into place
        once complete.

        Raises:
            OutputWriteError: Serialization or file system failure
        """
        path = Path(path)
        partial = path.with_name(path.name + PARTIAL_SUFFIX)

        try:
            self.graph.serialize(destination=str(partial), format=fmt)
            os.replace(partial, path)
        except Exception as e:
            # serializer plugins fail with OSError or plugin-specific errors
            partial.unlink(missing_ok=True)
            raise OutputWriteError(path, str(e)) from e

        logger.info(f"Saved {path} ({len(self.graph)} triples, format={fmt})")
        return path

    # =========================================================================
    # NAMESPACE
    # =========================================================================

    def namespace_prefix(self) -> Optional[str]:
        """
        Base IRI new individuals are created under.

        The default ("") prefix declared in the document wins; otherwise the
        owl:Ontology IRI is used, with '#' appended when it does not already end
        in a separator. None when neither exists.
        """
        for prefix, namespace in self.graph.namespaces():
            if prefix == "":
                return str(namespace)

        ontology = next(self.graph.subjects(RDF.type, OWL.Ontology), None)
        if isinstance(ontology, URIRef):
            iri = str(ontology)
            return iri if iri.endswith(("#", "/")) else iri + "#"

        return None

    # =========================================================================
    # CLASSES AND INDIVIDUALS
    # =========================================================================

    def categories(self) -> Set[URIRef]:
        """All declared classes (owl:Class or rdfs:Class)."""
        declared = set()
        for class_type in CLASS_TYPES:
            declared.update(
                c for c in self.graph.subjects(RDF.type, class_type) if isinstance(c, URIRef)
            )
        return declared

    def get_category(self, qualified_name: str) -> Optional[URIRef]:
        """Resolve a class by full IRI; None if the ontology does not declare it."""
        uri = URIRef(qualified_name)
        for class_type in CLASS_TYPES:
            if (uri, RDF.type, class_type) in self.graph:
                return uri
        return None

    def list_entities(self) -> List[Tuple[URIRef, URIRef]]:
        """
        List existing individuals with their owning class.

        An individual is any IRI typed with a declared class. When several
        classes apply, the first by IRI order is reported.

        Returns:
            Sorted list of (entity, category) pairs
        """
        declared = self.categories()
        owners = {}

        for subject, _, category in self.graph.triples((None, RDF.type, None)):
            if not isinstance(subject, URIRef) or subject in declared:
                continue
            if category not in declared:
                continue
            if subject not in owners or str(category) < str(owners[subject]):
                owners[subject] = category

        return sorted(owners.items(), key=lambda pair: str(pair[0]))

    def remove_all_facts(self, subject: URIRef) -> None:
        """Detach a resource: remove every triple it is the subject of."""
        self.graph.remove((subject, None, None))

    def create_entity(self, category: URIRef, qualified_name: str) -> URIRef:
        """Type a resource with a class and return it."""
        entity = URIRef(qualified_name)
        self.graph.add((entity, RDF.type, category))
        return entity

    def assert_named_individual(self, entity: URIRef) -> None:
        self.graph.add((entity, RDF.type, OWL.NamedIndividual))

    def add_fact(self, subject: URIRef, predicate: URIRef, obj) -> None:
        self.graph.add((subject, predicate, obj))

    def bulk_add(self, facts: Iterable[Triple]) -> None:
        """Add many triples in one store call."""
        self.graph.addN((s, p, o, self.graph) for s, p, o in facts)

    def __len__(self) -> int:
        return len(self.graph)
