# -*- coding: utf-8 -*-
"""
Parallel CSV-to-individual population engine.

Maps each column of the instances file to the class named at the same position
in the class names file and turns every non-empty field into a new
owl:NamedIndividual labelled with the original value.

Processing model:
    - The class names file is read once; only its first non-blank line counts
    - The instances file is streamed in chunks of lines; each chunk is converted
      on a ThreadPoolExecutor worker into a local per-class buffer
    - Chunk results are merged on the calling thread in submission order, so
      rejected lines reach the skip log in input order
    - Once every chunk is merged, each class buffer is committed to the graph
      with a single bulk call

Per-record policy:
    - A record with more fields than there are classes is written verbatim to
      the skip log and nothing from it is inserted
    - Empty fields, fields that normalize to nothing and fields whose class is
      not declared in the ontology are dropped; the rest of the record is kept

Example:
    with SkipLog("skipped.txt") as skip_log:
        inserted = populate(
            "input/classes.csv", "input/instances.csv",
            model, model.namespace_prefix(), NameNormalizer(ns), skip_log,
        )
"""
# Standard library
import os
from collections import defaultdict, deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Dict, Iterator, List, Optional, TextIO, Union

# Third-party
from rdflib import URIRef
from tqdm import tqdm

# Local
from ontocsv.graph.ontology_model import OntologyModel, individual_triples, local_name
from ontocsv.ingestion.line_evaluator import evaluate, split_fields, unescape
from ontocsv.processing.name_normalizer import NameNormalizer
from ontocsv.utils.config import (
    CHUNK_SIZE,
    CSV_ENCODING,
    MAX_CHUNKS_IN_FLIGHT_PER_WORKER,
    NUM_WORKERS,
    PARTIAL_SUFFIX,
)
from ontocsv.utils.dataclasses import EntityTriple
from ontocsv.utils.exceptions import OutputWriteError
from ontocsv.utils.logger import get_logger

logger = get_logger(__name__)

ClassBuffers = Dict[URIRef, List[EntityTriple]]


# ============================================================================
# SKIP LOG
# ============================================================================

class SkipLog:
    """
    Thread-safe, append-only report of rejected records.

    Lines go to a .part file that replaces the final file only when the
    context exits without an exception; on failure the .part file is removed.

    Example:
        with SkipLog(Path("skipped.txt")) as skip_log:
            skip_log.append("a,b,c,d")
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.partial = self.path.with_name(self.path.name + PARTIAL_SUFFIX)
        self.file_lock = Lock()
        self.count = 0
        self._file: Optional[TextIO] = None

    def __enter__(self) -> "SkipLog":
        try:
            self._file = open(self.partial, 'w', encoding='utf-8')
        except OSError as e:
            raise OutputWriteError(self.path, e.strerror or str(e)) from e
        return self

    def append(self, line: str) -> None:
        """Write one rejected line; the whole line is written under the lock."""
        with self.file_lock:
            try:
                self._file.write(line + '\n')
            except OSError as e:
                logger.error(f"Failed to append skipped record: {e}")
                raise OutputWriteError(self.path, e.strerror or str(e)) from e
            self.count += 1

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._file.close()
        if exc_type is None:
            try:
                os.replace(self.partial, self.path)
            except OSError as e:
                raise OutputWriteError(self.path, e.strerror or str(e)) from e
            logger.info(f"Saved {self.count} skipped records to {self.path}")
        else:
            self.partial.unlink(missing_ok=True)
        return False


# ============================================================================
# RECORD CONVERSION (runs on worker threads)
# ============================================================================

@dataclass
class ChunkResult:
    """Output of one worker for one chunk of lines."""
    buffers: ClassBuffers = field(default_factory=lambda: defaultdict(list))
    rejected: List[str] = field(default_factory=list)
    records: int = 0


class RecordConverter:
    """
    Converts instance lines into EntityTriples.

    Read-only after construction: classes are resolved up front, so workers
    never touch the graph.
    """

    def __init__(
        self,
        categories: List[str],
        resolved: List[Optional[URIRef]],
        namespace_prefix: str,
        normalizer: NameNormalizer
    ):
        self.categories = categories
        self.resolved = resolved
        self.namespace_prefix = namespace_prefix
        self.normalizer = normalizer

    def convert_chunk(self, lines: List[str]) -> ChunkResult:
        result = ChunkResult()
        for line in lines:
            result.records += 1
            if not self.convert_record(line, result.buffers):
                logger.debug(f"Record has more fields than classes, skipped: {line}")
                result.rejected.append(line)
        return result

    def convert_record(self, line: str, buffers: ClassBuffers) -> bool:
        """
        Convert one raw line into the given buffers.

        Returns:
            False if the record has more fields than there are classes
        """
        fields = split_fields(evaluate(line))

        if len(fields) > len(self.categories):
            return False

        for index, raw in enumerate(fields):
            value = unescape(raw).strip()
            if not value:
                continue

            name = self.normalizer.normalize(value)
            if not name:
                continue

            category = self.resolved[index]
            if category is None:
                continue

            buffers[category].append(
                EntityTriple(URIRef(self.namespace_prefix + name), category, value)
            )

        return True


# ============================================================================
# POPULATION
# ============================================================================

def read_categories(path: Union[str, Path]) -> List[str]:
    """
    Parse class names from the first non-blank line of a file.

    Returns:
        Class names in column order; empty if the file has no non-blank line
    """
    with open(path, 'r', encoding=CSV_ENCODING) as f:
        for line in f:
            if line.strip():
                return [unescape(name).strip() for name in split_fields(evaluate(line))]
    return []


def resolve_categories(
    model: OntologyModel,
    namespace_prefix: str,
    categories: List[str]
) -> List[Optional[URIRef]]:
    """Resolve each class name against the ontology; None for unknown classes."""
    resolved = []
    for name in categories:
        category = model.get_category(namespace_prefix + name) if name else None
        if category is None:
            logger.warning(f"Class '{name}' not found in ontology, its column will be ignored")
        resolved.append(category)
    return resolved


def read_chunks(f: TextIO, chunk_size: int) -> Iterator[List[str]]:
    """Yield lists of raw lines (terminators removed) of at most chunk_size."""
    chunk = []
    for line in f:
        chunk.append(line.rstrip('\r\n'))
        if len(chunk) >= chunk_size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def commit(model: OntologyModel, buffers: ClassBuffers) -> int:
    """
    Bulk-add buffered individuals, one store call per class.

    Returns:
        Number of label facts added (one per individual)
    """
    inserted = 0
    for category, entities in buffers.items():
        model.bulk_add(fact for entity in entities for fact in individual_triples(entity))
        inserted += len(entities)
        logger.debug(f"{local_name(category)}: {len(entities)} individuals committed")
    return inserted


def populate(
    categories_path: Union[str, Path],
    instances_path: Union[str, Path],
    model: OntologyModel,
    namespace_prefix: str,
    normalizer: NameNormalizer,
    skip_log: SkipLog,
    num_workers: int = NUM_WORKERS,
    chunk_size: int = CHUNK_SIZE,
    show_progress: bool = False
) -> int:
    """
    Populate the model with individuals read from the two CSV files.

    Args:
        categories_path: Class names file (header)
        instances_path: Instances file (records)
        model: Ontology model to add individuals to
        namespace_prefix: Namespace for class lookup and new individuals
        normalizer: Converts field values into local names
        skip_log: Receives over-long records
        num_workers: Worker threads for record conversion
        chunk_size: Lines per worker task
        show_progress: Display a tqdm progress bar

    Returns:
        Number of individuals inserted (label facts, type facts not counted)
    """
    categories = read_categories(categories_path)
    logger.info(f"Parsed {len(categories)} classes from {Path(categories_path).name}")

    converter = RecordConverter(
        categories,
        resolve_categories(model, namespace_prefix, categories),
        namespace_prefix,
        normalizer,
    )

    num_workers = max(1, num_workers)
    max_in_flight = num_workers * MAX_CHUNKS_IN_FLIGHT_PER_WORKER
    buffers: ClassBuffers = defaultdict(list)
    pending: deque = deque()

    with open(instances_path, 'r', encoding=CSV_ENCODING) as f, \
            ThreadPoolExecutor(max_workers=num_workers) as executor, \
            tqdm(desc="Populating", unit="record", disable=not show_progress) as pbar:

        def merge(future: Future) -> None:
            result = future.result()
            for line in result.rejected:
                skip_log.append(line)
            for category, entities in result.buffers.items():
                buffers[category].extend(entities)
            pbar.update(result.records)

        for chunk in read_chunks(f, max(1, chunk_size)):
            pending.append(executor.submit(converter.convert_chunk, chunk))
            if len(pending) >= max_in_flight:
                merge(pending.popleft())

        while pending:
            merge(pending.popleft())

    inserted = commit(model, buffers)
    logger.info(f"{inserted} new individuals added to ontology ({skip_log.count} records skipped)")
    return inserted
