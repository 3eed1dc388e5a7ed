# -*- coding: utf-8 -*-
"""
Input file discovery for ontology population.

Scans a single directory (non-recursive) and picks the three pipeline inputs:
the OWL ontology and the two CSV files. The smaller CSV is taken as the class
names (header) file and the larger one as the instances file.

Selection rules:
    - Extensions are matched case-insensitively (.owl, .csv); other files are ignored
    - CSV files are ordered by (size, name); with more than two, only the two
      smallest are used and the rest are reported in a warning
    - Ontology files are ordered by name; the first one is used

Example:
    from ontocsv.ingestion.file_discovery import discover

    files = discover("data/input")
    files.categories_path   # data/input/classes.csv
    files.instances_path    # data/input/instances.csv
"""
# Standard library
from pathlib import Path
from typing import List, Union

# Local
from ontocsv.utils.config import CSV_SUFFIX, ONTOLOGY_SUFFIX
from ontocsv.utils.dataclasses import InputFiles
from ontocsv.utils.exceptions import (
    CsvFileIncomplete,
    CsvFilesMissing,
    DirectoryUnreadable,
    OntologyFileMissing,
)
from ontocsv.utils.logger import get_logger

logger = get_logger(__name__)


def list_regular_files(directory: Path) -> List[Path]:
    """
    List regular files directly under a directory.

    Raises:
        DirectoryUnreadable: If the path is missing, not a directory or cannot be listed
    """
    try:
        return [p for p in directory.iterdir() if p.is_file()]
    except OSError as e:
        logger.error(f"Cannot list {directory}: {e}")
        raise DirectoryUnreadable(directory) from e


def discover(directory: Union[str, Path]) -> InputFiles:
    """
    Select the ontology, class names and instances files in a directory.

    Args:
        directory: Directory to scan

    Returns:
        InputFiles with the three selected paths

    Raises:
        DirectoryUnreadable: Directory cannot be listed
        OntologyFileMissing: No .owl file present
        CsvFilesMissing: No .csv file present
        CsvFileIncomplete: Only one .csv file present
    """
    directory = Path(directory)
    files = list_regular_files(directory)

    ontologies = sorted(
        (p for p in files if p.suffix.lower() == ONTOLOGY_SUFFIX),
        key=lambda p: p.name,
    )
    tables = sorted(
        (p for p in files if p.suffix.lower() == CSV_SUFFIX),
        key=lambda p: (p.stat().st_size, p.name),
    )

    if not ontologies:
        raise OntologyFileMissing(directory)
    if not tables:
        raise CsvFilesMissing(directory)
    if len(tables) < 2:
        raise CsvFileIncomplete(directory)

    if len(ontologies) > 1:
        logger.warning(
            f"{len(ontologies)} ontology files found, using {ontologies[0].name}"
        )
    if len(tables) > 2:
        ignored = ", ".join(p.name for p in tables[2:])
        logger.warning(f"More than two CSV files found, ignoring: {ignored}")

    selected = InputFiles(
        ontology_path=ontologies[0],
        categories_path=tables[0],
        instances_path=tables[1],
    )
    logger.info(
        f"Discovered ontology {selected.ontology_path.name}, "
        f"classes {selected.categories_path.name}, "
        f"instances {selected.instances_path.name}"
    )
    return selected
