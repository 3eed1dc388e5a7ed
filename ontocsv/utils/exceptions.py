# -*- coding: utf-8 -*-
"""
Error hierarchy for the population pipeline.

Every fatal input or configuration problem raises a subclass of OntoCsvError,
so the CLI can catch the whole family with a single except clause. Per-record
anomalies (over-long records, empty fields, unknown classes) are never raised;
they are skipped or written to the skip log.

Hierarchy::

    OntoCsvError
      ├── DiscoveryError
      │     ├── DirectoryUnreadable
      │     ├── OntologyFileMissing
      │     ├── CsvFilesMissing
      │     └── CsvFileIncomplete
      ├── OntologyUnreadable
      ├── OntologyMalformed
      ├── ConfigurationUnreadable
      ├── ConfigurationInvalid
      └── OutputWriteError
"""
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class OntoCsvError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


# ============================================================================
# FILE DISCOVERY
# ============================================================================

class DiscoveryError(OntoCsvError):
    """Base for errors raised while selecting the input files."""


class DirectoryUnreadable(DiscoveryError):
    def __init__(self, path: PathLike):
        super().__init__(f"Inexistent or inaccessible directory {path}", path)


class OntologyFileMissing(DiscoveryError):
    def __init__(self, path: PathLike):
        super().__init__(f"OWL ontology file not found in {path}", path)


class CsvFilesMissing(DiscoveryError):
    def __init__(self, path: PathLike):
        super().__init__(
            f"CSV classes and instances files not found in {path}", path
        )


class CsvFileIncomplete(DiscoveryError):
    def __init__(self, path: PathLike):
        super().__init__(
            "Specified path must contain both class names and instance names csv files",
            path,
        )


# ============================================================================
# ONTOLOGY
# ============================================================================

class OntologyUnreadable(OntoCsvError):
    def __init__(self, path: PathLike, reason: str = ""):
        message = f"Cannot read ontology file {path}"
        super().__init__(f"{message}: {reason}" if reason else message, path)


class OntologyMalformed(OntoCsvError):
    def __init__(self, path: PathLike, reason: str = ""):
        message = f"Malformed ontology file {path}"
        super().__init__(f"{message}: {reason}" if reason else message, path)


# ============================================================================
# TRANSFORMATION CONFIGURATION
# ============================================================================

class ConfigurationUnreadable(OntoCsvError):
    def __init__(self, path: PathLike, reason: str = ""):
        message = f"Inexistent or inaccessible YAML configuration file {path}"
        super().__init__(f"{message}: {reason}" if reason else message, path)


class ConfigurationInvalid(OntoCsvError):
    """
    Raised for a configuration that cannot be used.

    stage is "parsing" for YAML syntax errors and "mapping" for documents
    that parse but do not describe a valid set of transformations.
    """

    def __init__(self, path: Optional[PathLike], stage: str, reason: str):
        self.stage = stage
        location = f" in {path}" if path is not None else ""
        super().__init__(
            f"Invalid configuration while {stage}{location}: {reason}", path
        )


# ============================================================================
# OUTPUT
# ============================================================================

class OutputWriteError(OntoCsvError):
    def __init__(self, path: PathLike, reason: str):
        super().__init__(f"Cannot write output file {path}: {reason}", path)
