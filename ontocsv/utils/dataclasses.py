# -*- coding: utf-8 -*-
"""
Core data structures for the ontology population pipeline

Single source of truth for the pipeline data structures: transformation
configuration, discovered input files, generated individuals and run results.
Import from this module rather than individual modules for consistency.

Examples:
# Build a transformation configuration by hand
    from ontocsv.utils.dataclasses import Casing, TransformationConfig, TransformationRule

    config = TransformationConfig(
        trim=True,
        casing=Casing.UPPER,
        rules=(TransformationRule.of(r'[")(]+', ''), TransformationRule.of(r'\\s+', '_')),
    )
    [step.kind for step in config.steps]
    # [StepKind.TRIM, StepKind.UPPER, StepKind.SUBSTITUTE, StepKind.SUBSTITUTE]

"""
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Pattern, Tuple


# ============================================================================
# ENUMS
# ============================================================================

class Casing(Enum):
    """Case conversion applied by a configured transformation pipeline."""
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Casing":
        """Map a configuration value (case-insensitive, None allowed) to a Casing."""
        if value is None:
            return cls.NONE
        return cls(value.strip().lower())


class StepKind(Enum):
    """String operations a configured pipeline is compiled into."""
    TRIM = "trim"
    UPPER = "upper"
    LOWER = "lower"
    SUBSTITUTE = "substitute"


# ============================================================================
# TRANSFORMATION CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class TransformationRule:
    """A global regex substitution, applied in declaration order."""
    pattern: Pattern[str]
    replacement: str

    @classmethod
    def of(cls, pattern: str, replacement: str = "") -> "TransformationRule":
        return cls(re.compile(pattern), replacement)


@dataclass(frozen=True)
class TransformationStep:
    """One compiled operation of a configured pipeline."""
    kind: StepKind
    rule: Optional[TransformationRule] = None

    def apply(self, value: str) -> str:
        if self.kind is StepKind.TRIM:
            return value.strip()
        if self.kind is StepKind.UPPER:
            return value.upper()
        if self.kind is StepKind.LOWER:
            return value.lower()
        return self.rule.pattern.sub(self.rule.replacement, value)


@dataclass(frozen=True)
class TransformationConfig:
    """
    Validated transformation settings, immutable once loaded.

    The fixed order trim, casing, rules is compiled into steps at
    construction time.
    """
    trim: bool = False
    casing: Casing = Casing.NONE
    rules: Tuple[TransformationRule, ...] = ()
    steps: Tuple[TransformationStep, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        steps: List[TransformationStep] = []
        if self.trim:
            steps.append(TransformationStep(StepKind.TRIM))
        if self.casing is Casing.UPPER:
            steps.append(TransformationStep(StepKind.UPPER))
        elif self.casing is Casing.LOWER:
            steps.append(TransformationStep(StepKind.LOWER))
        for rule in self.rules:
            steps.append(TransformationStep(StepKind.SUBSTITUTE, rule))
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "steps", tuple(steps))


# ============================================================================
# INPUT FILES
# ============================================================================

@dataclass(frozen=True)
class InputFiles:
    """Paths selected by file discovery."""
    ontology_path: Path
    categories_path: Path
    instances_path: Path


# ============================================================================
# GENERATED INDIVIDUALS
# ============================================================================

@dataclass(frozen=True)
class EntityTriple:
    """
    A new named individual waiting to be committed.

    Expands into rdf:type <category>, rdf:type owl:NamedIndividual and
    rdfs:label "<label>" on commit. Only the label fact is counted.
    """
    entity: Any        # rdflib URIRef
    category: Any      # rdflib URIRef
    label: str         # raw value, trimmed and de-escaped


# ============================================================================
# RESULTS
# ============================================================================

@dataclass
class PopulationResult:
    """Outcome of a successful InstancePopulator.process() run."""
    inserted_count: int
    skipped_count: int
    corrected_count: int
    skip_log_path: Path
    output_path: Path


@dataclass
class CreateResult:
    """
    Either a ready populator or the error that prevented building one.

    Example:
        result = InstancePopulator.create("data", "input")
        if result.ok:
            result.populator.process()
        else:
            logger.error(result.error)
    """
    populator: Optional[Any] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.populator is not None
