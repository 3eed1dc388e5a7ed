# -*- coding: utf-8 -*-
"""
YAML loader for instance name transformation rules.

Reads a transformations file, validates its structure and compiles it into an
immutable TransformationConfig. Rules are applied by the NameNormalizer in the
exact order they are declared.

File Format (YAML):
    trim: true
    casing: upper            # upper | lower | none (optional)
    transformations:
      - pattern: '[")(]+'
        replacement: ''
      - pattern: '\\s+'
        replacement: '_'

Patterns are Python regular expressions; replacements use Python re template
syntax (\\1, \\g<name>).
"""
# Standard library
import re
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

# Third-party
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Local
from ontocsv.utils.dataclasses import Casing, TransformationConfig, TransformationRule
from ontocsv.utils.exceptions import ConfigurationInvalid, ConfigurationUnreadable
from ontocsv.utils.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# SCHEMA
# ============================================================================

class TransformationEntry(BaseModel):
    """One {pattern, replacement} item of the transformations list."""
    model_config = ConfigDict(extra="forbid")

    pattern: str
    replacement: str = ""


class TransformationFile(BaseModel):
    """Top-level structure of a transformations YAML document."""
    model_config = ConfigDict(extra="forbid")

    trim: bool = False
    casing: Optional[Literal["upper", "lower", "none"]] = None
    transformations: List[TransformationEntry] = Field(default_factory=list)

    @field_validator("casing", mode="before")
    @classmethod
    def _lower_casing(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("transformations", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# ============================================================================
# LOADING
# ============================================================================

def build_transformation_config(
    data: Any,
    source: Optional[Union[str, Path]] = None
) -> TransformationConfig:
    """
    Validate an already parsed document and compile it.

    Args:
        data: Parsed YAML content (expected to be a mapping)
        source: Origin of the document, used in error messages

    Returns:
        Compiled TransformationConfig

    Raises:
        ConfigurationInvalid: Structure is wrong or a pattern does not compile
    """
    if not isinstance(data, dict):
        raise ConfigurationInvalid(
            source, "mapping", f"expected a mapping, got {type(data).__name__}"
        )

    try:
        parsed = TransformationFile.model_validate(data)
    except ValidationError as e:
        raise ConfigurationInvalid(source, "mapping", str(e)) from e

    rules = []
    for index, entry in enumerate(parsed.transformations):
        try:
            rules.append(TransformationRule(re.compile(entry.pattern), entry.replacement))
        except re.error as e:
            raise ConfigurationInvalid(
                source, "mapping", f"transformation #{index + 1} pattern {entry.pattern!r}: {e}"
            ) from e

    return TransformationConfig(
        trim=parsed.trim,
        casing=Casing.parse(parsed.casing),
        rules=tuple(rules),
    )


def load_transformation_config(path: Union[str, Path]) -> TransformationConfig:
    """
    Load transformation rules from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Compiled TransformationConfig

    Raises:
        ConfigurationUnreadable: File is missing or cannot be read
        ConfigurationInvalid: YAML syntax error ("parsing") or invalid
            structure ("mapping")
    """
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationInvalid(path, "parsing", str(e)) from e
    except OSError as e:
        raise ConfigurationUnreadable(path, e.strerror or str(e)) from e

    config = build_transformation_config(data, path)

    logger.info(
        f"Loaded transformation configuration {path} "
        f"(trim={config.trim}, casing={config.casing.value}, rules={len(config.rules)})"
    )
    return config
