# -*- coding: utf-8 -*-
"""
Instance name normalization.

Turns a free-text CSV value into a local name that can be appended to the
ontology namespace. Two layers run in fixed order:

    1. Anchor stripping: when the namespace ends with '#', every '#' run is
       removed so the value cannot open a second fragment
    2. Sanitization:
       - without configuration, the baseline chain (strip, lowercase, drop
         '"' and ')', punctuation runs to '_', '&' runs to '_and_',
         whitespace runs to '_')
       - with a TransformationConfig, its compiled steps (trim, casing, rules
         in declaration order), followed by the identifier guard that removes
         quotes and parentheses and collapses whitespace

An empty result means the caller drops the field.

Example:
    normalizer = NameNormalizer("http://example.org/onto#")
    normalizer.normalize("Rock & Roll (1950s)")
    # 'rock_and_roll_1950s'
"""
# Standard library
import re
from typing import Optional

# Local
from ontocsv.utils.dataclasses import TransformationConfig

ANCHORS = re.compile(r"#+")

# Baseline chain
_DROPPED = re.compile(r'[")]')
_PUNCTUATION = re.compile(r"(?:\s*[/\-.,'(=]\s*)+")
_AMPERSANDS = re.compile(r"(?:\s*&\s*)+")
_WHITESPACE = re.compile(r"\s+")

# Identifier guard for configured pipelines
_UNSAFE = re.compile(r'["()]')


class NameNormalizer:
    """
    Deterministic value-to-local-name conversion.

    Holds no mutable state, so one instance is shared by all worker threads.
    """

    def __init__(
        self,
        namespace_prefix: Optional[str] = None,
        config: Optional[TransformationConfig] = None
    ):
        """
        Args:
            namespace_prefix: Namespace the local names will be appended to
            config: Optional transformation configuration; None selects the
                    baseline chain
        """
        self.namespace_prefix = namespace_prefix
        self.config = config
        self.strip_anchors = bool(namespace_prefix) and namespace_prefix.endswith("#")

    def normalize(self, value: Optional[str]) -> str:
        """
        Normalize a raw value into a local name.

        Args:
            value: Raw field value (already de-escaped)

        Returns:
            Local name, possibly empty
        """
        if value is None:
            return ""

        if self.strip_anchors:
            value = ANCHORS.sub("", value)

        if self.config is None:
            return self.baseline(value)

        for step in self.config.steps:
            value = step.apply(value)

        return _WHITESPACE.sub("_", _UNSAFE.sub("", value))

    @staticmethod
    def baseline(value: str) -> str:
        """
        Fixed sanitization chain used when no configuration is supplied.

        Example:
            >>> NameNormalizer.baseline("A&B    &c")
            'a_and_b_and_c'
        """
        value = value.strip().lower()
        value = _DROPPED.sub("", value)
        value = _PUNCTUATION.sub("_", value)
        value = _AMPERSANDS.sub("_and_", value)
        return _WHITESPACE.sub("_", value)
