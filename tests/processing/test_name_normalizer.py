# -*- coding: utf-8 -*-
"""
Name normalizer tests.

Run: pytest tests/processing/test_name_normalizer.py -v
"""
import re

import pytest

from ontocsv.processing.name_normalizer import NameNormalizer
from ontocsv.utils.dataclasses import Casing, TransformationConfig, TransformationRule

HASH_NS = "http://example.org/onto#"
SLASH_NS = "http://example.org/onto/"

IDENTIFIER_UNSAFE = re.compile(r'[\s"()]')


def quoted_config() -> TransformationConfig:
    return TransformationConfig(
        trim=True,
        casing=Casing.UPPER,
        rules=(TransformationRule.of(r'[")(]+', ''), TransformationRule.of(r'\s+', '_')),
    )


# ============================================================================
# Baseline chain
# ============================================================================

class TestBaseline:
    """No transformation configuration"""

    @pytest.mark.parametrize("value, expected", [
        ("Alpha", "alpha"),
        ("  Rock & Roll (1950s) ", "rock_and_roll_1950s"),
        ("A&B    &c", "a_and_b_and_c"),
        ("Delta, Inc", "delta_inc"),
        ("x / y - z", "x_y_z"),
        ("O'Brien", "o_brien"),
        ('"quoted"', "quoted"),
        ("a=b", "a_b"),
        ("====a.b,c/d-e=f(g)'h ' i", "_a_b_c_d_e_f_g_h_i"),
        ("two   words", "two_words"),
    ])
    def test_values(self, value, expected):
        assert NameNormalizer(HASH_NS).normalize(value) == expected

    def test_none_and_empty(self):
        normalizer = NameNormalizer(HASH_NS)
        assert normalizer.normalize(None) == ""
        assert normalizer.normalize("") == ""
        assert normalizer.normalize("   ") == ""

    def test_baseline_static(self):
        assert NameNormalizer.baseline("Hello World") == "hello_world"


# ============================================================================
# Anchors
# ============================================================================

class TestAnchors:
    """'#' handling depends on the namespace"""

    def test_hash_namespace_strips_anchors(self):
        assert NameNormalizer(HASH_NS).normalize("item##1#") == "item1"

    def test_slash_namespace_keeps_anchors(self):
        assert NameNormalizer(SLASH_NS).normalize("item#1") == "item#1"

    def test_no_namespace_keeps_anchors(self):
        assert NameNormalizer().normalize("item#1") == "item#1"

    def test_only_anchors_normalize_to_empty(self):
        assert NameNormalizer(HASH_NS).normalize("###") == ""


# ============================================================================
# Configured pipeline
# ============================================================================

class TestConfigured:
    """TransformationConfig steps plus the identifier guard"""

    def test_full_pipeline(self):
        normalizer = NameNormalizer(HASH_NS, quoted_config())
        assert normalizer.normalize('   )))#!"öZcAn"~#((( ') == "!ÖZCAN~"

    def test_trim_and_upper_only(self):
        config = TransformationConfig(trim=True, casing=Casing.UPPER)
        assert NameNormalizer(HASH_NS, config).normalize("   ~öZcAn~ ") == "~ÖZCAN~"
        assert NameNormalizer(HASH_NS, quoted_config()).normalize("   ~öZcAn~  ") == "~ÖZCAN~"

    def test_rules_applied_in_declaration_order(self):
        config = TransformationConfig(rules=(
            TransformationRule.of("a", "b"),
            TransformationRule.of("b", "c"),
        ))
        assert NameNormalizer(HASH_NS, config).normalize("ab") == "cc"

    def test_rule_with_group_reference(self):
        config = TransformationConfig(rules=(TransformationRule.of(r"(\d+)-(\d+)", r"\2-\1"),))
        assert NameNormalizer(HASH_NS, config).normalize("10-20") == "20-10"

    def test_guard_removes_unsafe_characters(self):
        """An empty configuration still yields identifier-safe names"""
        normalizer = NameNormalizer(HASH_NS, TransformationConfig())
        assert normalizer.normalize(' Mixed "Case" (x) ') == "_Mixed_Case_x_"

    def test_lower_casing(self):
        config = TransformationConfig(casing=Casing.LOWER)
        assert NameNormalizer(HASH_NS, config).normalize("ABC") == "abc"

    def test_empty_result(self):
        config = TransformationConfig(trim=True, rules=(TransformationRule.of(".+", ""),))
        assert NameNormalizer(HASH_NS, config).normalize("anything") == ""


# ============================================================================
# Properties
# ============================================================================

SAMPLES = [
    "Alpha", "  spaced  out ", 'He said "hi"', "(paren) value", "a#b#c",
    "tab\tseparated", "new\nline", "&&&", "Ünïcödé Wörds", "1 / 2 / 3",
]


class TestProperties:
    """Invariants over many inputs"""

    @pytest.mark.parametrize("config", [None, TransformationConfig(), quoted_config()])
    @pytest.mark.parametrize("value", SAMPLES)
    def test_result_is_identifier_safe(self, config, value):
        result = NameNormalizer(HASH_NS, config).normalize(value)
        assert not IDENTIFIER_UNSAFE.search(result)
        assert "#" not in result

    @pytest.mark.parametrize("value", SAMPLES)
    def test_deterministic(self, value):
        first = NameNormalizer(HASH_NS, quoted_config())
        second = NameNormalizer(HASH_NS, quoted_config())
        assert first.normalize(value) == second.normalize(value) == first.normalize(value)
