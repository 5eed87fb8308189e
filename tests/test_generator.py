"""Tests for rule-driven form generation (generator.py)."""

from types import MappingProxyType

import pytest

from uz_affix.errors import NameNotFoundError
from uz_affix.generator import expand_element, generate_forms
from uz_affix.grammar import (
    Grammar,
    Literal,
    LiteralWithDescription,
    OptionalElement,
    Rule,
)
from uz_affix.parser import parse_grammar


ACCUSATIVE = """
SUFFIX case { ni: "accusative" WHEN ENDSWITH [bcdfghjklmnpqrstvxyz] }
RULE case { @case }
"""


# ── Conditions in generation ──────────────────────────────────────────────────

def test_condition_allows_form():
    g = parse_grammar(ACCUSATIVE)
    assert generate_forms(g, "case", "kitob") == ["kitobni"]


def test_condition_blocks_form():
    g = parse_grammar(ACCUSATIVE)
    assert generate_forms(g, "case", "olma") == []


def test_generated_forms_satisfy_conditions(uz_grammar):
    for form in generate_forms(uz_grammar, "ot", "китоб"):
        # ISVOWEL forms never attach to a consonant-final stem
        assert not form.startswith("китобм")
        assert not form.startswith("китобнг")


def test_replace_in_generation():
    g = parse_grammar("""
        SUFFIX poss { i: "3sg" WHEN ENDSWITH /q/ REPLACE "g" }
        RULE p { @poss }
    """)
    assert generate_forms(g, "p", "qishloq") == ["qishlogi"]


def test_cut_in_generation():
    g = parse_grammar("""
        SUFFIX s { si: "x" WHEN ISVOWEL CUT 1 }
        RULE p { @s }
    """)
    assert generate_forms(g, "p", "olma") == ["olmsi"]


# ── Element expansion ─────────────────────────────────────────────────────────

def test_optional_includes_bare_word(latin_grammar):
    assert generate_forms(latin_grammar, "noun", "kitob") == [
        "kitob", "kitobni", "kitobda",
        "kitoblar", "kitoblarni", "kitoblarda",
    ]


def test_literal_is_appended():
    g = parse_grammar('SUFFIX plural { lar: "pl" } RULE r { @plural + dir }')
    assert generate_forms(g, "r", "kitob") == ["kitoblardir"]


def test_literal_with_comma_options():
    g = Grammar.build({}, {"r": [Rule("r", "", ((Literal("mi, chi"),),))]})
    assert generate_forms(g, "r", "kitob") == ["kitobmi", "kitobchi"]


def test_literal_map_passes_word_through():
    g = parse_grammar('RULE r { {ni:"acc", da:"loc"} }')
    assert generate_forms(g, "r", "kitob") == ["kitob"]


def test_expand_element_optional_literal():
    element = OptionalElement(Literal("dir"))
    assert expand_element(Grammar.build({}, {}), element, "kitob") == ["kitob", "kitobdir"]


def test_expand_element_literal_map():
    element = LiteralWithDescription(MappingProxyType({"mi": "q"}))
    assert expand_element(Grammar.build({}, {}), element, "kitob") == ["kitob"]


def test_empty_alternative_yields_root():
    g = parse_grammar("RULE r { }")
    assert generate_forms(g, "r", "kitob") == ["kitob"]


# ── Rules ─────────────────────────────────────────────────────────────────────

def test_forms_from_every_block_and_alternative():
    g = parse_grammar("""
        SUFFIX plural { lar: "pl" }
        SUFFIX case { ni: "acc" }
        RULE ot { @plural, @case }
        RULE ot { @plural + @case }
    """)
    assert generate_forms(g, "ot", "kitob") == ["kitoblar", "kitobni", "kitoblarni"]


def test_duplicates_are_dropped_in_order():
    g = parse_grammar("""
        SUFFIX plural { lar: "pl" }
        RULE ot { [@plural], @plural }
    """)
    assert generate_forms(g, "ot", "kitob") == ["kitob", "kitoblar"]


def test_unknown_rule():
    g = parse_grammar(ACCUSATIVE)
    with pytest.raises(NameNotFoundError) as exc:
        generate_forms(g, "verb", "kitob")
    assert exc.value.kind == "rule"
    assert isinstance(exc.value, LookupError)


def test_unknown_suffix_set():
    g = parse_grammar("RULE r { @nosuch }")
    with pytest.raises(NameNotFoundError) as exc:
        generate_forms(g, "r", "kitob")
    assert exc.value.kind == "suffix set"


def test_bundled_grammar_forms(uz_grammar):
    forms = generate_forms(uz_grammar, "ot", "олма")
    assert forms[0] == "олма"
    assert "олмалар" in forms
    assert "олмаларимизнинг" in forms
    assert "олмамизнинг" in forms
    assert "олмачалар" in forms
    assert len(forms) == len(set(forms))
