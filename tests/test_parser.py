"""Tests for the grammar parser and the compiled Grammar model."""

import logging

import pytest

from uz_affix.errors import GrammarLoadError, GrammarSyntaxError, NameNotFoundError
from uz_affix.grammar import (
    ConditionKind,
    Literal,
    LiteralWithDescription,
    OptionalElement,
    SuffixSetRef,
    format_alternative,
)
from uz_affix.lexer import tokenize
from uz_affix.parser import Parser, load, parse_grammar


# ── Suffix sets ───────────────────────────────────────────────────────────────

def test_suffix_set_with_description():
    g = parse_grammar('SUFFIX plural: "Plural" { lar: "plural marker" }')
    s = g.suffix_sets["plural"]
    assert s.name == "plural"
    assert s.description == "Plural"
    assert len(s) == 1
    d = s.suffixes["lar"]
    assert d.suffix == "lar"
    assert d.description == "plural marker"
    assert d.condition.kind is ConditionKind.NONE


def test_suffix_set_description_is_optional():
    g = parse_grammar('SUFFIX plural { lar: "pl" }')
    assert g.suffix_sets["plural"].description == ""


def test_suffix_order_is_preserved():
    g = parse_grammar('SUFFIX case { ni: "acc", da: "loc", dan: "abl" }')
    assert list(g.suffix_sets["case"].suffixes) == ["ni", "da", "dan"]


def test_empty_suffix_set():
    g = parse_grammar("SUFFIX nothing { }")
    assert len(g.suffix_sets["nothing"]) == 0


def test_condition_literal_set():
    g = parse_grammar('SUFFIX s { ni: "acc" WHEN ENDSWITH [bdk] }')
    cond = g.suffix_sets["s"].suffixes["ni"].condition
    assert cond.kind is ConditionKind.ENDS_WITH
    assert cond.characters == "bdk"
    assert cond.pattern == ""
    assert not cond.uses_regex


def test_condition_regex():
    g = parse_grammar('SUFFIX s { ga: "dat" WHEN STARTSWITH /[^kq]/ }')
    cond = g.suffix_sets["s"].suffixes["ga"].condition
    assert cond.kind is ConditionKind.STARTS_WITH
    assert cond.pattern == "[^kq]"
    assert cond.uses_regex


def test_condition_vowel_and_consonant():
    g = parse_grammar('SUFFIX s { m: "1sg" WHEN ISVOWEL, im: "1sg" WHEN isconsonant }')
    defs = g.suffix_sets["s"].suffixes
    assert defs["m"].condition.kind is ConditionKind.IS_VOWEL
    assert defs["im"].condition.kind is ConditionKind.IS_CONSONANT


def test_condition_cut():
    g = parse_grammar('SUFFIX s { i: "3sg" WHEN ISVOWEL CUT 1 }')
    cond = g.suffix_sets["s"].suffixes["i"].condition
    assert cond.cut == 1
    assert cond.replace == ""
    assert cond.transforms


def test_condition_replace():
    g = parse_grammar('SUFFIX s { i: "3sg" WHEN ENDSWITH /q/ REPLACE "g" }')
    cond = g.suffix_sets["s"].suffixes["i"].condition
    assert cond.replace == "g"
    assert cond.cut == 0
    assert cond.uses_replace


def test_cut_and_replace_together_is_error():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar('SUFFIX s { i: "x" WHEN ENDSWITH /q/ CUT 1 REPLACE "g" }')
    assert exc.value.expected == "COMMA or RBRACE"
    assert exc.value.found == "REPLACE"


def test_endswith_requires_operand():
    with pytest.raises(GrammarSyntaxError):
        parse_grammar('SUFFIX s { i: "x" WHEN ENDSWITH }')


def test_duplicate_suffix_last_wins(caplog):
    with caplog.at_level(logging.WARNING, logger="uz_affix.parser"):
        g = parse_grammar('SUFFIX s { ni: "first", ni: "second" }')
    assert g.suffix_sets["s"].suffixes["ni"].description == "second"
    assert len(g.suffix_sets["s"]) == 1
    assert "declared twice" in caplog.text


def test_duplicate_suffix_set_last_wins(caplog):
    with caplog.at_level(logging.WARNING, logger="uz_affix.parser"):
        g = parse_grammar('SUFFIX s { a: "a" } SUFFIX s { b: "b" }')
    assert list(g.suffix_sets["s"].suffixes) == ["b"]
    assert "declared again" in caplog.text


def test_missing_comma_between_suffixes():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar('SUFFIX s { a: "a" b: "b" }')
    assert exc.value.found == "IDENTIFIER"


def test_missing_colon_reports_position():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar('SUFFIX s {\n  a "a"\n}')
    assert exc.value.expected == "COLON"
    assert exc.value.found == "STRING"
    assert (exc.value.line, exc.value.column) == (2, 5)
    assert "Expected COLON, found STRING at line 2:5" == str(exc.value)


# ── Rules ─────────────────────────────────────────────────────────────────────

def test_rule_elements():
    g = parse_grammar(
        'RULE r: "desc" { @a + [@b] + {mi:"question", chi:"emphatic"} + dir, @a }'
    )
    (rule,) = g.rules["r"]
    assert rule.description == "desc"
    assert len(rule.alternatives) == 2

    first = rule.alternatives[0]
    assert first[0] == SuffixSetRef("a")
    assert first[1] == OptionalElement(SuffixSetRef("b"))
    assert isinstance(first[2], LiteralWithDescription)
    assert dict(first[2].options) == {"mi": "question", "chi": "emphatic"}
    assert first[3] == Literal("dir")
    assert rule.alternatives[1] == (SuffixSetRef("a"),)


def test_plus_is_optional():
    g = parse_grammar("RULE r { @a @b } RULE s { @a + @b }")
    assert g.rules["r"][0].alternatives == g.rules["s"][0].alternatives


def test_optional_wraps_one_element():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar("RULE r { [@a @b] }")
    assert exc.value.expected == "RBRACKET"


def test_nested_optional_literal():
    g = parse_grammar('RULE r { [{mi:"q"}] }')
    element = g.rules["r"][0].alternatives[0][0]
    assert isinstance(element, OptionalElement)
    assert isinstance(element.child, LiteralWithDescription)


def test_empty_rule_has_one_empty_alternative():
    g = parse_grammar("RULE r { }")
    assert g.rules["r"][0].alternatives == ((),)


def test_trailing_comma_in_rule():
    g = parse_grammar("RULE r { @a, @b, }")
    assert len(g.rules["r"][0].alternatives) == 2


def test_rules_with_same_name_accumulate():
    g = parse_grammar('RULE ot: "one" { @a } RULE ot: "two" { @b }')
    group = g.rules["ot"]
    assert [r.description for r in group] == ["one", "two"]
    assert group[0].rule_id != group[1].rule_id
    assert len(g.rules) == 1


def test_bad_rule_element():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar('RULE r { @a + "text" }')
    assert exc.value.expected == "rule element"


def test_unterminated_rule():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar("RULE r { @a +")
    assert exc.value.found == "EOF"


def test_format_alternative_round_trips_notation():
    g = parse_grammar('RULE r { @a + [@b] + {mi:"q"} + dir }')
    assert format_alternative(g.rules["r"][0].alternatives[0]) == '@a + [@b] + {mi:"q"} + dir'


# ── Top level ─────────────────────────────────────────────────────────────────

def test_empty_grammar():
    g = parse_grammar("# nothing but a comment\n")
    assert len(g.suffix_sets) == 0
    assert len(g.rules) == 0


def test_unexpected_top_level_token():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar("\n  plural { }")
    assert exc.value.expected == "SUFFIX or RULE"
    assert exc.value.found == "IDENTIFIER"
    assert (exc.value.line, exc.value.column) == (2, 3)


def test_syntax_error_is_a_load_error():
    with pytest.raises(GrammarLoadError):
        parse_grammar("SUFFIX")


def test_parser_requires_eof():
    tokens = tokenize("RULE r { }")[:-1]
    with pytest.raises(ValueError):
        Parser(tokens)


def test_grammar_is_read_only(latin_grammar):
    with pytest.raises(TypeError):
        latin_grammar.suffix_sets["extra"] = latin_grammar.suffix_sets["case"]
    with pytest.raises(TypeError):
        latin_grammar.suffix_sets["case"].suffixes["x"] = None
    assert isinstance(latin_grammar.rules["noun"], tuple)


def test_lookup_by_name(latin_grammar):
    assert latin_grammar.suffix_set("case").name == "case"
    assert len(latin_grammar.rules_named("noun")) == 1
    with pytest.raises(NameNotFoundError) as exc:
        latin_grammar.suffix_set("verb")
    assert exc.value.kind == "suffix set"
    with pytest.raises(NameNotFoundError):
        latin_grammar.rules_named("verb")


def test_iter_suffixes(latin_grammar):
    pairs = [(s.name, d.suffix) for s, d in latin_grammar.iter_suffixes()]
    assert pairs == [("plural", "lar"), ("case", "ni"), ("case", "da")]
    assert latin_grammar.num_suffixes == 3


def test_summary(latin_grammar):
    text = latin_grammar.summary()
    assert "Suffix sets:    2" in text
    assert "Suffixes:       3" in text
    assert "Rule names:     1" in text


# ── Files ─────────────────────────────────────────────────────────────────────

def test_load_file(tmp_path):
    path = tmp_path / "g.grammar"
    path.write_text('SUFFIX plural { лар: "кўплик" }\n', encoding="utf-8")
    g = load(path)
    assert "лар" in g.suffix_sets["plural"].suffixes


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.grammar")


def test_load_bundled_grammar(uz_grammar):
    assert set(uz_grammar.suffix_sets) == {"plural", "possessive", "case", "diminutive"}
    assert len(uz_grammar.rules["ot"]) == 2
