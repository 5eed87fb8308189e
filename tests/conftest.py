"""Shared test fixtures."""

from pathlib import Path

import pytest

from uz_affix.parser import load, parse_grammar

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Latin-script grammar small enough to reason about by hand.
LATIN_GRAMMAR = """
SUFFIX plural: "Plural" {
    lar: "plural"
}

SUFFIX case: "Case" {
    ni: "accusative",
    da: "locative"
}

RULE noun: "Noun" {
    [@plural] + [@case]
}
"""


def find_data(filename: str) -> Path | None:
    """Find a data file relative to the project root."""
    p = PROJECT_ROOT / "data" / filename
    return p if p.exists() else None


@pytest.fixture
def latin_grammar():
    return parse_grammar(LATIN_GRAMMAR)


@pytest.fixture
def uz_grammar_path() -> Path:
    p = find_data("uz.grammar")
    if p is None:
        pytest.skip("data/uz.grammar not found")
    return p


@pytest.fixture
def uz_grammar(uz_grammar_path):
    return load(uz_grammar_path)
