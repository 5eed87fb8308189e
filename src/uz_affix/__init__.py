"""uz-affix: suffix grammar compiler, word segmenter and form generator for Uzbek."""

from uz_affix.errors import (
    GrammarError, GrammarLoadError, GrammarLexError, GrammarSyntaxError,
    InvalidPatternError, NameNotFoundError, FlagSpaceExhausted,
)
from uz_affix.grammar import Grammar, Rule, SuffixSet, SuffixDefinition, Condition
from uz_affix.parser import load, parse_grammar
from uz_affix.analyzer import Analyzer, WordAnalysis, SuffixAnalysis
from uz_affix.generator import generate_forms
from uz_affix.hunspell import AffixExporter, export_affix
from uz_affix.engine import MorphEngine

__all__ = [
    "GrammarError", "GrammarLoadError", "GrammarLexError", "GrammarSyntaxError",
    "InvalidPatternError", "NameNotFoundError", "FlagSpaceExhausted",
    "Grammar", "Rule", "SuffixSet", "SuffixDefinition", "Condition",
    "load", "parse_grammar",
    "Analyzer", "WordAnalysis", "SuffixAnalysis",
    "generate_forms",
    "AffixExporter", "export_affix",
    "MorphEngine",
]
