"""
Segmentation of a word into a root plus an ordered chain of suffixes.

Usage:
    from uz_affix.analyzer import Analyzer
    from uz_affix.parser import load

    analyzer = Analyzer(load("data/uz.grammar"))
    best = analyzer.analyze_best("олмаларимизнинг")
    print(best.root, [s.suffix for s in best.suffixes])

    for a in analyzer.analyze_by_rules("олмалар"):
        print(a.matched_rule or "-", a.root, a.suffix_texts)

The search is exhaustive: every suffix whose text and condition fit the end
of the remaining string is tried (longest first), and every branch is
followed down to the minimum root length.  It is exponential in the number
of overlapping suffixes, so callers on untrusted input should pass a limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from itertools import islice
from typing import Iterator

from uz_affix.conditions import apply_transformation, check_condition
from uz_affix.grammar import Grammar
from uz_affix.matcher import find_matching_rules

logger = logging.getLogger(__name__)

MIN_ROOT_LENGTH = 2


@dataclass(slots=True, frozen=True)
class SuffixAnalysis:
    """One suffix in a segmentation."""

    suffix: str
    description: str
    category: str  # name of the owning suffix set
    detailed_description: str


@dataclass(slots=True, frozen=True)
class WordAnalysis:
    """A (root, suffix chain) split of a word, optionally tagged with a rule.

    ``suffixes`` runs from the suffix next to the root to the outermost
    one.  When ``transformed`` is False, root + suffix texts spell
    ``original_word`` exactly.
    """

    root: str
    suffixes: tuple[SuffixAnalysis, ...]
    original_word: str
    transformed: bool = False

    matched_rule: str = ""
    rule_description: str = ""
    rule_id: str = ""
    alternative_index: int = -1

    @property
    def is_matched(self) -> bool:
        return bool(self.matched_rule)

    @property
    def suffix_texts(self) -> list[str]:
        return [s.suffix for s in self.suffixes]

    @property
    def surface(self) -> str:
        """Root followed by every suffix, in chain order."""
        return self.root + "".join(self.suffix_texts)

    def __repr__(self) -> str:
        parts = " + ".join([repr(self.root)] + [s.suffix for s in self.suffixes])
        rule = f" [{self.matched_rule}#{self.alternative_index}]" if self.is_matched else ""
        return f"WordAnalysis({parts}{rule})"


def identity_analysis(word: str) -> WordAnalysis:
    return WordAnalysis(root=word, suffixes=(), original_word=word)


# ── Decomposition ───────────────────────────────────────────────────────────

def iter_decompositions(word: str, grammar: Grammar) -> Iterator[WordAnalysis]:
    """Lazily yield every segmentation of ``word``, in discovery order.

    The whole word as a zero-suffix root is always yielded last (when it
    meets the minimum root length).
    """
    if len(word) < MIN_ROOT_LENGTH:
        return
    yield from _search(word, word, (), False, grammar)
    yield identity_analysis(word)


def _search(
    word: str,
    remainder: str,
    chain: tuple[SuffixAnalysis, ...],
    transformed: bool,
    grammar: Grammar,
) -> Iterator[WordAnalysis]:
    if len(remainder) < MIN_ROOT_LENGTH:
        return

    if chain:
        yield WordAnalysis(
            root=remainder, suffixes=chain, original_word=word, transformed=transformed,
        )

    # Too short to strip anything and still leave a root.
    if len(remainder) <= MIN_ROOT_LENGTH + 1:
        return

    matches: list[tuple[SuffixAnalysis, str, bool]] = []
    for suffix_set, definition in grammar.iter_suffixes():
        suffix = definition.suffix
        if not suffix or len(remainder) <= len(suffix) or not remainder.endswith(suffix):
            continue
        stem = remainder[: len(remainder) - len(suffix)]
        if not check_condition(stem, definition.condition):
            continue
        new_stem = apply_transformation(stem, definition.condition)
        if len(new_stem) < MIN_ROOT_LENGTH:
            continue
        analysis = SuffixAnalysis(
            suffix=suffix,
            description=definition.description,
            category=suffix_set.name,
            detailed_description=f"{suffix}:{suffix_set.description}:{definition.description}",
        )
        matches.append((analysis, new_stem, new_stem != stem))

    matches.sort(key=lambda m: len(m[0].suffix), reverse=True)

    for analysis, new_stem, changed in matches:
        yield from _search(word, new_stem, (analysis,) + chain, transformed or changed, grammar)


def rank(analyses: list[WordAnalysis]) -> list[WordAnalysis]:
    """Most suffixes first, then shortest root."""
    return sorted(analyses, key=lambda a: (-len(a.suffixes), len(a.root)))


def decompose(word: str, grammar: Grammar, limit: int | None = None) -> list[WordAnalysis]:
    """All segmentations of ``word``, ranked.  ``limit`` caps the search."""
    found = iter_decompositions(word, grammar)
    if limit:
        found = islice(found, limit)
    analyses = list(found)
    if limit and len(analyses) == limit:
        logger.debug("Decomposition of %r stopped at limit %d", word, limit)
    logger.debug("Decomposition of %r: %d candidates", word, len(analyses))
    return rank(analyses)


# ── Analyzer ────────────────────────────────────────────────────────────────

class Analyzer:
    """Analysis and generation over one immutable Grammar.

    Holds no per-call state, so one instance may serve many callers.
    """

    def __init__(self, grammar: Grammar, limit: int | None = None):
        self.grammar = grammar
        self.limit = limit or None

    def analyze_all(self, word: str) -> list[WordAnalysis]:
        """Every segmentation, ranked by suffix count then root length."""
        return decompose(word, self.grammar, self.limit)

    def analyze_best(self, word: str) -> WordAnalysis:
        """Top-ranked segmentation, or the word itself with no suffixes."""
        analyses = self.analyze_all(word)
        return analyses[0] if analyses else identity_analysis(word)

    def analyze_by_rules(self, word: str) -> list[WordAnalysis]:
        """Segmentations annotated with every (rule, alternative) they match.

        A segmentation matching several alternatives appears once per match;
        one matching nothing appears once with empty rule fields.  Matched
        results come first.
        """
        results: list[WordAnalysis] = []
        for analysis in self.analyze_all(word):
            matches = find_matching_rules(analysis.suffixes, self.grammar)
            if not matches:
                results.append(analysis)
                continue
            for m in matches:
                results.append(replace(
                    analysis,
                    matched_rule=m.rule_name,
                    rule_description=m.description,
                    rule_id=m.rule_id,
                    alternative_index=m.alternative_index,
                ))
        return sorted(
            results,
            key=lambda a: (not a.is_matched, -len(a.suffixes), len(a.root)),
        )

    def generate_forms(self, rule_name: str, root: str) -> list[str]:
        from uz_affix.generator import generate_forms

        return generate_forms(self.grammar, rule_name, root)
