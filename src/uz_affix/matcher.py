"""
Validation of a suffix chain against rule alternatives.

A cursor walks the chain while the alternative's elements are scanned left
to right; there is no backtracking.  The alternative matches only if the
cursor ends exactly at the end of the chain.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from uz_affix.grammar import (
    Alternative,
    Grammar,
    LiteralWithDescription,
    OptionalElement,
    RuleElement,
    SuffixSetRef,
)

if TYPE_CHECKING:
    from uz_affix.analyzer import SuffixAnalysis


@dataclass(slots=True, frozen=True)
class RuleMatch:
    rule_name: str
    description: str
    rule_id: str
    alternative_index: int  # 0-based within the rule block


def _accepts(element: RuleElement, suffix: SuffixAnalysis) -> bool:
    if isinstance(element, SuffixSetRef):
        return suffix.category == element.name
    if isinstance(element, LiteralWithDescription):
        return suffix.suffix in element.options
    return False


def matches_alternative(suffixes: Sequence[SuffixAnalysis], alternative: Alternative) -> bool:
    cursor = 0
    for element in alternative:
        if isinstance(element, OptionalElement):
            child = element.child
            # Only set references and literal maps can consume a suffix.
            if (
                cursor < len(suffixes)
                and isinstance(child, (SuffixSetRef, LiteralWithDescription))
                and _accepts(child, suffixes[cursor])
            ):
                cursor += 1
        elif isinstance(element, (SuffixSetRef, LiteralWithDescription)):
            if cursor >= len(suffixes) or not _accepts(element, suffixes[cursor]):
                return False
            cursor += 1
        # Literal: no constraint on the chain

    return cursor == len(suffixes)


def check_references(alternative: Alternative, grammar: Grammar) -> None:
    """Raise NameNotFoundError for any ``@name`` the grammar lacks."""
    for element in alternative:
        while isinstance(element, OptionalElement):
            element = element.child
        if isinstance(element, SuffixSetRef):
            grammar.suffix_set(element.name)


def find_matching_rules(suffixes: Sequence[SuffixAnalysis], grammar: Grammar) -> list[RuleMatch]:
    """Every (rule, alternative) across the grammar that accepts the chain."""
    matches: list[RuleMatch] = []
    for rule in grammar.iter_rules():
        for index, alternative in enumerate(rule.alternatives):
            check_references(alternative, grammar)
            if matches_alternative(suffixes, alternative):
                matches.append(RuleMatch(
                    rule_name=rule.name,
                    description=rule.description,
                    rule_id=rule.rule_id,
                    alternative_index=index,
                ))
    return matches
