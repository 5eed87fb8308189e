"""
Expansion of a rule into the surface forms it permits for a root.

Usage:
    from uz_affix.generator import generate_forms

    forms = generate_forms(grammar, "ot", "олма")

Each alternative is folded left to right over a growing list of candidate
strings that starts as [root].
"""

from __future__ import annotations

from uz_affix.conditions import apply_transformation, check_condition
from uz_affix.grammar import (
    Alternative,
    Grammar,
    Literal,
    OptionalElement,
    RuleElement,
    SuffixSetRef,
)


def generate_forms(grammar: Grammar, rule_name: str, root: str) -> list[str]:
    """All forms of ``root`` allowed by every rule block named ``rule_name``.

    Duplicates are dropped, first occurrence wins.  Raises NameNotFoundError
    for an unknown rule or an unknown ``@set`` reference.
    """
    forms: list[str] = []
    for rule in grammar.rules_named(rule_name):
        for alternative in rule.alternatives:
            forms.extend(expand_alternative(grammar, alternative, root))
    return list(dict.fromkeys(forms))


def expand_alternative(grammar: Grammar, alternative: Alternative, root: str) -> list[str]:
    candidates = [root]
    for element in alternative:
        candidates = [
            form
            for word in candidates
            for form in expand_element(grammar, element, word)
        ]
    return candidates


def expand_element(grammar: Grammar, element: RuleElement, word: str) -> list[str]:
    if isinstance(element, Literal):
        return [word + option for option in element.options]

    if isinstance(element, OptionalElement):
        return [word] + expand_element(grammar, element.child, word)

    if isinstance(element, SuffixSetRef):
        forms = []
        for definition in grammar.suffix_set(element.name).suffixes.values():
            if check_condition(word, definition.condition):
                forms.append(apply_transformation(word, definition.condition) + definition.suffix)
        return forms

    # LiteralWithDescription adds nothing in generation; the word passes
    # through unchanged.
    return [word]
