"""
Data model for a compiled suffix grammar.

A Grammar holds named suffix sets and name-keyed lists of rules.  It is
built once by the parser and is read-only afterwards: mappings are exposed
through MappingProxyType and sequences as tuples, so one Grammar can be
shared by any number of analyses.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Union

from uz_affix.errors import NameNotFoundError


# ── Conditions ──────────────────────────────────────────────────────────────

class ConditionKind(Enum):
    NONE = "none"
    ENDS_WITH = "endswith"
    STARTS_WITH = "startswith"
    IS_VOWEL = "isvowel"
    IS_CONSONANT = "isconsonant"


@dataclass(slots=True, frozen=True)
class Condition:
    """Guard on the stem a suffix attaches to, plus an optional rewrite.

    ENDS_WITH / STARTS_WITH test either ``pattern`` (a regex, when set) or
    membership of the stem's last/first character in ``characters``.
    ``cut`` and ``replace`` are mutually exclusive.
    """

    kind: ConditionKind = ConditionKind.NONE
    characters: str = ""
    pattern: str = ""
    cut: int = 0
    replace: str = ""

    @property
    def uses_regex(self) -> bool:
        return bool(self.pattern)

    @property
    def uses_replace(self) -> bool:
        return bool(self.replace)

    @property
    def transforms(self) -> bool:
        return self.uses_replace or self.cut > 0


NO_CONDITION = Condition()


@dataclass(slots=True, frozen=True)
class SuffixDefinition:
    suffix: str
    description: str
    condition: Condition = NO_CONDITION


@dataclass(slots=True, frozen=True)
class SuffixSet:
    """A named group of interchangeable suffixes (one grammatical category)."""

    name: str
    description: str
    suffixes: Mapping[str, SuffixDefinition]

    def __len__(self) -> int:
        return len(self.suffixes)


# ── Rule elements ───────────────────────────────────────────────────────────

@dataclass(slots=True, frozen=True)
class Literal:
    """Fixed text.  A comma-separated value lists several options."""

    text: str

    @property
    def options(self) -> list[str]:
        if "," in self.text:
            return [s.strip() for s in self.text.split(",")]
        return [self.text]


@dataclass(slots=True, frozen=True)
class LiteralWithDescription:
    """``{миз:"1pl", сиз:"2pl"}``: suffix text → description."""

    options: Mapping[str, str]


@dataclass(slots=True, frozen=True)
class OptionalElement:
    """``[ element ]``: the wrapped element may be absent."""

    child: RuleElement


@dataclass(slots=True, frozen=True)
class SuffixSetRef:
    """``@name``: any suffix from the named set."""

    name: str


RuleElement = Union[Literal, LiteralWithDescription, OptionalElement, SuffixSetRef]
Alternative = tuple[RuleElement, ...]


def _new_rule_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True, frozen=True)
class Rule:
    name: str
    description: str
    alternatives: tuple[Alternative, ...]
    rule_id: str = field(default_factory=_new_rule_id, compare=False)


# ── Grammar ─────────────────────────────────────────────────────────────────

@dataclass(slots=True, frozen=True)
class Grammar:
    suffix_sets: Mapping[str, SuffixSet]
    rules: Mapping[str, tuple[Rule, ...]]

    @classmethod
    def build(
        cls,
        suffix_sets: dict[str, SuffixSet],
        rules: dict[str, list[Rule]],
    ) -> Grammar:
        """Freeze the parser's working dicts into a read-only Grammar."""
        return cls(
            suffix_sets=MappingProxyType(dict(suffix_sets)),
            rules=MappingProxyType({name: tuple(group) for name, group in rules.items()}),
        )

    # ── Lookup ───────────────────────────────────────────────────────────

    def suffix_set(self, name: str) -> SuffixSet:
        try:
            return self.suffix_sets[name]
        except KeyError:
            raise NameNotFoundError("suffix set", name) from None

    def rules_named(self, name: str) -> tuple[Rule, ...]:
        try:
            return self.rules[name]
        except KeyError:
            raise NameNotFoundError("rule", name) from None

    def iter_suffixes(self) -> Iterator[tuple[SuffixSet, SuffixDefinition]]:
        """Every suffix definition with its owning set, in declaration order."""
        for suffix_set in self.suffix_sets.values():
            for definition in suffix_set.suffixes.values():
                yield suffix_set, definition

    def iter_rules(self) -> Iterator[Rule]:
        for group in self.rules.values():
            yield from group

    # ── Introspection ────────────────────────────────────────────────────

    @property
    def num_suffixes(self) -> int:
        return sum(len(s) for s in self.suffix_sets.values())

    def summary(self) -> str:
        rule_blocks = sum(len(group) for group in self.rules.values())
        alternatives = sum(len(r.alternatives) for r in self.iter_rules())
        lines = [
            f"Suffix sets:    {len(self.suffix_sets)}",
            f"Suffixes:       {self.num_suffixes}",
            f"Rule names:     {len(self.rules)}",
            f"Rule blocks:    {rule_blocks}",
            f"Alternatives:   {alternatives}",
        ]
        return "\n".join(lines)


def format_element(element: RuleElement) -> str:
    """Render a rule element back in DSL notation."""
    if isinstance(element, Literal):
        return element.text
    if isinstance(element, LiteralWithDescription):
        inner = ", ".join(f'{k}:"{v}"' for k, v in element.options.items())
        return "{" + inner + "}"
    if isinstance(element, OptionalElement):
        return "[" + format_element(element.child) + "]"
    return "@" + element.name


def format_alternative(alternative: Alternative) -> str:
    return " + ".join(format_element(e) for e in alternative)
