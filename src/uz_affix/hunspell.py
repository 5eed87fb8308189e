"""
Export of a suffix grammar as a Hunspell affix (.aff) file.

Usage:
    from uz_affix.hunspell import AffixExporter

    exporter = AffixExporter(grammar, lang="uz")
    exporter.save("uz.aff")
    print(exporter.flag_mapping())

Every suffix set gets one single-character flag (A-Z, a-z, 0-9, in order of
first use) and every suffix one ``SFX`` line derived from its condition.
Rule alternatives that reference suffix sets become best-effort
``COMPOUNDRULE`` lines.  The translation is one-way.
"""

from __future__ import annotations

import logging
import string
from pathlib import Path

from uz_affix.alphabet import consonant_class, vowel_class
from uz_affix.errors import FlagSpaceExhausted
from uz_affix.grammar import (
    Condition,
    ConditionKind,
    Grammar,
    OptionalElement,
    Rule,
    SuffixDefinition,
    SuffixSet,
    SuffixSetRef,
)

logger = logging.getLogger(__name__)

FLAG_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


class AffixExporter:
    def __init__(self, grammar: Grammar, lang: str = "uz"):
        self.grammar = grammar
        self.lang = lang
        self._flags: dict[str, str] = {}

    # ── Flags ────────────────────────────────────────────────────────────

    def flag_for(self, name: str) -> str:
        """Flag of a suffix set, assigning the next free one on first use."""
        flag = self._flags.get(name)
        if flag is None:
            if len(self._flags) >= len(FLAG_ALPHABET):
                raise FlagSpaceExhausted(name, len(FLAG_ALPHABET))
            flag = FLAG_ALPHABET[len(self._flags)]
            self._flags[name] = flag
            logger.debug("Flag %s -> suffix set '%s'", flag, name)
        return flag

    def flag_mapping(self) -> dict[str, str]:
        return dict(self._flags)

    # ── Output ───────────────────────────────────────────────────────────

    def to_aff(self) -> str:
        lines = ["SET UTF-8", f"LANG {self.lang}", ""]

        for suffix_set in self.grammar.suffix_sets.values():
            lines.extend(self._suffix_block(suffix_set))

        lines.extend(self._compound_rules())
        return "\n".join(lines) + "\n"

    def save(self, path: str | Path) -> None:
        text = self.to_aff()
        Path(path).write_text(text, encoding="utf-8")

    # ── SFX blocks ───────────────────────────────────────────────────────

    def _suffix_block(self, suffix_set: SuffixSet) -> list[str]:
        flag = self.flag_for(suffix_set.name)
        entries = [
            sfx_entry(definition, suffix_set.description)
            for definition in suffix_set.suffixes.values()
        ]
        if not entries:
            return []
        lines = [f"SFX {flag} Y {len(entries)}"]
        lines.extend(f"SFX {flag} {entry}" for entry in entries)
        lines.append("")
        return lines

    # ── COMPOUNDRULE lines ───────────────────────────────────────────────

    def _compound_rules(self) -> list[str]:
        blocks: list[list[str]] = []
        total = 0
        for rule in self.grammar.iter_rules():
            patterns = self._rule_patterns(rule)
            if patterns:
                total += len(patterns)
                blocks.append(
                    [f"# Rule: {rule.name} - {rule.description}"]
                    + [f"COMPOUNDRULE {p}" for p in patterns]
                    + [""]
                )
        if not blocks:
            return []
        lines = [f"COMPOUNDRULE {total}"]
        for block in blocks:
            lines.extend(block)
        return lines

    def _rule_patterns(self, rule: Rule) -> list[str]:
        patterns = []
        for alternative in rule.alternatives:
            flags = []
            for element in alternative:
                if isinstance(element, SuffixSetRef):
                    flags.append(self.flag_for(element.name))
                elif isinstance(element, OptionalElement) and isinstance(element.child, SuffixSetRef):
                    flags.append(self.flag_for(element.child.name) + "?")
            if flags:
                patterns.append("".join(flags))
        return patterns


def sfx_entry(definition: SuffixDefinition, set_description: str) -> str:
    """``strip append condition # morph`` for one suffix."""
    condition = definition.condition
    stripping = "0"
    appending = definition.suffix
    pattern = "."

    if condition.kind is not ConditionKind.NONE:
        pattern = condition_pattern(condition)
    if condition.transforms:
        if condition.uses_replace:
            if condition.kind is ConditionKind.ENDS_WITH:
                stripping = "1"
                appending = condition.replace + definition.suffix
        else:
            stripping = str(condition.cut)

    return f"{stripping} {appending} {pattern} # {set_description}:{definition.description}"


def condition_pattern(condition: Condition) -> str:
    kind = condition.kind
    if kind in (ConditionKind.ENDS_WITH, ConditionKind.STARTS_WITH):
        if condition.uses_regex:
            # Hunspell conditions only understand literals and [...] classes;
            # the regex is passed through as is.
            return condition.pattern
        return f"[{condition.characters}]"
    if kind is ConditionKind.IS_VOWEL:
        return vowel_class()
    if kind is ConditionKind.IS_CONSONANT:
        return consonant_class()
    return "."


def export_affix(grammar: Grammar, lang: str = "uz") -> str:
    """Hunspell .aff text for ``grammar``."""
    return AffixExporter(grammar, lang=lang).to_aff()
