"""
Evaluation of suffix conditions and the stem rewrites paired with them.

Both the decomposer and the form generator ask the same two questions of a
candidate stem: may this suffix attach (check_condition), and what does the
stem look like afterwards (apply_transformation).
"""

from __future__ import annotations

import re
from functools import lru_cache

from uz_affix.alphabet import is_consonant, is_vowel
from uz_affix.errors import InvalidPatternError
from uz_affix.grammar import Condition, ConditionKind


@lru_cache(maxsize=512)
def _compile(pattern: str, at_end: bool) -> re.Pattern[str]:
    anchored = f"(?:{pattern})$" if at_end else f"^(?:{pattern})"
    try:
        return re.compile(anchored, re.IGNORECASE)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def anchored_pattern(condition: Condition) -> re.Pattern[str]:
    """Compiled regex for a ENDS_WITH / STARTS_WITH condition.

    Compilation is deferred to first use, so a malformed pattern only fails
    the call that evaluates it.
    """
    return _compile(condition.pattern, condition.kind is ConditionKind.ENDS_WITH)


def check_condition(stem: str, condition: Condition) -> bool:
    """True if a suffix guarded by ``condition`` may attach to ``stem``."""
    kind = condition.kind
    if kind is ConditionKind.NONE:
        return True
    if not stem:
        return False

    if kind is ConditionKind.ENDS_WITH:
        if condition.uses_regex:
            return anchored_pattern(condition).search(stem) is not None
        return stem[-1] in condition.characters

    if kind is ConditionKind.STARTS_WITH:
        if condition.uses_regex:
            return anchored_pattern(condition).search(stem) is not None
        return stem[0] in condition.characters

    if kind is ConditionKind.IS_VOWEL:
        return is_vowel(stem[-1])

    if kind is ConditionKind.IS_CONSONANT:
        return is_consonant(stem[-1])

    return True


def apply_transformation(stem: str, condition: Condition) -> str:
    """Rewrite ``stem`` after its condition held.

    REPLACE substitutes the matched regex at the anchored end; it has no
    effect on character-set or letter-class conditions.  CUT drops that
    many trailing characters when the stem is long enough.
    """
    if condition.uses_replace:
        if condition.uses_regex and condition.kind in (
            ConditionKind.ENDS_WITH, ConditionKind.STARTS_WITH,
        ):
            replacement = condition.replace
            return anchored_pattern(condition).sub(lambda _m: replacement, stem, count=1)
        return stem

    if condition.cut > 0 and len(stem) >= condition.cut:
        return stem[: len(stem) - condition.cut]

    return stem
