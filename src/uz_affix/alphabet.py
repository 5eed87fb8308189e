"""
Fixed letter tables for the scripts the grammar DSL is written in.

Uzbek is written in both Cyrillic and Latin script, and grammar files use
either.  Vowel/consonant membership is looked up case-insensitively in the
union of the per-script tables.
"""

from __future__ import annotations


# ── Per-script tables ───────────────────────────────────────────────────────

CYRILLIC_VOWELS = frozenset("аеёиоуўэюя")
CYRILLIC_CONSONANTS = frozenset("бвгджзйклмнпрстфхцчшщъьқғҳ")

# Digraphs (sh, ch, ng, oʻ, gʻ) are not letters of their own here: the
# last character of a stem decides, and that is always a single letter.
LATIN_VOWELS = frozenset("aeiou")
LATIN_CONSONANTS = frozenset("bcdfghjklmnpqrstvxyz")

SCRIPTS: dict[str, tuple[frozenset[str], frozenset[str]]] = {
    "cyrillic": (CYRILLIC_VOWELS, CYRILLIC_CONSONANTS),
    "latin": (LATIN_VOWELS, LATIN_CONSONANTS),
}

VOWELS = CYRILLIC_VOWELS | LATIN_VOWELS
CONSONANTS = CYRILLIC_CONSONANTS | LATIN_CONSONANTS


def is_vowel(ch: str) -> bool:
    return ch.lower() in VOWELS


def is_consonant(ch: str) -> bool:
    return ch.lower() in CONSONANTS


def is_identifier_start(text: str, pos: int) -> bool:
    """True if an identifier starts at text[pos].

    Identifiers begin with a letter or underscore, or with a hyphen that is
    immediately followed by a letter (suffix spellings such as ``-ю``).
    """
    ch = text[pos]
    if ch.isalpha() or ch == "_":
        return True
    return ch == "-" and pos + 1 < len(text) and text[pos + 1].isalpha()


def is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def vowel_class(script: str | None = None) -> str:
    """Vowel table as a bracket expression, e.g. for .aff conditions."""
    return "[" + "".join(sorted(_table(script, 0))) + "]"


def consonant_class(script: str | None = None) -> str:
    return "[" + "".join(sorted(_table(script, 1))) + "]"


def _table(script: str | None, index: int) -> frozenset[str]:
    if script is None:
        return VOWELS if index == 0 else CONSONANTS
    return SCRIPTS[script][index]
