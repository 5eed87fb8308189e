"""Exceptions raised while loading and using a suffix grammar."""

from __future__ import annotations


class GrammarError(Exception):
    """Base class for every error this package raises."""


# ── Load time ───────────────────────────────────────────────────────────────

class GrammarLoadError(GrammarError):
    """The grammar text could not be turned into a Grammar.

    Always carries the 1-based line and column where reading stopped.
    """

    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}:{column}")


class GrammarLexError(GrammarLoadError):
    """Unterminated literal or a character the lexer does not recognize."""


class GrammarSyntaxError(GrammarLoadError):
    """A token of the wrong kind where a specific kind is required."""

    def __init__(self, expected: str, found: str, line: int, column: int):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected}, found {found}", line, column)


# ── Use time ────────────────────────────────────────────────────────────────

class InvalidPatternError(GrammarError, ValueError):
    """A regex condition failed to compile (raised at first evaluation)."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Invalid pattern /{pattern}/: {reason}")


class NameNotFoundError(GrammarError, LookupError):
    """A rule or suffix set name that the grammar does not define."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"No {kind} named '{name}'")


class FlagSpaceExhausted(GrammarError, OverflowError):
    """More suffix sets than single-character affix flags."""

    def __init__(self, name: str, capacity: int):
        self.name = name
        super().__init__(
            f"Cannot assign a flag to suffix set '{name}': "
            f"all {capacity} single-character flags are in use"
        )
