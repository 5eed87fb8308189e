"""
Tokenizer for the suffix grammar DSL.

Usage:
    from uz_affix.lexer import tokenize

    for tok in tokenize('SUFFIX plural { лар: "plural" }'):
        print(tok.kind.name, tok.text, tok.line, tok.column)

Whitespace and ``#`` comments are skipped.  The token stream always ends
with a single EOF token.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from uz_affix.alphabet import is_identifier_char, is_identifier_start
from uz_affix.errors import GrammarLexError


class TokenKind(Enum):
    # Keywords
    SUFFIX = auto()
    RULE = auto()
    WHEN = auto()
    ENDSWITH = auto()
    STARTSWITH = auto()
    ISVOWEL = auto()
    ISCONSONANT = auto()
    CUT = auto()
    REPLACE = auto()
    # Values
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    LITERAL_SET = auto()
    REGEX_PATTERN = auto()
    # Punctuation
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    COLON = auto()
    PLUS = auto()
    AT = auto()
    EOF = auto()


KEYWORDS: dict[str, TokenKind] = {
    kind.name: kind
    for kind in (
        TokenKind.SUFFIX, TokenKind.RULE, TokenKind.WHEN,
        TokenKind.ENDSWITH, TokenKind.STARTSWITH,
        TokenKind.ISVOWEL, TokenKind.ISCONSONANT,
        TokenKind.CUT, TokenKind.REPLACE,
    )
}

PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "+": TokenKind.PLUS,
    "@": TokenKind.AT,
}

# After these keywords a '[' opens a raw character set, not an optional
# rule element.
_SET_OPERAND_KINDS = (TokenKind.ENDSWITH, TokenKind.STARTSWITH)


@dataclass(slots=True, frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


class Lexer:
    """Single-pass scanner over DSL source text."""

    def __init__(self, text: str):
        self.text = text
        self._pos = 0
        self._line = 1
        self._column = 1
        self._last_kind: TokenKind | None = None

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self._skip_whitespace_and_comments()
            if self._pos >= len(self.text):
                break
            token = self._next_token()
            tokens.append(token)
            self._last_kind = token.kind
        tokens.append(Token(TokenKind.EOF, "", self._line, self._column))
        return tokens

    # ── Scanning helpers ─────────────────────────────────────────────────

    def _advance(self) -> str:
        ch = self.text[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _peek(self, offset: int = 0) -> str | None:
        i = self._pos + offset
        return self.text[i] if i < len(self.text) else None

    def _skip_whitespace_and_comments(self) -> None:
        while self._pos < len(self.text):
            ch = self.text[self._pos]
            if ch.isspace():
                self._advance()
            elif ch == "#":
                while self._pos < len(self.text) and self.text[self._pos] != "\n":
                    self._advance()
            else:
                break

    def _next_token(self) -> Token:
        line, column = self._line, self._column
        ch = self.text[self._pos]

        if ch == "/" and self._peek(1) is not None:
            return self._read_regex(line, column)

        if ch == "[" and self._last_kind in _SET_OPERAND_KINDS:
            return self._read_literal_set(line, column)

        kind = PUNCTUATION.get(ch)
        if kind is not None:
            self._advance()
            return Token(kind, ch, line, column)

        if ch == '"':
            return self._read_string(line, column)

        if ch.isdecimal():
            return self._read_number(line, column)

        if is_identifier_start(self.text, self._pos):
            return self._read_identifier(line, column)

        raise GrammarLexError(f"Unexpected character {ch!r}", line, column)

    # ── Token readers ────────────────────────────────────────────────────

    def _read_delimited(self, close: str, what: str, line: int, column: int,
                        keep_backslash: bool) -> str:
        """Read up to the closing delimiter; the opening one is current."""
        self._advance()
        chars: list[str] = []
        while self._pos < len(self.text) and self.text[self._pos] != close:
            ch = self._advance()
            if ch == "\\" and self._pos < len(self.text):
                if keep_backslash:
                    chars.append(ch)
                ch = self._advance()
            chars.append(ch)
        if self._pos >= len(self.text):
            raise GrammarLexError(f"Unterminated {what}", line, column)
        self._advance()
        return "".join(chars)

    def _read_string(self, line: int, column: int) -> Token:
        # A backslash copies the next character literally; there is no
        # escape table.
        value = self._read_delimited('"', "string", line, column, keep_backslash=False)
        return Token(TokenKind.STRING, value, line, column)

    def _read_regex(self, line: int, column: int) -> Token:
        # Backslash pairs are kept whole so regex escapes survive.
        value = self._read_delimited("/", "regex pattern", line, column, keep_backslash=True)
        return Token(TokenKind.REGEX_PATTERN, value, line, column)

    def _read_literal_set(self, line: int, column: int) -> Token:
        self._advance()
        chars: list[str] = []
        while self._pos < len(self.text) and self.text[self._pos] != "]":
            chars.append(self._advance())
        if self._pos >= len(self.text):
            raise GrammarLexError("Unterminated character set", line, column)
        self._advance()
        return Token(TokenKind.LITERAL_SET, "".join(chars), line, column)

    def _read_number(self, line: int, column: int) -> Token:
        start = self._pos
        while self._pos < len(self.text) and self.text[self._pos].isdecimal():
            self._advance()
        return Token(TokenKind.NUMBER, self.text[start:self._pos], line, column)

    def _read_identifier(self, line: int, column: int) -> Token:
        start = self._pos
        if self.text[self._pos] == "-":
            self._advance()
        while self._pos < len(self.text) and is_identifier_char(self.text[self._pos]):
            self._advance()
        value = self.text[start:self._pos]
        kind = KEYWORDS.get(value.upper(), TokenKind.IDENTIFIER)
        return Token(kind, value, line, column)


def tokenize(text: str) -> list[Token]:
    """Tokenize DSL source text, raising GrammarLexError on bad input."""
    return Lexer(text).tokenize()
