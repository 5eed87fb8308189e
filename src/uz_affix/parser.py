"""
Recursive-descent parser for the suffix grammar DSL.

Grammar of the DSL:

    grammar     := ( suffix_set | rule )* EOF
    suffix_set  := SUFFIX IDENT [ ":" STRING ] "{" suffix_def ( "," suffix_def )* "}"
    suffix_def  := IDENT ":" STRING [ WHEN condition [ CUT NUMBER | REPLACE STRING ] ]
    condition   := ( ENDSWITH | STARTSWITH ) ( LITERAL_SET | REGEX )
                 | ISVOWEL | ISCONSONANT
    rule        := RULE IDENT [ ":" STRING ] "{" alternative ( "," alternative )* "}"
    alternative := element ( [ "+" ] element )*
    element     := IDENT | "{" IDENT ":" STRING ( "," IDENT ":" STRING )* "}"
                 | "[" element "]" | "@" IDENT

Usage:
    from uz_affix.parser import load, parse_grammar

    grammar = load("data/uz.grammar")
    grammar = parse_grammar(text)

Either the whole grammar is returned or a GrammarLoadError is raised.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType

from uz_affix.errors import GrammarSyntaxError
from uz_affix.grammar import (
    Alternative,
    Condition,
    ConditionKind,
    Grammar,
    Literal,
    LiteralWithDescription,
    NO_CONDITION,
    OptionalElement,
    Rule,
    RuleElement,
    SuffixDefinition,
    SuffixSet,
    SuffixSetRef,
)
from uz_affix.lexer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

_CONDITION_KINDS = {
    TokenKind.ENDSWITH: ConditionKind.ENDS_WITH,
    TokenKind.STARTSWITH: ConditionKind.STARTS_WITH,
    TokenKind.ISVOWEL: ConditionKind.IS_VOWEL,
    TokenKind.ISCONSONANT: ConditionKind.IS_CONSONANT,
}


class Parser:
    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("Token stream must end with EOF")
        self.tokens = tokens
        self._pos = 0

    # ── Token helpers ────────────────────────────────────────────────────

    @property
    def current(self) -> Token:
        return self.tokens[min(self._pos, len(self.tokens) - 1)]

    def _at(self, *kinds: TokenKind) -> bool:
        return self.current.kind in kinds

    def _consume(self, kind: TokenKind) -> Token:
        token = self.current
        if token.kind is not kind:
            self._fail(kind.name)
        self._pos += 1
        return token

    def _fail(self, expected: str):
        token = self.current
        raise GrammarSyntaxError(expected, token.kind.name, token.line, token.column)

    # ── Top level ────────────────────────────────────────────────────────

    def parse(self) -> Grammar:
        suffix_sets: dict[str, SuffixSet] = {}
        rules: dict[str, list[Rule]] = {}

        while not self._at(TokenKind.EOF):
            if self._at(TokenKind.SUFFIX):
                suffix_set = self._parse_suffix_set()
                if suffix_set.name in suffix_sets:
                    logger.warning(
                        "Suffix set '%s' declared again; the later declaration replaces it",
                        suffix_set.name,
                    )
                suffix_sets[suffix_set.name] = suffix_set
            elif self._at(TokenKind.RULE):
                rule = self._parse_rule()
                rules.setdefault(rule.name, []).append(rule)
            else:
                self._fail("SUFFIX or RULE")

        grammar = Grammar.build(suffix_sets, rules)
        logger.debug(
            "Parsed grammar: %d suffix sets, %d suffixes, %d rule names",
            len(grammar.suffix_sets), grammar.num_suffixes, len(grammar.rules),
        )
        return grammar

    def _parse_header(self, keyword: TokenKind) -> tuple[str, str]:
        """Read ``KEYWORD name [: "description"] {`` and return (name, description)."""
        self._consume(keyword)
        name = self._consume(TokenKind.IDENTIFIER).text
        description = ""
        if self._at(TokenKind.COLON):
            self._consume(TokenKind.COLON)
            description = self._consume(TokenKind.STRING).text
        self._consume(TokenKind.LBRACE)
        return name, description

    # ── SUFFIX blocks ────────────────────────────────────────────────────

    def _parse_suffix_set(self) -> SuffixSet:
        name, description = self._parse_header(TokenKind.SUFFIX)

        suffixes: dict[str, SuffixDefinition] = {}
        while not self._at(TokenKind.RBRACE):
            definition = self._parse_suffix_definition()
            if definition.suffix in suffixes:
                logger.warning(
                    "Suffix '%s' declared twice in set '%s'; keeping the last declaration",
                    definition.suffix, name,
                )
            suffixes[definition.suffix] = definition

            if self._at(TokenKind.COMMA):
                self._consume(TokenKind.COMMA)
            elif not self._at(TokenKind.RBRACE):
                self._fail("COMMA or RBRACE")
        self._consume(TokenKind.RBRACE)

        return SuffixSet(name=name, description=description, suffixes=MappingProxyType(suffixes))

    def _parse_suffix_definition(self) -> SuffixDefinition:
        suffix = self._consume(TokenKind.IDENTIFIER).text
        self._consume(TokenKind.COLON)
        description = self._consume(TokenKind.STRING).text

        condition = NO_CONDITION
        if self._at(TokenKind.WHEN):
            self._consume(TokenKind.WHEN)
            condition = self._parse_condition()

        return SuffixDefinition(suffix=suffix, description=description, condition=condition)

    def _parse_condition(self) -> Condition:
        kind = ConditionKind.NONE
        characters = ""
        pattern = ""

        token_kind = self.current.kind
        if token_kind in _CONDITION_KINDS:
            self._consume(token_kind)
            kind = _CONDITION_KINDS[token_kind]
            if kind in (ConditionKind.ENDS_WITH, ConditionKind.STARTS_WITH):
                if self._at(TokenKind.LITERAL_SET):
                    characters = self._consume(TokenKind.LITERAL_SET).text
                elif self._at(TokenKind.REGEX_PATTERN):
                    pattern = self._consume(TokenKind.REGEX_PATTERN).text
                else:
                    self._fail("LITERAL_SET or REGEX_PATTERN")

        # CUT is checked before REPLACE and only one of them is taken; a
        # second modifier is left in the stream and fails as an unexpected
        # token in the enclosing suffix set.
        cut = 0
        replace = ""
        if self._at(TokenKind.CUT):
            self._consume(TokenKind.CUT)
            cut = int(self._consume(TokenKind.NUMBER).text)
        elif self._at(TokenKind.REPLACE):
            self._consume(TokenKind.REPLACE)
            replace = self._consume(TokenKind.STRING).text

        return Condition(kind=kind, characters=characters, pattern=pattern, cut=cut, replace=replace)

    # ── RULE blocks ──────────────────────────────────────────────────────

    def _parse_rule(self) -> Rule:
        name, description = self._parse_header(TokenKind.RULE)

        alternatives: list[Alternative] = []
        while True:
            alternatives.append(self._parse_alternative())
            if self._at(TokenKind.COMMA):
                self._consume(TokenKind.COMMA)
                if self._at(TokenKind.RBRACE):
                    break
            else:
                break
        self._consume(TokenKind.RBRACE)

        return Rule(name=name, description=description, alternatives=tuple(alternatives))

    def _parse_alternative(self) -> Alternative:
        elements: list[RuleElement] = []
        while not self._at(TokenKind.COMMA, TokenKind.RBRACE):
            elements.append(self._parse_element())
            if self._at(TokenKind.PLUS):
                self._consume(TokenKind.PLUS)
        return tuple(elements)

    def _parse_element(self) -> RuleElement:
        if self._at(TokenKind.LBRACE):
            return self._parse_literal_map()

        if self._at(TokenKind.LBRACKET):
            self._consume(TokenKind.LBRACKET)
            child = self._parse_element()
            self._consume(TokenKind.RBRACKET)
            return OptionalElement(child)

        if self._at(TokenKind.AT):
            self._consume(TokenKind.AT)
            return SuffixSetRef(self._consume(TokenKind.IDENTIFIER).text)

        if self._at(TokenKind.IDENTIFIER):
            return Literal(self._consume(TokenKind.IDENTIFIER).text)

        self._fail("rule element")

    def _parse_literal_map(self) -> LiteralWithDescription:
        self._consume(TokenKind.LBRACE)
        options: dict[str, str] = {}
        while True:
            key = self._consume(TokenKind.IDENTIFIER).text
            self._consume(TokenKind.COLON)
            options[key] = self._consume(TokenKind.STRING).text
            if not self._at(TokenKind.COMMA):
                break
            self._consume(TokenKind.COMMA)
        self._consume(TokenKind.RBRACE)
        return LiteralWithDescription(MappingProxyType(options))


# ── Entry points ────────────────────────────────────────────────────────────

def parse_grammar(text: str) -> Grammar:
    """Compile DSL source text into a Grammar."""
    return Parser(tokenize(text)).parse()


def load(path: str | Path) -> Grammar:
    """Read a UTF-8 grammar file and compile it."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        text = f.read()
    return parse_grammar(text)
