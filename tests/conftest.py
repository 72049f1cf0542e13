"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from sexpsyntax.ast import ListNode, ParseTree
from sexpsyntax.lexer import tokenize
from sexpsyntax.parser import parse
from sexpsyntax.results import SyntaxFailure
from sexpsyntax.simplify import to_simplified_parse_trees
from sexpsyntax.tokens import Token


@pytest.fixture
def lex():
    """Return a helper that tokenizes text and returns the tokens."""

    def _lex(text: str) -> tuple[Token, ...]:
        result = tokenize(text)
        assert result.ok, f"tokenize failed:\n{result.error_message}"
        return result.tokens

    return _lex


@pytest.fixture
def lex_fail():
    """Return a helper that tokenizes text and returns the failure."""

    def _lex_fail(text: str) -> SyntaxFailure:
        result = tokenize(text)
        assert not result.ok, f"expected tokenize to fail for {text!r}"
        return result

    return _lex_fail


@pytest.fixture
def parse_ok():
    """Return a helper that parses text and returns the parse trees."""

    def _parse(text: str, **flags: bool) -> tuple[ParseTree, ...]:
        result = parse(text, **flags)
        assert result.ok, f"parse failed:\n{result.error_message}"
        return result.parse_trees

    return _parse


@pytest.fixture
def parse_fail():
    """Return a helper that parses text and returns the failure."""

    def _parse_fail(text: str, **flags: bool) -> SyntaxFailure:
        result = parse(text, **flags)
        assert not result.ok, f"expected parse to fail for {text!r}"
        return result

    return _parse_fail


@pytest.fixture
def simplify():
    """Return a helper that parses text and returns simplified trees."""

    def _simplify(text: str, include_comments: bool = True, include_whitespace: bool = True):
        result = parse(text)
        assert result.ok, f"parse failed:\n{result.error_message}"
        return to_simplified_parse_trees(
            text, result.parse_trees, include_comments, include_whitespace
        )

    return _simplify


@pytest.fixture
def lexemes():
    """Return a helper that maps tokens to their lexemes."""

    def _lexemes(text: str, tokens) -> list[str]:
        return [t.lexeme(text) for t in tokens]

    return _lexemes


@pytest.fixture
def all_lists():
    """Return a helper that collects every ListNode in a forest, depth first."""

    def _all_lists(nodes) -> list[ListNode]:
        found: list[ListNode] = []
        for node in nodes:
            if isinstance(node, ListNode):
                found.append(node)
                found.extend(_all_lists(node.children))
        return found

    return _all_lists
