"""Lossless tokenizer and parser for bracketed s-expression text."""

from __future__ import annotations

from sexpsyntax.ast import Leaf, ListNode, NodeType, ParseNode, ParseTree
from sexpsyntax.errors import (
    ErrorCode,
    InternalError,
    LexError,
    ParseError,
    SyntaxDiagnosticError,
)
from sexpsyntax.lexer import tokenize
from sexpsyntax.parser import ParseOptions, parse
from sexpsyntax.results import (
    FailureData,
    ParseResult,
    ParseSuccess,
    SyntaxFailure,
    TokenizationResult,
    TokenizationSuccess,
)
from sexpsyntax.simplify import to_simplified_parse_trees
from sexpsyntax.tokens import Position, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "FailureData",
    "InternalError",
    "Leaf",
    "LexError",
    "ListNode",
    "NodeType",
    "ParseError",
    "ParseNode",
    "ParseOptions",
    "ParseResult",
    "ParseSuccess",
    "ParseTree",
    "Position",
    "SyntaxDiagnosticError",
    "SyntaxFailure",
    "Token",
    "TokenType",
    "TokenizationResult",
    "TokenizationSuccess",
    "parse",
    "to_simplified_parse_trees",
    "tokenize",
]
