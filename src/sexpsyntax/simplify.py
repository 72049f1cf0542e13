"""Simplified parse trees: nested lists of lexeme strings."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TypeAlias

from sexpsyntax.ast import Leaf, ListNode, ParseNode, ParseTree
from sexpsyntax.errors import InternalError
from sexpsyntax.tokens import TokenType

SimplifiedParseNode: TypeAlias = "str | list[SimplifiedParseNode]"
SimplifiedParseTree: TypeAlias = SimplifiedParseNode


def to_simplified_parse_trees(
    text: str,
    parse_trees: Iterable[ParseTree],
    include_comments: bool = True,
    include_whitespace: bool = True,
) -> list[SimplifiedParseTree]:
    """Replace lists with Python lists and leaves with their lexemes.

    Whitespace and comment leaves are dropped according to the flags given
    here, independently of the options the trees were parsed with. The walk
    keeps its own stack, so nesting depth is bounded only by memory.
    """
    out: list[SimplifiedParseTree] = []
    stack: list[tuple[Iterator[ParseNode], list[SimplifiedParseNode]]] = [
        (iter(parse_trees), out)
    ]

    while stack:
        children, target = stack[-1]
        node = next(children, None)
        if node is None:
            stack.pop()
            continue

        if isinstance(node, ListNode):
            simplified: list[SimplifiedParseNode] = []
            target.append(simplified)
            stack.append((iter(node.children), simplified))
        elif isinstance(node, Leaf):
            if not include_whitespace and node.type is TokenType.WHITESPACE:
                continue
            if not include_comments and node.type.is_comment:
                continue
            target.append(node.lexeme(text))
        else:
            raise InternalError(f"not a parse node: {type(node).__name__}")

    return out
