"""--debug token and tree dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from sexpsyntax.ast import Leaf, ListNode, ParseNode, ParseTree
from sexpsyntax.tokens import Token


def dump_tokens(text: str, tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: position, type and lexeme."""
    for tok in tokens:
        file.write(
            f"{tok.line + 1}:{tok.column + 1} [{tok.offset}+{tok.length}] "
            f"{tok.type.name} {tok.lexeme(text)!r}\n"
        )


def dump_tree(text: str, parse_trees: Iterable[ParseTree], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable parse tree to *file*."""
    file.write("Root\n")
    # Depth of a node is the number of open iterators above it.
    stack: list[Iterator[ParseNode]] = [iter(parse_trees)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        _dump_node(text, node, len(stack), file)
        if isinstance(node, ListNode):
            stack.append(iter(node.children))


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(text: str, node: ParseNode, depth: int, f: TextIO) -> None:
    if isinstance(node, ListNode):
        f.write(
            f"{_indent(depth)}List @{node.line + 1}:{node.column + 1} "
            f"[{node.offset}+{node.length}]\n"
        )
    elif isinstance(node, Leaf):
        f.write(f"{_indent(depth)}{node.type.name}({node.lexeme(text)!r})\n")
