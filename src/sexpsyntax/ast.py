"""Parse node types: a node is either a token leaf or a list of nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias

from sexpsyntax.tokens import Token, TokenType


class NodeType(Enum):
    LEAF = "leaf"
    LIST = "list"


@dataclass(frozen=True, slots=True)
class Leaf:
    """A single token in the tree."""

    node_type: ClassVar[NodeType] = NodeType.LEAF

    token: Token

    @property
    def type(self) -> TokenType:
        return self.token.type

    @property
    def offset(self) -> int:
        return self.token.offset

    @property
    def length(self) -> int:
        return self.token.length

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    def lexeme(self, text: str) -> str:
        return self.token.lexeme(text)


@dataclass(frozen=True, slots=True)
class ListNode:
    """A delimited list.

    ``length`` covers every token the list spans, including tokens that were
    left out of ``children`` by the parse options.
    """

    node_type: ClassVar[NodeType] = NodeType.LIST

    children: tuple[ParseNode, ...]
    offset: int
    length: int
    line: int
    column: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def source(self, text: str) -> str:
        """Return the text this list spans, delimiters included."""
        return text[self.offset : self.end]


ParseNode: TypeAlias = "Leaf | ListNode"
ParseTree: TypeAlias = ParseNode
