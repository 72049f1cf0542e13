"""Success and failure values returned by tokenize() and parse()."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, NoReturn, TypeAlias

from sexpsyntax.errors import ErrorCode, LexError, ParseError
from sexpsyntax.tokens import Position, Token

if TYPE_CHECKING:
    from sexpsyntax.ast import ParseTree


@dataclass(frozen=True, slots=True)
class FailureData:
    """Extra data attached to parser failures."""

    nesting_level: int


@dataclass(frozen=True, slots=True)
class SyntaxFailure:
    """A malformed-input report: stable code plus rendered source context.

    ``summary`` is the one-line description without source context.
    Parser failures always carry ``data``; tokenizer failures never do.
    """

    error_code: ErrorCode
    error_message: str
    start: Position
    end: Position
    data: FailureData | None = None
    summary: str = ""

    ok: Literal[False] = False

    @property
    def nesting_level(self) -> int | None:
        return self.data.nesting_level if self.data is not None else None

    def raise_error(self) -> NoReturn:
        """Raise this failure as a LexError or ParseError."""
        cls = LexError if self.data is None else ParseError
        raise cls(self.error_code, self.error_message, self.start, self.end, self.nesting_level)

    def unwrap(self) -> NoReturn:
        self.raise_error()


@dataclass(frozen=True, slots=True)
class TokenizationSuccess:
    tokens: tuple[Token, ...]

    ok: Literal[True] = True

    def unwrap(self) -> tuple[Token, ...]:
        return self.tokens


@dataclass(frozen=True, slots=True)
class ParseSuccess:
    """Parse trees plus the length of text the synthetic root spanned.

    ``length`` equals the input length whatever the parse options were.
    """

    parse_trees: tuple[ParseTree, ...]
    length: int

    ok: Literal[True] = True

    def unwrap(self) -> tuple[ParseTree, ...]:
        return self.parse_trees


TokenizationResult: TypeAlias = "TokenizationSuccess | SyntaxFailure"
ParseResult: TypeAlias = "ParseSuccess | SyntaxFailure"
