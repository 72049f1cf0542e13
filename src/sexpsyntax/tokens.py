"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenType(IntEnum):
    """Token kinds. Values are stable bit flags."""

    WHITESPACE = 1
    WORD = 2

    DOUBLE_QUOTE_STRING = 4  # "..."
    SINGLE_QUOTE_STRING = 8  # '...'

    LIST_DELIMITER_OPEN = 16  # ( [ {
    LIST_DELIMITER_CLOSE = 32  # ) ] }

    SINGLE_LINE_COMMENT = 64  # ; ... \n
    MULTI_LINE_COMMENT = 128  # #| ... |#, nesting

    @property
    def is_comment(self) -> bool:
        return self in (TokenType.SINGLE_LINE_COMMENT, TokenType.MULTI_LINE_COMMENT)

    @property
    def is_list_delimiter(self) -> bool:
        return self in (TokenType.LIST_DELIMITER_OPEN, TokenType.LIST_DELIMITER_CLOSE)


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 0-based line, column and offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A token records only its kind and where it sits in the text.

    The lexeme is always re-sliced from the source with :meth:`lexeme`.
    """

    type: TokenType
    offset: int
    length: int
    line: int
    column: int

    @property
    def end(self) -> int:
        """Offset one past the last character."""
        return self.offset + self.length

    @property
    def start_position(self) -> Position:
        return Position(self.line, self.column, self.offset)

    def lexeme(self, text: str) -> str:
        """Return the slice of *text* this token spans."""
        return text[self.offset : self.end]


OPEN_DELIMITERS = "([{"
CLOSE_DELIMITERS = ")]}"

# Opening list delimiter -> the closing delimiter it must be matched with.
CLOSE_VARIANT: dict[str, str] = {
    "(": ")",
    "[": "]",
    "{": "}",
}

MULTI_LINE_COMMENT_OPEN = "#|"
MULTI_LINE_COMMENT_CLOSE = "|#"


# The ECMAScript \s class: WhiteSpace plus LineTerminator.
WHITESPACE_CHARS = frozenset("\t\n\v\f\r ") | frozenset(
    map(
        chr,
        (
            0x00A0,
            0x1680,
            *range(0x2000, 0x200B),
            0x2028,
            0x2029,
            0x202F,
            0x205F,
            0x3000,
            0xFEFF,
        ),
    )
)


def is_whitespace(ch: str) -> bool:
    """Return True if ch belongs to the whitespace class."""
    return ch in WHITESPACE_CHARS


def is_list_delimiter(ch: str) -> bool:
    """Return True if ch is one of the six bracket characters."""
    return ch != "" and (ch in OPEN_DELIMITERS or ch in CLOSE_DELIMITERS)


def starts_with_at(text: str, index: int, pair: str) -> bool:
    """Return True if the two characters at *index* equal *pair*."""
    return text.startswith(pair, index)


def ends_word(text: str, index: int) -> bool:
    """Return True if the character at *index* cannot continue a word."""
    ch = text[index]
    return (
        is_whitespace(ch)
        or ch == ";"
        or ch == '"'
        or ch == "'"
        or is_list_delimiter(ch)
        or starts_with_at(text, index, MULTI_LINE_COMMENT_OPEN)
        or starts_with_at(text, index, MULTI_LINE_COMMENT_CLOSE)
    )
