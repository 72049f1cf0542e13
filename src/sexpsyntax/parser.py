"""Parser: matches list delimiters and builds parse trees from tokens."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from sexpsyntax.ast import Leaf, ListNode, ParseNode, ParseTree
from sexpsyntax.errors import ErrorCode, InternalError, render_point, render_span
from sexpsyntax.lexer import tokenize
from sexpsyntax.results import FailureData, ParseResult, ParseSuccess, SyntaxFailure
from sexpsyntax.tokens import CLOSE_VARIANT, Token, TokenType


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Which token categories are kept as children in the tree.

    Excluded tokens still count toward their enclosing list's length.
    """

    include_comments: bool = True
    include_whitespace: bool = True
    include_list_delimiters: bool = True

    def keeps(self, tt: TokenType) -> bool:
        if tt is TokenType.WHITESPACE:
            return self.include_whitespace
        if tt.is_comment:
            return self.include_comments
        if tt.is_list_delimiter:
            return self.include_list_delimiters
        return True


@dataclass(slots=True)
class _ListBuilder:
    """A list node under construction."""

    offset: int
    line: int
    column: int
    children: list[ParseNode] = field(default_factory=list)
    length: int = 0

    @classmethod
    def at(cls, token: Token) -> _ListBuilder:
        return cls(token.offset, token.line, token.column)

    def add(self, node: ParseNode, keep: bool = True) -> None:
        self.length += node.length
        if keep:
            self.children.append(node)

    def freeze(self) -> ListNode:
        return ListNode(tuple(self.children), self.offset, self.length, self.line, self.column)


class Parser:
    """Two-stack delimiter matcher over a token sequence.

    ``_delims`` holds open delimiter tokens not yet closed; ``_lists`` holds
    the in-progress list nodes, with a synthetic root at the bottom.
    """

    def __init__(self, tokens: Iterable[Token], text: str, options: ParseOptions) -> None:
        self._tokens = tokens
        self._text = text
        self._options = options
        self._delims: list[Token] = []
        self._lists: list[_ListBuilder] = [_ListBuilder(0, 0, 0)]

    @property
    def _top(self) -> _ListBuilder:
        return self._lists[-1]

    def parse(self) -> ParseResult:
        for token in self._tokens:
            tt = token.type

            if tt is TokenType.LIST_DELIMITER_OPEN:
                self._open(token)
            elif tt is TokenType.LIST_DELIMITER_CLOSE:
                failure = self._close(token)
                if failure is not None:
                    return failure
            elif tt in _LEAF_TYPES:
                self._top.add(Leaf(token), self._options.keeps(tt))
            else:
                raise InternalError(f"unhandled token type {tt!r}")

        if len(self._lists) != 1:
            return self._unclosed()

        root = self._lists[0]
        return ParseSuccess(tuple(root.children), root.length)

    # ------------------------------------------------------------------
    # Delimiters
    # ------------------------------------------------------------------

    def _open(self, token: Token) -> None:
        self._delims.append(token)
        self._lists.append(_ListBuilder.at(token))
        self._top.add(Leaf(token), self._options.include_list_delimiters)

    def _close(self, token: Token) -> SyntaxFailure | None:
        self._top.add(Leaf(token), self._options.include_list_delimiters)

        if not self._delims:
            return self._unexpected_close(token)

        opener = self._delims.pop()
        expected = CLOSE_VARIANT[opener.lexeme(self._text)]
        actual = token.lexeme(self._text)
        if expected != actual:
            return self._mismatch(opener, token, expected, actual)

        if len(self._lists) < 2:
            raise InternalError("list stack out of step with delimiter stack")
        done = self._lists.pop().freeze()
        self._top.add(done)
        return None

    # ------------------------------------------------------------------
    # Failures
    # ------------------------------------------------------------------

    def _failure(
        self, code: ErrorCode, message: str, summary: str, start: Token, end: Token
    ) -> SyntaxFailure:
        return SyntaxFailure(
            code,
            message,
            start.start_position,
            end.start_position,
            FailureData(nesting_level=len(self._delims)),
            summary,
        )

    def _unexpected_close(self, token: Token) -> SyntaxFailure:
        code = ErrorCode.UNEXPECTED_CLOSING_DELIMITER
        summary = "unexpected closing delimiter"
        message = render_point(self._text, token.line, token.column, code, summary)
        return self._failure(code, message, summary, token, token)

    def _mismatch(self, opener: Token, closer: Token, expected: str, actual: str) -> SyntaxFailure:
        code = ErrorCode.DELIM_MISMATCH
        summary = f"closing delimiter, saw {actual} but expected to see {expected}"
        message = render_span(
            self._text,
            opener.start_position,
            closer.start_position,
            code,
            "opening delimiter",
            summary,
        )
        return self._failure(code, message, summary, opener, closer)

    def _unclosed(self) -> SyntaxFailure:
        if not self._delims:
            raise InternalError(f"{len(self._lists)} open lists but no open delimiters")
        token = self._delims[-1]
        code = ErrorCode.UNCLOSED_DELIMITER
        summary = "unclosed delimiter"
        message = render_point(self._text, token.line, token.column, code, summary)
        return self._failure(code, message, summary, token, token)


_LEAF_TYPES = frozenset(
    {
        TokenType.WHITESPACE,
        TokenType.WORD,
        TokenType.DOUBLE_QUOTE_STRING,
        TokenType.SINGLE_QUOTE_STRING,
        TokenType.SINGLE_LINE_COMMENT,
        TokenType.MULTI_LINE_COMMENT,
    }
)


def parse(
    text: str,
    include_comments: bool = True,
    include_whitespace: bool = True,
    include_list_delimiters: bool = True,
    *,
    options: ParseOptions | None = None,
) -> ParseResult:
    """Tokenize and parse *text* into parse trees.

    Tokenizer failures are returned unchanged. *options*, when given, takes
    precedence over the three keyword flags.
    """
    if options is None:
        options = ParseOptions(include_comments, include_whitespace, include_list_delimiters)

    tokenized = tokenize(text)
    if not tokenized.ok:
        return tokenized

    return Parser(tokenized.tokens, text, options).parse()


def total_length(parse_trees: Iterable[ParseTree]) -> int:
    """Sum the spans of top-level trees.

    Only retained top-level nodes are counted, so this equals the input length
    when top-level whitespace and comments were kept.
    """
    return sum(node.length for node in parse_trees)
