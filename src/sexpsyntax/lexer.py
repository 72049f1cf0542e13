"""Tokenizer: converts source text into a flat, lossless token sequence."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from sexpsyntax.errors import ErrorCode, InternalError, render_point, render_span
from sexpsyntax.results import SyntaxFailure, TokenizationResult, TokenizationSuccess
from sexpsyntax.tokens import (
    CLOSE_DELIMITERS,
    MULTI_LINE_COMMENT_CLOSE,
    MULTI_LINE_COMMENT_OPEN,
    OPEN_DELIMITERS,
    Position,
    Token,
    TokenType,
    ends_word,
    is_whitespace,
    starts_with_at,
)

# One dispatch to close the pending token without consuming, one to open the
# next token. Anything beyond that is a logic error.
_DISPATCH_LIMIT = 3


class _State(Enum):
    UNDETERMINED = auto()
    WHITESPACE = auto()
    WORD = auto()
    DOUBLE_QUOTE_STRING = auto()
    SINGLE_QUOTE_STRING = auto()
    SINGLE_LINE_COMMENT = auto()
    MULTI_LINE_COMMENT = auto()
    MULTI_LINE_COMMENT_START = auto()  # '#' consumed, '|' next
    MULTI_LINE_COMMENT_END = auto()  # '|' consumed, '#' next


_COMMENT_STATES = frozenset(
    {
        _State.MULTI_LINE_COMMENT,
        _State.MULTI_LINE_COMMENT_START,
        _State.MULTI_LINE_COMMENT_END,
    }
)

_QUOTES = {
    _State.DOUBLE_QUOTE_STRING: ('"', "double-quote"),
    _State.SINGLE_QUOTE_STRING: ("'", "single-quote"),
}


@dataclass(slots=True)
class _PendingToken:
    """Token under construction; only its length grows."""

    type: TokenType
    offset: int
    line: int
    column: int
    length: int = 1

    def freeze(self) -> Token:
        return Token(self.type, self.offset, self.length, self.line, self.column)

    @property
    def start(self) -> Position:
        return Position(self.line, self.column, self.offset)


class Lexer:
    """Tokenize source text with a character-at-a-time state machine.

    All scanning state lives on the instance, so a Lexer is single-use and
    separate instances never interfere.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._line = 0
        self._column = 0
        self._tokens: list[Token] = []
        self._state = _State.UNDETERMINED
        self._pending: _PendingToken | None = None
        self._depth = 0  # multi-line comment nesting

    def tokenize(self) -> TokenizationResult:
        """Tokenize the full text and return the result."""
        for index, ch in enumerate(self._text):
            failure = self._consume(index, ch)
            if failure is not None:
                return failure

            if ch == "\n":
                self._line += 1
                self._column = 0
            else:
                self._column += 1

        return self._finish()

    # ------------------------------------------------------------------
    # Pending token helpers
    # ------------------------------------------------------------------

    def _open(self, tt: TokenType, index: int, state: _State) -> None:
        self._pending = _PendingToken(tt, index, self._line, self._column)
        self._state = state

    def _extend(self) -> _PendingToken:
        pending = self._require_pending()
        pending.length += 1
        return pending

    def _emit(self) -> None:
        self._tokens.append(self._require_pending().freeze())
        self._pending = None
        self._state = _State.UNDETERMINED

    def _emit_single(self, tt: TokenType, index: int) -> None:
        self._tokens.append(Token(tt, index, 1, self._line, self._column))

    def _require_pending(self) -> _PendingToken:
        if self._pending is None:
            raise InternalError(f"no pending token in state {self._state.name}")
        return self._pending

    def _current_pos(self) -> Position:
        return Position(self._line, self._column, len(self._text))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _consume(self, index: int, ch: str) -> SyntaxFailure | None:
        for _ in range(_DISPATCH_LIMIT):
            if self._state is _State.UNDETERMINED:
                if starts_with_at(self._text, index, MULTI_LINE_COMMENT_CLOSE):
                    return self._unexpected_comment_close(index)
                self._begin(index, ch)
                return None
            if self._continue(index, ch):
                return None
        raise InternalError(f"could not consume character {ch!r} at offset {index}")

    def _begin(self, index: int, ch: str) -> None:
        if self._pending is not None or self._depth != 0:
            raise InternalError("undetermined state with a token in progress")

        if ch in OPEN_DELIMITERS:
            self._emit_single(TokenType.LIST_DELIMITER_OPEN, index)
        elif ch in CLOSE_DELIMITERS:
            self._emit_single(TokenType.LIST_DELIMITER_CLOSE, index)
        elif is_whitespace(ch):
            self._open(TokenType.WHITESPACE, index, _State.WHITESPACE)
        elif ch == ";":
            self._open(TokenType.SINGLE_LINE_COMMENT, index, _State.SINGLE_LINE_COMMENT)
        elif starts_with_at(self._text, index, MULTI_LINE_COMMENT_OPEN):
            self._open(TokenType.MULTI_LINE_COMMENT, index, _State.MULTI_LINE_COMMENT_START)
            self._depth = 1
        elif ch == '"':
            self._open(TokenType.DOUBLE_QUOTE_STRING, index, _State.DOUBLE_QUOTE_STRING)
        elif ch == "'":
            self._open(TokenType.SINGLE_QUOTE_STRING, index, _State.SINGLE_QUOTE_STRING)
        else:
            self._open(TokenType.WORD, index, _State.WORD)

    def _continue(self, index: int, ch: str) -> bool:
        """Feed *ch* to the pending token. Return False if it was not consumed."""
        state = self._state

        if state is _State.WHITESPACE:
            if is_whitespace(ch):
                self._extend()
                return True
            self._emit()
            return False

        if state is _State.WORD:
            if ends_word(self._text, index):
                self._emit()
                return False
            self._extend()
            return True

        if state in _QUOTES:
            quote, _ = _QUOTES[state]
            self._extend()
            # Look-back escaping: a quote right after a backslash never closes.
            if ch == quote and self._text[index - 1] != "\\":
                self._emit()
            return True

        if state is _State.SINGLE_LINE_COMMENT:
            self._extend()
            if ch == "\n":
                self._emit()
            return True

        if state is _State.MULTI_LINE_COMMENT_START:
            if ch != "|" or self._depth <= 0:
                raise InternalError(f"expected '|' to open a comment, got {ch!r}")
            self._extend()
            self._state = _State.MULTI_LINE_COMMENT
            return True

        if state is _State.MULTI_LINE_COMMENT:
            self._extend()
            if starts_with_at(self._text, index, MULTI_LINE_COMMENT_OPEN):
                self._depth += 1
                self._state = _State.MULTI_LINE_COMMENT_START
            elif starts_with_at(self._text, index, MULTI_LINE_COMMENT_CLOSE):
                self._state = _State.MULTI_LINE_COMMENT_END
            return True

        if state is _State.MULTI_LINE_COMMENT_END:
            if ch != "#" or self._depth <= 0:
                raise InternalError(f"expected '#' to close a comment, got {ch!r}")
            self._extend()
            self._depth -= 1
            if self._depth == 0:
                self._emit()
            else:
                self._state = _State.MULTI_LINE_COMMENT
            return True

        raise InternalError(f"unhandled lexer state {state.name}")

    # ------------------------------------------------------------------
    # End of input
    # ------------------------------------------------------------------

    def _finish(self) -> TokenizationResult:
        state = self._state

        if state is _State.UNDETERMINED:
            if self._pending is not None:
                raise InternalError("pending token left in undetermined state")
        elif state in (_State.WHITESPACE, _State.WORD, _State.SINGLE_LINE_COMMENT):
            # Words and line comments need no terminator at end of input.
            self._emit()
        elif state in _QUOTES:
            return self._unterminated_string()
        elif state in _COMMENT_STATES:
            return self._unterminated_comment()
        else:
            raise InternalError(f"unhandled lexer state {state.name} at end of input")

        return TokenizationSuccess(tuple(self._tokens))

    # ------------------------------------------------------------------
    # Failures
    # ------------------------------------------------------------------

    def _unexpected_comment_close(self, index: int) -> SyntaxFailure:
        # Point at the '#' of the stray '|#'.
        pos = Position(self._line, self._column + 1, index + 1)
        code = ErrorCode.UNEXPECTED_CLOSING_DELIMITER
        summary = "unexpected multi-line comment closing delimiter"
        message = render_point(self._text, pos.line, pos.column, code, summary)
        return SyntaxFailure(code, message, pos, pos, summary=summary)

    def _unterminated_string(self) -> SyntaxFailure:
        _, kind = _QUOTES[self._state]
        start = self._require_pending().start
        end = self._current_pos()
        code = ErrorCode.UNTERMINATED_STRING
        summary = f"unterminated {kind} string"
        message = render_span(self._text, start, end, code, f"start of {kind} string", summary)
        return SyntaxFailure(code, message, start, end, summary=summary)

    def _unterminated_comment(self) -> SyntaxFailure:
        depth = self._depth
        start = self._require_pending().start
        end = self._current_pos()
        code = ErrorCode.UNTERMINATED_MULTI_LINE_COMMENT
        plural = "s" if depth > 1 else ""
        summary = f"unterminated multi-line comment, missing {depth} closing delimiter{plural}"
        message = render_span(
            self._text, start, end, code, "start of multi-line comment", summary
        )
        return SyntaxFailure(code, message, start, end, summary=summary)


def tokenize(text: str) -> TokenizationResult:
    """Convenience function: tokenize text and return the result."""
    return Lexer(text).tokenize()
