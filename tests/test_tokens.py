"""Test token kinds, boundaries and positions."""

import pytest

from sexpsyntax.tokens import CLOSE_VARIANT, Token, TokenType


def types(tokens):
    return [t.type for t in tokens]


class TestDelimiters:
    @pytest.mark.parametrize("ch", ["(", "[", "{"])
    def test_open(self, lex, ch):
        tokens = lex(ch)
        assert types(tokens) == [TokenType.LIST_DELIMITER_OPEN]
        assert tokens[0].length == 1

    @pytest.mark.parametrize("ch", [")", "]", "}"])
    def test_close(self, lex, ch):
        tokens = lex(ch)
        assert types(tokens) == [TokenType.LIST_DELIMITER_CLOSE]

    def test_adjacent_delimiters_are_separate_tokens(self, lex):
        tokens = lex("(([]))")
        assert len(tokens) == 6
        assert all(t.length == 1 for t in tokens)

    def test_close_variant_table(self):
        assert CLOSE_VARIANT == {"(": ")", "[": "]", "{": "}"}


class TestWhitespace:
    def test_run_is_one_token(self, lex):
        tokens = lex(" \t\r\n ")
        assert types(tokens) == [TokenType.WHITESPACE]
        assert tokens[0].length == 5

    def test_unicode_whitespace(self, lex):
        tokens = lex("a\u00a0b")
        assert types(tokens) == [TokenType.WORD, TokenType.WHITESPACE, TokenType.WORD]

    @pytest.mark.parametrize("code", [0x0B, 0x2028, 0x3000, 0xFEFF])
    def test_separates_words(self, lex, code):
        tokens = lex("a" + chr(code) + "b")
        assert types(tokens) == [TokenType.WORD, TokenType.WHITESPACE, TokenType.WORD]

    @pytest.mark.parametrize("code", [0x1C, 0x1F, 0x85, 0x200B])
    def test_not_whitespace(self, lex, code):
        tokens = lex("a" + chr(code) + "b")
        assert types(tokens) == [TokenType.WORD]
        assert tokens[0].length == 3

    def test_byte_order_mark_dropped_with_whitespace(self, parse_ok):
        text = chr(0xFEFF) + "(a)"
        trees = parse_ok(text, include_whitespace=False)
        assert len(trees) == 1
        assert trees[0].offset == 1


class TestWords:
    def test_single_word(self, lex, lexemes):
        text = "hello-world!"
        tokens = lex(text)
        assert types(tokens) == [TokenType.WORD]
        assert lexemes(text, tokens) == ["hello-world!"]

    def test_words_split_on_whitespace(self, lex, lexemes):
        text = "say hello"
        assert lexemes(text, lex(text)) == ["say", " ", "hello"]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("a(b", ["a", "(", "b"]),
            ("a)b", ["a", ")", "b"]),
            ("a{b}", ["a", "{", "b", "}"]),
            ("a;b", ["a", ";b"]),
            ('a"b"', ["a", '"b"']),
            ("a'b'", ["a", "'b'"]),
            ("a#|b|#c", ["a", "#|b|#", "c"]),
        ],
    )
    def test_word_boundaries(self, lex, lexemes, text, expected):
        assert lexemes(text, lex(text)) == expected

    @pytest.mark.parametrize("text", ["a#b", "a|b", "#", "|", "#a", "a#", "x|y#z"])
    def test_hash_and_bar_alone_stay_in_word(self, lex, text):
        tokens = lex(text)
        assert types(tokens) == [TokenType.WORD]

    def test_raw_string_prefix_is_not_special(self, lex, lexemes):
        text = '#"raw"'
        tokens = lex(text)
        assert types(tokens) == [TokenType.WORD, TokenType.DOUBLE_QUOTE_STRING]
        assert lexemes(text, tokens) == ["#", '"raw"']

    def test_word_at_end_of_input(self, lex):
        tokens = lex("(a) tail")
        assert tokens[-1].type == TokenType.WORD
        assert tokens[-1].length == 4


class TestSingleLineComments:
    def test_comment_includes_newline(self, lex, lexemes):
        text = "; note\nx"
        tokens = lex(text)
        assert types(tokens) == [TokenType.SINGLE_LINE_COMMENT, TokenType.WORD]
        assert lexemes(text, tokens) == ["; note\n", "x"]

    @pytest.mark.parametrize("text", [";", " ;", "; ", " ; "])
    def test_comment_at_end_of_input(self, lex, text):
        tokens = lex(text)
        assert TokenType.SINGLE_LINE_COMMENT in types(tokens)

    def test_comment_swallows_delimiters(self, lex):
        tokens = lex("; ( ] |# \"")
        assert types(tokens) == [TokenType.SINGLE_LINE_COMMENT]


class TestPositions:
    def test_line_and_column(self, lex, lexemes):
        text = "(a\n  b)"
        tokens = lex(text)
        assert lexemes(text, tokens) == ["(", "a", "\n  ", "b", ")"]
        assert [(t.line, t.column) for t in tokens] == [(0, 0), (0, 1), (0, 2), (1, 2), (1, 3)]

    def test_offsets_are_contiguous(self, lex):
        tokens = lex("(let x 3) ; done\n")
        offset = 0
        for tok in tokens:
            assert tok.offset == offset
            assert tok.length > 0
            offset = tok.end

    def test_column_resets_after_newline_in_string(self, lex):
        tokens = lex('"a\nbc" d')
        d = tokens[-1]
        assert (d.line, d.column) == (1, 4)

    def test_token_lexeme(self):
        tok = Token(TokenType.WORD, 2, 3, 0, 2)
        assert tok.lexeme("((abc))") == "abc"
        assert tok.end == 5


class TestEmptyInput:
    def test_empty_text(self, lex):
        assert lex("") == ()
