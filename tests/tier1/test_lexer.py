"""Tier 1 unit tests: Lexer."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from inline_asm.lexer import Lexer, tokenize
from inline_asm.parser_base import AsmParseError
from inline_asm.tokens import TokenType as TT, StrStyle


def types(text):
    return [t.type for t in tokenize(text)]


class TestBoundaries:
    def test_single_colon(self):
        assert types('"a" : "b"') == [TT.STRING, TT.COLON, TT.STRING, TT.EOF]

    def test_double_colon_is_one_lexeme(self):
        assert types('"a" :: "b"') == [TT.STRING, TT.COLONCOLON, TT.STRING, TT.EOF]

    def test_spaced_colons_are_two_tokens(self):
        assert types('"a" : : "b"') == [TT.STRING, TT.COLON, TT.COLON, TT.STRING, TT.EOF]

    def test_triple_colon(self):
        assert types(':::') == [TT.COLONCOLON, TT.COLON, TT.EOF]


class TestStrings:
    def test_cooked_string(self):
        tok = tokenize('"mov $1, %eax"')[0]
        assert tok.type == TT.STRING
        assert tok.value == "mov $1, %eax"
        assert tok.style == StrStyle.COOKED

    @pytest.mark.parametrize("src, expected", [
        (r'"a\nb"', "a\nb"),
        (r'"tab\there"', "tab\there"),
        (r'"q\"q"', 'q"q'),
        (r'"\x41\u{42}"', "AB"),
        (r'"back\\slash"', "back\\slash"),
        (r'"nul\0"', "nul\0"),
    ])
    def test_escapes(self, src, expected):
        assert tokenize(src)[0].value == expected

    def test_line_continuation(self):
        tok = tokenize('"mov \\\n     eax"')[0]
        assert tok.value == "mov eax"

    def test_multiline_string(self):
        tok = tokenize('"nop\nnop"')[0]
        assert tok.value == "nop\nnop"

    def test_raw_string(self):
        tok = tokenize('r"c:\\path"')[0]
        assert tok.value == "c:\\path"
        assert tok.style == StrStyle.raw(0)

    def test_raw_string_with_hashes(self):
        tok = tokenize('r##"say "hi"#"##')[0]
        assert tok.value == 'say "hi"#'
        assert tok.style == StrStyle.raw(2)
        assert tok.style.is_raw

    def test_identifier_starting_with_r(self):
        tok = tokenize('rax')[0]
        assert tok.type == TT.IDENT
        assert tok.value == "rax"

    def test_char_literal(self):
        tok = tokenize("'x'")[0]
        assert tok.type == TT.CHAR
        assert tok.value == "x"

    def test_lifetime(self):
        assert [(t.type, t.value) for t in tokenize("&'static T")] == [
            (TT.AMP, "&"), (TT.LIFETIME, "'static"), (TT.IDENT, "T"), (TT.EOF, ""),
        ]


class TestNumbers:
    @pytest.mark.parametrize("src, value", [
        ("42", 42),
        ("0x10", 16),
        ("0o17", 15),
        ("0b101", 5),
        ("1_000", 1000),
        ("7u32", 7),
        ("0xffusize", 255),
    ])
    def test_integers(self, src, value):
        toks = tokenize(src)
        assert toks[0].type == TT.INTEGER
        assert toks[0].value == value
        assert toks[1].type == TT.EOF

    def test_float(self):
        tok = tokenize("1.5")[0]
        assert tok.type == TT.FLOAT
        assert tok.value == 1.5

    def test_dot_after_integer_is_field_access(self):
        assert types("x.0") == [TT.IDENT, TT.DOT, TT.INTEGER, TT.EOF]


class TestOperators:
    def test_operand_shape(self):
        assert types('"=r"(x)') == [TT.STRING, TT.LPAREN, TT.IDENT, TT.RPAREN, TT.EOF]

    def test_compound_operators(self):
        assert types("a << b >> c && d || e != f") == [
            TT.IDENT, TT.SHL, TT.IDENT, TT.SHR, TT.IDENT, TT.AMPAMP,
            TT.IDENT, TT.PIPEPIPE, TT.IDENT, TT.BANGEQ, TT.IDENT, TT.EOF,
        ]

    def test_comments_are_skipped(self):
        assert types('"nop" // trailing\n /* block /* nested */ */ : "r"(x)') == [
            TT.STRING, TT.COLON, TT.STRING, TT.LPAREN, TT.IDENT, TT.RPAREN, TT.EOF,
        ]



class TestPositions:
    def test_line_and_col(self):
        toks = tokenize('"nop"\n  : "=r"(x)')
        colon = toks[1]
        assert (colon.line, colon.col) == (2, 3)

    def test_start_offset(self):
        toks = Lexer('"nop"', line=10, col=5).tokens()
        assert (toks[0].line, toks[0].col) == (10, 5)


class TestErrors:
    @pytest.mark.parametrize("src, msg, col", [
        ('"never closed', "unterminated double quote string", 1),
        ('r#"never closed"', "unterminated raw string", 1),
        ("a ` b", "unknown start of token: `", 3),
        ("x$", "unknown start of token: $", 2),
        ("''", "empty character literal", 1),
        ("'1", "unterminated character literal", 1),
        ("/* open", "unterminated block comment", 1),
    ])
    def test_malformed_input_raises(self, src, msg, col):
        with pytest.raises(AsmParseError) as exc:
            tokenize(src)
        assert exc.value.msg == msg
        assert (exc.value.line, exc.value.col) == (1, col)

    @pytest.mark.parametrize("src", [
        r'"\x 1"',
        r'"\x+1"',
        r'"\x4"',
        r'"\xg0"',
    ])
    def test_hex_escape_needs_two_hex_digits(self, src):
        with pytest.raises(AsmParseError) as exc:
            tokenize(src)
        assert exc.value.msg == "numeric character escape needs two hex digits"
        assert exc.value.col == 2

    @pytest.mark.parametrize("src", [r'"\u{110000}"', r'"\u{d800}"'])
    def test_unicode_escape_out_of_range(self, src):
        with pytest.raises(AsmParseError) as exc:
            tokenize(src)
        assert exc.value.msg.startswith("invalid unicode character escape")
        assert (exc.value.line, exc.value.col) == (1, 2)

    def test_largest_unicode_escape(self):
        assert tokenize(r'"\u{10FFFF}"')[0].value == "\U0010ffff"

    @pytest.mark.parametrize("src", [r'"\u{zz}"', r'"\u41"', r'"\u{41"'])
    def test_malformed_unicode_escape(self, src):
        with pytest.raises(AsmParseError) as exc:
            tokenize(src)
        assert exc.value.msg == "incorrect unicode escape sequence"

    def test_unknown_escape(self):
        with pytest.raises(AsmParseError) as exc:
            tokenize(r'"\q"')
        assert exc.value.msg == r"unknown character escape: \q"

    def test_bad_escape_reported_after_closing_quote(self):
        with pytest.raises(AsmParseError) as exc:
            tokenize(r'"a\x" "b"')
        assert exc.value.msg == "numeric character escape needs two hex digits"

    def test_recover_keeps_error_token(self):
        toks = tokenize('a $ "b', recover=True)
        assert [t.type for t in toks] == [TT.IDENT, TT.ERROR, TT.ERROR, TT.EOF]
        assert toks[1].value == "unknown start of token: $"
        assert (toks[1].line, toks[1].col) == (1, 3)
        assert toks[2].value == "unterminated double quote string"

    def test_recover_resumes_after_bad_string(self):
        toks = tokenize(r'"\u{110000}" x', recover=True)
        assert [t.type for t in toks] == [TT.ERROR, TT.IDENT, TT.EOF]
