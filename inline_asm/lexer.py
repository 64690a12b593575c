"""Lexer for asm! argument text. Converts raw text into a token stream.

Malformed input (an unknown character, an unterminated literal, a bad
escape) raises ``AsmParseError``.  With ``recover=True`` the lexer instead
leaves an ``ERROR`` token in place and carries on, so a whole host file can
be scanned and only the invocations that contain the error fail.
"""

from .tokens import TokenType, Token, StrStyle
from .parser_base import AsmParseError

TT = TokenType

_SIMPLE_ESCAPES = {
    'n': '\n',
    'r': '\r',
    't': '\t',
    '\\': '\\',
    '0': '\0',
    "'": "'",
    '"': '"',
}

_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')

_RADIX_PREFIXES = {'x': 16, 'o': 8, 'b': 2}


class Lexer:
    """Tokenizer for the argument text of an ``asm!`` invocation."""

    def __init__(self, text: str, filename: str = "<input>",
                 line: int = 1, col: int = 1, recover: bool = False):
        self.text = text
        self.filename = filename
        self.recover = recover
        self.pos = 0
        self.line = line
        self.col = col
        self.length = len(text)
        self._tokens = []
        self._tokenize()

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------
    def tokens(self):
        return self._tokens

    # ------------------------------------------------------------------
    # Core scanning helpers
    # ------------------------------------------------------------------
    def _ch(self):
        if self.pos < self.length:
            return self.text[self.pos]
        return '\0'

    def _peek(self, offset=1):
        p = self.pos + offset
        if p < self.length:
            return self.text[p]
        return '\0'

    def _advance(self):
        ch = self.text[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _match(self, expected):
        if self.pos < self.length and self.text[self.pos] == expected:
            self._advance()
            return True
        return False

    def _emit(self, tt, value, style=None):
        self._tokens.append(Token(tt, value, self._tok_line, self._tok_col, style))

    def _mark(self):
        self._tok_line = self.line
        self._tok_col = self.col

    def _error(self, msg):
        """Build an error located at the start of the current token."""
        return AsmParseError(msg, self._tok_line, self._tok_col)

    # ------------------------------------------------------------------
    # Main tokenize loop
    # ------------------------------------------------------------------
    def _tokenize(self):
        while self.pos < self.length:
            self._mark()
            try:
                self._scan_token()
            except AsmParseError as exc:
                if not self.recover:
                    raise
                # Every scanner consumes at least one character before failing.
                self._tokens.append(Token(TT.ERROR, exc.msg, exc.line, exc.col))

        self._mark()
        self._emit(TT.EOF, '')

    def _scan_token(self):
        ch = self._ch()

        # Whitespace, newlines included
        if ch in (' ', '\t', '\n', '\r'):
            self._advance()
            return

        # Line comment //
        if ch == '/' and self._peek() == '/':
            self._skip_line_comment()
            return

        # Block comment /* */
        if ch == '/' and self._peek() == '*':
            self._skip_block_comment()
            return

        # Cooked string literal
        if ch == '"':
            self._scan_string()
            return

        # Raw string literal r"..." / r#"..."#
        if ch == 'r' and self._raw_string_ahead():
            self._scan_raw_string()
            return

        # Character literal 'x' or lifetime 'a
        if ch == "'":
            self._scan_quote()
            return

        # Numbers
        if _is_digit(ch):
            self._scan_number()
            return

        # Identifiers
        if ch.isalpha() or ch == '_':
            self._scan_identifier()
            return

        # Operators and delimiters
        self._scan_operator()

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def _skip_line_comment(self):
        while self.pos < self.length and self._ch() != '\n':
            self._advance()

    def _skip_block_comment(self):
        self._advance()  # /
        self._advance()  # *
        depth = 1
        while self.pos < self.length and depth:
            if self._ch() == '/' and self._peek() == '*':
                self._advance()
                self._advance()
                depth += 1
            elif self._ch() == '*' and self._peek() == '/':
                self._advance()
                self._advance()
                depth -= 1
            else:
                self._advance()
        if depth:
            raise self._error("unterminated block comment")

    # ------------------------------------------------------------------
    # String and character literals
    # ------------------------------------------------------------------
    def _scan_string(self):
        self._advance()  # opening quote
        parts = []
        error = None
        while self.pos < self.length:
            ch = self._ch()
            if ch == '"':
                self._advance()
                break
            if ch == '\\':
                try:
                    parts.append(self._scan_escape())
                except AsmParseError as exc:
                    # Keep going so the closing quote is consumed.
                    error = error or exc
            else:
                parts.append(self._advance())
        else:
            raise self._error("unterminated double quote string")
        if error is not None:
            raise error
        self._emit(TT.STRING, ''.join(parts), StrStyle.COOKED)

    def _scan_escape(self):
        """Consume one escape sequence, starting at its backslash."""
        line, col = self.line, self.col
        self._advance()  # backslash
        if self.pos >= self.length:
            raise AsmParseError("unterminated escape sequence", line, col)
        ch = self._advance()
        if ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch]
        if ch == 'x':
            digits = self.text[self.pos:self.pos + 2]
            if len(digits) != 2 or not all(d in _HEX_DIGITS for d in digits):
                raise AsmParseError(
                    "numeric character escape needs two hex digits", line, col)
            self._advance()
            self._advance()
            return chr(int(digits, 16))
        if ch == 'u':
            return self._scan_unicode_escape(line, col)
        if ch == '\n' or ch == '\r':
            # Line continuation: drop the newline and the next line's indent
            while self.pos < self.length and self._ch() in (' ', '\t', '\n', '\r'):
                self._advance()
            return ''
        raise AsmParseError(f"unknown character escape: \\{ch}", line, col)

    def _scan_unicode_escape(self, line, col):
        if self._ch() != '{':
            raise AsmParseError("incorrect unicode escape sequence", line, col)
        end = self.pos + 1
        while end < self.length and (self.text[end] in _HEX_DIGITS or self.text[end] == '_'):
            end += 1
        digits = self.text[self.pos + 1:end].replace('_', '')
        if end >= self.length or self.text[end] != '}' or not digits:
            raise AsmParseError("incorrect unicode escape sequence", line, col)
        while self.pos <= end:
            self._advance()
        value = int(digits, 16)
        if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            raise AsmParseError(
                f"invalid unicode character escape: \\u{{{digits}}}", line, col)
        return chr(value)

    def _scan_quote(self):
        self._advance()  # '
        ch = self._ch()
        if (ch.isalpha() or ch == '_') and self._peek() != "'":
            start = self.pos
            while self.pos < self.length and (self._ch().isalnum() or self._ch() == '_'):
                self._advance()
            self._emit(TT.LIFETIME, "'" + self.text[start:self.pos])
            return
        if self.pos >= self.length or ch == '\n':
            raise self._error("unterminated character literal")
        if ch == "'":
            self._advance()
            raise self._error("empty character literal")
        value = self._scan_escape() if ch == '\\' else self._advance()
        if not self._match("'") or len(value) != 1:
            raise self._error("unterminated character literal")
        self._emit(TT.CHAR, value)

    def _raw_string_ahead(self):
        p = self.pos + 1
        while p < self.length and self.text[p] == '#':
            p += 1
        return p < self.length and self.text[p] == '"'

    def _scan_raw_string(self):
        self._advance()  # r
        hashes = 0
        while self._ch() == '#':
            self._advance()
            hashes += 1
        self._advance()  # opening quote
        closing = '"' + '#' * hashes
        end = self.text.find(closing, self.pos)
        if end == -1:
            while self.pos < self.length:
                self._advance()
            raise self._error("unterminated raw string")
        start = self.pos
        while self.pos < end + len(closing):
            self._advance()
        self._emit(TT.STRING, self.text[start:end], StrStyle.raw(hashes))

    # ------------------------------------------------------------------
    # Number literals
    # ------------------------------------------------------------------
    def _scan_number(self):
        if self._ch() == '0' and self._peek() in _RADIX_PREFIXES:
            self._scan_radix_number()
            return

        start = self.pos
        has_dot = False
        has_exp = False

        while self.pos < self.length:
            ch = self._ch()
            if _is_digit(ch) or ch == '_':
                self._advance()
            elif ch == '.' and not has_dot and not has_exp and _is_digit(self._peek()):
                has_dot = True
                self._advance()
            elif ch in ('e', 'E') and not has_exp and \
                    (_is_digit(self._peek()) or
                     (self._peek() in ('+', '-') and _is_digit(self._peek(2)))):
                has_exp = True
                self._advance()
                if self._ch() in ('+', '-'):
                    self._advance()
            else:
                break

        text = self.text[start:self.pos].replace('_', '')
        self._skip_suffix()
        if has_dot or has_exp:
            self._emit(TT.FLOAT, float(text))
        else:
            self._emit(TT.INTEGER, int(text))

    def _scan_radix_number(self):
        self._advance()  # 0
        base = _RADIX_PREFIXES[self._advance()]
        start = self.pos
        while self.pos < self.length:
            ch = self._ch()
            if ch == '_' or _digit_in_base(ch, base):
                self._advance()
            else:
                break
        digits = self.text[start:self.pos].replace('_', '')
        self._skip_suffix()
        self._emit(TT.INTEGER, int(digits, base) if digits else 0)

    def _skip_suffix(self):
        """Drop a type suffix such as ``u32`` or ``usize``."""
        if self._ch().isalpha() or self._ch() == '_':
            while self.pos < self.length and (self._ch().isalnum() or self._ch() == '_'):
                self._advance()

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------
    def _scan_identifier(self):
        start = self.pos
        while self.pos < self.length:
            ch = self._ch()
            if ch.isalnum() or ch == '_':
                self._advance()
            else:
                break
        self._emit(TT.IDENT, self.text[start:self.pos])

    # ------------------------------------------------------------------
    # Operators and delimiters
    # ------------------------------------------------------------------
    def _scan_operator(self):
        ch = self._advance()

        if ch == ':':
            if self._match(':'):
                self._emit(TT.COLONCOLON, '::')
            else:
                self._emit(TT.COLON, ':')
        elif ch == ',':
            self._emit(TT.COMMA, ',')
        elif ch == '(':
            self._emit(TT.LPAREN, '(')
        elif ch == ')':
            self._emit(TT.RPAREN, ')')
        elif ch == '{':
            self._emit(TT.LBRACE, '{')
        elif ch == '}':
            self._emit(TT.RBRACE, '}')
        elif ch == '[':
            self._emit(TT.LBRACKET, '[')
        elif ch == ']':
            self._emit(TT.RBRACKET, ']')
        elif ch == '=':
            if self._match('='):
                self._emit(TT.EQEQ, '==')
            else:
                self._emit(TT.EQUALS, '=')
        elif ch == '!':
            if self._match('='):
                self._emit(TT.BANGEQ, '!=')
            else:
                self._emit(TT.BANG, '!')
        elif ch == '<':
            if self._match('='):
                self._emit(TT.LE, '<=')
            elif self._match('<'):
                self._emit(TT.SHL, '<<')
            else:
                self._emit(TT.LT, '<')
        elif ch == '>':
            if self._match('='):
                self._emit(TT.GE, '>=')
            elif self._match('>'):
                self._emit(TT.SHR, '>>')
            else:
                self._emit(TT.GT_OP, '>')
        elif ch == '&':
            if self._match('&'):
                self._emit(TT.AMPAMP, '&&')
            else:
                self._emit(TT.AMP, '&')
        elif ch == '|':
            if self._match('|'):
                self._emit(TT.PIPEPIPE, '||')
            else:
                self._emit(TT.PIPE, '|')
        elif ch == '+':
            self._emit(TT.PLUS, '+')
        elif ch == '-':
            self._emit(TT.MINUS, '-')
        elif ch == '*':
            self._emit(TT.STAR, '*')
        elif ch == '/':
            self._emit(TT.SLASH, '/')
        elif ch == '^':
            self._emit(TT.CARET, '^')
        elif ch == '%':
            self._emit(TT.PERCENT, '%')
        elif ch == '.':
            self._emit(TT.DOT, '.')
        elif ch == ';':
            self._emit(TT.SEMICOLON, ';')
        elif ch == '#':
            self._emit(TT.POUND, '#')
        else:
            raise self._error(f"unknown start of token: {ch}")


def _is_digit(ch):
    return '0' <= ch <= '9'


def _digit_in_base(ch, base):
    return ch in _HEX_DIGITS and int(ch, 16) < base


def tokenize(text, filename="<input>", recover=False):
    """Convenience wrapper returning the token list for *text*."""
    return Lexer(text, filename=filename, recover=recover).tokens()
