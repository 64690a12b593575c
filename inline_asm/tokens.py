"""Token types and Token class for the asm! argument lexer."""

from enum import Enum, auto


class TokenType(Enum):
    # Literals
    IDENT = auto()
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    CHAR = auto()
    LIFETIME = auto()      # 'a

    # Section boundaries
    COLON = auto()         # :
    COLONCOLON = auto()    # ::  (no space between the colons)

    # Operators
    EQUALS = auto()        # =
    EQEQ = auto()          # ==
    BANGEQ = auto()        # !=
    LT = auto()            # <
    GT_OP = auto()         # >
    LE = auto()            # <=
    GE = auto()            # >=
    SHL = auto()           # <<
    SHR = auto()           # >>
    BANG = auto()          # !
    AMP = auto()           # &
    AMPAMP = auto()        # &&
    PIPE = auto()          # |
    PIPEPIPE = auto()      # ||
    PLUS = auto()          # +
    MINUS = auto()         # -
    STAR = auto()          # *
    SLASH = auto()         # /
    CARET = auto()         # ^
    PERCENT = auto()       # %
    DOT = auto()           # .

    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]
    COMMA = auto()         # ,
    SEMICOLON = auto()     # ;
    POUND = auto()         # #

    # Special
    ERROR = auto()         # lexical error kept in place, value is the message
    EOF = auto()


# Tokens that end a section's content.
BOUNDARIES = frozenset({TokenType.COLON, TokenType.COLONCOLON})


class StrStyle:
    """Literal style of a string token: cooked ``"..."`` or raw ``r#"..."#``."""
    __slots__ = ('raw_hashes',)

    def __init__(self, raw_hashes=None):
        self.raw_hashes = raw_hashes

    @classmethod
    def raw(cls, hashes=0):
        return cls(raw_hashes=hashes)

    @property
    def is_raw(self):
        return self.raw_hashes is not None

    def __eq__(self, other):
        if not isinstance(other, StrStyle):
            return NotImplemented
        return self.raw_hashes == other.raw_hashes

    def __hash__(self):
        return hash(self.raw_hashes)

    def __repr__(self):
        if self.is_raw:
            return f"StrStyle.raw({self.raw_hashes})"
        return "StrStyle.COOKED"


StrStyle.COOKED = StrStyle()


class Token:
    __slots__ = ('type', 'value', 'line', 'col', 'style')

    def __init__(self, type: TokenType, value, line: int, col: int, style=None):
        self.type = type
        self.value = value
        self.line = line
        self.col = col
        self.style = style

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.col})"
