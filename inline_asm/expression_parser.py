"""Expression parsing mixin: Pratt parser for operand and template expressions."""

from .tokens import TokenType
from . import ast_nodes as ast
from .parser_base import AsmParseError

TT = TokenType

# Binding powers for binary operators
_BINARY_BP = {
    TT.PIPEPIPE: 2,
    TT.AMPAMP: 3,
    TT.EQEQ: 5,
    TT.BANGEQ: 5,
    TT.LT: 5,
    TT.GT_OP: 5,
    TT.LE: 5,
    TT.GE: 5,
    TT.PIPE: 6,
    TT.CARET: 7,
    TT.AMP: 8,
    TT.SHL: 9,
    TT.SHR: 9,
    TT.PLUS: 10,
    TT.MINUS: 10,
    TT.STAR: 20,
    TT.SLASH: 20,
    TT.PERCENT: 20,
}

_UNARY_OPS = frozenset({TT.MINUS, TT.BANG, TT.STAR, TT.AMP})

_UNARY_BP = 30

# `x as T` binds tighter than `*` and looser than unary operators.
_CAST_BP = 25


class ExpressionMixin:
    """Mixin providing the expression sub-parser used by every section."""

    def _parse_expr(self):
        return self._parse_binary(0)

    def _parse_binary(self, bp):
        left = self._nud()
        while True:
            t = self._cur()
            if t.type == TT.IDENT and t.value == 'as':
                if _CAST_BP <= bp:
                    break
                self._advance()
                left = ast.Cast(expr=left, type_name=self._parse_type(),
                                line=left.line, col=left.col)
                continue
            nbp = _BINARY_BP.get(t.type, 0)
            if nbp <= bp:
                break
            loc = self._loc()
            self._advance()
            right = self._parse_binary(nbp)
            left = ast.BinaryOp(op=t.value, left=left, right=right, **loc)
        return left

    def _nud(self):
        t = self._cur()
        loc = self._loc()
        if t.type == TT.AMPAMP:
            # `&&x` is two borrows lexed as one token.
            self._advance()
            op = '&'
            if self._at(TT.IDENT) and self._cur().value == 'mut':
                self._advance()
                op = '&mut'
            inner = ast.UnaryOp(op=op, operand=self._parse_binary(_UNARY_BP),
                                line=t.line, col=t.col + 1)
            return ast.UnaryOp(op='&', operand=inner, **loc)
        if t.type in _UNARY_OPS:
            self._advance()
            op = t.value
            if t.type == TT.AMP and self._at(TT.IDENT) and self._cur().value == 'mut':
                self._advance()
                op = '&mut'
            operand = self._parse_binary(_UNARY_BP)
            return ast.UnaryOp(op=op, operand=operand, **loc)
        return self._parse_postfix(self._primary())

    def _primary(self):
        t = self._cur()
        loc = self._loc()
        if t.type in (TT.INTEGER, TT.FLOAT):
            return ast.NumberLiteral(value=self._advance().value, **loc)
        if t.type == TT.STRING:
            self._advance()
            return ast.StringLiteral(value=t.value, style=t.style, **loc)
        if t.type == TT.CHAR:
            self._advance()
            return ast.CharLiteral(value=t.value, **loc)
        if t.type == TT.IDENT:
            return self._parse_path()
        if t.type == TT.LPAREN:
            self._advance()
            if self._eat(TT.RPAREN):
                return ast.Paren(expr=None, **loc)
            expr = self._parse_expr()
            self._expect(TT.RPAREN)
            return ast.Paren(expr=expr, **loc)
        raise AsmParseError(
            f"Expected expression, got {t.type.name}({t.value!r})",
            t.line, t.col)

    def _parse_path(self):
        loc = self._loc()
        segments = [self._advance().value]
        # `::` only continues a path when a name follows it; otherwise it is
        # a section boundary.
        while self._at(TT.COLONCOLON) and self._peek().type == TT.IDENT:
            self._advance()
            segments.append(self._advance().value)
        return ast.PathExpr(segments=segments, **loc)

    def _parse_type(self):
        """Parse a cast target such as ``u64``, ``*mut u8`` or ``&T``.

        Types are kept as normalized text; nothing downstream inspects them.
        """
        prefix = []
        while True:
            t = self._cur()
            if t.type == TT.STAR:
                self._advance()
                qual = self._expect(TT.IDENT).value
                if qual not in ('mut', 'const'):
                    raise AsmParseError(
                        f"Expected `mut` or `const` after `*`, got {qual!r}",
                        t.line, t.col)
                prefix.append(f"*{qual} ")
            elif t.type in (TT.AMP, TT.AMPAMP):
                self._advance()
                refs = '&&' if t.type == TT.AMPAMP else '&'
                if self._at(TT.IDENT) and self._cur().value == 'mut':
                    self._advance()
                    refs += 'mut '
                prefix.append(refs)
            else:
                break
        name = self._expect(TT.IDENT).value
        segments = [name]
        while self._at(TT.COLONCOLON) and self._peek().type == TT.IDENT:
            self._advance()
            segments.append(self._advance().value)
        return ''.join(prefix) + '::'.join(segments)

    def _parse_postfix(self, expr):
        while True:
            t = self._cur()
            loc = {'line': expr.line, 'col': expr.col}
            if t.type == TT.LPAREN:
                self._advance()
                expr = ast.Call(func=expr, args=self._parse_call_args(), **loc)
            elif t.type == TT.DOT:
                self._advance()
                name = self._cur()
                if name.type not in (TT.IDENT, TT.INTEGER):
                    raise AsmParseError(
                        f"Expected field name, got {name.type.name}({name.value!r})",
                        name.line, name.col)
                self._advance()
                expr = ast.FieldAccess(expr=expr, field=str(name.value), **loc)
            elif t.type == TT.LBRACKET:
                self._advance()
                index = self._parse_expr()
                self._expect(TT.RBRACKET)
                expr = ast.Index(expr=expr, index=index, **loc)
            else:
                return expr

    def _parse_call_args(self):
        args = []
        while not self._at(TT.RPAREN):
            args.append(self._parse_expr())
            if not self._eat(TT.COMMA):
                break
        self._expect(TT.RPAREN)
        return args
