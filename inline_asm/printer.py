"""AST Pretty-Printer: converts directive nodes back to asm! argument text.

Used for round-trip testing: parse -> print -> re-parse -> compare.
Not intended to reproduce original formatting exactly, only semantic equivalence.
"""

from . import ast_nodes as ast

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\0': '\\0',
}


def quote_str(value, style=None):
    """Render *value* as a string literal in *style* (cooked by default)."""
    if style is not None and style.is_raw:
        hashes = '#' * style.raw_hashes
        return f'r{hashes}"{value}"{hashes}'
    out = []
    for ch in value:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7f:
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + ''.join(out) + '"'


def quote_char(value):
    """Render *value* as a character literal."""
    if value == "'":
        return "'\\''"
    return "'" + quote_str(value)[1:-1].replace('\\"', '"') + "'"


class AsmPrinter:
    """Emit asm! argument text from AST nodes."""

    def emit(self, node):
        """Dispatch to the appropriate emit method."""
        method = '_emit_' + type(node).__name__
        fn = getattr(self, method, None)
        if fn:
            return fn(node)
        return f"/* unknown {type(node).__name__} */"

    def emit_invocation(self, node):
        return f"asm!({self.emit(node)})"

    # ---- Directive ----

    def _emit_InlineAsm(self, node):
        sections = [
            ', '.join(self._emit_output(o) for o in node.outputs),
            ', '.join(self._emit_input(i) for i in node.inputs),
            ', '.join(quote_str(c) for c in node.clobbers),
            ', '.join(quote_str(o) for o in self._options(node.flags)),
        ]
        # Trailing empty sections are omitted together with their boundary.
        while sections and not sections[-1]:
            sections.pop()
        parts = [quote_str(node.template, node.template_style)]
        for text in sections:
            parts.append(f": {text}" if text else ":")
        return ' '.join(parts)

    def _emit_output(self, op):
        constraint = op.constraint
        if op.read_write and constraint.startswith('='):
            constraint = '+' + constraint[1:]
        return f"{quote_str(constraint)}({self.emit(op.expr)})"

    def _emit_input(self, op):
        return f"{quote_str(op.constraint)}({self.emit(op.expr)})"

    def _options(self, flags):
        opts = []
        if flags.volatile:
            opts.append('volatile')
        if flags.align_stack:
            opts.append('alignstack')
        if flags.dialect is ast.Dialect.INTEL:
            opts.append('intel')
        return opts

    def _emit_DummyExpr(self, node):
        return f"/* error: {node.message} */"

    # ---- Expressions ----

    def _emit_NumberLiteral(self, node):
        return str(node.value)

    def _emit_StringLiteral(self, node):
        return quote_str(node.value, node.style)

    def _emit_CharLiteral(self, node):
        return quote_char(node.value)

    def _emit_PathExpr(self, node):
        return node.name

    def _emit_Paren(self, node):
        if node.expr is None:
            return "()"
        return f"({self.emit(node.expr)})"

    def _emit_UnaryOp(self, node):
        operand = self.emit(node.operand)
        if node.op == '&mut' or (node.op == '&' and operand.startswith('&')):
            return f"{node.op} {operand}"
        return f"{node.op}{operand}"

    def _emit_BinaryOp(self, node):
        return f"{self.emit(node.left)} {node.op} {self.emit(node.right)}"

    def _emit_Cast(self, node):
        return f"{self.emit(node.expr)} as {node.type_name}"

    def _emit_Call(self, node):
        args = ', '.join(self.emit(a) for a in node.args)
        return f"{self.emit(node.func)}({args})"

    def _emit_FieldAccess(self, node):
        return f"{self.emit(node.expr)}.{node.field}"

    def _emit_Index(self, node):
        return f"{self.emit(node.expr)}[{self.emit(node.index)}]"
