"""AST node classes produced by the asm! directive parser."""

from enum import Enum

from .tokens import StrStyle


class AstNode:
    """Base class for all AST nodes."""
    __slots__ = ('line', 'col')

    def __init__(self, line=0, col=0):
        self.line = line
        self.col = col


# ---- Expression Nodes ----

class Expression(AstNode):
    """Base class for expression nodes."""
    __slots__ = ()


class NumberLiteral(Expression):
    __slots__ = ('value',)

    def __init__(self, value=0, **kw):
        super().__init__(**kw)
        self.value = value


class StringLiteral(Expression):
    __slots__ = ('value', 'style')

    def __init__(self, value='', style=None, **kw):
        super().__init__(**kw)
        self.value = value
        self.style = style or StrStyle.COOKED


class CharLiteral(Expression):
    __slots__ = ('value',)

    def __init__(self, value='', **kw):
        super().__init__(**kw)
        self.value = value


class PathExpr(Expression):
    """A plain or ``::``-qualified name: ``x``, ``mem::size_of``."""
    __slots__ = ('segments',)

    def __init__(self, segments=None, **kw):
        super().__init__(**kw)
        self.segments = segments or []

    @property
    def name(self):
        return '::'.join(self.segments)


class Paren(Expression):
    __slots__ = ('expr',)

    def __init__(self, expr=None, **kw):
        super().__init__(**kw)
        self.expr = expr


class UnaryOp(Expression):
    __slots__ = ('op', 'operand')

    def __init__(self, op='', operand=None, **kw):
        super().__init__(**kw)
        self.op = op
        self.operand = operand


class BinaryOp(Expression):
    __slots__ = ('op', 'left', 'right')

    def __init__(self, op='', left=None, right=None, **kw):
        super().__init__(**kw)
        self.op = op
        self.left = left
        self.right = right


class Cast(Expression):
    __slots__ = ('expr', 'type_name')

    def __init__(self, expr=None, type_name='', **kw):
        super().__init__(**kw)
        self.expr = expr
        self.type_name = type_name


class Call(Expression):
    __slots__ = ('func', 'args')

    def __init__(self, func=None, args=None, **kw):
        super().__init__(**kw)
        self.func = func
        self.args = args or []


class FieldAccess(Expression):
    __slots__ = ('expr', 'field')

    def __init__(self, expr=None, field='', **kw):
        super().__init__(**kw)
        self.expr = expr
        self.field = field


class Index(Expression):
    __slots__ = ('expr', 'index')

    def __init__(self, expr=None, index=None, **kw):
        super().__init__(**kw)
        self.expr = expr
        self.index = index


class DummyExpr(Expression):
    """Placeholder returned in place of a directive that could not be built."""
    __slots__ = ('message',)

    def __init__(self, message='', **kw):
        super().__init__(**kw)
        self.message = message


# ---- Inline assembly ----

class Dialect(Enum):
    ATT = "att"
    INTEL = "intel"


class OutputOperand(AstNode):
    """Output operand.  ``constraint`` carries the ``=`` write form whenever
    the source used ``=`` or ``+``; ``read_write`` records the ``+`` form."""
    __slots__ = ('constraint', 'expr', 'read_write')

    def __init__(self, constraint='', expr=None, read_write=False, **kw):
        super().__init__(**kw)
        self.constraint = constraint
        self.expr = expr
        self.read_write = read_write


class InputOperand(AstNode):
    __slots__ = ('constraint', 'expr')

    def __init__(self, constraint='', expr=None, **kw):
        super().__init__(**kw)
        self.constraint = constraint
        self.expr = expr


class OptionFlags:
    __slots__ = ('volatile', 'align_stack', 'dialect')

    def __init__(self, volatile=False, align_stack=False, dialect=Dialect.ATT):
        self.volatile = volatile
        self.align_stack = align_stack
        self.dialect = dialect

    def __eq__(self, other):
        if not isinstance(other, OptionFlags):
            return NotImplemented
        return (self.volatile, self.align_stack, self.dialect) == \
            (other.volatile, other.align_stack, other.dialect)

    def __repr__(self):
        return (f"OptionFlags(volatile={self.volatile}, "
                f"align_stack={self.align_stack}, dialect={self.dialect.name})")


class InlineAsm(Expression):
    """A fully parsed ``asm!`` directive, placed at the macro's call site."""
    __slots__ = ('template', 'template_style', 'outputs', 'inputs',
                 'clobbers', 'flags', 'provenance')

    def __init__(self, template='', template_style=None, outputs=(),
                 inputs=(), clobbers=(), flags=None, provenance=None, **kw):
        super().__init__(**kw)
        self.template = template
        self.template_style = template_style or StrStyle.COOKED
        self.outputs = tuple(outputs)
        self.inputs = tuple(inputs)
        self.clobbers = tuple(clobbers)
        self.flags = flags or OptionFlags()
        self.provenance = provenance
