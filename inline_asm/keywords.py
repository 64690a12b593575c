"""Keyword registry for the asm! options section.

Each option keyword is declared once with the flag it controls.  Matching
is exact and case-sensitive: ``"Volatile"`` or ``" volatile"`` are not
options.
"""

from .ast_nodes import Dialect

ASM_MACRO_NAME = 'asm'

# keyword -> (attribute on OptionFlags, value to store)
_OPTION_REGISTRY = {
    # The directive has side effects: it must not be removed or reordered
    # even when its outputs look unused.
    'volatile':   ('volatile', True),
    'alignstack': ('align_stack', True),
    'intel':      ('dialect', Dialect.INTEL),
}

ASM_OPTIONS = frozenset(_OPTION_REGISTRY)


def is_option(text):
    return text in _OPTION_REGISTRY


def option_effect(text):
    """Return ``(attribute, value)`` for a recognized option, else ``None``."""
    return _OPTION_REGISTRY.get(text)
