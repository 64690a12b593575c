"""Expansion bookkeeping: provenance records for expanded macro invocations."""

from enum import Enum


class ExpansionKind(Enum):
    MACRO_BANG = "macro!"


class ExpansionInfo:
    """Where an expansion came from: call site and the macro that produced it."""
    __slots__ = ('call_site', 'callee_name', 'kind')

    def __init__(self, call_site, callee_name, kind=ExpansionKind.MACRO_BANG):
        self.call_site = call_site
        self.callee_name = callee_name
        self.kind = kind

    def __repr__(self):
        return (f"ExpansionInfo({self.call_site!r}, {self.callee_name!r}, "
                f"{self.kind.name})")


class ExpansionTable:
    """Append-only table of expansions; ids are indexes into it."""

    def __init__(self):
        self._infos = []

    def record_expansion(self, call_site, callee_name, kind=ExpansionKind.MACRO_BANG):
        self._infos.append(ExpansionInfo(call_site, callee_name, kind))
        return len(self._infos) - 1

    def get(self, expn_id):
        return self._infos[expn_id]

    def __len__(self):
        return len(self._infos)

    def __iter__(self):
        return iter(self._infos)
