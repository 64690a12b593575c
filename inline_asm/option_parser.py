"""Clobber list and options parsing mixin."""

from .tokens import TokenType
from .keywords import is_option, option_effect

TT = TokenType


class OptionMixin:
    """Mixin providing the clobbers section and the per-keyword options parser."""

    def _parse_clobbers(self, clobbers):
        while not self._at_section_end():
            if clobbers:
                self._eat(TT.COMMA)
            text, _style = self._parse_str()
            if is_option(text):
                self.sink.report_warning(
                    self._last_location(), "expected a clobber, found an option")
            clobbers.append(text)

    def _parse_option(self, flags):
        """Parse a single option keyword and apply it to *flags*.

        The section state machine calls this once per keyword, so a
        comma-separated run is consumed one keyword at a time.
        """
        text, _style = self._parse_str()
        effect = option_effect(text)
        if effect is None:
            self.sink.report_warning(self._last_location(), "unrecognized option")
        else:
            attr, value = effect
            setattr(flags, attr, value)
        self._eat(TT.COMMA)
