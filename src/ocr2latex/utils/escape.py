"""
LaTeX character escaping.

Provides:
- The escape rule table for characters with special meaning in LaTeX
- A single-pass escaper that never re-scans substituted output
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Tuple

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class EscapeRule:
    """Maps one literal character to its escaped LaTeX form."""
    char: str
    replacement: str


DEFAULT_ESCAPE_RULES: Tuple[EscapeRule, ...] = (
    EscapeRule('&', '\\&'),
    EscapeRule('%', '\\%'),
    EscapeRule('$', '\\$'),
    EscapeRule('#', '\\#'),
    EscapeRule('_', '\\_'),
    EscapeRule('{', '\\{'),
    EscapeRule('}', '\\}'),
    EscapeRule('~', '\\textasciitilde{}'),
    EscapeRule('^', '\\textasciicircum{}'),
    EscapeRule('\\', '\\textbackslash{}'),
)


# ============================================================================
# Escaper
# ============================================================================

class LatexEscaper:
    """
    Escapes special LaTeX characters in one pass over the input.

    All rules are compiled into a single alternation, so a backslash
    produced by one replacement (e.g. '\\&') is never seen by the
    backslash rule.
    """

    def __init__(self, rules: Tuple[EscapeRule, ...] = DEFAULT_ESCAPE_RULES):
        self.rules = tuple(rules)
        self._table: Dict[str, str] = {rule.char: rule.replacement for rule in self.rules}
        self._pattern = re.compile(
            "|".join(re.escape(rule.char) for rule in self.rules)
        )

    def escape(self, text: str) -> str:
        """
        Escape special characters in a line of text.

        Args:
            text: Raw text

        Returns:
            Text safe to place in a LaTeX document
        """
        if not text:
            return ""
        return self._pattern.sub(lambda m: self._table[m.group(0)], text)

    @property
    def special_chars(self) -> str:
        return "".join(rule.char for rule in self.rules)


_default_escaper = LatexEscaper()


def escape_latex(text: str) -> str:
    """Escape special LaTeX characters using the default rule table."""
    return _default_escaper.escape(text)
