"""
Math rewriting for lines classified as math.

Turns common plain-text math shapes into LaTeX markup:
- Function names (sin, cos, ..., int) -> \\sin, \\cos, ...
- Digit fractions 1/3 -> \\frac{1}{3}
- Exponents x^2 -> x^{2}
- Square roots sqrt(4) -> \\sqrt{4}
- Bounded integrals int_0^1 x -> \\int_{0}^{1} x

These are substring rewrites, not a parser. Nested or overlapping
structures are handled on a best-effort basis only.
"""

import logging
import re
from dataclasses import dataclass
from typing import Tuple

from .classify import FUNCTION_NAMES

logger = logging.getLogger(__name__)


# Lines are rewritten after escaping, so '^' and '_' may appear in either form
CARET = r'(?:\^|\\textasciicircum\{\})'
UNDERSCORE = r'(?:\\?_)'


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class RewriteRule:
    """A named pattern-to-replacement substitution."""
    name: str
    pattern: re.Pattern
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


# \w, \d and \b are ASCII only, as in classify.py
DEFAULT_REWRITE_RULES: Tuple[RewriteRule, ...] = (
    RewriteRule(
        "function",
        re.compile(r'(?<!\\)\b(' + '|'.join(FUNCTION_NAMES) + r')\b', re.ASCII),
        r'\\\1',
    ),
    RewriteRule(
        "fraction",
        re.compile(r'(\d+)/(\d+)', re.ASCII),
        r'\\frac{\1}{\2}',
    ),
    RewriteRule(
        "exponent",
        re.compile(r'(\w+)' + CARET + r'(\d+)', re.ASCII),
        r'\1^{\2}',
    ),
    RewriteRule(
        "sqrt",
        re.compile(r'sqrt\(([^)]+)\)', re.ASCII),
        r'\\sqrt{\1}',
    ),
    # "int" is either already prefixed or a whole word; bounds may
    # already be braced by the exponent rule
    RewriteRule(
        "integral",
        re.compile(
            r'(?:\\|\b)int' + UNDERSCORE + r'\{?(\w+)\}?' + CARET + r'\{?(\w+)\}?\s*(\w+)',
            re.ASCII
        ),
        r'\\int_{\1}^{\2} \3',
    ),
)


# ============================================================================
# Rewriter
# ============================================================================

class MathRewriter:
    """Applies every rewrite rule, in order, to a math line."""

    def __init__(self, rules: Tuple[RewriteRule, ...] = DEFAULT_REWRITE_RULES):
        self.rules = tuple(rules)

    def rewrite(self, text: str) -> str:
        """
        Rewrite recognized math substrings into LaTeX markup.

        Args:
            text: Escaped line already classified as math

        Returns:
            Rewritten line
        """
        result = text
        for rule in self.rules:
            result = rule.apply(result)
        return result


_default_rewriter = MathRewriter()


def rewrite_math(text: str) -> str:
    """Rewrite a math line using the default rule table."""
    return _default_rewriter.rewrite(text)
