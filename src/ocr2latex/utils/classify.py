"""
Line classification for recognized text.

Decides whether an escaped line of OCR output is plain prose,
a display math block, or inline math.

Decision order:
1. Any backslash (an escape or a LaTeX-like command) -> display math
2. More than 60% math-like characters -> display math
3. A structural display pattern matches -> display math
4. An inline pattern matches -> inline math
5. Otherwise prose

Display checks run before inline checks, so most inline-looking lines
(e.g. "x = 5") are reported as display math.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes and Enums
# ============================================================================

class LineType(Enum):
    """Classification of a single line."""
    PROSE = "prose"
    DISPLAY_MATH = "display_math"
    INLINE_MATH = "inline_math"


@dataclass(frozen=True)
class MathPattern:
    """Named recognition pattern. Used only to classify, never to rewrite."""
    name: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


MATH_SYMBOLS = frozenset(
    "=+-*/^()[]{}<>|±×÷∂∆∇∫∑∏√∞≈≠≤≥αβγδϵζηθικλμνξπρστυϕχψω"
)

MATH_CHAR_THRESHOLD = 0.6

FUNCTION_NAMES = ("sin", "cos", "tan", "log", "ln", "lim", "sum", "prod", "int")

# Word, digit and space classes are ASCII only: "sinθ" still has a
# word boundary after "sin", and full-width digits are not digits.

DISPLAY_PATTERNS: Tuple[MathPattern, ...] = (
    MathPattern("operator", re.compile(r'[=+\-*/^()\[\]]', re.ASCII)),
    MathPattern("digit_operation", re.compile(r'\d+[+\-*/]\d+', re.ASCII)),
    MathPattern("assignment", re.compile(r'[a-zA-Z]\s*=\s*\d+', re.ASCII)),
    MathPattern("call", re.compile(r'[a-zA-Z]\([^)]+\)', re.ASCII)),
    MathPattern(
        "function_name",
        re.compile(r'\b(' + '|'.join(FUNCTION_NAMES) + r')\b', re.ASCII),
    ),
)

INLINE_PATTERNS: Tuple[MathPattern, ...] = (
    MathPattern("variable_equation", re.compile(r'^[a-zA-Z]\s*=\s*.+$', re.ASCII)),
    MathPattern("power_equation", re.compile(r'^.+\^.+\s*=.+$', re.ASCII)),
    MathPattern("coordinate_value", re.compile(r'^[xyz]\s*=\s*\d+$', re.ASCII)),
)


# ============================================================================
# Classifier
# ============================================================================

class LineClassifier:
    """
    Classifies escaped lines into prose, display math or inline math.

    The rule tables are fixed at construction; classify() is pure.
    """

    def __init__(
        self,
        display_patterns: Tuple[MathPattern, ...] = DISPLAY_PATTERNS,
        inline_patterns: Tuple[MathPattern, ...] = INLINE_PATTERNS,
        math_symbols: frozenset = MATH_SYMBOLS,
        threshold: float = MATH_CHAR_THRESHOLD
    ):
        self.display_patterns = tuple(display_patterns)
        self.inline_patterns = tuple(inline_patterns)
        self.math_symbols = frozenset(math_symbols)
        self.threshold = threshold

    def math_char_ratio(self, text: str) -> float:
        """
        Fraction of non-whitespace characters that are digits or math symbols.

        Returns:
            Ratio between 0.0 and 1.0 (0.0 for blank text)
        """
        total = 0
        math_count = 0
        for char in text:
            if char.isspace():
                continue
            total += 1
            if char in self.math_symbols or char.isdecimal():
                math_count += 1

        if total == 0:
            return 0.0
        return math_count / total

    def is_display_math(self, text: str) -> bool:
        """Check the display math rules (steps 1-3)."""
        if '\\' in text:
            return True

        if self.math_char_ratio(text) > self.threshold:
            return True

        for rule in self.display_patterns:
            if rule.matches(text):
                logger.debug(f"Display pattern '{rule.name}' matched: {text!r}")
                return True

        return False

    def is_inline_math(self, text: str) -> bool:
        """Check the inline math rules only."""
        return any(rule.matches(text) for rule in self.inline_patterns)

    def classify(self, text: str) -> LineType:
        """
        Classify an escaped, non-empty line.

        Args:
            text: Line after LaTeX escaping

        Returns:
            Exactly one LineType
        """
        if self.is_display_math(text):
            return LineType.DISPLAY_MATH
        if self.is_inline_math(text):
            return LineType.INLINE_MATH
        return LineType.PROSE


_default_classifier = LineClassifier()


def classify_line(text: str) -> LineType:
    """Classify a line using the default rule tables."""
    return _default_classifier.classify(text)
