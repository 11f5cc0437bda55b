"""
Text to LaTeX conversion engine.

Splits recognized text into lines and runs each non-empty line through
escaping, classification and (for math lines) rewriting, then wraps math
in the matching delimiters. The engine does no I/O and never fails.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .classify import LineClassifier, LineType
from .escape import LatexEscaper
from .rewrite import MathRewriter

logger = logging.getLogger(__name__)


DISPLAY_MATH_TEMPLATE = "\\[ {} \\]"
INLINE_MATH_TEMPLATE = "\\( {} \\)"


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class ConvertedLine:
    """One emitted line of output."""
    source: str
    escaped: str
    line_type: LineType
    latex: str

    @property
    def is_math(self) -> bool:
        return self.line_type != LineType.PROSE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "type": self.line_type.value,
            "latex": self.latex,
        }


@dataclass
class ConversionResult:
    """Ordered output lines of a single conversion."""
    lines: List[ConvertedLine] = field(default_factory=list)

    @property
    def latex(self) -> str:
        return "\n".join(line.latex for line in self.lines)

    def count(self, line_type: LineType) -> int:
        return sum(1 for line in self.lines if line.line_type == line_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latex": self.latex,
            "lines": [line.to_dict() for line in self.lines],
            "counts": {t.value: self.count(t) for t in LineType},
        }


# ============================================================================
# Converter
# ============================================================================

class LatexConverter:
    """
    Converts raw OCR text into a LaTeX body.

    Usage:
        converter = LatexConverter()
        body = converter.convert("E = mc^2")
        # '\\[ E = mc^{2} \\]'
    """

    def __init__(
        self,
        escaper: Optional[LatexEscaper] = None,
        classifier: Optional[LineClassifier] = None,
        rewriter: Optional[MathRewriter] = None
    ):
        self.escaper = escaper or LatexEscaper()
        self.classifier = classifier or LineClassifier()
        self.rewriter = rewriter or MathRewriter()

    def convert_line(self, line: str) -> Optional[ConvertedLine]:
        """
        Convert a single line.

        Returns:
            ConvertedLine, or None for blank lines
        """
        stripped = line.strip()
        if not stripped:
            return None

        escaped = self.escaper.escape(stripped)
        line_type = self.classifier.classify(escaped)

        if line_type == LineType.DISPLAY_MATH:
            latex = DISPLAY_MATH_TEMPLATE.format(self.rewriter.rewrite(escaped))
        elif line_type == LineType.INLINE_MATH:
            latex = INLINE_MATH_TEMPLATE.format(self.rewriter.rewrite(escaped))
        else:
            latex = escaped

        return ConvertedLine(
            source=stripped,
            escaped=escaped,
            line_type=line_type,
            latex=latex
        )

    def convert_lines(self, text: str) -> ConversionResult:
        """
        Convert raw text line by line.

        Args:
            text: Raw recognized text (may be empty)

        Returns:
            ConversionResult preserving input line order
        """
        result = ConversionResult()
        if not text:
            return result

        # Only "\n" ends a line; strip() removes a trailing "\r"
        for line in text.split("\n"):
            converted = self.convert_line(line)
            if converted is not None:
                result.lines.append(converted)

        logger.debug(
            f"Converted {len(result.lines)} lines "
            f"(display: {result.count(LineType.DISPLAY_MATH)}, "
            f"inline: {result.count(LineType.INLINE_MATH)}, "
            f"prose: {result.count(LineType.PROSE)})"
        )
        return result

    def convert(self, text: str) -> str:
        """Convert raw text into a LaTeX body string."""
        return self.convert_lines(text).latex
