"""
Tests for line classification.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestMathCharRatio:
    """Test the math-like character ratio."""

    def test_all_math(self):
        """Digits and symbols only."""
        from ocr2latex.utils.classify import LineClassifier

        assert LineClassifier().math_char_ratio("1 + 2 = 3") == 1.0

    def test_half_math(self):
        """Whitespace is ignored in the count."""
        from ocr2latex.utils.classify import LineClassifier

        assert LineClassifier().math_char_ratio("12 ab") == 0.5

    def test_blank(self):
        """Blank text has a ratio of zero."""
        from ocr2latex.utils.classify import LineClassifier

        assert LineClassifier().math_char_ratio("   ") == 0.0

    def test_greek_and_calculus_symbols(self):
        """Greek letters and calculus symbols count as math."""
        from ocr2latex.utils.classify import LineClassifier

        assert LineClassifier().math_char_ratio("∫∑√ αβπ") == 1.0


class TestClassifyLine:
    """Test the classification decision order."""

    def test_prose(self):
        """Ordinary words are prose."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line("Hello world") == LineType.PROSE
        assert classify_line("The result is good.") == LineType.PROSE

    def test_function_name_inside_word_is_prose(self):
        """Function names only count as whole words."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line("single integer") == LineType.PROSE

    def test_function_name_before_greek_letter(self):
        """A Greek letter after a function name still ends the word."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line("sinθ") == LineType.DISPLAY_MATH
        assert classify_line("cosα") == LineType.DISPLAY_MATH

    def test_fullwidth_digits_are_not_digits(self):
        """Structural patterns only count ASCII digits."""
        from ocr2latex.utils.classify import DISPLAY_PATTERNS

        digit_operation = [p for p in DISPLAY_PATTERNS if p.name == "digit_operation"][0]

        assert digit_operation.matches("1+2")
        assert not digit_operation.matches("１+２")

    def test_backslash_is_display(self):
        """An escaped character makes a line display math."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line("Tom \\& Jerry") == LineType.DISPLAY_MATH

    def test_mostly_digits_is_display(self):
        """More than 60% math characters is display math."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line("123 456") == LineType.DISPLAY_MATH
        assert classify_line("αβγ") == LineType.DISPLAY_MATH

    def test_threshold_is_strict(self):
        """Exactly 60% math characters does not trigger the ratio rule."""
        from ocr2latex.utils.classify import classify_line, LineType

        # 3 of 5 characters are digits, and no pattern matches
        assert classify_line("123ab") == LineType.PROSE

    @pytest.mark.parametrize("line", [
        "a + b",
        "f(x)",
        "3*4",
        "k = 10",
        "sin x",
        "array [i]",
    ])
    def test_structural_patterns(self, line):
        """Each structural pattern triggers display math."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line(line) == LineType.DISPLAY_MATH

    def test_function_word_in_prose_is_display(self):
        """A heuristic, not a parser: 'log' in a sentence reads as math."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line("log in to continue") == LineType.DISPLAY_MATH

    def test_inline_looking_line_is_display(self):
        """
        'x = 5' satisfies an inline pattern, but display checks run first,
        so it is reported as display math.
        """
        from ocr2latex.utils.classify import LineClassifier, LineType

        classifier = LineClassifier()

        assert classifier.is_inline_math("x = 5") is True
        assert classifier.is_display_math("x = 5") is True
        assert classifier.classify("x = 5") == LineType.DISPLAY_MATH

    def test_inline_reachable_without_display_patterns(self):
        """With no structural patterns, inline rules decide."""
        from ocr2latex.utils.classify import LineClassifier, LineType

        classifier = LineClassifier(display_patterns=())

        assert classifier.classify("x = y") == LineType.INLINE_MATH
        assert classifier.classify("hello") == LineType.PROSE

    @pytest.mark.parametrize("line", [
        "Introduction",
        "E = mc\\textasciicircum{}2",
        "x = 5",
        "1/3",
        "lim x→∞",
        "...",
        "a",
    ])
    def test_classification_is_total(self, line):
        """Every non-empty line gets exactly one type."""
        from ocr2latex.utils.classify import classify_line, LineType

        assert classify_line(line) in set(LineType)


class TestInlinePatterns:
    """Test the inline rule set on its own."""

    def test_inline_matches(self):
        """Inline patterns recognise simple equations."""
        from ocr2latex.utils.classify import LineClassifier

        classifier = LineClassifier()

        assert classifier.is_inline_math("y = 2x + 1") is True
        assert classifier.is_inline_math("a^2 + b^2 = c^2") is True
        assert classifier.is_inline_math("z = 42") is True

    def test_inline_no_match(self):
        """Sentences without an equals sign are not inline math."""
        from ocr2latex.utils.classify import LineClassifier

        assert LineClassifier().is_inline_math("just some words") is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
