"""
Tests for math rewriting.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestRewriteMath:
    """Test each rewrite rule."""

    @pytest.mark.parametrize("name", ["sin", "cos", "tan", "log", "ln", "lim", "sum", "prod", "int"])
    def test_function_names(self, name):
        """Whole-word function names get a backslash."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math(f"{name} x") == f"\\{name} x"

    def test_function_name_not_doubled(self):
        """Already prefixed names are left alone."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("\\sin x") == "\\sin x"

    def test_function_name_inside_word(self):
        """Names inside longer words are not rewritten."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("sinh(x) + cost") == "sinh(x) + cost"

    def test_function_name_before_greek_letter(self):
        """A Greek letter right after a name is not part of the word."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("sinθ") == "\\sinθ"
        assert rewrite_math("cosα + 1") == "\\cosα + 1"

    def test_fraction(self):
        """Digit fractions become \\frac."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("1/3") == "\\frac{1}{3}"
        assert rewrite_math("x = 22/7") == "x = \\frac{22}{7}"

    def test_fullwidth_fraction_untouched(self):
        """Only ASCII digits form fractions."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("１/３") == "１/３"

    def test_exponent(self):
        """Digit exponents are wrapped in braces."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("x^2 + y^2") == "x^{2} + y^{2}"

    def test_exponent_after_escaping(self):
        """The escaped caret form is recognised too."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("E = mc\\textasciicircum{}2") == "E = mc^{2}"

    def test_sqrt(self):
        """sqrt(...) becomes \\sqrt{...}."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("sqrt(4)") == "\\sqrt{4}"
        assert rewrite_math("sqrt(a + b)") == "\\sqrt{a + b}"

    def test_integral(self):
        """Bounded integrals get sub- and superscript bounds."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("int_0^1 x") == "\\int_{0}^{1} x"

    def test_integral_after_escaping(self):
        """Bounded integrals are found in escaped text."""
        from ocr2latex.utils.escape import escape_latex
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math(escape_latex("int_0^1 x")) == "\\int_{0}^{1} x"

    def test_integral_inside_word_untouched(self):
        """A word merely ending in int is not an integral."""
        from ocr2latex.utils.escape import escape_latex
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math(escape_latex("print_0^1 x")) == "print\\_0^{1} x"

    def test_non_digit_exponent_untouched(self):
        """Only digit exponents are rewritten."""
        from ocr2latex.utils.rewrite import rewrite_math

        assert rewrite_math("e^x") == "e^x"

    def test_combined(self):
        """Several rules apply on one line."""
        from ocr2latex.utils.rewrite import rewrite_math

        result = rewrite_math("sin x + 1/2 = sqrt(y)")
        assert result == "\\sin x + \\frac{1}{2} = \\sqrt{y}"


class TestMathRewriter:
    """Test rewriter construction."""

    def test_rule_order(self):
        """Rules run in their documented order."""
        from ocr2latex.utils.rewrite import DEFAULT_REWRITE_RULES

        names = [rule.name for rule in DEFAULT_REWRITE_RULES]
        assert names == ["function", "fraction", "exponent", "sqrt", "integral"]

    def test_no_rules(self):
        """An empty rule table leaves text unchanged."""
        from ocr2latex.utils.rewrite import MathRewriter

        assert MathRewriter(rules=()).rewrite("sqrt(4) + 1/3") == "sqrt(4) + 1/3"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
