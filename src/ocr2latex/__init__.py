"""
OCR to LaTeX Converter
======================

Converts an image of printed or handwritten text and equations into
LaTeX source.

Main components:
- Text OCR with Tesseract (placeholder fallback, clearly flagged)
- LaTeX escaping of special characters
- Line classification (prose, display math, inline math)
- Rewriting of common math shapes (functions, fractions, exponents,
  roots, bounded integrals)
- Standalone document export
"""

__version__ = "1.0.0"
__author__ = "ocr2latex contributors"
