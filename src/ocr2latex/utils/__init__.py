"""
Utility modules for the OCR to LaTeX converter.
"""

from .io import load_image, save_image, save_text, save_json, ensure_dir
from .images import preprocess_for_ocr, to_grayscale, binarize, create_sample_image
from .escape import LatexEscaper, EscapeRule, escape_latex
from .classify import LineClassifier, LineType, MathPattern, classify_line
from .rewrite import MathRewriter, RewriteRule, rewrite_math
from .converter import LatexConverter, ConversionResult, ConvertedLine
from .ocr_text import (
    TextOCR, TesseractEngine, PlaceholderEngine, OCRResult,
    OCRError, OCREngineUnavailableError, OCRExecutionError, InvalidInputError,
)
from .export import LatexExporter, DocumentExporter

__all__ = [
    # IO
    "load_image", "save_image", "save_text", "save_json", "ensure_dir",
    # Images
    "preprocess_for_ocr", "to_grayscale", "binarize", "create_sample_image",
    # Conversion
    "LatexEscaper", "EscapeRule", "escape_latex",
    "LineClassifier", "LineType", "MathPattern", "classify_line",
    "MathRewriter", "RewriteRule", "rewrite_math",
    "LatexConverter", "ConversionResult", "ConvertedLine",
    # OCR
    "TextOCR", "TesseractEngine", "PlaceholderEngine", "OCRResult",
    "OCRError", "OCREngineUnavailableError", "OCRExecutionError", "InvalidInputError",
    # Export
    "LatexExporter", "DocumentExporter",
]
