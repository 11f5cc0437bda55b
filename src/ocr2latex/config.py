"""
Configuration and constants for the OCR to LaTeX converter.

This module provides:
- OCR engine configuration (Tesseract command, language, timeout)
- Export configuration for the preview document
- Environment variable overrides
"""

import os
import shutil
import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

logger = logging.getLogger("ocr2latex")


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_LANGUAGE = "eng"

TESSERACT_SEARCH_PATHS: Tuple[str, ...] = (
    "tesseract",
    "/usr/bin/tesseract",
    "/usr/local/bin/tesseract",
    "/opt/homebrew/bin/tesseract",
    "C:\\Program Files\\Tesseract-OCR\\tesseract.exe",
)


# ============================================================================
# Processing Configuration
# ============================================================================

@dataclass(frozen=True)
class OCRConfig:
    """OCR configuration."""
    # None = locate on first use from search_paths
    tesseract_cmd: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    tesseract_config: str = "--psm 6"
    timeout: float = 30.0  # seconds, 0 = no limit
    # Fall back to fixed placeholder text when Tesseract is missing or fails
    allow_placeholder: bool = True
    preprocess: bool = False
    search_paths: Tuple[str, ...] = TESSERACT_SEARCH_PATHS


@dataclass(frozen=True)
class ExportConfig:
    """Preview document configuration."""
    document_class: str = "article"
    packages: Tuple[str, ...] = ("amsmath", "amssymb", "[utf8]inputenc", "graphicx")
    title: str = "OCR to LaTeX Conversion"
    author: str = "ocr2latex"
    body_filename: str = "output.tex"
    preview_filename: str = "preview.tex"
    report_filename: str = "report.json"


@dataclass(frozen=True)
class PipelineConfig:
    """Main pipeline configuration."""
    ocr: OCRConfig = field(default_factory=OCRConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    debug_mode: bool = False


# ============================================================================
# Default Configuration Instance
# ============================================================================

def get_config() -> PipelineConfig:
    """Get the default pipeline configuration with environment overrides."""
    ocr = OCRConfig()

    if os.environ.get("OCR2LATEX_TESSERACT_CMD"):
        ocr = replace(ocr, tesseract_cmd=os.environ["OCR2LATEX_TESSERACT_CMD"])

    if os.environ.get("OCR2LATEX_LANG"):
        ocr = replace(ocr, language=os.environ["OCR2LATEX_LANG"])

    if os.environ.get("OCR2LATEX_TIMEOUT"):
        try:
            ocr = replace(ocr, timeout=float(os.environ["OCR2LATEX_TIMEOUT"]))
        except ValueError:
            logger.warning(
                f"Ignoring invalid OCR2LATEX_TIMEOUT: {os.environ['OCR2LATEX_TIMEOUT']!r}"
            )

    if os.environ.get("OCR2LATEX_NO_PLACEHOLDER", "").lower() == "true":
        ocr = replace(ocr, allow_placeholder=False)

    debug_mode = os.environ.get("OCR2LATEX_DEBUG", "").lower() == "true"

    return PipelineConfig(ocr=ocr, debug_mode=debug_mode)


# ============================================================================
# Utility Functions
# ============================================================================

def locate_tesseract(search_paths: Tuple[str, ...] = TESSERACT_SEARCH_PATHS) -> Optional[str]:
    """
    Find the first usable Tesseract executable.

    Returns:
        Resolved executable path, or None if none of the candidates exist
    """
    for candidate in search_paths:
        resolved = shutil.which(candidate)
        if resolved:
            logger.debug(f"Found Tesseract at {resolved}")
            return resolved
    return None
