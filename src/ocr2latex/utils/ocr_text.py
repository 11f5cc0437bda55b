"""
Text OCR module for the OCR to LaTeX converter.

Provides:
- Text extraction from an image file with Tesseract
- Per-line and overall confidence scoring
- A placeholder engine used when Tesseract is missing or fails,
  always flagged on the result
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import pytesseract

from ..config import OCRConfig, locate_tesseract, TESSERACT_SEARCH_PATHS
from .images import preprocess_for_ocr
from .io import load_image

logger = logging.getLogger(__name__)


PLACEHOLDER_TEXT = "E = mc^2\n\n∫ from 0 to 1 x^2 dx = 1/3\n\nlim x→∞ (1 + 1/x)^x = e"


# ============================================================================
# Exceptions
# ============================================================================

class OCRError(Exception):
    """Base class for OCR failures."""


class OCREngineUnavailableError(OCRError):
    """The OCR engine cannot be located or started."""


class OCRExecutionError(OCRError):
    """The OCR engine ran but failed (bad exit, unreadable image, timeout)."""


class InvalidInputError(OCRError):
    """The input image path does not exist."""


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class LineResult:
    """OCR result for a line of text."""
    text: str
    confidence: float
    bbox: Optional[Tuple[int, int, int, int]] = None  # (x1, y1, x2, y2)


@dataclass
class OCRResult:
    """Complete OCR result for one image."""
    text: str
    confidence: float
    lines: List[LineResult] = field(default_factory=list)
    engine_used: str = ""
    language: str = ""
    is_placeholder: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "engine": self.engine_used,
            "language": self.language,
            "is_placeholder": self.is_placeholder,
            "metadata": self.metadata
        }


# ============================================================================
# Text OCR Main Class
# ============================================================================

class TextOCR:
    """
    Main OCR interface.

    Runs Tesseract on an image file. If Tesseract is unavailable, or a
    run fails, a single fallback to the placeholder engine is made and
    the result is marked with is_placeholder=True. With
    allow_placeholder=False every failure is raised instead.

    Usage:
        ocr = TextOCR(OCRConfig(language="eng"))
        result = ocr.recognize("equation.png")
        if result.is_placeholder:
            ...
    """

    def __init__(
        self,
        config: Optional[OCRConfig] = None,
        engine: Optional["TesseractEngine"] = None,
        fallback: Optional["PlaceholderEngine"] = None
    ):
        self.config = config or OCRConfig()
        self._engine = engine
        self._unavailable_error: Optional[OCREngineUnavailableError] = None

        if self._engine is None:
            try:
                self._engine = TesseractEngine(
                    tesseract_cmd=self.config.tesseract_cmd,
                    language=self.config.language,
                    config=self.config.tesseract_config,
                    timeout=self.config.timeout,
                    search_paths=self.config.search_paths
                )
                logger.info(f"Initialized Tesseract OCR: {self._engine.tesseract_cmd}")
            except OCREngineUnavailableError as e:
                logger.warning(f"Tesseract not available: {e}")
                self._unavailable_error = e

        if fallback is not None:
            self._fallback = fallback
        elif self.config.allow_placeholder:
            self._fallback = PlaceholderEngine()
        else:
            self._fallback = None

    @property
    def is_available(self) -> bool:
        """True if a real OCR engine is ready."""
        return self._engine is not None

    def recognize(
        self,
        image_path: Union[str, Path],
        language: Optional[str] = None
    ) -> OCRResult:
        """
        Recognize text in an image file.

        Args:
            image_path: Path to the image
            language: Tesseract language code (default from config, "eng")

        Returns:
            OCRResult; is_placeholder is set if the fallback was used

        Raises:
            InvalidInputError: If the image path does not exist
            OCREngineUnavailableError: If Tesseract is missing and the
                placeholder is disabled
            OCRExecutionError: If Tesseract failed and the fallback
                is disabled or failed too
        """
        path = Path(image_path)
        if not path.is_file():
            raise InvalidInputError(f"Image file not found: {path}")

        language = language or self.config.language

        if self._engine is None:
            cause = self._unavailable_error or OCREngineUnavailableError("no OCR engine configured")
            return self._recognize_fallback(path, language, cause)

        try:
            image = load_image(path)
            if self.config.preprocess:
                image = preprocess_for_ocr(image)
            result = self._engine.recognize(image, language=language)
        except ValueError as e:
            # cv2 could not decode the file
            logger.error(f"OCR failed for {path}: {e}")
            return self._recognize_fallback(
                path, language, OCRExecutionError(f"Unreadable image: {e}")
            )
        except OCRError as e:
            logger.error(f"OCR failed for {path}: {e}")
            return self._recognize_fallback(path, language, e)

        result.metadata["image_path"] = str(path)
        return result

    def _recognize_fallback(
        self,
        path: Path,
        language: str,
        cause: OCRError
    ) -> OCRResult:
        """Make the single fallback attempt, or raise if there is none."""
        if self._fallback is None:
            if isinstance(cause, OCREngineUnavailableError):
                raise cause
            raise OCRExecutionError(
                f"OCR failed for {path} (language '{language}'): {cause}"
            ) from cause

        logger.warning(f"Using placeholder text instead of OCR for {path}")
        try:
            result = self._fallback.recognize(path, language=language)
        except OCRError as e:
            raise OCRExecutionError(
                f"OCR failed for {path} (language '{language}'): {cause}; "
                f"fallback also failed: {e}"
            ) from e

        result.metadata["fallback_reason"] = str(cause)
        return result


# ============================================================================
# Tesseract Engine
# ============================================================================

class TesseractEngine:
    """OCR using the Tesseract command-line engine."""

    def __init__(
        self,
        tesseract_cmd: Optional[str] = None,
        language: str = "eng",
        config: str = "--psm 6",
        timeout: float = 30.0,
        search_paths: Tuple[str, ...] = TESSERACT_SEARCH_PATHS
    ):
        cmd = tesseract_cmd or locate_tesseract(search_paths)
        if cmd is None:
            raise OCREngineUnavailableError(
                f"Tesseract executable not found (searched: {', '.join(search_paths)})\n"
                "Install Tesseract: https://github.com/tesseract-ocr/tesseract"
            )

        self.tesseract_cmd = cmd
        self.language = language
        self.config = config
        self.timeout = timeout

        try:
            self._use_command()
            self.version = str(pytesseract.get_tesseract_version())
        except pytesseract.TesseractNotFoundError as e:
            raise OCREngineUnavailableError(f"Cannot run Tesseract at {cmd}: {e}") from e

    def _use_command(self):
        pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

    def recognize(self, image: np.ndarray, language: Optional[str] = None) -> OCRResult:
        """
        Recognize text using Tesseract.

        Raises:
            OCREngineUnavailableError: If the executable disappeared
            OCRExecutionError: On a Tesseract error or timeout
        """
        language = language or self.language
        self._use_command()

        try:
            data = pytesseract.image_to_data(
                image,
                lang=language,
                config=self.config,
                timeout=self.timeout,
                output_type=pytesseract.Output.DICT
            )
        except pytesseract.TesseractNotFoundError as e:
            raise OCREngineUnavailableError(f"Tesseract not found at {self.tesseract_cmd}: {e}") from e
        except pytesseract.TesseractError as e:
            raise OCRExecutionError(
                f"Tesseract failed (language '{language}'): {e.message or e.status}"
            ) from e
        except RuntimeError as e:
            # pytesseract signals a timeout with a bare RuntimeError
            raise OCRExecutionError(
                f"Tesseract did not finish within {self.timeout}s: {e}"
            ) from e

        lines = self._group_lines(data)
        confidences = [line.confidence for line in lines]

        return OCRResult(
            text='\n'.join(line.text for line in lines),
            confidence=float(np.mean(confidences)) if confidences else 0.0,
            lines=lines,
            engine_used="tesseract",
            language=language
        )

    def _group_lines(self, data: Dict[str, List[Any]]) -> List[LineResult]:
        """Group Tesseract word boxes into lines, in reading order."""
        grouped: Dict[Tuple[int, int, int], List[int]] = {}

        for i in range(len(data['text'])):
            text = str(data['text'][i]).strip()
            conf = float(data['conf'][i])
            if conf < 0 or not text:  # -1 means no valid confidence
                continue
            key = (data['block_num'][i], data['par_num'][i], data['line_num'][i])
            grouped.setdefault(key, []).append(i)

        lines = []
        for indices in grouped.values():
            words = [str(data['text'][i]).strip() for i in indices]
            confs = [float(data['conf'][i]) / 100.0 for i in indices]
            x1 = min(data['left'][i] for i in indices)
            y1 = min(data['top'][i] for i in indices)
            x2 = max(data['left'][i] + data['width'][i] for i in indices)
            y2 = max(data['top'][i] + data['height'][i] for i in indices)
            lines.append(LineResult(
                text=' '.join(words),
                confidence=float(np.mean(confs)),
                bbox=(x1, y1, x2, y2)
            ))

        return lines


# ============================================================================
# Placeholder Engine
# ============================================================================

class PlaceholderEngine:
    """
    Stand-in used when Tesseract cannot produce text.

    Always returns the same sample equations. Intended for demos and
    self-tests; results are flagged so callers never mistake them for
    real recognition.
    """

    def __init__(self, text: str = PLACEHOLDER_TEXT):
        self.text = text

    def recognize(self, image_path: Union[str, Path], language: str = "eng") -> OCRResult:
        logger.info(f"Reading image with placeholder engine: {image_path}")
        return OCRResult(
            text=self.text,
            confidence=0.0,
            engine_used="placeholder",
            language=language,
            is_placeholder=True
        )
