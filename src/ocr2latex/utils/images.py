"""
Image utilities for the OCR to LaTeX converter.

Provides:
- Grayscale conversion and binarization
- Preprocessing tuned for Tesseract on equation images
- Synthetic sample image generation
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union
import numpy as np

logger = logging.getLogger(__name__)


SAMPLE_LINES = (
    "E = mc^2",
    "int_0^1 x^2 dx = 1/3",
    "lim x->inf (1 + 1/x)^x = e",
    "du/dt = c^2 u",
)


# ============================================================================
# Core Preprocessing Functions
# ============================================================================

def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert image to grayscale if it's color.

    Args:
        image: Input image (BGR or grayscale)

    Returns:
        Grayscale image
    """
    import cv2

    if len(image.shape) == 2:
        return image
    elif len(image.shape) == 3:
        if image.shape[2] == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        elif image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        elif image.shape[2] == 1:
            return image.squeeze()

    raise ValueError(f"Unexpected image shape: {image.shape}")


def binarize(
    image: np.ndarray,
    method: str = "adaptive",
    block_size: int = 11,
    c: int = 2
) -> np.ndarray:
    """
    Convert image to black and white.

    Args:
        image: Input image (grayscale or color)
        method: 'adaptive' (uneven lighting, photos of paper) or 'otsu'
        block_size: Block size for adaptive thresholding (must be odd)
        c: Constant subtracted for adaptive thresholding

    Returns:
        Binary image
    """
    import cv2

    gray = to_grayscale(image)

    if method == "otsu":
        _, binary = cv2.threshold(
            gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU
        )
    elif method == "adaptive":
        binary = cv2.adaptiveThreshold(
            gray,
            255,
            cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY,
            block_size,
            c
        )
    else:
        raise ValueError(f"Unknown binarization method: {method}")

    logger.debug(f"Applied {method} binarization")
    return binary


def preprocess_for_ocr(
    image: np.ndarray,
    min_height: int = 30,
    median_ksize: int = 3
) -> np.ndarray:
    """
    Prepare an image for Tesseract.

    Grayscale, upscale very small images, adaptive threshold, then a
    median blur to remove salt-and-pepper noise.

    Args:
        image: Input image (BGR or grayscale)
        min_height: Images shorter than this are scaled up to it
        median_ksize: Median blur kernel size (odd)

    Returns:
        Preprocessed grayscale image
    """
    import cv2

    gray = to_grayscale(image).copy()

    h = gray.shape[0]
    if 0 < h < min_height:
        scale = float(min_height) / h
        gray = cv2.resize(gray, None, fx=scale, fy=scale, interpolation=cv2.INTER_CUBIC)

    gray = binarize(gray, method="adaptive")
    gray = cv2.medianBlur(gray, median_ksize)

    logger.debug(f"Preprocessed image for OCR: {image.shape[:2]} -> {gray.shape[:2]}")
    return gray


# ============================================================================
# Sample Generation
# ============================================================================

def create_sample_image(
    lines: Sequence[str] = SAMPLE_LINES,
    width: int = 800,
    height: int = 600
) -> np.ndarray:
    """
    Render sample equations as black text on a white page.

    OpenCV's Hershey fonts are ASCII only, so equations are written the
    way OCR would read them back (x^2, int_0^1, ->).

    Returns:
        BGR image
    """
    import cv2

    img = np.ones((height, width, 3), dtype=np.uint8) * 255

    y = 80
    for line in lines:
        cv2.putText(img, line, (50, y),
                    cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 0, 0), 2)
        y += 100

    return img


def save_sample_image(
    output_path: Union[str, Path],
    lines: Optional[List[str]] = None
) -> Path:
    """Render a sample equations image and write it to disk."""
    from .io import save_image

    img = create_sample_image(lines or SAMPLE_LINES)
    path = save_image(img, output_path)
    logger.info(f"Created sample image: {path}")
    return path
