"""
Tests for configuration.
"""

import dataclasses
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


ENV_VARS = [
    "OCR2LATEX_TESSERACT_CMD",
    "OCR2LATEX_LANG",
    "OCR2LATEX_TIMEOUT",
    "OCR2LATEX_NO_PLACEHOLDER",
    "OCR2LATEX_DEBUG",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestGetConfig:
    """Test default configuration and environment overrides."""

    def test_defaults(self):
        """Defaults match the documented values."""
        from ocr2latex.config import get_config

        config = get_config()

        assert config.ocr.language == "eng"
        assert config.ocr.tesseract_cmd is None
        assert config.ocr.tesseract_config == "--psm 6"
        assert config.ocr.timeout == 30.0
        assert config.ocr.allow_placeholder is True
        assert config.debug_mode is False
        assert config.export.body_filename == "output.tex"
        assert config.export.preview_filename == "preview.tex"

    def test_environment_overrides(self, monkeypatch):
        """Environment variables override defaults."""
        from ocr2latex.config import get_config

        monkeypatch.setenv("OCR2LATEX_TESSERACT_CMD", "/opt/tess/bin/tesseract")
        monkeypatch.setenv("OCR2LATEX_LANG", "ind")
        monkeypatch.setenv("OCR2LATEX_TIMEOUT", "5")
        monkeypatch.setenv("OCR2LATEX_NO_PLACEHOLDER", "true")
        monkeypatch.setenv("OCR2LATEX_DEBUG", "TRUE")

        config = get_config()

        assert config.ocr.tesseract_cmd == "/opt/tess/bin/tesseract"
        assert config.ocr.language == "ind"
        assert config.ocr.timeout == 5.0
        assert config.ocr.allow_placeholder is False
        assert config.debug_mode is True

    def test_invalid_timeout_ignored(self, monkeypatch):
        """A non-numeric timeout keeps the default."""
        from ocr2latex.config import get_config

        monkeypatch.setenv("OCR2LATEX_TIMEOUT", "soon")

        assert get_config().ocr.timeout == 30.0

    def test_config_is_immutable(self):
        """Configuration objects cannot be mutated."""
        from ocr2latex.config import get_config

        config = get_config()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.ocr.language = "fra"


class TestLocateTesseract:
    """Test executable lookup."""

    def test_not_found(self):
        """Unknown commands resolve to None."""
        from ocr2latex.config import locate_tesseract

        assert locate_tesseract(("definitely-not-tesseract-xyz",)) is None

    def test_first_match_wins(self, tmp_path):
        """The first executable candidate is returned."""
        import os
        from ocr2latex.config import locate_tesseract

        if os.name == "nt":
            pytest.skip("POSIX executable bit required")

        exe = tmp_path / "tesseract"
        exe.write_text("#!/bin/sh\n")
        exe.chmod(0o755)

        found = locate_tesseract(("definitely-not-tesseract-xyz", str(exe)))

        assert found == str(exe)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
