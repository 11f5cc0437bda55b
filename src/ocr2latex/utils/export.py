"""
Export module for the OCR to LaTeX converter.

Wraps a converted LaTeX body in a minimal compilable document and
writes the body and preview files.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from ..config import ExportConfig
from .escape import escape_latex
from .io import save_text

logger = logging.getLogger(__name__)


# ============================================================================
# LaTeX Exporter
# ============================================================================

class LatexExporter:
    """Export a LaTeX body as a standalone document."""

    def __init__(
        self,
        document_class: str = "article",
        packages: Optional[Sequence[str]] = None,
        title: Optional[str] = "OCR to LaTeX Conversion",
        author: Optional[str] = "ocr2latex"
    ):
        self.document_class = document_class
        self.packages = list(packages) if packages is not None else [
            "amsmath", "amssymb", "[utf8]inputenc", "graphicx"
        ]
        self.title = title
        self.author = author

    @classmethod
    def from_config(cls, config: ExportConfig) -> "LatexExporter":
        return cls(
            document_class=config.document_class,
            packages=config.packages,
            title=config.title,
            author=config.author
        )

    def wrap(self, body: str) -> str:
        """
        Embed a LaTeX body in a full document.

        Args:
            body: Output of LatexConverter.convert (may be empty)

        Returns:
            Complete LaTeX source
        """
        lines = []

        lines.append(f"\\documentclass{{{self.document_class}}}")
        for pkg in self.packages:
            lines.append(self._usepackage(pkg))

        lines.append("\\begin{document}")
        lines.append("")

        if self.title:
            lines.append(f"\\title{{{escape_latex(self.title)}}}")
            if self.author:
                lines.append(f"\\author{{{escape_latex(self.author)}}}")
            lines.append("\\maketitle")
            lines.append("")

        lines.append("% Converted from image")
        if body:
            lines.append(body)
        lines.append("")
        lines.append("\\end{document}")

        return "\n".join(lines) + "\n"

    def _usepackage(self, pkg: str) -> str:
        """Format a package entry, with options given as '[opts]name'."""
        if pkg.startswith("["):
            options, _, name = pkg[1:].partition("]")
            return f"\\usepackage[{options}]{{{name}}}"
        return f"\\usepackage{{{pkg}}}"

    def export(
        self,
        body: str,
        output_path: Union[str, Path]
    ) -> Path:
        """
        Write the full document to a .tex file.

        Returns:
            Path to the generated LaTeX file
        """
        path = save_text(self.wrap(body), output_path)
        logger.info(f"Exported LaTeX preview to: {path}")
        return path


# ============================================================================
# Output Writer
# ============================================================================

class DocumentExporter:
    """Writes the body-only and full-document artifacts side by side."""

    def __init__(
        self,
        output_dir: Union[str, Path],
        config: Optional[ExportConfig] = None
    ):
        self.output_dir = Path(output_dir)
        self.config = config or ExportConfig()
        self.latex_exporter = LatexExporter.from_config(self.config)

    def export(self, body: str) -> Dict[str, Path]:
        """
        Write body and preview files.

        Returns:
            Dictionary mapping artifact name ('body', 'preview') to path
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results = {}

        body_path = save_text(body, self.output_dir / self.config.body_filename)
        logger.info(f"Saved LaTeX body to: {body_path}")
        results["body"] = body_path

        results["preview"] = self.latex_exporter.export(
            body, self.output_dir / self.config.preview_filename
        )

        return results
