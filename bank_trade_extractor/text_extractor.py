"""
Text extraction from PDF buffers.

The default backend shells out to pdftotext through a pair of
timestamp-named temp files. Names are not locked, so two calls in the
same millisecond can collide.
"""

import io
import os
import shutil
import logging
import subprocess
import tempfile
import time
from typing import List, Optional

import pdfplumber


class ExtractionError(Exception):
    """Raised when the PDF could not be converted to text."""


class PdftotextExtractor:
    """Convert a PDF buffer to text with the external pdftotext tool."""

    def __init__(self, config, logger: logging.Logger = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def _search_path(self) -> str:
        paths = [os.environ.get("PATH", "")] + list(self.config.extra_search_paths)
        return os.pathsep.join(p for p in paths if p)

    def resolve_tool(self) -> str:
        """Locate the conversion executable on the extended search path."""
        tool = shutil.which(self.config.tool, path=self._search_path())
        if not tool:
            raise ExtractionError(f"{self.config.tool} not found on PATH")
        return tool

    def _temp_paths(self) -> List[str]:
        stamp = int(time.time() * 1000)
        tmp_dir = tempfile.gettempdir()
        return [
            os.path.join(tmp_dir, f"temp-pdf-{stamp}.pdf"),
            os.path.join(tmp_dir, f"temp-text-{stamp}.txt"),
        ]

    def _cleanup(self, *paths: str) -> None:
        for path in paths:
            try:
                os.unlink(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                self.logger.warning(f"⚠️ Cleanup error for {path}: {e}")

    def extract(self, buffer: bytes) -> str:
        """Return the plain text of a PDF buffer."""
        pdf_path, text_path = self._temp_paths()
        try:
            with open(pdf_path, 'wb') as f:
                f.write(buffer)
            self.logger.debug(f"📁 Temp PDF file created: {pdf_path}")

            tool = self.resolve_tool()
            try:
                subprocess.run(
                    [tool, pdf_path, text_path],
                    capture_output=True,
                    timeout=self.config.tool_timeout,
                    check=True,
                    env={**os.environ, "PATH": self._search_path()},
                )
            except subprocess.TimeoutExpired as e:
                raise ExtractionError(f"{self.config.tool} timed out after {e.timeout}s") from e
            except subprocess.CalledProcessError as e:
                stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
                raise ExtractionError(f"{self.config.tool} exited with status {e.returncode}: {stderr}") from e
            except OSError as e:
                raise ExtractionError(f"{self.config.tool} could not be started: {e}") from e

            self.logger.info(f"✅ PDF converted to text using {self.config.tool}")
            with open(text_path, 'r', encoding='utf-8') as f:
                return f.read()
        finally:
            self._cleanup(pdf_path, text_path)


class PdfplumberExtractor:
    """In-process backend using pdfplumber's page text."""

    def __init__(self, config, logger: logging.Logger = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, buffer: bytes) -> str:
        pages = []
        try:
            with pdfplumber.open(io.BytesIO(buffer)) as pdf:
                for page_num, page in enumerate(pdf.pages, 1):
                    self.logger.debug(f"Processing page {page_num}")
                    text = page.extract_text()
                    if text:
                        pages.append(text)
        except Exception as e:
            raise ExtractionError(f"pdfplumber could not read the PDF: {e}") from e
        return "\n".join(pages)


def get_text_extractor(config, logger: Optional[logging.Logger] = None):
    """Build the text extractor selected by config.backend."""
    if config.backend == "pdftotext":
        return PdftotextExtractor(config, logger)
    if config.backend == "pdfplumber":
        return PdfplumberExtractor(config, logger)
    raise ValueError(f"Unknown text extraction backend: {config.backend}")
