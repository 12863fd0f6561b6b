"""Heuristic page estimates for uploaded files, plus a real count for PDFs."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Any, Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from logging_config import get_logger


logger = get_logger(__name__)

# Pages per megabyte by extension
PAGES_PER_MB = {
    "pdf": 10,   # ~100KB per page
    "doc": 8,    # ~125KB per page
    "docx": 8,
    "ppt": 2,    # ~500KB per slide
    "pptx": 2,
    "xls": 5,    # ~200KB per sheet
    "xlsx": 5,
}
DEFAULT_PAGES_PER_MB = 5

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif"}

ALLOWED_EXTENSIONS = {"pdf", "doc", "docx", "ppt", "pptx", "xls", "xlsx", "txt"} | IMAGE_EXTENSIONS


def file_extension(filename: str) -> str:
    """Lowercase extension without the dot ('' if there is none)."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def estimate_pages(size_bytes: int, extension: str) -> int:
    """
    Estimate the page count of a file from its size and type.

    Images are always one page. Everything else is
    max(1, ceil(size_in_MB x pages_per_MB)).
    """
    extension = extension.lower().lstrip(".")
    if extension in IMAGE_EXTENSIONS:
        return 1

    size_mb = size_bytes / (1024 * 1024)
    factor = PAGES_PER_MB.get(extension, DEFAULT_PAGES_PER_MB)
    return max(1, math.ceil(size_mb * factor))


def count_pdf_pages(pdf_path: str | Path) -> Optional[int]:
    """Number of pages in a PDF, or None if the file can't be parsed."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (PyPdfError, OSError, ValueError) as exc:
        logger.warning(f"Could not count pages in {pdf_path}: {exc}")
        return None


class DocumentAnalyzer:
    """Describe a stored upload: type, size and page figures."""

    def analyze(self, path: str | Path, original_name: str) -> Dict[str, Any]:
        path = Path(path)
        extension = file_extension(original_name)
        size_bytes = path.stat().st_size

        info: Dict[str, Any] = {
            "file_type": extension,
            "file_size_bytes": size_bytes,
            "estimated_pages": estimate_pages(size_bytes, extension),
            "counted_pages": None,
        }
        if extension == "pdf":
            info["counted_pages"] = count_pdf_pages(path)

        logger.debug(f"Analyzed {original_name}: {info}")
        return info
