"""
Unit tests for page estimation and PDF page counting.
"""

import pytest
from pypdf import PdfWriter

from modules.document_analyzer import (
    DocumentAnalyzer,
    count_pdf_pages,
    estimate_pages,
    file_extension,
)

MB = 1024 * 1024


# Fixtures

@pytest.fixture
def three_page_pdf(tmp_path):
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=595, height=842)
    path = tmp_path / "sample.pdf"
    with open(path, "wb") as f:
        writer.write(f)
    return path


class TestEstimatePages:

    @pytest.mark.parametrize("extension, size, expected", [
        ("pdf", 1 * MB, 10),
        ("pdf", MB // 2, 5),
        ("docx", 1 * MB, 8),
        ("pptx", 3 * MB, 6),
        ("xlsx", 2 * MB, 10),
        ("txt", 1 * MB, 5),
    ])
    def test_pages_per_megabyte(self, extension, size, expected):
        assert estimate_pages(size, extension) == expected

    def test_rounds_up(self):
        assert estimate_pages(MB + 1, "pdf") == 11

    def test_at_least_one_page(self):
        assert estimate_pages(0, "pdf") == 1
        assert estimate_pages(10, "docx") == 1

    @pytest.mark.parametrize("extension", ["jpg", "jpeg", "png", "gif", ".PNG"])
    def test_images_are_one_page(self, extension):
        assert estimate_pages(9 * MB, extension) == 1


class TestFileExtension:

    def test_lowercases(self):
        assert file_extension("Report.PDF") == "pdf"

    def test_last_suffix_wins(self):
        assert file_extension("archive.tar.gz") == "gz"

    def test_no_extension(self):
        assert file_extension("README") == ""


class TestCountPdfPages:

    def test_counts_pages(self, three_page_pdf):
        assert count_pdf_pages(three_page_pdf) == 3

    def test_unreadable_file_returns_none(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")
        assert count_pdf_pages(path) is None

    def test_missing_file_returns_none(self, tmp_path):
        assert count_pdf_pages(tmp_path / "missing.pdf") is None


class TestDocumentAnalyzer:

    def test_pdf_gets_estimate_and_count(self, three_page_pdf):
        info = DocumentAnalyzer().analyze(three_page_pdf, "Sample.PDF")
        assert info["file_type"] == "pdf"
        assert info["file_size_bytes"] == three_page_pdf.stat().st_size
        assert info["estimated_pages"] >= 1
        assert info["counted_pages"] == 3

    def test_other_types_are_not_counted(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        info = DocumentAnalyzer().analyze(path, "notes.txt")
        assert info["estimated_pages"] == 1
        assert info["counted_pages"] is None
