"""Unit tests for file-type recommendations."""

import pytest

from models.document import Document
from models.print_settings import ColorMode, Quality, Sides
from modules.advisor import recommend, recommend_for_document


class TestRecommend:

    @pytest.mark.parametrize("file_type", ["ppt", "pptx", "PPTX", "slides.pptx"])
    def test_presentation(self, file_type):
        rec = recommend(file_type)
        assert rec.color_mode is ColorMode.COLOR
        assert rec.quality is Quality.HIGH
        assert rec.sides is Sides.ONE_SIDED
        assert "presentation" in rec.message

    @pytest.mark.parametrize("file_type", ["jpg", "jpeg", "png", "gif", "photo.PNG"])
    def test_image_has_no_sides_opinion(self, file_type):
        rec = recommend(file_type)
        assert rec.color_mode is ColorMode.COLOR
        assert rec.quality is Quality.HIGH
        assert rec.sides is None
        assert "sides" not in rec.to_dict()

    @pytest.mark.parametrize("file_type", ["pdf", "docx", "txt", "xlsx", ""])
    def test_everything_else_is_standard_document(self, file_type):
        rec = recommend(file_type)
        assert rec.color_mode is ColorMode.BLACK_AND_WHITE
        assert rec.quality is Quality.STANDARD
        assert rec.sides is Sides.TWO_SIDED_LONG_EDGE

    def test_three_tips_each(self):
        for file_type in ("pptx", "png", "pdf"):
            assert len(recommend(file_type).tips) == 3

    def test_serialized_with_client_values(self):
        data = recommend("pdf").to_dict()
        assert data["colorMode"] == "Black & White"
        assert data["sides"] == "Two-sided (long edge)"


class TestRecommendForDocument:

    def test_unknown_document_gets_eco_default(self):
        rec = recommend_for_document(None)
        assert rec.color_mode is ColorMode.BLACK_AND_WHITE
        assert rec.sides is Sides.TWO_SIDED_LONG_EDGE
        assert rec.quality is Quality.STANDARD
        assert "default" in rec.message

    def test_uses_document_file_type(self):
        doc = Document(user_id=1, name="deck.pptx", file_path="x", file_type="pptx", estimated_pages=3)
        assert recommend_for_document(doc).color_mode is ColorMode.COLOR
