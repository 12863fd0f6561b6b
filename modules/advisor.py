"""
Print-settings recommendations by file type.

A fixed rule table keyed on the document's extension; no content analysis.
Rules are checked in order and the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from models.document import Document
from models.print_settings import ColorMode, Quality, Sides


IMAGE_TYPES = ("jpg", "png", "jpeg", "gif")


@dataclass(frozen=True)
class Recommendation:
    message: str
    tips: List[str] = field(default_factory=list)
    color_mode: Optional[ColorMode] = None
    quality: Optional[Quality] = None
    sides: Optional[Sides] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"message": self.message, "tips": list(self.tips)}
        # Only settings the rule has an opinion on are sent
        if self.color_mode is not None:
            data["colorMode"] = self.color_mode.value
        if self.quality is not None:
            data["quality"] = self.quality.value
        if self.sides is not None:
            data["sides"] = self.sides.value
        return data


PRESENTATION = Recommendation(
    color_mode=ColorMode.COLOR,
    quality=Quality.HIGH,
    sides=Sides.ONE_SIDED,
    message="This appears to be a presentation document.",
    tips=[
        "Color printing recommended for presentations",
        "High quality ensures graphics are clear",
        "One-sided printing helps with readability",
    ],
)

IMAGE = Recommendation(
    color_mode=ColorMode.COLOR,
    quality=Quality.HIGH,
    message="This appears to be an image file.",
    tips=[
        "Color printing recommended for images",
        "High quality ensures details are preserved",
        "Consider the right paper size for your image proportions",
    ],
)

STANDARD_DOCUMENT = Recommendation(
    color_mode=ColorMode.BLACK_AND_WHITE,
    quality=Quality.STANDARD,
    sides=Sides.TWO_SIDED_LONG_EDGE,
    message="This appears to be a standard document.",
    tips=[
        "Two-sided printing to save paper",
        "Black & White mode (this document likely has minimal color)",
        "Standard quality is sufficient for text documents",
    ],
)

UNKNOWN_DOCUMENT = Recommendation(
    color_mode=ColorMode.BLACK_AND_WHITE,
    quality=Quality.STANDARD,
    sides=Sides.TWO_SIDED_LONG_EDGE,
    message="We couldn't analyze your document. These are our default eco-friendly recommendations.",
    tips=[
        "Using black & white saves on color ink",
        "Two-sided printing reduces paper usage",
        "Standard quality is sufficient for most documents",
    ],
)


def recommend(file_type: str) -> Recommendation:
    """
    Recommend settings for a file type or file name.

    Accepts either an extension ("pptx") or a whole name
    ("presentation.pptx"); matching is a case-insensitive substring test.
    """
    file_type = (file_type or "").lower()

    if "ppt" in file_type:
        return PRESENTATION
    if any(ext in file_type for ext in IMAGE_TYPES):
        return IMAGE
    return STANDARD_DOCUMENT


def recommend_for_document(document: Optional[Document]) -> Recommendation:
    """Recommendation for a stored document, or the eco default if it is unknown."""
    if document is None:
        return UNKNOWN_DOCUMENT
    return recommend(document.file_type)
