"""
Print settings vocabulary.

The string values are the ones exchanged with the web client
(e.g. "Black & White", "Two-sided (long edge)"), so enum members are
serialized with ``.value``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Type, TypeVar

from core.exceptions import ValidationError


E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: Type[E], value: Any, field: str) -> E:
    """
    Resolve a client-supplied string to an enum member.

    Matches the member value or name, case-insensitively.

    Raises:
        ValidationError: If the value is not one of the allowed choices
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        needle = value.strip().lower()
        for member in enum_cls:
            if needle in (member.value.lower(), member.name.lower()):
                return member
    allowed = ", ".join(member.value for member in enum_cls)
    raise ValidationError(f"Invalid {field}: {value!r}. Allowed: {allowed}", field=field)


class ColorMode(Enum):
    COLOR = "Color"
    BLACK_AND_WHITE = "Black & White"


class Quality(Enum):
    STANDARD = "Standard"
    HIGH = "High"
    DRAFT = "Draft"


class Sides(Enum):
    ONE_SIDED = "One-sided"
    TWO_SIDED_LONG_EDGE = "Two-sided (long edge)"
    TWO_SIDED_SHORT_EDGE = "Two-sided (short edge)"

    @property
    def is_duplex(self) -> bool:
        return self is not Sides.ONE_SIDED


class PaperSize(Enum):
    LETTER = "Letter"
    LEGAL = "Legal"
    A4 = "A4"


class Orientation(Enum):
    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"


class TokenType(Enum):
    """
    Print-priority tier.

    Normal tokens are free and queued; priority tokens carry a flat fee
    and are served first.
    """

    NORMAL = "normal"
    PRIORITY = "priority"


@dataclass
class PrintSettings:
    """User's print choices for one document."""

    color_mode: ColorMode = ColorMode.BLACK_AND_WHITE
    paper_size: PaperSize = PaperSize.A4
    copies: int = 1
    orientation: Orientation = Orientation.PORTRAIT
    sides: Sides = Sides.ONE_SIDED
    quality: Quality = Quality.STANDARD

    @property
    def duplex(self) -> bool:
        return self.sides.is_duplex

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colorMode": self.color_mode.value,
            "paperSize": self.paper_size.value,
            "copies": self.copies,
            "orientation": self.orientation.value,
            "sides": self.sides.value,
            "quality": self.quality.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrintSettings":
        """
        Build settings from a request payload.

        Missing keys fall back to defaults; present keys must be valid.
        Accepts camelCase or snake_case keys.

        Raises:
            ValidationError: On an unknown choice or non-integer copies
        """
        def pick(camel: str, snake: str, default: Any) -> Any:
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        copies = pick("copies", "copies", 1)
        try:
            copies = int(copies)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid copies: {copies!r}", field="copies")

        return cls(
            color_mode=parse_choice(ColorMode, pick("colorMode", "color_mode", ColorMode.BLACK_AND_WHITE), "colorMode"),
            paper_size=parse_choice(PaperSize, pick("paperSize", "paper_size", PaperSize.A4), "paperSize"),
            copies=copies,
            orientation=parse_choice(Orientation, pick("orientation", "orientation", Orientation.PORTRAIT), "orientation"),
            sides=parse_choice(Sides, pick("sides", "sides", Sides.ONE_SIDED), "sides"),
            quality=parse_choice(Quality, pick("quality", "quality", Quality.STANDARD), "quality"),
        )
