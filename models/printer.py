"""
Printer data models.

Printer is a physical print location. PrinterLocation is the read-only
projection returned by a nearby search, carrying the distance from the
requesting user.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass
class Printer:
    """A print shop / printer location."""

    name: str
    address: str
    latitude: float
    longitude: float
    is_open: bool = True
    features: Dict[str, Any] = field(default_factory=dict)
    """Capability flags, e.g. {"color": True, "duplex": True, "maxSize": "A3"}."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "isOpen": self.is_open,
            "features": dict(self.features),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class PrinterLocation:
    """A printer as seen from a user's position."""

    id: int
    name: str
    address: str
    distance: float
    """Kilometres from the user, rounded to 1 decimal."""

    is_open: bool
    latitude: float
    longitude: float
    features: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_printer(cls, printer: Printer, distance: float) -> "PrinterLocation":
        return cls(
            id=printer.id,
            name=printer.name,
            address=printer.address,
            distance=distance,
            is_open=printer.is_open,
            latitude=printer.latitude,
            longitude=printer.longitude,
            features=dict(printer.features),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "distance": self.distance,
            "isOpen": self.is_open,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "features": dict(self.features),
        }
