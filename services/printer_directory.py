"""
Printer directory: print locations and distance-ranked search.

Distances are recomputed for every query; nothing is cached between
requests. Closed printers are still returned. Whether a closed printer may
be selected is up to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.exceptions import NotFoundError, ValidationError
from models.printer import Printer, PrinterLocation
from modules.geo import haversine_km
from services.storage import Storage
from logging_config import get_logger


logger = get_logger(__name__)

SAMPLE_PRINTERS = [
    Printer(
        name="PrintShop Downtown",
        address="123 Main St, Suite 101",
        latitude=12.9716,
        longitude=77.5946,
        is_open=True,
        features={"color": True, "duplex": True, "maxSize": "A3", "speed": 40, "largeFormat": True},
    ),
    Printer(
        name="Office Supplies Plus",
        address="456 Market Ave",
        latitude=12.9766,
        longitude=77.5993,
        is_open=True,
        features={"color": True, "duplex": True, "maxSize": "A4", "speed": 30, "binding": True},
    ),
    Printer(
        name="University Print Center",
        address="789 College Blvd",
        latitude=12.9656,
        longitude=77.5876,
        is_open=False,
        features={"color": True, "duplex": False, "maxSize": "A4", "speed": 25, "scanning": True, "lamination": True},
    ),
]


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise ValidationError unless latitude is in [-90, 90] and longitude in [-180, 180]."""
    if not -90.0 <= latitude <= 90.0:
        raise ValidationError(f"Latitude out of range: {latitude}", field="lat")
    if not -180.0 <= longitude <= 180.0:
        raise ValidationError(f"Longitude out of range: {longitude}", field="lng")


class PrinterDirectory:
    """Read-mostly registry of printers, with admin updates."""

    def __init__(self, storage: Storage):
        self._storage = storage

    def seed_sample_printers(self) -> List[Printer]:
        """Register the demo printers (only into an empty directory)."""
        if self._storage.list_printers():
            return []
        created = [self._storage.add_printer(p) for p in SAMPLE_PRINTERS]
        logger.info(f"Seeded {len(created)} sample printers")
        return created

    def list_all(self) -> List[Printer]:
        return self._storage.list_printers()

    def get(self, printer_id: int) -> Printer:
        printer = self._storage.get_printer(printer_id)
        if printer is None:
            raise NotFoundError("Printer", printer_id)
        return printer

    def find_nearby(self, latitude: float, longitude: float, radius_km: float) -> List[PrinterLocation]:
        """
        Printers within radius_km of a point, nearest first.

        The radius is checked against the exact distance. Only the reported
        distance is rounded to one decimal.
        """
        matches = []
        for printer in self._storage.list_printers():
            distance = haversine_km(latitude, longitude, printer.latitude, printer.longitude)
            if distance <= radius_km:
                matches.append((distance, printer))

        matches.sort(key=lambda match: (match[0], match[1].id))
        results = [PrinterLocation.from_printer(printer, round(distance, 1)) for distance, printer in matches]
        logger.debug(
            f"Nearby search ({latitude:.4f}, {longitude:.4f}) r={radius_km}km: {len(results)} printer(s)"
        )
        return results

    def create(
        self,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
        is_open: bool = True,
        features: Optional[Dict[str, Any]] = None,
    ) -> Printer:
        if not name:
            raise ValidationError("Printer name required", field="name")
        if not address:
            raise ValidationError("Printer address required", field="address")
        validate_coordinates(latitude, longitude)

        printer = self._storage.add_printer(Printer(
            name=name,
            address=address,
            latitude=latitude,
            longitude=longitude,
            is_open=is_open,
            features=dict(features or {}),
        ))
        logger.info(f"Printer {printer.id} '{printer.name}' registered")
        return printer

    def set_open(self, printer_id: int, is_open: bool) -> Printer:
        with self._storage.transaction():
            printer = self.get(printer_id)
            printer.is_open = is_open
            printer = self._storage.save_printer(printer)
        logger.info(f"Printer {printer_id} is now {'open' if is_open else 'closed'}")
        return printer
