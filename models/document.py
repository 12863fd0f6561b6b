"""
Document data model.

A Document is an uploaded file owned by exactly one user. Its page count
is an estimate derived from file size and type (see
modules/document_analyzer.py). When the file is a readable PDF the real
page count is kept separately in ``counted_pages``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass
class Document:
    """An uploaded file."""

    user_id: int
    name: str
    file_path: str
    file_type: str
    """Lowercase extension without the dot (e.g. 'pdf', 'pptx')."""

    estimated_pages: int
    """Heuristic page estimate. This is what pricing uses."""

    file_size_bytes: int = 0
    counted_pages: Optional[int] = None
    """Pages actually counted in the file (PDF only); informational."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    last_printed: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "filePath": self.file_path,
            "fileType": self.file_type,
            "fileSizeBytes": self.file_size_bytes,
            "estimatedPages": self.estimated_pages,
            "countedPages": self.counted_pages,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "lastPrinted": self.last_printed.isoformat() if self.last_printed else None,
        }
