"""
Document records.

Only the metadata lives here. Saving and removing the uploaded file is
done by the upload route.
"""

from __future__ import annotations

from typing import List, Optional

from core.exceptions import ConflictError, NotFoundError, ValidationError
from models.document import Document
from services.storage import Storage
from logging_config import get_logger


logger = get_logger(__name__)


class DocumentService:
    def __init__(self, storage: Storage):
        self._storage = storage

    def record(
        self,
        user_id: int,
        name: str,
        file_path: str,
        file_type: str,
        estimated_pages: int,
        file_size_bytes: int = 0,
        counted_pages: Optional[int] = None,
    ) -> Document:
        if self._storage.get_user(user_id) is None:
            raise NotFoundError("User", user_id)
        if estimated_pages < 1:
            raise ValidationError("A document has at least one page", field="estimatedPages")

        document = self._storage.add_document(Document(
            user_id=user_id,
            name=name,
            file_path=file_path,
            file_type=file_type,
            estimated_pages=estimated_pages,
            file_size_bytes=file_size_bytes,
            counted_pages=counted_pages,
        ))
        logger.info(
            f"Document {document.id} '{name}' recorded for user {user_id} "
            f"(~{estimated_pages} page(s))"
        )
        return document

    def get(self, document_id: int) -> Document:
        document = self._storage.get_document(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    def list_by_user(self, user_id: int) -> List[Document]:
        return self._storage.list_documents(user_id=user_id)

    def delete(self, document_id: int, user_id: int) -> Document:
        """
        Remove a document owned by user_id.

        Raises:
            NotFoundError: Unknown document
            ValidationError: Requested by someone other than the owner
            ConflictError: A print job for it is still in the queue
        """
        with self._storage.transaction():
            document = self.get(document_id)
            if document.user_id != user_id:
                raise ValidationError("Document does not belong to this user", field="userId")
            active = [
                job.id for job in self._storage.list_jobs(user_id=user_id)
                if job.document_id == document_id and job.status.is_active
            ]
            if active:
                raise ConflictError("Document has print jobs in progress", {"jobs": active})
            self._storage.delete_document(document_id)

        logger.info(f"Document {document_id} deleted by user {user_id}")
        return document
