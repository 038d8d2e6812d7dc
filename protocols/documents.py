"""Document lookup protocol for cross-app communication."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class DocumentInfo:
    """What Kycman needs to know about a stored document."""

    document_id: str
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@runtime_checkable
class DocumentBackend(Protocol):
    """
    Protocol for the document store.

    Used by the disclaimer service to check that a disclaimer's backing
    document exists before the disclaimer is created.

    Configuration in settings.py:
        KYCMAN = {
            "DOCUMENT_BACKEND": "myproject.documents.StorageDocumentBackend",
        }
    """

    def get_document(self, document_id: str) -> DocumentInfo | None:
        """
        Look up a document by id.

        Returns None when the document does not exist. Soft-deleted documents
        are returned with deleted_at set.
        """
        ...
