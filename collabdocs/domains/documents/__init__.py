from collabdocs.domains.documents.entities import Document
from collabdocs.domains.documents.schemas import (
    DocumentBase, DocumentCreate, DocumentUpdate, DocumentResponse,
    DocumentListResponse, DocumentPermissionResponse
)

__all__ = [
    "Document",
    "DocumentBase", "DocumentCreate", "DocumentUpdate", "DocumentResponse",
    "DocumentListResponse", "DocumentPermissionResponse"
]
