from collabdocs.db.models.document import Document, DocumentShare, SharePermission
from collabdocs.db.models.version import DocumentVersion
from collabdocs.db.models.template import DocumentTemplate

__all__ = [
    "Document",
    "DocumentShare",
    "SharePermission",
    "DocumentVersion",
    "DocumentTemplate"
]
