from collabdocs.db.repositories.document_repository import DocumentRepository
from collabdocs.db.repositories.share_repository import DocumentShareRepository
from collabdocs.db.repositories.version_repository import DocumentVersionRepository
from collabdocs.db.repositories.template_repository import DocumentTemplateRepository

__all__ = [
    "DocumentRepository",
    "DocumentShareRepository",
    "DocumentVersionRepository",
    "DocumentTemplateRepository"
]
