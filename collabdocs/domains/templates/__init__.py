from collabdocs.domains.templates.entities import DocumentTemplate
from collabdocs.domains.templates.schemas import (
    TemplateBase, TemplateCreate, TemplateUpdate, TemplateResponse,
    TemplateListResponse, DocumentFromTemplateRequest
)

__all__ = [
    "DocumentTemplate",
    "TemplateBase", "TemplateCreate", "TemplateUpdate", "TemplateResponse",
    "TemplateListResponse", "DocumentFromTemplateRequest"
]
