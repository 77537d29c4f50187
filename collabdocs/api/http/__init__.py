from collabdocs.api.http.health import router as health_router
from collabdocs.api.http.documents import router as documents_router
from collabdocs.api.http.versions import router as versions_router
from collabdocs.api.http.templates import router as templates_router

__all__ = [
    "health_router",
    "documents_router",
    "versions_router",
    "templates_router"
]
