from collabdocs.domains.sharing.entities import Permission, DocumentShare, DocumentAccess
from collabdocs.domains.sharing.schemas import ShareCreate, ShareUpdate, ShareResponse, ShareListResponse

__all__ = [
    "Permission", "DocumentShare", "DocumentAccess",
    "ShareCreate", "ShareUpdate", "ShareResponse", "ShareListResponse"
]
