from collabdocs.domains.versions.entities import DocumentVersion
from collabdocs.domains.versions.schemas import (
    VersionCreate, VersionResponse, VersionHistoryResponse,
    ContributionsResponse, VersionDiffResponse
)

__all__ = [
    "DocumentVersion",
    "VersionCreate", "VersionResponse", "VersionHistoryResponse",
    "ContributionsResponse", "VersionDiffResponse"
]
