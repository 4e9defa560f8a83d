"""Pydantic models for pagination discovery results."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaginationLink(BaseModel):
    """A numbered link found inside the pagination container."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(description="Page number parsed from the link label")
    href: str = Field(description="Absolute link URL")
    position: int = Field(description="Index of the anchor in document order")
    query_params: Optional[Dict[str, str]] = Field(
        default=None,
        description="Query string with lower-cased keys, None if the URL is unparseable"
    )


class PaginationResult(BaseModel):
    """Combined output of a pagination discovery pass."""

    links: List[str] = Field(default_factory=list, description="Unique same-origin result links")
    pages: List[PaginationLink] = Field(default_factory=list, description="Numbered pagination links")

    def to_payload(self) -> Dict[str, list]:
        """Convert to a JSON-ready dict for the event log."""
        return {
            'links': list(self.links),
            'pages': [link.model_dump() for link in self.pages],
        }
