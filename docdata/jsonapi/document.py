"""JSON:API document types."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResourceIdentifier(BaseModel):
    """A ``{type, id}`` pair pointing at a resource."""

    type: str
    id: str


class Relationship(BaseModel):
    """Relationship object whose data is a list of resource identifiers."""

    data: List[ResourceIdentifier] = Field(default_factory=list)
    links: Optional[Dict[str, str]] = None


class Resource(BaseModel):
    """A typed JSON:API resource object."""

    type: str
    id: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relationships: Optional[Dict[str, Relationship]] = None
    links: Optional[Dict[str, str]] = None
    meta: Optional[Dict[str, Any]] = None

    def identifier(self) -> ResourceIdentifier:
        return ResourceIdentifier(type=self.type, id=self.id)


class JsonApiDocument(BaseModel):
    """Top-level document: one primary resource plus the included side-table."""

    data: Optional[Resource] = None
    included: List[Resource] = Field(default_factory=list)
    meta: Optional[Dict[str, Any]] = None


__all__ = ["JsonApiDocument", "Relationship", "Resource", "ResourceIdentifier"]
