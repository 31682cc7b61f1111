"""JSON:API rendering of the documentation model."""

from __future__ import annotations

from .builder import CRATE_TYPE, DocumentBuilder
from .document import JsonApiDocument, Relationship, Resource, ResourceIdentifier
from .serializer import serialize_document

__all__ = [
    "CRATE_TYPE",
    "DocumentBuilder",
    "JsonApiDocument",
    "Relationship",
    "Resource",
    "ResourceIdentifier",
    "serialize_document",
]
