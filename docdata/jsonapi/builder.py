"""Turns a DocumentModel into a JSON:API resource graph."""

from __future__ import annotations

from typing import Dict, List

from ..analysis.base import AnalysisSource
from ..errors import BuildError, DefinitionUnavailable
from ..logging import get_logger
from ..extractor import crate_name_for
from ..models import DocumentModel, ModuleEntry
from .document import JsonApiDocument, Relationship, Resource

CRATE_TYPE = "crate"


class DocumentBuilder:
    """Builds the crate resource, its relationships and the included resources."""

    def __init__(self) -> None:
        self.logger = get_logger("jsonapi")

    def build(self, model: DocumentModel, source: AnalysisSource) -> JsonApiDocument:
        # Docs are read from the source again so a reload between stages is honoured.
        try:
            root_def = source.get_definition(model.crate.id)
            crate_id = crate_name_for(root_def)
        except DefinitionUnavailable as exc:
            raise BuildError(f"Cannot render crate {model.crate.name}: {exc}") from exc

        relationships: Dict[str, Relationship] = {
            ModuleEntry.relationship: Relationship(data=[]),
        }
        included: List[Resource] = []

        for qualname, entry in model.symbols.items():
            resource = Resource(
                type=entry.resource_type,
                id=qualname,
                attributes=entry.attributes(),
            )
            relationship = relationships.setdefault(entry.relationship, Relationship(data=[]))
            relationship.data.append(resource.identifier())
            included.append(resource)

        crate = Resource(
            type=CRATE_TYPE,
            id=crate_id,
            attributes={"docs": root_def.docs},
            relationships=relationships,
        )
        self.logger.debug(
            "Built crate resource %s with %d included resource(s)", crate.id, len(included)
        )
        return JsonApiDocument(data=crate, included=included)


__all__ = ["CRATE_TYPE", "DocumentBuilder"]
