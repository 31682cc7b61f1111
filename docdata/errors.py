"""Exception hierarchy for docdata runs."""

from __future__ import annotations

from .models import AnalysisId


class DocDataError(RuntimeError):
    """Base class for every fatal docdata failure."""


class CrateNotFound(DocDataError):
    """Raised when no registered root matches the requested crate name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Crate not found: "{name}"')
        self.name = name


class DefinitionUnavailable(DocDataError):
    """Raised when an analysis id is stale or absent from the database."""

    def __init__(self, id: AnalysisId) -> None:
        super().__init__(f"Definition unavailable: {id}")
        self.id = id


class MalformedRootName(DefinitionUnavailable):
    """Raised when a crate root's qualified name does not end with the path separator."""

    def __init__(self, id: AnalysisId, qualname: str) -> None:
        DocDataError.__init__(
            self, f"Crate root {id} has a malformed qualified name: {qualname!r}"
        )
        self.id = id
        self.qualname = qualname


class BuildError(DocDataError):
    """Raised when the JSON:API resource graph cannot be assembled."""


class SerializationError(DocDataError):
    """Raised when the resource graph cannot be encoded as JSON."""


class AnalysisLoadError(DocDataError):
    """Raised when save-analysis data cannot be read or understood."""


class AnalysisGenerationError(DocDataError):
    """Raised when the upstream cargo build fails."""


__all__ = [
    "AnalysisGenerationError",
    "AnalysisLoadError",
    "BuildError",
    "CrateNotFound",
    "DefinitionUnavailable",
    "DocDataError",
    "MalformedRootName",
    "SerializationError",
]
