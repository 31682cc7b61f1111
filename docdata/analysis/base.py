"""Base contract for analysis database backends."""

from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from ..errors import CrateNotFound
from ..models import AnalysisId, Definition


class AnalysisSource(ABC):
    """Read-only view over a definition graph produced by an external build."""

    @abstractmethod
    def roots(self) -> List[Tuple[AnalysisId, str]]:
        """Return the registered crate roots as ``(id, crate name)`` pairs."""

    @abstractmethod
    def get_definition(self, id: AnalysisId) -> Definition:
        """Return the definition for ``id`` or raise DefinitionUnavailable."""

    @abstractmethod
    def for_each_child(self, id: AnalysisId) -> Iterator[Definition]:
        """Yield the direct children of ``id`` once, in source order."""

    def resolve_root(self, crate_name: str) -> AnalysisId:
        """Return the root id whose registered name equals ``crate_name`` exactly."""
        for root_id, name in self.roots():
            if name == crate_name:
                return root_id
        raise CrateNotFound(crate_name)
