"""Dictionary-backed analysis source."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import DefinitionUnavailable
from ..models import AnalysisId, DefKind, Definition
from .base import AnalysisSource


class InMemoryAnalysisSource(AnalysisSource):
    """Holds a definition graph built programmatically."""

    def __init__(self) -> None:
        self._defs: Dict[AnalysisId, Definition] = {}
        self._children: Dict[AnalysisId, List[AnalysisId]] = {}
        self._roots: List[Tuple[AnalysisId, str]] = []
        self._next_index: Dict[str, int] = {}

    def add_root(self, crate_name: str, *, docs: str = "", qualname: str | None = None) -> AnalysisId:
        """Register a crate root; its qualified name defaults to ``<crate_name>::``."""
        root = self.add_definition(
            crate_name,
            DefKind.MOD,
            crate_name,
            qualname if qualname is not None else f"{crate_name}::",
            docs=docs,
        )
        self._roots.append((root, crate_name))
        return root

    def add_definition(
        self,
        krate: str,
        kind: DefKind,
        name: str,
        qualname: str,
        *,
        docs: str = "",
        parent: Optional[AnalysisId] = None,
    ) -> AnalysisId:
        index = self._next_index.get(krate, 0)
        self._next_index[krate] = index + 1
        def_id = AnalysisId(krate=krate, index=index)
        self._defs[def_id] = Definition(
            id=def_id, kind=kind, name=name, qualname=qualname, docs=docs
        )
        self._children.setdefault(def_id, [])
        if parent is not None:
            self._children.setdefault(parent, []).append(def_id)
        return def_id

    def add_child(
        self,
        parent: AnalysisId,
        kind: DefKind,
        name: str,
        qualname: str,
        *,
        docs: str = "",
    ) -> AnalysisId:
        return self.add_definition(parent.krate, kind, name, qualname, docs=docs, parent=parent)

    def set_docs(self, id: AnalysisId, docs: str) -> None:
        """Replace the docs of an existing definition."""
        current = self.get_definition(id)
        self._defs[id] = Definition(
            id=current.id,
            kind=current.kind,
            name=current.name,
            qualname=current.qualname,
            docs=docs,
        )

    def remove(self, id: AnalysisId) -> None:
        self._defs.pop(id, None)

    def roots(self) -> List[Tuple[AnalysisId, str]]:
        return list(self._roots)

    def get_definition(self, id: AnalysisId) -> Definition:
        try:
            return self._defs[id]
        except KeyError:
            raise DefinitionUnavailable(id) from None

    def for_each_child(self, id: AnalysisId) -> Iterator[Definition]:
        if id not in self._defs:
            raise DefinitionUnavailable(id)
        return self._iter_children(list(self._children.get(id, [])))

    def _iter_children(self, child_ids: Iterable[AnalysisId]) -> Iterator[Definition]:
        for child_id in child_ids:
            yield self.get_definition(child_id)


__all__ = ["InMemoryAnalysisSource"]
