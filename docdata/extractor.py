"""Walks an analysis source and builds the in-memory documentation model."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from .analysis.base import AnalysisSource
from .errors import MalformedRootName
from .logging import get_logger
from .models import (
    CrateSummary,
    DefKind,
    Definition,
    DocumentModel,
    ModuleEntry,
    SymbolEntry,
    SymbolTable,
    strip_trailing_path_separator,
)

EntryFactory = Callable[[Definition], SymbolEntry]


def crate_name_for(root_def: Definition) -> str:
    """Return the crate name of a root definition (``demo::`` -> ``demo``)."""
    try:
        return strip_trailing_path_separator(root_def.qualname)
    except ValueError as exc:
        raise MalformedRootName(root_def.id, root_def.qualname) from exc

# Kinds mapped to None are recognized but not documented yet.
DEFAULT_KIND_TABLE: Mapping[DefKind, Optional[EntryFactory]] = {
    DefKind.MOD: ModuleEntry.from_definition,
    DefKind.STATIC: None,
    DefKind.CONST: None,
    DefKind.ENUM: None,
    DefKind.STRUCT: None,
    DefKind.UNION: None,
    DefKind.TRAIT: None,
    DefKind.FUNCTION: None,
    DefKind.MACRO: None,
    DefKind.TUPLE: None,
    DefKind.METHOD: None,
    DefKind.TYPE: None,
    DefKind.LOCAL: None,
    DefKind.FIELD: None,
}


class SymbolExtractor:
    """Collects documentable children of a crate root into a DocumentModel."""

    def __init__(self, kind_table: Mapping[DefKind, Optional[EntryFactory]] | None = None) -> None:
        self._kind_table: Dict[DefKind, Optional[EntryFactory]] = dict(
            DEFAULT_KIND_TABLE if kind_table is None else kind_table
        )
        self.logger = get_logger("extractor")

    def extract(self, source: AnalysisSource, root_name: str) -> DocumentModel:
        """Resolve ``root_name`` and collect its direct children.

        Raises CrateNotFound when no root carries that exact name and
        MalformedRootName when the root's qualified name lacks the trailing
        separator. DefinitionUnavailable from the source propagates unchanged.
        """
        root_id = source.resolve_root(root_name)
        root_def = source.get_definition(root_id)
        crate = CrateSummary(
            id=root_id,
            name=crate_name_for(root_def),
            docs=root_def.docs,
        )
        self.logger.debug("Resolved crate root %s as %s", root_name, root_id)

        symbols: SymbolTable = {}
        for child in source.for_each_child(root_id):
            factory = self._kind_table.get(child.kind)
            if factory is None:
                self.logger.debug("Skipping %s %s", child.kind.value, child.qualname)
                continue
            entry = factory(child)
            symbols[child.qualname] = entry
            if isinstance(entry, ModuleEntry):
                crate.module_refs.append(child.qualname)

        self.logger.info(
            "Extracted %d documented symbol(s) from crate %s", len(symbols), crate.name
        )
        return DocumentModel(crate=crate, symbols=symbols)


__all__ = ["DEFAULT_KIND_TABLE", "EntryFactory", "SymbolExtractor", "crate_name_for"]
