"""Core data models shared across docdata components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List

PATH_SEPARATOR = "::"


@dataclass(frozen=True)
class AnalysisId:
    """Opaque identifier handed out by an analysis source."""

    krate: str
    index: int

    def __str__(self) -> str:
        return f"{self.krate}#{self.index}"


class DefKind(str, Enum):
    """Definition kinds recognized in an analysis database."""

    MOD = "Mod"
    STATIC = "Static"
    CONST = "Const"
    ENUM = "Enum"
    STRUCT = "Struct"
    UNION = "Union"
    TRAIT = "Trait"
    FUNCTION = "Function"
    MACRO = "Macro"
    TUPLE = "Tuple"
    METHOD = "Method"
    TYPE = "Type"
    LOCAL = "Local"
    FIELD = "Field"


@dataclass(frozen=True)
class Definition:
    """A single definition as reported by an analysis source."""

    id: AnalysisId
    kind: DefKind
    name: str
    qualname: str
    docs: str = ""


@dataclass
class CrateSummary:
    """Top-level facts about the documented crate."""

    id: AnalysisId
    name: str
    docs: str
    module_refs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ModuleEntry:
    """Symbol table entry for a module definition."""

    resource_type: ClassVar[str] = "module"
    relationship: ClassVar[str] = "modules"

    name: str
    docs: str

    @classmethod
    def from_definition(cls, definition: Definition) -> "ModuleEntry":
        return cls(name=definition.name, docs=definition.docs)

    def attributes(self) -> Dict[str, str]:
        return {"name": self.name, "docs": self.docs}


SymbolEntry = ModuleEntry
SymbolTable = Dict[str, SymbolEntry]


@dataclass
class DocumentModel:
    """Output of extraction: the crate summary plus its symbol table."""

    crate: CrateSummary
    symbols: SymbolTable = field(default_factory=dict)


def strip_trailing_path_separator(qualname: str) -> str:
    """Return the crate name for a root qualified name (``example::`` -> ``example``)."""
    if len(qualname) < len(PATH_SEPARATOR) or not qualname.endswith(PATH_SEPARATOR):
        raise ValueError(f"Root qualified name must end with '{PATH_SEPARATOR}': {qualname!r}")
    return qualname[: -len(PATH_SEPARATOR)]


__all__ = [
    "AnalysisId",
    "CrateSummary",
    "DefKind",
    "Definition",
    "DocumentModel",
    "ModuleEntry",
    "PATH_SEPARATOR",
    "SymbolEntry",
    "SymbolTable",
    "strip_trailing_path_separator",
]
