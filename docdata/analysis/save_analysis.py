"""Analysis source backed by rustc save-analysis JSON dumps."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from ..errors import AnalysisLoadError, DefinitionUnavailable
from ..logging import get_logger
from ..models import AnalysisId, DefKind, Definition
from .base import AnalysisSource

SAVE_ANALYSIS_DIR = Path("deps") / "save-analysis"

_LOCAL_KRATE = 0
CRATE_ROOT_QUALNAME = "::"

# Save-analysis distinguishes a few kinds that collapse onto the same DefKind.
_KIND_ALIASES: Dict[str, DefKind] = {
    "TupleVariant": DefKind.TUPLE,
    "StructVariant": DefKind.STRUCT,
    "ForeignFunction": DefKind.FUNCTION,
    "ForeignStatic": DefKind.STATIC,
    "ExternType": DefKind.TYPE,
}


def save_analysis_dir(root: Path, target_dir: str = "target/rls", profile: str = "debug") -> Path:
    """Return where cargo writes save-analysis files for the crate at ``root``."""
    return root / target_dir / profile / SAVE_ANALYSIS_DIR


def parse_kind(raw: str) -> DefKind:
    if raw in _KIND_ALIASES:
        return _KIND_ALIASES[raw]
    try:
        return DefKind(raw)
    except ValueError:
        raise AnalysisLoadError(f"Unknown definition kind: {raw!r}") from None


class SaveAnalysisSource(AnalysisSource):
    """Loads one or more save-analysis files into a queryable definition graph."""

    def __init__(self, files: Sequence[Path]) -> None:
        self._files = [Path(path) for path in files]
        self._defs: Dict[AnalysisId, Definition] = {}
        self._children: Dict[AnalysisId, List[AnalysisId]] = {}
        self._roots: List[Tuple[AnalysisId, str]] = []
        self.logger = get_logger("analysis")
        self.reload()

    @classmethod
    def from_directory(cls, directory: Path) -> "SaveAnalysisSource":
        directory = Path(directory)
        if not directory.is_dir():
            raise AnalysisLoadError(f"Save-analysis directory not found: {directory}")
        return cls(sorted(directory.glob("*.json")))

    @classmethod
    def from_files(cls, files: Sequence[Path]) -> "SaveAnalysisSource":
        return cls(files)

    @property
    def files(self) -> List[Path]:
        return list(self._files)

    def reload(self) -> None:
        """Re-read every file, replacing the current graph."""
        defs: Dict[AnalysisId, Definition] = {}
        children: Dict[AnalysisId, List[AnalysisId]] = {}
        roots: List[Tuple[AnalysisId, str]] = []
        for path in self._files:
            payload = self._read(path)
            self._lower(path, payload, defs, children, roots)
        self._defs = defs
        self._children = children
        self._roots = roots
        self.logger.debug(
            "Loaded %d definitions across %d crate(s)", len(defs), len(roots)
        )

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

    # ------------------------------------------------------------------
    # Internal helpers

    def _iter_children(self, child_ids: List[AnalysisId]) -> Iterator[Definition]:
        for child_id in child_ids:
            yield self.get_definition(child_id)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise AnalysisLoadError(f"Failed to read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise AnalysisLoadError(f"Failed to parse {path.name}: {exc}") from exc
        if not isinstance(data, dict):
            raise AnalysisLoadError(f"{path.name} must contain a JSON object")
        return data

    def _lower(
        self,
        path: Path,
        payload: Mapping[str, Any],
        defs: Dict[AnalysisId, Definition],
        children: Dict[AnalysisId, List[AnalysisId]],
        roots: List[Tuple[AnalysisId, str]],
    ) -> None:
        crate_name = _crate_name(path, payload)
        raw_defs = payload.get("defs") or []
        if not isinstance(raw_defs, list):
            raise AnalysisLoadError(f"{path.name}: 'defs' must be a list")

        for raw in raw_defs:
            if not isinstance(raw, dict):
                raise AnalysisLoadError(f"{path.name}: definition entries must be objects")
            def_id = _local_id(path, crate_name, raw.get("id"))
            if def_id is None:
                continue
            kind = parse_kind(str(raw.get("kind", "")))
            raw_qualname = str(raw.get("qualname") or "")
            definition = Definition(
                id=def_id,
                kind=kind,
                name=str(raw.get("name") or ""),
                # rustc emits crate-relative qualnames ("::a"); prefix the crate name.
                qualname=f"{crate_name}{raw_qualname}",
                docs=str(raw.get("docs") or ""),
            )
            defs[def_id] = definition
            child_ids: List[AnalysisId] = []
            for raw_child in raw.get("children") or []:
                child_id = _local_id(path, crate_name, raw_child)
                if child_id is not None:
                    child_ids.append(child_id)
            children[def_id] = child_ids
            # Module items are also dumped without a parent; only the crate root is "::".
            if kind is DefKind.MOD and raw_qualname == CRATE_ROOT_QUALNAME:
                roots.append((def_id, crate_name))


def _crate_name(path: Path, payload: Mapping[str, Any]) -> str:
    prelude = payload.get("prelude")
    if not isinstance(prelude, dict):
        raise AnalysisLoadError(f"{path.name}: missing 'prelude' section")
    crate_id = prelude.get("crate_id")
    name = crate_id.get("name") if isinstance(crate_id, dict) else None
    if not isinstance(name, str) or not name:
        raise AnalysisLoadError(f"{path.name}: prelude does not name a crate")
    return name


def _local_id(path: Path, crate_name: str, raw: Any) -> AnalysisId | None:
    if not isinstance(raw, dict):
        raise AnalysisLoadError(f"{path.name}: malformed definition id {raw!r}")
    krate = raw.get("krate")
    index = raw.get("index")
    if not isinstance(krate, int) or not isinstance(index, int):
        raise AnalysisLoadError(f"{path.name}: malformed definition id {raw!r}")
    if krate != _LOCAL_KRATE:
        return None
    return AnalysisId(krate=crate_name, index=index)


__all__ = ["SAVE_ANALYSIS_DIR", "SaveAnalysisSource", "parse_kind", "save_analysis_dir"]
