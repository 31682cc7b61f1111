"""Configuration loading for docdata (.docdata.yml)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .cargo import DEFAULT_TARGET_DIR
from .errors import DocDataError

CONFIG_FILE_NAME = ".docdata.yml"

ARTIFACT_JSON = "json"
ARTIFACT_ASSETS = "assets"
KNOWN_ARTIFACTS = (ARTIFACT_JSON, ARTIFACT_ASSETS)


class ConfigError(DocDataError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalysisConfig:
    """How save-analysis data is produced and located."""

    cargo: str = "cargo"
    target_dir: str = DEFAULT_TARGET_DIR
    profile: str = "debug"
    skip_build: bool = False


@dataclass
class DocDataConfig:
    """Represents the settings defined in .docdata.yml."""

    root: Path
    crate: Optional[str] = None
    artifacts: List[str] = field(default_factory=lambda: list(KNOWN_ARTIFACTS))
    output_dir: str = "target/doc"
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    @property
    def output_path(self) -> Path:
        return self.root / self.output_dir


def load_config(config_path: Path) -> DocDataConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocDataConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    config = DocDataConfig(root=root, crate=_as_str(data.get("crate")))

    if "artifacts" in data:
        config.artifacts = validate_artifacts(_as_str_list(data.get("artifacts")))

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = output_dir

    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        analysis = config.analysis
        analysis.cargo = _as_str(analysis_data.get("cargo")) or analysis.cargo
        analysis.target_dir = _as_str(analysis_data.get("target_dir")) or analysis.target_dir
        analysis.profile = _as_str(analysis_data.get("profile")) or analysis.profile
        skip_build = _as_bool(analysis_data.get("skip_build"))
        if skip_build is not None:
            analysis.skip_build = skip_build

    return config


def validate_artifacts(artifacts: Sequence[str]) -> List[str]:
    """Normalise artifact names, rejecting unknown ones."""
    normalised = [item.strip().lower() for item in artifacts if item.strip()]
    if not normalised:
        raise ConfigError(f"No artifacts requested; choose from {', '.join(KNOWN_ARTIFACTS)}")
    unknown = sorted(set(normalised) - set(KNOWN_ARTIFACTS))
    if unknown:
        raise ConfigError(f"Unknown artifacts requested: {', '.join(unknown)}")
    return normalised


def crate_name_from_manifest(root: Path) -> Optional[str]:
    """Return the library crate name declared in ``Cargo.toml``, if any."""
    manifest = root / "Cargo.toml"
    if not manifest.exists():
        return None
    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {manifest.name}: {exc}") from exc

    lib = _as_dict(data.get("lib"))
    package = _as_dict(data.get("package"))
    name = _as_str(lib.get("name")) or _as_str(package.get("name"))
    if not name:
        return None
    # Cargo exposes hyphenated package names as underscored crate names.
    return name.replace("-", "_")


def resolve_crate_name(config: DocDataConfig, override: Optional[str] = None) -> str:
    """Pick the crate to document: explicit override, then config, then Cargo.toml."""
    name = override or config.crate or crate_name_from_manifest(config.root)
    if not name:
        raise ConfigError(
            f"No crate name given; pass --crate, set 'crate' in {CONFIG_FILE_NAME}, "
            "or add a Cargo.toml with a [package] name"
        )
    return name


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    if config_path.name != CONFIG_FILE_NAME:
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in (item.strip() for item in value.split(",")) if part]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ARTIFACT_ASSETS",
    "ARTIFACT_JSON",
    "AnalysisConfig",
    "CONFIG_FILE_NAME",
    "ConfigError",
    "DocDataConfig",
    "KNOWN_ARTIFACTS",
    "crate_name_from_manifest",
    "load_config",
    "resolve_crate_name",
    "validate_artifacts",
]
