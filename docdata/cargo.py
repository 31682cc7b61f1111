"""Upstream cargo build that produces save-analysis data."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping

from .errors import AnalysisGenerationError
from .logging import get_logger

DEFAULT_TARGET_DIR = "target/rls"
SAVE_ANALYSIS_RUSTFLAGS = "-Z save-analysis"


@dataclass
class CommandResult:
    """Outcome of a finished subprocess."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


class AnalysisGenerator:
    """Runs ``cargo build`` with save-analysis enabled for a crate."""

    def __init__(
        self,
        *,
        cargo: str = "cargo",
        target_dir: str = DEFAULT_TARGET_DIR,
        runner: Callable[..., CommandResult] | None = None,
    ) -> None:
        self.cargo = cargo
        self.target_dir = target_dir
        self._runner = runner or self._default_runner
        self.logger = get_logger("cargo")

    def command(self, root: Path) -> list[str]:
        return [
            self.cargo,
            "build",
            "--manifest-path",
            str(root / "Cargo.toml"),
        ]

    def environment(self, root: Path, base: Mapping[str, str] | None = None) -> dict[str, str]:
        env = dict(os.environ if base is None else base)
        env["RUSTFLAGS"] = SAVE_ANALYSIS_RUSTFLAGS
        env["CARGO_TARGET_DIR"] = str(root / self.target_dir)
        return env

    def generate(self, root: Path) -> Path:
        """Build the crate at ``root`` and return the cargo target directory."""
        root = Path(root)
        args = self.command(root)
        self.logger.info("Generating save-analysis data for %s", root)
        try:
            result = self._runner(args, cwd=root, env=self.environment(root))
        except FileNotFoundError as exc:
            raise AnalysisGenerationError(f"Cargo executable not found: {self.cargo}") from exc
        if result.returncode != 0:
            raise AnalysisGenerationError(
                f"Cargo failed with status {result.returncode}. stderr:\n{result.stderr}"
            )
        self.logger.debug("Cargo finished for %s", root)
        return root / self.target_dir

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=False,
            text=True,
            capture_output=True,
        )
        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


__all__ = ["AnalysisGenerator", "CommandResult", "DEFAULT_TARGET_DIR", "SAVE_ANALYSIS_RUSTFLAGS"]
