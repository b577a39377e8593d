"""Run configuration for a single check."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Remediation script dialects
SCRIPT_FORMATS = ("bat", "sh")


def default_script_format() -> str:
    """``bat`` on Windows, ``sh`` everywhere else."""
    return "bat" if os.name == "nt" else "sh"


@dataclass(frozen=True)
class CheckerConfig:
    """Options for one checker run, passed explicitly down the pipeline."""

    root: Path
    recursive: bool = False
    cross_check: bool = False
    verbose: bool = False
    script_path: Path | None = None  # None → dialect default name in cwd
    script_format: str = ""  # "" → default_script_format()

    def __post_init__(self) -> None:
        fmt = self.script_format or default_script_format()
        if fmt not in SCRIPT_FORMATS:
            raise ValueError(f"unknown script format: {fmt!r}")
        object.__setattr__(self, "script_format", fmt)
