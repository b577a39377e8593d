"""asmcheck: version-consistency checker for .NET assembly folders."""

__version__ = "0.1.0"

from asmcheck.core.config import CheckerConfig
from asmcheck.engines.assembly_checker import (
    AssemblyVersion,
    CheckOutcome,
    ExitStatus,
    ModuleFile,
    check,
)

__all__ = [
    "AssemblyVersion",
    "CheckOutcome",
    "CheckerConfig",
    "ExitStatus",
    "ModuleFile",
    "check",
]
