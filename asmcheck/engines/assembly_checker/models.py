"""Data models for the assembly checker engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from asmcheck.engines.assembly_checker.versions import ZERO_VERSION, AssemblyVersion

# Referenced assemblies and config redirections name modules without extension
LIBRARY_EXTENSION = ".dll"


def same_name(a: str, b: str) -> bool:
    """Assembly / file names compare case-insensitively."""
    return a.casefold() == b.casefold()


class ExitStatus(enum.IntEnum):
    OK = 0
    MISSING_ROOT = 1
    FILE_SEARCH_ERROR = 2
    CROSS_REFERENCE = 3
    RECOVERABLE = 4
    UNRECOVERABLE = 5


class RequirementSource(str, enum.Enum):
    ASSEMBLY = "assembly"  # AssemblyRef row of a binary
    CONFIG = "config"  # bindingRedirect of a .config file


@dataclass(frozen=True)
class Requirement:
    """A required module version, from a binary reference or a config redirect."""

    name: str  # module file name, e.g. "lib.dll"
    version: AssemblyVersion
    origin: Path  # requiring module or config file
    source: RequirementSource = RequirementSource.ASSEMBLY

    @property
    def origin_name(self) -> str:
        return self.origin.name


@dataclass(frozen=True)
class ModuleFile:
    """A discovered binary with its own version and its references."""

    path: Path
    version: AssemblyVersion = ZERO_VERSION
    references: tuple[Requirement, ...] = ()

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def directory(self) -> Path:
        return self.path.parent


@dataclass(frozen=True)
class ConfigRequirement:
    """A config redirection paired with the on-disk version of its module."""

    module_path: Path
    requirement: Requirement
    actual_version: AssemblyVersion


class ExtractionTier(str, enum.Enum):
    FULL = "full"  # version + references
    IDENTITY = "identity"  # version only
    UNKNOWN = "unknown"  # nothing readable, version 0.0


@dataclass
class ExtractionResult:
    module: ModuleFile
    tier: ExtractionTier
    error: str | None = None


@dataclass
class OutdatedReport:
    """A module whose version is below what one or more requirers ask for."""

    module_path: Path
    version: AssemblyVersion
    requirers: list[Requirement] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.module_path.name

    @property
    def directory(self) -> Path:
        return self.module_path.parent


@dataclass
class CrossReferenceReport:
    """Siblings disagreeing on the version of one module: version → requirer name."""

    module_path: Path
    versions: dict[AssemblyVersion, str] = field(default_factory=dict)


@dataclass
class ReconcileResult:
    outdated: list[OutdatedReport] = field(default_factory=list)
    cross_references: list[CrossReferenceReport] = field(default_factory=list)


@dataclass
class RemediationStep:
    """One requirer of an outdated module and the replacement found for it, if any."""

    target: OutdatedReport
    requirer: Requirement
    replacement: ModuleFile | None = None

    @property
    def recoverable(self) -> bool:
        return self.replacement is not None


@dataclass
class CheckOutcome:
    """Everything a single checker run produced."""

    modules: list[ModuleFile]
    result: ReconcileResult
    steps: list[RemediationStep]
    status: ExitStatus
    script_path: Path | None = None  # set when a script was written
