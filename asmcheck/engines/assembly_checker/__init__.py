"""Assembly checker engine — reconcile required and present module versions."""

from asmcheck.engines.assembly_checker.checker import check
from asmcheck.engines.assembly_checker.models import (
    CheckOutcome,
    ExitStatus,
    ModuleFile,
    ReconcileResult,
    Requirement,
)
from asmcheck.engines.assembly_checker.reconciler import Reconciler
from asmcheck.engines.assembly_checker.versions import AssemblyVersion

__all__ = [
    "AssemblyVersion",
    "CheckOutcome",
    "ExitStatus",
    "ModuleFile",
    "ReconcileResult",
    "Reconciler",
    "Requirement",
    "check",
]
