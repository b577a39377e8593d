"""Remediation — find replacement modules and emit a copy script.

The script is only ever written, never run. Every step gets a comment line
naming the required and the present version. When a module with the same
name and exactly the required version exists anywhere in the scanned set,
an active copy line follows; otherwise the copy line is commented out with
a ``_from_repository_`` placeholder source and the step is unrecoverable.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

from asmcheck.engines.assembly_checker.models import (
    ExitStatus,
    ModuleFile,
    OutdatedReport,
    ReconcileResult,
    RemediationStep,
    same_name,
)
from asmcheck.engines.assembly_checker.versions import AssemblyVersion

PLACEHOLDER_SOURCE = "_from_repository_"


@dataclass(frozen=True)
class ScriptDialect:
    name: str
    file_name: str
    comment: str
    copy: str

    def quote(self, path: str) -> str:
        if self.name == "sh":
            return shlex.quote(path)
        return f'"{path}"'


DIALECTS: dict[str, ScriptDialect] = {
    "bat": ScriptDialect(name="bat", file_name="fix.bat", comment="rem", copy="copy"),
    "sh": ScriptDialect(name="sh", file_name="fix.sh", comment="#", copy="cp"),
}


def find_replacement(
    modules: list[ModuleFile],
    name: str,
    version: AssemblyVersion,
) -> ModuleFile | None:
    """First scanned module called *name* with exactly *version*, in any directory."""
    for module in modules:
        if same_name(module.name, name) and module.version == version:
            return module
    return None


def plan_remediation(
    outdated: list[OutdatedReport],
    modules: list[ModuleFile],
) -> list[RemediationStep]:
    steps: list[RemediationStep] = []
    for report in outdated:
        for requirer in report.requirers:
            steps.append(
                RemediationStep(
                    target=report,
                    requirer=requirer,
                    replacement=find_replacement(modules, report.name, requirer.version),
                )
            )
    return steps


def exit_status(result: ReconcileResult, steps: list[RemediationStep]) -> ExitStatus:
    """Unrecoverable beats recoverable beats cross-references."""
    status = ExitStatus.OK
    if result.cross_references:
        status = ExitStatus.CROSS_REFERENCE
    if result.outdated:
        status = ExitStatus.RECOVERABLE
    if any(not step.recoverable for step in steps):
        status = ExitStatus.UNRECOVERABLE
    return status


def render_script(steps: list[RemediationStep], dialect: ScriptDialect) -> str:
    lines: list[str] = []
    for step in steps:
        target = dialect.quote(str(step.target.module_path))
        lines.append(f"{dialect.comment} v.{step.requirer.version} => {step.target.version}")
        if step.replacement is not None:
            source = dialect.quote(str(step.replacement.path))
            lines.append(f"{dialect.copy} {source} {target}")
        else:
            lines.append(f"{dialect.comment} {dialect.copy} {PLACEHOLDER_SOURCE} {target}")
    return "\n".join(lines) + "\n" if lines else ""


def write_script(
    steps: list[RemediationStep],
    dialect: ScriptDialect,
    script_path: Path | None = None,
) -> Path | None:
    """Write (overwrite) the script; returns its path, or None when there is nothing to fix."""
    if not steps:
        return None
    target = script_path or Path.cwd() / dialect.file_name
    target.write_text(render_script(steps, dialect), encoding="utf-8")
    return target
