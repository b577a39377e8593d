"""Reconciler — match version requirements against the modules present on disk."""

from __future__ import annotations

from pathlib import Path

import structlog

from asmcheck.engines.assembly_checker.grouping import DirectoryGroup, group_by_directory
from asmcheck.engines.assembly_checker.models import (
    ConfigRequirement,
    CrossReferenceReport,
    ModuleFile,
    OutdatedReport,
    ReconcileResult,
    Requirement,
    same_name,
)
from asmcheck.engines.assembly_checker.versions import AssemblyVersion

log = structlog.get_logger("asmcheck.reconcile")


class Reconciler:
    """Build the outdated-module and cross-reference reports for a module set.

    Binary requirements are only ever compared within one directory. Config
    requirements arrive already paired with the module they name and go
    through the same merge step, so a module outdated for both reasons gets
    a single report row listing every requirer.
    """

    def __init__(self, cross_check: bool = False, verbose: bool = False) -> None:
        self._cross_check = cross_check
        self._verbose = verbose

    def reconcile(
        self,
        modules: list[ModuleFile],
        config_requirements: list[ConfigRequirement] | None = None,
    ) -> ReconcileResult:
        outdated: dict[Path, OutdatedReport] = {}
        cross_references: list[CrossReferenceReport] = []

        for item in config_requirements or []:
            self._compare(outdated, item.module_path, item.actual_version, item.requirement)

        for group in group_by_directory(modules):
            if self._verbose:
                log.debug(
                    "reconcile.directory",
                    directory=str(group.directory),
                    modules=len(group.modules),
                )
            self._check_requirements(group, outdated)
            if self._cross_check:
                cross_references.extend(self._check_cross_references(group))

        return ReconcileResult(
            outdated=list(outdated.values()),
            cross_references=cross_references,
        )

    # ── same-directory requirements ─────────────────────────────────────

    def _check_requirements(
        self,
        group: DirectoryGroup,
        outdated: dict[Path, OutdatedReport],
    ) -> None:
        for module in group.modules:
            for requirement in module.references:
                candidates = [m for m in group.modules if same_name(m.name, requirement.name)]
                if not candidates:
                    # Referenced module lives outside the scanned folder
                    continue
                if len(candidates) > 1:
                    log.warning(
                        "reconcile.duplicate_name",
                        directory=str(group.directory),
                        name=requirement.name,
                        paths=[str(c.path) for c in candidates],
                    )
                found = candidates[0]
                self._compare(outdated, found.path, found.version, requirement)

    @staticmethod
    def _compare(
        outdated: dict[Path, OutdatedReport],
        module_path: Path,
        actual: AssemblyVersion,
        requirement: Requirement,
    ) -> None:
        """Record *requirement* against *module_path* if *actual* is too old."""
        if not actual < requirement.version:
            return
        report = outdated.get(module_path)
        if report is None:
            report = outdated[module_path] = OutdatedReport(
                module_path=module_path, version=actual
            )
        report.requirers.append(requirement)

    # ── cross-references ────────────────────────────────────────────────

    @staticmethod
    def _check_cross_references(group: DirectoryGroup) -> list[CrossReferenceReport]:
        reports: list[CrossReferenceReport] = []
        for target in group.modules:
            report = CrossReferenceReport(module_path=target.path)
            for sibling in group.modules:
                if same_name(sibling.name, target.name):
                    continue
                for requirement in sibling.references:
                    if same_name(requirement.name, target.name):
                        report.versions.setdefault(requirement.version, sibling.name)
            if len(report.versions) > 1:
                reports.append(report)
        return reports
