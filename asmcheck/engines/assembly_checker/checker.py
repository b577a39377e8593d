"""Checker pipeline — discover, extract, reconcile, plan remediation."""

from __future__ import annotations

import structlog

from asmcheck.core.config import CheckerConfig
from asmcheck.engines.assembly_checker.discovery import discover_files
from asmcheck.engines.assembly_checker.extractors import (
    extract_config_requirements,
    extract_module,
)
from asmcheck.engines.assembly_checker.metadata import MetadataReader, PeMetadataReader
from asmcheck.engines.assembly_checker.models import (
    CheckOutcome,
    ConfigRequirement,
    ExtractionTier,
    ModuleFile,
)
from asmcheck.engines.assembly_checker.reconciler import Reconciler
from asmcheck.engines.assembly_checker.remediation import (
    DIALECTS,
    exit_status,
    plan_remediation,
    write_script,
)

log = structlog.get_logger("asmcheck.engine")


def check(
    config: CheckerConfig,
    reader: MetadataReader | None = None,
    write: bool = True,
) -> CheckOutcome:
    """Run one full check of ``config.root``.

    Raises :class:`~asmcheck.exceptions.EnumerationError` if the file search
    fails; every other problem ends up in the returned outcome. With
    ``write=False`` the remediation script is planned but not written; a
    script that cannot be written is logged and leaves ``script_path`` unset.
    """
    if reader is None:
        reader = PeMetadataReader()

    files = discover_files(config.root, recursive=config.recursive)
    log.debug(
        "discovery.done",
        root=str(config.root),
        configs=len(files.configs),
        binaries=len(files.binaries),
    )

    config_requirements: list[ConfigRequirement] = []
    for config_path in files.configs:
        config_requirements.extend(
            extract_config_requirements(config_path, reader, verbose=config.verbose)
        )

    modules: list[ModuleFile] = []
    for binary_path in files.binaries:
        extracted = extract_module(binary_path, reader, verbose=config.verbose)
        if config.verbose and extracted.tier is not ExtractionTier.FULL:
            log.debug(
                "extract.degraded",
                path=str(binary_path),
                tier=extracted.tier.value,
                error=extracted.error,
            )
        modules.append(extracted.module)

    result = Reconciler(cross_check=config.cross_check, verbose=config.verbose).reconcile(
        modules, config_requirements
    )
    steps = plan_remediation(result.outdated, modules)

    outcome = CheckOutcome(
        modules=modules,
        result=result,
        steps=steps,
        status=exit_status(result, steps),
    )
    if write:
        try:
            outcome.script_path = write_script(
                steps, DIALECTS[config.script_format], config.script_path
            )
        except OSError:
            log.error(
                "remediation.script_write_failed",
                path=str(config.script_path) if config.script_path else None,
                exc_info=True,
            )
    return outcome
