"""Version facts of a binary module, read best-effort in three tiers."""

from __future__ import annotations

from pathlib import Path

import structlog

from asmcheck.engines.assembly_checker.metadata import MetadataReader
from asmcheck.engines.assembly_checker.models import (
    LIBRARY_EXTENSION,
    ExtractionResult,
    ExtractionTier,
    ModuleFile,
    Requirement,
    RequirementSource,
)

log = structlog.get_logger("asmcheck.extract")


def extract_module(
    path: Path,
    reader: MetadataReader,
    verbose: bool = False,
) -> ExtractionResult:
    """Read *path* with *reader*, falling back from full metadata to identity to unknown.

    Never raises for unreadable files: a module that cannot be read at all is
    still returned, with version 0.0 and no references.
    """
    try:
        version, refs = reader.read_metadata(path)
    except Exception as exc:
        if verbose:
            log.debug("extract.metadata_failed", path=str(path), exc_info=True)
        error = str(exc) or type(exc).__name__
    else:
        references = tuple(
            Requirement(
                name=name + LIBRARY_EXTENSION,
                version=ref_version,
                origin=path,
                source=RequirementSource.ASSEMBLY,
            )
            for name, ref_version in refs
        )
        return ExtractionResult(
            module=ModuleFile(path=path, version=version, references=references),
            tier=ExtractionTier.FULL,
        )

    try:
        version = reader.read_identity(path)
    except Exception as exc:
        if verbose:
            log.debug("extract.identity_failed", path=str(path), exc_info=True)
        error = str(exc) or type(exc).__name__
    else:
        return ExtractionResult(
            module=ModuleFile(path=path, version=version),
            tier=ExtractionTier.IDENTITY,
            error=error,
        )

    return ExtractionResult(
        module=ModuleFile(path=path),
        tier=ExtractionTier.UNKNOWN,
        error=error,
    )
