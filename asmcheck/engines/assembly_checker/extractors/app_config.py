"""Parser for .NET application config files (``bindingRedirect`` entries)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

from asmcheck.engines.assembly_checker.metadata import MetadataReader
from asmcheck.engines.assembly_checker.models import (
    LIBRARY_EXTENSION,
    ConfigRequirement,
    Requirement,
    RequirementSource,
)
from asmcheck.engines.assembly_checker.versions import AssemblyVersion
from asmcheck.exceptions import InvalidVersionError

log = structlog.get_logger("asmcheck.extract")


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` part of an element tag."""
    return tag.split("}")[-1] if "}" in tag else tag


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if isinstance(child.tag, str) and _local(child.tag) == name:
            return child
    return None


def _redirect(node: ET.Element) -> tuple[str, AssemblyVersion] | None:
    """(name, newVersion) of one ``dependentAssembly`` node, or None if incomplete."""
    identity = _child(node, "assemblyIdentity")
    if identity is None:
        return None
    name = identity.get("name")
    if not name:
        return None

    binding = _child(node, "bindingRedirect")
    if binding is None:
        return None
    new_version = binding.get("newVersion")
    if new_version is None:
        return None
    try:
        return name, AssemblyVersion.parse(new_version)
    except InvalidVersionError:
        return None


def extract_config_requirements(
    path: Path,
    reader: MetadataReader,
    verbose: bool = False,
) -> list[ConfigRequirement]:
    """Collect the binding redirects of *path* whose module sits beside it.

    Files that are not XML are skipped silently; so are redirects without a
    name or a valid ``newVersion``, and redirects whose module cannot be read.
    """
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError):
        if verbose:
            log.debug("config.not_xml", path=str(path))
        return []

    results: list[ConfigRequirement] = []
    for node in root.iter():
        if not isinstance(node.tag, str) or _local(node.tag) != "dependentAssembly":
            continue

        redirect = _redirect(node)
        if redirect is None:
            continue
        name, expected = redirect

        module_path = path.parent / (name + LIBRARY_EXTENSION)
        try:
            actual = reader.read_identity(module_path)
        except Exception:
            # No such module beside the config, or it cannot be opened
            if verbose:
                log.debug(
                    "config.module_unreadable",
                    config=str(path),
                    module=str(module_path),
                    exc_info=True,
                )
            continue

        results.append(
            ConfigRequirement(
                module_path=module_path,
                requirement=Requirement(
                    name=module_path.name,
                    version=expected,
                    origin=path,
                    source=RequirementSource.CONFIG,
                ),
                actual_version=actual,
            )
        )

    return results
