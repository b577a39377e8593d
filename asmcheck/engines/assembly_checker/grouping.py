"""Partition modules into directory-scoped working sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from asmcheck.engines.assembly_checker.models import ModuleFile


@dataclass
class DirectoryGroup:
    directory: Path
    modules: list[ModuleFile] = field(default_factory=list)


def group_by_directory(modules: list[ModuleFile]) -> list[DirectoryGroup]:
    """Group *modules* by parent directory.

    Groups are ordered by the first module seen in each directory; modules
    keep their input order within a group.
    """
    groups: dict[Path, DirectoryGroup] = {}
    for module in modules:
        group = groups.get(module.directory)
        if group is None:
            group = groups[module.directory] = DirectoryGroup(directory=module.directory)
        group.modules.append(module)
    return list(groups.values())
