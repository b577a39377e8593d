"""File discovery — walk the root folder and collect config and binary files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn

from asmcheck.exceptions import EnumerationError

CONFIG_EXTENSIONS = (".config",)
BINARY_EXTENSIONS = (".exe", ".dll")


@dataclass
class DiscoveredFiles:
    configs: list[Path] = field(default_factory=list)
    binaries: list[Path] = field(default_factory=list)


def _raise(err: OSError) -> NoReturn:
    raise EnumerationError(str(err.filename or ""), err.strerror or str(err)) from err


def discover_files(root: Path, recursive: bool = False) -> DiscoveredFiles:
    """Walk *root* and sort matching files into configs and binaries.

    Entries are visited in name order, each directory before its
    subdirectories. Raises :class:`EnumerationError` when the walk fails.
    """
    if not root.is_dir():
        raise EnumerationError(str(root), "not a directory")

    found = DiscoveredFiles()
    try:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames.sort()
            for name in sorted(filenames):
                file_path = Path(dirpath) / name
                if not file_path.is_file():
                    continue
                ext = file_path.suffix.lower()
                if ext in CONFIG_EXTENSIONS:
                    found.configs.append(file_path)
                elif ext in BINARY_EXTENSIONS:
                    found.binaries.append(file_path)
            if not recursive:
                break
    except OSError as err:
        _raise(err)
    return found
