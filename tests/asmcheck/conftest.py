"""Shared fixtures for asmcheck tests.

Real .NET images are not needed: test "binaries" are small JSON documents
read by :class:`JsonModuleReader`::

    {"version": "1.0.0.0", "references": {"lib": "2.0.0.0"}}

A file with ``version`` but no ``references`` only passes the identity read;
anything that is not JSON fails both reads, like a corrupt image.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from asmcheck.engines.assembly_checker.versions import AssemblyVersion
from asmcheck.exceptions import MetadataReadError


class JsonModuleReader:
    def __init__(self) -> None:
        self.metadata_calls: list[Path] = []
        self.identity_calls: list[Path] = []

    @staticmethod
    def _load(path: Path) -> dict:
        try:
            data = json.loads(path.read_text())
        except ValueError as e:
            raise MetadataReadError(f"{path}: {e}") from e
        if not isinstance(data, dict) or "version" not in data:
            raise MetadataReadError(f"{path}: no version")
        return data

    def read_metadata(self, path: Path):
        self.metadata_calls.append(path)
        data = self._load(path)
        if "references" not in data:
            raise MetadataReadError(f"{path}: no metadata tables")
        refs = [(name, AssemblyVersion.parse(v)) for name, v in data["references"].items()]
        return AssemblyVersion.parse(data["version"]), refs

    def read_identity(self, path: Path) -> AssemblyVersion:
        self.identity_calls.append(path)
        return AssemblyVersion.parse(self._load(path)["version"])


def write_module(
    path: Path,
    version: str,
    references: dict[str, str] | None = None,
) -> Path:
    """Write a fake assembly understood by :class:`JsonModuleReader`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict = {"version": version, "references": references or {}}
    path.write_text(json.dumps(data))
    return path


def write_config(path: Path, redirects: dict[str, str], namespace: bool = True) -> Path:
    """Write an app.config with one bindingRedirect per (name, newVersion)."""
    xmlns = ' xmlns="urn:schemas-microsoft-com:asm.v1"' if namespace else ""
    nodes = "".join(
        "<dependentAssembly>"
        f'<assemblyIdentity name="{name}" publicKeyToken="b77a5c561934e089" culture="neutral" />'
        f'<bindingRedirect oldVersion="0.0.0.0-{version}" newVersion="{version}" />'
        "</dependentAssembly>"
        for name, version in redirects.items()
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<configuration><runtime>"
        f"<assemblyBinding{xmlns}>{nodes}</assemblyBinding>"
        "</runtime></configuration>\n"
    )
    return path


@pytest.fixture
def reader() -> JsonModuleReader:
    return JsonModuleReader()


@pytest.fixture
def make_module():
    return write_module


@pytest.fixture
def make_config():
    return write_config
