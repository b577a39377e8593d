"""Binary metadata readers — CLR metadata tables via dnfile."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

import dnfile
import pefile

from asmcheck.engines.assembly_checker.versions import AssemblyVersion
from asmcheck.exceptions import MetadataReadError

_COM_DESCRIPTOR = pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_COM_DESCRIPTOR"]


@runtime_checkable
class MetadataReader(Protocol):
    """Interface that every binary metadata reader must satisfy."""

    def read_metadata(
        self, path: Path
    ) -> tuple[AssemblyVersion, list[tuple[str, AssemblyVersion]]]:
        """Return the module's own version and its (name, version) references."""
        ...

    def read_identity(self, path: Path) -> AssemblyVersion:
        """Return the module's own version only."""
        ...


def _row_version(row) -> AssemblyVersion:
    return AssemblyVersion.from_fields(
        row.MajorVersion, row.MinorVersion, row.BuildNumber, row.RevisionNumber
    )


def _assembly_version(pe: dnfile.dnPE, path: Path) -> AssemblyVersion:
    """Version of the image's ``Assembly`` manifest row."""
    net = getattr(pe, "net", None)
    if net is None or net.mdtables is None:
        raise MetadataReadError(f"{path} has no CLR metadata")
    assembly_table = net.mdtables.Assembly
    if assembly_table is None or not assembly_table.rows:
        raise MetadataReadError(f"{path} has no assembly manifest")
    return _row_version(assembly_table.rows[0])


class PeMetadataReader:
    """Reads .NET assemblies. Every call opens and closes its own image.

    Both reads report the assembly version of the manifest, never the Win32
    file version; native images fail both.
    """

    def read_metadata(
        self, path: Path
    ) -> tuple[AssemblyVersion, list[tuple[str, AssemblyVersion]]]:
        pe = dnfile.dnPE(str(path))
        try:
            version = _assembly_version(pe, path)

            references: list[tuple[str, AssemblyVersion]] = []
            ref_table = pe.net.mdtables.AssemblyRef
            if ref_table is not None:
                for row in ref_table.rows:
                    name = str(row.Name)
                    if name:
                        references.append((name, _row_version(row)))
            return version, references
        finally:
            pe.close()

    def read_identity(self, path: Path) -> AssemblyVersion:
        # CLR header only
        pe = dnfile.dnPE(str(path), fast_load=True)
        try:
            pe.parse_data_directories(directories=[_COM_DESCRIPTOR])
            return _assembly_version(pe, path)
        finally:
            pe.close()
