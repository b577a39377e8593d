"""Four-part assembly versions (``major.minor[.build[.revision]]``)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from asmcheck.exceptions import InvalidVersionError

_COMPONENT_RE = re.compile(r"[0-9]+")
_MAX_COMPONENT = 2**31 - 1


@dataclass(frozen=True, order=True)
class AssemblyVersion:
    """An assembly version.

    ``build`` and ``revision`` are ``-1`` when absent, so an absent component
    orders below ``0`` and ``1.0`` != ``1.0.0``. Ordering is lexicographic
    by component.
    """

    major: int
    minor: int
    build: int = -1
    revision: int = -1

    @classmethod
    def parse(cls, text: str) -> AssemblyVersion:
        parts = text.strip().split(".")
        if not 2 <= len(parts) <= 4:
            raise InvalidVersionError(text)

        numbers: list[int] = []
        for part in parts:
            part = part.strip()
            if not _COMPONENT_RE.fullmatch(part):
                raise InvalidVersionError(text)
            value = int(part)
            if value > _MAX_COMPONENT:
                raise InvalidVersionError(text)
            numbers.append(value)

        return cls(*numbers)

    @classmethod
    def from_fields(cls, major: int, minor: int, build: int, revision: int) -> AssemblyVersion:
        """Build from four metadata fields, all of which are always present."""
        return cls(int(major), int(minor), int(build), int(revision))

    def __str__(self) -> str:
        parts = [self.major, self.minor]
        if self.build >= 0:
            parts.append(self.build)
            if self.revision >= 0:
                parts.append(self.revision)
        return ".".join(str(p) for p in parts)


ZERO_VERSION = AssemblyVersion(0, 0)
