"""Fact extractors — binary metadata and config redirects."""

from asmcheck.engines.assembly_checker.extractors.app_config import (
    extract_config_requirements,
)
from asmcheck.engines.assembly_checker.extractors.binary import extract_module

__all__ = ["extract_config_requirements", "extract_module"]
