"""Console and JSON rendering of a checker run."""

from __future__ import annotations

import json
from pathlib import Path

from asmcheck.engines.assembly_checker.models import CheckOutcome


def render_text(outcome: CheckOutcome) -> str:
    lines: list[str] = []
    result = outcome.result

    for cross in result.cross_references:
        lines.append(f"{cross.module_path} cross-referenced by:")
        for version, requirer in cross.versions.items():
            lines.append(f"\tv.{version} expected by {requirer}")

    if result.outdated:
        lines.append("Assembly files reference check:")
        current_dir: Path | None = None
        for report in result.outdated:
            if report.directory != current_dir:
                current_dir = report.directory
                lines.append(f"{current_dir}:")
            lines.append(f"\t{report.name} v.{report.version} outdated")
            for requirer in report.requirers:
                lines.append(f"\t\tv.{requirer.version} expected by {requirer.origin_name}")

    if not lines:
        lines.append("No problems found.")
    elif outcome.script_path is not None:
        lines.append(f"Remediation script written to {outcome.script_path}")

    return "\n".join(lines)


def render_json(outcome: CheckOutcome) -> str:
    result = outcome.result
    doc = {
        "modules_scanned": len(outcome.modules),
        "outdated": [
            {
                "module": str(report.module_path),
                "version": str(report.version),
                "required_by": [
                    {
                        "origin": str(req.origin),
                        "source": req.source.value,
                        "version": str(req.version),
                    }
                    for req in report.requirers
                ],
            }
            for report in result.outdated
        ],
        "cross_references": [
            {
                "module": str(cross.module_path),
                "versions": {str(v): name for v, name in cross.versions.items()},
            }
            for cross in result.cross_references
        ],
        "remediation": [
            {
                "module": str(step.target.module_path),
                "required_version": str(step.requirer.version),
                "replacement": str(step.replacement.path) if step.replacement else None,
            }
            for step in outcome.steps
        ],
        "script": str(outcome.script_path) if outcome.script_path else None,
        "exit_status": int(outcome.status),
    }
    return json.dumps(doc, indent=2)
