"""Processing reporting utilities."""
from __future__ import annotations

from .models import ProcessingResult

_ACTION_DESCRIPTIONS = {
    "unchanged": "No reference markers found; content left unchanged.",
    "stripped-references": "No reference list marker; in-text reference markers removed.",
    "stripped-reference-list": "No references cited; reference list marker removed.",
    "rendered": "In-text citations and reference list rendered.",
}


def render_report(result: ProcessingResult) -> str:
    """Return a human-readable summary of one processing run."""

    scan = result.scan
    lines = ["Bibliography Processing Report"]
    lines.append(f"Reference markers detected: {len(scan.references)}")
    lines.append(f"Distinct references: {len(scan.distinct_keys())}")
    if scan.reference_list is None:
        lines.append("Reference list: absent")
    else:
        declared = scan.reference_list.style_name or "default"
        lines.append(f"Reference list: present (style: {declared})")
    if scan.extra_reference_lists:
        lines.append(f"Additional reference lists removed: {len(scan.extra_reference_lists)}")
    if result.style_name:
        lines.append(f"Style applied: {result.style_name}")
    lines.append(_ACTION_DESCRIPTIONS.get(result.action, result.action))
    keys = scan.distinct_keys()
    if keys:
        lines.append("References:")
        lines.extend(f"- {key}" for key in keys)
    return "\n".join(lines)
