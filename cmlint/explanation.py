"""
Explanation Layer

Translate Findings to human-readable text.
One line per finding: where, severity, which detector, what is wrong.
"""
import json
from typing import Dict, List

from .detectors import DETECTORS
from .findings import Finding


def message_for(detector_name: str) -> str:
    return f"[{detector_name}] {DETECTORS[detector_name].summary}"


def render_text(finding: Finding) -> str:
    return f"{finding.location}: {finding.severity}: {finding.message}"


def _as_dict(finding: Finding) -> Dict[str, object]:
    return {
        "detector": finding.detector_id,
        "severity": finding.severity,
        "source":   finding.source,
        "line":     finding.line,
        "column":   finding.column,
        "message":  finding.message,
    }


def render_json(findings: List[Finding]) -> str:
    return json.dumps([_as_dict(f) for f in findings], indent=2)
