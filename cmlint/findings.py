"""
Findings and gating.

A Finding is one hazard at one source occurrence.
Pipeline: dedup → order
"""
from dataclasses import dataclass, field
from typing import List

from .config import SEVERITY
from .tree import Node


@dataclass(frozen=True)
class Finding:
    detector_id: str
    message: str
    source: str
    line: int
    column: int
    severity: str = SEVERITY
    node: Node | None = field(default=None, compare=False, repr=False)

    @property
    def location(self) -> str:
        return f"{self.source}:{self.line}:{self.column}"


def _dedup(findings: List[Finding]) -> List[Finding]:
    # Same detector, same node: keep the first
    seen: set[tuple] = set()
    unique = []
    for f in findings:
        key = (f.detector_id, id(f.node) if f.node is not None else f.location)
        if key in seen:
            continue
        seen.add(key)
        unique.append(f)
    return unique


def _order(findings: List[Finding]) -> List[Finding]:
    # sorted() is stable: ties keep traversal order
    return sorted(
        findings,
        key=lambda f: (f.source, f.line, f.column, f.detector_id),
    )


def gate_findings(findings: List[Finding]) -> List[Finding]:
    deduped = _dedup(findings)
    ordered = _order(deduped)
    return ordered
