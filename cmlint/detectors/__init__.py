"""
Concurrency Hazard Detector Interfaces

Detectors are pure functions that answer: "Is this node a hazard?"

Design principles:
- Return bool only (no tri-state, no UNKNOWN)
- Stateless (everything comes from the node and the AnalysisContext)
- Imperfect detection is acceptable
- No severity or message text (see findings / explanation)

Ambiguity handling:
- If uncertain → return False
- Exception: an unresolved collection type counts as NOT concurrent-safe
"""
from dataclasses import dataclass
from typing import Callable, Dict

from ..context import AnalysisContext
from ..tree import Node

# Detector type signature
# Pure function: (node, context) -> bool
Detector = Callable[[Node, AnalysisContext], bool]


@dataclass(frozen=True)
class DetectorInfo:
    name: str
    summary: str
    detect: Detector


# Import all detector functions
from . import foreach_mutation, static_parallel, unsynchronized
from .foreach_mutation import modifies_collection_in_for_each
from .static_parallel import parallel_lambda_in_static_block
from .unsynchronized import modifies_collection_unsynchronized

DETECTORS: Dict[str, DetectorInfo] = {
    module.NAME: DetectorInfo(module.NAME, module.SUMMARY, detect)
    for module, detect in (
        (foreach_mutation, modifies_collection_in_for_each),
        (unsynchronized, modifies_collection_unsynchronized),
        (static_parallel, parallel_lambda_in_static_block),
    )
}

__all__ = [
    'DETECTORS',
    'Detector',
    'DetectorInfo',
    'modifies_collection_in_for_each',
    'modifies_collection_unsynchronized',
    'parallel_lambda_in_static_block',
]
