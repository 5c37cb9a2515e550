"""
Configuration.

Fixed type names and method-name tables are process-wide constants.
Per-run choices (which detectors are switched off) live in AnalysisConfig.
"""
from dataclasses import dataclass
from typing import FrozenSet, Iterable

# Type families
COLLECTION       = "java.util.Collection"
BASE_STREAM      = "java.util.stream.BaseStream"
EXECUTOR_SERVICE = "java.util.concurrent.ExecutorService"
THREAD           = "java.lang.Thread"
EVENT_QUEUE      = "java.awt.EventQueue"

# Anything declared in (or under) this namespace is safe for concurrent mutation
CONCURRENT_NAMESPACE = "java.util.concurrent"

# Strip before comparing receivers textually
SELF_QUALIFIER = "this."

SEVERITY = "warning"


@dataclass(frozen=True)
class AnalysisConfig:
    """Per-run settings. The default runs every detector."""
    disabled: FrozenSet[str] = frozenset()

    def is_enabled(self, detector_name: str) -> bool:
        return detector_name not in self.disabled


def build_config(disabled: Iterable[str] = ()) -> AnalysisConfig:
    """
    Build an AnalysisConfig, validating detector names.

    Raises ValueError for names that match no detector.
    """
    from .detectors import DETECTORS

    names = frozenset(disabled)
    unknown = sorted(names - set(DETECTORS))
    if unknown:
        known = ", ".join(sorted(DETECTORS))
        raise ValueError(f"Unknown detector(s): {', '.join(unknown)} (known: {known})")

    return AnalysisConfig(disabled=names)
