"""
Orchestrator

Glue layer. Walks each tree, runs every enabled detector on every node,
turns matches into Findings.
No detection logic here.
"""
import logging
from pathlib import Path
from typing import Iterable, List

from .config import AnalysisConfig
from .context import AnalysisContext
from .detectors import DETECTORS
from .explanation import message_for
from .findings import Finding, gate_findings
from .loader import load_file
from .tree import walk

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnalysisConfig()


def analyze_tree(context: AnalysisContext, config: AnalysisConfig = _DEFAULT_CONFIG) -> List[Finding]:
    """
    Run the detectors over one compilation unit.

    Pure: the same context and config always give the same, identically
    ordered findings.
    """
    detectors = [info for name, info in DETECTORS.items() if config.is_enabled(name)]

    findings = []
    for node in walk(context.root):
        for info in detectors:
            if not info.detect(node, context):
                continue
            findings.append(Finding(
                detector_id=info.name,
                message=message_for(info.name),
                source=context.source,
                line=node.line,
                column=node.column,
                node=node,
            ))

    logger.debug("%s: %d finding(s)", context.source, len(findings))
    return gate_findings(findings)


def _is_skipped(relative: Path) -> bool:
    # Skip hidden, venv, cache
    return any(p.startswith(".") or p == "venv" or p == "__pycache__" for p in relative.parts)


def collect_inputs(paths: Iterable[Path]) -> List[Path]:
    """
    Expand paths into the serialized trees to analyze.

    Files are taken as given; directories are searched for *.json.
    Raises ValueError for paths that do not exist.
    """
    inputs = []
    for path in paths:
        path = Path(path)
        if not path.exists():
            raise ValueError(f"Path does not exist: {path}")

        if path.is_file():
            inputs.append(path)
            continue

        for file_path in sorted(path.rglob("*.json")):
            if not _is_skipped(file_path.relative_to(path)):
                inputs.append(file_path)

    return inputs


def analyze_paths(paths: Iterable[Path], config: AnalysisConfig = _DEFAULT_CONFIG) -> List[Finding]:
    """
    Analyze every serialized tree under paths.

    Raises TreeFormatError (a ValueError) on the first unreadable input.
    """
    all_findings = []

    for file_path in collect_inputs(paths):
        logger.debug("Analyzing %s", file_path)
        context = load_file(file_path)
        all_findings.extend(analyze_tree(context, config))

    return gate_findings(all_findings)
