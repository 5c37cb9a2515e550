"""
Receiver equivalence.

Two receivers denote the same object reference when:
1. They resolve to the identical symbol, AND
2. Their source text matches once a leading "this." is dropped from each

Symbol identity alone cannot tell list from other.list when both resolve to
the same field declaration; the textual check rejects that pair. It is a
best-effort filter and can misjudge deep field chains or shadowed names.
"""
from typing import Optional

from .config import SELF_QUALIFIER
from .context import AnalysisContext
from .tree import Node


def receiver_of(node: Node, context: AnalysisContext) -> Optional[Node]:
    """Object expression node is invoked against; None for unqualified calls."""
    return context.receiver_of(node)


def _strip_prefix(text: str, prefix: str) -> str:
    return text[len(prefix):] if text.startswith(prefix) else text


def canonical_text(node: Node, context: AnalysisContext) -> str:
    return _strip_prefix(context.source_text(node), SELF_QUALIFIER)


def same_receiver(left: Optional[Node], right: Optional[Node], context: AnalysisContext) -> bool:
    """
    Check if two receiver expressions denote the same object.

    Missing receivers and unresolved symbols never match.
    """
    if left is None or right is None:
        return False

    left_symbol = context.resolve_symbol(left)
    right_symbol = context.resolve_symbol(right)
    if left_symbol is None or left_symbol is not right_symbol:
        return False

    return canonical_text(left, context) == canonical_text(right, context)
