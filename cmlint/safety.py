"""
Concurrency-safety classification.

A type is inherently safe for concurrent mutation when any type in its
closure is declared in the concurrent collections namespace. Used only as an
exclusion filter: a safe target is never reported.

Unknown types are NOT safe. Reporting on an unresolved receiver is
preferred to silently suppressing it.
"""
from typing import Optional

from .config import CONCURRENT_NAMESPACE
from .context import AnalysisContext
from .tree import Node
from .typesys import JType


def _in_concurrent_namespace(namespace: str) -> bool:
    return namespace == CONCURRENT_NAMESPACE or namespace.startswith(CONCURRENT_NAMESPACE + ".")


def is_inherently_concurrent_safe(jtype: Optional[JType], context: AnalysisContext) -> bool:
    return any(_in_concurrent_namespace(context.namespace_of(t)) for t in context.closure(jtype))


def mutation_target_is_safe(node: Node, context: AnalysisContext) -> bool:
    """
    Check if the collection a mutating call/reference acts on is safe.

    Looks at both the receiver's static type and the class declaring the
    resolved method; either being safe is enough.
    """
    receiver = context.receiver_of(node)
    if receiver is not None and is_inherently_concurrent_safe(context.type_of(receiver), context):
        return True

    method = context.resolve_symbol(node)
    if method is not None and is_inherently_concurrent_safe(method.owner, context):
        return True

    return False
