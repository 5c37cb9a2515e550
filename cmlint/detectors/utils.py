"""
Shared call-shape tables for the concurrency detectors.

Process-wide constants built once at import. Each is a matcher:
(node, context) -> bool
"""
from ..config import BASE_STREAM, COLLECTION, EVENT_QUEUE, EXECUTOR_SERVICE, THREAD
from ..context import AnalysisContext
from ..matchers import any_of, constructor, instance_method, is_subtype_of, static_method
from ..tree import MemberReference, Node

# Structural mutations of a collection
STATE_MUTATION_METHOD_NAMES = ("add", "addAll", "clear", "remove", "removeAll", "retainAll")

MUTATION_METHOD_MATCHER = instance_method(
    on_descendant_of=COLLECTION,
    names=STATE_MUTATION_METHOD_NAMES,
)

FOR_EACH_METHOD_MATCHER = instance_method(on_descendant_of=COLLECTION, names=["forEach"])

# Any stage of a stream pipeline: map, filter, forEach, parallel, ...
STREAM_API_INVOCATION_MATCHER = instance_method(on_descendant_of=BASE_STREAM)

COLLECTION_TO_STREAM_MATCHER = instance_method(on_descendant_of=COLLECTION, names=["parallelStream"])

PARALLEL_STREAM_MATCHER = any_of(
    instance_method(on_descendant_of=BASE_STREAM, names=["parallel"]),
    COLLECTION_TO_STREAM_MATCHER,
)

THREAD_CREATION_MATCHER = any_of(
    instance_method(on_descendant_of=EXECUTOR_SERVICE, names=["submit"]),
    constructor(for_class=THREAD),
    static_method(on_class=EVENT_QUEUE, names=["invokeLater", "invokeAndWait"]),
)

_IS_COLLECTION = is_subtype_of(COLLECTION)


def is_mutating_reference(node: Node, context: AnalysisContext) -> bool:
    """
    Member reference like list::remove or ArrayList::add.

    The qualifier must be a collection; the method symbol may be unresolved.
    """
    if not isinstance(node, MemberReference):
        return False
    if node.name not in STATE_MUTATION_METHOD_NAMES:
        return False
    return _IS_COLLECTION(node.qualifier, context)
