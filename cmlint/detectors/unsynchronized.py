"""
Non-concurrent collection mutated from code that may run concurrently.

    list.parallelStream().forEach(result::add);
    list.parallelStream().forEach(s -> result.add(s));
    executor.submit(() -> result.add(name));
    new Thread(() -> result.add("x"));

Concurrency sources: a parallel stream pipeline, thread construction,
executor task submission, event-queue dispatch.

Each detector is a pure function: (node, context) -> bool
"""
from typing import Optional

from ..context import AnalysisContext
from ..safety import mutation_target_is_safe
from ..scope import argument_position, nearest_enclosing
from ..tree import Call, Expression, Lambda, MemberReference, Node, ObjectConstruction, Synchronized
from .utils import (
    COLLECTION_TO_STREAM_MATCHER,
    MUTATION_METHOD_MATCHER,
    STREAM_API_INVOCATION_MATCHER,
    THREAD_CREATION_MATCHER,
    is_mutating_reference,
)

NAME = "UnsynchronizedCollectionModification"
SUMMARY = "Modifying a non-concurrent collection in parallel may lead to undefined behavior."


def _is_guarded(node: Node, context: AnalysisContext) -> bool:
    return nearest_enclosing(node, Synchronized, context) is not None


def _unwrap_pipeline(node: Optional[Node], context: AnalysisContext) -> Optional[Node]:
    """Step through stream stages (forEach <- map <- filter ...) to the pipeline source."""
    while node is not None and STREAM_API_INVOCATION_MATCHER(node, context):
        node = context.receiver_of(node)
    return node


def _reference_in_parallel_stream(node: MemberReference, context: AnalysisContext) -> bool:
    stage = nearest_enclosing(node, Call, context)
    source = _unwrap_pipeline(stage, context)
    return source is not None and COLLECTION_TO_STREAM_MATCHER(source, context)


def _call_in_concurrent_lambda(node: Call, context: AnalysisContext) -> bool:
    lambda_node = nearest_enclosing(node, Lambda, context)
    if lambda_node is None:
        return False

    consumer = argument_position(lambda_node, context)
    if not isinstance(consumer, Expression):
        return False

    construction = nearest_enclosing(node, ObjectConstruction, context)
    if construction is not None and THREAD_CREATION_MATCHER(construction, context):
        return True

    stage: Optional[Node] = consumer
    while stage is not None and STREAM_API_INVOCATION_MATCHER(stage, context):
        if THREAD_CREATION_MATCHER(stage, context):
            return True
        stage = context.receiver_of(stage)

    if stage is None:
        return False

    return THREAD_CREATION_MATCHER(stage, context) or COLLECTION_TO_STREAM_MATCHER(stage, context)


def modifies_collection_unsynchronized(node: Node, context: AnalysisContext) -> bool:
    """
    Detect a mutation of a plain collection from a concurrent context.

    Method references count only as the action of a parallel stream
    pipeline. Calls count when their enclosing lambda is handed to a thread,
    an executor, the event queue, or a parallel stream pipeline.

    Never matches inside a synchronized block or on a concurrent collection.
    """
    if isinstance(node, MemberReference):
        if not is_mutating_reference(node, context):
            return False
        if mutation_target_is_safe(node, context) or _is_guarded(node, context):
            return False
        return _reference_in_parallel_stream(node, context)

    if isinstance(node, Call):
        if not MUTATION_METHOD_MATCHER(node, context):
            return False
        if mutation_target_is_safe(node, context) or _is_guarded(node, context):
            return False
        return _call_in_concurrent_lambda(node, context)

    return False
