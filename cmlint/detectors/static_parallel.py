"""
Lambda run in parallel during class initialization.

    static { new Thread(() -> { state = 11; }).start(); }
    static final int SUM = IntStream.range(0, 100).parallel().reduce((a, b) -> a + b).getAsInt();

A worker thread evaluating the lambda needs the class to be initialized,
while the initializing thread waits for the worker: deadlock. This is a
syntactic proxy for that risk, not a proof of a lock cycle.

Each detector is a pure function: (node, context) -> bool
"""
from typing import Optional

from ..context import AnalysisContext
from ..scope import in_static_initializer, nearest_enclosing
from ..tree import Call, Lambda, Node, ObjectConstruction
from .utils import PARALLEL_STREAM_MATCHER, THREAD_CREATION_MATCHER

NAME = "ParallelLambdaInStaticBlock"
SUMMARY = "Using lambda expression in class static block in parallel may cause deadlock."


def parallel_lambda_in_static_block(node: Node, context: AnalysisContext) -> bool:
    """
    Detect a lambda in static initialization code that feeds a parallel
    stream or a new thread/task/event.

    Walks outward from the lambda's enclosing call down the receiver chain:
        IntStream.range(0, 100).parallel().map(s -> s)
                               ^^^^^^^^^^ reached from map(...)
    """
    if not isinstance(node, Lambda):
        return False

    if not in_static_initializer(node, context):
        return False

    stage: Optional[Node] = nearest_enclosing(node, Call, context)
    while isinstance(stage, Call):
        if PARALLEL_STREAM_MATCHER(stage, context) or THREAD_CREATION_MATCHER(stage, context):
            return True
        stage = context.receiver_of(stage)

    construction = nearest_enclosing(node, ObjectConstruction, context)
    return construction is not None and THREAD_CREATION_MATCHER(construction, context)
