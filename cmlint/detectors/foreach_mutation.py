"""
Collection mutated from inside its own forEach callback.

    list.forEach(list::remove);
    list.forEach(s -> { if (!s.isEmpty()) list.add(s); });

Both throw ConcurrentModificationException or behave unpredictably.

Each detector is a pure function: (node, context) -> bool
"""
from ..context import AnalysisContext
from ..receivers import receiver_of, same_receiver
from ..safety import mutation_target_is_safe
from ..scope import argument_position, nearest_enclosing
from ..tree import Call, Lambda, MemberReference, Node
from .utils import FOR_EACH_METHOD_MATCHER, MUTATION_METHOD_MATCHER, is_mutating_reference

NAME = "ModifyCollectionInForEachMethod"
SUMMARY = (
    "Modifying a collection while iterating over it in forEach method may cause a"
    " ConcurrentModificationException to be thrown or lead to undefined behavior."
)


def _mutating_call_in_for_each(node: Call, context: AnalysisContext) -> bool:
    mutated_receiver = receiver_of(node, context)
    # Unqualified add(x): nothing to compare against the iterated collection
    if mutated_receiver is None:
        return False

    lambda_node = nearest_enclosing(node, Lambda, context)
    if lambda_node is None:
        return False

    traversal = argument_position(lambda_node, context)
    if traversal is None or not FOR_EACH_METHOD_MATCHER(traversal, context):
        return False

    return same_receiver(receiver_of(traversal, context), mutated_receiver, context)


def _mutating_reference_in_for_each(node: MemberReference, context: AnalysisContext) -> bool:
    # A bare reference (BiConsumer c = ArrayList::add;) has no enclosing call
    traversal = nearest_enclosing(node, Call, context)
    if traversal is None or not FOR_EACH_METHOD_MATCHER(traversal, context):
        return False

    return same_receiver(receiver_of(traversal, context), receiver_of(node, context), context)


def modifies_collection_in_for_each(node: Node, context: AnalysisContext) -> bool:
    """
    Detect a mutation of the collection currently traversed by forEach.

    Matches add/addAll/clear/remove/removeAll/retainAll, as a call inside the
    forEach lambda or as the method reference passed to forEach, when the
    mutated receiver is the forEach receiver.

    Concurrent collections are excluded: they tolerate mutation during
    traversal by contract.
    """
    if isinstance(node, Call):
        if not MUTATION_METHOD_MATCHER(node, context):
            return False
        if mutation_target_is_safe(node, context):
            return False
        return _mutating_call_in_for_each(node, context)

    if isinstance(node, MemberReference):
        if not is_mutating_reference(node, context):
            return False
        if mutation_target_is_safe(node, context):
            return False
        return _mutating_reference_in_for_each(node, context)

    return False
