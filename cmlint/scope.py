"""
Scope navigation.

Two kinds of upward search:
- nearest_enclosing stops at the innermost ancestor of a kind
- any_enclosing_satisfies scans the whole chain to the root
"""
from typing import Callable, Optional, Tuple, Type, Union

from .context import AnalysisContext
from .tree import Block, Node, VariableDeclaration

NodeClass = Union[Type[Node], Tuple[Type[Node], ...]]


def nearest_enclosing(node: Node, kind: NodeClass, context: AnalysisContext) -> Optional[Node]:
    """
    First strict ancestor of the given kind, or None.

    Examples:
        nearest_enclosing(call, Lambda, ctx)        # lambda whose body holds call
        nearest_enclosing(call, Synchronized, ctx)  # guarding critical section
    """
    for ancestor in context.enclosing_path(node):
        if isinstance(ancestor, kind):
            return ancestor
    return None


def any_enclosing_satisfies(
    node: Node,
    predicate: Callable[[Node], bool],
    context: AnalysisContext,
) -> bool:
    """Check every ancestor up to the root, without stopping at boundaries."""
    return any(predicate(ancestor) for ancestor in context.enclosing_path(node))


def argument_position(node: Node, context: AnalysisContext) -> Optional[Node]:
    """The construct a lambda or reference is passed to (its direct parent)."""
    return context.parent_of(node)


def _is_static_block(node: Node) -> bool:
    return isinstance(node, Block) and node.is_static


def in_static_block(node: Node, context: AnalysisContext) -> bool:
    """Node sits somewhere inside a static initializer block."""
    return any_enclosing_satisfies(node, _is_static_block, context)


def in_static_variable_initializer(node: Node, context: AnalysisContext) -> bool:
    """Node is part of the initializer of a variable declared static."""
    declaration = nearest_enclosing(node, VariableDeclaration, context)
    return declaration is not None and declaration.is_static


def in_static_initializer(node: Node, context: AnalysisContext) -> bool:
    """Node runs during class initialization: static block or static field initializer."""
    return in_static_block(node, context) or in_static_variable_initializer(node, context)
