"""
Predicate combinators.

A matcher is a pure function: (node, context) -> bool

Leaf matchers describe call shapes ("instance method named add on a
descendant of Collection"); combinators compose them. Anything that cannot
be resolved (no method symbol, no receiver type) does not match.
"""
from typing import Callable, Iterable, Optional

from .context import AnalysisContext
from .tree import Call, MemberReference, Node, ObjectConstruction
from .typesys import JType, is_descendant_of

Matcher = Callable[[Node, AnalysisContext], bool]


def receiver_type(node: Node, context: AnalysisContext) -> Optional[JType]:
    """
    Static type a call or reference is dispatched on.

    The receiver expression's type when it is known, otherwise the class
    declaring the method (unqualified call inside a subclass, or a receiver
    the front end could not type).
    """
    receiver = context.receiver_of(node)
    if receiver is not None:
        receiver_jtype = context.type_of(receiver)
        if receiver_jtype is not None:
            return receiver_jtype
    method = context.resolve_symbol(node)
    return method.owner if method is not None else None


def _name_matches(name: str, names: Optional[frozenset]) -> bool:
    return names is None or name in names


def instance_method(on_descendant_of: str, names: Optional[Iterable[str]] = None) -> Matcher:
    """
    Call or member reference to an instance method on a subtype of a type.

    names=None accepts any method name.
    """
    wanted = frozenset(names) if names is not None else None

    def matches(node: Node, context: AnalysisContext) -> bool:
        if not isinstance(node, (Call, MemberReference)):
            return False
        if not _name_matches(node.name, wanted):
            return False

        method = context.resolve_symbol(node)
        if method is None or method.is_static:
            return False

        return is_descendant_of(receiver_type(node, context), on_descendant_of)

    return matches


def static_method(on_class: str, names: Optional[Iterable[str]] = None) -> Matcher:
    """Call to a static method declared on exactly on_class."""
    wanted = frozenset(names) if names is not None else None

    def matches(node: Node, context: AnalysisContext) -> bool:
        if not isinstance(node, Call):
            return False
        if not _name_matches(node.name, wanted):
            return False

        method = context.resolve_symbol(node)
        if method is None or not method.is_static or method.owner is None:
            return False

        return method.owner.name == on_class

    return matches


def constructor(for_class: str) -> Matcher:
    """Object construction of exactly for_class."""
    def matches(node: Node, context: AnalysisContext) -> bool:
        if not isinstance(node, ObjectConstruction):
            return False
        constructed = context.type_of(node)
        return constructed is not None and constructed.name == for_class

    return matches


def is_subtype_of(type_name: str) -> Matcher:
    """Expression whose static type descends from type_name."""
    def matches(node: Node, context: AnalysisContext) -> bool:
        return is_descendant_of(context.type_of(node), type_name)

    return matches


def any_of(*matchers: Matcher) -> Matcher:
    def matches(node: Node, context: AnalysisContext) -> bool:
        return any(m(node, context) for m in matchers)

    return matches


def all_of(*matchers: Matcher) -> Matcher:
    def matches(node: Node, context: AnalysisContext) -> bool:
        return all(m(node, context) for m in matchers)

    return matches
