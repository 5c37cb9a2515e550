"""
Analysis context.

Read-only view over one resolved tree: parent links, symbol and type
queries, receiver extraction and source text. Built once per compilation
unit, never mutated, shared by every detector invocation on that unit.

Every query returns None (or an empty result) for unresolved input rather
than raising: detectors treat "unknown" as "no match".
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, Optional

from .tree import (
    Assignment,
    BinaryOp,
    Call,
    ClassDecl,
    Expression,
    FieldAccess,
    Identifier,
    Lambda,
    Literal,
    MemberReference,
    MethodDecl,
    Node,
    NodeKind,
    ObjectConstruction,
    Symbol,
    SymbolKind,
    This,
    VariableDeclaration,
    iter_child_nodes,
    walk,
)
from .typesys import JType, closure


@dataclass(frozen=True)
class AnalysisContext:
    root: Node
    source: str = "<unknown>"
    parents: Dict[Node, Node] = field(default_factory=dict, repr=False, compare=False)

    # Navigation

    def parent_of(self, node: Node) -> Optional[Node]:
        return self.parents.get(node)

    def enclosing_path(self, node: Node) -> Iterator[Node]:
        """Ancestors of node, innermost first. The node itself is excluded."""
        current = self.parents.get(node)
        while current is not None:
            yield current
            current = self.parents.get(current)

    # Symbol / type queries

    @staticmethod
    def kind_of(node: Node) -> NodeKind:
        return node.kind

    @staticmethod
    def resolve_symbol(node: Optional[Node]) -> Optional[Symbol]:
        if isinstance(node, (Identifier, FieldAccess, This, VariableDeclaration, ClassDecl, MethodDecl)):
            return node.symbol
        if isinstance(node, (Call, MemberReference)):
            return node.method
        return None

    @staticmethod
    def type_of(node: Optional[Node]) -> Optional[JType]:
        if isinstance(node, Expression) and node.type is not None:
            return node.type
        symbol = AnalysisContext.resolve_symbol(node)
        if symbol is not None and symbol.kind is not SymbolKind.METHOD:
            return symbol.type
        return None

    @staticmethod
    def closure(jtype: Optional[JType]) -> FrozenSet[JType]:
        return closure(jtype)

    @staticmethod
    def receiver_of(node: Optional[Node]) -> Optional[Node]:
        """Object expression a call or reference is invoked against."""
        if isinstance(node, Call):
            return node.receiver
        if isinstance(node, MemberReference):
            return node.qualifier
        return None

    @staticmethod
    def namespace_of(target) -> str:
        if isinstance(target, JType):
            return target.namespace
        if isinstance(target, Symbol) and target.owner is not None:
            return target.owner.namespace
        return ""

    @staticmethod
    def source_text(node: Node) -> str:
        return to_source(node)


def build_context(root: Node, source: str = "<unknown>") -> AnalysisContext:
    """Build the context for a tree: one pass to record parent links."""
    parents: Dict[Node, Node] = {}
    for parent in walk(root):
        for child in iter_child_nodes(parent):
            parents[child] = parent
    return AnalysisContext(root=root, source=source, parents=parents)


def to_source(node: Optional[Node]) -> str:
    """
    Render an expression back to source form.

    Uses the front end's own text when it kept one. The rendering only
    needs to be stable, since it is compared against other renderings.
    """
    if node is None:
        return ""
    if node.text is not None:
        return node.text

    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, This):
        return "this"
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, FieldAccess):
        return f"{to_source(node.target)}.{node.name}"
    if isinstance(node, Call):
        args = ", ".join(to_source(a) for a in node.args)
        if node.receiver is None:
            return f"{node.name}({args})"
        return f"{to_source(node.receiver)}.{node.name}({args})"
    if isinstance(node, MemberReference):
        return f"{to_source(node.qualifier)}::{node.name}"
    if isinstance(node, ObjectConstruction):
        args = ", ".join(to_source(a) for a in node.args)
        type_name = node.type.simple_name if node.type is not None else "?"
        return f"new {type_name}({args})"
    if isinstance(node, Lambda):
        params = ", ".join(p.name for p in node.params)
        body = to_source(node.body) if isinstance(node.body, Expression) else "{...}"
        return f"({params}) -> {body}"
    if isinstance(node, BinaryOp):
        return f"{to_source(node.left)} {node.op} {to_source(node.right)}"
    if isinstance(node, Assignment):
        return f"{to_source(node.target)} = {to_source(node.value)}"

    return f"<{node.kind.value}>"
