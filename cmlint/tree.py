"""
Typed tree model.

A resolved syntax tree as handed over by the front end. The node kinds form
a closed set: every kind is one dataclass below and one NodeKind member.

Design principles:
- Nodes never point at their parent (parents live in AnalysisContext)
- Node equality is identity (one node per source occurrence)
- Expressions carry their static type, names carry their resolved symbol
- Nothing here is mutated once the front end has built it
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, List, Optional

from .typesys import JType


class NodeKind(Enum):
    COMPILATION_UNIT     = "CompilationUnit"
    CLASS_DECL           = "ClassDecl"
    METHOD_DECL          = "MethodDecl"
    BLOCK                = "Block"
    VARIABLE_DECLARATION = "VariableDeclaration"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    IF                   = "If"
    LOOP                 = "Loop"
    TRY                  = "Try"
    RETURN               = "Return"
    SYNCHRONIZED         = "Synchronized"
    IDENTIFIER           = "Identifier"
    FIELD_ACCESS         = "FieldAccess"
    THIS                 = "This"
    LITERAL              = "Literal"
    BINARY_OP            = "BinaryOp"
    ASSIGNMENT           = "Assignment"
    CALL                 = "Call"
    MEMBER_REFERENCE     = "MemberReference"
    LAMBDA               = "Lambda"
    OBJECT_CONSTRUCTION  = "ObjectConstruction"


class SymbolKind(Enum):
    CLASS     = "class"
    METHOD    = "method"
    FIELD     = "field"
    LOCAL     = "local"
    PARAMETER = "parameter"


@dataclass(eq=False)
class Symbol:
    """
    Declaration identity a name resolves to.

    Compared by identity only: two symbols with the same name declared in
    different scopes are different symbols.
    """
    name: str
    kind: SymbolKind
    owner: Optional[JType] = None  # declaring type (methods, fields)
    type: Optional[JType] = None   # declared type (fields, locals, params)
    is_static: bool = False

    def __repr__(self) -> str:
        return f"Symbol({self.kind.value} {self.name})"


@dataclass(eq=False)
class Node:
    kind: ClassVar[NodeKind]
    _fields: ClassVar[tuple] = ()

    line: int = field(default=0, kw_only=True)
    column: int = field(default=0, kw_only=True)
    text: Optional[str] = field(default=None, kw_only=True)  # source text, if the front end kept it


@dataclass(eq=False)
class Expression(Node):
    type: Optional[JType] = field(default=None, kw_only=True)


# Declarations and statements

@dataclass(eq=False)
class CompilationUnit(Node):
    kind = NodeKind.COMPILATION_UNIT
    _fields = ("body",)

    body: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class ClassDecl(Node):
    kind = NodeKind.CLASS_DECL
    _fields = ("body",)

    name: str
    symbol: Optional[Symbol] = None
    body: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class MethodDecl(Node):
    kind = NodeKind.METHOD_DECL
    _fields = ("params", "body")

    name: str
    symbol: Optional[Symbol] = None
    params: List["VariableDeclaration"] = field(default_factory=list)
    body: Optional["Block"] = None
    is_static: bool = False


@dataclass(eq=False)
class Block(Node):
    kind = NodeKind.BLOCK
    _fields = ("statements",)

    statements: List[Node] = field(default_factory=list)
    is_static: bool = False  # class-level static initializer


@dataclass(eq=False)
class VariableDeclaration(Node):
    kind = NodeKind.VARIABLE_DECLARATION
    _fields = ("initializer",)

    name: str
    symbol: Optional[Symbol] = None
    initializer: Optional[Node] = None
    is_static: bool = False


@dataclass(eq=False)
class ExpressionStatement(Node):
    kind = NodeKind.EXPRESSION_STATEMENT
    _fields = ("expression",)

    expression: Node


@dataclass(eq=False)
class If(Node):
    kind = NodeKind.IF
    _fields = ("condition", "then", "orelse")

    condition: Node
    then: Node
    orelse: Optional[Node] = None


@dataclass(eq=False)
class Loop(Node):
    kind = NodeKind.LOOP
    _fields = ("header", "body")

    header: List[Node] = field(default_factory=list)
    body: Optional[Node] = None


@dataclass(eq=False)
class Try(Node):
    kind = NodeKind.TRY
    _fields = ("body", "handlers", "finally_block")

    body: "Block"
    handlers: List["Block"] = field(default_factory=list)
    finally_block: Optional["Block"] = None


@dataclass(eq=False)
class Return(Node):
    kind = NodeKind.RETURN
    _fields = ("value",)

    value: Optional[Node] = None


@dataclass(eq=False)
class Synchronized(Node):
    """Mutual-exclusion block: synchronized (lock) { body }."""
    kind = NodeKind.SYNCHRONIZED
    _fields = ("lock", "body")

    lock: Node
    body: "Block"


# Expressions

@dataclass(eq=False)
class Identifier(Expression):
    kind = NodeKind.IDENTIFIER

    name: str
    symbol: Optional[Symbol] = None


@dataclass(eq=False)
class FieldAccess(Expression):
    kind = NodeKind.FIELD_ACCESS
    _fields = ("target",)

    target: Node
    name: str
    symbol: Optional[Symbol] = None


@dataclass(eq=False)
class This(Expression):
    kind = NodeKind.THIS

    symbol: Optional[Symbol] = None  # the enclosing class


@dataclass(eq=False)
class Literal(Expression):
    kind = NodeKind.LITERAL

    value: str = ""


@dataclass(eq=False)
class BinaryOp(Expression):
    kind = NodeKind.BINARY_OP
    _fields = ("left", "right")

    left: Node
    op: str
    right: Node


@dataclass(eq=False)
class Assignment(Expression):
    kind = NodeKind.ASSIGNMENT
    _fields = ("target", "value")

    target: Node
    value: Node


@dataclass(eq=False)
class Call(Expression):
    """
    Method invocation.

    receiver is None for unqualified calls (foo(), or a static call written
    without its class). method is the resolved method symbol.
    """
    kind = NodeKind.CALL
    _fields = ("receiver", "args")

    name: str
    receiver: Optional[Node] = None
    args: List[Node] = field(default_factory=list)
    method: Optional[Symbol] = None


@dataclass(eq=False)
class MemberReference(Expression):
    """Method reference: qualifier::name."""
    kind = NodeKind.MEMBER_REFERENCE
    _fields = ("qualifier",)

    qualifier: Node
    name: str
    method: Optional[Symbol] = None


@dataclass(eq=False)
class Lambda(Expression):
    kind = NodeKind.LAMBDA
    _fields = ("params", "body")

    params: List[VariableDeclaration] = field(default_factory=list)
    body: Optional[Node] = None


@dataclass(eq=False)
class ObjectConstruction(Expression):
    """new T(args), optionally with an anonymous class body."""
    kind = NodeKind.OBJECT_CONSTRUCTION
    _fields = ("args", "body")

    args: List[Node] = field(default_factory=list)
    body: Optional[List[Node]] = None


NODE_CLASSES = {
    cls.kind: cls
    for cls in (
        CompilationUnit, ClassDecl, MethodDecl, Block, VariableDeclaration,
        ExpressionStatement, If, Loop, Try, Return, Synchronized,
        Identifier, FieldAccess, This, Literal, BinaryOp, Assignment,
        Call, MemberReference, Lambda, ObjectConstruction,
    )
}

assert len(NODE_CLASSES) == len(NodeKind)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield direct children in source order."""
    for name in node._fields:
        value = getattr(node, name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal. Deterministic: same tree, same order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))
