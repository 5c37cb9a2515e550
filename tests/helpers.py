"""
Tree builders for tests.

Small factories that produce resolved trees the way a front end would,
so test cases read close to the Java they stand for:

    items = local("items", ARRAY_LIST)
    call(ident(items), "forEach", ref(ident(items), "remove"))

stands for items.forEach(items::remove).
"""
import sys
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from cmlint.context import AnalysisContext, build_context
from cmlint.jdk import jdk_types
from cmlint.tree import (
    Assignment,
    Block,
    Call,
    ClassDecl,
    CompilationUnit,
    ExpressionStatement,
    FieldAccess,
    Identifier,
    Lambda,
    Literal,
    MemberReference,
    MethodDecl,
    Node,
    ObjectConstruction,
    Symbol,
    SymbolKind,
    Synchronized,
    This,
    VariableDeclaration,
    walk,
)
from cmlint.typesys import JType

TYPES = jdk_types()

ARRAY_LIST     = "java.util.ArrayList"
LIST           = "java.util.List"
HASH_MAP       = "java.util.HashMap"
SET            = "java.util.Set"
COPY_ON_WRITE  = "java.util.concurrent.CopyOnWriteArrayList"
CONCURRENT_MAP = "java.util.concurrent.ConcurrentHashMap"
KEY_SET_VIEW   = "java.util.concurrent.ConcurrentHashMap.KeySetView"
STREAM         = "java.util.stream.Stream"
INT_STREAM     = "java.util.stream.IntStream"
EXECUTOR       = "java.util.concurrent.ExecutorService"
FUTURE         = "java.util.concurrent.Future"
THREAD         = "java.lang.Thread"
EVENT_QUEUE    = "java.awt.EventQueue"
STRING         = "java.lang.String"
INT            = "int"


def jtype(name: Optional[str]) -> Optional[JType]:
    return TYPES.get(name) if name is not None else None


# Symbols

def local(name: str, type_name: Optional[str] = None) -> Symbol:
    return Symbol(name, SymbolKind.LOCAL, type=jtype(type_name))


def param(name: str, type_name: Optional[str] = None) -> Symbol:
    return Symbol(name, SymbolKind.PARAMETER, type=jtype(type_name))


def field_symbol(name: str, type_name: Optional[str] = None, owner: str = "Test", static: bool = False) -> Symbol:
    return Symbol(name, SymbolKind.FIELD, owner=jtype(owner), type=jtype(type_name), is_static=static)


# Expressions

def ident(symbol: Symbol, **loc) -> Identifier:
    return Identifier(symbol.name, symbol, type=symbol.type, **loc)


def this_field(symbol: Symbol, **loc) -> FieldAccess:
    return FieldAccess(This(), symbol.name, symbol, type=symbol.type, **loc)


def type_name(name: str) -> Identifier:
    """Class name used as a qualifier: EventQueue in EventQueue.invokeLater."""
    class_symbol = Symbol(name.rsplit(".", 1)[-1], SymbolKind.CLASS, type=jtype(name))
    return Identifier(class_symbol.name, class_symbol, type=jtype(name))


def lit(value: str, type_name: Optional[str] = None) -> Literal:
    return Literal(value=value, type=jtype(type_name))


def call(receiver: Optional[Node], name: str, *args: Node,
         owner: Optional[str] = None, static: bool = False,
         returns: Optional[str] = None, **loc) -> Call:
    """
    Method call with its resolved method symbol.

    The declaring class defaults to the receiver's static type.
    """
    owner_type = jtype(owner) if owner is not None else getattr(receiver, "type", None)
    method = Symbol(name, SymbolKind.METHOD, owner=owner_type, is_static=static)
    return Call(name, receiver, list(args), method, type=jtype(returns), **loc)


def static_call(owner: str, name: str, *args: Node, returns: Optional[str] = None, **loc) -> Call:
    return call(type_name(owner), name, *args, owner=owner, static=True, returns=returns, **loc)


def unresolved_call(receiver: Optional[Node], name: str, *args: Node, **loc) -> Call:
    return Call(name, receiver, list(args), **loc)


def ref(qualifier: Node, name: str, owner: Optional[str] = None, **loc) -> MemberReference:
    owner_type = jtype(owner) if owner is not None else getattr(qualifier, "type", None)
    method = Symbol(name, SymbolKind.METHOD, owner=owner_type)
    return MemberReference(qualifier, name, method, **loc)


def lam(params, body: Node, **loc) -> Lambda:
    declarations = [VariableDeclaration(p.name, p) for p in params]
    return Lambda(declarations, body, **loc)


def new(type_name_: str, *args: Node, body=None, **loc) -> ObjectConstruction:
    return ObjectConstruction(list(args), body, type=jtype(type_name_), **loc)


def assign(target: Node, value: Node) -> Assignment:
    return Assignment(target, value)


# Statements and declarations

def stmt(expression: Node) -> ExpressionStatement:
    return ExpressionStatement(expression)


def block(*statements: Node, static: bool = False) -> Block:
    return Block(list(statements), is_static=static)


def sync(lock: Node, *statements: Node) -> Synchronized:
    return Synchronized(lock, block(*statements))


def var(symbol: Symbol, initializer: Optional[Node] = None, static: bool = False) -> VariableDeclaration:
    return VariableDeclaration(symbol.name, symbol, initializer, is_static=static or symbol.is_static)


def method(name: str, *statements: Node, static: bool = False) -> MethodDecl:
    return MethodDecl(name, None, [], block(*statements), is_static=static)


def klass(name: str, *members: Node) -> ClassDecl:
    return ClassDecl(name, Symbol(name, SymbolKind.CLASS, type=jtype(name)), list(members))


def unit(*members: Node) -> CompilationUnit:
    return CompilationUnit(list(members))


def in_method(*statements: Node) -> CompilationUnit:
    """Wrap statements in class Test { void main() { ... } }."""
    return unit(klass("Test", method("main", *statements, static=True)))


def in_static_block(*statements: Node) -> CompilationUnit:
    """Wrap statements in class Test { static { ... } }."""
    return unit(klass("Test", block(*statements, static=True)))


# Context and lookup

def context_for(root: Node, source: str = "Test.java") -> AnalysisContext:
    return build_context(root, source=source)


def find_all(root: Node, cls, name: Optional[str] = None) -> list:
    return [
        n for n in walk(root)
        if isinstance(n, cls) and (name is None or getattr(n, "name", None) == name)
    ]


def find(root: Node, cls, name: Optional[str] = None):
    matches = find_all(root, cls, name)
    assert matches, f"No {cls.__name__} named {name!r} in tree"
    return matches[0]
