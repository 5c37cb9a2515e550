"""
Front-end interchange reader.

Reads one compilation unit, as serialized by the front end, into the tree
model and builds its AnalysisContext.

Document shape:
    {
      "source":  "Example.java",
      "types":   [{"name": "com.acme.Bag", "supertypes": ["java.util.ArrayList"]}],
      "symbols": [{"id": "s1", "name": "bag", "kind": "local", "type": "com.acme.Bag"}],
      "tree":    {"kind": "CompilationUnit", "body": [...]}
    }

Node objects carry "kind" plus that kind's fields. Symbols are referenced by
id, types by qualified name. Call and MemberReference nodes describe their
resolved method either by symbol id ("method") or inline ("owner", "static").
"""
import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from .context import AnalysisContext, build_context
from .jdk import jdk_types
from .schema import NODE_MODELS, NodeEntry, SymbolEntry, TreeDocument, TypeEntry
from .tree import NODE_CLASSES, Node, Symbol, SymbolKind
from .typesys import JType, TypeTable

logger = logging.getLogger(__name__)


class TreeFormatError(ValueError):
    """The document is not a valid serialized tree."""


def _validate(model: Type[BaseModel], data: Any, what: str) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise TreeFormatError(f"Invalid {what}: {e}") from e


class _Tables:
    def __init__(self, types: TypeTable):
        self.types = types
        self.symbols: Dict[str, Symbol] = {}

    def type(self, name: Optional[str]) -> Optional[JType]:
        if name is None:
            return None
        return self.types.get(name)

    def symbol(self, ref: Optional[str]) -> Optional[Symbol]:
        if ref is None:
            return None
        if ref not in self.symbols:
            raise TreeFormatError(f"Unknown symbol id: {ref!r}")
        return self.symbols[ref]


def _load_types(entries: List[TypeEntry], types: TypeTable) -> None:
    declared = {entry.name: entry for entry in entries}
    visiting: set[str] = set()

    def define(name: str) -> JType:
        if name not in declared:
            return types.get(name)
        if name in visiting:
            raise TreeFormatError(f"Cyclic type hierarchy at {name}")

        visiting.add(name)
        entry = declared[name]
        supertypes = tuple(define(s) for s in entry.supertypes)
        visiting.discard(name)
        del declared[name]
        return types.add(JType(name, supertypes, entry.namespace))

    for name in list(declared):
        if name in declared:
            define(name)


def _load_symbols(entries: List[SymbolEntry], tables: _Tables) -> None:
    for entry in entries:
        if entry.id in tables.symbols:
            raise TreeFormatError(f"Duplicate symbol id: {entry.id!r}")
        tables.symbols[entry.id] = Symbol(
            name=entry.name,
            kind=entry.kind,
            owner=tables.type(entry.owner),
            type=tables.type(entry.type),
            is_static=entry.static,
        )


def _method_symbol(entry: NodeEntry, tables: _Tables) -> Optional[Symbol]:
    if entry.method is not None:
        return tables.symbol(entry.method)
    if entry.owner is None:
        return None
    return Symbol(
        name=entry.name,
        kind=SymbolKind.METHOD,
        owner=tables.type(entry.owner),
        is_static=entry.static,
    )


def _child(value: Any, tables: _Tables) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [_build_node(item, tables) for item in value]
    return _build_node(value, tables)


def _build_node(data: Any, tables: _Tables) -> Node:
    entry = _validate(NodeEntry, data, "node")
    model = NODE_MODELS.get(entry.kind)
    if model is not None:
        entry = _validate(model, data, f"{entry.kind.value} node")

    cls = NODE_CLASSES[entry.kind]
    children = entry.model_extra or {}

    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if f.name in cls._fields:
            if f.name in children:
                kwargs[f.name] = _child(children[f.name], tables)
        elif f.name == "method":
            kwargs["method"] = _method_symbol(entry, tables)
        elif f.name == "symbol":
            kwargs["symbol"] = tables.symbol(entry.symbol)
        elif f.name == "type":
            kwargs["type"] = tables.type(entry.type)
        elif f.name == "is_static":
            kwargs["is_static"] = entry.static
        elif getattr(entry, f.name, None) is not None:
            kwargs[f.name] = getattr(entry, f.name)

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise TreeFormatError(f"Invalid {entry.kind.value} node: {e}") from e


def load_tree(document: Any, source: str = "<unknown>", types: Optional[TypeTable] = None) -> AnalysisContext:
    """
    Build the AnalysisContext for one serialized compilation unit.

    Args:
        document: Parsed JSON document
        source: Fallback source name when the document has none
        types: Type table to extend (default: fresh JDK catalog)

    Raises TreeFormatError on malformed input.
    """
    doc = _validate(TreeDocument, document, "document")

    tables = _Tables(types if types is not None else jdk_types())
    _load_types(doc.types, tables.types)
    _load_symbols(doc.symbols, tables)
    root = _build_node(doc.tree, tables)

    source_name = doc.source if doc.source is not None else source
    context = build_context(root, source=source_name)
    logger.debug(
        "Loaded %s: %d nodes, %d symbols, %d types",
        source_name, len(context.parents) + 1, len(tables.symbols), len(tables.types),
    )
    return context


def load_file(path: Path) -> AnalysisContext:
    """Read and load a serialized compilation unit from disk."""
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise TreeFormatError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TreeFormatError(f"Invalid JSON in {path}: {e}") from e

    return load_tree(document, source=str(path))
