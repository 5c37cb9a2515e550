"""
Pydantic schemas for the front-end interchange document.

These models check the envelope (types, symbols) and the scalar fields of
each node object before anything is turned into tree nodes. Child nodes
("body", "args", "receiver", ...) are left in the node's extra fields and
validated one level at a time by the loader as it descends.

Scalars are strict: a position written as "3" is rejected, not coerced.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from .tree import NodeKind, SymbolKind


class TypeEntry(BaseModel):
    """A type the front end declares, with its direct supertypes."""

    name: StrictStr = Field(..., description="Fully qualified name.")
    supertypes: List[StrictStr] = Field(default_factory=list)
    namespace: Optional[StrictStr] = Field(
        None,
        description="Declaring package, when it cannot be read off the qualified name.",
    )


class SymbolEntry(BaseModel):
    id: StrictStr
    name: StrictStr
    kind: SymbolKind = SymbolKind.LOCAL
    owner: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    static: StrictBool = False


class NodeEntry(BaseModel):
    """
    Scalar part of one node object.

    Fields that only some kinds use are optional here; the node dataclass
    decides which ones it needs.
    """

    model_config = ConfigDict(extra="allow")

    kind: NodeKind
    line: StrictInt = Field(0, ge=0)
    column: StrictInt = Field(0, ge=0)
    text: Optional[StrictStr] = None

    name: Optional[StrictStr] = None
    op: Optional[StrictStr] = None
    static: StrictBool = False

    # References into the envelope
    symbol: Optional[StrictStr] = Field(None, description="Symbol id.")
    type: Optional[StrictStr] = Field(None, description="Qualified type name.")
    method: Optional[StrictStr] = Field(None, description="Symbol id of the resolved method.")
    owner: Optional[StrictStr] = Field(None, description="Declaring type of an inline method.")


class LiteralEntry(NodeEntry):
    # "value" is a child node on Return and Assignment, source text here
    value: StrictStr = ""


NODE_MODELS = {
    NodeKind.LITERAL: LiteralEntry,
}


class TreeDocument(BaseModel):
    """One serialized compilation unit."""

    source: Optional[StrictStr] = None
    types: List[TypeEntry] = Field(default_factory=list)
    symbols: List[SymbolEntry] = Field(default_factory=list)
    tree: Dict[str, Any]
