"""
Type hierarchy for the resolved tree.

A JType is a qualified name plus its direct supertypes. The closure of a
type is the type itself and every transitive supertype; detectors use it for
"descends from" and namespace checks.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional, Tuple


@dataclass(frozen=True)
class JType:
    name: str  # fully qualified, e.g. java.util.ArrayList
    supertypes: Tuple["JType", ...] = field(default=(), compare=False, repr=False)
    namespace_override: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def namespace(self) -> str:
        """Declaring package. Derived from the qualified name unless given."""
        if self.namespace_override is not None:
            return self.namespace_override
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[0]

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]


def closure(jtype: Optional[JType]) -> FrozenSet[JType]:
    """All direct and transitive supertypes, including the type itself."""
    if jtype is None:
        return frozenset()

    seen = {jtype}
    pending = [jtype]
    while pending:
        current = pending.pop()
        for parent in current.supertypes:
            if parent not in seen:
                seen.add(parent)
                pending.append(parent)
    return frozenset(seen)


def is_descendant_of(jtype: Optional[JType], qualified_name: str) -> bool:
    """Check if qualified_name appears anywhere in the type's closure."""
    return any(t.name == qualified_name for t in closure(jtype))


class TypeTable:
    """
    Name -> JType registry for one analysis.

    Types must be registered supertypes-first, since JType is immutable and
    holds its supertypes directly. Lookups of unknown names create an
    isolated type (no supertypes): the front end may reference library types
    it did not describe, and such types belong to no known family.
    """

    def __init__(self, types: Iterable[JType] = ()):
        self._types: Dict[str, JType] = {}
        for jtype in types:
            self.add(jtype)

    def add(self, jtype: JType) -> JType:
        self._types[jtype.name] = jtype
        return jtype

    def define(self, name: str, *supertype_names: str) -> JType:
        supertypes = tuple(self.get(s) for s in supertype_names)
        return self.add(JType(name, supertypes))

    def get(self, name: str) -> JType:
        if name not in self._types:
            self._types[name] = JType(name)
        return self._types[name]

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)
