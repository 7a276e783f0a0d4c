# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Core data models for UML entity graphs.

This module defines the entities produced by classifiers and stored by UMLGraph:
- RelationKind: Relation types with an explicit merge priority
- ClassKind: Concrete type vs. interface
- UMLFn: Free function summary
- UMLClass: Class-like type summary (fields + method signatures + kind)
- UMLRelation: Directed, typed edge between two entity names
- OuterEntity: Placeholder for a name bound by an import statement
- Diagnostic: Non-fatal problem recorded while resolving relations

All models use JSON-compatible primitives for serialization.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class RelationKind:
    """Types of relations between UML entities.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    Merge priority lives in RELATION_KIND_PRIORITY, not in declaration order.
    """

    DEPENDENCY = "dependency"  # parameter, call or body reference
    ASSOCIATION_UNI = "association_uni"  # produced via a return type
    ASSOCIATION_BI = "association_bi"  # produced in both directions
    AGGREGATION = "aggregation"  # raw pointer field
    COMPOSITION = "composition"  # by-value field
    REALIZATION = "realization"  # impl Trait for Type


# Lowest to highest. A stored relation is only ever replaced by a strictly higher kind.
RELATION_KIND_PRIORITY: Dict[str, int] = {
    RelationKind.DEPENDENCY: 0,
    RelationKind.ASSOCIATION_UNI: 1,
    RelationKind.ASSOCIATION_BI: 2,
    RelationKind.AGGREGATION: 3,
    RelationKind.COMPOSITION: 4,
    RelationKind.REALIZATION: 5,
}


def relation_priority(kind: str) -> int:
    """Return the merge priority of a relation kind.

    Raises:
        KeyError: If kind is not a RelationKind value.
    """
    return RELATION_KIND_PRIORITY[kind]


def outranks(candidate: str, existing: str) -> bool:
    """Check whether candidate kind has strictly higher priority than existing kind."""
    return relation_priority(candidate) > relation_priority(existing)


class ClassKind:
    """Kinds of class-like entities.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    CONCRETE = "concrete"  # struct / enum
    INTERFACE = "interface"  # trait


@dataclass
class UMLFn:
    """A free function.

    The signature is display-only and never used for resolution.
    """

    name: str  # e.g. "f1"
    signature: str  # e.g. "f1(i: usize)"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {"name": self.name, "signature": self.signature}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UMLFn":
        """Deserialize from JSON-compatible dict."""
        return cls(name=data["name"], signature=data["signature"])


@dataclass
class UMLClass:
    """A class-like type: struct, enum or trait.

    A type's data declaration and its method blocks are separate syntactic
    units describing one logical entity, so several UMLClass observations with
    the same name are merged by the graph instead of duplicated.
    """

    name: str
    fields: List[str] = field(default_factory=list)  # raw field text, display-only
    methods: List[str] = field(default_factory=list)  # method signatures
    kind: str = ClassKind.CONCRETE  # ClassKind value

    @property
    def is_interface(self) -> bool:
        return self.kind == ClassKind.INTERFACE

    def merge_from(self, other: "UMLClass") -> None:
        """Merge another observation of the same type into this one.

        Methods are concatenated. Fields are taken from the first observation
        that declares any. An interface observation makes the merged type an
        interface regardless of order.
        """
        if other.name != self.name:
            logger.debug(f"Refusing to merge '{other.name}' into '{self.name}'")
            return

        self.methods.extend(other.methods)
        if not self.fields and other.fields:
            self.fields = list(other.fields)
        if other.kind == ClassKind.INTERFACE:
            self.kind = ClassKind.INTERFACE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "name": self.name,
            "fields": list(self.fields),
            "methods": list(self.methods),
            "kind": self.kind,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UMLClass":
        """Deserialize from JSON-compatible dict."""
        return cls(
            name=data["name"],
            fields=list(data.get("fields", [])),
            methods=list(data.get("methods", [])),
            kind=data.get("kind", ClassKind.CONCRETE),
        )


@dataclass
class UMLRelation:
    """A directed, typed edge between two entity names.

    Only the kind is ever changed after construction (by the graph's merge
    rules); endpoints are fixed by the first observation.
    """

    source: str  # "from" entity name
    target: str  # "to" entity name
    kind: str  # RelationKind value

    @property
    def pair(self) -> frozenset:
        """Unordered endpoint pair used for uniqueness."""
        return frozenset((self.source, self.target))

    def is_self_relation(self) -> bool:
        return self.source == self.target

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {"from": self.source, "to": self.target, "kind": self.kind}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UMLRelation":
        """Deserialize from JSON-compatible dict.

        Raises:
            KeyError: If required fields are missing from data dict.
        """
        return cls(source=data["from"], target=data["to"], kind=data["kind"])


@dataclass
class OuterEntity:
    """A name known only through an import statement.

    Carries no fields or methods. Exists so relations can reference it and be
    given a scope-qualified display name.
    """

    name: str  # leaf name bound by the import, e.g. "Hello"
    origin_scope: str  # dotted scope the import claims, e.g. "hello"

    @property
    def qualified_name(self) -> str:
        """Return "<origin_scope>.<name>", or the bare name for an empty scope."""
        if not self.origin_scope:
            return self.name
        return f"{self.origin_scope}.{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {"name": self.name, "origin_scope": self.origin_scope}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OuterEntity":
        """Deserialize from JSON-compatible dict."""
        return cls(name=data["name"], origin_scope=data.get("origin_scope", ""))


class DiagnosticKind:
    """Kinds of non-fatal diagnostics recorded by the graph."""

    SELF_RELATION = "self_relation"
    UNRESOLVED_NAME = "unresolved_name"
    DUPLICATE_MODULE = "duplicate_module"


@dataclass
class Diagnostic:
    """A non-fatal problem noticed while building a graph."""

    kind: str  # DiagnosticKind value
    message: str
    relation: Optional[UMLRelation] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        result: Dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.relation is not None:
            result["relation"] = self.relation.to_dict()
        return result


# Anything a classifier may observe for a single declaration.
UMLEntity = Union[UMLClass, UMLFn, UMLRelation, OuterEntity]
