# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""UML graph: the authoritative, duplicate-free entity/relation model.

UMLGraph accumulates types, functions, import placeholders and relations, and
enforces the merge rules that turn an unordered stream of local observations
into one relation per pair of entities:

1. Self relations are rejected with a diagnostic.
2. A one-directional association whose exact reverse is already stored
   upgrades the stored relation to a bidirectional association.
3. Otherwise a relation for the same unordered pair is only replaced by a
   strictly higher priority kind; the first writer's direction is kept.

A graph may own child module graphs. Resolution never crosses module
boundaries; only the visibility views (relations / outer_relations) are used
by a parent when rendering its children.

Thread Safety:
- NOT thread-safe: one graph is built once per analysis run
"""

import logging
from typing import Any, Dict, List, Optional

from umlgraph.models import (
    Diagnostic,
    DiagnosticKind,
    OuterEntity,
    RelationKind,
    UMLClass,
    UMLFn,
    UMLRelation,
    outranks,
)

logger = logging.getLogger(__name__)


class UMLGraph:
    """A named graph of UML entities, optionally owning child module graphs.

    Usage:
        graph = UMLGraph("hello")
        graph.add_type(UMLClass("A"))
        graph.add_type(UMLClass("B"))
        graph.add_relation(UMLRelation("A", "B", RelationKind.COMPOSITION))
        graph.relations()  # [UMLRelation("A", "B", "composition")]
    """

    def __init__(self, name: str = "") -> None:
        """Initialize an empty graph.

        Args:
            name: Module name, used for qualification by a parent graph.
        """
        self.name = name

        # Entities, in insertion order
        self._types: Dict[str, UMLClass] = {}
        self._fns: List[UMLFn] = []
        self._externals: List[OuterEntity] = []

        # Name indices for endpoint resolution
        self._fn_names: Dict[str, UMLFn] = {}
        self._external_names: Dict[str, OuterEntity] = {}  # leaf name -> first placeholder
        self._qualified_externals: Dict[str, OuterEntity] = {}  # "scope.name" -> placeholder

        # Relations, in discovery order, plus an index by unordered endpoint pair
        self._relations: List[UMLRelation] = []
        self._relation_index: Dict[frozenset, UMLRelation] = {}

        self._modules: Dict[str, "UMLGraph"] = {}
        self.diagnostics: List[Diagnostic] = []

    # =========================================================================
    # Entities
    # =========================================================================

    def add_type(self, cls: UMLClass) -> None:
        """Add a type, merging it into an existing type of the same name.

        Args:
            cls: Type observation. Stored as a copy; the caller keeps ownership
                of the argument.
        """
        existing = self._types.get(cls.name)
        if existing is not None:
            existing.merge_from(cls)
            return
        self._types[cls.name] = UMLClass(
            name=cls.name,
            fields=list(cls.fields),
            methods=list(cls.methods),
            kind=cls.kind,
        )

    def add_function(self, fn: UMLFn) -> None:
        """Add a free function.

        Function names are assumed unique within a graph; duplicates are not
        defended against.
        """
        self._fns.append(fn)
        self._fn_names.setdefault(fn.name, fn)

    def add_external(self, outer: OuterEntity) -> None:
        """Add an import placeholder. Duplicates are harmless."""
        self._externals.append(outer)
        self._external_names.setdefault(outer.name, outer)
        self._qualified_externals.setdefault(outer.qualified_name, outer)

    def structs(self) -> List[UMLClass]:
        """Return all types in declaration order."""
        return list(self._types.values())

    def fns(self) -> List[UMLFn]:
        """Return all free functions in declaration order."""
        return list(self._fns)

    def externals(self) -> List[OuterEntity]:
        """Return all import placeholders in declaration order."""
        return list(self._externals)

    def get_type(self, name: str) -> Optional[UMLClass]:
        return self._types.get(name)

    def is_local(self, name: str) -> bool:
        """Check whether name is a type or function declared in this graph."""
        return name in self._types or name in self._fn_names

    # =========================================================================
    # Relations
    # =========================================================================

    def add_relation(self, rel: UMLRelation) -> None:
        """Add a relation candidate, applying the merge rules.

        Never raises for malformed candidates: rejected candidates are
        recorded in self.diagnostics.

        Args:
            rel: Relation observation. Stored as a copy.
        """
        if rel.is_self_relation():
            self._record(
                DiagnosticKind.SELF_RELATION,
                f"Rejected self relation on '{rel.source}' ({rel.kind})",
                rel,
            )
            return

        if rel.kind == RelationKind.ASSOCIATION_UNI:
            reverse = self.get_relation(rel.target, rel.source)
            if reverse is not None and reverse.kind == RelationKind.ASSOCIATION_UNI:
                reverse.kind = RelationKind.ASSOCIATION_BI
                logger.debug(
                    f"Upgraded association {reverse.source} -> {reverse.target} to bidirectional"
                )
                return

        existing = self._relation_index.get(rel.pair)
        if existing is None:
            stored = UMLRelation(rel.source, rel.target, rel.kind)
            self._relations.append(stored)
            self._relation_index[stored.pair] = stored
            return

        if outranks(rel.kind, existing.kind):
            logger.debug(
                f"Replaced {existing.kind} with {rel.kind} for "
                f"{existing.source} -> {existing.target}"
            )
            existing.kind = rel.kind

    def get_relation(self, source: str, target: str) -> Optional[UMLRelation]:
        """Return the stored relation with exactly this direction, if any."""
        rel = self._relation_index.get(frozenset((source, target)))
        if rel is not None and rel.source == source and rel.target == target:
            return rel
        return None

    def all_relations(self) -> List[UMLRelation]:
        """Return every stored relation, visible or not."""
        return list(self._relations)

    def relations(self) -> List[UMLRelation]:
        """Return relations whose endpoints are both declared in this graph."""
        return [
            rel
            for rel in self._relations
            if self.is_local(rel.source) and self.is_local(rel.target)
        ]

    def outer_relations(self) -> List[UMLRelation]:
        """Return relations crossing the module boundary.

        At least one endpoint is an import placeholder and the other endpoint
        resolves too. Placeholder endpoints are rewritten to their qualified
        "<origin_scope>.<name>" form; local endpoints keep their bare names.
        Returned relations are copies.
        """
        results: List[UMLRelation] = []
        for rel in self._relations:
            source = self._resolve_endpoint(rel.source)
            target = self._resolve_endpoint(rel.target)
            if source is None or target is None:
                continue
            if self.is_local(rel.source) and self.is_local(rel.target):
                continue
            results.append(UMLRelation(source, target, rel.kind))
        return results

    def unresolved_relations(self) -> List[UMLRelation]:
        """Return stored relations that surface in neither view."""
        return [
            rel
            for rel in self._relations
            if self._resolve_endpoint(rel.source) is None
            or self._resolve_endpoint(rel.target) is None
        ]

    def report_unresolved(self) -> List[Diagnostic]:
        """Record one diagnostic per unresolved relation and return them."""
        reported: List[Diagnostic] = []
        for rel in self.unresolved_relations():
            missing = [
                name for name in (rel.source, rel.target) if self._resolve_endpoint(name) is None
            ]
            reported.append(
                self._record(
                    DiagnosticKind.UNRESOLVED_NAME,
                    f"Unresolved {', '.join(missing)} in {rel.source} -> {rel.target}",
                    rel,
                )
            )
        return reported

    def _resolve_endpoint(self, name: str) -> Optional[str]:
        """Resolve a relation endpoint to its display name.

        Local names shadow imported names. Returns None for unknown names.
        """
        if self.is_local(name):
            return name
        outer = self._external_names.get(name) or self._qualified_externals.get(name)
        if outer is not None:
            return outer.qualified_name
        return None

    # =========================================================================
    # Module hierarchy
    # =========================================================================

    def add_module(self, module: "UMLGraph") -> None:
        """Attach a child module graph, keyed by its name.

        A second module with an already used name is ignored with a diagnostic.
        """
        if module.name in self._modules:
            self._record(
                DiagnosticKind.DUPLICATE_MODULE,
                f"Module '{module.name}' already exists in '{self.name}', ignoring duplicate",
            )
            return
        self._modules[module.name] = module

    @property
    def modules(self) -> Dict[str, "UMLGraph"]:
        """Child module graphs in alphabetical order of name."""
        return {name: self._modules[name] for name in sorted(self._modules)}

    def is_empty(self) -> bool:
        return not (self._types or self._fns or self._relations or self._modules)

    # =========================================================================
    # Export
    # =========================================================================

    def export_to_dict(self) -> Dict[str, Any]:
        """Export graph to a JSON-compatible dict.

        Includes the visible views only; unresolved relations are counted in
        metadata but not listed.
        """
        return {
            "name": self.name,
            "metadata": {
                "total_types": len(self._types),
                "total_functions": len(self._fns),
                "total_externals": len(self._externals),
                "total_relations": len(self._relations),
                "unresolved_relations": len(self.unresolved_relations()),
            },
            "types": [cls.to_dict() for cls in self.structs()],
            "functions": [fn.to_dict() for fn in self._fns],
            "externals": [outer.to_dict() for outer in self._externals],
            "relations": [rel.to_dict() for rel in self.relations()],
            "outer_relations": [rel.to_dict() for rel in self.outer_relations()],
            "modules": [module.export_to_dict() for module in self.modules.values()],
        }

    def _record(
        self, kind: str, message: str, relation: Optional[UMLRelation] = None
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, relation=relation)
        self.diagnostics.append(diagnostic)
        logger.debug(message)
        return diagnostic

    def __repr__(self) -> str:
        return (
            f"UMLGraph(name={self.name!r}, types={len(self._types)}, "
            f"fns={len(self._fns)}, relations={len(self._relations)}, "
            f"modules={len(self._modules)})"
        )
