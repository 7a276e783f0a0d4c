# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Classifier for method-implementation blocks.

Relation rules for an impl block of type T:
- names in a return type      -> association (name -> T), "T produces name"
- names in parameters or body -> dependency  (T -> name)
- a name seen in a return type is never also reported as a dependency
- `impl I for T`              -> realization (T -> I), and T's methods are not
                                 re-declared on a plain entity
"""

import logging
from typing import List, Type

from umlgraph.declarations import SELF_NAMES, Declaration, ImplBlock
from umlgraph.models import ClassKind, RelationKind, UMLClass, UMLEntity, UMLRelation

from .base import DeclarationClassifier

logger = logging.getLogger(__name__)


class ImplClassifier(DeclarationClassifier):
    """Turns an impl block into method signatures and behavioral relations."""

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        if not isinstance(decl, ImplBlock) or not decl.type_name:
            logger.debug("Skipping impl block without a self type")
            return []

        type_name = decl.type_name
        dependencies: List[str] = []
        associations: List[str] = []

        for method in decl.methods:
            for param in method.params:
                dependencies.extend(param.iter_names())
            dependencies.extend(method.body_refs)
            dependencies.extend(method.calls)
            if method.return_type is not None:
                associations.extend(method.return_type.iter_names())

        associations = _unique(associations)
        dependency_set = sorted(
            {
                name
                for name in dependencies
                if name not in SELF_NAMES and name not in associations
            }
        )

        results: List[UMLEntity] = []
        results.extend(
            UMLRelation(name, type_name, RelationKind.ASSOCIATION_UNI) for name in associations
        )
        results.extend(
            UMLRelation(type_name, name, RelationKind.DEPENDENCY) for name in dependency_set
        )

        interface_name = decl.interface_name
        if interface_name:
            results.append(UMLRelation(type_name, interface_name, RelationKind.REALIZATION))
        else:
            results.append(
                UMLClass(
                    name=type_name,
                    fields=[],
                    methods=[method.signature for method in decl.methods],
                    kind=ClassKind.CONCRETE,
                )
            )

        return results

    def declaration_type(self) -> Type:
        return ImplBlock

    def name(self) -> str:
        return "ImplClassifier"


def _unique(names: List[str]) -> List[str]:
    """Drop duplicates and self names, keeping first-seen order."""
    seen = set()
    result = []
    for name in names:
        if name in seen or name in SELF_NAMES:
            continue
        seen.add(name)
        result.append(name)
    return result
