# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Classifier for free function declarations."""

from typing import List, Type

from umlgraph.declarations import SELF_NAMES, Declaration, FunctionDecl
from umlgraph.models import RelationKind, UMLEntity, UMLFn, UMLRelation

from .base import DeclarationClassifier


class FunctionClassifier(DeclarationClassifier):
    """Turns a free function into a function entity plus call dependencies.

    Every call expression in the body yields a dependency on the called name,
    in call order. Repeated calls are left to the graph to collapse.
    """

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        if not isinstance(decl, FunctionDecl) or not decl.name:
            return []

        results: List[UMLEntity] = [
            UMLRelation(decl.name, called, RelationKind.DEPENDENCY)
            for called in decl.calls
            if called and called not in SELF_NAMES
        ]
        results.append(UMLFn(name=decl.name, signature=decl.signature or f"{decl.name}()"))
        return results

    def declaration_type(self) -> Type:
        return FunctionDecl

    def name(self) -> str:
        return "FunctionClassifier"
