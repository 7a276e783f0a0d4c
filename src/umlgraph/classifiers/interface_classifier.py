# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Classifier for interface declarations (traits)."""

from typing import List, Type

from umlgraph.declarations import Declaration, InterfaceDecl
from umlgraph.models import ClassKind, UMLClass, UMLEntity

from .base import DeclarationClassifier, field_relations


class InterfaceClassifier(DeclarationClassifier):
    """Turns an interface declaration into an interface entity.

    The interface lists the signatures it declares. Fields, if an interface
    ever declares any, follow the same pointer/value rule as concrete types.
    """

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        if not isinstance(decl, InterfaceDecl) or not decl.name:
            return []

        results: List[UMLEntity] = [
            UMLClass(
                name=decl.name,
                fields=[fld.text for fld in decl.fields],
                methods=[method.signature for method in decl.methods],
                kind=ClassKind.INTERFACE,
            )
        ]
        results.extend(field_relations(decl.name, decl.fields))
        return results

    def declaration_type(self) -> Type:
        return InterfaceDecl

    def name(self) -> str:
        return "InterfaceClassifier"
