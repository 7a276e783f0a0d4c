# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Classifier for concrete type declarations (structs, enums, tuple structs)."""

import logging
from typing import List, Type

from umlgraph.declarations import Declaration, TypeDecl
from umlgraph.models import ClassKind, UMLClass, UMLEntity

from .base import DeclarationClassifier, field_relations

logger = logging.getLogger(__name__)


class TypeClassifier(DeclarationClassifier):
    """Turns a type declaration into a concrete type plus field relations.

    Field rule:
    - raw pointer anywhere in the field type -> aggregation to each named type
    - otherwise -> composition to each named type
    """

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        if not isinstance(decl, TypeDecl) or not decl.name:
            logger.debug("Skipping type declaration without a name")
            return []

        results: List[UMLEntity] = []
        results.extend(field_relations(decl.name, decl.fields))
        results.append(
            UMLClass(
                name=decl.name,
                fields=decl.display_fields,
                methods=[],
                kind=ClassKind.CONCRETE,
            )
        )
        return results

    def declaration_type(self) -> Type:
        return TypeDecl

    def name(self) -> str:
        return "TypeClassifier"
