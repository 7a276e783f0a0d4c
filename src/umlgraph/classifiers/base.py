# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Base interface for declaration classifier plugins.

A classifier maps one declaration node to zero or more provisional UML
observations (types, functions, import placeholders, relation candidates).
Classifiers are pure: they never touch a graph. Resolution of duplicate or
conflicting observations is the graph's job.
"""

from abc import ABC, abstractmethod
from typing import List, Type

from umlgraph.declarations import Declaration, FieldDecl
from umlgraph.models import RelationKind, UMLEntity, UMLRelation


class DeclarationClassifier(ABC):
    """Abstract base class for classifier plugins.

    Design Pattern:
    - Each classifier handles exactly one declaration variant
    - Classifiers are stateless and may be reused across source units
    - Classifiers MUST NOT raise for incomplete declarations; a declaration
      missing its name yields no observations

    Lifecycle:
    1. Classifier is registered in ClassifierRegistry
    2. The analyzer dispatches each declaration to the classifiers handling it
    3. Observations are buffered by GraphBuilder and resolved by UMLGraph
    """

    @abstractmethod
    def classify(self, decl: Declaration) -> List[UMLEntity]:
        """Translate a declaration into observations.

        Args:
            decl: Declaration of the variant returned by declaration_type().

        Returns:
            Observations in discovery order. Empty list if nothing can be
            produced confidently.
        """
        pass

    @abstractmethod
    def declaration_type(self) -> Type:
        """Return the declaration class this classifier handles."""
        pass

    @abstractmethod
    def name(self) -> str:
        """Return classifier name for logging and debugging."""
        pass

    def handles(self, decl: Declaration) -> bool:
        return isinstance(decl, self.declaration_type())


def field_relations(owner: str, fields: List[FieldDecl]) -> List[UMLRelation]:
    """Relations contributed by the fields of a type or interface.

    A field whose type contains a raw pointer references its pointee without
    owning it (aggregation); any other field owns its value (composition).
    Every named type in the field's type expression is a target.
    """
    relations: List[UMLRelation] = []
    for fld in fields:
        kind = (
            RelationKind.AGGREGATION
            if fld.type.contains_raw_pointer()
            else RelationKind.COMPOSITION
        )
        for target in fld.type.iter_names():
            relations.append(UMLRelation(owner, target, kind))
    return relations
