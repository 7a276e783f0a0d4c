# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Classifier plugins mapping declarations to UML observations.

Components:
- DeclarationClassifier: Abstract base class for classifier plugins
- ClassifierRegistry: Registry dispatching declarations to classifiers
- TypeClassifier: Structs/enums -> concrete types, aggregation, composition
- InterfaceClassifier: Traits -> interfaces
- ImplClassifier: Impl blocks -> methods, dependency, association, realization
- FunctionClassifier: Free functions -> functions, call dependencies
- ImportClassifier: Use statements -> import placeholders
"""

from umlgraph.classifiers.base import DeclarationClassifier, field_relations
from umlgraph.classifiers.function_classifier import FunctionClassifier
from umlgraph.classifiers.impl_classifier import ImplClassifier
from umlgraph.classifiers.import_classifier import ImportClassifier
from umlgraph.classifiers.interface_classifier import InterfaceClassifier
from umlgraph.classifiers.registry import ClassifierRegistry, default_registry
from umlgraph.classifiers.type_classifier import TypeClassifier

__all__ = [
    # Base classes
    "DeclarationClassifier",
    "ClassifierRegistry",
    "default_registry",
    "field_relations",
    # Classifiers
    "TypeClassifier",
    "InterfaceClassifier",
    "ImplClassifier",
    "FunctionClassifier",
    "ImportClassifier",
]
