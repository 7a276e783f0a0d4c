# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for ClassifierRegistry dispatch."""

from typing import List, Type

import pytest

from umlgraph.classifiers import (
    ClassifierRegistry,
    DeclarationClassifier,
    FunctionClassifier,
    ImplClassifier,
    ImportClassifier,
    InterfaceClassifier,
    TypeClassifier,
    default_registry,
)
from umlgraph.declarations import Declaration, FunctionDecl, ImplBlock, ImportDecl, TypeDecl
from umlgraph.models import UMLEntity


class CountingClassifier(DeclarationClassifier):
    """Classifier that records the declarations it sees."""

    def __init__(self):
        self.seen = []

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        self.seen.append(decl)
        return []

    def declaration_type(self) -> Type:
        return TypeDecl

    def name(self) -> str:
        return "CountingClassifier"


class TestClassifierRegistry:
    """Tests for ClassifierRegistry."""

    def test_register_rejects_non_classifier(self):
        registry = ClassifierRegistry()
        with pytest.raises(TypeError):
            registry.register("TypeClassifier")

    def test_classifiers_for_dispatches_by_variant(self):
        registry = ClassifierRegistry()
        counting = CountingClassifier()
        registry.register(counting)
        registry.register(FunctionClassifier())

        assert registry.classifiers_for(TypeDecl("A")) == [counting]
        assert registry.classifiers_for(ImplBlock("A")) == []

    def test_registration_order_kept(self):
        registry = ClassifierRegistry()
        first = CountingClassifier()
        second = TypeClassifier()
        registry.register(first)
        registry.register(second)

        assert registry.classifiers_for(TypeDecl("A")) == [first, second]
        assert registry.count() == 2

    def test_clear(self):
        registry = default_registry()
        registry.clear()
        assert registry.count() == 0
        assert registry.get_classifiers() == []

    def test_default_registry_covers_every_variant(self):
        registry = default_registry()

        names = [c.name() for c in registry.get_classifiers()]
        assert names == [
            "TypeClassifier",
            "InterfaceClassifier",
            "ImplClassifier",
            "FunctionClassifier",
            "ImportClassifier",
        ]
        assert isinstance(registry.classifiers_for(ImportDecl(None))[0], ImportClassifier)
        assert isinstance(registry.classifiers_for(ImplBlock("A"))[0], ImplClassifier)
        assert isinstance(registry.classifiers_for(FunctionDecl("f"))[0], FunctionClassifier)
        assert not any(
            isinstance(c, InterfaceClassifier) for c in registry.classifiers_for(TypeDecl("A"))
        )
