# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for FunctionClassifier."""

from umlgraph.classifiers import FunctionClassifier
from umlgraph.declarations import FunctionDecl, TypeRef
from umlgraph.models import RelationKind, UMLFn, UMLRelation


class TestFunctionClassifier:
    """Tests for FunctionClassifier."""

    def test_function_entity(self):
        decl = FunctionDecl("f1", "f1(i: usize)", params=[TypeRef(None)])

        assert FunctionClassifier().classify(decl) == [UMLFn("f1", "f1(i: usize)")]

    def test_calls_become_dependencies_in_order(self):
        decl = FunctionDecl("mock", "mock()", calls=["Hello", "hello", "Hello"])

        observations = FunctionClassifier().classify(decl)

        assert observations == [
            UMLRelation("mock", "Hello", RelationKind.DEPENDENCY),
            UMLRelation("mock", "hello", RelationKind.DEPENDENCY),
            UMLRelation("mock", "Hello", RelationKind.DEPENDENCY),
            UMLFn("mock", "mock()"),
        ]

    def test_parameters_are_not_relations(self):
        """Only calls create dependencies from free functions."""
        decl = FunctionDecl("f", "f(b: B)", params=[TypeRef("B")], body_refs=["C"])

        observations = FunctionClassifier().classify(decl)

        assert observations == [UMLFn("f", "f(b: B)")]

    def test_missing_signature_defaults_to_name(self):
        assert FunctionClassifier().classify(FunctionDecl("main")) == [UMLFn("main", "main()")]

    def test_self_and_empty_calls_skipped(self):
        decl = FunctionDecl("f", "f()", calls=["", "Self"])

        assert FunctionClassifier().classify(decl) == [UMLFn("f", "f()")]

    def test_nameless_function_skipped(self):
        assert FunctionClassifier().classify(FunctionDecl(None, calls=["g"])) == []
