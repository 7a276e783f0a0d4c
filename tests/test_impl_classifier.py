# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for ImplClassifier.

Test Coverage:
- Parameter, body and call names -> dependencies (sorted, unique)
- Return type names -> associations, never also dependencies
- Trait impls -> realization without re-declaring the type
- Self references are ignored
"""

from umlgraph.classifiers import ImplClassifier
from umlgraph.declarations import ImplBlock, MethodDecl, TypeRef
from umlgraph.models import ClassKind, RelationKind, UMLClass, UMLRelation


def _relations(observations):
    return [o for o in observations if isinstance(o, UMLRelation)]


class TestImplClassifier:
    """Tests for ImplClassifier."""

    def test_calls_become_dependencies(self):
        block = ImplBlock("Mock", methods=[MethodDecl("mock_fn", "mock_fn()", calls=["f1", "f2"])])

        observations = ImplClassifier().classify(block)

        assert observations == [
            UMLRelation("Mock", "f1", RelationKind.DEPENDENCY),
            UMLRelation("Mock", "f2", RelationKind.DEPENDENCY),
            UMLClass("Mock", fields=[], methods=["mock_fn()"], kind=ClassKind.CONCRETE),
        ]

    def test_dependencies_sorted_and_unique(self):
        block = ImplBlock(
            "A",
            methods=[
                MethodDecl("x", "x(c: C)", params=[TypeRef("C")], body_refs=["B"]),
                MethodDecl("y", "y(b: B)", params=[TypeRef("B")], calls=["C"]),
            ],
        )

        relations = _relations(ImplClassifier().classify(block))

        assert relations == [
            UMLRelation("A", "B", RelationKind.DEPENDENCY),
            UMLRelation("A", "C", RelationKind.DEPENDENCY),
        ]

    def test_return_type_is_association(self):
        block = ImplBlock("A", methods=[MethodDecl("b", "b() -> B", return_type=TypeRef("B"))])

        relations = _relations(ImplClassifier().classify(block))

        assert relations == [UMLRelation("B", "A", RelationKind.ASSOCIATION_UNI)]

    def test_association_removes_dependency(self):
        block = ImplBlock(
            "A",
            methods=[
                MethodDecl(
                    "convert",
                    "convert(b: B) -> B",
                    params=[TypeRef("B")],
                    return_type=TypeRef("B"),
                    body_refs=["B"],
                )
            ],
        )

        relations = _relations(ImplClassifier().classify(block))

        assert relations == [UMLRelation("B", "A", RelationKind.ASSOCIATION_UNI)]

    def test_generic_return_type_associates_each_name(self):
        block = ImplBlock(
            "A",
            methods=[
                MethodDecl(
                    "b",
                    "b() -> Option<B>",
                    return_type=TypeRef("Option", args=(TypeRef("B"),)),
                )
            ],
        )

        relations = _relations(ImplClassifier().classify(block))

        assert relations == [
            UMLRelation("Option", "A", RelationKind.ASSOCIATION_UNI),
            UMLRelation("B", "A", RelationKind.ASSOCIATION_UNI),
        ]

    def test_self_references_ignored(self):
        block = ImplBlock(
            "A",
            methods=[
                MethodDecl(
                    "new",
                    "new() -> Self",
                    return_type=TypeRef("Self"),
                    body_refs=["Self"],
                    calls=["Self"],
                )
            ],
        )

        assert _relations(ImplClassifier().classify(block)) == []

    def test_trait_impl_is_realization(self):
        block = ImplBlock("A", interface_name="B", methods=[MethodDecl("a", "a(&self)")])

        observations = ImplClassifier().classify(block)

        assert observations == [UMLRelation("A", "B", RelationKind.REALIZATION)]

    def test_trait_impl_keeps_behavioral_relations(self):
        block = ImplBlock(
            "A",
            interface_name="Display",
            methods=[MethodDecl("fmt", "fmt(&self, f: &mut Formatter)", params=[TypeRef("Formatter")])],
        )

        observations = ImplClassifier().classify(block)

        assert observations == [
            UMLRelation("A", "Formatter", RelationKind.DEPENDENCY),
            UMLRelation("A", "Display", RelationKind.REALIZATION),
        ]
        assert not any(isinstance(o, UMLClass) for o in observations)

    def test_empty_interface_name_is_inherent(self):
        block = ImplBlock("A", interface_name="", methods=[MethodDecl("a", "a(&self)")])

        assert ImplClassifier().classify(block) == [
            UMLClass("A", fields=[], methods=["a(&self)"], kind=ClassKind.CONCRETE)
        ]

    def test_block_without_type_skipped(self):
        assert ImplClassifier().classify(ImplBlock(None)) == []

    def test_empty_block_declares_type(self):
        assert ImplClassifier().classify(ImplBlock("A")) == [
            UMLClass("A", fields=[], methods=[], kind=ClassKind.CONCRETE)
        ]
