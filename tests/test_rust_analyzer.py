# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for RustAnalyzer file reading, discovery and dispatch."""

import logging
from typing import List, Type

import pytest
import yaml

from umlgraph.analyzers import RustAnalyzer
from umlgraph.classifiers import ClassifierRegistry, DeclarationClassifier, default_registry
from umlgraph.config import Config
from umlgraph.declarations import Declaration, TypeDecl
from umlgraph.models import RelationKind, UMLEntity, UMLRelation


def _config(tmp_path, **values):
    config_path = tmp_path / "umlgraph.yml"
    config_path.write_text(yaml.dump(values))
    return Config(config_path=config_path)


@pytest.fixture
def analyzer(tmp_path):
    return RustAnalyzer(config=Config(config_path=tmp_path / "missing.yml"))


class ExplodingClassifier(DeclarationClassifier):
    """Classifier that always fails."""

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        raise ValueError("boom")

    def declaration_type(self) -> Type:
        return TypeDecl

    def name(self) -> str:
        return "ExplodingClassifier"


class TestAnalyzeSource:
    """Tests for analyze_source."""

    def test_builds_graph(self, analyzer):
        graph = analyzer.analyze_source("struct A { b: B }\nstruct B {}\n", name="m")

        assert graph.name == "m"
        assert [cls.name for cls in graph.structs()] == ["A", "B"]
        assert graph.relations() == [UMLRelation("A", "B", RelationKind.COMPOSITION)]

    def test_inline_modules_become_child_graphs(self, analyzer):
        source = """
mod shapes {
    pub struct Circle { center: Point }
    pub struct Point {}
}
"""
        graph = analyzer.analyze_source(source)

        assert graph.structs() == []
        shapes = graph.modules["shapes"]
        assert shapes.relations() == [UMLRelation("Circle", "Point", RelationKind.COMPOSITION)]

    def test_classifier_failure_is_isolated(self, tmp_path, caplog):
        registry = default_registry()
        registry.register(ExplodingClassifier())
        analyzer = RustAnalyzer(config=Config(tmp_path / "missing.yml"), registry=registry)

        with caplog.at_level(logging.ERROR):
            graph = analyzer.analyze_source("struct A {}\nfn f() {}\n")

        assert [cls.name for cls in graph.structs()] == ["A"]
        assert [fn.name for fn in graph.fns()] == ["f"]
        assert "ExplodingClassifier" in caplog.text

    def test_empty_registry_yields_empty_graph(self, tmp_path):
        analyzer = RustAnalyzer(config=Config(tmp_path / "missing.yml"), registry=ClassifierRegistry())

        assert analyzer.analyze_source("struct A {}").is_empty()


class TestAnalyzeFile:
    """Tests for analyze_file and file reading limits."""

    def test_reads_file(self, analyzer, tmp_path):
        source_file = tmp_path / "lib.rs"
        source_file.write_text("fn f1(i: usize) {}\n")

        graph = analyzer.analyze_file(source_file, name="lib")

        assert graph.name == "lib"
        assert [fn.signature for fn in graph.fns()] == ["f1(i: usize)"]

    def test_latin1_fallback(self, analyzer, tmp_path, caplog):
        source_file = tmp_path / "lib.rs"
        source_file.write_bytes("// caf\xe9\nstruct A {}\n".encode("latin-1"))

        graph = analyzer.analyze_file(source_file)

        assert [cls.name for cls in graph.structs()] == ["A"]
        assert "latin-1" in caplog.text

    def test_missing_file_skipped(self, analyzer, tmp_path):
        assert analyzer.analyze_file(tmp_path / "missing.rs") is None

    def test_line_limit(self, tmp_path, caplog):
        analyzer = RustAnalyzer(config=_config(tmp_path, max_file_lines=2))
        source_file = tmp_path / "big.rs"
        source_file.write_text("struct A {}\nstruct B {}\nstruct C {}\nstruct D {}\n")

        assert analyzer.analyze_file(source_file) is None
        assert "exceeds limit" in caplog.text

    def test_size_limit(self, tmp_path):
        analyzer = RustAnalyzer(config=_config(tmp_path, max_file_size_kb=1))
        source_file = tmp_path / "big.rs"
        source_file.write_text("// " + "x" * 2048 + "\n")

        assert analyzer.analyze_file(source_file) is None


class TestAnalyzePath:
    """Tests for directory analysis."""

    def test_file_path_gives_root_graph(self, analyzer, tmp_path):
        source_file = tmp_path / "main.rs"
        source_file.write_text("struct A {}\n")

        graph = analyzer.analyze_path(source_file)

        assert graph.name == ""
        assert graph.modules == {}
        assert [cls.name for cls in graph.structs()] == ["A"]

    def test_directory_gives_one_module_per_file(self, analyzer, tmp_path):
        (tmp_path / "src" / "shapes").mkdir(parents=True)
        (tmp_path / "src" / "lib.rs").write_text("pub mod shapes;\n")
        (tmp_path / "src" / "shapes" / "mod.rs").write_text("pub struct Shape {}\n")
        (tmp_path / "src" / "shapes" / "circle.rs").write_text("pub struct Circle {}\n")
        (tmp_path / "README.md").write_text("not rust\n")

        graph = analyzer.analyze_path(tmp_path)

        assert list(graph.modules) == ["lib", "shapes", "shapes.circle"]
        assert [c.name for c in graph.modules["shapes"].structs()] == ["Shape"]

    def test_nested_src_directory_names(self, analyzer, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.rs").write_text("fn main() {}\n")

        graph = analyzer.analyze_path(tmp_path / "src")

        assert list(graph.modules) == ["main"]

    def test_ignore_patterns(self, tmp_path):
        crate = tmp_path / "crate"
        (crate / "target").mkdir(parents=True)
        (crate / "target" / "gen.rs").write_text("struct Gen {}\n")
        (crate / "lib.rs").write_text("struct A {}\n")
        (crate / "lib_test.rs").write_text("struct T {}\n")
        analyzer = RustAnalyzer(config=_config(tmp_path, ignore_patterns=["target", "*_test.rs"]))

        files = analyzer.discover_files(crate)

        assert [f.name for f in files] == ["lib.rs"]

    def test_empty_directory_returns_none(self, analyzer, tmp_path):
        assert analyzer.analyze_path(tmp_path) is None

    def test_missing_path_returns_none(self, analyzer, tmp_path):
        assert analyzer.analyze_path(tmp_path / "nope") is None
