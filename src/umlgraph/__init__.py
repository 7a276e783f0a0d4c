# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""UML class diagrams from Rust source code."""

from .analyzers import RustAnalyzer, RustDeclarationExtractor
from .builder import GraphBuilder
from .classifiers import ClassifierRegistry, default_registry
from .config import Config
from .dot_exporter import DotExporter
from .graph import UMLGraph
from .models import (
    ClassKind,
    Diagnostic,
    DiagnosticKind,
    OuterEntity,
    RelationKind,
    UMLClass,
    UMLFn,
    UMLRelation,
)

__version__ = "0.1.0"

__all__ = [
    "UMLGraph",
    "GraphBuilder",
    "UMLClass",
    "UMLFn",
    "UMLRelation",
    "OuterEntity",
    "RelationKind",
    "ClassKind",
    "Diagnostic",
    "DiagnosticKind",
    "ClassifierRegistry",
    "default_registry",
    "RustAnalyzer",
    "RustDeclarationExtractor",
    "DotExporter",
    "Config",
]
