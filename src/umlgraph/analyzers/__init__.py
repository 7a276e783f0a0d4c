# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Source front ends producing declaration nodes and module graphs."""

from umlgraph.analyzers.rust_analyzer import RustAnalyzer
from umlgraph.analyzers.rust_extractor import RustDeclarationExtractor

__all__ = ["RustAnalyzer", "RustDeclarationExtractor"]
