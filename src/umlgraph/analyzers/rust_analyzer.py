# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Rust analyzer: source files to UML module graphs.

Pipeline per source unit:
1. File Reading: UTF-8 with latin-1 fallback, file size and line limits
2. Parsing: tree-sitter with error recovery (RustDeclarationExtractor)
3. Classifier Dispatch: every declaration through the ClassifierRegistry
4. Graph Building: two-pass GraphBuilder, inline modules as child graphs

A directory becomes a root graph with one child module graph per source
file, named by the file's dotted path relative to the directory.
"""

import fnmatch
import logging
from pathlib import Path
from typing import List, Optional

from umlgraph.analyzers.rust_extractor import RustDeclarationExtractor
from umlgraph.builder import GraphBuilder
from umlgraph.classifiers.registry import ClassifierRegistry, default_registry
from umlgraph.config import Config
from umlgraph.declarations import Declaration, SourceUnit
from umlgraph.graph import UMLGraph
from umlgraph.models import UMLEntity

logger = logging.getLogger(__name__)

# A file with this stem names the module of its directory
MODULE_INDEX_STEM = "mod"


class RustAnalyzer:
    """Analyzer turning Rust sources into UMLGraph trees.

    Error Recovery:
    - Unreadable or oversized files: Skip, log warning, continue with other files
    - Syntax errors: tree-sitter recovers, well-formed items are still analyzed
    - Classifier exceptions: Log error, continue with other classifiers

    Usage:
        analyzer = RustAnalyzer()
        graph = analyzer.analyze_path(Path("src"))
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[ClassifierRegistry] = None,
    ):
        """Initialize Rust analyzer.

        Args:
            config: Analysis configuration. If None, loads .umlgraph.yml from the
                working directory (or defaults).
            registry: Classifier registry. If None, uses the built-in classifiers.
        """
        self.config = config if config is not None else Config()
        self.registry = registry if registry is not None else default_registry()
        self.extractor = RustDeclarationExtractor()

    def analyze_source(self, source: str, name: str = "") -> UMLGraph:
        """Analyze Rust source text into one graph.

        Args:
            source: Rust source code.
            name: Module name of the graph ("" for a root graph).

        Returns:
            The built graph. Inline modules are child graphs.
        """
        unit = self.extractor.extract(source, name)
        return self._build(unit)

    def analyze_file(self, filepath: Path, name: str = "") -> Optional[UMLGraph]:
        """Analyze a single Rust file.

        Args:
            filepath: Path to the file.
            name: Module name of the resulting graph.

        Returns:
            The built graph, or None if the file was skipped.
        """
        content = self._read_file(Path(filepath))
        if content is None:
            return None

        logger.debug(f"Analyzing {filepath} as module '{name or '<root>'}'")
        return self.analyze_source(content, name)

    def analyze_path(self, path: Path) -> Optional[UMLGraph]:
        """Analyze a file or a directory tree.

        A file yields a single root graph. A directory yields an empty root
        graph owning one child module graph per discovered source file.

        Returns:
            The built graph, or None if nothing could be analyzed.
        """
        path = Path(path)
        if path.is_file():
            return self.analyze_file(path)

        if not path.is_dir():
            logger.error(f"Path not found: {path}")
            return None

        files = self.discover_files(path)
        builder = GraphBuilder("")
        analyzed = 0
        for filepath in files:
            module = self.analyze_file(filepath, self._module_name(path, filepath))
            if module is None:
                continue
            builder.add_module(module)
            analyzed += 1

        logger.info(f"Analyzed {analyzed} of {len(files)} files under {path}")
        if analyzed == 0:
            return None
        return builder.build()

    def discover_files(self, directory: Path) -> List[Path]:
        """Return source files under directory, sorted, minus ignored ones."""
        extensions = set(self.config.file_extensions)
        files: List[Path] = []
        for candidate in sorted(directory.rglob("*")):
            if not candidate.is_file() or candidate.suffix not in extensions:
                continue
            relative = candidate.relative_to(directory)
            if self._should_ignore(relative):
                logger.debug(f"Ignoring {relative}")
                continue
            files.append(candidate)
        return files

    def _should_ignore(self, relative: Path) -> bool:
        rel_str = relative.as_posix()
        for pattern in self.config.ignore_patterns:
            if fnmatch.fnmatch(rel_str, pattern) or fnmatch.fnmatch(relative.name, pattern):
                return True
            if any(fnmatch.fnmatch(part, pattern) for part in relative.parts[:-1]):
                return True
        return False

    def _module_name(self, root: Path, filepath: Path) -> str:
        """Dotted module name of a file relative to the analyzed directory.

        `src/shapes/circle.rs` -> "shapes.circle", `shapes/mod.rs` -> "shapes".
        """
        parts = list(filepath.relative_to(root).with_suffix("").parts)
        if len(parts) > 1 and parts[0] == "src":
            parts = parts[1:]
        if len(parts) > 1 and parts[-1] == MODULE_INDEX_STEM:
            parts = parts[:-1]
        return ".".join(parts)

    def _read_file(self, filepath: Path) -> Optional[str]:
        """Read file with UTF-8/latin-1 fallback and size limits.

        Returns:
            File contents as string, or None if file should be skipped.
        """
        try:
            file_size = filepath.stat().st_size
            max_bytes = self.config.max_file_size_kb * 1024
            if file_size > max_bytes:
                logger.warning(
                    f"Skipping analysis of {filepath}: {file_size} bytes "
                    f"exceeds limit ({max_bytes})"
                )
                return None

            try:
                content = filepath.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                # latin-1 accepts all byte values
                logger.warning(f"File {filepath} is not UTF-8, using latin-1 fallback encoding")
                content = filepath.read_text(encoding="latin-1")

        except FileNotFoundError:
            logger.warning(f"Skipping {filepath}: file not found")
            return None
        except PermissionError:
            logger.warning(f"Skipping {filepath}: permission denied")
            return None
        except OSError as e:
            logger.warning(f"Skipping {filepath}: {e}")
            return None

        line_count = content.count("\n") + 1
        if line_count > self.config.max_file_lines:
            logger.warning(
                f"Skipping analysis of {filepath}: {line_count} lines "
                f"exceeds limit ({self.config.max_file_lines})"
            )
            return None
        return content

    def _build(self, unit: SourceUnit) -> UMLGraph:
        builder = GraphBuilder(unit.name)
        for decl in unit.declarations:
            builder.add_observations(self._classify(decl))
        for child in unit.modules:
            builder.add_module(self._build(child))
        return builder.build()

    def _classify(self, decl: Declaration) -> List[UMLEntity]:
        """Run every classifier handling decl, isolating classifier failures."""
        observations: List[UMLEntity] = []
        for classifier in self.registry.classifiers_for(decl):
            try:
                observations.extend(classifier.classify(decl))
            except Exception as e:
                logger.error(
                    f"Classifier '{classifier.name()}' failed on "
                    f"{type(decl).__name__}: {e}",
                    exc_info=True,
                )
        return observations
