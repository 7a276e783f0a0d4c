# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Command-line interface: render a Rust file or crate as a UML diagram."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from umlgraph.analyzers.rust_analyzer import RustAnalyzer
from umlgraph.config import OUTPUT_FORMATS, Config
from umlgraph.dot_exporter import DotExporter
from umlgraph.graph import UMLGraph
from umlgraph.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="umlgraph",
        description="Render Rust sources as a UML class diagram",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    umlgraph src/lib.rs | dot -Tsvg > lib.svg
    umlgraph src/ -o crate.dot
    umlgraph src/ --format json
        """,
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Rust source file or directory to analyze",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the rendering to this file instead of stdout",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format. Default: output_format from the configuration (dot)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file. Default: ./.umlgraph.yml",
    )
    parser.add_argument(
        "--graph-name",
        type=str,
        default=None,
        help="Name of the rendered digraph. Default: graph_name from the configuration (ast)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Also write JSON logs to this directory",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def render(graph: UMLGraph, output_format: str, config: Config, graph_name: str) -> str:
    """Render a graph in the requested output format."""
    if output_format == "json":
        return json.dumps(graph.export_to_dict(), indent=2) + "\n"
    exporter = DotExporter(
        graph_name=graph_name, include_outer_relations=config.include_outer_relations
    )
    return exporter.export(graph)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)
    setup_logging(
        log_dir=args.log_dir,
        log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    if not args.path.exists():
        print(f"Path not found: {args.path}", file=sys.stderr)
        return 1

    config = Config(args.config)
    analyzer = RustAnalyzer(config=config)
    graph = analyzer.analyze_path(args.path)
    if graph is None:
        print(f"No Rust sources could be analyzed under {args.path}", file=sys.stderr)
        return 1

    output_format = args.format or config.output_format
    graph_name = args.graph_name or config.graph_name
    text = render(graph, output_format, config, graph_name)

    if args.output is not None:
        try:
            args.output.write_text(text, encoding="utf-8")
        except OSError as e:
            print(f"Error writing {args.output}: {e}", file=sys.stderr)
            return 1
        logger.info(f"Wrote {output_format} rendering to {args.output}")
    else:
        sys.stdout.write(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
