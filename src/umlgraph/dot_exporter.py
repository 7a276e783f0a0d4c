# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Graphviz DOT rendering of UML module graphs.

Output layout (4-space indentation per nesting level):

    digraph ast {
        "A"[label="{A|b: *mut B}"][shape="record"];
        "B"[label="B"][shape="record"];
        "A" -> "B"[arrowtail="odiamond"][dir="back"];
        subgraph cluster_hello {
            label="hello";
            "hello.Hello"[label="Hello"][shape="record"];
        }
        "mock.mock" -> "hello.Hello"[style="dashed"][arrowhead="vee"];
    }

Child module nodes are qualified with the module path. Relations crossing
module boundaries (outer relations) are emitted at the top level once every
cluster is declared.
"""

import logging
import re
from typing import Dict, List, Tuple

from umlgraph.graph import UMLGraph
from umlgraph.models import RelationKind, UMLClass, UMLFn, UMLRelation

logger = logging.getLogger(__name__)

INDENT = "    "

# Edge attributes per relation kind, in rendering order
EDGE_ATTRIBUTES: Dict[str, List[Tuple[str, str]]] = {
    RelationKind.AGGREGATION: [("arrowtail", "odiamond"), ("dir", "back")],
    RelationKind.COMPOSITION: [("arrowtail", "diamond"), ("dir", "back")],
    RelationKind.DEPENDENCY: [("style", "dashed"), ("arrowhead", "vee")],
    RelationKind.ASSOCIATION_UNI: [("arrowhead", "vee")],
    RelationKind.ASSOCIATION_BI: [("arrowhead", "none")],
    RelationKind.REALIZATION: [("style", "dashed"), ("arrowhead", "onormal")],
}

# Characters with a meaning inside record labels
_RECORD_SPECIAL = re.compile(r"([{}|<>\\])")
_PLAIN_ID = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def escape_record(text: str) -> str:
    """Escape record label metacharacters."""
    return _RECORD_SPECIAL.sub(r"\\\1", text)


def quote(text: str) -> str:
    """Render text as a double-quoted DOT string.

    Backslashes pass through unchanged so label escapes such as `\\l` survive.
    """
    return '"' + text.replace('"', '\\"') + '"'


def qualify(module_path: str, name: str) -> str:
    return f"{module_path}.{name}" if module_path else name


def cluster_id(module_path: str) -> str:
    """Cluster identifier for a dotted module path (`a.b` -> `cluster_a_b`)."""
    return "cluster_" + re.sub(r"[^A-Za-z0-9_]", "_", module_path)


class DotExporter:
    """Renders a UMLGraph and its child modules as a Graphviz digraph.

    Usage:
        exporter = DotExporter(graph_name="ast")
        dot_text = exporter.export(graph)
    """

    def __init__(self, graph_name: str = "ast", include_outer_relations: bool = True) -> None:
        self.graph_name = graph_name
        self.include_outer_relations = include_outer_relations

    def export(self, graph: UMLGraph) -> str:
        """Render graph to DOT text, terminated by a newline."""
        graph_id = self.graph_name if _PLAIN_ID.match(self.graph_name) else quote(self.graph_name)
        lines = [f"digraph {graph_id} {{"]
        self._render_graph(graph, "", 1, lines)

        if self.include_outer_relations:
            outer = self._collect_outer_relations(graph, "")
            for rel in outer:
                lines.append(INDENT + self.edge_line(rel))
            logger.debug(f"Rendered {len(outer)} outer relations")

        lines.append("}")
        return "\n".join(lines) + "\n"

    # =========================================================================
    # Statements
    # =========================================================================

    def type_node_line(self, cls: UMLClass, node_id: str) -> str:
        return f"{quote(node_id)}[label={quote(self.type_label(cls))}][shape=\"record\"];"

    def fn_node_line(self, fn: UMLFn, node_id: str) -> str:
        return f"{quote(node_id)}[label={quote(fn.name)}];"

    def edge_line(self, rel: UMLRelation) -> str:
        attributes = "".join(
            f"[{key}={quote(value)}]" for key, value in EDGE_ATTRIBUTES.get(rel.kind, [])
        )
        return f"{quote(rel.source)} -> {quote(rel.target)}{attributes};"

    def type_label(self, cls: UMLClass) -> str:
        """Record label `{Name|fields|methods}`; a bare name when both are empty.

        Interfaces are headed `Interface\\lName`. Empty sections are omitted.
        """
        header = escape_record(cls.name)
        if cls.is_interface:
            header = "Interface\\l" + header

        sections = [
            "\\l".join(escape_record(text) for text in section)
            for section in (cls.fields, cls.methods)
            if section
        ]
        if not sections:
            return header
        return "{" + "|".join([header] + sections) + "}"

    # =========================================================================
    # Traversal
    # =========================================================================

    def _render_graph(self, graph: UMLGraph, module_path: str, depth: int, lines: List[str]) -> None:
        indent = INDENT * depth
        for cls in graph.structs():
            lines.append(indent + self.type_node_line(cls, qualify(module_path, cls.name)))
        for fn in graph.fns():
            lines.append(indent + self.fn_node_line(fn, qualify(module_path, fn.name)))
        for rel in graph.relations():
            qualified = UMLRelation(
                qualify(module_path, rel.source), qualify(module_path, rel.target), rel.kind
            )
            lines.append(indent + self.edge_line(qualified))

        for module in graph.modules.values():
            child_path = qualify(module_path, module.name)
            lines.append(f"{indent}subgraph {cluster_id(child_path)} {{")
            lines.append(f"{indent}{INDENT}label={quote(module.name)};")
            self._render_graph(module, child_path, depth + 1, lines)
            lines.append(f"{indent}}}")

    def _collect_outer_relations(self, graph: UMLGraph, module_path: str) -> List[UMLRelation]:
        """Outer relations of graph and all descendants, local endpoints qualified.

        Placeholder endpoints already carry their import scope and are kept as is.
        """
        results: List[UMLRelation] = []
        for rel in graph.outer_relations():
            source = qualify(module_path, rel.source) if graph.is_local(rel.source) else rel.source
            target = qualify(module_path, rel.target) if graph.is_local(rel.target) else rel.target
            results.append(UMLRelation(source, target, rel.kind))

        for module in graph.modules.values():
            results.extend(
                self._collect_outer_relations(module, qualify(module_path, module.name))
            )
        return results
