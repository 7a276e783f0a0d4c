# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Two-pass graph builder.

Relation visibility depends on knowing every entity of a graph, so a graph is
never fed observations in discovery order directly. GraphBuilder buffers the
classifier output of a whole source unit and replays it in two passes:

Pass 1: types, functions and import placeholders
Pass 2: relations, in discovery order

Usage:
    builder = GraphBuilder("hello")
    builder.add_observations(classifier.classify(decl))
    graph = builder.build()
"""

import logging
from typing import Iterable, List

from umlgraph.graph import UMLGraph
from umlgraph.models import OuterEntity, UMLClass, UMLEntity, UMLFn, UMLRelation

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds one UMLGraph from an unordered stream of observations.

    A builder is single-use: build() may be called once.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._entities: List[UMLEntity] = []
        self._relations: List[UMLRelation] = []
        self._modules: List[UMLGraph] = []
        self._built = False

    def add_observations(self, observations: Iterable[UMLEntity]) -> None:
        """Buffer classifier observations for the next build().

        Raises:
            RuntimeError: If the builder was already used.
        """
        self._check_not_built()
        for obs in observations:
            if isinstance(obs, UMLRelation):
                self._relations.append(obs)
            elif isinstance(obs, (UMLClass, UMLFn, OuterEntity)):
                self._entities.append(obs)
            else:
                logger.warning(f"Ignoring unknown observation type {type(obs).__name__}")

    def add_module(self, module: UMLGraph) -> None:
        """Attach a finished child module graph to the graph being built."""
        self._check_not_built()
        self._modules.append(module)

    def build(self) -> UMLGraph:
        """Replay buffered observations into a fresh graph.

        Returns:
            The built graph.

        Raises:
            RuntimeError: If called more than once.
        """
        self._check_not_built()
        self._built = True

        graph = UMLGraph(self.name)

        # Pass 1: entities
        for entity in self._entities:
            if isinstance(entity, UMLClass):
                graph.add_type(entity)
            elif isinstance(entity, UMLFn):
                graph.add_function(entity)
            else:
                graph.add_external(entity)

        # Pass 2: relations, now that every local name is known
        for rel in self._relations:
            graph.add_relation(rel)

        for module in self._modules:
            graph.add_module(module)

        unresolved = graph.report_unresolved()
        logger.debug(
            f"Built graph '{self.name}': {len(graph.structs())} types, {len(graph.fns())} fns, "
            f"{len(graph.all_relations())} relations ({len(unresolved)} unresolved)"
        )
        return graph

    def _check_not_built(self) -> None:
        if self._built:
            raise RuntimeError(f"GraphBuilder '{self.name}' has already built its graph")
