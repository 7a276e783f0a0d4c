# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Classifier for import statements.

Each leaf of a (possibly nested) use tree binds one name from a dotted scope:

    use hello::{Hello, world::hi as greet};
    -> OuterEntity("Hello", "hello"), OuterEntity("greet", "hello.world")

Leading crate/self/super segments are dropped from scopes, so imports inside
one crate line up with the module names used for directory analysis.
"""

import logging
from typing import List, Tuple, Type

from umlgraph.declarations import Declaration, ImportDecl, UseTree
from umlgraph.models import OuterEntity, UMLEntity

from .base import DeclarationClassifier

logger = logging.getLogger(__name__)

# Path keywords that name a position in the crate rather than a module.
RELATIVE_PATH_KEYWORDS = frozenset({"crate", "self", "super"})


class ImportClassifier(DeclarationClassifier):
    """Turns a use statement into import placeholders."""

    def classify(self, decl: Declaration) -> List[UMLEntity]:
        if not isinstance(decl, ImportDecl) or decl.tree is None:
            return []

        results: List[UMLEntity] = []
        _walk_use_tree(decl.tree, (), results)
        return results

    def declaration_type(self) -> Type:
        return ImportDecl

    def name(self) -> str:
        return "ImportClassifier"


def _walk_use_tree(tree: UseTree, prefix: Tuple[str, ...], results: List[UMLEntity]) -> None:
    """Collect leaves of a use tree, prepending each group's path to its children."""
    path = prefix + tuple(tree.segments)

    if tree.wildcard:
        # `use a::*` binds names we cannot see
        logger.debug(f"Ignoring wildcard import of '{'::'.join(path)}'")
        return

    if not tree.is_leaf:
        for child in tree.children:
            _walk_use_tree(child, path, results)
        return

    if not path:
        return

    leaf = path[-1]
    scope = path[:-1]
    if leaf == "self":
        # `use a::{self}` binds `a` itself
        if not scope:
            return
        leaf = scope[-1]
        scope = scope[:-1]

    scope = _strip_relative_prefix(scope)
    results.append(OuterEntity(name=tree.alias or leaf, origin_scope=".".join(scope)))


def _strip_relative_prefix(scope: Tuple[str, ...]) -> Tuple[str, ...]:
    index = 0
    while index < len(scope) and scope[index] in RELATIVE_PATH_KEYWORDS:
        index += 1
    return scope[index:]
