# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Rust declaration extractor using tree-sitter.

Walks the tree-sitter syntax tree of a Rust source file and produces the
declaration nodes consumed by the classifiers:

- struct / enum items -> TypeDecl
- trait items -> InterfaceDecl
- impl items -> ImplBlock
- fn items -> FunctionDecl
- use declarations -> ImportDecl
- inline `mod name { ... }` items -> child SourceUnit

Only items are extracted; expressions are reduced to the names they call or
reference. Type expressions are converted structurally (pointer flags,
generic arguments) rather than by matching their rendered text.
"""

import logging
from typing import List, Optional, Tuple

import tree_sitter
import tree_sitter_rust

from umlgraph.declarations import (
    Declaration,
    FieldDecl,
    FunctionDecl,
    ImplBlock,
    ImportDecl,
    InterfaceDecl,
    MethodDecl,
    SourceUnit,
    TypeDecl,
    TypeRef,
    UseTree,
)

logger = logging.getLogger(__name__)

_RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())

# Nodes that never carry declarations or references
_TRIVIA = frozenset({"line_comment", "block_comment", "attribute_item", "inner_attribute_item"})

# Single-segment path nodes
_PATH_LEAVES = frozenset(
    {"identifier", "type_identifier", "field_identifier", "crate", "self", "super", "metavariable"}
)


class RustDeclarationExtractor:
    """tree-sitter based extractor for Rust declarations.

    Usage:
        extractor = RustDeclarationExtractor()
        unit = extractor.extract(source_text, name="hello")
        unit.declarations  # [TypeDecl(...), ImplBlock(...), ...]
    """

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser(_RUST_LANGUAGE)

    def parse(self, source_text: str) -> Tuple[tree_sitter.Tree, bytes]:
        """Parse source text, returning the tree and the bytes it indexes into."""
        source = source_text.encode("utf-8")
        return self._parser.parse(source), source

    def extract(self, source_text: str, name: str = "") -> SourceUnit:
        """Extract declarations from Rust source text.

        Syntax errors never abort extraction: tree-sitter recovers and the
        well-formed items are still extracted.

        Args:
            source_text: Rust source code.
            name: Name of the unit (module name), "" for a root unit.

        Returns:
            SourceUnit with top-level declarations and inline modules.
        """
        tree, source = self.parse(source_text)
        unit = self._extract_items(tree.root_node, source, name)
        unit.has_errors = tree.root_node.has_error
        if unit.has_errors:
            logger.warning(f"tree-sitter reported syntax errors in module '{name or '<root>'}'")
        return unit

    # =========================================================================
    # Items
    # =========================================================================

    def _extract_items(self, container: tree_sitter.Node, source: bytes, name: str) -> SourceUnit:
        unit = SourceUnit(name=name)
        for child in container.named_children:
            if child.type == "mod_item":
                module = self._extract_module(child, source, name)
                if module is not None:
                    unit.modules.append(module)
                continue

            decl = self._extract_item(child, source)
            if decl is not None:
                unit.declarations.append(decl)
        return unit

    def _extract_item(self, node: tree_sitter.Node, source: bytes) -> Optional[Declaration]:
        if node.type == "struct_item":
            return self._extract_struct(node, source)
        if node.type == "enum_item":
            return self._extract_enum(node, source)
        if node.type == "trait_item":
            return self._extract_trait(node, source)
        if node.type == "impl_item":
            return self._extract_impl(node, source)
        if node.type == "function_item":
            return self._extract_function(node, source)
        if node.type == "use_declaration":
            argument = node.child_by_field_name("argument")
            return ImportDecl(tree=self._use_tree(argument, source) if argument else None)
        return None

    def _extract_module(
        self, node: tree_sitter.Node, source: bytes, parent_name: str
    ) -> Optional[SourceUnit]:
        """Extract an inline module. `mod name;` declarations have no body and are skipped."""
        body = node.child_by_field_name("body")
        mod_name = _child_text(node, "name", source)
        if body is None or not mod_name:
            return None
        return self._extract_items(body, source, mod_name)

    def _extract_struct(self, node: tree_sitter.Node, source: bytes) -> TypeDecl:
        body = node.child_by_field_name("body")
        return TypeDecl(
            name=_child_text(node, "name", source),
            fields=self._extract_fields(body, source) if body is not None else [],
        )

    def _extract_enum(self, node: tree_sitter.Node, source: bytes) -> TypeDecl:
        """Each payload field is kept on its own so the field rule applies per field."""
        fields: List[FieldDecl] = []
        variants: List[str] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for variant in body.named_children:
                if variant.type != "enum_variant":
                    continue
                variants.append(_normalize(_text(variant, source)))
                payload = variant.child_by_field_name("body")
                if payload is not None:
                    fields.extend(self._extract_fields(payload, source))
        return TypeDecl(name=_child_text(node, "name", source), fields=fields, variants=variants)

    def _extract_fields(self, body: tree_sitter.Node, source: bytes) -> List[FieldDecl]:
        """Extract named (`{ a: A }`) or tuple (`(A, B)`) fields."""
        fields: List[FieldDecl] = []
        if body.type == "field_declaration_list":
            for child in body.named_children:
                if child.type != "field_declaration":
                    continue
                type_node = child.child_by_field_name("type")
                if type_node is None:
                    continue
                # Rendered without visibility or attributes: "b: *mut B"
                field_name = _child_text(child, "name", source)
                fields.append(
                    FieldDecl(
                        type=_type_ref(type_node, source),
                        text=f"{field_name}: {_normalize(_text(type_node, source))}",
                        name=field_name,
                    )
                )
        elif body.type == "ordered_field_declaration_list":
            for type_node in body.children_by_field_name("type"):
                fields.append(
                    FieldDecl(
                        type=_type_ref(type_node, source),
                        text=_normalize(_text(type_node, source)),
                    )
                )
        return fields

    def _extract_trait(self, node: tree_sitter.Node, source: bytes) -> InterfaceDecl:
        body = node.child_by_field_name("body")
        return InterfaceDecl(
            name=_child_text(node, "name", source),
            methods=self._extract_methods(body, source) if body is not None else [],
        )

    def _extract_impl(self, node: tree_sitter.Node, source: bytes) -> ImplBlock:
        type_node = node.child_by_field_name("type")
        trait_node = node.child_by_field_name("trait")
        body = node.child_by_field_name("body")
        return ImplBlock(
            type_name=_principal_name(_type_ref(type_node, source)) if type_node else None,
            interface_name=_principal_name(_type_ref(trait_node, source)) if trait_node else None,
            methods=self._extract_methods(body, source) if body is not None else [],
        )

    def _extract_methods(self, body: tree_sitter.Node, source: bytes) -> List[MethodDecl]:
        methods: List[MethodDecl] = []
        for child in body.named_children:
            if child.type not in ("function_item", "function_signature_item"):
                continue
            fn = self._extract_function(child, source)
            if not fn.name:
                continue
            methods.append(
                MethodDecl(
                    name=fn.name,
                    signature=fn.signature,
                    params=fn.params,
                    return_type=fn.return_type,
                    body_refs=fn.body_refs,
                    calls=fn.calls,
                )
            )
        return methods

    def _extract_function(self, node: tree_sitter.Node, source: bytes) -> FunctionDecl:
        name = _child_text(node, "name", source)
        params_node = node.child_by_field_name("parameters")
        return_node = node.child_by_field_name("return_type")
        body = node.child_by_field_name("body")

        params: List[TypeRef] = []
        param_texts: List[str] = []
        if params_node is not None:
            for param in params_node.named_children:
                if param.type in _TRIVIA:
                    continue
                param_texts.append(_normalize(_text(param, source)))
                if param.type == "parameter":
                    type_node = param.child_by_field_name("type")
                    if type_node is not None:
                        params.append(_type_ref(type_node, source))

        signature = f"{name or ''}({', '.join(param_texts)})"
        return_type = None
        if return_node is not None:
            return_type = _type_ref(return_node, source)
            signature += f" -> {_normalize(_text(return_node, source))}"

        body_refs: List[str] = []
        calls: List[str] = []
        if body is not None:
            _collect_body_names(body, source, body_refs, calls)

        return FunctionDecl(
            name=name,
            signature=signature,
            params=params,
            return_type=return_type,
            body_refs=body_refs,
            calls=calls,
        )

    # =========================================================================
    # Use trees
    # =========================================================================

    def _use_tree(self, node: tree_sitter.Node, source: bytes) -> Optional[UseTree]:
        if node.type in _PATH_LEAVES or node.type == "scoped_identifier":
            return UseTree(segments=tuple(_path_segments(node, source)))

        if node.type == "use_as_clause":
            path = node.child_by_field_name("path")
            tree = self._use_tree(path, source) if path is not None else None
            if tree is not None:
                tree.alias = _child_text(node, "alias", source)
            return tree

        if node.type == "use_list":
            children = [
                tree
                for tree in (
                    self._use_tree(child, source)
                    for child in node.named_children
                    if child.type not in _TRIVIA
                )
                if tree is not None
            ]
            return UseTree(segments=(), children=children)

        if node.type == "scoped_use_list":
            path = node.child_by_field_name("path")
            use_list = node.child_by_field_name("list")
            listed = self._use_tree(use_list, source) if use_list is not None else None
            return UseTree(
                segments=tuple(_path_segments(path, source)) if path is not None else (),
                children=listed.children if listed is not None else [],
            )

        if node.type == "use_wildcard":
            prefix = [child for child in node.named_children if child.type not in _TRIVIA]
            segments = tuple(_path_segments(prefix[0], source)) if prefix else ()
            return UseTree(segments=segments, wildcard=True)

        logger.debug(f"Unsupported use tree node '{node.type}'")
        return None


# =============================================================================
# Helpers
# =============================================================================


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _child_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
    child = node.child_by_field_name(field_name)
    if child is None:
        return None
    return _text(child, source)


def _normalize(text: str) -> str:
    """Collapse whitespace runs (line breaks included) to single spaces."""
    return " ".join(text.split())


def _path_segments(node: tree_sitter.Node, source: bytes) -> List[str]:
    """Flatten a (possibly scoped) path into its segments.

    `std::fmt::Debug` -> ["std", "fmt", "Debug"]. Generic arguments inside
    the path are dropped.
    """
    if node.type in _PATH_LEAVES:
        return [_text(node, source)]

    if node.type in ("scoped_identifier", "scoped_type_identifier"):
        segments: List[str] = []
        path = node.child_by_field_name("path")
        if path is not None:
            segments.extend(_path_segments(path, source))
        name = node.child_by_field_name("name")
        if name is not None:
            segments.extend(_path_segments(name, source))
        return segments

    if node.type in ("generic_type", "generic_type_with_turbofish"):
        base = node.child_by_field_name("type")
        return _path_segments(base, source) if base is not None else []

    return []


def _name_from_path(segments: List[str]) -> Optional[str]:
    """Pick the entity a path refers to.

    `Type::assoc` refers to Type (capitalised segment before the last one);
    `module::item` and `item` refer to item.
    """
    if not segments:
        return None
    if len(segments) >= 2 and segments[-2][:1].isupper():
        return segments[-2]
    return segments[-1]


def _principal_name(ref: TypeRef) -> Optional[str]:
    """Name of the type an impl or trait reference is about (`&A<T>` -> A)."""
    if ref.name:
        return ref.name
    return next(ref.iter_names(), None)


def _type_ref(node: tree_sitter.Node, source: bytes) -> TypeRef:
    """Convert a tree-sitter type node into a TypeRef."""
    kind = node.type

    if kind == "type_identifier":
        return TypeRef(name=_text(node, source))

    if kind == "scoped_type_identifier":
        segments = _path_segments(node, source)
        if not segments:
            return TypeRef(name=None)
        return TypeRef(name=segments[-1])

    if kind == "generic_type":
        base_node = node.child_by_field_name("type")
        base = _type_ref(base_node, source) if base_node is not None else TypeRef(name=None)
        arguments = node.child_by_field_name("type_arguments")
        args: Tuple[TypeRef, ...] = ()
        if arguments is not None:
            args = tuple(
                _type_ref(arg, source)
                for arg in arguments.named_children
                if arg.type not in ("lifetime", *_TRIVIA)
            )
        return TypeRef(name=base.name, args=base.args + args)

    if kind == "pointer_type":
        inner = node.child_by_field_name("type")
        mutable = any(child.type == "mutable_specifier" for child in node.children)
        return TypeRef(
            name=None,
            args=(_type_ref(inner, source),) if inner is not None else (),
            pointer="mut" if mutable else "const",
        )

    if kind == "type_binding":
        bound = node.child_by_field_name("type")
        return _type_ref(bound, source) if bound is not None else TypeRef(name=None)

    if kind in ("primitive_type", "unit_type", "never_type", "lifetime"):
        return TypeRef(name=None)

    # reference_type, tuple_type, array_type, dynamic_type, abstract_type,
    # function_type, bounded_type, ...: a nameless wrapper around its parts
    return TypeRef(
        name=None,
        args=tuple(
            _type_ref(child, source)
            for child in node.named_children
            if child.type not in _TRIVIA
        ),
    )


def _collect_body_names(
    body: tree_sitter.Node, source: bytes, body_refs: List[str], calls: List[str]
) -> None:
    """Collect called names and referenced type paths from a function body.

    Method calls on values (`x.m()`) and macro invocations are not resolvable
    to entities and are skipped.
    """
    stack = [body]
    while stack:
        node = stack.pop()

        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            called = _call_target(function, source) if function is not None else None
            if called:
                calls.append(called)
            arguments = node.child_by_field_name("arguments")
            if arguments is not None:
                stack.append(arguments)
            if function is not None and function.type not in (
                "identifier",
                "scoped_identifier",
            ):
                stack.append(function)
            continue

        if node.type in ("scoped_identifier", "scoped_type_identifier"):
            name = _name_from_path(_path_segments(node, source))
            if name:
                body_refs.append(name)
            continue

        if node.type == "type_identifier":
            body_refs.append(_text(node, source))
            continue

        if node.type == "macro_invocation":
            continue

        # Reversed so names come out in source order
        stack.extend(reversed(node.named_children))


def _call_target(function: tree_sitter.Node, source: bytes) -> Optional[str]:
    """Name called by a call expression's function node, if it names an entity."""
    if function.type == "identifier":
        return _text(function, source)
    if function.type == "scoped_identifier":
        return _name_from_path(_path_segments(function, source))
    if function.type == "generic_function":
        inner = function.child_by_field_name("function")
        return _call_target(inner, source) if inner is not None else None
    return None
