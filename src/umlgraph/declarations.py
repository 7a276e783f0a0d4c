# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Declaration nodes handed from a syntax-tree walker to the classifiers.

These dataclasses are the boundary between parsing and classification. A
front end (see analyzers/) turns a concrete syntax tree into a flat list of
declarations; classifiers only ever see these nodes, never the parser's tree.

Declaration variants (closed set):
- TypeDecl: struct / enum / tuple struct
- InterfaceDecl: trait
- ImplBlock: inherent impl or trait impl for a type
- FunctionDecl: free function
- ImportDecl: use statement with a possibly nested use tree
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

# Names that refer to the enclosing type or value rather than another entity.
SELF_NAMES = frozenset({"Self", "self"})


@dataclass(frozen=True)
class TypeRef:
    """Structured type expression.

    Generic arguments are kept as nested TypeRefs instead of being cut off the
    rendered text, so `Option<Box<B>>` yields the names Option, Box and B.
    """

    name: Optional[str]  # base identifier; None for tuples, arrays, unit
    args: Tuple["TypeRef", ...] = ()  # generic args, tuple/array elements, referents
    pointer: Optional[str] = None  # "mut" / "const" for raw pointers

    @property
    def is_raw_pointer(self) -> bool:
        return self.pointer is not None

    def contains_raw_pointer(self) -> bool:
        """Check whether a raw pointer appears anywhere in the expression."""
        return self.is_raw_pointer or any(arg.contains_raw_pointer() for arg in self.args)

    def iter_names(self) -> Iterator[str]:
        """Yield every named type in the expression, outermost first."""
        if self.name and self.name not in SELF_NAMES:
            yield self.name
        for arg in self.args:
            yield from arg.iter_names()

    def names(self) -> List[str]:
        return list(self.iter_names())


@dataclass
class FieldDecl:
    """A field of a type or of an enum variant's payload."""

    type: TypeRef
    text: str  # display text, e.g. "b: *mut B"
    name: Optional[str] = None  # None for tuple fields


@dataclass
class MethodDecl:
    """A function inside an impl block or trait body."""

    name: str
    signature: str  # display text, e.g. "a(&self) -> Option<T>"
    params: List[TypeRef] = field(default_factory=list)
    return_type: Optional[TypeRef] = None
    body_refs: List[str] = field(default_factory=list)  # named paths used in the body
    calls: List[str] = field(default_factory=list)  # called names in the body


@dataclass
class TypeDecl:
    """Declaration of a concrete type.

    For enums, fields holds the payload fields of every variant and variants
    holds one display line per variant, e.g. "Circle(Radius)".
    """

    name: Optional[str]
    fields: List[FieldDecl] = field(default_factory=list)
    variants: List[str] = field(default_factory=list)

    @property
    def display_fields(self) -> List[str]:
        if self.variants:
            return list(self.variants)
        return [fld.text for fld in self.fields]


@dataclass
class InterfaceDecl:
    """Declaration of an interface (trait)."""

    name: Optional[str]
    fields: List[FieldDecl] = field(default_factory=list)
    methods: List[MethodDecl] = field(default_factory=list)


@dataclass
class ImplBlock:
    """A method-implementation block for a type.

    interface_name is set when the block implements an interface for the type.
    """

    type_name: Optional[str]
    interface_name: Optional[str] = None
    methods: List[MethodDecl] = field(default_factory=list)


@dataclass
class FunctionDecl:
    """Declaration of a free function."""

    name: Optional[str]
    signature: str = ""
    params: List[TypeRef] = field(default_factory=list)
    return_type: Optional[TypeRef] = None
    body_refs: List[str] = field(default_factory=list)
    calls: List[str] = field(default_factory=list)


@dataclass
class UseTree:
    """One node of an import tree.

    `use a::b::{C, d::E as F}` is UseTree(("a", "b"), children=[
    UseTree(("C",)), UseTree(("d", "E"), alias="F")]).
    """

    segments: Tuple[str, ...]
    children: List["UseTree"] = field(default_factory=list)
    alias: Optional[str] = None
    wildcard: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children and not self.wildcard


@dataclass
class ImportDecl:
    """An import statement."""

    tree: Optional[UseTree]


Declaration = Union[TypeDecl, InterfaceDecl, ImplBlock, FunctionDecl, ImportDecl]


@dataclass
class SourceUnit:
    """Declarations of one source unit, with inline modules as child units."""

    name: str
    declarations: List[Declaration] = field(default_factory=list)
    modules: List["SourceUnit"] = field(default_factory=list)
    has_errors: bool = False  # parser recovered from syntax errors
