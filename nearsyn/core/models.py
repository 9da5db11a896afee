"""
Data models for contract declarations and type expressions
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple, Union


# ============================================================================
# Type expressions
# ============================================================================

@dataclass(frozen=True)
class PathType:
    """Named type, e.g. `U64` or `Option<U64>`"""
    segments: Tuple[str, ...]
    args: Optional[Tuple["TypeExpr", ...]] = None  # None when no `<...>` was written

    @property
    def name(self) -> str:
        return "::".join(self.segments)

    def __str__(self) -> str:
        if self.args is None:
            return self.name
        return f"{self.name}<{', '.join(str(arg) for arg in self.args)}>"


@dataclass(frozen=True)
class ParenType:
    """Parenthesized single type, e.g. `(U64)`"""
    elem: "TypeExpr"

    def __str__(self) -> str:
        return f"({self.elem})"


@dataclass(frozen=True)
class TupleType:
    """Tuple type, including the unit type `()`"""
    elems: Tuple["TypeExpr", ...] = ()

    def __str__(self) -> str:
        if len(self.elems) == 1:
            return f"({self.elems[0]},)"
        return f"({', '.join(str(elem) for elem in self.elems)})"


@dataclass(frozen=True)
class OpaqueType:
    """Any other type shape (references, pointers, arrays, ...), kept as source text"""
    text: str

    def __str__(self) -> str:
        return self.text


TypeExpr = Union[PathType, ParenType, TupleType, OpaqueType]


def simple_type(name: str) -> PathType:
    """Build a path type from a `::` separated name"""
    return PathType(tuple(name.split("::")))


# ============================================================================
# Members
# ============================================================================

@dataclass(frozen=True)
class Receiver:
    """The `self` parameter of a method"""
    reference: bool = True
    mutable: bool = False


@dataclass
class Param:
    name: str
    ty: TypeExpr


@dataclass
class MethodDecl:
    """A method declared in an implementation or an interface"""
    name: str
    params: List[Param] = field(default_factory=list)  # receiver excluded
    receiver: Optional[Receiver] = None
    output: Optional[TypeExpr] = None
    markers: FrozenSet[str] = frozenset()
    is_pub: bool = False
    docs: List[str] = field(default_factory=list)


@dataclass
class FieldDecl:
    """Struct or enum-variant field; `name` is None for tuple fields"""
    ty: TypeExpr
    name: Optional[str] = None
    docs: List[str] = field(default_factory=list)


@dataclass
class VariantDecl:
    name: str
    shape: str = "unit"  # named | tuple | unit
    fields: List[FieldDecl] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)


# ============================================================================
# Declarations
# ============================================================================

@dataclass
class ImplDeclaration:
    """Common shape of `impl` blocks"""
    self_ty: TypeExpr
    methods: List[MethodDecl] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)
    markers: FrozenSet[str] = frozenset()
    index: int = 0

    @property
    def interface(self) -> Optional[str]:
        return None


@dataclass
class InterfaceImplementation(ImplDeclaration):
    """`impl Trait for Type { ... }`"""
    trait_name: str = ""

    @property
    def interface(self) -> Optional[str]:
        return self.trait_name


@dataclass
class BareExtension(ImplDeclaration):
    """`impl Type { ... }`"""


@dataclass
class StructShape:
    name: str
    shape: str = "named"  # named | tuple | unit
    fields: List[FieldDecl] = field(default_factory=list)
    derives: FrozenSet[str] = frozenset()
    markers: FrozenSet[str] = frozenset()
    docs: List[str] = field(default_factory=list)
    index: int = 0


@dataclass
class EnumShape:
    name: str
    variants: List[VariantDecl] = field(default_factory=list)
    derives: FrozenSet[str] = frozenset()
    markers: FrozenSet[str] = frozenset()
    docs: List[str] = field(default_factory=list)
    index: int = 0


@dataclass
class TypeAlias:
    name: str
    ty: TypeExpr
    docs: List[str] = field(default_factory=list)
    index: int = 0


@dataclass
class InterfaceDefinition:
    """`trait Name { ... }`"""
    name: str
    methods: List[MethodDecl] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)
    index: int = 0


Declaration = Union[
    InterfaceImplementation,
    BareExtension,
    StructShape,
    EnumShape,
    TypeAlias,
    InterfaceDefinition,
]


@dataclass
class ModuleGroup:
    """Inline `mod name { ... }`; its items count as top-level declarations"""
    name: str
    items: List[Union[Declaration, "ModuleGroup"]] = field(default_factory=list)


@dataclass
class Unit:
    """Declarations of one source file, in source order"""
    declarations: List[Union[Declaration, ModuleGroup]] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)  # inner (file-level) doc comments
    path: Optional[str] = None


@dataclass
class InterfaceDescriptor:
    """Lookup table over an interface definition, keyed by method name"""
    name: str
    methods: Dict[str, MethodDecl] = field(default_factory=dict)
    docs: List[str] = field(default_factory=list)
    placeholder: bool = False

    @classmethod
    def from_definition(cls, definition: InterfaceDefinition) -> "InterfaceDescriptor":
        return cls(
            name=definition.name,
            methods={method.name: method for method in definition.methods},
            docs=list(definition.docs),
        )

    def get(self, name: str) -> Optional[MethodDecl]:
        return self.methods.get(name)
