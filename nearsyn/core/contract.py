"""
Contract model builder.

Merges declarations coming from several source units into one model of the
exported contract surface. Trait lookups needed for documentation are
resolved lazily, after every unit has been pushed.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from . import attributes
from .errors import DuplicateMethod, MalformedSelfType
from .models import (
    Declaration,
    EnumShape,
    ImplDeclaration,
    InterfaceDefinition,
    InterfaceDescriptor,
    MethodDecl,
    ModuleGroup,
    PathType,
    StructShape,
    TypeAlias,
    TypeExpr,
    Unit,
)

logger = logging.getLogger(__name__)

Item = Union[ImplDeclaration, StructShape, EnumShape, TypeAlias]


class DuplicatePolicy(str, Enum):
    """What to do when an exported method name is registered twice"""
    OVERWRITE = "overwrite"  # replace the map entry, keep the earlier listing
    REPLACE = "replace"      # replace the map entry and its category listing
    REJECT = "reject"        # raise DuplicateMethod


def impl_name(self_ty: TypeExpr) -> str:
    """Returns the simple name of an implementation's owning type"""
    if isinstance(self_ty, PathType) and self_ty.args is None:
        return self_ty.name
    raise MalformedSelfType(str(self_ty))


def flatten(declarations: Iterable[Union[Declaration, ModuleGroup]]) -> Iterator[Declaration]:
    """Yield declarations in order, descending into module groupings"""
    for decl in declarations:
        if isinstance(decl, ModuleGroup):
            yield from flatten(decl.items)
        else:
            yield decl


class ContractModel:
    """
    Aggregated model of all exported declarations.

    Created empty, filled by `push`, read by emitters once every unit
    has been pushed.
    """

    def __init__(self,
                 duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE,
                 require_bindgen: bool = False):
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self.require_bindgen = require_bindgen

        # Name of the contract, set by each inherent `impl`; the last one wins
        self.name: Optional[str] = None
        # Unit-level docs of the unit declaring the `#[near_bindgen]` struct
        self.top_level_docs: List[str] = []
        # Implemented interfaces, in encounter order
        self.interfaces: List[str] = []
        self.traits: Dict[str, InterfaceDescriptor] = {}
        self.methods: Dict[str, Tuple[MethodDecl, ImplDeclaration]] = {}
        self.init_methods: List[str] = []
        self.view_methods: List[str] = []
        self.change_methods: List[str] = []
        # Retained impl/struct/enum/type declarations, in push order
        self.items: List[Item] = []

    def push_units(self, units: Iterable[Union[Unit, Sequence[Declaration]]]) -> None:
        for unit in units:
            self.push(unit)

    def push(self, unit: Union[Unit, Sequence[Declaration]]) -> None:
        """
        Add every declaration of `unit` to the model.

        The unit is validated in full before anything is recorded, so a
        failing unit leaves the model untouched.
        """
        if isinstance(unit, Unit):
            declarations, unit_docs = unit.declarations, unit.docs
        else:
            declarations, unit_docs = unit, []

        staged = list(flatten(declarations))
        self._validate(staged)

        for decl in staged:
            if isinstance(decl, ImplDeclaration):
                self._push_impl(decl)
            elif isinstance(decl, InterfaceDefinition):
                self._push_trait(decl)
            elif isinstance(decl, (StructShape, EnumShape)):
                self._push_shape(decl)
            elif isinstance(decl, TypeAlias):
                self.items.append(decl)

        # Structs nested in modules do not count
        if any(self._declares_contract(decl) for decl in declarations):
            self.top_level_docs = list(unit_docs)

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    def _bindgen_methods(self, decl: ImplDeclaration) -> List[MethodDecl]:
        if self.require_bindgen and not attributes.is_bindgen(decl):
            return []
        return attributes.exported_methods(decl)

    def _validate(self, staged: List[Declaration]) -> None:
        seen = set(self.methods) if self.duplicate_policy is DuplicatePolicy.REJECT else None

        for decl in staged:
            if not isinstance(decl, ImplDeclaration):
                continue
            methods = self._bindgen_methods(decl)
            if not methods:
                continue
            if decl.interface is None:
                impl_name(decl.self_ty)
            if seen is not None:
                for method in methods:
                    if method.name in seen:
                        raise DuplicateMethod(method.name)
                    seen.add(method.name)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _push_impl(self, decl: ImplDeclaration) -> None:
        methods = self._bindgen_methods(decl)
        if not methods:
            logger.debug("Skipping impl of %s: no exported methods", decl.self_ty)
            return

        if decl.interface is not None:
            self.interfaces.append(decl.interface)
            if decl.interface not in self.traits:
                self.traits[decl.interface] = InterfaceDescriptor(decl.interface, placeholder=True)
        else:
            self.name = impl_name(decl.self_ty)

        for method in methods:
            self._register_method(method, decl)

        self.items.append(decl)

    def _register_method(self, method: MethodDecl, decl: ImplDeclaration) -> None:
        name = method.name

        if name in self.methods:
            logger.debug("Method %s exported more than once (%s)", name, self.duplicate_policy.value)
            if self.duplicate_policy is DuplicatePolicy.REJECT:
                raise DuplicateMethod(name)
            if self.duplicate_policy is DuplicatePolicy.REPLACE:
                for listing in (self.init_methods, self.view_methods, self.change_methods):
                    if name in listing:
                        listing.remove(name)

        self.methods[name] = (method, decl)
        self.category(attributes.method_kind(method)).append(name)

    def _push_trait(self, definition: InterfaceDefinition) -> None:
        self.traits[definition.name] = InterfaceDescriptor.from_definition(definition)

    @staticmethod
    def _declares_contract(decl) -> bool:
        return (isinstance(decl, StructShape)
                and attributes.is_serde(decl)
                and attributes.is_bindgen(decl))

    def _push_shape(self, decl: Union[StructShape, EnumShape]) -> None:
        if not attributes.is_serde(decl):
            logger.debug("Dropping %s: does not derive Serialize/Deserialize", decl.name)
            return
        self.items.append(decl)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def category(self, kind: str) -> List[str]:
        """Returns the method-name list for `init`, `view` or `change`"""
        return {
            attributes.INIT: self.init_methods,
            attributes.VIEW: self.view_methods,
            attributes.CHANGE: self.change_methods,
        }[kind]

    def get_trait(self, name: Optional[str]) -> Optional[InterfaceDescriptor]:
        if name is None:
            return None
        return self.traits.get(name)

    def method_docs(self, method: MethodDecl, decl: ImplDeclaration) -> List[str]:
        """
        Effective documentation of `method`: its own doc lines followed by
        the doc lines of the same method on the implemented interface, if
        that interface and method can be found.
        """
        docs = list(method.docs)
        descriptor = self.get_trait(decl.interface)
        if descriptor is not None:
            trait_method = descriptor.get(method.name)
            if trait_method is not None:
                docs.extend(trait_method.docs)
        return docs

    def impl_docs(self, decl: ImplDeclaration) -> List[str]:
        """Docs of an implementation block merged with its interface's docs"""
        docs = list(decl.docs)
        descriptor = self.get_trait(decl.interface)
        if descriptor is not None:
            docs.extend(descriptor.docs)
        return docs

    def lookup(self, name: str) -> Optional[Tuple[MethodDecl, ImplDeclaration]]:
        return self.methods.get(name)

    def exported(self, decl: ImplDeclaration) -> List[MethodDecl]:
        """Exported methods of a retained implementation"""
        return self._bindgen_methods(decl)

    def __repr__(self) -> str:
        return (f"ContractModel(name={self.name!r}, interfaces={self.interfaces!r}, "
                f"init={self.init_methods!r}, view={self.view_methods!r}, "
                f"change={self.change_methods!r})")
