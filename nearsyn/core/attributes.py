"""
Attribute classifier: predicates over declaration markers.

`is_exported` is the single gate deciding whether a method is part of the
contract surface.
"""

from typing import List, Union

from .config import (
    BINDGEN_MARKER,
    INIT_MARKER,
    PAYABLE_MARKER,
    PRIVATE_MARKER,
    SERDE_DERIVES,
)
from .models import EnumShape, ImplDeclaration, MethodDecl, StructShape

INIT = "init"
VIEW = "view"
CHANGE = "change"


def is_public(method: MethodDecl) -> bool:
    """Returns whether `method` is explicitly declared `pub`"""
    return method.is_pub


def is_mut(method: MethodDecl) -> bool:
    """Returns whether `method` takes a mutable receiver"""
    return method.receiver is not None and method.receiver.mutable


def is_init(method: MethodDecl) -> bool:
    return INIT_MARKER in method.markers


def is_payable(method: MethodDecl) -> bool:
    return PAYABLE_MARKER in method.markers


def is_private(method: MethodDecl) -> bool:
    return PRIVATE_MARKER in method.markers


def is_exported(method: MethodDecl, decl: ImplDeclaration) -> bool:
    """
    Returns whether `method` of the implementation `decl` is exported.

    Methods of interface implementations are exported even without `pub`;
    `#[private]` methods are never exported.
    """
    return (is_public(method) or decl.interface is not None) and not is_private(method)


def exported_methods(decl: ImplDeclaration) -> List[MethodDecl]:
    return [method for method in decl.methods if is_exported(method, decl)]


def method_kind(method: MethodDecl) -> str:
    """Classify an exported method as init, change or view"""
    if is_init(method):
        return INIT
    if is_mut(method):
        return CHANGE
    return VIEW


def is_bindgen(decl: Union[ImplDeclaration, StructShape, EnumShape]) -> bool:
    return BINDGEN_MARKER in decl.markers


def derives(decl: Union[StructShape, EnumShape], macro_name: str) -> bool:
    return macro_name in decl.derives


def is_serde(decl: Union[StructShape, EnumShape]) -> bool:
    """Returns whether `decl` derives either `Serialize` or `Deserialize`"""
    return any(derives(decl, name) for name in SERDE_DERIVES)
