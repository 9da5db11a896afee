"""
Rust type expression translation to TypeScript
"""

from enum import IntEnum
from typing import Tuple, Union

from ..core.config import (
    MAP_WRAPPERS,
    NULLABLE_WRAPPERS,
    RUST_SCALAR_TO_TS,
    SEQUENCE_WRAPPERS,
    VOID_TYPE,
    WRAPPER_ARITY,
)
from ..core.errors import GenericArityMismatch, UnsupportedTypeShape
from ..core.models import OpaqueType, ParenType, PathType, TupleType, TypeExpr
from ..parser import parse_type


class Assoc(IntEnum):
    """How loosely a projected type binds; looser types need parens when nested"""
    SCALAR = 0
    SEQUENCE = 1
    NULLABLE = 2


Projection = Tuple[str, Assoc]


def use_paren(projection: Projection, context: Assoc) -> str:
    """Embed `projection` in a `context` expression, parenthesized if it binds looser"""
    text, assoc = projection
    if assoc > context:
        return f"({text})"
    return text


def generic_args(ty: PathType, wrapper: str) -> Tuple[TypeExpr, ...]:
    expected = WRAPPER_ARITY[wrapper]
    args = ty.args or ()
    if len(args) != expected:
        raise GenericArityMismatch(wrapper, expected, len(args))
    return args


def project(ty: Union[TypeExpr, str]) -> Projection:
    """
    Project a Rust type into TypeScript.

    Returns the TypeScript text together with its associativity class.

    Raises:
        GenericArityMismatch: If a wrapper gets the wrong number of type arguments
        UnsupportedTypeShape: If the type has no TypeScript counterpart
    """
    if isinstance(ty, str):
        ty = parse_type(ty)

    if isinstance(ty, PathType):
        return project_path(ty)

    if isinstance(ty, ParenType):
        return project(ty.elem)

    if isinstance(ty, TupleType):
        if not ty.elems:
            return VOID_TYPE, Assoc.SCALAR
        elems = [project(elem)[0] for elem in ty.elems]
        return f"[{', '.join(elems)}]", Assoc.SCALAR

    if isinstance(ty, OpaqueType):
        raise UnsupportedTypeShape(ty.text)

    raise UnsupportedTypeShape(str(ty))


def project_path(ty: PathType) -> Projection:
    name = ty.name

    if name in NULLABLE_WRAPPERS:
        (inner,) = generic_args(ty, name)
        return f"{use_paren(project(inner), Assoc.NULLABLE)}|null", Assoc.NULLABLE

    if name in SEQUENCE_WRAPPERS:
        (inner,) = generic_args(ty, name)
        return f"{use_paren(project(inner), Assoc.SEQUENCE)}[]", Assoc.SEQUENCE

    if name in MAP_WRAPPERS:
        key, value = generic_args(ty, name)
        return f"Record<{project(key)[0]}, {project(value)[0]}>", Assoc.SCALAR

    if ty.args is not None:
        raise UnsupportedTypeShape(str(ty))

    return RUST_SCALAR_TO_TS.get(name, name), Assoc.SCALAR


def ts_type(ty: Union[TypeExpr, str]) -> str:
    """
    Return the TypeScript equivalent of the Rust type `ty`.

    >>> ts_type("Vec<Option<U128>>")
    '(U128|null)[]'
    >>> ts_type("Option<Vec<U128>>")
    'U128[]|null'
    >>> ts_type("HashMap<AccountId, Vec<U128>>")
    'Record<AccountId, U128[]>'
    """
    return project(ty)[0]
