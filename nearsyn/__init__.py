"""
nearsyn: NEAR contract declarations to TypeScript bindings and Markdown docs
"""

from .core.config import GENERATOR_VERSION
from .core.contract import ContractModel, DuplicatePolicy
from .core.errors import (
    DuplicateMethod,
    GenericArityMismatch,
    InvalidUnit,
    MalformedSelfType,
    NearSynError,
    UnitStructUnsupported,
    UnsupportedTypeShape,
)
from .core.transpiler import build_contract, transpile
from .parser import load_unit, load_unit_file, parse_type
from .translators.signatures import project_signature, ts_sig
from .translators.types import project, ts_type

__version__ = GENERATOR_VERSION
__all__ = [
    "ContractModel",
    "DuplicatePolicy",
    "build_contract",
    "transpile",
    "load_unit",
    "load_unit_file",
    "parse_type",
    "project",
    "ts_type",
    "project_signature",
    "ts_sig",
    "NearSynError",
    "MalformedSelfType",
    "UnsupportedTypeShape",
    "GenericArityMismatch",
    "UnitStructUnsupported",
    "DuplicateMethod",
    "InvalidUnit",
]
