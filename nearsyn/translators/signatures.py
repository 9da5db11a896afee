"""
Method signature translation to TypeScript
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from ..core import attributes
from ..core.config import VOID_TYPE
from ..core.models import MethodDecl
from .types import ts_type


@dataclass
class MethodSignature:
    """Exported shape of a contract method"""
    name: str
    args: List[Tuple[str, str]] = field(default_factory=list)  # [(name, ts type)]
    return_type: str = VOID_TYPE
    is_init: bool = False
    gas: bool = False
    amount: bool = False

    @property
    def args_object(self) -> str:
        if not self.args:
            return "{}"
        return "{ " + ", ".join(f"{name}: {ty}" for name, ty in self.args) + " }"

    def render(self) -> str:
        if self.is_init:
            return f"{self.name}: {self.args_object};"

        args_decl = []
        if self.args:
            args_decl.append(f"args: {self.args_object}")
        if self.gas:
            args_decl.append("gas?: any")
        if self.amount:
            args_decl.append("amount?: any")

        return f"{self.name}({', '.join(args_decl)}): Promise<{self.return_type}>;"


def project_signature(method: MethodDecl) -> MethodSignature:
    """
    Build the exported signature of `method`.

    Arguments are packed into a single object argument, the result is
    wrapped in a `Promise`. Init methods denote a construction request, so
    only the argument object is kept.
    """
    args = [(param.name, ts_type(param.ty)) for param in method.params]

    if attributes.is_init(method):
        return MethodSignature(name=method.name, args=args, is_init=True)

    return MethodSignature(
        name=method.name,
        args=args,
        return_type=ts_type(method.output) if method.output is not None else VOID_TYPE,
        gas=attributes.is_mut(method),
        amount=attributes.is_payable(method),
    )


def ts_sig(method: MethodDecl) -> str:
    """
    Returns the TypeScript signature of `method`, e.g.

        set_args(args: { x: number }, gas?: any): Promise<void>;
    """
    return project_signature(method).render()
