"""
Main transpilation pipeline
"""

import io
from typing import Any, Dict, Iterable, Optional, Union

from .contract import ContractModel, DuplicatePolicy
from .models import Unit
from ..generators.markdown import emit_markdown
from ..generators.typescript import emit_typescript
from ..output.json_formatter import ContractJSONFormatter
from ..parser import RawUnit, load_unit

TARGETS = ("ts", "md", "json")

UnitSource = Union[Unit, RawUnit, Dict[str, Any]]


def build_contract(units: Iterable[UnitSource],
                   duplicates: Union[DuplicatePolicy, str] = DuplicatePolicy.OVERWRITE,
                   bindgen_only: bool = False) -> ContractModel:
    """
    Build a contract model from declaration units, in order.

    Args:
        units: Converted `Unit`s, validated `RawUnit`s or raw JSON dicts
        duplicates: Method name collision policy
        bindgen_only: Only consider `#[near_bindgen]` implementations

    Returns:
        The completed ContractModel

    Raises:
        NearSynError: On the first malformed declaration; nothing is returned
    """
    model = ContractModel(duplicate_policy=DuplicatePolicy(duplicates), require_bindgen=bindgen_only)
    for unit in units:
        if not isinstance(unit, Unit):
            unit = load_unit(unit)
        model.push(unit)
    return model


def transpile(units: Iterable[UnitSource],
              target: str = "ts",
              now: Optional[str] = None,
              duplicates: Union[DuplicatePolicy, str] = DuplicatePolicy.OVERWRITE,
              bindgen_only: bool = False) -> str:
    """
    Build a contract model and render it.

    Args:
        units: Declaration units, see `build_contract`
        target: "ts" (TypeScript bindings), "md" (Markdown docs) or "json"
        now: Optional timestamp text included in the output
        duplicates: Method name collision policy
        bindgen_only: Only consider `#[near_bindgen]` implementations

    Returns:
        The rendered text. Nothing is produced when the build fails.
    """
    if target not in TARGETS:
        raise ValueError(f"Unknown target: {target}")

    loaded = [unit if isinstance(unit, Unit) else load_unit(unit) for unit in units]
    model = build_contract(loaded, duplicates=duplicates, bindgen_only=bindgen_only)

    buf = io.StringIO()
    if target == "ts":
        emit_typescript(model, buf, now)
    elif target == "md":
        emit_markdown(model, buf, now)
    else:
        sources = [unit.path for unit in loaded if unit.path]
        buf.write(ContractJSONFormatter(model, sources, now=now or "").to_json_string())
        buf.write("\n")
    return buf.getvalue()
