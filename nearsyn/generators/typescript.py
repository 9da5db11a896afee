"""
TypeScript bindings generation
"""

import json
from typing import List, Optional, TextIO

from ..core.config import GENERATOR_NAME, GENERATOR_VERSION, PRELUDE_TYPES, REPOSITORY_URL
from ..core.contract import ContractModel, Item, impl_name
from ..core.errors import UnitStructUnsupported
from ..core.models import EnumShape, FieldDecl, ImplDeclaration, StructShape, TypeAlias, VariantDecl
from ..translators.signatures import ts_sig
from ..translators.types import ts_type

INDENT = "    "


def ts_doc(docs: List[str], indent: str = "") -> List[str]:
    """Render doc lines as a `/** ... */` block, trimming each line"""
    lines = [f"{indent}/**"]
    lines.extend(f"{indent} * {line.strip()}" for line in docs)
    lines.append(f"{indent} */")
    return lines


def ts_fields_object(fields: List[FieldDecl]) -> str:
    return "{ " + ", ".join(f"{f.name}: {ts_type(f.ty)}" for f in fields) + " }"


def ts_tuple(fields: List[FieldDecl]) -> str:
    if len(fields) == 1:
        return ts_type(fields[0].ty)
    return "[" + ", ".join(ts_type(f.ty) for f in fields) + "]"


def ts_typedef(item: TypeAlias) -> List[str]:
    return ts_doc(item.docs) + [f"export type {item.name} = {ts_type(item.ty)};", ""]


def ts_struct(item: StructShape) -> List[str]:
    lines = ts_doc(item.docs)

    if item.shape == "unit":
        raise UnitStructUnsupported(item.name)

    if item.shape == "tuple":
        if not item.fields:
            raise UnitStructUnsupported(item.name)
        lines.append(f"export type {item.name} = {ts_tuple(item.fields)};")
        lines.append("")
        return lines

    lines.append(f"export type {item.name} = {{")
    for f in item.fields:
        lines.extend(ts_doc(f.docs, INDENT))
        lines.append(f"{INDENT}{f.name}: {ts_type(f.ty)};")
        lines.append("")
    lines.append("}")
    lines.append("")
    return lines


def ts_variant(variant: VariantDecl) -> str:
    """Externally tagged JSON form of an enum variant"""
    if variant.shape == "unit" or not variant.fields:
        return json.dumps(variant.name)
    if variant.shape == "tuple":
        return f"{{ {variant.name}: {ts_tuple(variant.fields)} }}"
    return f"{{ {variant.name}: {ts_fields_object(variant.fields)} }}"


def ts_enum(item: EnumShape) -> List[str]:
    lines = ts_doc(item.docs)

    if all(variant.shape == "unit" for variant in item.variants):
        lines.append(f"export enum {item.name} {{")
        for variant in item.variants:
            lines.extend(ts_doc(variant.docs, INDENT))
            lines.append(f"{INDENT}{variant.name},")
            lines.append("")
        lines.append("}")
    else:
        union = " | ".join(ts_variant(variant) for variant in item.variants)
        lines.append(f"export type {item.name} = {union};")

    lines.append("")
    return lines


def ts_interface_name(item: ImplDeclaration) -> str:
    if item.interface is not None:
        return item.interface
    return impl_name(item.self_ty)


def ts_impl(item: ImplDeclaration, model: ContractModel) -> List[str]:
    lines = ts_doc(model.impl_docs(item))
    lines.append(f"export interface {ts_interface_name(item)} {{")
    for method in model.exported(item):
        lines.extend(ts_doc(model.method_docs(method, item), INDENT))
        lines.append(f"{INDENT}{ts_sig(method)}")
        lines.append("")
    lines.append("}")
    lines.append("")
    return lines


def ts_item(item: Item, model: ContractModel) -> List[str]:
    """Render one retained contract item"""
    if isinstance(item, ImplDeclaration):
        return ts_impl(item, model)
    if isinstance(item, StructShape):
        return ts_struct(item)
    if isinstance(item, EnumShape):
        return ts_enum(item)
    return ts_typedef(item)


def ts_prelude(now: Optional[str] = None) -> List[str]:
    header = f"// TypeScript bindings generated with {GENERATOR_NAME} v{GENERATOR_VERSION} {REPOSITORY_URL}"
    if now:
        header += f" on {now}"

    lines = [header, "", "// Exports common NEAR Rust SDK types"]
    for name, definition, docs in PRELUDE_TYPES:
        lines.extend(ts_doc(docs))
        lines.append(f"export type {name} = {definition};")
        lines.append("")
    return lines


def ts_extend_traits(model: ContractModel) -> List[str]:
    if not model.name or not model.interfaces:
        return []
    interfaces = ", ".join(dict.fromkeys(model.interfaces))
    return [f"export interface {model.name} extends {interfaces} {{}}", ""]


def ts_contract_methods(model: ContractModel) -> List[str]:
    def fmt(methods: List[str]) -> List[str]:
        return [f"{INDENT}{INDENT}{json.dumps(name)}," for name in methods]

    return [
        f"export const {model.name or ''}Methods = {{",
        f"{INDENT}viewMethods: [",
        *fmt(model.view_methods),
        f"{INDENT}],",
        f"{INDENT}changeMethods: [",
        *fmt(model.change_methods),
        f"{INDENT}],",
        "};",
    ]


def generate_typescript(model: ContractModel, now: Optional[str] = None) -> str:
    """
    Generate TypeScript bindings for a completed contract model.

    Args:
        model: Contract model, fully pushed
        now: Optional timestamp text for the header

    Returns:
        TypeScript source code
    """
    lines = ts_prelude(now)
    for item in model.items:
        lines.extend(ts_item(item, model))
    lines.extend(ts_extend_traits(model))
    lines.extend(ts_contract_methods(model))
    return "\n".join(lines) + "\n"


def emit_typescript(model: ContractModel, out: TextIO, now: Optional[str] = None) -> None:
    """Write TypeScript bindings for `model` to `out`"""
    out.write(generate_typescript(model, now))
