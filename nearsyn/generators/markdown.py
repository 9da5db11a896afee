"""
Markdown documentation generation
"""

from typing import List, Optional, TextIO

from ..core import attributes
from ..core.config import GENERATOR_NAME, GENERATOR_VERSION, REPOSITORY_URL
from ..core.contract import ContractModel
from ..core.models import ImplDeclaration, MethodDecl
from ..translators.signatures import ts_sig
from ..translators.types import ts_type
from .typescript import ts_interface_name, ts_item

INIT_ICON = ":rocket:"
VIEW_ICON = ":eyeglasses:"
CHANGE_ICON = ":writing_hand:"
PAYABLE_ICON = "&#x24C3;"

REFERENCES = [
    f"- {INIT_ICON} Initialization method. Needs to be called right after deployment.",
    f"- {VIEW_ICON} View only method, *i.e.*, does not modify the contract state.",
    f"- {CHANGE_ICON} Call method, *i.e.*, does modify the contract state.",
    f"- {PAYABLE_ICON} Payable method, *i.e.*, call needs to have an attached NEAR deposit.",
]


def method_icon(method: MethodDecl) -> str:
    if attributes.is_init(method):
        return INIT_ICON
    if attributes.is_payable(method):
        return PAYABLE_ICON
    if attributes.is_mut(method):
        return CHANGE_ICON
    return VIEW_ICON


def md_title(method: MethodDecl) -> str:
    title = f"{method_icon(method)} `{method.name}`"
    if attributes.is_init(method):
        title += " (_constructor_)"
    return title


def md_inline(docs: List[str]) -> str:
    """Join doc lines into one table cell"""
    return " ".join(line.strip() for line in docs if line.strip()).replace("|", "\\|")


def md_return_type(method: MethodDecl) -> str:
    if attributes.is_init(method):
        return "Self"
    if method.output is None:
        return "void"
    return ts_type(method.output)


def md_methods_table(model: ContractModel) -> List[str]:
    lines = [
        "## Methods",
        "",
        "| Method | Description | Return Type |",
        "| ------ | ----------- | ----------- |",
    ]
    for names in (model.init_methods, model.view_methods, model.change_methods):
        for name in names:
            method, decl = model.methods[name]
            docs = md_inline(model.method_docs(method, decl))
            lines.append(f"| {md_title(method)} | {docs} | `{md_return_type(method)}` |")
    lines.append("")
    return lines


def md_impl(item: ImplDeclaration, model: ContractModel) -> List[str]:
    if item.interface is not None:
        lines = [f"## Methods for `{item.interface}` interface", ""]
    else:
        lines = [f"## Methods for `{ts_interface_name(item)}`", ""]

    docs = model.impl_docs(item)
    if docs:
        lines.extend(line.strip() for line in docs)
        lines.append("")

    for method in model.exported(item):
        lines.extend([
            f"### {md_title(method)}",
            "",
            "```typescript",
            ts_sig(method),
            "```",
            "",
        ])
        method_docs = model.method_docs(method, item)
        if method_docs:
            lines.extend(line.strip() for line in method_docs)
            lines.append("")
    return lines


def md_types(model: ContractModel) -> List[str]:
    shapes = [item for item in model.items if not isinstance(item, ImplDeclaration)]
    if not shapes:
        return []

    lines = ["## Types", "", "```typescript"]
    for item in shapes:
        lines.extend(ts_item(item, model))
    lines.extend(["```", ""])
    return lines


def generate_markdown(model: ContractModel, now: Optional[str] = None) -> str:
    """
    Generate Markdown documentation for a completed contract model.

    Args:
        model: Contract model, fully pushed
        now: Optional timestamp text for the banner and footer

    Returns:
        Markdown text
    """
    banner = "<!-- AUTOGENERATED doc, do not modify!"
    if now:
        banner += f" on {now}"
    banner += " -->"

    title = f"# {model.name} Contract" if model.name else "# Contract"
    lines = [banner, title, ""]

    if model.top_level_docs:
        lines.extend(line.strip() for line in model.top_level_docs)
        lines.append("")

    lines.extend(md_methods_table(model))
    for item in model.items:
        if isinstance(item, ImplDeclaration):
            lines.extend(md_impl(item, model))
    lines.extend(md_types(model))

    footer = (f"*This documentation was generated with* **{GENERATOR_NAME} v{GENERATOR_VERSION}** "
              f"<{REPOSITORY_URL}>")
    if now:
        footer += f" *on {now}*"

    lines.extend(["---", "", "References", "", *REFERENCES, "", "---", "", footer])
    return "\n".join(lines) + "\n"


def emit_markdown(model: ContractModel, out: TextIO, now: Optional[str] = None) -> None:
    """Write Markdown documentation for `model` to `out`"""
    out.write(generate_markdown(model, now))
