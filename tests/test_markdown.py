"""
Tests for Markdown documentation generation
"""

import pytest

from nearsyn.core.contract import ContractModel
from nearsyn.core.models import MethodDecl, Receiver, StructShape, Unit
from nearsyn.generators.markdown import generate_markdown, md_inline, md_title, method_icon
from nearsyn.parser import load_unit


@pytest.fixture
def model(sample_unit, trait_unit):
    model = ContractModel()
    model.push(load_unit(sample_unit))
    model.push(load_unit(trait_unit))
    return model


def test_method_icons():
    assert method_icon(MethodDecl("new", receiver=Receiver(mutable=True), markers=frozenset({"init"}))) == ":rocket:"
    assert method_icon(MethodDecl("buy", receiver=Receiver(mutable=True), markers=frozenset({"payable"}))) == "&#x24C3;"
    assert method_icon(MethodDecl("set", receiver=Receiver(mutable=True))) == ":writing_hand:"
    assert method_icon(MethodDecl("get", receiver=Receiver())) == ":eyeglasses:"


def test_md_title():
    assert md_title(MethodDecl("new", markers=frozenset({"init"}))) == ":rocket: `new` (_constructor_)"
    assert md_title(MethodDecl("get")) == ":eyeglasses: `get`"


def test_md_inline():
    assert md_inline([" Line 1", "", " Line 2 "]) == "Line 1 Line 2"
    assert md_inline([" a | b"]) == "a \\| b"
    assert md_inline([]) == ""


def test_banner_and_title(model):
    lines = generate_markdown(model).splitlines()
    assert lines[0] == "<!-- AUTOGENERATED doc, do not modify! -->"
    assert lines[1] == "# C Contract"

    dated = generate_markdown(model, now="2021-02-03").splitlines()
    assert dated[0] == "<!-- AUTOGENERATED doc, do not modify! on 2021-02-03 -->"


def test_methods_table(model):
    out = generate_markdown(model)
    assert (
        "## Methods\n"
        "\n"
        "| Method | Description | Return Type |\n"
        "| ------ | ----------- | ----------- |\n"
        "| :rocket: `init_here` (_constructor_) | init func | `Self` |\n"
        "| :eyeglasses: `get_f128` | Line 1 for get_f128 first Line 2 for get_f128 second | `U128` |\n"
        "| :eyeglasses: `get` | Single-line comment for get doc for I::get | `U128` |\n"
        "| :writing_hand: `set_f128` | Set f128. | `void` |\n"
        "| :writing_hand: `more_types` |  | `void` |\n"
        "| &#x24C3; `set_f128_with_sum` | Pay to set f128. | `void` |\n"
    ) in out


def test_method_sections(model):
    out = generate_markdown(model)
    assert (
        "### :eyeglasses: `get_f128`\n"
        "\n"
        "```typescript\n"
        "get_f128(): Promise<U128>;\n"
        "```\n"
        "\n"
        "Line 1 for get_f128 first\n"
        "Line 2 for get_f128 second\n"
    ) in out
    assert "## Methods for `C`\n" in out
    assert "## Methods for `I` interface\n\ndoc for I\n" in out


def test_types_section(model):
    out = generate_markdown(model)
    types = out[out.index("## Types"):]
    assert types.startswith("## Types\n\n```typescript\n")
    assert "export type A = {" in types
    assert "export enum E {" in types
    assert "export interface" not in types[:types.index("---")]


def test_references_and_footer(model):
    out = generate_markdown(model, now="2021-02-03")
    assert "- :rocket: Initialization method. Needs to be called right after deployment.\n" in out
    assert "- &#x24C3; Payable method, *i.e.*, call needs to have an attached NEAR deposit.\n" in out
    assert out.endswith(
        "*This documentation was generated with* **nearsyn v0.1.0** "
        "<https://github.com/acuarica/near-syn> *on 2021-02-03*\n"
    )
    assert generate_markdown(model).endswith("<https://github.com/acuarica/near-syn>\n")


def test_top_level_docs_follow_title():
    model = ContractModel()
    model.push(Unit(
        declarations=[StructShape("C", derives=frozenset({"Serialize"}), markers=frozenset({"near_bindgen"}))],
        docs=[" Contract overview.", " Second line."],
    ))
    lines = generate_markdown(model).splitlines()
    assert lines[1:5] == ["# Contract", "", "Contract overview.", "Second line."]


def test_empty_model():
    out = generate_markdown(ContractModel())
    assert "# Contract\n" in out
    assert "## Types" not in out
    assert "| Method | Description | Return Type |" in out
