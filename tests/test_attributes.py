"""
Tests for the attribute classifier
"""

from nearsyn.core import attributes
from nearsyn.core.models import (
    BareExtension,
    EnumShape,
    InterfaceImplementation,
    MethodDecl,
    Receiver,
    StructShape,
    simple_type,
)

BARE = BareExtension(self_ty=simple_type("Contract"))
TRAIT_IMPL = InterfaceImplementation(self_ty=simple_type("Contract"), trait_name="Ownable")


def test_public_methods_of_bare_impls_are_exported():
    assert attributes.is_exported(MethodDecl("get", is_pub=True), BARE)
    assert not attributes.is_exported(MethodDecl("helper"), BARE)


def test_trait_impl_methods_are_exported_without_pub():
    assert attributes.is_exported(MethodDecl("owner"), TRAIT_IMPL)


def test_private_methods_are_never_exported():
    callback = MethodDecl("on_transfer", is_pub=True, markers=frozenset({"private"}))
    assert not attributes.is_exported(callback, BARE)
    assert not attributes.is_exported(callback, TRAIT_IMPL)


def test_exported_methods_keep_order():
    decl = BareExtension(
        self_ty=simple_type("Contract"),
        methods=[
            MethodDecl("b", is_pub=True),
            MethodDecl("hidden"),
            MethodDecl("a", is_pub=True),
        ],
    )
    assert [m.name for m in attributes.exported_methods(decl)] == ["b", "a"]


def test_is_mut():
    assert attributes.is_mut(MethodDecl("m", receiver=Receiver(mutable=True)))
    assert not attributes.is_mut(MethodDecl("m", receiver=Receiver()))
    assert not attributes.is_mut(MethodDecl("m"))


def test_method_kind_precedence():
    """init wins over a mutable receiver, which wins over view"""
    init = MethodDecl("new", receiver=Receiver(mutable=True), markers=frozenset({"init"}))
    change = MethodDecl("set", receiver=Receiver(mutable=True))
    view = MethodDecl("get", receiver=Receiver())
    static = MethodDecl("version")

    assert attributes.method_kind(init) == attributes.INIT
    assert attributes.method_kind(change) == attributes.CHANGE
    assert attributes.method_kind(view) == attributes.VIEW
    assert attributes.method_kind(static) == attributes.VIEW


def test_payable():
    assert attributes.is_payable(MethodDecl("buy", markers=frozenset({"payable"})))
    assert not attributes.is_payable(MethodDecl("buy"))


def test_bindgen_marker():
    assert attributes.is_bindgen(BareExtension(self_ty=simple_type("C"), markers=frozenset({"near_bindgen"})))
    assert not attributes.is_bindgen(BARE)
    assert attributes.is_bindgen(StructShape("C", markers=frozenset({"near_bindgen"})))


def test_serde_derives():
    assert attributes.is_serde(StructShape("A", derives=frozenset({"Serialize"})))
    assert attributes.is_serde(EnumShape("E", derives=frozenset({"Deserialize", "Clone"})))
    assert not attributes.is_serde(StructShape("B", derives=frozenset({"BorshSerialize"})))
    assert attributes.derives(StructShape("A", derives=frozenset({"Clone"})), "Clone")
