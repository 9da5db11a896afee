"""
Ingestion boundary: converts raw declaration trees into contract declarations.

Raw units are JSON documents produced by an external source parser. Each
document lists the items of one source file:

    {
        "path": "src/lib.rs",
        "docs": ["Crate-level docs"],
        "items": [
            {"kind": "impl", "self_ty": "Contract", "trait": null,
             "attrs": ["near_bindgen"], "docs": [],
             "methods": [{"name": "get", "vis": "pub", "receiver": "&self",
                          "params": [{"name": "key", "ty": "U64"}],
                          "output": "Option<U128>", "attrs": [], "docs": []}]},
            {"kind": "struct", "name": "A", "derives": ["Serialize"], ...},
            {"kind": "enum", ...}, {"kind": "type", ...},
            {"kind": "trait", ...}, {"kind": "mod", "items": [...]}
        ]
    }

Every raw node is turned into one of the closed declaration variants here,
so nothing downstream inspects raw node kinds again.
"""

import json
import logging
import re
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.errors import InvalidUnit
from .core.models import (
    BareExtension,
    EnumShape,
    FieldDecl,
    InterfaceDefinition,
    InterfaceImplementation,
    MethodDecl,
    ModuleGroup,
    OpaqueType,
    Param,
    ParenType,
    PathType,
    Receiver,
    StructShape,
    TupleType,
    TypeAlias,
    TypeExpr,
    Unit,
    VariantDecl,
)

logger = logging.getLogger(__name__)

ITEM_KINDS = ("impl", "struct", "enum", "type", "trait", "mod")

RECEIVERS = {
    "&self": Receiver(reference=True, mutable=False),
    "&mut self": Receiver(reference=True, mutable=True),
    "self": Receiver(reference=False, mutable=False),
    "mut self": Receiver(reference=False, mutable=True),
}


# ============================================================================
# Type expressions
# ============================================================================

_TOKEN_RE = re.compile(r"\s*(::|'[A-Za-z_]\w*|[A-Za-z_]\w*|\d+|->|.)")


class _TypeReader:
    """Recursive-descent reader for the type-expression grammar"""

    def __init__(self, text: str):
        self.text = text
        self.tokens: List[Tuple[str, int, int]] = []
        for match in _TOKEN_RE.finditer(text):
            if match.group(1).strip():
                self.tokens.append((match.group(1), match.start(1), match.end(1)))
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][0]
        return None

    def take(self, expected: Optional[str] = None) -> str:
        token = self.peek()
        if token is None or (expected is not None and token != expected):
            raise InvalidUnit(f"Malformed type expression: {self.text!r}")
        self.pos += 1
        return token

    def read(self) -> TypeExpr:
        ty = self.read_type()
        if self.peek() is not None:
            raise InvalidUnit(f"Malformed type expression: {self.text!r}")
        return ty

    def read_type(self) -> TypeExpr:
        token = self.peek()
        if token == "(":
            return self.read_group()
        if token is not None and (token[0].isalpha() or token[0] == "_" or token == "::"):
            if token not in ("dyn", "impl", "fn", "for"):
                return self.read_path()
        return self.read_opaque()

    def read_group(self) -> TypeExpr:
        self.take("(")
        if self.peek() == ")":
            self.take(")")
            return TupleType(())

        elems = [self.read_type()]
        trailing_comma = False
        while self.peek() == ",":
            self.take(",")
            trailing_comma = True
            if self.peek() == ")":
                break
            elems.append(self.read_type())
            trailing_comma = False
        self.take(")")

        if len(elems) == 1 and not trailing_comma:
            return ParenType(elems[0])
        return TupleType(tuple(elems))

    def read_path(self) -> TypeExpr:
        segments = []
        if self.peek() == "::":
            self.take("::")
        segments.append(self.take())
        while self.peek() == "::":
            self.take("::")
            segments.append(self.take())

        args = None
        if self.peek() == "<":
            self.take("<")
            args = []
            while self.peek() != ">":
                if self.peek() is not None and self.peek().startswith("'"):
                    # Lifetimes are not type arguments
                    self.take()
                else:
                    args.append(self.read_type())
                if self.peek() == ",":
                    self.take(",")
            self.take(">")
            args = tuple(args)

        return PathType(tuple(segments), args)

    def read_opaque(self) -> TypeExpr:
        """Consume an unsupported type shape up to the next separator at this depth"""
        start = self.pos
        depth = 0
        while self.peek() is not None:
            token = self.peek()
            if token in ("(", "[", "<"):
                depth += 1
            elif token in (")", "]", ">"):
                if depth == 0:
                    break
                depth -= 1
            elif token == "," and depth == 0:
                break
            self.pos += 1

        if self.pos == start:
            raise InvalidUnit(f"Malformed type expression: {self.text!r}")
        begin = self.tokens[start][1]
        end = self.tokens[self.pos - 1][2]
        return OpaqueType(self.text[begin:end])


def parse_type(text: str) -> TypeExpr:
    """
    Read a type expression such as `HashMap<AccountId, Vec<U128>>`.

    References, pointers, arrays and other shapes the projector does not
    map are returned as `OpaqueType` holding their source text.
    """
    return _TypeReader(text).read()


# ============================================================================
# Raw nodes
# ============================================================================

class RawParam(BaseModel):
    name: str
    ty: str


class RawMethod(BaseModel):
    name: str
    vis: Optional[str] = None
    receiver: Optional[str] = None
    params: List[RawParam] = []
    output: Optional[str] = None
    attrs: List[str] = []
    docs: List[str] = []

    @field_validator("receiver")
    @classmethod
    def check_receiver(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            value = " ".join(value.split())
            if value not in RECEIVERS:
                raise ValueError(f"unknown receiver {value!r}")
        return value


class RawField(BaseModel):
    name: Optional[str] = None
    ty: str
    docs: List[str] = []


class RawVariant(BaseModel):
    name: str
    shape: Literal["named", "tuple", "unit"] = "unit"
    fields: List[RawField] = []
    docs: List[str] = []


class RawImpl(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["impl"]
    self_ty: str
    trait_: Optional[str] = Field(default=None, alias="trait")
    attrs: List[str] = []
    docs: List[str] = []
    methods: List[RawMethod] = []


class RawStruct(BaseModel):
    kind: Literal["struct"]
    name: str
    shape: Literal["named", "tuple", "unit"] = "named"
    fields: List[RawField] = []
    derives: List[str] = []
    attrs: List[str] = []
    docs: List[str] = []


class RawEnum(BaseModel):
    kind: Literal["enum"]
    name: str
    variants: List[RawVariant] = []
    derives: List[str] = []
    attrs: List[str] = []
    docs: List[str] = []


class RawTypeAlias(BaseModel):
    kind: Literal["type"]
    name: str
    ty: str
    docs: List[str] = []


class RawTrait(BaseModel):
    kind: Literal["trait"]
    name: str
    methods: List[RawMethod] = []
    docs: List[str] = []


class RawModule(BaseModel):
    kind: Literal["mod"]
    name: str
    items: List["RawItem"] = []

    @field_validator("items", mode="before")
    @classmethod
    def drop_unknown(cls, value: Any) -> Any:
        return _known_items(value)


RawItem = Annotated[
    Union[RawImpl, RawStruct, RawEnum, RawTypeAlias, RawTrait, RawModule],
    Field(discriminator="kind"),
]

RawModule.model_rebuild()


class RawUnit(BaseModel):
    path: Optional[str] = None
    docs: List[str] = []
    items: List[RawItem] = []

    @field_validator("items", mode="before")
    @classmethod
    def drop_unknown(cls, value: Any) -> Any:
        return _known_items(value)


def _known_items(value: Any) -> Any:
    """Items of kinds the contract does not care about (fn, use, const...) are ignored"""
    if not isinstance(value, list):
        return value
    kept = []
    for item in value:
        if isinstance(item, dict) and item.get("kind") not in ITEM_KINDS:
            logger.debug("Ignoring item of kind %r", item.get("kind"))
            continue
        kept.append(item)
    return kept


# ============================================================================
# Conversion
# ============================================================================

class _Converter:
    """Assigns source-order indexes while converting raw items"""

    def __init__(self):
        self.index = 0

    def next_index(self) -> int:
        index = self.index
        self.index += 1
        return index

    def method(self, raw: RawMethod) -> MethodDecl:
        return MethodDecl(
            name=raw.name,
            params=[Param(param.name, parse_type(param.ty)) for param in raw.params],
            receiver=RECEIVERS[raw.receiver] if raw.receiver else None,
            output=parse_type(raw.output) if raw.output else None,
            markers=frozenset(raw.attrs),
            is_pub=(raw.vis or "").startswith("pub"),
            docs=list(raw.docs),
        )

    def field(self, raw: RawField) -> FieldDecl:
        return FieldDecl(ty=parse_type(raw.ty), name=raw.name, docs=list(raw.docs))

    def item(self, raw: RawItem):
        if isinstance(raw, RawModule):
            return ModuleGroup(raw.name, [self.item(item) for item in raw.items])

        index = self.next_index()

        if isinstance(raw, RawImpl):
            common = dict(
                self_ty=parse_type(raw.self_ty),
                methods=[self.method(method) for method in raw.methods],
                docs=list(raw.docs),
                markers=frozenset(raw.attrs),
                index=index,
            )
            if raw.trait_:
                return InterfaceImplementation(trait_name=raw.trait_, **common)
            return BareExtension(**common)

        if isinstance(raw, RawStruct):
            return StructShape(
                name=raw.name,
                shape=raw.shape,
                fields=[self.field(f) for f in raw.fields],
                derives=frozenset(raw.derives),
                markers=frozenset(raw.attrs),
                docs=list(raw.docs),
                index=index,
            )

        if isinstance(raw, RawEnum):
            return EnumShape(
                name=raw.name,
                variants=[
                    VariantDecl(
                        name=variant.name,
                        shape=variant.shape,
                        fields=[self.field(f) for f in variant.fields],
                        docs=list(variant.docs),
                    )
                    for variant in raw.variants
                ],
                derives=frozenset(raw.derives),
                markers=frozenset(raw.attrs),
                docs=list(raw.docs),
                index=index,
            )

        if isinstance(raw, RawTypeAlias):
            return TypeAlias(name=raw.name, ty=parse_type(raw.ty), docs=list(raw.docs), index=index)

        return InterfaceDefinition(
            name=raw.name,
            methods=[self.method(method) for method in raw.methods],
            docs=list(raw.docs),
            index=index,
        )


def load_unit(data: Union[Dict[str, Any], RawUnit]) -> Unit:
    """
    Convert a raw unit (parsed JSON or an already validated `RawUnit`)
    into a `Unit` of contract declarations.

    Raises:
        InvalidUnit: If the document does not describe a unit
    """
    if isinstance(data, RawUnit):
        raw = data
    else:
        try:
            raw = RawUnit.model_validate(data)
        except ValidationError as e:
            raise InvalidUnit(f"Invalid declaration unit: {e}") from e

    converter = _Converter()
    return Unit(
        declarations=[converter.item(item) for item in raw.items],
        docs=list(raw.docs),
        path=raw.path,
    )


def load_unit_file(file_path: Union[str, Path]) -> Unit:
    """Read a raw unit from a JSON file"""
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidUnit(f"{path}: not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise InvalidUnit(f"{path}: not valid UTF-8: {e}") from e
    except OSError as e:
        raise InvalidUnit(f"{path}: cannot be read: {e}") from e

    if isinstance(data, dict) and data.get("path") is None:
        data = {**data, "path": str(path)}

    return load_unit(data)
