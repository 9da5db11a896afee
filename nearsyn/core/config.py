"""
Type mappings and configuration constants
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

GENERATOR_NAME = "nearsyn"
GENERATOR_VERSION = "0.1.0"
REPOSITORY_URL = "https://github.com/acuarica/near-syn"

# Markers
BINDGEN_MARKER = "near_bindgen"
INIT_MARKER = "init"
PAYABLE_MARKER = "payable"
PRIVATE_MARKER = "private"
SERDE_DERIVES = ("Serialize", "Deserialize")

# Type mappings
RUST_SCALAR_TO_TS = {
    "bool": "boolean",
    "i8": "number",
    "u8": "number",
    "i16": "number",
    "u16": "number",
    "i32": "number",
    "u32": "number",
    "u64": "number",
    "String": "string",
}

NULLABLE_WRAPPERS = ("Option",)
SEQUENCE_WRAPPERS = ("Vec", "HashSet", "BTreeSet")
MAP_WRAPPERS = ("HashMap", "BTreeMap")

# Number of type arguments each wrapper takes
WRAPPER_ARITY = {
    **{name: 1 for name in NULLABLE_WRAPPERS},
    **{name: 1 for name in SEQUENCE_WRAPPERS},
    **{name: 2 for name in MAP_WRAPPERS},
}

VOID_TYPE = "void"

# NEAR SDK JSON types exported ahead of the bindings: (name, definition, docs)
PRELUDE_TYPES = [
    ("U64", "string", [
        "Represents an 64 bits unsigned integer encoded as a `string`.",
    ]),
    ("I64", "string", [
        "Represents an 64 bits signed integer encoded as a `string`.",
    ]),
    ("U128", "string", [
        "Represents an 128 bits unsigned integer encoded as a `string`.",
    ]),
    ("I128", "string", [
        "Represents an 128 bits signed integer encoded as a `string`.",
    ]),
    ("Base64VecU8", "string", [
        "Represents an encoded array of bytes into a `string`.",
    ]),
    ("Balance", "U128", [
        "Balance is a type for storing amounts of tokens, specified in yoctoNEAR.",
    ]),
    ("AccountId", "string", [
        "Account identifier. This is the human readable UTF8 string which is used internally "
        "to index accounts on the network and their respective state.",
    ]),
    ("ValidAccountId", "string", [
        "DEPRECATED since 4.0.0.",
    ]),
]

DUPLICATE_POLICIES = ("overwrite", "replace", "reject")


class Settings(BaseModel):
    """Runtime settings, read from the environment"""
    bindgen_only: bool = False
    duplicates: str = "overwrite"
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 8000


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """
    Load settings from environment variables (and a `.env` file if present).

    Recognized variables: NEARSYN_BINDGEN_ONLY, NEARSYN_DUPLICATES,
    NEARSYN_LOG_LEVEL, NEARSYN_HOST, NEARSYN_PORT.
    """
    load_dotenv()

    settings = Settings(
        bindgen_only=_env_flag(os.getenv("NEARSYN_BINDGEN_ONLY")),
        duplicates=os.getenv("NEARSYN_DUPLICATES", "overwrite").lower(),
        log_level=os.getenv("NEARSYN_LOG_LEVEL", "WARNING").upper(),
        host=os.getenv("NEARSYN_HOST", "127.0.0.1"),
        port=int(os.getenv("NEARSYN_PORT", "8000")),
    )

    if settings.duplicates not in DUPLICATE_POLICIES:
        raise ValueError(f"Unknown duplicate policy: {settings.duplicates}")

    return settings
