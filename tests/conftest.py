"""
Shared fixtures: raw declaration units as an external parser would deliver them
"""

import copy
import json

import pytest

SAMPLE_UNIT = {
    "path": "src/lib.rs",
    "docs": [" Sample contract."],
    "items": [
        {"kind": "type", "name": "AType", "ty": "u32"},
        {"kind": "type", "name": "BType", "ty": "u32", "docs": [" Doc-comments for a type def"]},
        {
            "kind": "struct",
            "name": "A",
            "derives": ["Serialize"],
            "docs": [" Doc-comment line 1 for A", " Doc-comment line 2 for A"],
            "fields": [
                {"name": "a1_field", "ty": "U64"},
                {"name": "a3_field", "ty": "U128", "docs": [" Line for a3"]},
            ],
        },
        {"kind": "struct", "name": "NotSerde", "fields": [{"name": "x", "ty": "u32"}]},
        {
            "kind": "enum",
            "name": "E",
            "derives": ["Serialize"],
            "docs": [" doc-comment for enum"],
            "variants": [{"name": "V1"}, {"name": "V2"}],
        },
        {
            "kind": "struct",
            "name": "C",
            "attrs": ["near_bindgen"],
            "derives": ["BorshSerialize"],
            "fields": [{"name": "f128", "ty": "U128"}],
        },
        {
            "kind": "impl",
            "self_ty": "C",
            "attrs": ["near_bindgen"],
            "methods": [
                {"name": "init_here", "vis": "pub", "attrs": ["init"],
                 "params": [{"name": "f128", "ty": "U128"}], "output": "Self",
                 "docs": [" init func"]},
                {"name": "get_f128", "vis": "pub", "receiver": "&self", "output": "U128",
                 "docs": [" Line 1 for get_f128 first", " Line 2 for get_f128 second"]},
                {"name": "set_f128", "vis": "pub", "receiver": "&mut self",
                 "params": [{"name": "value", "ty": "U128"}], "docs": [" Set f128."]},
                {"name": "more_types", "vis": "pub", "receiver": "&mut self",
                 "params": [{"name": "key", "ty": "U128"},
                            {"name": "tuple", "ty": "(String, Vec<i32>)"}]},
                {"name": "set_f128_with_sum", "vis": "pub", "receiver": "&mut self",
                 "attrs": ["payable"],
                 "params": [{"name": "a_value", "ty": "U128"},
                            {"name": "other_value", "ty": "U128"}],
                 "docs": [" Pay to set f128."]},
                {"name": "internal", "receiver": "&self", "output": "u32"},
                {"name": "secret", "vis": "pub", "attrs": ["private"], "receiver": "&mut self"},
            ],
        },
        {
            "kind": "impl",
            "self_ty": "C",
            "trait": "I",
            "attrs": ["near_bindgen"],
            "methods": [
                {"name": "get", "receiver": "&self", "output": "U128",
                 "docs": [" Single-line comment for get"]},
            ],
        },
        {"kind": "fn", "name": "helper"},
        {
            "kind": "mod",
            "name": "inner",
            "items": [{"kind": "type", "name": "A_in_mod", "ty": "u32"}],
        },
    ],
}

TRAIT_UNIT = {
    "path": "src/traits.rs",
    "items": [
        {
            "kind": "trait",
            "name": "I",
            "docs": [" doc for I"],
            "methods": [
                {"name": "get", "receiver": "&self", "output": "U128", "docs": [" doc for I::get"]},
            ],
        },
    ],
}


@pytest.fixture
def sample_unit():
    """Raw unit exercising every declaration kind"""
    return copy.deepcopy(SAMPLE_UNIT)


@pytest.fixture
def trait_unit():
    """Raw unit defining the `I` interface implemented by `sample_unit`"""
    return copy.deepcopy(TRAIT_UNIT)


@pytest.fixture
def unit_files(tmp_path, sample_unit, trait_unit):
    """Both sample units written as JSON files"""
    paths = []
    for name, unit in (("lib.json", sample_unit), ("traits.json", trait_unit)):
        path = tmp_path / name
        path.write_text(json.dumps(unit), encoding="utf-8")
        paths.append(str(path))
    return paths
