"""
Tests for the nearsyn command line
"""

import json

import pytest

from nearsyn.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("NEARSYN_BINDGEN_ONLY", "NEARSYN_DUPLICATES", "NEARSYN_LOG_LEVEL",
                 "NEARSYN_HOST", "NEARSYN_PORT"):
        monkeypatch.delenv(name, raising=False)
    # keep load_dotenv from picking up a developer's .env
    monkeypatch.chdir(tmp_path)


def test_ts_to_stdout(unit_files, capsys):
    assert main(["ts", "--no-now", *unit_files]) == 0
    out = capsys.readouterr().out
    assert out.startswith(
        "// TypeScript bindings generated with nearsyn v0.1.0 https://github.com/acuarica/near-syn\n"
    )
    assert "export interface C extends I {}" in out


def test_now_text(unit_files, capsys):
    assert main(["md", "--now", "2021-02-03", *unit_files]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<!-- AUTOGENERATED doc, do not modify! on 2021-02-03 -->\n")


def test_default_now_is_emitted(unit_files, capsys):
    assert main(["ts", *unit_files]) == 0
    header = capsys.readouterr().out.splitlines()[0]
    assert " on " in header


def test_json_target(unit_files, capsys):
    assert main(["json", "--no-now", *unit_files]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["metadata"]["sources"] == ["src/lib.rs", "src/traits.rs"]
    assert "timestamp" not in data["metadata"]


def test_output_file(unit_files, tmp_path, capsys):
    target = tmp_path / "out" / "contract.ts"
    assert main(["ts", "--no-now", "-o", str(target), *unit_files]) == 0
    assert capsys.readouterr().out == ""
    assert target.read_text(encoding="utf-8").startswith("// TypeScript bindings")


def test_no_files_emits_empty_contract(capsys):
    assert main(["ts", "--no-now"]) == 0
    assert "export const Methods = {" in capsys.readouterr().out


def test_unreadable_unit_files(tmp_path, capsys, caplog):
    """Undecodable files and directories are reported, not raised"""
    latin1 = tmp_path / "latin1.json"
    latin1.write_bytes(b'{"items": [], "docs": ["caf\xe9"]}')
    folder = tmp_path / "units"
    folder.mkdir()

    assert main(["ts", "--no-now", str(latin1)]) == 1
    assert main(["ts", "--no-now", str(folder)]) == 1
    assert capsys.readouterr().out == ""
    assert "not valid UTF-8" in caplog.text
    assert "cannot be read" in caplog.text


def test_missing_file(tmp_path, capsys, caplog):
    assert main(["ts", str(tmp_path / "missing.json")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "File not found" in caplog.text


def test_error_produces_no_output(tmp_path, unit_files, capsys, caplog):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"items": [{"kind": "type", "name": "T", "ty": "Option"}]}), encoding="utf-8")

    assert main(["ts", "--no-now", *unit_files, str(bad)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Option expects 1 generic(s) argument(s), found 0" in caplog.text


def test_bindgen_only_flag(tmp_path, capsys):
    unit = tmp_path / "unit.json"
    unit.write_text(json.dumps({"items": [
        {"kind": "impl", "self_ty": "C", "attrs": ["near_bindgen"],
         "methods": [{"name": "kept", "vis": "pub", "receiver": "&self"}]},
        {"kind": "impl", "self_ty": "C", "trait": "Plain",
         "methods": [{"name": "dropped", "receiver": "&self"}]},
    ]}), encoding="utf-8")

    assert main(["ts", "--no-now", "--bindgen-only", str(unit)]) == 0
    out = capsys.readouterr().out
    assert "kept(): Promise<void>;" in out
    assert "dropped" not in out


def test_duplicates_from_environment(tmp_path, monkeypatch, capsys, caplog):
    monkeypatch.setenv("NEARSYN_DUPLICATES", "reject")
    unit = tmp_path / "unit.json"
    unit.write_text(json.dumps({"items": [
        {"kind": "impl", "self_ty": "C", "methods": [{"name": "m", "vis": "pub"}]},
        {"kind": "impl", "self_ty": "C", "trait": "T", "methods": [{"name": "m"}]},
    ]}), encoding="utf-8")

    assert main(["ts", str(unit)]) == 1
    assert capsys.readouterr().out == ""
    assert "Method already exported: m" in caplog.text


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "nearsyn 0.1.0"
