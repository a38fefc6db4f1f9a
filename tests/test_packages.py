"""Tests for including sub-package scripts."""

# Standard library imports
import json
from pathlib import Path

# Third-party imports
import pytest

# Local/package imports
from nps_utils.config import ScriptContext
from nps_utils.core.exceptions import ScriptFileError
from nps_utils.packages import (
    find_scripts_file,
    include_package,
    load_scripts_file,
)

SUB_PACKAGE_SCRIPTS = {
    "scripts": {
        "build": "webpack",
        "test": {
            "default": "jest",
            "watch": {"script": "jest --watch", "description": "Watch tests"},
            "unit": {"fast": "jest --onlyChanged"},
        },
    }
}


@pytest.fixture
def recording_loader():
    calls = []

    def load(path):
        calls.append(path)
        return SUB_PACKAGE_SCRIPTS

    load.calls = calls
    return load


def test_include_package_by_name(tmp_path, monkeypatch, recording_loader):
    monkeypatch.chdir(tmp_path)
    scripts = include_package("foo", load_scripts=recording_loader)

    back = 'cd "../.."'
    assert scripts == {
        "build": f"cd packages/foo && npm start build && {back}",
        "test": {
            "default": f"cd packages/foo && npm start test.default && {back}",
            "watch": {
                "script": f"cd packages/foo && npm start test.watch && {back}",
                "description": "Watch tests",
            },
            "unit": {
                "fast": f"cd packages/foo && npm start test.unit.fast && {back}",
            },
        },
    }
    (loaded,) = recording_loader.calls
    assert Path(loaded).resolve() == (
        tmp_path / "packages" / "foo" / "package-scripts.js"
    ).resolve()


def test_include_package_with_path(tmp_path, monkeypatch, recording_loader):
    monkeypatch.chdir(tmp_path)
    scripts = include_package(
        {"path": "./libs/nested/bar/scripts.json"}, load_scripts=recording_loader
    )
    assert scripts["build"] == (
        'cd libs/nested/bar && npm start build && cd "../../.."'
    )


def test_every_leaf_returns_to_start(tmp_path, monkeypatch, recording_loader):
    monkeypatch.chdir(tmp_path)
    scripts = include_package("foo", load_scripts=recording_loader)

    def leaves(node):
        for key, value in node.items():
            if isinstance(value, dict):
                yield from leaves(value)
            elif key != "description":
                yield value

    for command in leaves(scripts):
        parts = command.split(" && ")
        assert parts[0] == "cd packages/foo"
        assert parts[-1] == 'cd "../.."'


def test_include_package_uses_context(tmp_path, recording_loader):
    context = ScriptContext(cwd=tmp_path, package_runner="yarn start")
    scripts = include_package("foo", load_scripts=recording_loader, context=context)
    assert scripts["build"] == 'cd packages/foo && yarn start build && cd "../.."'


def test_loader_errors_propagate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def failing_loader(path):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        include_package("foo", load_scripts=failing_loader)


def test_definitions_without_scripts(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ScriptFileError):
        include_package("foo", load_scripts=lambda path: {"other": {}})


def test_default_loader_reads_json(tmp_path, monkeypatch):
    package_dir = tmp_path / "packages" / "foo"
    package_dir.mkdir(parents=True)
    (package_dir / "package-scripts.json").write_text(
        json.dumps(SUB_PACKAGE_SCRIPTS)
    )
    monkeypatch.chdir(tmp_path)

    scripts = include_package({"path": "./packages/foo/package-scripts.json"})
    assert scripts["test"]["default"] == (
        'cd packages/foo && npm start test.default && cd "../.."'
    )


def test_default_loader_imports_python(tmp_path):
    scripts_file = tmp_path / "package-scripts.py"
    scripts_file.write_text(
        "_private = 1\n"
        "scripts = {'lint': 'eslint .', 'build': {'default': 'webpack'}}\n"
    )
    loaded = load_scripts_file(str(scripts_file))
    assert loaded["scripts"] == {"lint": "eslint .", "build": {"default": "webpack"}}
    assert "_private" not in loaded


def test_default_loader_rejects_unknown_suffix(tmp_path):
    scripts_file = tmp_path / "package-scripts.js"
    scripts_file.write_text("module.exports = {scripts: {}}")
    with pytest.raises(ScriptFileError) as exc_info:
        load_scripts_file(str(scripts_file))
    assert exc_info.value.path == str(scripts_file)


def test_default_loader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_scripts_file(str(tmp_path / "missing.json"))
    with pytest.raises(FileNotFoundError):
        load_scripts_file(str(tmp_path / "missing.py"))


def test_default_loader_invalid_json(tmp_path):
    scripts_file = tmp_path / "scripts.json"
    scripts_file.write_text("{broken")
    with pytest.raises(json.JSONDecodeError):
        load_scripts_file(str(scripts_file))


def test_find_scripts_file_prefers_loadable_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    package_dir = tmp_path / "packages" / "foo"
    package_dir.mkdir(parents=True)
    assert find_scripts_file("foo") == "./packages/foo/package-scripts.js"

    (package_dir / "package-scripts.py").write_text("scripts = {}\n")
    assert find_scripts_file("foo") == "./packages/foo/package-scripts.py"

    (package_dir / "package-scripts.json").write_text("{}")
    assert find_scripts_file("foo") == "./packages/foo/package-scripts.json"
