"""Shared fixtures for nps-utils tests."""

# Standard library imports
import json
import os
from pathlib import Path

# Third-party imports
import pytest

# Local/package imports
from nps_utils.config import clear_context
from nps_utils.environment import CI_VENDORS, GENERIC_CI_VARIABLES

INSTALLED_PACKAGES = {
    "concurrently": {"concurrently": "./bin/concurrently.js"},
    "rimraf": "bin.js",
    "cpy-cli": {"cpy": "cli.js"},
    "ncp": {"ncp": "./bin/ncp"},
    "mkdirp": "bin/cmd.js",
    "opn-cli": {"opn": "cli.js"},
    "cross-env": {
        "cross-env": "src/bin/cross-env.js",
        "cross-env-shell": "src/bin/cross-env-shell.js",
    },
}


def make_package(root: Path, name: str, bin_field) -> Path:
    """Write a minimal installed package under ``root/node_modules``."""
    package_dir = root / "node_modules" / name
    package_dir.mkdir(parents=True, exist_ok=True)
    descriptor = {"name": name, "version": "1.0.0"}
    if bin_field is not None:
        descriptor["bin"] = bin_field
    (package_dir / "package.json").write_text(json.dumps(descriptor))
    return package_dir


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove CI and nps-utils variables and reset the default context."""
    names = set(GENERIC_CI_VARIABLES) | {"OSTYPE"}
    for vendor in CI_VENDORS:
        names.update(vendor.env)
    names.update(key for key in os.environ if key.startswith("NPS_UTILS_"))
    for name in names:
        monkeypatch.delenv(name, raising=False)

    clear_context()
    yield
    clear_context()


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """A project directory with the script binaries installed, used as cwd."""
    for name, bin_field in INSTALLED_PACKAGES.items():
        make_package(tmp_path, name, bin_field)
    monkeypatch.chdir(tmp_path)
    return Path.cwd()


@pytest.fixture
def as_windows(monkeypatch):
    monkeypatch.setattr("sys.platform", "win32")


@pytest.fixture
def as_darwin(monkeypatch):
    monkeypatch.setattr("sys.platform", "darwin")


@pytest.fixture
def as_ci(monkeypatch):
    monkeypatch.setenv("TRAVIS", "true")


@pytest.fixture
def install_package():
    """Return a helper writing an installed package into a directory."""
    return make_package
