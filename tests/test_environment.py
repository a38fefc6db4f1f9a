"""Tests for platform and CI detection."""

# Local/package imports
from nps_utils.environment import CI_VENDORS, ci_vendor, is_ci, is_windows


def test_is_windows_on_win32(as_windows):
    assert is_windows() is True


def test_is_windows_on_darwin(as_darwin):
    assert is_windows() is False


def test_is_windows_for_cygwin_and_msys(as_darwin, monkeypatch):
    monkeypatch.setenv("OSTYPE", "cygwin")
    assert is_windows() is True
    monkeypatch.setenv("OSTYPE", "msys")
    assert is_windows() is True
    monkeypatch.setenv("OSTYPE", "linux-gnu")
    assert is_windows() is False


def test_not_ci_in_clean_environment():
    assert is_ci() is False
    assert ci_vendor() is None


def test_ci_detected_from_vendor(as_ci):
    assert is_ci() is True
    assert ci_vendor() == "Travis CI"


def test_ci_detected_from_generic_variable(monkeypatch):
    monkeypatch.setenv("CI", "true")
    assert is_ci() is True
    assert ci_vendor() is None


def test_falsy_values_do_not_count(monkeypatch):
    monkeypatch.setenv("CI", "false")
    monkeypatch.setenv("CONTINUOUS_INTEGRATION", "0")
    monkeypatch.setenv("BUILD_NUMBER", "")
    assert is_ci() is False


def test_vendor_requiring_all_variables(monkeypatch):
    monkeypatch.setenv("JENKINS_URL", "https://ci.example.com")
    assert ci_vendor() is None
    monkeypatch.setenv("BUILD_ID", "42")
    assert ci_vendor() == "Jenkins"
    assert is_ci() is True


def test_vendor_requiring_value(monkeypatch):
    monkeypatch.setenv("CI_NAME", "somethingelse")
    assert is_ci() is False
    monkeypatch.setenv("CI_NAME", "codeship")
    assert ci_vendor() == "Codeship"


def test_predicates_reflect_current_state(monkeypatch):
    assert is_ci() is False
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    assert is_ci() is True
    monkeypatch.delenv("GITHUB_ACTIONS")
    assert is_ci() is False


def test_vendor_names_are_unique():
    names = [vendor.name for vendor in CI_VENDORS]
    assert len(names) == len(set(names))
