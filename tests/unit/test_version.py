"""Tests for package version lookup."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest

from compat_ui import __version__, _version


def _not_installed(name: str) -> str:
    raise PackageNotFoundError(name)


class TestGetVersion:
    def test_matches_package_attribute(self) -> None:
        assert _version.get_version() == __version__
        assert __version__

    def test_checkout_pyproject_when_not_installed(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "compat-ui"\nversion = "9.8.7"\n')
        monkeypatch.setattr(_version, "distribution_version", _not_installed)
        monkeypatch.setattr(_version, "_PYPROJECT", pyproject)

        assert _version.get_version() == "9.8.7"

    def test_foreign_pyproject_ignored(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "other"\nversion = "1.0"\n')
        monkeypatch.setattr(_version, "distribution_version", _not_installed)
        monkeypatch.setattr(_version, "_PYPROJECT", pyproject)

        assert _version.get_version() == "0.0.0+unknown"
