"""Tests for version lookup."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError

import pytest

from storykit import _version


class TestGetVersion:
    def test_installed_version(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(_version, "version", lambda name: "1.2.3")
        assert _version.get_version() == "1.2.3"

    def test_uninstalled_checkout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def missing(name: str) -> str:
            raise PackageNotFoundError(name)

        monkeypatch.setattr(_version, "version", missing)
        assert _version.get_version() == _version.UNKNOWN_VERSION
