"""Global test configuration for shellkit tests."""

import pytest


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Give every test default settings, undoing anything the CLI callback swapped in."""
    from shellkit.core import config as config_module

    monkeypatch.setattr(config_module, "SETTINGS", config_module.Settings())
    yield


@pytest.fixture
def runner():
    """CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run from an empty directory so no .shellkit.* config is auto-discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_file(tmp_path):
    """Write a file under tmp_path and return its path."""

    def _make(name: str, content: bytes | str, encoding: str = "utf-8"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode(encoding)
        path.write_bytes(content)
        return path

    return _make
