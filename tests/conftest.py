"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from book_printer import config as config_module
from book_printer.processors.base import Converter, ConversionError


class RecordingConverter(Converter):
    """Converter double that writes a marker body per file and records calls."""

    def __init__(self, pandoc_config=None, fail_on=None, read_files=False):
        self.pandoc_config = pandoc_config
        self.fail_on = set(fail_on or [])
        self.read_files = read_files
        self.calls = []

    def convert(self, path, options, sink):
        self.calls.append((str(path), options))
        if self.read_files:
            Path(path).read_text(encoding='utf-8')
        if Path(path).name in self.fail_on:
            raise ConversionError(path, "malformed markup")
        sink.write(f"%% body: {Path(path).name}\n")


@pytest.fixture
def recording_converter():
    return RecordingConverter()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config files and paper overrides out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("PAPER", raising=False)
    monkeypatch.chdir(tmp_path)
    config_module.set_config(None)
    yield
    config_module.set_config(None)


@pytest.fixture
def no_paper_query_config(tmp_path):
    """Config file with the system paper query switched off."""
    path = tmp_path / "book-printer-test.yml"
    path.write_text("paper:\n  command: []\n", encoding='utf-8')
    return path
