"""Unit tests configuration file."""

import pytest


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def go_package(tmp_path):
    """Write Go files into a temporary module and return its directory."""

    def write(files, module="example.com/app"):
        (tmp_path / "go.mod").write_text(f"module {module}\n\ngo 1.21\n", encoding="utf-8")
        for name, source in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return tmp_path

    return write
