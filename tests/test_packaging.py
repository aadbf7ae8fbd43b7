"""Tests for the package layout declared in pyproject.toml."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

tomllib = pytest.importorskip("tomllib")
setuptools = pytest.importorskip("setuptools")


@pytest.fixture
def pyproject():
    with open(ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)


class TestPackageDiscovery:
    """Test cases for which packages an install ships."""

    def test_cli_packages_found(self, pyproject):
        """Test that the cli packages without __init__.py are installed."""
        find = pyproject["tool"]["setuptools"]["packages"]["find"]
        assert find["namespaces"] is True

        packages = setuptools.find_namespace_packages(where=str(ROOT), include=find["include"])
        for name in ("cli", "cli.commands", "cli.display", "smfcodec", "smfcodec.formats.smf"):
            assert name in packages
        assert not any(name.startswith("tests") for name in packages)

    def test_console_script_target_is_shipped(self, pyproject):
        """Test that the console script points into a shipped package."""
        target = pyproject["project"]["scripts"]["smfcodec"]
        module, _, function = target.partition(":")
        assert (ROOT / Path(*module.split("."))).with_suffix(".py").is_file()
        assert module.split(".")[0] == "cli"
        assert function == "run"
