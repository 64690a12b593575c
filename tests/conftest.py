"""Pytest configuration and shared fixtures for inline_asm tests."""

import sys
import os
from pathlib import Path

import pytest

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent.parent))

from inline_asm import parse_asm, ExpansionTable

BUNDLED_SAMPLES = Path(__file__).parent / "samples"


def pytest_addoption(parser):
    parser.addoption(
        "--samples-dir",
        action="store",
        default=os.environ.get("ASM_SAMPLES_DIR", str(BUNDLED_SAMPLES)),
        help="Path to a directory of source files containing asm! invocations",
    )


@pytest.fixture
def expansions():
    """A fresh expansion table."""
    return ExpansionTable()


@pytest.fixture
def parse_snippet(expansions):
    """Parse directive text and return an ExpansionResult."""
    def _parse(text):
        return parse_asm(text, filename="<test>", expansions=expansions)
    return _parse


@pytest.fixture
def samples_dir(request):
    """Path to the sample source directory."""
    return Path(request.config.getoption("--samples-dir"))


@pytest.fixture
def sample_files(samples_dir):
    """List of all sample file paths."""
    if not samples_dir.is_dir():
        pytest.skip(f"Samples dir not found: {samples_dir}")
    files = []
    for dirpath, _, filenames in os.walk(samples_dir):
        for fn in sorted(filenames):
            files.append(Path(dirpath) / fn)
    return files
