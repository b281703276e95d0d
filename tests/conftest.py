"""Pytest configuration for the corlib test suite."""

import os
import sys
from pathlib import Path

import pytest
from hypothesis import settings

# Run against src/ without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from corlib.config import reset_options  # noqa: E402
from corlib.io import Console, HostWriter  # noqa: E402

# Hypothesis profiles, selected with HYPOTHESIS_PROFILE
settings.register_profile("default", print_blob=True, derandomize=False)
settings.register_profile("ci", print_blob=True, derandomize=True, max_examples=500)
settings.register_profile("quick", max_examples=25)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch):
    """Each test reads options from a clean environment and writes to a fresh console."""
    for name in ("CORLIB_NEWLINE", "CORLIB_STRICT_MATH", "CORLIB_TRACE_UNPORTED"):
        monkeypatch.delenv(name, raising=False)
    reset_options()
    Console.SetOut(HostWriter("stdout"))
    yield
    reset_options()
    Console.SetOut(HostWriter("stdout"))
