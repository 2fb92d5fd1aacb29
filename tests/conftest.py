"""
Pytest configuration and shared fixtures for fast-rules tests.
"""

import pytest

from fast_rules.core.program import Program
from fast_rules.core.walker import RuleWalker


@pytest.fixture
def program():
    return Program(namespace="PetStore")


@pytest.fixture
def annotations(program):
    return program.annotations


@pytest.fixture
def walker(program):
    return RuleWalker(program)


@pytest.fixture(autouse=True)
def clean_rules_env(monkeypatch):
    """Keep developer `RULES_*` variables out of the tests."""
    for name in ("RULES_NAMESPACE", "RULES_CLASS_NAME", "RULES_OUTPUT_FILE", "RULES_BASE_CLASS", "RULES_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)
