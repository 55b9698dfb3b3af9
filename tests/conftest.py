"""
Pytest configuration and shared fixtures for all cstreduce tests.

Building the lark parser is the expensive part of a run, so parser and
driver instances are session-scoped. Both are safe to share: the parser is
stateless and the reducer resets itself on every reduce().
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from cstreduce.compiler.driver import ReductionDriver
from cstreduce.frontend.parser import CParser
from cstreduce.passes.cst_reduction import CSTReducer


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """Lark C parser, built once (uses Lark native caching)."""
    return CParser()


@pytest.fixture(scope="session")
def session_driver():
    """Lark-backed driver shared across all tests."""
    return ReductionDriver()


# =============================================================================
# Function-scoped fixtures
# =============================================================================

@pytest.fixture
def parser(session_parser):
    return session_parser


@pytest.fixture
def reducer():
    """Fresh reducer per test, so automaton state can be inspected afterwards."""
    return CSTReducer()


@pytest.fixture
def driver(session_driver):
    return session_driver


@pytest.fixture
def reduce(parser, reducer):
    """Parse-then-reduce helper bound to the shared parser and a fresh reducer."""
    def _reduce(source: str, source_file: str = "<test>"):
        return reducer.reduce(parser.parse(source, source_file))
    return _reduce


@pytest.fixture
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
