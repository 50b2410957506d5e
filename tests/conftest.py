"""
Shared pytest configuration and fixtures for pairwise-ranker.

This module provides common test fixtures and utilities used across
all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from analysis.pairwise import next_ballot, update_votes  # noqa: E402
from data.store import ComparisonStore  # noqa: E402


@pytest.fixture
def sample_candidates():
    """Provide sample candidate names for testing."""
    return ["one", "two", "three", "four"]


@pytest.fixture
def total_order_votes():
    """Every pair of 1..4 decided consistently with the order 1 > 2 > 3 > 4."""
    return [
        ("2", "3"),
        ("1", "2"),
        ("1", "4"),
        ("2", "4"),
        ("1", "3"),
        ("3", "4"),
    ]


@pytest.fixture
def store(sample_candidates):
    """Provide a fresh comparison store with the sample candidates."""
    return ComparisonStore(sample_candidates)


@pytest.fixture
def candidates_file(tmp_path):
    """Provide a plain text candidate file."""
    path = tmp_path / "candidates.txt"
    path.write_text("Alice\nBob\n\n  Charlie  \nBob\nDiana\n", encoding="utf-8")
    return path


def simulate_session(candidates, true_order, max_ballots=None):
    """
    Answer every suggested ballot according to a hidden order.

    Returns:
        Tuple of (final votes, number of ballots cast)
    """
    position = {candidate: i for i, candidate in enumerate(true_order)}
    votes = []
    cast = 0
    limit = max_ballots or len(candidates) ** 2
    while cast < limit:
        ballot = next_ballot(candidates, votes)
        if ballot is None:
            break
        a, b = ballot
        winner, loser = (a, b) if position[a] < position[b] else (b, a)
        votes = update_votes((winner, loser), votes)
        cast += 1
    return votes, cast


@pytest.fixture
def session_simulator():
    """Provide the hidden-order session simulator."""
    return simulate_session


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (full voting sessions)",
    )
    config.addinivalue_line(
        "markers",
        "golden: marks tests as golden dataset validation (hand-computed sessions)",
    )
    config.addinivalue_line(
        "markers", "invariant: marks tests as mathematical invariant validation"
    )
    config.addinivalue_line(
        "markers", "smoke: marks tests as smoke tests (basic functionality check)"
    )
