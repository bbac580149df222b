"""
Common fixtures for pytest unit and integration tests for the tip-shares library.

"""

from __future__ import annotations

import numpy as np
import pytest

from tip_shares.library.allocations.manager import TipDistributionManager
from tip_shares.library.allocations.types import (
    DENOMINATIONS,
    BillBreakdown,
    Participant,
)

# Report with a header row, a stated total and a comma decimal
STRUCTURED_REPORT_TEXT = """
Weekly Tip Distribution Report
Total Tips: $512.50

Partner Name      Hours
Alice Smith       32.5
Bob Jones         28
Carla             12,75
"""

# Report with hours before names and no stated total
HOURS_FIRST_REPORT_TEXT = """
Hours   Name
12      Dana
8.5     Eli
"""

# Report without a header row
PATTERN_REPORT_TEXT = """
Ana: 12.5
Ben 8
Tips: $150
"""

# Seeds for randomised property checks
PROPERTY_SEEDS = list(range(25))


def make_participants(pairs):
    """Build participants from ``(name, hours)`` pairs."""
    return [Participant(name=name, hours=hours) for name, hours in pairs]


def make_breakdown(bills):
    """Build a breakdown from a ``{denomination: count}`` mapping, zeros elsewhere."""
    return BillBreakdown(tuple(bills.get(d, 0) for d in DENOMINATIONS))


def generate_random_breakdown(rng: np.random.Generator, amount: int) -> BillBreakdown:
    """
    Generate a random (not necessarily greedy) breakdown adding up to amount.

    Each larger denomination takes a random count that still fits; $1 bills
    take the rest.
    """
    remaining = amount
    counts = []
    for denomination in (20, 10, 5):
        count = int(rng.integers(0, remaining // denomination + 1))
        counts.append(count)
        remaining -= count * denomination
    counts.append(remaining)
    return BillBreakdown(tuple(counts))


def generate_random_participants(rng: np.random.Generator, n: int):
    """Generate ``n`` participants with random hours, at least one positive."""
    hours = np.round(rng.uniform(0, 40, size=n), 2)
    if hours.sum() == 0:
        hours[0] = 1.0
    return [Participant(name=f"P{i}", hours=float(h)) for i, h in enumerate(hours)]


@pytest.fixture
def manager():
    """Provide a fresh TipDistributionManager with default configuration."""
    return TipDistributionManager()


@pytest.fixture
def two_equal_participants():
    """Two participants with equal hours (ties broken by position)."""
    return make_participants([("A", 10), ("B", 10)])


@pytest.fixture
def structured_report_text():
    """OCR-like text of a report with a table header and a total."""
    return STRUCTURED_REPORT_TEXT
