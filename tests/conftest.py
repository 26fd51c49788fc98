"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = EPOCH) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    """Provide a deterministic clock."""
    return TickingClock()


@pytest.fixture
def calculator(clock):
    """Provide a fresh Calculator instance."""
    from deskcalc import Calculator

    return Calculator(clock=clock)


@pytest.fixture
def initial_state():
    """Provide the initial calculator state."""
    from deskcalc import INITIAL_STATE

    return INITIAL_STATE


@pytest.fixture
def sample_numbers():
    """Provide a set of interesting test numbers."""
    return [
        0,
        1,
        -1,
        0.5,
        -0.5,
        100,
        -100,
        1e10,
        -1e10,
        1e-10,
        -1e-10,
        0.1 + 0.2,  # Floating point edge case
    ]
