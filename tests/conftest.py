"""Shared test fixtures for the generator."""

from __future__ import annotations

import pytest

from stargen.generator import ProceduralGenerator

FIXED_TIME = 1_700_000_000.0


def fixed_clock() -> float:
    return FIXED_TIME


@pytest.fixture
def generator() -> ProceduralGenerator:
    """A generator with a fixed seed and a frozen clock."""
    return ProceduralGenerator(seed=42, clock=fixed_clock)


@pytest.fixture
def make_generator():
    """Factory for generators sharing the frozen clock."""

    def _make(seed: int, **kwargs) -> ProceduralGenerator:
        kwargs.setdefault("clock", fixed_clock)
        return ProceduralGenerator(seed=seed, **kwargs)

    return _make
