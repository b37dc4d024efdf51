"""
Shared pytest fixtures for all ics23_testgen tests.

Universes are cached per session: building them is deterministic and
nothing mutates them.
"""

from __future__ import annotations

from functools import cache

import pytest

from ics23_testgen.ics23 import TendermintBackend
from ics23_testgen.universe import Universe, build_universe, sorted_keys

from tests.ics23_testgen.helpers import FakeBackend


@cache
def _cached_universe(size: int) -> Universe:
    return build_universe(size)


@pytest.fixture
def universe_factory():
    """Return a function building (and caching) the universe of a given size."""
    return _cached_universe


@pytest.fixture
def universe_400() -> Universe:
    """The default-size universe."""
    return _cached_universe(400)


@pytest.fixture
def index_400(universe_400: Universe) -> tuple[bytes, ...]:
    """Ordered key index of the default-size universe."""
    return sorted_keys(universe_400)


@pytest.fixture
def backend() -> TendermintBackend:
    """Reference ICS23 backend."""
    return TendermintBackend()


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Backend returning canned roots and proofs."""
    return FakeBackend()
