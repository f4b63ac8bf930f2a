"""Shared test fixtures.

Factory-pattern fixtures that return callables accepting **overrides.

Fixtures:
    mock_provider: Factory for MockProvider instances
    make_sentence: Factory for valid Sentence instances
    storage: Fresh InMemoryStorage
    clock: Settable stand-in for date.today
    make_session: Factory for GameSession wired to storage and clock
"""

from datetime import date

import pytest

from pronoms.hooks.storage import InMemoryStorage
from pronoms.providers.mock import MockProvider
from pronoms.schemas import Difficulty, Sentence
from pronoms.session import GameSession


class Clock:
    """Callable returning a date tests can move forward."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def mock_provider():
    """Returns a factory function for creating MockProvider instances."""

    def _make(**kwargs) -> MockProvider:
        return MockProvider(**kwargs)

    return _make


@pytest.fixture
def make_sentence():
    """Returns a factory function for creating valid Sentence instances."""

    def _make(**overrides) -> Sentence:
        defaults = {
            "full_form": "Dóna la pilota a mi",
            "short_form": "Dóna-me-la",
            "difficulty": Difficulty.EASY,
            "explanation": "Em + la darrere d'imperatiu.",
        }
        defaults.update(overrides)
        return Sentence(**defaults)

    return _make


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def clock() -> Clock:
    return Clock(date(2024, 5, 1))


@pytest.fixture
def make_session(storage, clock):
    """Returns a factory building a GameSession around a provider.

    The session shares the test's storage and clock unless overridden.
    """

    def _make(provider, **overrides) -> GameSession:
        return GameSession(
            provider,
            overrides.get("storage", storage),
            today=overrides.get("today", clock),
        )

    return _make
