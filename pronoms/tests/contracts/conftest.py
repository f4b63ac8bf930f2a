"""Fixtures for contract tests — one parameterized fixture per hook interface.

Each fixture yields a fresh implementation instance. Add a param value and a
branch to run the contract against another implementation:

    python -m pytest pronoms/tests/contracts/ -v
"""

import pytest

from pronoms.hooks.storage import InMemoryStorage, JsonFileStorage


@pytest.fixture(params=["memory", "json_file"])
def state_storage(request, tmp_path):
    """Yields a StateStorage implementation."""
    if request.param == "memory":
        yield InMemoryStorage()
    elif request.param == "json_file":
        yield JsonFileStorage(tmp_path / "nested" / "state.json")
