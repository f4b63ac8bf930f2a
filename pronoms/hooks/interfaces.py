"""Hook interfaces — abstract base classes for swappable infrastructure.

The session state machine never touches disk or browser-style local storage
directly. It receives a ``StateStorage`` and reads/writes plain string values
by key, which keeps it free of ambient side effects and testable with the
in-memory stub.

Tier 1 leaf module: imports only from abc (stdlib).

Usage:
    from pronoms.hooks.interfaces import StateStorage
"""

from abc import ABC, abstractmethod


class StateStorage(ABC):
    """Durable key/value store for string values (local-storage semantics).

    Implementations must make a ``set`` visible to every later ``get`` on
    the same instance, and must make ``delete`` idempotent.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Returns the value stored under key.

        Args:
            key: The storage key.

        Returns:
            The stored string, or None if nothing is stored under key.
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Stores value under key, overwriting any previous value.

        Args:
            key: The storage key.
            value: The string to store.
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Removes key. No-op if it is not present.

        Args:
            key: The storage key.
        """
        ...
