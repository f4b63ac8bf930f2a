"""Day-keyed session persistence over a StateStorage port.

Two independent keys are kept: the JSON snapshot (``gameState``) and the
date it belongs to (``gameDate``, ``YYYY-MM-DD``). Both are written together
and treated as absent together when the date is not today. A session
started at 23:59 is therefore discarded a minute later.

Tier 2 service module: imports from pronoms.hooks.interfaces and
pronoms.schemas (Tier 1).
"""

import logging
from datetime import date

from pydantic import ValidationError

from pronoms.hooks.interfaces import StateStorage
from pronoms.schemas import SessionSnapshot

logger = logging.getLogger(__name__)

STATE_KEY = "gameState"
DATE_KEY = "gameDate"


class SessionPersistence:
    """Reads and writes session snapshots stamped with their calendar day."""

    def __init__(self, storage: StateStorage) -> None:
        self._storage = storage

    def load(self, today: date) -> SessionSnapshot | None:
        """Returns today's snapshot, or None if there is no usable one.

        A snapshot stamped with another date, or one that no longer parses,
        is reported as absent. Whether it is restorable (session id, current
        item) is the caller's decision.
        """
        stamp = self._storage.get(DATE_KEY)
        raw = self._storage.get(STATE_KEY)
        if raw is None or stamp != today.isoformat():
            return None
        try:
            return SessionSnapshot.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable session snapshot")
            return None

    def save(self, snapshot: SessionSnapshot, today: date) -> None:
        """Writes the full snapshot and today's date stamp."""
        self._storage.set(STATE_KEY, snapshot.model_dump_json())
        self._storage.set(DATE_KEY, today.isoformat())

    def clear(self) -> None:
        self._storage.delete(STATE_KEY)
        self._storage.delete(DATE_KEY)
