"""State storage implementations — in-memory stub and JSON file store.

``InMemoryStorage`` is what tests and throwaway sessions use. ``JsonFileStorage``
keeps every key in one JSON object on disk, the terminal counterpart of a
browser's local storage: the whole file is rewritten on each ``set``.

Tier 2 service module: imports from pronoms.hooks.interfaces (Tier 1).

Usage:
    from pronoms.hooks.storage import InMemoryStorage, JsonFileStorage

    storage = JsonFileStorage("~/.pronoms/state.json")
    storage.set("gameDate", "2024-05-01")
"""

import json
import logging
from pathlib import Path

from pronoms.hooks.interfaces import StateStorage

logger = logging.getLogger(__name__)


class InMemoryStorage(StateStorage):
    """STUB — dict-backed storage, loses data when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStorage(StateStorage):
    """Stores all keys in a single JSON object file.

    The file is read on every ``get`` so that two front-ends sharing the file
    see each other's writes. A missing file reads as empty. A file that is
    not a JSON object is logged and treated as empty; the next ``set``
    replaces it.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialises the store.

        Args:
            path: Location of the JSON file. ``~`` is expanded. Parent
                directories are created on first write.
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("State file %s is not valid JSON, ignoring it", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("State file %s does not hold a JSON object, ignoring it", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(values, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self._path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self._write(values)

    def delete(self, key: str) -> None:
        values = self._read()
        if key in values:
            del values[key]
            self._write(values)
