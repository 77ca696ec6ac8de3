# core/storage.py

"""
Key-value blob stores backing the HomeworkTracker.

The tracker never touches the filesystem directly. It receives an object with
two methods, `load(key)` and `save(key, value)`, and calls `save` with the full
list of records or catalog items after every mutation.

Two implementations are provided:
    - `JsonFileStore`: one `<key>.json` file per key inside a data directory.
    - `MemoryStore`: a plain dictionary, for tests and throwaway sessions.

Both raise `StorageError` for any read or write failure.
"""

import copy
import json
import logging
import os
from typing import Any, Protocol

from core.exceptions import StorageError

logger = logging.getLogger(__name__)

RECORDS_KEY = "homework_records"
ITEMS_KEY = "homework_items"


class KeyValueStore(Protocol):
    def load(self, key: str) -> Any | None: ...

    def save(self, key: str, value: Any) -> None: ...


class JsonFileStore:
    """
    Stores each key as a pretty-printed JSON file inside `dir_path`.

    Notes:
        - The directory is created on first save if it does not exist.
        - A missing file loads as None; a file that cannot be parsed raises `StorageError`.
        - Every save overwrites the whole file.
    """

    def __init__(self, dir_path: str):
        self._dir_path = os.path.abspath(os.path.expanduser(dir_path))

    @property
    def dir_path(self) -> str:
        return self._dir_path

    def path_for(self, key: str) -> str:
        return os.path.join(self._dir_path, f"{key}.json")

    def load(self, key: str) -> Any | None:
        path = self.path_for(key)

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)

        except FileNotFoundError:
            logger.debug(f"No stored data for '{key}' at {path}")
            return None

        except json.JSONDecodeError as e:
            raise StorageError(f"Failed to parse JSON data in {path}: {e}") from e

        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)

        try:
            os.makedirs(self._dir_path, exist_ok=True)

            with open(path, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2, ensure_ascii=False)

        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON serializable: {e}") from e

        except OSError as e:
            raise StorageError(f"Failed to write data to {path}: {e}") from e

        logger.debug(f"Saved '{key}' to {path}")


class MemoryStore:
    """In-process store; values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data
