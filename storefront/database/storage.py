"""
Key-value persistence for catalog and cart snapshots.

Both backends absorb failures: a missing or unreadable value loads as None and
a failed save is logged, so the storefront keeps working on in-memory state.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CATALOG_KEY = "catalog"
CART_KEY = "cart"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def cart_key(session_id: str) -> str:
    """Storage key for a session's cart"""
    return f"{CART_KEY}.{session_id}"


class Storage(Protocol):
    """Persistence collaborator used by shop sessions"""

    def load(self, key: str) -> Optional[Any]:
        """Stored JSON value, or None if absent or unreadable"""
        ...

    def save(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value"""
        ...


class MemoryStorage:
    """Dict-backed storage; values are kept as JSON text like the file backend"""

    def __init__(self):
        self.data: dict[str, str] = {}

    def load(self, key: str) -> Optional[Any]:
        raw = self.data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding malformed value for {key!r}")
            return None

    def save(self, key: str, value: Any) -> None:
        try:
            self.data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not save {key!r}: {e}")


class JsonFileStorage:
    """One <key>.json file per key under a directory"""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def load(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable {path}: {e}")
            return None

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not save {path}: {e}")


def load_validated(storage: Storage, key: str, type_: type[T]) -> Optional[T]:
    """
    Load a value and validate it against a type.

    Returns:
        The validated value, or None when absent or malformed
    """
    raw = storage.load(key)
    if raw is None:
        return None
    try:
        return TypeAdapter(type_).validate_python(raw)
    except ValidationError as e:
        logger.warning(f"Discarding invalid {key!r} snapshot: {e.error_count()} error(s)")
        return None
