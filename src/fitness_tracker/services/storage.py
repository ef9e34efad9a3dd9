"""Key-value storage abstractions."""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Asynchronous string-keyed, string-valued durable store."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    async def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""

    async def remove(self, key: str) -> None:
        """Delete a key if present."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store used for local runs and tests."""

    _entries: dict[str, str]

    def __init__(self) -> None:
        self._entries = {}

    async def get(self, key: str) -> str | None:
        """Return the stored value, if any."""
        return self._entries.get(key)

    async def set(self, key: str, value: str) -> None:
        """Store a value."""
        self._entries[key] = value

    async def remove(self, key: str) -> None:
        """Delete a key if present."""
        self._entries.pop(key, None)


class ReadStatus(Enum):
    """Outcome of reading a stored JSON value."""

    FOUND = "found"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class StoredValue:
    """Decoded value read from the store along with how the read went."""

    status: ReadStatus
    payload: object = None

    @property
    def found(self) -> bool:
        """Return True when a well-formed value was read."""
        return self.status is ReadStatus.FOUND


async def read_json(store: KeyValueStore, key: str) -> StoredValue:
    """Read and decode a JSON value.

    Absent keys are reported as MISSING. Storage errors are logged and
    reported as FAILED. A value that does not decode is logged and treated
    as MISSING so callers overwrite it on their next write.
    """
    try:
        raw = await store.get(key)
    except Exception:
        _logger.exception("Storage read failed: key=%s", key)
        return StoredValue(status=ReadStatus.FAILED)
    if raw is None:
        return StoredValue(status=ReadStatus.MISSING)
    try:
        payload = json.loads(raw)
    except ValueError:
        _logger.warning("Ignoring malformed stored value: key=%s", key)
        return StoredValue(status=ReadStatus.MISSING)
    return StoredValue(status=ReadStatus.FOUND, payload=payload)


async def write_json(store: KeyValueStore, key: str, payload: object) -> None:
    """Encode and store a JSON value, logging and re-raising failures."""
    try:
        await store.set(key, json.dumps(payload))
    except Exception:
        _logger.exception("Storage write failed: key=%s", key)
        raise
