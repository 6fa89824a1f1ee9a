"""Durable boolean preference on top of a key/value store."""

import logging

from asana_improvements.domain.ports import KeyValueStore
from asana_improvements.domain.shared.result import Err

logger = logging.getLogger(__name__)

TRUE_VALUE = "true"
FALSE_VALUE = "false"


class PersistedFlag:
    """A boolean setting that survives reloads.

    The value is stored as the string "true" or "false" under a single key.
    None of the methods raise: store errors and exceptions are logged and
    turned into the default value (for reads) or a False return (for writes).
    """

    def __init__(self, store: KeyValueStore, key: str, default: bool = False) -> None:
        """Initialize the flag.

        Args:
            store: Backend holding the value.
            key: Storage key for this flag.
            default: Value reported when nothing (readable) is stored.
        """
        self._store = store
        self._key = key
        self._default = default

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> bool:
        """Read the flag, falling back to the default on any failure."""
        try:
            result = self._store.get_item(self._key)
        except Exception as e:
            logger.error(f"Error reading {self._key!r} from storage: {e}")
            return self._default

        if isinstance(result, Err):
            logger.error(f"Error reading {self._key!r} from storage: {result.error}")
            return self._default

        if result.value is None:
            return self._default
        return result.value == TRUE_VALUE

    def set(self, value: bool) -> bool:
        """Persist the flag.

        Returns:
            True if the store accepted the write, False otherwise.
        """
        raw = TRUE_VALUE if value else FALSE_VALUE
        try:
            result = self._store.set_item(self._key, raw)
        except Exception as e:
            logger.error(f"Error writing {self._key!r}={raw!r} to storage: {e}")
            return False

        if isinstance(result, Err):
            logger.error(f"Error writing {self._key!r}={raw!r} to storage: {result.error}")
            return False
        return True

    def clear(self) -> bool:
        """Remove the stored value so reads return the default again."""
        try:
            result = self._store.remove_item(self._key)
        except Exception as e:
            logger.error(f"Error removing {self._key!r} from storage: {e}")
            return False

        if isinstance(result, Err):
            logger.error(f"Error removing {self._key!r} from storage: {result.error}")
            return False
        return True
