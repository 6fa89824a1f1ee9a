"""Key/value stores with Result-based error handling.

JsonFileStore keeps every key in a single JSON object on disk, playing the
role localStorage plays for a browser userscript. MemoryStore is the
process-local equivalent used by tests and one-off runs.
"""

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import Any

from asana_improvements.domain.shared.result import Err, Ok, Result


class JsonFileStore:
    """Durable string key/value store backed by a JSON file.

    A missing file is an empty store. Every write rewrites the whole file
    through a temporary file that replaces the old one, so a failed write
    leaves the previous contents in place.
    A corrupt file is reported as an error and never overwritten, so a
    broken state file is left for the user to inspect.

    Example:
        store = JsonFileStore(Path("~/.asana_improvements/state.json").expanduser())
        store.set_item("completedSubtasksHidden", "true")
        result = store.get_item("completedSubtasksHidden")
        if isinstance(result, Ok):
            print(result.value)
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Result[dict[str, Any], str]:
        try:
            if not self._path.exists():
                return Ok({})

            content = self._path.read_text(encoding="utf-8")
            data = json.loads(content) if content.strip() else {}
            if not isinstance(data, dict):
                return Err(f"Expected a JSON object in {self._path}")
            return Ok(data)

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {self._path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {self._path}")
        except OSError as e:
            return Err(f"Error reading {self._path}: {e}")

    def _save(self, data: dict[str, Any]) -> Result[None, str]:
        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(json.dumps(data, indent=2))
            os.replace(tmp_path, self._path)
            tmp_path = None
            return Ok(None)

        except PermissionError:
            return Err(f"Permission denied writing {self._path}")
        except OSError as e:
            return Err(f"Error writing {self._path}: {e}")
        finally:
            if tmp_path is not None:
                with suppress(OSError):
                    tmp_path.unlink()

    def get_item(self, key: str) -> Result[str | None, str]:
        """Read a value.

        Returns:
            Ok(str) if present, Ok(None) if absent, Err(str) if unreadable.
        """
        result = self._load()
        if isinstance(result, Err):
            return result

        value = result.value.get(key)
        if value is not None and not isinstance(value, str):
            return Err(f"Value for {key!r} in {self._path} is not a string")
        return Ok(value)

    def set_item(self, key: str, value: str) -> Result[None, str]:
        """Store a value, keeping every other key intact."""
        result = self._load()
        if isinstance(result, Err):
            return result

        data = dict(result.value)
        data[key] = value
        return self._save(data)

    def remove_item(self, key: str) -> Result[None, str]:
        """Delete a key. Removing an absent key succeeds."""
        result = self._load()
        if isinstance(result, Err):
            return result

        if key not in result.value:
            return Ok(None)

        data = dict(result.value)
        del data[key]
        return self._save(data)


class MemoryStore:
    """In-memory key/value store with the same contract as JsonFileStore."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Result[str | None, str]:
        return Ok(self._data.get(key))

    def set_item(self, key: str, value: str) -> Result[None, str]:
        self._data[key] = value
        return Ok(None)

    def remove_item(self, key: str) -> Result[None, str]:
        self._data.pop(key, None)
        return Ok(None)

    def snapshot(self) -> dict[str, str]:
        """Copy of the stored data, for inspection."""
        return dict(self._data)
