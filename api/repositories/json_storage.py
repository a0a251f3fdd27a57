"""
JSON document persistence adapter.

Each document is one file under the storage root holding a single JSON value
(array or object). A missing file is materialized with the caller's default on
first read, so no separate provisioning step is needed. Access to a given file
goes through a per-path lock so read-modify-write cycles from concurrent
requests do not lose updates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Union
import copy
import json
import logging
import os
import tempfile
import threading

logger = logging.getLogger(__name__)

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

MEDIA_DIRS = (
    "inbox_media",
    "media",
    os.path.join("media", "welcome_page"),
    os.path.join("media", "welcome_inbox"),
)


class StorageError(Exception):
    """Base class for document store failures."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class CorruptDocumentError(StorageError):
    """Raised when a document file does not hold valid JSON of the expected shape."""


class StorageUnavailableError(StorageError):
    """Raised on I/O failures (permissions, full disk, missing directory)."""


class JsonDocumentStore:
    """Directory of JSON files used as a crude document store."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self._locks: Dict[Path, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    # -------------------------------------- layout --------------------------------------
    def ensure_layout(self) -> None:
        """Create the storage root and the media upload folders if absent."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            for sub in MEDIA_DIRS:
                (self.root / sub).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot initialize storage at {self.root}: {exc}", self.root) from exc

    def path_for(self, name: str) -> Path:
        return self.root / name

    def lock_for(self, name: str) -> threading.RLock:
        path = self.path_for(name).resolve()
        with self._locks_guard:
            lock = self._locks.get(path)
            if lock is None:
                lock = threading.RLock()
                self._locks[path] = lock
            return lock

    # -------------------------------------- primitives --------------------------------------
    def read(self, name: str, default: JSONValue = None) -> JSONValue:
        """Return the parsed document, persisting ``default`` when the file is missing."""
        path = self.path_for(name)
        with self.lock_for(name):
            try:
                raw = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                value = copy.deepcopy(default)
                logger.info("Document %s missing; materializing default", path.name)
                self.write(name, value)
                return value
            except UnicodeDecodeError as exc:
                raise CorruptDocumentError(f"{path.name} is not valid UTF-8: {exc}", path) from exc
            except OSError as exc:
                raise StorageUnavailableError(f"Cannot read {path.name}: {exc}", path) from exc
            try:
                return json.loads(raw)
            except json.JSONDecodeError as exc:
                logger.error("Document %s holds invalid JSON: %s", path, exc)
                raise CorruptDocumentError(f"{path.name} is not valid JSON: {exc}", path) from exc

    def write(self, name: str, value: JSONValue) -> JSONValue:
        """Replace the whole document; readers never observe a half-written file."""
        path = self.path_for(name)
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for {path.name} is not JSON serializable: {exc}", path) from exc
        with self.lock_for(name):
            tmp_name = None
            try:
                fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
                tmp_name = None
            except OSError as exc:
                raise StorageUnavailableError(f"Cannot write {path.name}: {exc}", path) from exc
            finally:
                if tmp_name is not None:
                    try:
                        os.unlink(tmp_name)
                    except OSError:
                        logger.warning("Could not remove temp file %s", tmp_name)
        return value

    def update(self, name: str, default: JSONValue, mutate: Callable[[JSONValue], JSONValue]) -> JSONValue:
        """Read-modify-write a document while holding its lock."""
        with self.lock_for(name):
            current = self.read(name, default)
            new_value = mutate(current)
            return self.write(name, new_value)
