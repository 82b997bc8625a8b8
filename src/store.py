"""
Document store: read-modify-write access to the launch document
"""

import threading
from pathlib import Path
from typing import Callable, Optional

from constants import config
from errors import (
    DuplicateNameError,
    MalformedDocumentError,
    NotFoundError,
    PersistenceError,
)
from file_ops import FileOperations
from log import logger
from models import CatalogDocument, Compound, Configuration, Entry
from notifier import ChangeNotifier


class PathLocks:
    """Process-wide registry of one re-entrant lock per document path"""

    _registry: dict[Path, threading.RLock] = {}
    _guard = threading.Lock()

    @classmethod
    def for_path(cls, path: Path) -> threading.RLock:
        key = path.resolve()
        with cls._guard:
            if key not in cls._registry:
                cls._registry[key] = threading.RLock()
            return cls._registry[key]


class DocumentStore:
    """Owns the launch document and applies mutations to it.

    Every operation loads the document fresh from disk. Mutations run their
    read-mutate-write sequence under the document's path lock, persist the
    full document, then fire the notifier once the lock is released.
    """

    def __init__(self, path: Path, notifier: Optional[ChangeNotifier] = None):
        self.path = Path(path)
        self.notifier = notifier or ChangeNotifier()
        self._lock = PathLocks.for_path(self.path)

    def load(self) -> CatalogDocument:
        """Parse the stored document, raising on missing or malformed files"""
        if not self.path.is_file():
            raise FileNotFoundError(self.path)
        try:
            data = FileOperations.load_json(self.path)
            return CatalogDocument.from_dict(data)
        except (OSError, ValueError) as e:
            raise MalformedDocumentError(self.path, e) from e

    def read(self) -> CatalogDocument:
        try:
            return self.load()
        except FileNotFoundError:
            logger.debug(f"No launch document at {self.path}, using defaults")
        except MalformedDocumentError as e:
            logger.warning(f"{e}; treating catalog as empty")
        return CatalogDocument.default()

    def write(self, document: CatalogDocument) -> None:
        try:
            content = FileOperations.dump_json(document.to_dict())
            FileOperations.write_file(self.path, content)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(self.path, e) from e

    def list_entries(self) -> list[Entry]:
        return self.read().entries()

    def get(self, name: str) -> Entry:
        entry = self.read().get(name)
        if entry is None:
            raise NotFoundError(name)
        return entry

    def refresh(self) -> None:
        self.notifier.refresh()

    def _mutate(self, change: Callable[[CatalogDocument], None]) -> None:
        with self._lock:
            document = self.read()
            change(document)
            self.write(document)
        self.notifier.fire()

    def add(self, entry: Configuration) -> None:
        if not isinstance(entry, Configuration):
            raise TypeError(f"add() expects a Configuration, got {type(entry).__name__}")

        def change(document: CatalogDocument) -> None:
            if entry.name in document:
                raise DuplicateNameError(entry.name)
            document.append(entry)

        self._mutate(change)
        logger.info(f'Added configuration "{entry.name}" to {self.path}')

    def update(self, target_name: str, replacement: Entry) -> None:
        def change(document: CatalogDocument) -> None:
            if target_name not in document:
                raise NotFoundError(target_name)
            if replacement.name != target_name and replacement.name in document:
                raise DuplicateNameError(replacement.name)
            document.replace(target_name, replacement)

        self._mutate(change)
        logger.info(f'Updated "{target_name}" -> "{replacement.name}"')

    def delete(self, name: str) -> None:
        def change(document: CatalogDocument) -> None:
            if not document.remove(name):
                raise NotFoundError(name)

        self._mutate(change)
        logger.info(f'Deleted "{name}" from {self.path}')

    def duplicate(self, entry: Entry) -> Entry:
        copy = entry.renamed(f"{entry.name}{config.COPY_SUFFIX}")

        def change(document: CatalogDocument) -> None:
            if copy.name in document:
                raise DuplicateNameError(copy.name)
            document.append(copy)

        self._mutate(change)
        logger.info(f'Duplicated "{entry.name}" as "{copy.name}"')
        return copy

    def generate_unique_name(self, base: str) -> str:
        document = self.read()
        candidate = base
        counter = 1
        while candidate in document:
            candidate = f"{base}{config.UNIQUE_SEPARATOR}{counter}"
            counter += 1
        return candidate
