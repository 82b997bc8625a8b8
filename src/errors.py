"""
Error taxonomy for the configuration store
"""

from pathlib import Path


class CatalogError(Exception):
    """Base class for all catalog failures"""


class DuplicateNameError(CatalogError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Configuration "{name}" already exists')


class NotFoundError(CatalogError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Configuration "{name}" not found')


class PersistenceError(CatalogError):
    def __init__(self, path: Path, reason: object):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class MalformedDocumentError(CatalogError):
    """Document exists but cannot be parsed into a catalog"""

    def __init__(self, path: Path, reason: object):
        self.path = path
        super().__init__(f"Malformed launch document {path}: {reason}")
