"""
Catalog document model: configurations, compounds and the document root
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from constants import config
from log import logger


class EntryKind(Enum):
    CONFIGURATION = "configuration"
    COMPOUND = "compound"


def _require_str(data: dict, key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{what} field '{key}' must be a string, got {value!r}")
    return value


@dataclass
class Configuration:
    """A single launch/attach entry. Unknown fields are kept in ``extra``"""

    name: str
    type: str
    request: str = "launch"
    extra: dict[str, Any] = field(default_factory=dict)

    kind: ClassVar[EntryKind] = EntryKind.CONFIGURATION
    RESERVED: ClassVar[tuple[str, ...]] = ("name", "type", "request")

    def __post_init__(self):
        self.extra = {k: v for k, v in self.extra.items() if k not in self.RESERVED}
        if self.request not in config.REQUEST_TYPES:
            allowed = ", ".join(config.REQUEST_TYPES)
            raise ValueError(
                f"Invalid request '{self.request}' for '{self.name}'. Allowed: {allowed}"
            )

    @classmethod
    def from_dict(cls, data: Any) -> "Configuration":
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be an object, got {type(data)}")
        extra = {k: v for k, v in data.items() if k not in cls.RESERVED}
        return cls(
            name=_require_str(data, "name", "Configuration"),
            type=_require_str(data, "type", "Configuration"),
            request=_require_str(data, "request", "Configuration"),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "request": self.request, **self.extra}

    def renamed(self, name: str) -> "Configuration":
        return Configuration(name, self.type, self.request, dict(self.extra))

    @property
    def summary(self) -> str:
        return f"{self.type} - {self.request}"


@dataclass
class Compound:
    """A named group of configuration names launched together"""

    name: str
    configurations: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    kind: ClassVar[EntryKind] = EntryKind.COMPOUND
    RESERVED: ClassVar[tuple[str, ...]] = ("name", "configurations")

    def __post_init__(self):
        self.extra = {k: v for k, v in self.extra.items() if k not in self.RESERVED}

    @classmethod
    def from_dict(cls, data: Any) -> "Compound":
        if not isinstance(data, dict):
            raise ValueError(f"Compound must be an object, got {type(data)}")
        name = _require_str(data, "name", "Compound")
        references = data.get("configurations")
        if not isinstance(references, list) or not all(
            isinstance(ref, str) for ref in references
        ):
            raise ValueError(
                f"Compound '{name}' field 'configurations' must be a list of strings"
            )
        extra = {k: v for k, v in data.items() if k not in cls.RESERVED}
        return cls(name=name, configurations=list(references), extra=extra)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "configurations": list(self.configurations), **self.extra}

    def renamed(self, name: str) -> "Compound":
        return Compound(name, list(self.configurations), dict(self.extra))

    @property
    def summary(self) -> str:
        return f"Compound ({len(self.configurations)} configurations)"


Entry = Union[Configuration, Compound]


def entry_from_dict(data: Any) -> Entry:
    """Classify a loose mapping: a 'configurations' field marks a compound"""
    if isinstance(data, dict) and "configurations" in data:
        return Compound.from_dict(data)
    return Configuration.from_dict(data)


class CatalogDocument:
    """In-memory form of the launch document.

    Both collections keep their stored order. A name index (configurations
    first, first occurrence wins) gives constant time lookup and is rebuilt
    lazily after every structural change.
    """

    def __init__(
        self,
        version: str = config.DEFAULT_VERSION,
        configurations: Optional[list[Configuration]] = None,
        compounds: Optional[list[Compound]] = None,
        extra: Optional[dict[str, Any]] = None,
    ):
        self.version = version
        self._configurations: list[Configuration] = list(configurations or [])
        self._compounds: Optional[list[Compound]] = (
            None if compounds is None else list(compounds)
        )
        self.extra: dict[str, Any] = dict(extra or {})
        self._index: Optional[dict[str, tuple[EntryKind, int]]] = None

    @classmethod
    def default(cls) -> "CatalogDocument":
        return cls(version=config.DEFAULT_VERSION, configurations=[])

    @classmethod
    def from_dict(cls, data: Any) -> "CatalogDocument":
        if not isinstance(data, dict):
            raise ValueError(f"Launch document must be an object, got {type(data)}")

        raw_configs = data.get("configurations", [])
        if not isinstance(raw_configs, list):
            raise ValueError("'configurations' must be a list")

        raw_compounds = data.get("compounds")
        if raw_compounds is not None and not isinstance(raw_compounds, list):
            raise ValueError("'compounds' must be a list")

        version = data.get("version", config.DEFAULT_VERSION)
        if not isinstance(version, str):
            raise ValueError(f"'version' must be a string, got {version!r}")

        document = cls(
            version=version,
            configurations=[Configuration.from_dict(c) for c in raw_configs],
            compounds=(
                None
                if raw_compounds is None
                else [Compound.from_dict(c) for c in raw_compounds]
            ),
            extra={
                k: v
                for k, v in data.items()
                if k not in ("version", "configurations", "compounds")
            },
        )
        document._warn_duplicates()
        return document

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "configurations": [c.to_dict() for c in self._configurations],
        }
        if self._compounds is not None:
            data["compounds"] = [c.to_dict() for c in self._compounds]
        data.update(self.extra)
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogDocument):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"CatalogDocument(version={self.version!r}, "
            f"configurations={len(self._configurations)}, "
            f"compounds={len(self.compounds)})"
        )

    @property
    def configurations(self) -> tuple[Configuration, ...]:
        return tuple(self._configurations)

    @property
    def compounds(self) -> tuple[Compound, ...]:
        return tuple(self._compounds or ())

    def entries(self) -> list[Entry]:
        return [*self._configurations, *(self._compounds or [])]

    def _collection(self, kind: EntryKind) -> list:
        if kind is EntryKind.CONFIGURATION:
            return self._configurations
        if self._compounds is None:
            self._compounds = []
        return self._compounds

    def _build_index(self) -> dict[str, tuple[EntryKind, int]]:
        if self._index is None:
            index: dict[str, tuple[EntryKind, int]] = {}
            for position, entry in enumerate(self._configurations):
                index.setdefault(entry.name, (EntryKind.CONFIGURATION, position))
            for position, entry in enumerate(self._compounds or []):
                index.setdefault(entry.name, (EntryKind.COMPOUND, position))
            self._index = index
        return self._index

    def _warn_duplicates(self) -> None:
        total = len(self._configurations) + len(self.compounds)
        if len(self._build_index()) != total:
            logger.warning(
                f"Launch document repeats {total - len(self._index)} entry name(s); "
                "only the first occurrence is addressable by name"
            )

    def locate(self, name: str) -> Optional[tuple[EntryKind, int]]:
        return self._build_index().get(name)

    def get(self, name: str) -> Optional[Entry]:
        location = self.locate(name)
        if location is None:
            return None
        kind, position = location
        return self._collection(kind)[position]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._build_index()

    def append(self, entry: Entry) -> None:
        self._collection(entry.kind).append(entry)
        self._index = None

    def replace(self, name: str, entry: Entry) -> bool:
        """Replace the entry called ``name`` in place"""
        location = self.locate(name)
        if location is None:
            return False
        kind, position = location
        if entry.kind is not kind:
            raise ValueError(
                f"Cannot replace {kind.value} '{name}' with a {entry.kind.value}"
            )
        self._collection(kind)[position] = entry
        self._index = None
        return True

    def remove(self, name: str) -> bool:
        location = self.locate(name)
        if location is None:
            return False
        kind, position = location
        del self._collection(kind)[position]
        self._index = None
        return True
