"""
Flat list projection of the catalog for rendering layers
"""

from dataclasses import dataclass
from typing import Callable, Optional

from constants import config
from log import logger
from models import CatalogDocument, Entry, EntryKind
from notifier import Subscription
from store import DocumentStore


@dataclass(frozen=True)
class DisplayCommand:
    command: str
    title: str
    arguments: tuple = ()


@dataclass(frozen=True, eq=False)
class DisplayItem:
    """Transient view-facing wrapper around a catalog entry"""

    entry: Entry
    description: str
    command: Optional[DisplayCommand] = None
    context_value: str = "configuration"
    icon: str = "gear"

    @property
    def label(self) -> str:
        return self.entry.name

    @property
    def tooltip(self) -> str:
        return self.entry.name

    @property
    def is_compound(self) -> bool:
        return self.entry.kind is EntryKind.COMPOUND


def _click_command(entry: Entry, click_behavior: Optional[str]) -> Optional[DisplayCommand]:
    if click_behavior != "openSettings":
        return None
    return DisplayCommand(
        command=config.OPEN_SETTINGS_COMMAND,
        title="Open Configuration Settings",
        arguments=(entry.name,),
    )


def project(
    document: CatalogDocument, click_behavior: Optional[str] = None
) -> list[DisplayItem]:
    """Configurations first, then compounds, each in stored order"""
    return [
        DisplayItem(
            entry=entry,
            description=entry.summary,
            command=_click_command(entry, click_behavior),
        )
        for entry in document.entries()
    ]


class ConfigurationView:
    """Keeps a rendering layer in sync with the store's notifier"""

    def __init__(
        self,
        store: DocumentStore,
        click_behavior: str = config.DEFAULT_CLICK_BEHAVIOR,
        listener: Optional[Callable[[list[DisplayItem]], None]] = None,
    ):
        self.store = store
        self.click_behavior = click_behavior
        self.listener = listener
        self.changed = 0
        self._subscription: Optional[Subscription] = store.notifier.subscribe(
            self._handle_change
        )

    def _handle_change(self) -> None:
        self.changed += 1
        if self.listener is not None:
            self.listener(self.get_items())

    def get_items(self) -> list[DisplayItem]:
        try:
            return project(self.store.read(), self.click_behavior)
        except Exception as e:
            logger.error(f"Error reading launch document {self.store.path}: {e}")
            return []

    def get_children(self, element: Optional[DisplayItem] = None) -> list[DisplayItem]:
        if element is None:
            return self.get_items()
        return []

    def dispose(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
