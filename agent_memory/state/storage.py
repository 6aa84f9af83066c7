"""
Named state stores - short-lived textual facts the agent consults and updates.

Each store has a fixed kind for its whole lifetime and one lock guarding its
entries. Mutations and renders both run under that lock, so a reader never
sees a half-applied change.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
import threading
from typing import Callable, Dict, List, Optional

from ..core.exceptions import StoreDisciplineViolation
from ..util.logging import logger, truncate
from .schema import StateChange, StoreKind

Observer = Callable[[StateChange], None]

CURRENT_TAG = "__current"
PREVIOUS_TAG = "__previous"

EMPTY_MARKER = "  no entries yet\n"


@dataclass
class Entry:
    data: str
    created_at: datetime = field(default_factory=datetime.now)


class NamedStore(ABC):
    """
    Base class for the three store kinds.

    Provides the shared capabilities (render, clear, snapshot, observers);
    operations specific to a kind only exist on the matching subclass.
    """

    kind: StoreKind

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[str, Entry] = {}
        self._lock = threading.RLock()
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        """Receive a StateChange for every effective mutation of this store."""
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def _notify(self, action: str, key: Optional[str] = None, previous: Optional[str] = None,
                new: Optional[str] = None, verbose: bool = True) -> None:
        # Called with the lock held: observers see changes in serialization order.
        if not self._observers:
            return

        event = StateChange(
            store_name=self.name,
            kind=self.kind,
            action=action,
            key=key,
            previous=previous,
            new=new,
            verbose=verbose,
        )
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as e:
                logger.error(f"State observer {observer!r} failed on <{self.name}> {action}: {e}")

    @abstractmethod
    def _render(self) -> str:
        pass

    def render(self) -> str:
        """Canonical textual snapshot of the store, for inclusion in a prompt."""
        with self._lock:
            return self._render()

    def _reset(self) -> None:
        self._entries.clear()

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._reset()
            self._notify("clear")

    def snapshot(self) -> Dict[str, str]:
        """Copy of the tag -> text mapping."""
        with self._lock:
            return {tag: entry.data for tag, entry in self._entries.items()}

    def _render_list(self, line: Callable[[str, Entry], str]) -> str:
        xml = f"<{self.name}>\n"

        if not self._entries:
            xml += EMPTY_MARKER
        else:
            for tag, entry in self._entries.items():
                xml += line(tag, entry)

        xml += f"</{self.name}>"
        return xml

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, entries={len(self)})"


class OrderedStore(NamedStore):
    """A list of facts tagged by their 1-based position.

    Positions are never reused or renumbered: after removing position 1 the
    next element still gets a fresh position. clear() starts again from 1.
    """

    kind = StoreKind.ORDERED

    def __init__(self, name: str):
        super().__init__(name)
        self._last_position = 0

    def add(self, data: str) -> int:
        """Append ``data`` and return its position."""
        with self._lock:
            self._last_position += 1
            tag = str(self._last_position)
            self._entries[tag] = Entry(data)
            self._notify("add", key=tag, new=data)
            return self._last_position

    def remove(self, position: int) -> Optional[str]:
        """Remove the element at ``position``; returns its text or None if absent."""
        tag = str(position)
        with self._lock:
            old = self._entries.pop(tag, None)
            if old is None:
                return None
            self._notify("remove", key=tag, previous=old.data)
            return old.data

    def _reset(self) -> None:
        super()._reset()
        self._last_position = 0

    def _render(self) -> str:
        return self._render_list(lambda tag, entry: f"  - {entry.data}\n")


class TaggedStore(NamedStore):
    """A key=value map of facts."""

    kind = StoreKind.TAGGED

    def add(self, key: str, data: str) -> None:
        """Insert or overwrite the entry at ``key``."""
        with self._lock:
            old = self._entries.get(key)
            self._entries[key] = Entry(data)
            self._notify("add", key=key, previous=old.data if old else None, new=data)

    def remove(self, key: str) -> Optional[str]:
        """Remove ``key``; returns the prior text or None if absent."""
        with self._lock:
            old = self._entries.pop(key, None)
            if old is None:
                return None
            self._notify("remove", key=key, previous=old.data)
            return old.data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            return entry.data if entry else None

    def _render(self) -> str:
        return self._render_list(lambda key, entry: f"  - {key}: {entry.data}\n")


class CurrentPreviousStore(NamedStore):
    """A single rolling value that remembers only the one before it."""

    kind = StoreKind.CURRENT_PREVIOUS

    def set(self, data: str, verbose: bool = True) -> None:
        """
        Make ``data`` current; the old current value becomes previous.

        ``verbose=False`` marks the change event so logging observers skip it.
        """
        with self._lock:
            old_current = self._entries.pop(CURRENT_TAG, None)

            self._entries[CURRENT_TAG] = Entry(data)
            if old_current is not None:
                self._entries[PREVIOUS_TAG] = old_current

            self._notify(
                "set",
                key=CURRENT_TAG,
                previous=old_current.data if old_current else None,
                new=data,
                verbose=verbose,
            )

    @property
    def current(self) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(CURRENT_TAG)
            return entry.data if entry else None

    @property
    def previous(self) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(PREVIOUS_TAG)
            return entry.data if entry else None

    def _render(self) -> str:
        current = self._entries.get(CURRENT_TAG)
        if current is None:
            return ""

        text = f"* Current {self.name}: {current.data.strip()}"
        previous = self._entries.get(PREVIOUS_TAG)
        if previous is not None:
            text += f"\n* Previous {self.name}: {previous.data.strip()}"
        return text


STORE_TYPES = {
    StoreKind.ORDERED: OrderedStore,
    StoreKind.TAGGED: TaggedStore,
    StoreKind.CURRENT_PREVIOUS: CurrentPreviousStore,
}


def create_store(name: str, kind: StoreKind) -> NamedStore:
    """Build the store type matching ``kind``."""
    try:
        return STORE_TYPES[StoreKind(kind)](name)
    except (ValueError, KeyError):
        raise StoreDisciplineViolation(f"unknown store kind {kind!r} for <{name}>") from None


def log_state_change(event: StateChange) -> None:
    """Default observer: write the change through the structured logger."""
    if not event.verbose:
        return

    if event.action == "clear":
        message = "cleared"
    elif event.action == "set":
        message = f"current={truncate(event.new)}"
    elif event.action == "remove":
        if event.kind == StoreKind.ORDERED:
            message = f"element {event.key} removed"
        else:
            message = f"{event.key} removed"
    elif event.kind == StoreKind.TAGGED:
        message = f"{event.key}={truncate(event.new)}"
    else:
        message = truncate(event.new)

    logger.log_state_operation(event.store_name, message)
