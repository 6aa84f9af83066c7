"""
Store registry - named state stores shared by the orchestration layer.
"""

import threading
from typing import Dict, List, Optional, Type, TypeVar

from ..core.config import state_verbose_enabled
from ..core.exceptions import StoreDisciplineViolation
from ..util.logging import logger
from .schema import StoreKind
from .storage import (
    CurrentPreviousStore,
    NamedStore,
    Observer,
    OrderedStore,
    TaggedStore,
    create_store,
    log_state_change,
)

S = TypeVar("S", bound=NamedStore)


class StoreRegistry:
    """
    Registry for the agent's named stores.
    Stores are created once with a fixed kind and rendered in definition order.
    """

    def __init__(self, log_changes: Optional[bool] = None):
        self.stores: Dict[str, NamedStore] = {}
        self._observers: List[Observer] = []
        self._lock = threading.Lock()

        if log_changes is None:
            log_changes = state_verbose_enabled()
        if log_changes:
            self._observers.append(log_state_change)

    def define(self, name: str, kind: StoreKind) -> NamedStore:
        """
        Create the store ``name`` with the given kind.

        Defining an existing name again with the same kind returns the
        existing store.

        Raises:
            ValueError: if ``name`` already exists with a different kind.
        """
        with self._lock:
            existing = self.stores.get(name)
            if existing is not None:
                if existing.kind != kind:
                    raise ValueError(
                        f"Store '{name}' already exists as {existing.kind.name}, not {StoreKind(kind).name}"
                    )
                return existing

            store = create_store(name, kind)
            for observer in self._observers:
                store.subscribe(observer)
            self.stores[name] = store

        logger.debug(f"Store '{name}' defined as {store.kind.name}")
        return store

    def get(self, name: str) -> NamedStore:
        with self._lock:
            try:
                return self.stores[name]
            except KeyError:
                raise KeyError(f"Store '{name}' is not defined") from None

    def _typed(self, name: str, store_type: Type[S]) -> S:
        store = self.get(name)
        if not isinstance(store, store_type):
            raise StoreDisciplineViolation(
                f"Store '{name}' is {store.kind.name}, not {store_type.kind.name}"
            )
        return store

    def ordered(self, name: str) -> OrderedStore:
        return self._typed(name, OrderedStore)

    def tagged(self, name: str) -> TaggedStore:
        return self._typed(name, TaggedStore)

    def current_previous(self, name: str) -> CurrentPreviousStore:
        return self._typed(name, CurrentPreviousStore)

    def subscribe(self, observer: Observer) -> None:
        """Attach ``observer`` to every current and future store."""
        with self._lock:
            if observer in self._observers:
                return
            self._observers.append(observer)
            stores = list(self.stores.values())
        for store in stores:
            store.subscribe(observer)

    def render_all(self) -> str:
        """Every non-empty rendering, separated by blank lines."""
        with self._lock:
            stores = list(self.stores.values())
        return "\n\n".join(text for text in (store.render() for store in stores) if text)

    def clear_all(self) -> None:
        with self._lock:
            stores = list(self.stores.values())
        for store in stores:
            store.clear()

    def names(self) -> List[str]:
        with self._lock:
            return list(self.stores.keys())

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self.stores

    def __len__(self) -> int:
        with self._lock:
            return len(self.stores)
