"""
Named state stores - concurrency-safe containers rendered into the agent's context.
"""

from .schema import StoreKind, StateChange
from .storage import (
    NamedStore,
    OrderedStore,
    TaggedStore,
    CurrentPreviousStore,
    create_store,
    log_state_change,
)
from .registry import StoreRegistry

__all__ = [
    'StoreKind',
    'StateChange',
    'NamedStore',
    'OrderedStore',
    'TaggedStore',
    'CurrentPreviousStore',
    'create_store',
    'log_state_change',
    'StoreRegistry',
]
