"""
Store kinds and state change events.
Events are emitted by named stores and consumed by external observers.
"""

from datetime import datetime
from enum import IntEnum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreKind(IntEnum):
    """Fixed behaviour of a named store; codes match the historical storage types."""

    CURRENT_PREVIOUS = 0  # a single state with an optional previous state
    ORDERED = 1           # a list indexed by element position
    TAGGED = 2            # a key=value store


class StateChange(BaseModel):
    """One effective mutation of a named store."""

    model_config = ConfigDict(frozen=True)

    store_name: str
    kind: StoreKind
    action: Literal["add", "remove", "set", "clear"]
    key: Optional[str] = None
    previous: Optional[str] = None
    new: Optional[str] = None
    verbose: bool = True
    timestamp: datetime = Field(default_factory=datetime.now)
