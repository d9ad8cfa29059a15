# propsync/ports/storage.py
from __future__ import annotations

from typing import Protocol
from ..domain.models import SyncState


class StateStore(Protocol):
    """Port for loading and saving the persisted checkpoint + log record."""

    async def load(self) -> SyncState:
        """Return the stored state, or the genesis state if none exists yet."""

    async def save(self, state: SyncState) -> None:
        """Durably replace the stored state. Raises StoreFailure."""
