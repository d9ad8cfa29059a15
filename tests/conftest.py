from __future__ import annotations
from typing import List
import pytest

from propsync.application.config import SyncConfig
from propsync.application.sync import SyncEngine
from propsync.domain.errors import SourceUnavailable, StoreFailure
from propsync.domain.models import LogEntry, LogFilter, SyncState
from propsync.domain.value_types import GENESIS_BLOCK, PROPOSAL_CREATED_TOPIC


def entry(block: int, tx: int = 0, idx: int = 0, data: str = "0x") -> LogEntry:
    return LogEntry(
        topics=(PROPOSAL_CREATED_TOPIC,),
        data=data,
        transaction_index=tx,
        log_index=idx,
        block_number=block,
    )


class ChainMock:
    """
    In-memory log source. ``logs`` is the chain's full set of matching entries;
    only those at or below ``head`` are visible.
    """
    logs: List[LogEntry]
    head: int
    filters: List[LogFilter]
    fail: bool

    def __init__(self, logs: List[LogEntry] | None = None, head: int = GENESIS_BLOCK):
        self.logs = list(logs or [])
        self.head = head
        self.filters = []
        self.fail = False

    async def current_block_number(self) -> int:
        if self.fail:
            raise SourceUnavailable("node down")
        return self.head

    async def get_logs(self, flt: LogFilter) -> List[LogEntry]:
        self.filters.append(flt)
        if self.fail:
            raise SourceUnavailable("node down")
        upper = self.head if flt.to_block is None else min(flt.to_block, self.head)
        visible = [e for e in self.logs if flt.from_block <= e.block_number <= upper]
        # fresh instances, as a real decoder would produce
        return [LogEntry.from_dict(e.to_dict()) for e in sorted(visible, key=lambda e: e.position)]


class MemoryStore:
    state: SyncState | None
    saves: List[SyncState]
    fail_save: bool

    def __init__(self, state: SyncState | None = None, genesis_block: int = GENESIS_BLOCK):
        self.state = state
        self.genesis_block = genesis_block
        self.saves = []
        self.fail_save = False

    async def load(self) -> SyncState:
        if self.state is None:
            return SyncState.genesis(self.genesis_block)
        return self.state

    async def save(self, state: SyncState) -> None:
        if self.fail_save:
            raise StoreFailure("disk full")
        self.saves.append(state)
        self.state = state


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig()


@pytest.fixture
def engine(config: SyncConfig) -> SyncEngine:
    return SyncEngine(config)


@pytest.fixture
def chain() -> ChainMock:
    return ChainMock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()
