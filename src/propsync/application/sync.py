from __future__ import annotations
import logging
from typing import Iterable, Sequence
from eth_utils import is_address, to_checksum_address

from ..domain.errors import InvalidContractAddress
from ..domain.models import LogEntry, LogFilter, SyncResult, SyncState
from ..domain.value_types import Address, Topic, ZERO_ADDRESS
from ..ports.source import LogSource
from ..ports.storage import StateStore
from .config import SyncConfig

log = logging.getLogger(__name__)


def validate_address(address: str) -> Address:
    """Return the checksummed form of ``address``; reject malformed and zero addresses."""
    if not isinstance(address, str) or not is_address(address):
        raise InvalidContractAddress(address)
    checksummed = to_checksum_address(address)
    if checksummed == ZERO_ADDRESS:
        raise InvalidContractAddress(address)
    return Address(checksummed)


def dedupe(existing: Iterable[LogEntry], candidates: Sequence[LogEntry]) -> list[LogEntry]:
    """Candidates not structurally present in ``existing``, in candidate order."""
    seen = set(existing)
    out: list[LogEntry] = []
    for c in candidates:
        if c in seen:
            continue
        seen.add(c)
        out.append(c)
    return out


class SyncEngine:
    """
    One incremental pass over the proposal-created logs of the governance contract.

    The query starts at ``prior.block`` rather than ``prior.block + 1``: the
    boundary block is asked for again because the node may not have reported
    all of its logs last time. Entries already stored come back from that
    overlap and are dropped by structural comparison.
    """
    def __init__(self, config: SyncConfig) -> None:
        self.config = config
        self.address = validate_address(config.contract_address)
        self.topic = Topic(config.event_topic.lower())

    def build_filter(self, prior: SyncState, head: int | None = None) -> LogFilter:
        return LogFilter(topics=(self.topic,), address=self.address, from_block=prior.block, to_block=head)

    async def sync(self, prior: SyncState, source: LogSource) -> SyncResult:
        # logs never reach past the head recorded as the checkpoint
        head = await source.current_block_number()
        flt = self.build_filter(prior, head)
        log.debug("querying logs in blocks %d..%d", flt.from_block, head)
        candidates = await source.get_logs(flt)

        fresh = dedupe(prior.logs, candidates)
        state = SyncState(block=head, logs=prior.logs + tuple(fresh))
        log.info("head=%d candidates=%d new=%d", head, len(candidates), len(fresh))
        return SyncResult(state=state, new_count=len(fresh))


async def run_sync(engine: SyncEngine, source: LogSource, store: StateStore) -> SyncResult:
    """Load, sync, save. Nothing is saved unless the sync itself succeeded."""
    prior = await store.load()
    log.info("resuming from block %d with %d stored logs", prior.block, len(prior.logs))
    result = await engine.sync(prior, source)
    await store.save(result.state)
    return result
