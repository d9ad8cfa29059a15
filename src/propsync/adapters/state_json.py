from __future__ import annotations
import os, json, logging
from ..domain.errors import StoreFailure
from ..domain.models import SyncState
from ..ports.storage import StateStore

log = logging.getLogger(__name__)


class JSONStateStore(StateStore):
    """
    Keeps the whole state in one pretty-printed JSON file:
    ``{"block": <int>, "logs": [{topics, data, transactionIndex, logIndex, blockNumber}, ...]}``.
    Writes go to a sibling ``.tmp`` file which is then renamed over the target,
    so a failed save never clobbers the previous state.
    """
    def __init__(self, path: str, genesis_block: int) -> None:
        self.path = path
        self.genesis_block = genesis_block

    async def load(self) -> SyncState:
        try:
            with open(self.path, "r") as f:
                raw = json.load(f)
        except FileNotFoundError:
            log.info("no state at %s, starting from block %d", self.path, self.genesis_block)
            return SyncState.genesis(self.genesis_block)
        except (OSError, ValueError) as e:
            raise StoreFailure(f"Cannot read {self.path}: {e}") from e
        try:
            return SyncState.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreFailure(f"Malformed state in {self.path}: {e!r}") from e

    async def save(self, state: SyncState) -> None:
        tmp = self.path + ".tmp"
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(tmp, "w") as f:
                json.dump(state.to_dict(), f, indent=2)
                f.write("\n"); f.flush(); os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            raise StoreFailure(f"Cannot write {self.path}: {e}") from e
        log.debug("saved block=%d logs=%d to %s", state.block, len(state.logs), self.path)
