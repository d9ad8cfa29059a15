from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from .value_types import Address, Topic


def _quantity(v: Any) -> int:
    # RPC nodes send hex quantities, persisted state holds plain ints
    if isinstance(v, str):
        return int(v, 16) if v.startswith("0x") else int(v)
    return int(v)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """One event log. Equality and hashing are over all fields."""
    topics: tuple[str, ...]
    data: str
    transaction_index: int
    log_index: int
    block_number: int

    @property
    def position(self) -> tuple[int, int, int]:
        return (self.block_number, self.transaction_index, self.log_index)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> LogEntry:
        return cls(
            topics=tuple(str(t).lower() for t in d["topics"]),
            data=str(d["data"]).lower(),
            transaction_index=int(d["transactionIndex"]),
            log_index=int(d["logIndex"]),
            block_number=int(d["blockNumber"]),
        )

    @classmethod
    def from_rpc(cls, rl: Mapping[str, Any]) -> LogEntry:
        return cls(
            topics=tuple(str(t).lower() for t in rl.get("topics", [])),
            data=str(rl.get("data") or "0x").lower(),
            transaction_index=_quantity(rl["transactionIndex"]),
            log_index=_quantity(rl["logIndex"]),
            block_number=_quantity(rl["blockNumber"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "topics": list(self.topics),
            "data": self.data,
            "transactionIndex": self.transaction_index,
            "logIndex": self.log_index,
            "blockNumber": self.block_number,
        }


@dataclass(slots=True, frozen=True)
class SyncState:
    block: int
    logs: tuple[LogEntry, ...] = ()

    @classmethod
    def genesis(cls, block: int) -> SyncState:
        return cls(block=block, logs=())

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> SyncState:
        return cls(
            block=int(d["block"]),
            logs=tuple(LogEntry.from_dict(x) for x in d["logs"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"block": self.block, "logs": [e.to_dict() for e in self.logs]}


@dataclass(slots=True, frozen=True)
class LogFilter:
    topics: tuple[Topic, ...]
    address: Address
    from_block: int
    to_block: int | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "address": str(self.address),
            "fromBlock": hex(self.from_block),
            "topics": [str(t) for t in self.topics],
        }
        if self.to_block is not None:
            params["toBlock"] = hex(self.to_block)
        return params


@dataclass(slots=True, frozen=True)
class SyncResult:
    state: SyncState
    new_count: int

    def __iter__(self) -> Iterator[Any]:
        yield self.state
        yield self.new_count
