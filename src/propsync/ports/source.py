# propsync/ports/source.py
from __future__ import annotations

from typing import Protocol
from ..domain.models import LogEntry, LogFilter


class LogSource(Protocol):
    """Port for a node that answers head-block and log-filter queries."""

    async def current_block_number(self) -> int:
        """Return the chain head as seen by the node. Raises SourceUnavailable."""

    async def get_logs(self, flt: LogFilter) -> list[LogEntry]:
        """Return every matching log with block_number >= flt.from_block, in
        ascending (block, tx index, log index) order. Raises SourceUnavailable."""
