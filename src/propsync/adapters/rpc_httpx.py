from __future__ import annotations
import asyncio, logging, httpx
from typing import Any
from ..domain.errors import SourceUnavailable
from ..domain.models import LogEntry, LogFilter
from ..ports.source import LogSource

log = logging.getLogger(__name__)


class HttpxLogSource(LogSource):
    def __init__(self, rpc_url: str, timeout_s: int = 20, max_retries: int = 3,
                 transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.rpc_url = rpc_url
        self.max_retries = max_retries
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            limits=httpx.Limits(max_connections=4, max_keepalive_connections=2),
            transport=transport,
        )
        self._next_id = 0

    async def __aenter__(self) -> HttpxLogSource:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        self._next_id += 1
        payload = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        # retry on 429 with simple backoff
        for attempt in range(self.max_retries):
            try:
                r = await self.client.post(self.rpc_url, json=payload)
                if r.status_code == 429:
                    ra = r.headers.get("Retry-After")
                    delay = max(1.0, float(ra)) if ra and ra.isdigit() else (1.0 * (2**attempt))
                    log.warning("%s rate limited, retrying in %.1fs", method, delay)
                    await asyncio.sleep(delay); continue
                r.raise_for_status()
                data = r.json()
            except httpx.HTTPError as e:
                raise SourceUnavailable(f"{method} failed: {type(e).__name__}: {e}") from e
            except ValueError as e:
                raise SourceUnavailable(f"{method} returned a non-JSON body") from e
            if not isinstance(data, dict):
                raise SourceUnavailable(f"{method} returned {type(data).__name__}, expected an object")
            if "error" in data:
                err = data["error"]
                if isinstance(err, dict):
                    raise SourceUnavailable(f"{method} RPC error code={err.get('code')} message={err.get('message')}")
                raise SourceUnavailable(f"{method} RPC error: {err}")
            if "result" not in data:
                raise SourceUnavailable(f"{method} response has no result")
            return data["result"]
        raise SourceUnavailable(f"Retries exhausted for {method}")

    async def current_block_number(self) -> int:
        res = await self._call("eth_blockNumber", [])
        try:
            return int(res, 16)
        except (TypeError, ValueError) as e:
            raise SourceUnavailable(f"eth_blockNumber returned {res!r}") from e

    async def get_logs(self, flt: LogFilter) -> list[LogEntry]:
        res = await self._call("eth_getLogs", [flt.to_params()])
        if not isinstance(res, list):
            raise SourceUnavailable(f"eth_getLogs returned {type(res).__name__}, expected a list")
        try:
            typed = [LogEntry.from_rpc(rl) for rl in res]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SourceUnavailable(f"eth_getLogs returned a malformed log: {e}") from e
        log.debug("eth_getLogs from %d returned %d logs", flt.from_block, len(typed))
        return typed
