from __future__ import annotations


class PropsyncError(Exception):
    """Base class for every failure a sync pass can surface."""


class InvalidContractAddress(PropsyncError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid contract address {address!r}")
        self.address = address


class SourceUnavailable(PropsyncError):
    """The log source could not answer (network, RPC error, malformed response)."""


class StoreFailure(PropsyncError):
    """Persisted state could not be read or written."""
