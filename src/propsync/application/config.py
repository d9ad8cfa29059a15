from __future__ import annotations
from dataclasses import dataclass

from ..domain.value_types import GENESIS_BLOCK, GOVERNANCE_ADDRESS, PROPOSAL_CREATED_TOPIC

DEFAULT_RPC_URL = "https://forno.celo.org"
DEFAULT_STATE_PATH = "data/proposals.json"


@dataclass(slots=True, frozen=True)
class SyncConfig:
    rpc_url: str = DEFAULT_RPC_URL
    contract_address: str = GOVERNANCE_ADDRESS
    event_topic: str = PROPOSAL_CREATED_TOPIC
    genesis_block: int = GENESIS_BLOCK
    state_path: str = DEFAULT_STATE_PATH
