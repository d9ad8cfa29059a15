from __future__ import annotations
from typing import NewType

Address = NewType("Address", str)   # 0x-prefixed, checksummed
Topic   = NewType("Topic", str)     # 66-char 0x-hash, lowercase

GENESIS_BLOCK = 10609767
GOVERNANCE_ADDRESS = Address("0xA5Eb84773633f33d442ECDaC48212B0dEBf3C84A")
PROPOSAL_CREATED_TOPIC = Topic("0x7d84a6263ae0d98d3329bd7b46bb4e8d6f98cd35a7adb45c274c8b7fd5ebd5e0")
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
