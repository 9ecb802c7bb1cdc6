"""Protocol adapters: each exposes per-chain metric functions over a ChainApi."""
from .genius import EXPORTS, METHODOLOGY, staking, tvl

__all__ = ["EXPORTS", "METHODOLOGY", "staking", "tvl"]
