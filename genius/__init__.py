"""Genius protocol reporting: per-chain TVL and staking balances read from on-chain state."""
__all__ = [
    "adapters",
    "balances",
    "chain_api",
    "collector",
    "config",
]
