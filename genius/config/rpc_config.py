"""
RPC URL resolution and Web3 setup.

Resolution order for a chain:
1. RPC_URL_<CHAIN> env var (e.g. RPC_URL_BSC)
2. Alchemy URL built from api_key / ALCHEMY_API_KEY
3. First public RPC listed in chains.yaml
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

ALCHEMY_URL = 'https://{network}.g.alchemy.com/v2/{key}'


def _load_chain_cfg():
    path = Path(__file__).resolve().parent / "chains.yaml"
    with path.open("r") as f:
        return yaml.safe_load(f)


CHAIN_CFG = _load_chain_cfg()
CHAINS: Dict[str, Dict[str, Any]] = CHAIN_CFG.get("chains", {})
REQUEST_TIMEOUT = CHAIN_CFG.get("request_timeout", 30)


def get_chain_config(chain: str) -> Dict[str, Any]:
    chain = chain.lower()
    if chain not in CHAINS:
        raise ValueError(f"Unknown chain: {chain}")
    return CHAINS[chain]


def get_rpc_url(chain: str, api_key: Optional[str] = None) -> str:
    """
    Get RPC URL for a chain.

    Args:
        chain: Chain name (e.g., 'ethereum', 'bsc')
        api_key: Alchemy API key (uses ALCHEMY_API_KEY env var if not provided)

    Returns:
        Complete RPC URL
    """
    chain = chain.lower()
    cfg = get_chain_config(chain)

    override = os.getenv(f"RPC_URL_{chain.upper()}")
    if override:
        return override

    key = api_key or os.getenv('ALCHEMY_API_KEY')
    if key and cfg.get("alchemy"):
        return ALCHEMY_URL.format(network=cfg["alchemy"], key=key)

    public = cfg.get("public_rpcs") or []
    if public:
        return public[0]

    raise ValueError(
        f"No RPC available for {chain}. "
        f"Set ALCHEMY_API_KEY or RPC_URL_{chain.upper()}."
    )


def setup_web3(chain: str, rpc_url: Optional[str] = None) -> Web3:
    """Create Web3 instance for a chain, with POA middleware where the chain needs it."""
    cfg = get_chain_config(chain)
    rpc_url = rpc_url or get_rpc_url(chain)
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': REQUEST_TIMEOUT}))

    if cfg.get("poa"):
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    return w3
