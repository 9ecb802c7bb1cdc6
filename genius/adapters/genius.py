"""
Genius TVL + Staking Adapter

Genius staking operates on two models:
- Direct staking with GENI
  - Basic policy (basicLockedSupply): lower APR, no early/late end penalties
  - Advanced policy (advLockedSupply): higher APR, early/late end penalties
- Debt based staking with deposited collateral
  - Collateral deposits enable GENI borrows
  - GENI is locked back in the stability pool once the debt is settled
    (totalSettledGenitos) and keeps generating yield while it waits

"Staking" and "mining" mean the same thing in Genius.

Metrics:
- TVL     = stability pool balance of every supported collateral token
            + stability pool native balance
- Staking = basicLockedSupply + advLockedSupply + totalSettledGenitos

Both are attributed to the Genius staking contract address.
"""

from typing import Dict, Iterator, Tuple, Optional
from web3 import Web3

from ..balances import fold_balances, rescale
from ..chain_api import ChainApi

# Genius staking contract
GENIUS_CONTRACT = "0x444444444444C1a66F394025Ac839A535246FCc8"
# Genius stability pool / debt contract
STABILITY_POOL = "0xDCA692d433Fe291ef72c84652Af2fe04DA4B4444"

NATIVE_DECIMALS = 18

# ERC-20 tokens approved as collateral, keyed by chain then symbol.
# Native currency is counted separately via the pool's native balance.
STABILITY_POOL_COLLATERAL_ADDRESSES = {
    "bsc": {
        "BUSD": "0xe9e7CEA3DedcA5984780Bafc599bD69ADd087D56",
    },
    "ethereum": {
        "DAI": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
    },
    "avalanche": {
        "USDC": "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E",
    },
    "polygon": {
        "DAI": "0x8f3Cf7ad23Cd3CaDbD9735AFf958023239c6A063",
    },
}

# export key -> registry key; without it avax missed "avalanche" and reported native only, skipping USDC
CHAIN_ALIASES = {
    "avax": "avalanche",
}

GENIUS_ABI = {
    "basicLockedSupply": {
        "inputs": [],
        "name": "basicLockedSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    "advLockedSupply": {
        "inputs": [],
        "name": "advLockedSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
}

STABILITY_POOL_ABI = {
    "totalSettledGenitos": {
        "inputs": [],
        "name": "totalSettledGenitos",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
}

METHODOLOGY = (
    "Staking: counts the number of GENI tokens locked in Basic and Advanced miners per chain.\n"
    "TVL: counts total number of value locked of all collateral tokens and native in the debt pool per chain.\n"
)


def get_collateral(chain: str) -> Dict[str, str]:
    """Return {symbol: token} for ``chain``; unknown chains get an empty dict."""
    return STABILITY_POOL_COLLATERAL_ADDRESSES.get(CHAIN_ALIASES.get(chain, chain), {})


def _tvl_contributions(api: ChainApi, verbose: bool = False) -> Iterator[Tuple[str, float]]:
    chain = api.chain

    # locked collateral per token
    for symbol, token in get_collateral(chain).items():
        decimals = api.erc20_decimals(token)
        balance = api.erc20_balance_of(token, STABILITY_POOL)
        amount = rescale(balance, decimals)
        if verbose:
            print(f"[{chain}]: Adding token balance for: {symbol} of: {amount:.4f}")
        yield GENIUS_CONTRACT, amount

    # locked native currency
    native = rescale(api.get_balance(STABILITY_POOL), NATIVE_DECIMALS)
    if verbose:
        print(f"[{chain}]: Adding native currency balance: {native:.4f}")
    yield GENIUS_CONTRACT, native


def _staking_contributions(api: ChainApi, verbose: bool = False) -> Iterator[Tuple[str, int]]:
    reads = [
        ("basicLockedSupply", GENIUS_CONTRACT, GENIUS_ABI["basicLockedSupply"]),
        ("advLockedSupply", GENIUS_CONTRACT, GENIUS_ABI["advLockedSupply"]),
        # settled GENI waiting for collateral return
        ("totalSettledGenitos", STABILITY_POOL, STABILITY_POOL_ABI["totalSettledGenitos"]),
    ]
    for label, target, abi in reads:
        value = api.call(target, abi)
        if verbose:
            print(f"[{api.chain}]: Adding {label}: {value}")
        yield GENIUS_CONTRACT, value


def tvl(api: ChainApi, verbose: bool = False) -> Dict[str, float]:
    """
    Collateral locked in the stability pool on ``api.chain``.

    Every amount is rescaled to display units and rounded to 4 decimals.
    Any failed read propagates.
    """
    return fold_balances(_tvl_contributions(api, verbose))


def staking(api: ChainApi, verbose: bool = False) -> Dict[str, int]:
    """Raw GENI locked in both mining policies plus settled GENI in the pool."""
    return fold_balances(_staking_contributions(api, verbose))


EXPORTS = {
    "ethereum": {"staking": staking, "tvl": tvl},
    "bsc": {"staking": staking, "tvl": tvl},
    "polygon": {"staking": staking, "tvl": tvl},
    "avax": {"staking": staking, "tvl": tvl},
}


# Convenience wrappers taking a Web3 instance directly
def get_genius_tvl(web3: Web3, chain: str, block: Optional[int] = None) -> Dict[str, float]:
    return tvl(ChainApi(web3, chain, block))


def get_genius_staking(web3: Web3, chain: str, block: Optional[int] = None) -> Dict[str, int]:
    return staking(ChainApi(web3, chain, block))
