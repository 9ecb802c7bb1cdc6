"""
Chain-access handle handed to the metric functions.

Wraps a Web3 instance together with the chain identifier and an optional
pinned block, so every read of one snapshot hits the same block.
"""

from typing import Any, Dict, Optional, Sequence
from web3 import Web3

# Minimal ERC20 ABI
ERC20_ABI = [
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]


class ChainApi:
    """Read-only contract access for a single chain."""

    def __init__(self, web3: Web3, chain: str, block: Optional[int] = None):
        self.web3 = web3
        self.chain = chain
        self.block = block

    @property
    def call_kwargs(self) -> Dict[str, Any]:
        return {'block_identifier': self.block} if self.block is not None else {}

    def call(self, target: str, abi: Dict[str, Any], params: Sequence[Any] = ()):
        """Call the view method described by the single ABI fragment ``abi`` on ``target``."""
        target = Web3.to_checksum_address(target)
        contract = self.web3.eth.contract(address=target, abi=[abi])
        fn = getattr(contract.functions, abi["name"])
        return fn(*params).call(**self.call_kwargs)

    def erc20_decimals(self, token: str) -> int:
        return self.call(token, ERC20_ABI[0])

    def erc20_balance_of(self, token: str, owner: str) -> int:
        return self.call(token, ERC20_ABI[1], [Web3.to_checksum_address(owner)])

    def get_balance(self, target: str) -> int:
        """Native-currency balance in wei."""
        return self.web3.eth.get_balance(Web3.to_checksum_address(target), **self.call_kwargs)

    def __repr__(self):
        return f"ChainApi(chain={self.chain!r}, block={self.block!r})"
