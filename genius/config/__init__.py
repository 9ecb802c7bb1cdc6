from .rpc_config import CHAINS, get_chain_config, get_rpc_url, setup_web3

__all__ = ["CHAINS", "get_chain_config", "get_rpc_url", "setup_web3"]
