import pytest


class StubChainApi:
    """In-memory stand-in for ChainApi; records every read."""

    def __init__(self, chain, decimals=None, token_balances=None, native_balance=0, calls=None, block=None):
        self.chain = chain
        self.block = block
        self.decimals = decimals or {}
        self.token_balances = token_balances or {}
        self.native_balance = native_balance
        self.calls = calls or {}
        self.reads = []

    def call(self, target, abi, params=()):
        self.reads.append(("call", target, abi["name"]))
        value = self.calls[abi["name"]]
        if isinstance(value, Exception):
            raise value
        return value

    def erc20_decimals(self, token):
        self.reads.append(("decimals", token))
        return self.decimals[token]

    def erc20_balance_of(self, token, owner):
        self.reads.append(("balanceOf", token, owner))
        value = self.token_balances[token]
        if isinstance(value, Exception):
            raise value
        return value

    def get_balance(self, target):
        self.reads.append(("getBalance", target))
        if isinstance(self.native_balance, Exception):
            raise self.native_balance
        return self.native_balance


@pytest.fixture()
def stub_api_factory():
    return StubChainApi


@pytest.fixture()
def staking_calls():
    return {
        "basicLockedSupply": 100,
        "advLockedSupply": 50,
        "totalSettledGenitos": 25,
    }
