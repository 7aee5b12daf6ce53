"""
Shared fixtures: loguru capture and fake ledger clients
"""

from unittest.mock import AsyncMock, Mock

import pytest
from loguru import logger

from blockchain.context import DeployContext
from blockchain.provider import NetworkInfo


DEPLOYER_ADDRESS = '0xABC0000000000000000000000000000000000001'
CONTRACT_ADDRESS = '0xDEF0000000000000000000000000000000000002'


def result(value):
    """Coroutine resolving to value (or raising it when it is an exception)"""
    async def _result():
        if isinstance(value, BaseException):
            raise value
        return value
    return _result()


class FakeEth:
    """Stand-in for AsyncWeb3.eth; chain_id and gas_price are awaitable properties"""

    def __init__(self, chain_id=42, gas_price=1_000_000_000):
        self._chain_id = chain_id
        self._gas_price = gas_price
        self.get_balance = AsyncMock(return_value=10**18)
        self.get_transaction_count = AsyncMock(return_value=7)
        self.send_raw_transaction = AsyncMock(return_value=b'\x12' * 32)
        self.wait_for_transaction_receipt = AsyncMock()
        self.contract = Mock()

    @property
    def chain_id(self):
        return result(self._chain_id)

    @property
    def gas_price(self):
        return result(self._gas_price)


@pytest.fixture
def log_messages():
    """Messages logged through loguru during the test"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record['message']), level='DEBUG')
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def fake_eth():
    return FakeEth()


@pytest.fixture
def w3(fake_eth):
    """Mock AsyncWeb3 instance"""
    w3 = Mock()
    w3.eth = fake_eth
    return w3


def make_context(
    network_name='kovan',
    gas_price=1_000_000_000,
    balance=1_000_000_000_000_000_000,
    contract_address=CONTRACT_ADDRESS
):
    """
    Mock DeployContext wired for a successful run

    Returns:
        (context, signer, provider, factory, deployed)
    """
    provider = Mock()
    provider.get_network = AsyncMock(return_value=NetworkInfo(name=network_name, chain_id=42))
    provider.get_gas_price = AsyncMock(return_value=gas_price)

    signer = Mock()
    signer.address = DEPLOYER_ADDRESS
    signer.provider = provider
    signer.get_balance = AsyncMock(return_value=balance)

    deployed = Mock()
    deployed.address = None

    async def confirm():
        deployed.address = contract_address
        return deployed

    deployed.deployed = AsyncMock(side_effect=confirm)

    factory = Mock()
    factory.deploy = AsyncMock(return_value=deployed)

    context = Mock(spec=DeployContext)
    context.signer = signer
    context.provider = provider
    context.get_signer.return_value = signer
    context.get_contract_factory.return_value = factory

    return context, signer, provider, factory, deployed
