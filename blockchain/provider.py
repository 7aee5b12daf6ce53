"""
Ledger Provider
Read-only queries and raw transaction submission over AsyncWeb3
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional

import aiohttp
from web3 import AsyncWeb3, AsyncHTTPProvider, Web3
from web3.exceptions import TimeExhausted, Web3Exception
from loguru import logger

from .errors import NetworkError, TransactionError


# Well-known chain ids -> network names
NETWORK_NAMES: Dict[int, str] = {
    1: 'mainnet',
    3: 'ropsten',
    4: 'rinkeby',
    5: 'goerli',
    10: 'optimism',
    42: 'kovan',
    56: 'bnb',
    100: 'xdai',
    137: 'matic',
    42161: 'arbitrum',
    43114: 'avalanche',
    80001: 'maticmum',
    11155111: 'sepolia',
}

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


@dataclass(frozen=True)
class NetworkInfo:
    """Snapshot of the connected network"""
    name: str
    chain_id: int


def network_name(chain_id: int) -> str:
    """Map a chain id to its well-known name ('unknown' otherwise)"""
    return NETWORK_NAMES.get(chain_id, 'unknown')


class LedgerProvider:
    """
    Thin async wrapper around an AsyncWeb3 instance
    Translates client failures into NetworkError / TransactionError
    """

    def __init__(self, w3: AsyncWeb3):
        """
        Initialize Ledger Provider

        Args:
            w3: AsyncWeb3 instance
        """
        self.w3 = w3

    @classmethod
    def from_url(cls, rpc_url: str, request_timeout: float = 30) -> 'LedgerProvider':
        """
        Create provider for an HTTP RPC endpoint

        Args:
            rpc_url: HTTP(S) JSON-RPC URL
            request_timeout: Per-request timeout in seconds

        Returns:
            LedgerProvider
        """
        w3 = AsyncWeb3(AsyncHTTPProvider(
            rpc_url,
            request_kwargs={'timeout': aiohttp.ClientTimeout(total=request_timeout)}
        ))
        return cls(w3)

    async def _query(self, description: str, awaitable):
        """Await a read query, translating failures into NetworkError"""
        try:
            return await awaitable
        except (Web3Exception,) + TRANSPORT_ERRORS as e:
            raise NetworkError(f"Failed to {description}: {e}") from e

    async def get_chain_id(self) -> int:
        """Get chain id of the connected network"""
        return await self._query("query chain id", self.w3.eth.chain_id)

    async def get_network(self) -> NetworkInfo:
        """
        Get network identity

        Returns:
            NetworkInfo with name derived from chain id
        """
        chain_id = await self.get_chain_id()
        network = NetworkInfo(name=network_name(chain_id), chain_id=chain_id)
        logger.debug(f"Connected to chain {chain_id} ({network.name})")
        return network

    async def get_gas_price(self) -> int:
        """Get current network gas price in wei"""
        return await self._query("query gas price", self.w3.eth.gas_price)

    async def get_balance(self, address: str) -> int:
        """Get native balance of an address in wei"""
        return await self._query(
            f"query balance of {address}",
            self.w3.eth.get_balance(address)
        )

    async def get_transaction_count(self, address: str) -> int:
        """Get next nonce for an address (pending transactions included)"""
        return await self._query(
            f"query nonce of {address}",
            self.w3.eth.get_transaction_count(address, 'pending')
        )

    async def send_raw_transaction(self, raw_transaction: bytes) -> bytes:
        """
        Submit a signed transaction

        Args:
            raw_transaction: Signed transaction bytes

        Returns:
            Transaction hash
        """
        try:
            return await self.w3.eth.send_raw_transaction(raw_transaction)
        except TRANSPORT_ERRORS as e:
            raise NetworkError(f"Failed to submit transaction: {e}") from e
        except Web3Exception as e:
            raise TransactionError(f"Transaction rejected: {e}") from e

    async def wait_for_receipt(self, tx_hash: bytes, timeout: Optional[float] = 120):
        """
        Wait until a transaction is mined

        Args:
            tx_hash: Transaction hash
            timeout: Seconds to wait before giving up

        Returns:
            Transaction receipt
        """
        try:
            return await self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except TimeExhausted as e:
            raise TransactionError(
                f"Transaction {Web3.to_hex(tx_hash)} not mined within {timeout} seconds"
            ) from e
        except (Web3Exception,) + TRANSPORT_ERRORS as e:
            raise NetworkError(f"Failed to fetch receipt for {Web3.to_hex(tx_hash)}: {e}") from e
