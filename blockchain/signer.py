"""
Signer
Local deployer account bound to a ledger provider
"""

from typing import Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from .errors import ConfigurationError
from .provider import LedgerProvider


class Signer:
    """
    Deployer identity: signs transactions locally, queries through the provider
    """

    def __init__(self, account: LocalAccount, provider: LedgerProvider):
        """
        Initialize Signer

        Args:
            account: eth_account local account
            provider: Provider used for balance queries and submission
        """
        self.account = account
        self.provider = provider

    @classmethod
    def from_key(cls, private_key: str, provider: LedgerProvider) -> 'Signer':
        """
        Create signer from a hex private key

        Args:
            private_key: Hex encoded private key
            provider: Ledger provider

        Returns:
            Signer
        """
        if not private_key:
            raise ConfigurationError("Deployer private key is not set")

        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid deployer private key: {e}") from e

        logger.debug(f"Signer loaded: {account.address}")
        return cls(account, provider)

    @property
    def address(self) -> str:
        """Checksummed account address"""
        return self.account.address

    async def get_balance(self) -> int:
        """Get native balance in wei"""
        return await self.provider.get_balance(self.address)

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        return self.account.sign_transaction(transaction)
