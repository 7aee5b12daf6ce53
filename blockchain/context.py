"""
Deploy Context
Explicit signer/provider pair handed to the deployer
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from .contract_factory import ContractFactory
from .errors import ConfigurationError
from .provider import LedgerProvider
from .signer import Signer


@dataclass
class DeployContext:
    """
    Ledger client capabilities used by one deployment run

    Network and gas reads go through provider; build_context binds the
    signer to the same provider.
    """
    signer: Optional[Signer]
    provider: LedgerProvider
    artifacts_dir: Path = Path('artifacts')
    confirmation_timeout: Optional[float] = 120

    def get_signer(self) -> Signer:
        """Active signer, ConfigurationError when none is configured"""
        if self.signer is None:
            raise ConfigurationError("No deployer signer configured")
        return self.signer

    def get_contract_factory(self, contract_name: str) -> ContractFactory:
        """Factory for a compiled contract, signed by the active signer"""
        return ContractFactory.from_artifacts(
            contract_name,
            self.get_signer(),
            artifacts_dir=self.artifacts_dir,
            confirmation_timeout=self.confirmation_timeout
        )


def build_context(
    rpc_url: str,
    private_key: str,
    artifacts_dir: Path = Path('artifacts'),
    confirmation_timeout: Optional[float] = 120,
    request_timeout: float = 30
) -> DeployContext:
    """
    Create provider and signer for one network

    Args:
        rpc_url: HTTP(S) JSON-RPC URL
        private_key: Deployer private key
        artifacts_dir: Hardhat artifacts directory
        confirmation_timeout: Seconds to wait for the deployment receipt
        request_timeout: Per-request RPC timeout in seconds

    Returns:
        DeployContext
    """
    if not rpc_url:
        raise ConfigurationError("RPC URL is not set")

    provider = LedgerProvider.from_url(rpc_url, request_timeout=request_timeout)
    signer = Signer.from_key(private_key, provider)

    logger.debug(f"Deploy context ready for {signer.address}")

    return DeployContext(
        signer=signer,
        provider=provider,
        artifacts_dir=Path(artifacts_dir),
        confirmation_timeout=confirmation_timeout
    )
