"""
Blockchain Interaction Package
Ledger provider, deployer signer, contract factory and error taxonomy
"""

from .errors import DeploymentError, NetworkError, TransactionError, ConfigurationError
from .provider import LedgerProvider, NetworkInfo
from .signer import Signer
from .contract_factory import ContractFactory, DeployedContract
from .context import DeployContext, build_context

__all__ = [
    'DeploymentError',
    'NetworkError',
    'TransactionError',
    'ConfigurationError',
    'LedgerProvider',
    'NetworkInfo',
    'Signer',
    'ContractFactory',
    'DeployedContract',
    'DeployContext',
    'build_context'
]
