"""
Deployment Errors
Failure taxonomy shared by the ledger client wrappers and the deployer
"""


class DeploymentError(Exception):
    """Base class for every failure that aborts a deployment run"""


class NetworkError(DeploymentError):
    """Node unreachable, transport timeout or RPC failure during a query"""


class TransactionError(DeploymentError):
    """Deployment transaction rejected, reverted or never confirmed"""


class ConfigurationError(DeploymentError):
    """Missing signer, key, RPC endpoint, network profile or contract artifact"""
