"""
Utilities Package
Gas pricing and deployment configuration
"""

from .gas_calculator import GasQuote, compute_offer_price, get_gas_quote
from .config import (
    NetworkSettings,
    DeploymentSettings,
    load_config,
    resolve_network,
    deployment_settings
)

__all__ = [
    'GasQuote',
    'compute_offer_price',
    'get_gas_quote',
    'NetworkSettings',
    'DeploymentSettings',
    'load_config',
    'resolve_network',
    'deployment_settings'
]
