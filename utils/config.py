"""
Deployment Configuration
Loads config/deploy_config.json and resolves network profiles from .env
"""

import os
import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Optional

from loguru import logger
from dotenv import load_dotenv

from blockchain.errors import ConfigurationError

load_dotenv()


DEFAULT_CONFIG_PATH = "config/deploy_config.json"

DEFAULT_DEPLOYMENT = {
    'contract_name': 'AnchorFlashLiquidator',
    'expected_network': 'kovan',
    'gas_price_multiplier': '1.05',
    'artifacts_dir': 'artifacts',
    'confirmation_timeout_seconds': 120,
    'request_timeout_seconds': 30
}


@dataclass(frozen=True)
class NetworkSettings:
    """Connection settings for one network profile"""
    name: str
    rpc_url: str
    private_key: str


@dataclass(frozen=True)
class DeploymentSettings:
    """What to deploy and how to price it"""
    contract_name: str
    expected_network: str
    gas_price_multiplier: Decimal
    artifacts_dir: Path
    confirmation_timeout: float
    request_timeout: float


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """
    Load deployment configuration file

    Args:
        config_path: Path to JSON config

    Returns:
        Config dict
    """
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

    logger.debug(f"Loaded config: {config_path}")
    return config


def resolve_network(config: Dict, network: Optional[str] = None) -> NetworkSettings:
    """
    Resolve RPC URL and deployer key for a network profile

    Args:
        config: Deployment config
        network: Profile name (None = default_network)

    Returns:
        NetworkSettings
    """
    name = network or config.get('default_network')
    if not name:
        raise ConfigurationError("No network selected and no default_network configured")

    profiles = config.get('networks', {})
    if name not in profiles:
        available = ', '.join(sorted(profiles)) or 'none'
        raise ConfigurationError(f"Unknown network '{name}' (available: {available})")

    profile = profiles[name]

    rpc_url = profile.get('rpc_url')
    if not rpc_url:
        rpc_url = _require_env(profile.get('rpc_url_env'), f"RPC URL for {name}")

    private_key = _require_env(profile.get('private_key_env'), f"private key for {name}")

    return NetworkSettings(name=name, rpc_url=rpc_url, private_key=private_key)


def deployment_settings(config: Dict) -> DeploymentSettings:
    """
    Deployment section with defaults applied

    Args:
        config: Deployment config

    Returns:
        DeploymentSettings
    """
    section = dict(DEFAULT_DEPLOYMENT)
    section.update(config.get('deployment', {}))

    try:
        multiplier = Decimal(str(section['gas_price_multiplier']))
    except InvalidOperation as e:
        raise ConfigurationError(
            f"Invalid gas_price_multiplier: {section['gas_price_multiplier']!r}"
        ) from e

    if not multiplier.is_finite() or multiplier < 1:
        raise ConfigurationError(f"gas_price_multiplier must be >= 1, got {multiplier}")

    return DeploymentSettings(
        contract_name=section['contract_name'],
        expected_network=section['expected_network'],
        gas_price_multiplier=multiplier,
        artifacts_dir=Path(section['artifacts_dir']),
        confirmation_timeout=_seconds(section, 'confirmation_timeout_seconds'),
        request_timeout=_seconds(section, 'request_timeout_seconds')
    )


def _seconds(section: Dict, key: str) -> float:
    """Positive number of seconds from the deployment section"""
    try:
        value = float(section[key])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {key}: {section[key]!r}") from e

    if not value > 0 or value == float('inf'):
        raise ConfigurationError(f"{key} must be a positive number of seconds, got {section[key]!r}")

    return value


def _require_env(var_name: Optional[str], description: str) -> str:
    """Read a required environment variable"""
    if not var_name:
        raise ConfigurationError(f"No environment variable configured for {description}")

    value = os.getenv(var_name)
    if not value:
        raise ConfigurationError(f"{var_name} must be set in .env ({description})")

    return value
