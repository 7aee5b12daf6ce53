"""
AnchorFlashLiquidator Deployer - Main Entry Point
Deploys the liquidator contract once and exits 0 on success, 1 on failure
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from loguru import logger

from blockchain.context import build_context
from deployer.procedure import DeployerProcedure
from utils.config import (
    DEFAULT_CONFIG_PATH,
    deployment_settings,
    load_config,
    resolve_network
)


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: Optional[str] = None):
    """Console logging only, no log file"""
    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level or os.getenv('LOG_LEVEL', 'INFO'),
        backtrace=True,
        diagnose=False
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deploy AnchorFlashLiquidator")
    parser.add_argument("--network", help="Network profile from the config file (default: default_network)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--contract", help="Override the contract artifact to deploy")
    return parser


class DeployRunner:
    """Builds the deploy context from config and runs the procedure once"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, network: Optional[str] = None,
                 contract_name: Optional[str] = None):
        self.config_path = config_path
        self.network = network
        self.contract_name = contract_name
        self.procedure = None

    async def start(self):
        """Run the deployment; exceptions propagate to the caller"""
        config = load_config(self.config_path)
        network_settings = resolve_network(config, self.network)
        settings = deployment_settings(config)

        logger.info("=" * 70)
        logger.info(f"Deploying {self.contract_name or settings.contract_name} via '{network_settings.name}' profile")
        logger.info("=" * 70)

        context = build_context(
            network_settings.rpc_url,
            network_settings.private_key,
            artifacts_dir=settings.artifacts_dir,
            confirmation_timeout=settings.confirmation_timeout,
            request_timeout=settings.request_timeout
        )

        self.procedure = DeployerProcedure(
            context,
            contract_name=self.contract_name or settings.contract_name,
            expected_network=settings.expected_network,
            gas_price_multiplier=settings.gas_price_multiplier
        )
        await self.procedure.run()


def run(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    configure_logging()

    runner = DeployRunner(config_path=args.config, network=args.network, contract_name=args.contract)

    try:
        asyncio.run(runner.start())
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
