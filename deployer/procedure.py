"""
Deployer Procedure
Signs in, reads network and gas state, deploys AnchorFlashLiquidator once
"""

from decimal import Decimal
from enum import Enum

from loguru import logger

from blockchain.context import DeployContext
from utils.gas_calculator import DEFAULT_GAS_PRICE_MULTIPLIER, get_gas_quote


class DeployState(str, Enum):
    """Progress of one deployment run"""
    START = 'start'
    SIGNER_RESOLVED = 'signer_resolved'
    NETWORK_RESOLVED = 'network_resolved'
    GAS_PRICED = 'gas_priced'
    DEPLOYING = 'deploying'
    DEPLOYED = 'deployed'
    FAILED = 'failed'


class DeployerProcedure:
    """
    Linear deploy-once flow

    Every step awaits the previous one; the first failure moves the run to
    FAILED and propagates unchanged. Nothing is retried.
    """

    def __init__(
        self,
        context: DeployContext,
        contract_name: str = 'AnchorFlashLiquidator',
        expected_network: str = 'kovan',
        gas_price_multiplier: Decimal = DEFAULT_GAS_PRICE_MULTIPLIER
    ):
        """
        Initialize Deployer Procedure

        Args:
            context: Signer/provider pair to deploy with
            contract_name: Artifact name to deploy
            expected_network: Network name reported in the diagnostic line
            gas_price_multiplier: Buffer applied to the network gas price
        """
        self.context = context
        self.contract_name = contract_name
        self.expected_network = expected_network
        self.gas_price_multiplier = gas_price_multiplier

        self.state = DeployState.START
        self.network = None
        self.gas_quote = None
        self.contract = None

    async def run(self):
        """Execute all steps; raises on the first failure"""
        try:
            await self._run()
        except Exception:
            self.state = DeployState.FAILED
            raise

    async def _run(self):
        # Signer
        signer = self.context.get_signer()
        logger.info(f"Deployer address: {signer.address}")
        self.state = DeployState.SIGNER_RESOLVED

        balance = await signer.get_balance()
        logger.info(f"Deployer balance: {balance}")

        # Network (diagnostic only)
        self.network = await self.context.provider.get_network()
        is_expected = self.network.name == self.expected_network
        logger.info(f"Network: {self.network.name} is {str(is_expected).lower()}")
        self.state = DeployState.NETWORK_RESOLVED

        # Gas
        self.gas_quote = await get_gas_quote(self.context.provider, self.gas_price_multiplier)
        gas_price = self.gas_quote.offer_price
        logger.info(f"Gas Price balance: {gas_price}")
        self.state = DeployState.GAS_PRICED

        # Deploy
        factory = self.context.get_contract_factory(self.contract_name)
        self.state = DeployState.DEPLOYING
        contract = await factory.deploy(gas_price=gas_price)
        await contract.deployed()

        self.contract = contract
        self.state = DeployState.DEPLOYED
        logger.success(f"{self.contract_name} address: {contract.address}")
