"""
Contract Factory
Loads compiled Hardhat artifacts and deploys them with the deployer signer
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import Web3Exception
from loguru import logger

from .errors import ConfigurationError, NetworkError, TransactionError
from .provider import TRANSPORT_ERRORS
from .signer import Signer


def find_artifact(artifacts_dir: Path, contract_name: str) -> Path:
    """
    Locate the Hardhat artifact for a contract

    Args:
        artifacts_dir: Hardhat artifacts directory
        contract_name: Contract name (artifact file stem)

    Returns:
        Path to <contract_name>.json
    """
    artifacts_dir = Path(artifacts_dir)

    if not artifacts_dir.is_dir():
        raise ConfigurationError(
            f"Artifacts directory not found: {artifacts_dir} (run 'npx hardhat compile' first)"
        )

    # *.dbg.json files have a different stem, build-info is not per contract
    matches = sorted(
        path for path in artifacts_dir.rglob(f"{contract_name}.json")
        if 'build-info' not in path.parts
    )

    if not matches:
        raise ConfigurationError(f"Contract artifact not found: {contract_name}")

    if len(matches) > 1:
        found = ', '.join(str(path) for path in matches)
        raise ConfigurationError(
            f"Multiple artifacts named {contract_name}: {found}"
        )

    return matches[0]


class DeployedContract:
    """
    Handle for a submitted deployment
    Address is known only once the deployment transaction is mined
    """

    def __init__(
        self,
        name: str,
        abi: List[Dict],
        transaction_hash: bytes,
        signer: Signer,
        confirmation_timeout: Optional[float] = 120
    ):
        self.name = name
        self.abi = abi
        self.transaction_hash = HexBytes(transaction_hash)
        self.signer = signer
        self.confirmation_timeout = confirmation_timeout
        self.receipt = None
        self._address: Optional[str] = None

    @property
    def address(self) -> Optional[str]:
        """Contract address (None until confirmed)"""
        return self._address

    async def deployed(self) -> 'DeployedContract':
        """
        Wait for the deployment transaction to be mined

        Returns:
            self, with address set
        """
        if self._address is not None:
            return self

        logger.info(f"Waiting for {self.name} deployment to be mined...")

        receipt = await self.signer.provider.wait_for_receipt(
            self.transaction_hash,
            timeout=self.confirmation_timeout
        )

        if receipt['status'] != 1:
            raise TransactionError(
                f"{self.name} deployment reverted: {Web3.to_hex(self.transaction_hash)}"
            )

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise TransactionError(
                f"Receipt for {Web3.to_hex(self.transaction_hash)} has no contract address"
            )

        self.receipt = receipt
        self._address = contract_address

        logger.debug(f"{self.name} mined, gas used: {receipt.get('gasUsed')}")
        return self


class ContractFactory:
    """
    Deploys one compiled contract
    """

    def __init__(
        self,
        name: str,
        abi: List[Dict],
        bytecode: str,
        signer: Signer,
        confirmation_timeout: Optional[float] = 120
    ):
        """
        Initialize Contract Factory

        Args:
            name: Contract name
            abi: Contract ABI
            bytecode: Creation bytecode (hex)
            signer: Deployer signer
            confirmation_timeout: Seconds to wait for the deployment receipt
        """
        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.signer = signer
        self.confirmation_timeout = confirmation_timeout

    @classmethod
    def from_artifacts(
        cls,
        contract_name: str,
        signer: Signer,
        artifacts_dir: Path = Path('artifacts'),
        confirmation_timeout: Optional[float] = 120
    ) -> 'ContractFactory':
        """
        Create factory from a Hardhat artifact

        Args:
            contract_name: Contract to deploy
            signer: Deployer signer
            artifacts_dir: Hardhat artifacts directory
            confirmation_timeout: Seconds to wait for the deployment receipt

        Returns:
            ContractFactory
        """
        if signer is None:
            raise ConfigurationError("No signer available for deployment")

        artifact_path = find_artifact(artifacts_dir, contract_name)

        try:
            with open(artifact_path, 'r') as f:
                artifact = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Unreadable artifact {artifact_path}: {e}") from e

        abi = artifact.get('abi')
        bytecode = artifact.get('bytecode') or '0x'

        if abi is None:
            raise ConfigurationError(f"Artifact {artifact_path} has no ABI")

        if bytecode in ('0x', ''):
            raise ConfigurationError(
                f"{contract_name} is abstract or an interface, nothing to deploy"
            )

        if artifact.get('linkReferences'):
            libraries = ', '.join(
                name
                for source in artifact['linkReferences'].values()
                for name in source
            )
            raise ConfigurationError(
                f"{contract_name} needs linked libraries: {libraries}"
            )

        logger.debug(f"Loaded artifact: {artifact_path}")
        return cls(contract_name, abi, bytecode, signer, confirmation_timeout)

    async def deploy(self, *args, gas_price: int) -> DeployedContract:
        """
        Submit the deployment transaction

        Args:
            *args: Constructor arguments
            gas_price: Gas price in wei (must be an integer)

        Returns:
            DeployedContract handle (not yet confirmed)
        """
        if not isinstance(gas_price, int) or isinstance(gas_price, bool):
            raise TransactionError(f"Gas price must be a whole number of wei, got {gas_price!r}")

        provider = self.signer.provider
        sender = self.signer.address

        nonce = await provider.get_transaction_count(sender)
        chain_id = await provider.get_chain_id()

        contract = provider.w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

        # Gas limit is estimated by web3 when not provided
        try:
            transaction = await contract.constructor(*args).build_transaction({
                'from': sender,
                'nonce': nonce,
                'gasPrice': gas_price,
                'chainId': chain_id
            })
        except TRANSPORT_ERRORS as e:
            raise NetworkError(f"Failed to estimate {self.name} deployment gas: {e}") from e
        except Web3Exception as e:
            raise TransactionError(f"Failed to build {self.name} deployment: {e}") from e

        signed_tx = self.signer.sign_transaction(transaction)
        tx_hash = await provider.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"{self.name} deployment sent: {Web3.to_hex(tx_hash)}")

        return DeployedContract(
            self.name,
            self.abi,
            tx_hash,
            self.signer,
            self.confirmation_timeout
        )
