"""
Contract Deployer
Builds, submits and confirms contract creation transactions
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Dict, Optional, Union

from eth_utils import to_checksum_address
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import TimeExhausted

from insurance_deploy.artifacts import ContractArtifact, load_artifact
from insurance_deploy.exceptions import DeploymentError
from insurance_deploy.signers import Signer

logger = logging.getLogger(__name__)


class DeployedContract:
    """A submitted deployment; usable once deployed() has returned"""

    def __init__(self, web3: Web3, artifact: ContractArtifact, tx_hash, deployer: str):
        self.web3 = web3
        self.artifact = artifact
        self.tx_hash = tx_hash
        self.deployer = deployer
        self.address: Optional[str] = None
        self.receipt: Optional[Dict] = None

    @property
    def name(self) -> str:
        return self.artifact.name

    @property
    def tx_hash_hex(self) -> str:
        return Web3.to_hex(self.tx_hash)

    @property
    def contract(self) -> Contract:
        if self.address is None:
            raise DeploymentError(f"{self.name} is not deployed yet, await deployed() first")
        return self.web3.eth.contract(address=self.address, abi=self.artifact.abi)

    async def deployed(self, timeout: int = 120, confirmations: int = 1,
                       poll_interval: float = 1.0) -> Dict:
        """Wait for the deployment to be mined, succeed and reach ``confirmations`` blocks"""
        deadline = time.monotonic() + timeout

        try:
            receipt = self.web3.eth.wait_for_transaction_receipt(
                self.tx_hash, timeout=timeout, poll_latency=poll_interval
            )
        except TimeExhausted as e:
            raise DeploymentError(
                f"Deployment transaction {self.tx_hash_hex} not mined within {timeout}s"
            ) from e

        if receipt["status"] != 1:
            raise DeploymentError(f"Deployment transaction {self.tx_hash_hex} reverted")

        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentError(
                f"Transaction {self.tx_hash_hex} did not create a contract"
            )

        if len(self.web3.eth.get_code(address)) == 0:
            raise DeploymentError(f"No code at {address} after deploying {self.name}")

        await self._wait_for_confirmations(receipt["blockNumber"], confirmations,
                                           deadline, poll_interval)

        self.receipt = receipt
        self.address = to_checksum_address(address)
        logger.info(
            f"{self.name} mined in block {receipt['blockNumber']}, "
            f"gas used {receipt.get('gasUsed')}"
        )
        return receipt

    async def _wait_for_confirmations(self, block_number: int, confirmations: int,
                                      deadline: float, poll_interval: float):
        # the receipt's own block counts as the first confirmation
        while self.web3.eth.block_number - block_number + 1 < confirmations:
            if time.monotonic() >= deadline:
                raise DeploymentError(
                    f"Deployment transaction {self.tx_hash_hex} did not reach "
                    f"{confirmations} confirmations in time"
                )
            await asyncio.sleep(poll_interval)


class ContractFactory:
    """Binds a compiled artifact to a signer for deployment"""

    def __init__(self, web3: Web3, artifact: ContractArtifact, signer: Signer):
        self.web3 = web3
        self.artifact = artifact
        self.signer = signer
        self.contract = web3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    async def deploy(self, *args, gas_limit: Optional[int] = None,
                     gas_price: Optional[int] = None) -> DeployedContract:
        """Submit one contract creation transaction"""
        params = {"from": self.signer.address}
        if gas_limit is not None:
            params["gas"] = gas_limit
        if gas_price is not None:
            params["gasPrice"] = gas_price

        try:
            tx = self.contract.constructor(*args).build_transaction(params)
            tx_hash = self.signer.send_transaction(self.web3, tx)
        except Exception as e:
            logger.error(f"Failed to deploy {self.artifact.name}: {e}")
            raise DeploymentError(f"Failed to deploy {self.artifact.name}: {e}") from e

        deployment = DeployedContract(self.web3, self.artifact, tx_hash, self.signer.address)
        logger.info(f"{self.artifact.name} deployment submitted: {deployment.tx_hash_hex}")
        return deployment


async def get_contract_factory(web3: Web3, name: str, signer: Signer,
                               artifacts_dir: Union[str, Path] = "artifacts") -> ContractFactory:
    """Resolve a compiled contract by name into a factory bound to ``signer``"""
    artifact = load_artifact(name, artifacts_dir)
    return ContractFactory(web3, artifact, signer)
