"""
InsuranceClaim Deployment
Deploys the InsuranceClaim contract with the first available signer
"""

import asyncio
import logging
import sys
from typing import Optional

from web3 import Web3

from insurance_deploy.config import DeployConfig, configure_logging
from insurance_deploy.deployer import DeployedContract, get_contract_factory
from insurance_deploy.networks import connect, explorer_url, get_network
from insurance_deploy.signers import get_signers

logger = logging.getLogger(__name__)

CONTRACT_NAME = "InsuranceClaim"


async def main(config: Optional[DeployConfig] = None) -> DeployedContract:
    """Deploy InsuranceClaim and wait for it to be confirmed"""
    if config is None:
        config = DeployConfig.from_env()

    network = get_network(config.network, config.rpc_overrides or None)
    web3 = connect(network, config.timeout)

    signers = await get_signers(web3, config.private_keys)
    deployer = signers[0]
    print("Deploying contracts with the account:", deployer.address)

    gas_price = None
    if config.gas_price_gwei is not None:
        gas_price = Web3.to_wei(config.gas_price_gwei, "gwei")

    factory = await get_contract_factory(web3, CONTRACT_NAME, deployer, config.artifacts_dir)
    insurance = await factory.deploy(gas_limit=config.gas_limit, gas_price=gas_price)
    await insurance.deployed(timeout=config.timeout, confirmations=config.confirmations)

    print(f"{CONTRACT_NAME} contract deployed to:", insurance.address)

    link = explorer_url(network, "address", insurance.address)
    if link:
        logger.info(f"Explorer: {link}")
    return insurance


def run() -> int:
    """Run the deployment and return the process exit code"""
    try:
        config = DeployConfig.from_env()
        configure_logging(config.log_level)
        asyncio.run(main(config))
    except KeyboardInterrupt:
        print("Deployment interrupted", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Deployment failed", exc_info=True)
        print(f"Deployment failed: {e}", file=sys.stderr)
        return 1
    return 0


def cli():
    sys.exit(run())


if __name__ == "__main__":
    cli()
