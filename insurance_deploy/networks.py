"""
Network Configuration
RPC endpoints, chain ids and block explorers for supported networks
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from web3 import Web3

from insurance_deploy.exceptions import DeploymentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    rpc: str
    chain_id: int
    explorer: str = ""


def _network_configs(environ: Mapping[str, str]) -> Dict[str, NetworkConfig]:
    return {
        "localhost": NetworkConfig(
            name="localhost",
            rpc=environ.get("LOCALHOST_RPC", "http://127.0.0.1:8545"),
            chain_id=31337,
        ),
        "sepolia": NetworkConfig(
            name="sepolia",
            rpc=environ.get("SEPOLIA_RPC", "https://rpc.sepolia.org"),
            chain_id=11155111,
            explorer="https://sepolia.etherscan.io",
        ),
        "polygon": NetworkConfig(
            name="polygon",
            rpc=environ.get("POLYGON_RPC", "https://polygon-rpc.com"),
            chain_id=137,
            explorer="https://polygonscan.com",
        ),
        "bsc": NetworkConfig(
            name="bsc",
            rpc=environ.get("BSC_RPC", "https://bsc-dataseed.binance.org"),
            chain_id=56,
            explorer="https://bscscan.com",
        ),
        "avalanche": NetworkConfig(
            name="avalanche",
            rpc=environ.get("AVALANCHE_RPC", "https://api.avax.network/ext/bc/C/rpc"),
            chain_id=43114,
            explorer="https://snowtrace.io",
        ),
    }


def get_network(name: str, environ: Optional[Mapping[str, str]] = None) -> NetworkConfig:
    """Look up a supported network by name.

    RPC overrides (``<NETWORK>_RPC``) come from ``environ``, or from
    ``os.environ`` when it is omitted.
    """
    configs = _network_configs(os.environ if environ is None else environ)
    if name not in configs:
        raise ValueError(f"Unsupported network: {name}")
    return configs[name]


def connect(network: NetworkConfig, request_timeout: int = 30) -> Web3:
    """Open a Web3 connection and check it talks to the expected chain"""
    web3 = Web3(Web3.HTTPProvider(network.rpc, request_kwargs={"timeout": request_timeout}))
    if not web3.is_connected():
        raise ConnectionError(f"Failed to connect to {network.name} at {network.rpc}")

    chain_id = web3.eth.chain_id
    if chain_id != network.chain_id:
        raise DeploymentError(
            f"Network {network.name} expects chain id {network.chain_id}, "
            f"but the node at {network.rpc} reports {chain_id}"
        )

    logger.info(f"Connected to {network.name} (chain id {chain_id})")
    return web3


def explorer_url(network: NetworkConfig, kind: str, value: str) -> Optional[str]:
    """Get explorer URL for a transaction ("tx") or an address ("address")"""
    if not network.explorer:
        return None
    return f"{network.explorer}/{kind}/{value}"
