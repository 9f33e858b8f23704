"""
InsuranceClaim contract deployer
"""

from insurance_deploy.artifacts import ContractArtifact, load_artifact
from insurance_deploy.config import DeployConfig, configure_logging
from insurance_deploy.deployer import ContractFactory, DeployedContract, get_contract_factory
from insurance_deploy.exceptions import ArtifactError, DeploymentError
from insurance_deploy.networks import NetworkConfig, connect, explorer_url, get_network
from insurance_deploy.signers import LocalSigner, NodeSigner, get_signers

__version__ = "0.1.0"

__all__ = [
    "ArtifactError",
    "ContractArtifact",
    "ContractFactory",
    "DeployConfig",
    "DeployedContract",
    "DeploymentError",
    "LocalSigner",
    "NetworkConfig",
    "NodeSigner",
    "configure_logging",
    "connect",
    "explorer_url",
    "get_contract_factory",
    "get_network",
    "get_signers",
    "load_artifact",
]
