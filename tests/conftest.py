"""Shared fixtures for the deployer tests."""

import json
from unittest.mock import MagicMock

import pytest

# Hardhat node default account #0 and its first deployment address
HARDHAT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
HARDHAT_ADDRESS_2 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = b"\xab" * 32

INSURANCE_ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]
INSURANCE_BYTECODE = "0x6080604052348015600f57600080fd5b50"

ENV_VARS = [
    "DEPLOY_NETWORK",
    "PRIVATE_KEY",
    "ARTIFACTS_DIR",
    "DEPLOY_CONFIRMATIONS",
    "DEPLOY_TIMEOUT",
    "GAS_LIMIT",
    "GAS_PRICE_GWEI",
    "LOG_LEVEL",
    "LOCALHOST_RPC",
    "POLYGON_RPC",
]


def write_hardhat_artifact(root, name="InsuranceClaim", abi=None, bytecode=INSURANCE_BYTECODE,
                           source="contracts"):
    """Write a Hardhat-style artifact plus its debug file under ``root``."""
    folder = root / source / f"{name}.sol"
    folder.mkdir(parents=True, exist_ok=True)
    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": name,
        "sourceName": f"{source}/{name}.sol",
        "abi": INSURANCE_ABI if abi is None else abi,
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
        "linkReferences": {},
        "deployedLinkReferences": {},
    }
    (folder / f"{name}.json").write_text(json.dumps(artifact))
    (folder / f"{name}.dbg.json").write_text(json.dumps({"_format": "hh-sol-dbg-1"}))
    return folder / f"{name}.json"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer .env settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def artifacts_dir(tmp_path):
    root = tmp_path / "artifacts"
    write_hardhat_artifact(root)
    return root


@pytest.fixture
def receipt():
    return {
        "status": 1,
        "contractAddress": CONTRACT_ADDRESS,
        "blockNumber": 1,
        "gasUsed": 250000,
        "transactionHash": TX_HASH,
    }


@pytest.fixture
def fake_web3(receipt):
    """A Web3 stand-in backed by a Hardhat-like node."""
    web3 = MagicMock()
    web3.eth.accounts = [HARDHAT_ADDRESS, HARDHAT_ADDRESS_2]
    web3.eth.chain_id = 31337
    web3.eth.block_number = 1
    web3.eth.get_transaction_count.return_value = 0
    web3.eth.send_transaction.return_value = TX_HASH
    web3.eth.send_raw_transaction.return_value = TX_HASH
    web3.eth.wait_for_transaction_receipt.return_value = receipt
    web3.eth.get_code.return_value = b"\x60\x80\x60\x40"

    constructor = web3.eth.contract.return_value.constructor
    constructor.return_value.build_transaction.side_effect = lambda params: {
        **params,
        "data": INSURANCE_BYTECODE,
        "gas": params.get("gas", 500000),
        "chainId": 31337,
        "value": 0,
        "maxFeePerGas": 2000000000,
        "maxPriorityFeePerGas": 1000000000,
    }
    return web3
