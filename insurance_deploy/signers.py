"""
Signers
Accounts that authorize deployment transactions
"""

import logging
from typing import Dict, List, Sequence

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from hexbytes import HexBytes
from web3 import Web3

from insurance_deploy.exceptions import DeploymentError

logger = logging.getLogger(__name__)


class Signer:
    """An account identity able to submit transactions"""

    address: str

    def send_transaction(self, web3: Web3, tx: Dict) -> HexBytes:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.address})"


class LocalSigner(Signer):
    """Signs with a private key held in this process"""

    def __init__(self, account: LocalAccount):
        self.account = account
        self.address = account.address

    @classmethod
    def from_key(cls, private_key: str) -> "LocalSigner":
        return cls(Account.from_key(private_key))

    def send_transaction(self, web3: Web3, tx: Dict) -> HexBytes:
        tx = dict(tx)
        tx.pop("from", None)
        if "nonce" not in tx:
            tx["nonce"] = web3.eth.get_transaction_count(self.address, "pending")
        if "chainId" not in tx:
            tx["chainId"] = web3.eth.chain_id

        signed = self.account.sign_transaction(tx)
        return web3.eth.send_raw_transaction(signed.raw_transaction)


class NodeSigner(Signer):
    """An account unlocked on the node, e.g. the Hardhat node's default accounts"""

    def __init__(self, address: str):
        self.address = to_checksum_address(address)

    def send_transaction(self, web3: Web3, tx: Dict) -> HexBytes:
        tx = dict(tx)
        tx["from"] = self.address
        return web3.eth.send_transaction(tx)


def _local_signers(private_keys: Sequence[str]) -> List[Signer]:
    signers = []
    for index, key in enumerate(private_keys):
        try:
            signers.append(LocalSigner.from_key(key))
        except Exception:
            # never echo key material
            raise ValueError(f"Invalid private key at position {index} in PRIVATE_KEY") from None
    return signers


async def get_signers(web3: Web3, private_keys: Sequence[str] = ()) -> List[Signer]:
    """Return the available signers, configured keys first.

    Without configured keys, falls back to the accounts the node manages.
    """
    if private_keys:
        signers = _local_signers(private_keys)
        logger.debug(f"Using {len(signers)} configured signer(s)")
        return signers

    try:
        accounts = web3.eth.accounts
    except Exception as e:
        logger.error(f"Failed to list node accounts: {e}")
        raise

    if not accounts:
        raise DeploymentError(
            "No signers available: set PRIVATE_KEY or use a node with unlocked accounts"
        )

    logger.debug(f"Using {len(accounts)} node account(s)")
    return [NodeSigner(address) for address in accounts]
