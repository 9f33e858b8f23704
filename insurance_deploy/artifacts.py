"""
Contract Artifacts
Resolves a compiled contract name to its ABI and creation bytecode
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from eth_utils import is_hex

from insurance_deploy.exceptions import ArtifactError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    name: str
    abi: List[Dict] = field(repr=False)
    bytecode: str = field(repr=False)
    source_name: Optional[str] = None


def _find_artifact_files(name: str, artifacts_dir: Path) -> List[Path]:
    if ":" in name:
        # Fully qualified name, e.g. contracts/InsuranceClaim.sol:InsuranceClaim
        source, contract = name.rsplit(":", 1)
        candidate = artifacts_dir / source / f"{contract}.json"
        return [candidate] if candidate.is_file() else []

    # Hardhat keeps debug files next to artifacts as <Name>.dbg.json; those never match
    return sorted(p for p in artifacts_dir.rglob(f"{name}.json") if p.is_file())


def _normalize_bytecode(bytecode) -> str:
    if isinstance(bytecode, dict):
        # solc standard-json output nests the hex under "object"
        bytecode = bytecode.get("object", "")
    if not isinstance(bytecode, str):
        return ""
    bytecode = bytecode.strip()
    if bytecode and not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return bytecode


def load_artifact(name: str, artifacts_dir: Union[str, Path] = "artifacts") -> ContractArtifact:
    """Load the compiled artifact for ``name`` from ``artifacts_dir``.

    Accepts Hardhat artifacts (``contracts/<Name>.sol/<Name>.json``) and flat
    ``<Name>.json`` files holding ``abi`` and ``bytecode``.
    """
    artifacts_dir = Path(artifacts_dir)
    if not artifacts_dir.is_dir():
        raise ArtifactError(
            f"Artifacts directory {artifacts_dir} not found, compile the contracts first"
        )

    matches = _find_artifact_files(name, artifacts_dir)
    if not matches:
        raise ArtifactError(f"Artifact for contract \"{name}\" not found in {artifacts_dir}")
    if len(matches) > 1:
        found = ", ".join(str(p.relative_to(artifacts_dir)) for p in matches)
        raise ArtifactError(
            f"Multiple artifacts for contract \"{name}\": {found}. "
            f"Use a fully qualified name such as contracts/{name}.sol:{name}"
        )

    path = matches[0]
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Artifact {path} could not be read as JSON: {e}") from e

    if not isinstance(data, dict):
        raise ArtifactError(f"Artifact {path} must be a JSON object")

    abi = data.get("abi")
    if not isinstance(abi, list):
        raise ArtifactError(f"Artifact {path} has no ABI")

    bytecode = _normalize_bytecode(data.get("bytecode"))
    if not bytecode:
        raise ArtifactError(f"Artifact {path} has no bytecode")
    if bytecode == "0x":
        raise ArtifactError(
            f"Contract \"{name}\" has empty bytecode; abstract contracts and interfaces cannot be deployed"
        )

    link_references = data.get("linkReferences")
    if isinstance(link_references, dict) and link_references:
        libraries = sorted(
            f"{source}:{library}"
            for source, entries in link_references.items()
            for library in entries
        )
        raise ArtifactError(
            f"Contract \"{name}\" is missing links for the following libraries: {', '.join(libraries)}"
        )
    if not is_hex(bytecode):
        raise ArtifactError(f"Artifact {path} bytecode is not valid hex")

    artifact = ContractArtifact(
        name=data.get("contractName") or name.rsplit(":", 1)[-1],
        abi=abi,
        bytecode=bytecode,
        source_name=data.get("sourceName"),
    )
    logger.debug(f"Loaded artifact {artifact.name} from {path}")
    return artifact
