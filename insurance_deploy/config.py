"""
Deployment Configuration
Reads deployer settings from the environment (and a local .env file)
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_NETWORK = "localhost"
DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_CONFIRMATIONS = 1
DEFAULT_TIMEOUT = 120


def configure_logging(level: str = "INFO"):
    """Configure root logging for the deploy script"""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _parse_int(environ: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _parse_decimal(environ: Mapping[str, str], name: str) -> Optional[Decimal]:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not value.is_finite() or value <= 0:
        raise ValueError(f"{name} must be positive, got {raw}")
    return value


@dataclass
class DeployConfig:
    network: str = DEFAULT_NETWORK
    private_keys: List[str] = field(default_factory=list, repr=False)
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
    confirmations: int = DEFAULT_CONFIRMATIONS
    timeout: int = DEFAULT_TIMEOUT
    gas_limit: Optional[int] = None
    gas_price_gwei: Optional[Decimal] = None
    log_level: str = "INFO"
    rpc_overrides: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DeployConfig":
        """Build the configuration from environment variables.

        When ``environ`` is omitted, ``.env`` is loaded first and
        ``os.environ`` is used. Existing variables win over ``.env``.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        rpc_overrides = {
            name: value.strip() for name, value in environ.items()
            if name.endswith("_RPC") and value.strip()
        }
        keys = [k.strip() for k in environ.get("PRIVATE_KEY", "").split(",") if k.strip()]

        return cls(
            network=environ.get("DEPLOY_NETWORK", "").strip() or DEFAULT_NETWORK,
            private_keys=keys,
            artifacts_dir=environ.get("ARTIFACTS_DIR", "").strip() or DEFAULT_ARTIFACTS_DIR,
            confirmations=_parse_int(environ, "DEPLOY_CONFIRMATIONS", DEFAULT_CONFIRMATIONS),
            timeout=_parse_int(environ, "DEPLOY_TIMEOUT", DEFAULT_TIMEOUT),
            gas_limit=_parse_int(environ, "GAS_LIMIT", None),
            gas_price_gwei=_parse_decimal(environ, "GAS_PRICE_GWEI"),
            log_level=environ.get("LOG_LEVEL", "").strip() or "INFO",
            rpc_overrides=rpc_overrides,
        )
