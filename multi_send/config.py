"""Run configuration sourced from the environment."""

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from web3 import Web3

from .errors import ConfigurationError

DEFAULT_CHAIN_REGISTRY_URL = "https://chainid.network/chains.json"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Config:
    rpc_urls: Tuple[str, ...] = ()
    recipient: Optional[str] = None
    tx_count: int = 1

    amount_mode: str = "fixed"
    amount: Optional[str] = None
    amount_min: Optional[str] = None
    amount_max: Optional[str] = None

    private_keys_file: str = "privateKeys.json"

    explorer_url: Optional[str] = None
    explorer_tx_path: str = "/tx/{tx_hash}"

    default_gas_limit: int = 21_000
    request_timeout: float = 20.0
    confirmation_timeout: float = 120.0
    receipt_poll_interval: float = 2.0
    rotate_on_connection_error: bool = False

    chain_registry_url: str = DEFAULT_CHAIN_REGISTRY_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ
        return cls(
            rpc_urls=_split_urls(env.get("RPC_URLS", "")),
            recipient=env.get("RECIPIENT") or None,
            tx_count=_int(env, "TX_COUNT", 1),
            amount_mode=env.get("AMOUNT_MODE", "fixed").strip().lower(),
            amount=env.get("AMOUNT") or None,
            amount_min=env.get("AMOUNT_MIN") or None,
            amount_max=env.get("AMOUNT_MAX") or None,
            private_keys_file=env.get("PRIVATE_KEYS_FILE", "privateKeys.json"),
            explorer_url=env.get("EXPLORER_URL") or None,
            explorer_tx_path=env.get("EXPLORER_TX_PATH", "/tx/{tx_hash}"),
            default_gas_limit=_int(env, "DEFAULT_GAS_LIMIT", 21_000),
            request_timeout=_float(env, "REQUEST_TIMEOUT", 20.0),
            confirmation_timeout=_float(env, "CONFIRMATION_TIMEOUT", 120.0),
            receipt_poll_interval=_float(env, "RECEIPT_POLL_INTERVAL", 2.0),
            rotate_on_connection_error=_bool(env, "ROTATE_ON_CONNECTION_ERROR", False),
            chain_registry_url=env.get("CHAIN_REGISTRY_URL", DEFAULT_CHAIN_REGISTRY_URL),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )

    def amount_policy(self) -> Dict[str, object]:
        if self.amount_mode == "random":
            return {"mode": "random", "min": self.amount_min, "max": self.amount_max}
        return {"mode": self.amount_mode, "value": self.amount}

    def validate(self) -> None:
        if not self.rpc_urls:
            raise ConfigurationError("No RPC endpoint configured (RPC_URLS or --rpc)")
        if self.tx_count < 1:
            raise ConfigurationError(f"Transaction count must be a positive integer, got {self.tx_count}")
        if self.confirmation_timeout <= 0:
            raise ConfigurationError("Confirmation timeout must be positive")
        if self.receipt_poll_interval < 0:
            raise ConfigurationError("Receipt poll interval must not be negative")
        validate_recipient(self.recipient)


def validate_recipient(address: Optional[str]) -> str:
    """Return the checksummed form of a well-formed address."""
    if not address or not Web3.is_address(address.strip()):
        raise ConfigurationError(f"Invalid recipient address: {address!r}")
    return Web3.to_checksum_address(address.strip())


def _split_urls(value: str) -> Tuple[str, ...]:
    return tuple(url.strip() for url in value.split(",") if url.strip())


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")
