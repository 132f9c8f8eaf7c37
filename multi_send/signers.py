"""Signing credentials and per-index signer selection."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from eth_account import Account

from .errors import ConfigurationError


@dataclass(frozen=True)
class Signer:
    address: str
    private_key: str = field(repr=False)

    @classmethod
    def from_key(cls, private_key: str) -> "Signer":
        key = normalize_private_key(private_key)
        try:
            account = Account.from_key(key)
        except (ValueError, TypeError) as exc:
            raise ConfigurationError(f"Invalid private key: {exc}") from None
        return cls(address=account.address, private_key=key)


class SignerSet:
    """Maps transaction index to signer via ``index % len(signers)``."""

    def __init__(self, signers: Iterable[Signer]) -> None:
        self._signers: Tuple[Signer, ...] = tuple(signers)
        if not self._signers:
            raise ConfigurationError("Signer list must not be empty")

    @classmethod
    def from_keys(cls, private_keys: Iterable[str]) -> "SignerSet":
        return cls(Signer.from_key(key) for key in private_keys)

    def __len__(self) -> int:
        return len(self._signers)

    @property
    def addresses(self) -> Tuple[str, ...]:
        return tuple(signer.address for signer in self._signers)

    def signer_for(self, index: int) -> Signer:
        if index < 0:
            raise IndexError("Transaction index must be non-negative")
        return self._signers[index % len(self._signers)]


def normalize_private_key(key: str) -> str:
    key = "".join(str(key).split())
    if key.startswith(("0x", "0X")):
        key = key[2:]
    return "0x" + key.lower()


def load_private_keys(path: str) -> List[str]:
    """Read a JSON array of hex private keys."""
    file = Path(path)
    if not file.exists():
        raise ConfigurationError(f"Private key file not found: {file}")

    try:
        data = json.loads(file.read_text("utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Private key file is not valid JSON: {exc}") from None

    if not isinstance(data, list):
        raise ConfigurationError("Private key file must contain a JSON list")
    if not data:
        raise ConfigurationError(f"No private keys in {file}")
    if not all(isinstance(item, str) and item.strip() for item in data):
        raise ConfigurationError("Private keys must be non-empty strings")

    return [normalize_private_key(item) for item in data]
