"""Native currency symbol lookup against the public chain registry."""

import logging
from typing import Dict, List, Optional

import requests

from .config import DEFAULT_CHAIN_REGISTRY_URL
from .errors import ReportingError

UNKNOWN_SYMBOL = "Unknown"


class SymbolResolver:
    """Resolves chain id to native currency symbol, once per chain per run.

    Lookup failures never propagate; they resolve to ``UNKNOWN_SYMBOL``.
    """

    def __init__(
        self,
        registry_url: str = DEFAULT_CHAIN_REGISTRY_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._registry_url = registry_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._registry: Optional[List[dict]] = None
        self._cache: Dict[int, str] = {}

    def resolve(self, chain_id: int) -> str:
        if chain_id in self._cache:
            return self._cache[chain_id]
        try:
            symbol = self._lookup(chain_id)
        except ReportingError as exc:
            logging.debug(f"Currency symbol lookup failed for chain {chain_id}: {exc}")
            symbol = UNKNOWN_SYMBOL
        self._cache[chain_id] = symbol
        return symbol

    def resolve_for(self, client) -> str:
        """Resolve the symbol of the chain ``client`` is connected to."""
        try:
            chain_id = client.chain_id()
        except Exception as exc:
            logging.debug(f"Could not read chain id: {exc}")
            return UNKNOWN_SYMBOL
        return self.resolve(chain_id)

    def _lookup(self, chain_id: int) -> str:
        for chain in self._load_registry():
            if not isinstance(chain, dict) or chain.get("chainId") != chain_id:
                continue
            currency = chain.get("nativeCurrency") or {}
            symbol = currency.get("symbol") if isinstance(currency, dict) else None
            return str(symbol) if symbol else UNKNOWN_SYMBOL
        return UNKNOWN_SYMBOL

    def _load_registry(self) -> List[dict]:
        if self._registry is not None:
            return self._registry
        try:
            response = self._session.get(self._registry_url, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise ReportingError(f"Chain registry unavailable: {exc}") from exc
        if not isinstance(data, list):
            raise ReportingError("Chain registry must be a JSON list")
        self._registry = data
        return data
