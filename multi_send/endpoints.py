"""RPC endpoint pool with an explicit rotation cursor."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence

from web3 import Web3

from .errors import ConfigurationError


@dataclass(frozen=True)
class Endpoint:
    url: str
    web3: Any = field(default=None, repr=False, compare=False)


def connect_endpoints(urls: Iterable[str], timeout: float = 20) -> List[Endpoint]:
    """Build one HTTP-backed web3 handle per URL.

    No connectivity check is made here; an unreachable node surfaces as a
    failed submission for the index that first uses it.
    """
    endpoints = []
    for url in urls:
        url = url.strip()
        if not url:
            continue
        w3 = Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))
        endpoints.append(Endpoint(url=url, web3=w3))
    return endpoints


class EndpointPool:
    """Ordered endpoints for one network, with a cyclic cursor.

    The pool never rotates on its own; callers decide when to move on.
    """

    def __init__(self, endpoints: Sequence[Endpoint]) -> None:
        if not endpoints:
            raise ConfigurationError("At least one RPC endpoint is required")
        self._endpoints = tuple(endpoints)
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._endpoints)

    def current(self) -> Endpoint:
        return self._endpoints[self._cursor]

    def rotate(self) -> Endpoint:
        self._cursor = (self._cursor + 1) % len(self._endpoints)
        endpoint = self.current()
        if len(self._endpoints) > 1:
            logging.info(f"Rotated RPC endpoint -> {endpoint.url}")
        return endpoint
