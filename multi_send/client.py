"""Web3-backed transfer submission and confirmation."""

import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol

import requests
from web3 import Web3
from web3.exceptions import TransactionNotFound

from .endpoints import EndpointPool
from .errors import ConfirmationError, SubmissionError
from .models import TransferRequest
from .signers import Signer

_CONNECTIVITY_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    ConnectionError,
    TimeoutError,
)


class TransferClient(Protocol):
    def chain_id(self) -> int:
        ...

    def send_transfer(self, signer: Signer, request: TransferRequest) -> str:
        ...

    def wait_for_confirmation(self, tx_hash: str) -> int:
        ...


class Web3TransferClient:
    """Sends legacy native transfers through the pool's current endpoint.

    Gas price is whatever the node reports; gas falls back to
    ``default_gas_limit`` when estimation fails.
    """

    def __init__(
        self,
        pool: EndpointPool,
        default_gas_limit: int = 21_000,
        confirmation_timeout: float = 120.0,
        poll_interval: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._pool = pool
        self._default_gas_limit = default_gas_limit
        self._confirmation_timeout = confirmation_timeout
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock
        self._chain_id: Optional[int] = None

    @property
    def web3(self) -> Web3:
        return self._pool.current().web3

    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(self.web3.eth.chain_id)
        return self._chain_id

    def build_tx(self, signer: Signer, request: TransferRequest) -> Dict[str, Any]:
        w3 = self.web3

        tx: Dict[str, Any] = {
            "nonce": w3.eth.get_transaction_count(signer.address, "pending"),
            "to": request.recipient,
            "value": request.amount_wei,
            "chainId": self.chain_id(),
            "gasPrice": w3.eth.gas_price,
        }

        try:
            tx["gas"] = w3.eth.estimate_gas(
                {"from": signer.address, "to": request.recipient, "value": request.amount_wei}
            )
        except Exception as exc:
            logging.debug(f"Gas estimation failed, using {self._default_gas_limit}: {exc}")
            tx["gas"] = self._default_gas_limit

        return tx

    def send_transfer(self, signer: Signer, request: TransferRequest) -> str:
        endpoint = self._pool.current()
        w3 = endpoint.web3

        try:
            tx = self.build_tx(signer, request)
            signed = w3.eth.account.sign_transaction(tx, signer.private_key)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        except _CONNECTIVITY_ERRORS as exc:
            raise SubmissionError(
                f"RPC endpoint {endpoint.url} unreachable: {exc}", connectivity=True
            ) from exc
        except Exception as exc:
            raise SubmissionError(describe_error(exc)) from exc

        hex_hash = Web3.to_hex(tx_hash)
        logging.info(f"Sent {hex_hash} | nonce {tx['nonce']} | {signer.address[:8]} -> {request.recipient[:8]}")
        return hex_hash

    def wait_for_confirmation(self, tx_hash: str) -> int:
        """Poll for the receipt until it lands in a block; return its number."""
        w3 = self.web3
        deadline = self._clock() + self._confirmation_timeout

        while True:
            try:
                receipt = w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                receipt = None
            except Exception as exc:
                logging.warning(f"Receipt error {tx_hash}: {exc}")
                receipt = None

            if receipt is not None:
                block_number = int(receipt["blockNumber"])
                if receipt.get("status", 1) == 0:
                    raise ConfirmationError(f"Transaction reverted in block {block_number}")
                return block_number

            if self._clock() >= deadline:
                raise ConfirmationError(self._timeout_reason(tx_hash))

            self._sleep(self._poll_interval)

    def _timeout_reason(self, tx_hash: str) -> str:
        try:
            self.web3.eth.get_transaction(tx_hash)
        except TransactionNotFound:
            return f"Transaction dropped before confirmation ({tx_hash})"
        except Exception as exc:
            logging.debug(f"Lookup of {tx_hash} failed: {exc}")
        return f"Not confirmed within {self._confirmation_timeout:g}s ({tx_hash})"


def describe_error(exc: Exception) -> str:
    """Best human-readable reason for a node or client error."""
    if exc.args and isinstance(exc.args[0], dict):
        message = exc.args[0].get("message")
        if message:
            return str(message)
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
