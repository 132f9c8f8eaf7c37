"""Sequential batch dispatch: one signer, one transfer, one confirmation per index."""

import logging
import threading
from typing import Iterator, List, Optional, Protocol

from .amounts import AmountGenerator
from .client import TransferClient
from .config import validate_recipient
from .endpoints import EndpointPool
from .errors import ConfigurationError, ConfirmationError, SubmissionError
from .models import BatchSummary, Confirmed, Failed, TransferOutcome, TransferRequest
from .signers import SignerSet


class ReportSink(Protocol):
    def emit(self, outcome: TransferOutcome, total: int) -> None:
        ...

    def finish(self, summary: BatchSummary) -> None:
        ...


class DispatchEngine:
    """Attempts every index exactly once, in order.

    Per-index failures become ``Failed`` outcomes and the batch moves on.
    Only configuration problems are raised, and only before the first
    transfer is sent.

    With ``rotate_on_connection_error`` the pool advances after a
    connectivity failure so the *next* index uses the next endpoint; the
    failed index is not retried.
    """

    def __init__(
        self,
        client: TransferClient,
        signers: SignerSet,
        amounts: AmountGenerator,
        recipient: str,
        pool: Optional[EndpointPool] = None,
        rotate_on_connection_error: bool = False,
    ) -> None:
        if rotate_on_connection_error and pool is None:
            raise ConfigurationError("Endpoint rotation requires an endpoint pool")
        self._client = client
        self._signers = signers
        self._amounts = amounts
        self._recipient = validate_recipient(recipient)
        self._pool = pool
        self._rotate_on_connection_error = rotate_on_connection_error

    @property
    def recipient(self) -> str:
        return self._recipient

    def dispatch(self, index: int) -> TransferOutcome:
        signer = self._signers.signer_for(index)
        amount_wei = self._amounts.amount_for(index)
        request = TransferRequest(recipient=self._recipient, amount_wei=amount_wei)

        try:
            tx_hash = self._client.send_transfer(signer, request)
        except SubmissionError as exc:
            if exc.connectivity and self._rotate_on_connection_error:
                self._pool.rotate()
            return Failed(
                index=index,
                reason=str(exc),
                signer_address=signer.address,
                amount_wei=amount_wei,
            )

        try:
            block_number = self._client.wait_for_confirmation(tx_hash)
        except ConfirmationError as exc:
            return Failed(
                index=index,
                reason=str(exc),
                signer_address=signer.address,
                amount_wei=amount_wei,
                tx_hash=tx_hash,
            )

        return Confirmed(
            index=index,
            tx_hash=tx_hash,
            block_number=block_number,
            signer_address=signer.address,
            amount_wei=amount_wei,
        )

    def iter_outcomes(
        self, count: int, stop_event: Optional[threading.Event] = None
    ) -> Iterator[TransferOutcome]:
        _check_count(count)
        for index in range(count):
            if stop_event is not None and stop_event.is_set():
                logging.warning(f"Batch stopped after {index}/{count} transactions")
                return
            yield self.dispatch(index)

    def run(
        self,
        count: int,
        sink: Optional[ReportSink] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> BatchSummary:
        _check_count(count)
        outcomes: List[TransferOutcome] = []
        for outcome in self.iter_outcomes(count, stop_event):
            outcomes.append(outcome)
            if sink is not None:
                sink.emit(outcome, count)

        summary = BatchSummary.from_outcomes(count, outcomes)
        if sink is not None:
            sink.finish(summary)
        return summary


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ConfigurationError(f"Transaction count must be a positive integer, got {count!r}")
