"""In-memory stand-ins for the RPC client and report sink."""

from typing import Iterable, List, Tuple

from multi_send.errors import ConfirmationError, SubmissionError
from multi_send.models import TransferRequest

KEYS = tuple("0x" + format(n, "064x") for n in range(1, 5))
RECIPIENT = "0x" + "ab" * 20


class FakeClient:
    """Numbers submissions from 0; fails the ones it is told to."""

    def __init__(
        self,
        reject: Iterable[int] = (),
        unconfirmed: Iterable[int] = (),
        unreachable: Iterable[int] = (),
    ) -> None:
        self.reject = set(reject)
        self.unconfirmed = set(unconfirmed)
        self.unreachable = set(unreachable)
        self.sent: List[Tuple[str, TransferRequest]] = []
        self.waited: List[str] = []

    def chain_id(self) -> int:
        return 1

    def send_transfer(self, signer, request: TransferRequest) -> str:
        call = len(self.sent)
        self.sent.append((signer.address, request))
        if call in self.unreachable:
            raise SubmissionError("RPC endpoint unreachable", connectivity=True)
        if call in self.reject:
            raise SubmissionError("insufficient funds for gas * price + value")
        return "0x" + format(call + 1, "064x")

    def wait_for_confirmation(self, tx_hash: str) -> int:
        self.waited.append(tx_hash)
        call = int(tx_hash, 16) - 1
        if call in self.unconfirmed:
            raise ConfirmationError(f"Not confirmed within 120s ({tx_hash})")
        return 100 + call


class RecordingSink:
    def __init__(self) -> None:
        self.emitted = []
        self.summaries = []

    def emit(self, outcome, total: int) -> None:
        self.emitted.append((outcome, total))

    def finish(self, summary) -> None:
        self.summaries.append(summary)
