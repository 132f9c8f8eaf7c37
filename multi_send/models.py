"""Transfer requests, per-index outcomes and batch summaries."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Tuple, Union

from .amounts import to_ether


@dataclass(frozen=True)
class TransferRequest:
    recipient: str
    amount_wei: int


@dataclass(frozen=True)
class Confirmed:
    index: int
    tx_hash: str
    block_number: int
    signer_address: str
    amount_wei: int

    succeeded = True

    @property
    def amount(self) -> Decimal:
        return to_ether(self.amount_wei)


@dataclass(frozen=True)
class Failed:
    index: int
    reason: str
    signer_address: str
    amount_wei: int
    tx_hash: Optional[str] = None

    succeeded = False

    @property
    def amount(self) -> Decimal:
        return to_ether(self.amount_wei)


TransferOutcome = Union[Confirmed, Failed]


@dataclass(frozen=True)
class BatchSummary:
    requested: int
    outcomes: Tuple[TransferOutcome, ...]

    @classmethod
    def from_outcomes(cls, requested: int, outcomes: Iterable[TransferOutcome]) -> "BatchSummary":
        return cls(requested=requested, outcomes=tuple(outcomes))

    @property
    def confirmed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.confirmed

    @property
    def skipped(self) -> int:
        return self.requested - len(self.outcomes)

    @property
    def ok(self) -> bool:
        return self.confirmed == self.requested
