"""Human-readable per-transaction status lines."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .models import BatchSummary, Confirmed, TransferOutcome
from .symbols import UNKNOWN_SYMBOL


@dataclass(frozen=True)
class ExplorerLinks:
    base_url: Optional[str] = None
    tx_path: str = "/tx/{tx_hash}"

    def tx(self, tx_hash: str) -> str:
        if not self.base_url:
            return tx_hash
        return self.base_url.rstrip("/") + self.tx_path.format(tx_hash=tx_hash)


class LogReportSink:
    """Logs each outcome as it arrives, then a one-line summary."""

    def __init__(
        self,
        explorer: Optional[ExplorerLinks] = None,
        symbol: Optional[Callable[[], str]] = None,
    ) -> None:
        self._explorer = explorer or ExplorerLinks()
        self._symbol_source = symbol
        self._symbol: Optional[str] = None

    @property
    def symbol(self) -> str:
        if self._symbol is None:
            self._symbol = self._symbol_source() if self._symbol_source else UNKNOWN_SYMBOL
        return self._symbol

    def emit(self, outcome: TransferOutcome, total: int) -> None:
        position = f"({outcome.index + 1}/{total})"
        if isinstance(outcome, Confirmed):
            logging.info(
                f"Transaction Confirmed for {outcome.signer_address} in block "
                f"{outcome.block_number} with Amount: {outcome.amount:f} {self.symbol}"
            )
            logging.info(f"Transaction Hash: {self._explorer.tx(outcome.tx_hash)} {position}")
            return

        logging.error(
            f"Error executing transaction {position} from {outcome.signer_address}: {outcome.reason}"
        )
        if outcome.tx_hash:
            logging.error(f"Unconfirmed transaction: {self._explorer.tx(outcome.tx_hash)}")

    def finish(self, summary: BatchSummary) -> None:
        line = (
            f"Summary: {summary.confirmed} confirmed, {summary.failed} failed, "
            f"{summary.skipped} skipped"
        )
        if summary.ok:
            logging.info(line)
        else:
            logging.warning(line)
