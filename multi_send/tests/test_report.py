"""Report lines rendered for each outcome."""

import unittest

from multi_send.models import BatchSummary, Confirmed, Failed
from multi_send.report import ExplorerLinks, LogReportSink

SIGNER = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
TX = "0x" + "12" * 32


class ExplorerLinksTests(unittest.TestCase):
    def test_default_path(self) -> None:
        links = ExplorerLinks("https://explorer.example/")
        self.assertEqual(links.tx(TX), f"https://explorer.example/tx/{TX}")

    def test_custom_path(self) -> None:
        links = ExplorerLinks("https://explorer.devnet.example", "/#/txn/{tx_hash}")
        self.assertEqual(links.tx(TX), f"https://explorer.devnet.example/#/txn/{TX}")

    def test_no_explorer_prints_hash(self) -> None:
        self.assertEqual(ExplorerLinks().tx(TX), TX)


class LogReportSinkTests(unittest.TestCase):
    def setUp(self) -> None:
        self.symbol_calls = 0

        def symbol() -> str:
            self.symbol_calls += 1
            return "MOVE"

        self.sink = LogReportSink(ExplorerLinks("https://explorer.example"), symbol=symbol)

    def test_confirmed_lines(self) -> None:
        outcome = Confirmed(index=0, tx_hash=TX, block_number=42, signer_address=SIGNER, amount_wei=10**15)
        with self.assertLogs(level="INFO") as logs:
            self.sink.emit(outcome, 3)

        output = "\n".join(logs.output)
        self.assertIn(f"Transaction Confirmed for {SIGNER} in block 42 with Amount: 0.001 MOVE", output)
        self.assertIn(f"Transaction Hash: https://explorer.example/tx/{TX} (1/3)", output)

    def test_symbol_resolved_once(self) -> None:
        outcome = Confirmed(index=0, tx_hash=TX, block_number=1, signer_address=SIGNER, amount_wei=1)
        with self.assertLogs(level="INFO"):
            for _ in range(3):
                self.sink.emit(outcome, 3)
        self.assertEqual(self.symbol_calls, 1)

    def test_failed_line(self) -> None:
        outcome = Failed(index=1, reason="nonce too low", signer_address=SIGNER, amount_wei=10**15)
        with self.assertLogs(level="ERROR") as logs:
            self.sink.emit(outcome, 2)

        self.assertEqual(len(logs.records), 1)
        self.assertIn(f"(2/2) from {SIGNER}: nonce too low", logs.output[0])
        self.assertEqual(self.symbol_calls, 0)

    def test_failed_after_submission_links_hash(self) -> None:
        outcome = Failed(index=0, reason="timeout", signer_address=SIGNER, amount_wei=1, tx_hash=TX)
        with self.assertLogs(level="ERROR") as logs:
            self.sink.emit(outcome, 1)
        self.assertIn(f"https://explorer.example/tx/{TX}", logs.output[1])

    def test_summary_line(self) -> None:
        outcomes = (
            Confirmed(index=0, tx_hash=TX, block_number=1, signer_address=SIGNER, amount_wei=1),
            Failed(index=1, reason="x", signer_address=SIGNER, amount_wei=1),
        )
        with self.assertLogs(level="WARNING") as logs:
            self.sink.finish(BatchSummary.from_outcomes(3, outcomes))
        self.assertIn("Summary: 1 confirmed, 1 failed, 1 skipped", logs.output[0])

        with self.assertLogs(level="INFO") as logs:
            self.sink.finish(BatchSummary.from_outcomes(1, outcomes[:1]))
        self.assertEqual(logs.records[0].levelname, "INFO")


if __name__ == "__main__":
    unittest.main()
