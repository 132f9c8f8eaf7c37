"""Command line entry point: configure one batch and dispatch it."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, List, Optional

from dotenv import load_dotenv

from .amounts import amount_generator_from_policy
from .client import Web3TransferClient
from .config import Config
from .dispatch import DispatchEngine
from .endpoints import EndpointPool, connect_endpoints
from .errors import ConfigurationError
from .logs import setup_logging
from .report import ExplorerLinks, LogReportSink
from .signers import SignerSet, load_private_keys
from .symbols import SymbolResolver

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multi-send",
        description="Send a batch of native-asset transfers to one recipient.",
    )
    parser.add_argument("--rpc", action="append", dest="rpc_urls", help="RPC URL (repeat for fallbacks)")
    parser.add_argument("--keys", dest="private_keys_file", help="JSON file with a list of private keys")
    parser.add_argument("--recipient", help="Recipient address")
    parser.add_argument("--count", dest="tx_count", type=int, help="Number of transactions")
    parser.add_argument("--amount", help="Fixed amount per transaction (e.g. 0.001)")
    parser.add_argument("--min-amount", dest="amount_min", help="Random mode lower bound (inclusive)")
    parser.add_argument("--max-amount", dest="amount_max", help="Random mode upper bound (exclusive)")
    parser.add_argument("--explorer", dest="explorer_url", help="Block explorer base URL")
    parser.add_argument("--confirmation-timeout", type=float, help="Seconds to wait for each confirmation")
    parser.add_argument(
        "--rotate-on-connection-error",
        action="store_true",
        default=None,
        help="Switch to the next RPC endpoint after a connection failure",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser


def apply_args(config: Config, args: argparse.Namespace) -> Config:
    """Overlay explicitly given command line values on ``config``."""
    overrides = {
        name: value
        for name, value in vars(args).items()
        if value is not None and hasattr(config, name)
    }
    if "rpc_urls" in overrides:
        overrides["rpc_urls"] = tuple(overrides["rpc_urls"])
    if overrides.get("amount_min") is not None or overrides.get("amount_max") is not None:
        overrides["amount_mode"] = "random"
    elif "amount" in overrides:
        overrides["amount_mode"] = "fixed"
    return replace(config, **overrides)


def build_client(config: Config, pool: EndpointPool) -> Web3TransferClient:
    return Web3TransferClient(
        pool,
        default_gas_limit=config.default_gas_limit,
        confirmation_timeout=config.confirmation_timeout,
        poll_interval=config.receipt_poll_interval,
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"))

    try:
        config = apply_args(Config.from_env(), args)
        config.validate()
        signers = SignerSet.from_keys(load_private_keys(config.private_keys_file))
        amounts = amount_generator_from_policy(config.amount_policy())
        pool = EndpointPool(connect_endpoints(config.rpc_urls, config.request_timeout))
        client = build_client(config, pool)
        engine = DispatchEngine(
            client,
            signers,
            amounts,
            config.recipient,
            pool=pool,
            rotate_on_connection_error=config.rotate_on_connection_error,
        )
    except ConfigurationError as exc:
        logging.error(f"Configuration error: {exc}")
        return EXIT_CONFIG

    resolver = SymbolResolver(config.chain_registry_url, timeout=config.request_timeout)
    sink = LogReportSink(
        ExplorerLinks(config.explorer_url, config.explorer_tx_path),
        symbol=lambda: resolver.resolve_for(client),
    )

    logging.info(
        f"Initiated {config.tx_count} transaction(s) to {engine.recipient} "
        f"from {len(signers)} wallet(s) using {amounts!r} via {pool.current().url}"
    )

    stop_event = threading.Event()
    with _stop_on_signals(stop_event):
        summary = engine.run(config.tx_count, sink, stop_event)

    return EXIT_OK if summary.ok else EXIT_FAILURES


@contextmanager
def _stop_on_signals(stop_event: threading.Event) -> Iterator[None]:
    """First SIGINT/SIGTERM stops the batch between transactions; a second aborts."""

    def handler(signum, frame) -> None:
        if stop_event.is_set():
            raise KeyboardInterrupt
        logging.warning("Stop requested; finishing the current transaction")
        stop_event.set()

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)
