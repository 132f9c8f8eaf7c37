from .amounts import FixedAmount, RandomAmount, amount_generator_from_policy
from .client import TransferClient, Web3TransferClient
from .config import Config, validate_recipient
from .dispatch import DispatchEngine, ReportSink
from .endpoints import Endpoint, EndpointPool, connect_endpoints
from .errors import (
    ConfigurationError,
    ConfirmationError,
    MultiSendError,
    ReportingError,
    SubmissionError,
)
from .models import BatchSummary, Confirmed, Failed, TransferOutcome, TransferRequest
from .report import ExplorerLinks, LogReportSink
from .signers import Signer, SignerSet, load_private_keys
from .symbols import SymbolResolver

__version__ = "0.1.0"

__all__ = [
    "BatchSummary",
    "Config",
    "ConfigurationError",
    "ConfirmationError",
    "Confirmed",
    "DispatchEngine",
    "Endpoint",
    "EndpointPool",
    "ExplorerLinks",
    "Failed",
    "FixedAmount",
    "LogReportSink",
    "MultiSendError",
    "RandomAmount",
    "ReportSink",
    "ReportingError",
    "Signer",
    "SignerSet",
    "SubmissionError",
    "SymbolResolver",
    "TransferClient",
    "TransferOutcome",
    "TransferRequest",
    "Web3TransferClient",
    "amount_generator_from_policy",
    "connect_endpoints",
    "load_private_keys",
    "validate_recipient",
]
