"""
algokit-client — a convenience layer over the Algorand Python SDK.

Fetches suggested params, builds, signs and submits common transactions in
one call, and composes atomic groups through a build → sign → submit pipeline.
"""

__version__ = "0.1.0"

from .algokit import AlgoKit
from .algorand_client import AlgorandClient, get_algorand_client
from .composer import AtomicGroupComposer, Group, SignedGroup
from .config import Settings, settings
from .domain.account import Account
from .domain.enums import IntentKind, Network
from .domain.intents import (
    ApplicationCallIntent,
    AssetOptInIntent,
    AssetTransferIntent,
    PaymentIntent,
    RawIntent,
    TransactionIntent,
)
from .exceptions import (
    AlgoKitError,
    ConfirmationTimeoutError,
    NetworkError,
    RejectionError,
    ValidationError,
)
from .models import AccountInformation, AssetHolding, NodeStatus, PendingTransaction
from .utils.amounts import algos, micro_algos, to_algos

__all__ = [
    "__version__",
    # Clients
    "AlgoKit",
    "AlgorandClient",
    "get_algorand_client",
    # Configuration
    "Settings",
    "settings",
    # Atomic groups
    "AtomicGroupComposer",
    "Group",
    "SignedGroup",
    "TransactionIntent",
    "PaymentIntent",
    "AssetTransferIntent",
    "AssetOptInIntent",
    "ApplicationCallIntent",
    "RawIntent",
    "IntentKind",
    # Accounts
    "Account",
    "Network",
    # Models
    "PendingTransaction",
    "NodeStatus",
    "AccountInformation",
    "AssetHolding",
    # Amounts
    "algos",
    "micro_algos",
    "to_algos",
    # Exceptions
    "AlgoKitError",
    "ValidationError",
    "NetworkError",
    "RejectionError",
    "ConfirmationTimeoutError",
]
