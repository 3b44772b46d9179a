"""
Pytest configuration and shared fixtures.

Provides a MagicMock algod client wired into a real AlgorandClient, real
ed25519 accounts (so algosdk can sign and hash for real) and suggested
params anchored at round 1000.
"""
import pytest
from unittest.mock import MagicMock

from algosdk import transaction

from algokit_client.algorand_client import AlgorandClient
from algokit_client.algokit import AlgoKit
from algokit_client.config import Settings
from algokit_client.domain.account import Account

TESTNET_GENESIS_HASH = "SGO1GKSzyE7IEPItTxCByw9x8FmnrCDexi9/cOUJOiI="
TESTNET_GENESIS_ID = "testnet-v1.0"
FIRST_ROUND = 1000
GROUP_TX_ID = "GROUPTXID"
SINGLE_TX_ID = "SINGLETXID"


def make_suggested_params(first: int = FIRST_ROUND) -> transaction.SuggestedParams:
    """Params as algod returns them: per-byte fee 0, min fee 1000."""
    return transaction.SuggestedParams(
        fee=0,
        first=first,
        last=first + 1000,
        gh=TESTNET_GENESIS_HASH,
        gen=TESTNET_GENESIS_ID,
        flat_fee=False,
        min_fee=1000,
    )


# ── Mock Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def mock_algod_client():
    """Mock algosdk AlgodClient for unit tests."""
    mock_client = MagicMock()
    mock_client.status.return_value = {"last-round": FIRST_ROUND}
    mock_client.suggested_params.side_effect = lambda: make_suggested_params()
    mock_client.send_transaction.return_value = SINGLE_TX_ID
    mock_client.send_transactions.return_value = GROUP_TX_ID
    mock_client.pending_transaction_info.return_value = {"confirmed-round": FIRST_ROUND + 1, "pool-error": ""}
    mock_client.status_after_block.return_value = {"last-round": FIRST_ROUND + 1}
    mock_client.account_info.return_value = {"address": "", "amount": 0, "assets": []}
    return mock_client


@pytest.fixture
def test_settings() -> Settings:
    return Settings(network="localnet", validity_window=1000, confirmation_rounds=10, min_fee=1000)


@pytest.fixture
def algorand_client(mock_algod_client, test_settings) -> AlgorandClient:
    """AlgorandClient backed by the mock algod client."""
    return AlgorandClient(test_settings, algod_client=mock_algod_client)


@pytest.fixture
def algokit(algorand_client) -> AlgoKit:
    return AlgoKit(algorand_client)


# ── Test Data Fixtures ────────────────────────────────────────────────


@pytest.fixture
def alice() -> Account:
    return Account.generate()


@pytest.fixture
def bob() -> Account:
    return Account.generate()


@pytest.fixture
def carol() -> Account:
    return Account.generate()
