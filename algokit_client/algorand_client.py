"""
Async Algorand node client.

Wraps algosdk's synchronous AlgodClient: every node call runs in the shared
thread pool, and algosdk/transport failures are translated into
NetworkError or RejectionError with the original exception chained.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from algosdk import error as algosdk_error
from algosdk import transaction
from algosdk.v2client import algod

from algokit_client.config import Settings, settings as default_settings
from algokit_client.domain.enums import Network
from algokit_client.exceptions import ConfirmationTimeoutError, RejectionError, ValidationError
from algokit_client.models import AccountInformation, NodeStatus, PendingTransaction
from algokit_client.services.async_executor import run_blocking
from algokit_client.services.transaction_service import classify_error, translate_error

logger = logging.getLogger(__name__)

_NODE_ERRORS = (algosdk_error.AlgodHTTPError, algosdk_error.AlgodResponseError, OSError)

_default_client: Optional["AlgorandClient"] = None


class AlgorandClient:
    """Async wrapper around an algod client."""

    def __init__(self, config: Optional[Settings] = None, algod_client: Optional[algod.AlgodClient] = None):
        self._settings = config or default_settings
        if algod_client is None:
            algod_client = algod.AlgodClient(
                algod_token=self._settings.resolved_algod_token,
                algod_address=self._settings.resolved_algod_address,
            )
            self._settings.log_summary()
        self._client = algod_client

    @classmethod
    def for_network(cls, network: Network | str, **overrides: Any) -> "AlgorandClient":
        """Client for localnet, testnet or mainnet."""
        return cls(Settings.for_network(network, **overrides))

    @property
    def client(self) -> algod.AlgodClient:
        """Get the underlying algod client instance."""
        return self._client

    @property
    def settings(self) -> Settings:
        return self._settings

    async def _call(self, method: str, *args: Any, submission: bool = False, **kwargs: Any) -> Any:
        """Run one algod method in the thread pool and translate failures."""
        try:
            return await run_blocking(getattr(self._client, method), *args, **kwargs)
        except _NODE_ERRORS as e:
            translated = translate_error(e, submission=submission)
            logger.error(f"algod {method} failed: {translated.message}")
            raise translated from e

    # ── Node ────────────────────────────────────────────────────────

    async def suggested_params(self) -> transaction.SuggestedParams:
        """Fetch suggested transaction parameters from the node."""
        return await self._call("suggested_params")

    async def status(self) -> NodeStatus:
        return NodeStatus.model_validate(await self._call("status"))

    async def is_healthy(self) -> bool:
        """True when the node answers a status request; failures propagate."""
        await self.status()
        return True

    async def account_info(self, address: str) -> AccountInformation:
        return AccountInformation.model_validate(await self._call("account_info", address))

    # ── Submission ──────────────────────────────────────────────────

    async def send_transaction(self, signed_txn: transaction.SignedTransaction) -> str:
        """
        Submit a single signed transaction.

        Returns:
            Transaction ID
        """
        tx_id = await self._call("send_transaction", signed_txn, submission=True)
        logger.info(f"Transaction submitted: {tx_id}")
        return tx_id

    async def send_transaction_group(self, signed_txns: Sequence[transaction.SignedTransaction]) -> str:
        """
        Submit an atomic group of signed transactions.

        Returns:
            The id the node reports for the group (its first transaction)
        """
        logger.info(f"Submitting transaction group ({len(signed_txns)} txns)")
        tx_id = await self._call("send_transactions", list(signed_txns), submission=True)
        logger.info(f"Group submitted: {tx_id}")
        return tx_id

    # ── Confirmation ────────────────────────────────────────────────

    async def pending_transaction(self, tx_id: str) -> PendingTransaction:
        """Get the pending/confirmed status of a transaction."""
        return PendingTransaction.model_validate(await self._call("pending_transaction_info", tx_id))

    async def wait_for_confirmation(self, tx_id: str, timeout: Optional[int] = None) -> PendingTransaction:
        """
        Poll until tx_id is confirmed or `timeout` rounds have passed.

        Each unconfirmed check waits for the next block, so the budget is
        counted in rounds, not seconds.

        Raises:
            ConfirmationTimeoutError: still pending after `timeout` rounds
            RejectionError: the node dropped the transaction from its pool
        """
        rounds = self._settings.confirmation_rounds if timeout is None else timeout
        if rounds < 1:
            raise ValidationError(f"must be at least 1 round, got {rounds}", field="timeout")

        status = await self.status()
        start_round = status.last_round + 1
        current_round = start_round

        while current_round < start_round + rounds:
            pending = await self.pending_transaction(tx_id)
            if pending.is_confirmed:
                logger.info(f"Transaction {tx_id} confirmed in round {pending.confirmed_round}")
                return pending
            if pending.pool_error:
                reason, detail = classify_error(pending.pool_error)
                raise RejectionError(detail, reason=reason, details={"tx_id": tx_id, "pool_error": pending.pool_error})
            await self._call("status_after_block", current_round)
            current_round += 1

        logger.warning(f"Transaction {tx_id} not confirmed after {rounds} rounds")
        raise ConfirmationTimeoutError(tx_id, rounds)


def get_algorand_client() -> AlgorandClient:
    """Lazily created client for the global settings."""
    global _default_client
    if _default_client is None:
        _default_client = AlgorandClient()
    return _default_client
