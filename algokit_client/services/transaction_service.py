"""
Transaction service — validity parameters, signing, submission and error classification.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from algosdk import error as algosdk_error
from algosdk import transaction

from algokit_client.exceptions import AlgoKitError, NetworkError, RejectionError

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient
    from algokit_client.domain.account import Account

logger = logging.getLogger(__name__)


def make_validity_params(
    sp: transaction.SuggestedParams,
    window: int,
    min_fee: int,
) -> transaction.SuggestedParams:
    """
    Derive the parameters stamped into a new transaction.

    The validity window is [first, first + window]. A per-byte fee from the
    node stays per-byte, so algosdk prices each transaction by its encoded
    size; a flat fee is raised to at least min_fee. Returns a new object;
    `sp` is untouched.
    """
    return transaction.SuggestedParams(
        fee=max(sp.fee, min_fee) if sp.flat_fee else sp.fee,
        first=sp.first,
        last=sp.first + window,
        gh=sp.gh,
        gen=sp.gen,
        flat_fee=sp.flat_fee,
        consensus_version=sp.consensus_version,
        min_fee=max(sp.min_fee or 0, min_fee),
    )


async def fetch_params(client: AlgorandClient, window: Optional[int] = None) -> transaction.SuggestedParams:
    """Fetch fresh suggested params and apply the validity window."""
    sp = await client.suggested_params()
    return make_validity_params(
        sp,
        window=client.settings.validity_window if window is None else window,
        min_fee=client.settings.min_fee,
    )


def encode_note(note: str | bytes | None) -> bytes | None:
    if note is None:
        return None
    if isinstance(note, str):
        return note.encode("utf-8")
    return bytes(note)


def sign_transaction(txn: transaction.Transaction, account: Account) -> transaction.SignedTransaction:
    """Sign one transaction; a sender different from the signer is signed as a rekeyed account."""
    return txn.sign(account.private_key)


async def sign_and_send(client: AlgorandClient, txn: transaction.Transaction, account: Account) -> str:
    """
    Sign a transaction with `account` and submit it.

    Returns:
        Transaction ID from the network
    """
    signed = sign_transaction(txn, account)
    logger.info(f"Submitting {txn.type} txn from {txn.sender[:8]}...")
    return await client.send_transaction(signed)


def classify_error(error_msg: str) -> tuple[str, str]:
    """
    Classify a node error message into a coarse reason and a readable message.

    Returns:
        Tuple of (reason, detail_message)
    """
    lower = error_msg.lower()

    if "overspend" in lower or "insufficient" in lower or "below min" in lower:
        return "insufficient_balance", "Insufficient balance for this transaction"
    elif "invalid signature" in lower or "signature validation failed" in lower or "should have been authorized" in lower:
        return "invalid_signature", "Invalid or missing transaction signature"
    elif "already in ledger" in lower:
        return "already_in_ledger", "Transaction already submitted"
    elif "txn dead" in lower or "round outside of" in lower:
        return "expired", "Transaction validity window has passed"
    elif "transaction pool" in lower and "full" in lower:
        return "pool_full", "Network busy — transaction pool full. Try again shortly."
    else:
        return "other", f"Transaction rejected: {error_msg}"


def translate_error(exc: Exception, *, submission: bool = False) -> AlgoKitError:
    """
    Map an algosdk or transport failure onto the client's error taxonomy.

    Only an HTTP 400 answer to a submission is a rejection by the chain;
    everything else (unreachable node, auth failures, 5xx, a full pool) is
    a NetworkError.
    """
    if isinstance(exc, algosdk_error.AlgodHTTPError):
        node_message = str(exc)
        details = {"status_code": exc.code, "node_message": node_message}
        if submission and exc.code == 400:
            reason, detail = classify_error(node_message)
            if reason != "pool_full":
                return RejectionError(detail, reason=reason, details=details)
        return NetworkError(f"algod request failed ({exc.code}): {node_message}", details=details)
    return NetworkError(f"algod unreachable: {exc}", details={"error_type": type(exc).__name__})
