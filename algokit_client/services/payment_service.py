"""
Payment service — thin wrapper around algosdk payment sending.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from algosdk import transaction

from algokit_client.models import PendingTransaction
from algokit_client.services.transaction_service import encode_note, fetch_params, sign_and_send
from algokit_client.utils.validators import validate_algorand_address, validate_amount

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient
    from algokit_client.domain.account import Account


async def send_payment(
    client: AlgorandClient,
    *,
    sender: Account,
    receiver: str,
    amount: int,
    note: str | bytes | None = None,
) -> str:
    validate_algorand_address(receiver, "receiver")
    validate_amount(amount)
    sp = await fetch_params(client)
    txn = transaction.PaymentTxn(
        sender=sender.address,
        sp=sp,
        receiver=receiver,
        amt=amount,
        note=encode_note(note),
    )
    return await sign_and_send(client, txn, sender)


async def send_payment_and_wait(
    client: AlgorandClient,
    *,
    sender: Account,
    receiver: str,
    amount: int,
    note: str | bytes | None = None,
    timeout: Optional[int] = None,
) -> PendingTransaction:
    tx_id = await send_payment(client, sender=sender, receiver=receiver, amount=amount, note=note)
    return await client.wait_for_confirmation(tx_id, timeout)
