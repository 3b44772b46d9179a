"""
Key registration — take an account online or offline for consensus participation.

Participation keys are generated outside this package (e.g. `goal account
addpartkey`); they are passed in here as base64 strings or raw bytes.
"""
from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Optional

from algosdk import transaction

from algokit_client.exceptions import ValidationError
from algokit_client.services.transaction_service import fetch_params, sign_and_send

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient
    from algokit_client.domain.account import Account

logger = logging.getLogger(__name__)


def _b64_key(key: str | bytes, size: int, field: str) -> str:
    if isinstance(key, str):
        try:
            raw = base64.b64decode(key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"not valid base64: {e}", field=field) from e
    else:
        raw = bytes(key)
    if len(raw) != size:
        raise ValidationError(f"expected {size} bytes, got {len(raw)}", field=field)
    return base64.b64encode(raw).decode()


async def go_online(
    client: AlgorandClient,
    account: Account,
    *,
    vote_key: str | bytes,
    selection_key: str | bytes,
    vote_first: int,
    vote_last: int,
    vote_key_dilution: int,
    state_proof_key: str | bytes | None = None,
) -> str:
    """Register participation keys for rounds [vote_first, vote_last]."""
    if vote_last <= vote_first:
        raise ValidationError("vote_last must be after vote_first", field="vote_last")

    votekey = _b64_key(vote_key, 32, "vote_key")
    selkey = _b64_key(selection_key, 32, "selection_key")
    sprfkey: Optional[str] = None
    if state_proof_key is not None:
        sprfkey = _b64_key(state_proof_key, 64, "state_proof_key")

    sp = await fetch_params(client)
    txn = transaction.KeyregOnlineTxn(
        sender=account.address,
        sp=sp,
        votekey=votekey,
        selkey=selkey,
        votefst=vote_first,
        votelst=vote_last,
        votekd=vote_key_dilution,
        sprfkey=sprfkey,
    )
    logger.info(f"Registering {account.address[:8]}... online for rounds {vote_first}-{vote_last}")
    return await sign_and_send(client, txn, account)


async def go_offline(client: AlgorandClient, account: Account) -> str:
    sp = await fetch_params(client)
    txn = transaction.KeyregOfflineTxn(sender=account.address, sp=sp)
    logger.info(f"Taking {account.address[:8]}... offline")
    return await sign_and_send(client, txn, account)
