"""
Application service — create, call, opt in/out, update and delete smart contracts.

Programs are passed as compiled bytecode; compiling TEAL is up to the caller.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from algosdk import transaction

from algokit_client.exceptions import NetworkError
from algokit_client.services.transaction_service import fetch_params, sign_and_send
from algokit_client.utils.validators import validate_id

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient
    from algokit_client.domain.account import Account

logger = logging.getLogger(__name__)


def _args(arguments: Optional[Iterable[bytes]]) -> Optional[List[bytes]]:
    return list(arguments) if arguments else None


async def create_application(
    client: AlgorandClient,
    creator: Account,
    *,
    approval_program: bytes,
    clear_program: bytes,
    global_schema: transaction.StateSchema,
    local_schema: transaction.StateSchema,
    arguments: Optional[Iterable[bytes]] = None,
    extra_pages: int = 0,
    timeout: Optional[int] = None,
) -> int:
    """
    Deploy an application and wait for confirmation.

    Returns:
        int: Application ID
    """
    sp = await fetch_params(client)
    txn = transaction.ApplicationCreateTxn(
        sender=creator.address,
        sp=sp,
        on_complete=transaction.OnComplete.NoOpOC,
        approval_program=approval_program,
        clear_program=clear_program,
        global_schema=global_schema,
        local_schema=local_schema,
        app_args=_args(arguments),
        extra_pages=extra_pages,
    )

    logger.info(f"Creating application from {creator.address[:8]}...")
    tx_id = await sign_and_send(client, txn, creator)
    result = await client.wait_for_confirmation(tx_id, timeout)

    if result.application_index is None:
        raise NetworkError(
            "Application creation confirmed but no app index returned",
            details={"tx_id": tx_id},
        )
    logger.info(f"Application created — App ID: {result.application_index}")
    return result.application_index


async def call_application(
    client: AlgorandClient,
    app_id: int,
    caller: Account,
    *,
    arguments: Optional[Iterable[bytes]] = None,
    accounts: Optional[List[str]] = None,
    foreign_apps: Optional[List[int]] = None,
    foreign_assets: Optional[List[int]] = None,
    boxes: Optional[List[Tuple[int, bytes]]] = None,
) -> str:
    """NoOp call with optional references."""
    validate_id(app_id, "app_id")
    sp = await fetch_params(client)
    txn = transaction.ApplicationNoOpTxn(
        sender=caller.address,
        sp=sp,
        index=app_id,
        app_args=_args(arguments),
        accounts=accounts,
        foreign_apps=foreign_apps,
        foreign_assets=foreign_assets,
        boxes=boxes,
    )
    return await sign_and_send(client, txn, caller)


async def opt_in_to_application(
    client: AlgorandClient,
    app_id: int,
    account: Account,
    arguments: Optional[Iterable[bytes]] = None,
) -> str:
    validate_id(app_id, "app_id")
    sp = await fetch_params(client)
    txn = transaction.ApplicationOptInTxn(sender=account.address, sp=sp, index=app_id, app_args=_args(arguments))
    return await sign_and_send(client, txn, account)


async def close_out_application(
    client: AlgorandClient,
    app_id: int,
    account: Account,
    arguments: Optional[Iterable[bytes]] = None,
) -> str:
    validate_id(app_id, "app_id")
    sp = await fetch_params(client)
    txn = transaction.ApplicationCloseOutTxn(sender=account.address, sp=sp, index=app_id, app_args=_args(arguments))
    return await sign_and_send(client, txn, account)


async def update_application(
    client: AlgorandClient,
    app_id: int,
    account: Account,
    *,
    approval_program: bytes,
    clear_program: bytes,
    arguments: Optional[Iterable[bytes]] = None,
) -> str:
    """Replace both programs. Only the creator may update (unless the program says otherwise)."""
    validate_id(app_id, "app_id")
    sp = await fetch_params(client)
    txn = transaction.ApplicationUpdateTxn(
        sender=account.address,
        sp=sp,
        index=app_id,
        approval_program=approval_program,
        clear_program=clear_program,
        app_args=_args(arguments),
    )
    return await sign_and_send(client, txn, account)


async def delete_application(
    client: AlgorandClient,
    app_id: int,
    account: Account,
    arguments: Optional[Iterable[bytes]] = None,
) -> str:
    validate_id(app_id, "app_id")
    sp = await fetch_params(client)
    txn = transaction.ApplicationDeleteTxn(sender=account.address, sp=sp, index=app_id, app_args=_args(arguments))
    return await sign_and_send(client, txn, account)
