"""
Asset service — Algorand Standard Asset (ASA) lifecycle helpers.

Covers creation, opt-in, transfer, close-out, freeze, reconfiguration,
destruction and clawback. A wallet must opt in to an ASA before it can
receive it; opt-in is a 0-amount AssetTransferTxn from the wallet to itself.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from algosdk import transaction

from algokit_client.exceptions import NetworkError
from algokit_client.models import AssetHolding
from algokit_client.services.transaction_service import fetch_params, sign_and_send
from algokit_client.utils.validators import validate_algorand_address, validate_amount, validate_id

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient
    from algokit_client.domain.account import Account

logger = logging.getLogger(__name__)


async def create_asset(
    client: AlgorandClient,
    creator: Account,
    *,
    name: str,
    unit_name: str,
    total: int,
    decimals: int = 0,
    default_frozen: bool = False,
    url: Optional[str] = None,
    metadata_hash: Optional[bytes] = None,
    manager: Optional[str] = None,
    reserve: Optional[str] = None,
    freeze: Optional[str] = None,
    clawback: Optional[str] = None,
    timeout: Optional[int] = None,
) -> int:
    """
    Create an ASA and wait for confirmation.

    Args:
        creator: Account paying for and owning the asset
        name: ASA name (max 32 chars)
        unit_name: ASA unit name (max 8 chars)
        total: Total number of base units
        decimals: Decimal places for display
        manager, reserve: Default to the creator's address
        freeze, clawback: Left empty unless given

    Returns:
        int: Algorand asset ID
    """
    validate_amount(total, field="total")
    sp = await fetch_params(client)
    txn = transaction.AssetCreateTxn(
        sender=creator.address,
        sp=sp,
        total=total,
        decimals=decimals,
        default_frozen=default_frozen,
        unit_name=unit_name,
        asset_name=name,
        manager=manager or creator.address,
        reserve=reserve or creator.address,
        freeze=freeze,
        clawback=clawback,
        url=url,
        metadata_hash=metadata_hash,
    )

    logger.info(f"Creating asset {name} ({unit_name}) from {creator.address[:8]}...")
    tx_id = await sign_and_send(client, txn, creator)
    result = await client.wait_for_confirmation(tx_id, timeout)

    if result.asset_index is None:
        raise NetworkError(
            "Asset creation confirmed but no asset index returned",
            details={"tx_id": tx_id},
        )
    logger.info(f"Asset created — Asset ID: {result.asset_index}")
    return result.asset_index


async def opt_in(client: AlgorandClient, account: Account, asset_id: int) -> str:
    """Opt `account` into an asset. Returns the transaction ID."""
    validate_id(asset_id, "asset_id")
    sp = await fetch_params(client)
    txn = transaction.AssetTransferTxn(
        sender=account.address,
        sp=sp,
        receiver=account.address,  # self-transfer = opt-in
        amt=0,
        index=asset_id,
    )
    tx_id = await sign_and_send(client, txn, account)
    logger.info(f"Opt-in to Asset {asset_id} for {account.address[:8]}... TXID: {tx_id}")
    return tx_id


async def transfer_asset(
    client: AlgorandClient,
    asset_id: int,
    sender: Account,
    receiver: str,
    amount: int,
) -> str:
    """Transfer `amount` base units; the receiver must have opted in."""
    validate_id(asset_id, "asset_id")
    validate_algorand_address(receiver, "receiver")
    validate_amount(amount)
    sp = await fetch_params(client)
    txn = transaction.AssetTransferTxn(
        sender=sender.address,
        sp=sp,
        receiver=receiver,
        amt=amount,
        index=asset_id,
    )
    tx_id = await sign_and_send(client, txn, sender)
    logger.info(f"Transferring Asset {asset_id}: {sender.address[:8]}→{receiver[:8]}... TXID: {tx_id}")
    return tx_id


async def asset_holdings(client: AlgorandClient, address: str) -> List[AssetHolding]:
    validate_algorand_address(address)
    info = await client.account_info(address)
    return info.assets


async def close_out_asset(client: AlgorandClient, asset_id: int, account: Account, to: str) -> str:
    """Opt out of an asset, sending any remaining balance to `to`."""
    validate_id(asset_id, "asset_id")
    validate_algorand_address(to, "to")
    sp = await fetch_params(client)
    txn = transaction.AssetTransferTxn(
        sender=account.address,
        sp=sp,
        receiver=to,
        amt=0,
        index=asset_id,
        close_assets_to=to,
    )
    return await sign_and_send(client, txn, account)


async def freeze_asset(
    client: AlgorandClient,
    asset_id: int,
    account: Account,
    target: str,
    frozen: bool,
) -> str:
    """Freeze or unfreeze `target`'s holding; `account` is the freeze authority."""
    validate_id(asset_id, "asset_id")
    validate_algorand_address(target, "target")
    sp = await fetch_params(client)
    txn = transaction.AssetFreezeTxn(
        sender=account.address,
        sp=sp,
        index=asset_id,
        target=target,
        new_freeze_state=frozen,
    )
    return await sign_and_send(client, txn, account)


async def configure_asset(
    client: AlgorandClient,
    asset_id: int,
    account: Account,
    *,
    manager: Optional[str] = None,
    reserve: Optional[str] = None,
    freeze: Optional[str] = None,
    clawback: Optional[str] = None,
) -> str:
    """Replace the asset's role addresses. An omitted address is cleared."""
    validate_id(asset_id, "asset_id")
    sp = await fetch_params(client)
    txn = transaction.AssetUpdateTxn(
        sender=account.address,
        sp=sp,
        index=asset_id,
        manager=manager,
        reserve=reserve,
        freeze=freeze,
        clawback=clawback,
    )
    return await sign_and_send(client, txn, account)


async def destroy_asset(client: AlgorandClient, asset_id: int, account: Account) -> str:
    """Destroy an asset. The manager must hold every unit."""
    validate_id(asset_id, "asset_id")
    sp = await fetch_params(client)
    txn = transaction.AssetDestroyTxn(sender=account.address, sp=sp, index=asset_id)
    return await sign_and_send(client, txn, account)


async def clawback_asset(
    client: AlgorandClient,
    asset_id: int,
    account: Account,
    target: str,
    to: str,
    amount: int,
) -> str:
    """Move `amount` units from `target` to `to`; `account` is the clawback authority."""
    validate_id(asset_id, "asset_id")
    validate_algorand_address(target, "target")
    validate_algorand_address(to, "to")
    validate_amount(amount)
    sp = await fetch_params(client)
    txn = transaction.AssetTransferTxn(
        sender=account.address,     # clawback authority
        sp=sp,
        receiver=to,
        amt=amount,
        index=asset_id,
        revocation_target=target,   # revoke from target
    )
    return await sign_and_send(client, txn, account)
