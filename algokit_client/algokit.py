"""
High-level Algorand client.

AlgoKit gathers the convenience operations (payments, assets, applications,
accounts, key registration) behind one object and starts atomic groups:

    algokit = AlgoKit(network="testnet")
    account = algokit.account_from_mnemonic("abandon abandon ...")
    result = await algokit.send_and_wait(account, receiver, algos(1.5), note="Hello Algorand!")

Each operation fetches fresh suggested params, builds, signs and submits in
one call. The underlying AlgorandClient (and its algod client) stay
reachable through `.client` for anything not covered here.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from algosdk import transaction

from algokit_client.algorand_client import AlgorandClient
from algokit_client.composer import AtomicGroupComposer
from algokit_client.config import Settings
from algokit_client.domain.account import Account
from algokit_client.domain.enums import Network
from algokit_client.exceptions import ValidationError
from algokit_client.models import AccountInformation, AssetHolding, NodeStatus, PendingTransaction
from algokit_client.services import (
    account_service,
    application_service,
    asset_service,
    keyreg_service,
    payment_service,
)
from algokit_client.services.transaction_service import sign_and_send


class AlgoKit:
    """Convenience facade over an AlgorandClient."""

    def __init__(
        self,
        client: Optional[AlgorandClient] = None,
        *,
        network: Network | str | None = None,
        config: Optional[Settings] = None,
    ):
        if client is None:
            if config is None and network is not None:
                config = Settings.for_network(network)
            client = AlgorandClient(config)
        self.client = client

    # ── Atomic groups ───────────────────────────────────────────────

    def atomic(self, validity_window: Optional[int] = None) -> AtomicGroupComposer:
        """Start a new atomic transaction composer."""
        return AtomicGroupComposer(self.client, validity_window=validity_window)

    async def submit_group(
        self,
        transactions: Sequence[transaction.Transaction],
        signed_by: Sequence[Account],
    ) -> str:
        """Group, sign (one account per transaction, in order) and submit."""
        if len(transactions) != len(signed_by):
            raise ValidationError(
                f"signer count mismatch: {len(signed_by)} signers for {len(transactions)} transactions",
                field="signed_by",
            )
        composer = self.atomic()
        for txn in transactions:
            await composer.append_raw(txn)
        group = await composer.build()
        return await group.signed_by(signed_by).submit()

    # ── Transactions ────────────────────────────────────────────────

    async def transaction_params(self) -> transaction.SuggestedParams:
        return await self.client.suggested_params()

    async def submit(self, txn: transaction.Transaction, signed_by: Account) -> str:
        """Sign a single transaction and submit it."""
        return await sign_and_send(self.client, txn, signed_by)

    async def wait_for_confirmation(self, tx_id: str, timeout: Optional[int] = None) -> PendingTransaction:
        return await self.client.wait_for_confirmation(tx_id, timeout)

    async def pending_transaction(self, tx_id: str) -> PendingTransaction:
        return await self.client.pending_transaction(tx_id)

    # ── Payments ────────────────────────────────────────────────────

    async def send(self, sender: Account, receiver: str, amount: int, note: str | bytes | None = None) -> str:
        return await payment_service.send_payment(
            self.client, sender=sender, receiver=receiver, amount=amount, note=note
        )

    async def send_and_wait(
        self,
        sender: Account,
        receiver: str,
        amount: int,
        note: str | bytes | None = None,
        timeout: Optional[int] = None,
    ) -> PendingTransaction:
        return await payment_service.send_payment_and_wait(
            self.client, sender=sender, receiver=receiver, amount=amount, note=note, timeout=timeout
        )

    # ── Assets ──────────────────────────────────────────────────────

    async def create_asset(self, creator: Account, **kwargs) -> int:
        """See asset_service.create_asset for the accepted keyword arguments."""
        return await asset_service.create_asset(self.client, creator, **kwargs)

    async def opt_in(self, account: Account, asset_id: int) -> str:
        return await asset_service.opt_in(self.client, account, asset_id)

    async def transfer_asset(self, asset_id: int, sender: Account, receiver: str, amount: int) -> str:
        return await asset_service.transfer_asset(self.client, asset_id, sender, receiver, amount)

    async def asset_holdings(self, address: str) -> List[AssetHolding]:
        return await asset_service.asset_holdings(self.client, address)

    async def close_out_asset(self, asset_id: int, account: Account, to: str) -> str:
        return await asset_service.close_out_asset(self.client, asset_id, account, to)

    async def freeze_asset(self, asset_id: int, account: Account, target: str, frozen: bool) -> str:
        return await asset_service.freeze_asset(self.client, asset_id, account, target, frozen)

    async def configure_asset(self, asset_id: int, account: Account, **addresses: Optional[str]) -> str:
        return await asset_service.configure_asset(self.client, asset_id, account, **addresses)

    async def destroy_asset(self, asset_id: int, account: Account) -> str:
        return await asset_service.destroy_asset(self.client, asset_id, account)

    async def clawback_asset(self, asset_id: int, account: Account, target: str, to: str, amount: int) -> str:
        return await asset_service.clawback_asset(self.client, asset_id, account, target, to, amount)

    # ── Applications ────────────────────────────────────────────────

    async def create_application(self, creator: Account, **kwargs) -> int:
        return await application_service.create_application(self.client, creator, **kwargs)

    async def call_application(
        self,
        app_id: int,
        caller: Account,
        arguments: Optional[Iterable[bytes]] = None,
        accounts: Optional[List[str]] = None,
        foreign_apps: Optional[List[int]] = None,
        foreign_assets: Optional[List[int]] = None,
        boxes: Optional[List[Tuple[int, bytes]]] = None,
    ) -> str:
        return await application_service.call_application(
            self.client,
            app_id,
            caller,
            arguments=arguments,
            accounts=accounts,
            foreign_apps=foreign_apps,
            foreign_assets=foreign_assets,
            boxes=boxes,
        )

    async def opt_in_to_application(self, app_id: int, account: Account, arguments: Optional[Iterable[bytes]] = None) -> str:
        return await application_service.opt_in_to_application(self.client, app_id, account, arguments)

    async def close_out_application(self, app_id: int, account: Account, arguments: Optional[Iterable[bytes]] = None) -> str:
        return await application_service.close_out_application(self.client, app_id, account, arguments)

    async def update_application(self, app_id: int, account: Account, **kwargs) -> str:
        return await application_service.update_application(self.client, app_id, account, **kwargs)

    async def delete_application(self, app_id: int, account: Account, arguments: Optional[Iterable[bytes]] = None) -> str:
        return await application_service.delete_application(self.client, app_id, account, arguments)

    # ── Accounts & network ──────────────────────────────────────────

    def generate_account(self) -> Account:
        return account_service.generate_account()

    def account_from_mnemonic(self, mnemonic_phrase: str) -> Account:
        return account_service.account_from_mnemonic(mnemonic_phrase)

    async def balance(self, address: str) -> int:
        return await account_service.balance(self.client, address)

    async def account_info(self, address: str) -> AccountInformation:
        return await account_service.account_info(self.client, address)

    async def status(self) -> NodeStatus:
        return await self.client.status()

    async def is_healthy(self) -> bool:
        return await self.client.is_healthy()

    # ── Key registration ────────────────────────────────────────────

    async def go_online(self, account: Account, **keys) -> str:
        return await keyreg_service.go_online(self.client, account, **keys)

    async def go_offline(self, account: Account) -> str:
        return await keyreg_service.go_offline(self.client, account)
