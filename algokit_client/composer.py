"""
Atomic transaction composer.

Builds an all-or-nothing transaction group in three one-way stages:

    composer = algokit.atomic()
    await composer.append_payment(alice.address, bob.address, algos(5))
    await composer.append_asset_transfer(asset_id, bob.address, alice.address, 1000)
    group = await composer.build()                 # Group (immutable)
    signed = group.signed_by([alice, bob])         # SignedGroup (immutable)
    tx_id = await signed.submit()

Appends and build() on one composer are serialised by an asyncio.Lock held
across the parameter fetch, so intents keep the order in which the calls
were made. That order is the group index and therefore the signer index.
"""
from __future__ import annotations

import asyncio
import base64
import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Sequence, Tuple, Union

from algosdk import error as algosdk_error
from algosdk import transaction

from algokit_client.domain.account import Account
from algokit_client.domain.constants import MAX_GROUP_SIZE
from algokit_client.domain.intents import (
    ApplicationCallIntent,
    AssetOptInIntent,
    AssetTransferIntent,
    PaymentIntent,
    RawIntent,
    TransactionIntent,
)
from algokit_client.exceptions import ValidationError
from algokit_client.models import PendingTransaction
from algokit_client.services.transaction_service import encode_note, fetch_params, sign_transaction
from algokit_client.utils.validators import validate_algorand_address, validate_amount, validate_id

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient

logger = logging.getLogger(__name__)

# Position -> signer; positions missing from the mapping are submitted unsigned
SignerMap = Mapping[int, Account]
Signers = Union[Sequence[Account], SignerMap]


class AtomicGroupComposer:
    """Accumulates transaction intents destined for one atomic group."""

    def __init__(self, client: AlgorandClient, validity_window: Optional[int] = None):
        self._client = client
        self._window = validity_window
        self._intents: list[TransactionIntent] = []
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._intents)

    @property
    def intents(self) -> Tuple[TransactionIntent, ...]:
        """Snapshot of the appended intents, in group order."""
        return tuple(self._intents)

    async def _append(self, make_intent) -> AtomicGroupComposer:
        async with self._lock:
            params = await fetch_params(self._client, self._window)
            intent = make_intent(params)
            self._intents.append(intent)
        logger.debug(f"Appended {intent.kind.value} intent at index {len(self._intents) - 1}")
        return self

    async def append_payment(
        self,
        sender: str,
        receiver: str,
        amount: int,
        note: str | bytes | None = None,
    ) -> AtomicGroupComposer:
        """Add a payment of `amount` microAlgos."""
        validate_algorand_address(sender, "sender")
        validate_algorand_address(receiver, "receiver")
        validate_amount(amount)
        note_bytes = encode_note(note)
        return await self._append(
            lambda sp: PaymentIntent(sender=sender, receiver=receiver, amount=amount, params=sp, note=note_bytes)
        )

    async def append_asset_transfer(
        self,
        asset_id: int,
        sender: str,
        receiver: str,
        amount: int,
    ) -> AtomicGroupComposer:
        """Add an asset transfer of `amount` base units."""
        validate_id(asset_id, "asset_id")
        validate_algorand_address(sender, "sender")
        validate_algorand_address(receiver, "receiver")
        validate_amount(amount)
        return await self._append(
            lambda sp: AssetTransferIntent(
                asset_id=asset_id, sender=sender, receiver=receiver, amount=amount, params=sp
            )
        )

    async def append_asset_opt_in(self, asset_id: int, account: str) -> AtomicGroupComposer:
        validate_id(asset_id, "asset_id")
        validate_algorand_address(account, "account")
        return await self._append(lambda sp: AssetOptInIntent(asset_id=asset_id, account=account, params=sp))

    async def append_application_call(
        self,
        app_id: int,
        sender: str,
        arguments: Optional[Iterable[bytes]] = None,
    ) -> AtomicGroupComposer:
        """Add a NoOp call to application `app_id`."""
        validate_id(app_id, "app_id")
        validate_algorand_address(sender, "sender")
        args = tuple(arguments or ())
        return await self._append(
            lambda sp: ApplicationCallIntent(app_id=app_id, sender=sender, params=sp, arguments=args)
        )

    async def append_raw(self, txn: transaction.Transaction) -> AtomicGroupComposer:
        """Add a pre-built transaction as is; no parameters are fetched."""
        if not isinstance(txn, transaction.Transaction):
            raise ValidationError(f"expected an unsigned Transaction, got {type(txn).__name__}", field="txn")
        async with self._lock:
            self._intents.append(RawIntent(txn=copy.deepcopy(txn)))
        return self

    async def build(self) -> Group:
        """
        Materialise the intents into a group bound by a common group id.

        Raises:
            ValidationError: no intents, or algosdk refuses the group.
        """
        async with self._lock:
            if not self._intents:
                raise ValidationError("cannot build an empty transaction group")
            group = Group.from_intents(self._intents, self._client)
        logger.info(f"Built group {group.group_id_b64} ({group.transaction_count} txns)")
        return group


@dataclass(frozen=True, eq=False)
class Group:
    """An ordered, group-id-stamped set of transactions, ready for signing."""
    transactions: Tuple[transaction.Transaction, ...]
    group_id: bytes
    client: AlgorandClient = field(repr=False, compare=False)

    @classmethod
    def from_intents(cls, intents: Sequence[TransactionIntent], client: AlgorandClient) -> Group:
        if not intents:
            raise ValidationError("cannot build an empty transaction group")
        if len(intents) > MAX_GROUP_SIZE:
            raise ValidationError(
                f"group holds {len(intents)} transactions, the maximum is {MAX_GROUP_SIZE}"
            )

        txns = [intent.to_transaction() for intent in intents]
        try:
            group_id = transaction.calculate_group_id(txns)
        except algosdk_error.TransactionGroupSizeError as e:
            raise ValidationError(f"group rejected by algosdk: {e}") from e

        # Intents yield transactions with no group set, so the hash saw none
        for txn in txns:
            txn.group = group_id
        return cls(transactions=tuple(txns), group_id=group_id, client=client)

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    @property
    def group_id_b64(self) -> str:
        return base64.b64encode(self.group_id).decode()

    @property
    def tx_ids(self) -> Tuple[str, ...]:
        return tuple(txn.get_txid() for txn in self.transactions)

    def signed_by(self, signers: Signers) -> SignedGroup:
        """
        Sign the group.

        A sequence must hold exactly one account per transaction, in group
        order. A mapping signs only the positions it names; the others are
        submitted unsigned and it is the node that rejects them.

        Raises:
            ValidationError: signer count mismatch, or a mapping key that
                names no transaction.
        """
        count = self.transaction_count
        if isinstance(signers, Mapping):
            bad = sorted(i for i in signers if not isinstance(i, int) or not 0 <= i < count)
            if bad:
                raise ValidationError(f"signer index out of range for {count} transactions: {bad}", field="signers")
            by_index = dict(signers)
        else:
            signers = list(signers)
            if len(signers) != count:
                raise ValidationError(
                    f"signer count mismatch: {len(signers)} signers for {count} transactions",
                    field="signers",
                )
            by_index = dict(enumerate(signers))

        signed = []
        unsigned = []
        for index, txn in enumerate(self.transactions):
            account = by_index.get(index)
            if account is None:
                signed.append(transaction.SignedTransaction(txn, None))
                unsigned.append(index)
            else:
                signed.append(sign_transaction(txn, account))

        if unsigned:
            logger.warning(f"Group {self.group_id_b64}: positions {unsigned} left unsigned")
        return SignedGroup(group=self, signed_transactions=tuple(signed), unsigned_indices=tuple(unsigned))


@dataclass(frozen=True, eq=False)
class SignedGroup:
    """A signed group ready for submission."""
    group: Group
    signed_transactions: Tuple[transaction.SignedTransaction, ...]
    unsigned_indices: Tuple[int, ...] = ()

    @property
    def transaction_count(self) -> int:
        return len(self.signed_transactions)

    async def submit(self) -> str:
        """Submit the group; returns the id of its first transaction."""
        return await self.group.client.send_transaction_group(self.signed_transactions)

    async def submit_and_wait(self, timeout: Optional[int] = None) -> PendingTransaction:
        """
        Submit, then wait up to `timeout` rounds for confirmation.

        Raises:
            ConfirmationTimeoutError: not confirmed within `timeout` rounds
        """
        tx_id = await self.submit()
        return await self.group.client.wait_for_confirmation(tx_id, timeout)
