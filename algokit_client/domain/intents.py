"""
Transaction intents — what the composer accumulates before a group is built.

Each intent is frozen and carries the suggested-params snapshot fetched when
it was appended. to_transaction() materialises a new algosdk transaction on
every call, so building a group never touches the intents themselves.
"""
import copy
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple, Union

from algosdk import transaction

from algokit_client.domain.enums import IntentKind


@dataclass(frozen=True)
class PaymentIntent:
    sender: str
    receiver: str
    amount: int
    params: transaction.SuggestedParams = field(repr=False)
    note: Optional[bytes] = None

    kind: ClassVar[IntentKind] = IntentKind.PAYMENT

    def to_transaction(self) -> transaction.PaymentTxn:
        return transaction.PaymentTxn(
            sender=self.sender,
            sp=copy.copy(self.params),
            receiver=self.receiver,
            amt=self.amount,
            note=self.note,
        )


@dataclass(frozen=True)
class AssetTransferIntent:
    asset_id: int
    sender: str
    receiver: str
    amount: int
    params: transaction.SuggestedParams = field(repr=False)

    kind: ClassVar[IntentKind] = IntentKind.ASSET_TRANSFER

    def to_transaction(self) -> transaction.AssetTransferTxn:
        return transaction.AssetTransferTxn(
            sender=self.sender,
            sp=copy.copy(self.params),
            receiver=self.receiver,
            amt=self.amount,
            index=self.asset_id,
        )


@dataclass(frozen=True)
class AssetOptInIntent:
    """Zero-amount asset transfer from an account to itself."""
    asset_id: int
    account: str
    params: transaction.SuggestedParams = field(repr=False)

    kind: ClassVar[IntentKind] = IntentKind.ASSET_OPT_IN

    def to_transaction(self) -> transaction.AssetTransferTxn:
        return transaction.AssetTransferTxn(
            sender=self.account,
            sp=copy.copy(self.params),
            receiver=self.account,  # self-transfer = opt-in
            amt=0,
            index=self.asset_id,
        )


@dataclass(frozen=True)
class ApplicationCallIntent:
    """NoOp application call."""
    app_id: int
    sender: str
    params: transaction.SuggestedParams = field(repr=False)
    arguments: Tuple[bytes, ...] = ()

    kind: ClassVar[IntentKind] = IntentKind.APPLICATION_CALL

    def to_transaction(self) -> transaction.ApplicationNoOpTxn:
        return transaction.ApplicationNoOpTxn(
            sender=self.sender,
            sp=copy.copy(self.params),
            index=self.app_id,
            app_args=list(self.arguments) or None,
        )


@dataclass(frozen=True)
class RawIntent:
    """A caller-built transaction added as is (no parameter fetch)."""
    txn: transaction.Transaction

    kind: ClassVar[IntentKind] = IntentKind.RAW

    @property
    def sender(self) -> str:
        return self.txn.sender

    def to_transaction(self) -> transaction.Transaction:
        # A group id left over from an earlier grouping would feed into the new hash
        txn = copy.deepcopy(self.txn)
        txn.group = None
        return txn


TransactionIntent = Union[
    PaymentIntent,
    AssetTransferIntent,
    AssetOptInIntent,
    ApplicationCallIntent,
    RawIntent,
]
