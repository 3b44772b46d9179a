"""
Pydantic models for algod responses.

algod returns hyphenated JSON keys; the models expose snake_case fields and
accept either form. Unknown keys are kept (extra="allow") so callers can
still reach fields not modelled here.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AlgodBase(BaseModel):
    """Shared base — construct by Python name or node alias, keep extra keys."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ── Transaction Models ──────────────────────────────────────────────

class PendingTransaction(AlgodBase):
    """Confirmation info returned by /v2/transactions/pending/{txid}."""
    confirmed_round: Optional[int] = Field(default=None, alias="confirmed-round")
    pool_error: str = Field(default="", alias="pool-error")
    asset_index: Optional[int] = Field(default=None, alias="asset-index")
    application_index: Optional[int] = Field(default=None, alias="application-index")
    txn: dict = Field(default_factory=dict)

    @property
    def is_confirmed(self) -> bool:
        return bool(self.confirmed_round)


# ── Node Models ─────────────────────────────────────────────────────

class NodeStatus(AlgodBase):
    """Subset of /v2/status."""
    last_round: int = Field(..., alias="last-round")
    last_version: Optional[str] = Field(default=None, alias="last-version")
    time_since_last_round: Optional[int] = Field(default=None, alias="time-since-last-round")
    catchup_time: Optional[int] = Field(default=None, alias="catchup-time")


# ── Account Models ──────────────────────────────────────────────────

class AssetHolding(AlgodBase):
    asset_id: int = Field(..., alias="asset-id")
    amount: int = 0
    is_frozen: bool = Field(default=False, alias="is-frozen")


class AccountInformation(AlgodBase):
    """Subset of /v2/accounts/{address}."""
    address: str
    amount: int = Field(..., description="Balance in microAlgos")
    min_balance: Optional[int] = Field(default=None, alias="min-balance")
    status: Optional[str] = None
    assets: List[AssetHolding] = Field(default_factory=list)
