"""
Account service — key generation, mnemonic recovery and balance lookups.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from algokit_client.domain.account import Account
from algokit_client.models import AccountInformation
from algokit_client.utils.validators import validate_algorand_address

if TYPE_CHECKING:
    from algokit_client.algorand_client import AlgorandClient


def generate_account() -> Account:
    return Account.generate()


def account_from_mnemonic(mnemonic_phrase: str) -> Account:
    """
    Derive private key and address from a 25-word mnemonic.

    Raises:
        ValidationError: the mnemonic is malformed
    """
    return Account.from_mnemonic(mnemonic_phrase)


async def account_info(client: AlgorandClient, address: str) -> AccountInformation:
    validate_algorand_address(address)
    return await client.account_info(address)


async def balance(client: AlgorandClient, address: str) -> int:
    """Account balance in microAlgos."""
    info = await account_info(client, address)
    return info.amount
