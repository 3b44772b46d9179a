"""
Signing account — an address and its ed25519 private key.

Key derivation and mnemonic encoding are done by algosdk.
"""
import logging
from dataclasses import dataclass, field

from algosdk import account, error, mnemonic

from algokit_client.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    """An Algorand account able to sign transactions."""
    address: str
    private_key: str = field(repr=False)

    @classmethod
    def generate(cls) -> "Account":
        """Create a new random account."""
        private_key, address = account.generate_account()
        logger.debug(f"Generated account: {address[:8]}...")
        return cls(address=address, private_key=private_key)

    @classmethod
    def from_mnemonic(cls, mnemonic_phrase: str) -> "Account":
        """
        Recover an account from a 25-word mnemonic.

        Raises:
            ValidationError: the phrase has the wrong length, an unknown
                word or a bad checksum.
        """
        try:
            private_key = mnemonic.to_private_key(mnemonic_phrase)
        except (error.WrongMnemonicLengthError, error.WrongChecksumError, KeyError, ValueError) as e:
            raise ValidationError(f"Invalid mnemonic: {type(e).__name__}", field="mnemonic") from e
        address = account.address_from_private_key(private_key)
        logger.debug(f"Derived account: {address[:8]}...")
        return cls(address=address, private_key=private_key)

    @property
    def mnemonic(self) -> str:
        return mnemonic.from_private_key(self.private_key)
