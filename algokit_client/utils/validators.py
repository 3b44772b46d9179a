"""
Input validation utilities.

Provides reusable validators for Algorand addresses and numeric inputs.
All failures raise ValidationError before any network call is made.
"""
from algosdk import encoding

from algokit_client.exceptions import ValidationError


def validate_algorand_address(address: str, field: str = "address") -> str:
    """
    Validate an Algorand address format and checksum.

    Args:
        address: Algorand wallet address string
        field: Name reported in the error

    Returns:
        The validated address (unchanged)

    Raises:
        ValidationError if the address is invalid
    """
    if not address:
        raise ValidationError("Algorand address is required", field=field)

    if len(address) != 58:
        raise ValidationError(
            f"Invalid Algorand address: expected 58 characters, got {len(address)}",
            field=field,
        )

    if not encoding.is_valid_address(address):
        raise ValidationError(
            f"Invalid Algorand address checksum: {address[:12]}...",
            field=field,
        )

    return address


def validate_amount(amount: int, field: str = "amount") -> int:
    """Amounts are unsigned 64-bit integers (microAlgos or asset base units)."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"expected an integer, got {type(amount).__name__}", field=field)
    if amount < 0 or amount >= 2**64:
        raise ValidationError(f"must be between 0 and 2^64-1, got {amount}", field=field)
    return amount


def validate_id(value: int, field: str) -> int:
    """Asset and application ids are positive integers."""
    validate_amount(value, field=field)
    if value == 0:
        raise ValidationError("must be a positive id", field=field)
    return value
