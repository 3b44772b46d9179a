"""
MicroAlgo convenience conversions.
"""
from algosdk import util


def algos(amount: float) -> int:
    """Convert Algos to microAlgos, e.g. algos(1.5) == 1_500_000."""
    return util.algos_to_microalgos(amount)


def micro_algos(amount: int) -> int:
    return int(amount)


def to_algos(micro: int) -> float:
    """Convert microAlgos back to Algos for display."""
    return util.microalgos_to_algos(micro)
