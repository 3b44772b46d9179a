"""
Domain enums.
"""

from enum import Enum


class IntentKind(str, Enum):
    PAYMENT = "pay"
    ASSET_TRANSFER = "axfer"
    ASSET_OPT_IN = "axfer-optin"
    APPLICATION_CALL = "appl"
    RAW = "raw"


class Network(str, Enum):
    LOCALNET = "localnet"
    TESTNET = "testnet"
    MAINNET = "mainnet"
