"""
Domain constants shared by services and the composer.
"""

# Rounds added to firstValid to form lastValid
DEFAULT_VALIDITY_WINDOW = 1000

# Rounds to wait for confirmation before giving up
DEFAULT_CONFIRMATION_ROUNDS = 10

# Protocol minimum fee in microAlgos
MIN_TXN_FEE = 1000

# Consensus limit on atomic group members
MAX_GROUP_SIZE = 16
