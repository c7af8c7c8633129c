"""
Timelock Wallet - single-owner custody released after an unlock time
Ledger-hosted state machine with a local Python host
"""

from .wallet import TimelockWallet, WalletState
from .errors import ErrorKind, WalletError
from .events import Deposit, Withdrawal
from .guards import LockStatus
from .identity import AccountKey, ZERO_IDENTITY

__version__ = "0.1.0"
__all__ = [
    "TimelockWallet",
    "WalletState",
    "ErrorKind",
    "WalletError",
    "Deposit",
    "Withdrawal",
    "LockStatus",
    "AccountKey",
    "ZERO_IDENTITY"
]
