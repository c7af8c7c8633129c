"""
Error kinds raised by the timelock wallet and its host
"""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of wallet failure tags"""
    NOT_OWNER = "NotOwner"
    FUNDS_LOCKED = "FundsLocked"
    ZERO_BALANCE = "ZeroBalance"
    ALREADY_INITIALIZED = "AlreadyInitialized"
    NOT_INITIALIZED = "NotInitialized"

    @property
    def signature(self) -> str:
        return f"{self.value}()"


class WalletError(Exception):
    """Wallet precondition violated; carries only its tag"""

    def __init__(self, kind: ErrorKind):
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other):
        return isinstance(other, WalletError) and other.kind == self.kind

    def __hash__(self):
        return hash(self.kind)


class HostError(Exception):
    """Failure raised by the hosting ledger rather than the wallet"""


class TransferFailed(HostError):
    """Ledger refused a value transfer"""


class InsufficientFunds(HostError):
    """Sender account cannot cover the requested amount"""


class NonPayable(HostError):
    """Value was attached to a method that does not accept it"""


class UnknownMethod(HostError):
    """No entry point matches the requested method"""


class AbiError(ValueError):
    """Malformed call data, return data or revert data"""
