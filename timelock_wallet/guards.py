from enum import Enum
from typing import Tuple

from .errors import ErrorKind, WalletError
from .identity import ZERO_IDENTITY, normalize_identity


class LockStatus(Enum):
    UNINITIALIZED = "uninitialized"
    LOCKED = "locked"
    UNLOCKABLE = "unlockable"


def require_initialized(state: 'WalletState') -> None:
    if state.owner == ZERO_IDENTITY:
        raise WalletError(ErrorKind.NOT_INITIALIZED)


def require_uninitialized(state: 'WalletState') -> None:
    if state.owner != ZERO_IDENTITY:
        raise WalletError(ErrorKind.ALREADY_INITIALIZED)


def require_owner(state: 'WalletState', caller: str) -> None:
    if normalize_identity(caller) != state.owner:
        raise WalletError(ErrorKind.NOT_OWNER)


def require_unlocked(state: 'WalletState', now: int) -> None:
    if now < state.unlock_time:
        raise WalletError(ErrorKind.FUNDS_LOCKED)


def require_later_unlock(state: 'WalletState', new_unlock: int) -> None:
    # Rejection reuses the FundsLocked tag
    if new_unlock <= state.unlock_time:
        raise WalletError(ErrorKind.FUNDS_LOCKED)


def require_balance(balance: int) -> None:
    if balance == 0:
        raise WalletError(ErrorKind.ZERO_BALANCE)


def lock_status(state: 'WalletState', now: int) -> LockStatus:
    """Derive the lock state from current time; it is never stored"""
    if state.owner == ZERO_IDENTITY:
        return LockStatus.UNINITIALIZED
    if now < state.unlock_time:
        return LockStatus.LOCKED
    return LockStatus.UNLOCKABLE


def seconds_until_unlock(state: 'WalletState', now: int) -> int:
    return max(0, state.unlock_time - now)


def check_withdrawal(state: 'WalletState', caller: str, now: int, balance: int) -> Tuple[bool, str]:
    """
    Preview a withdrawal without touching the ledger.
    Returns (is_valid, reason) using the same check order as withdraw.
    """
    checks = (
        lambda: require_initialized(state),
        lambda: require_owner(state, caller),
        lambda: require_unlocked(state, now),
        lambda: require_balance(balance),
    )

    for check in checks:
        try:
            check()
        except WalletError as e:
            return False, e.kind.value

    return True, "Withdrawal allowed"
