import logging
from dataclasses import asdict, dataclass
from typing import Protocol

from . import guards
from .events import Deposit, Withdrawal
from .identity import ZERO_IDENTITY, normalize_identity

UINT256_MAX = 2 ** 256 - 1

logger = logging.getLogger(__name__)


def check_uint256(value: int, field: str = "value") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer, got {type(value).__name__}")
    if not (0 <= value <= UINT256_MAX):
        raise ValueError(f"{field} out of uint256 range: {value}")
    return value


@dataclass
class WalletState:
    """Persisted wallet record; the zero owner means uninitialized"""
    owner: str = ZERO_IDENTITY
    unlock_time: int = 0

    def __post_init__(self):
        self.owner = normalize_identity(self.owner)
        check_uint256(self.unlock_time, "unlock_time")

    @property
    def is_initialized(self) -> bool:
        return self.owner != ZERO_IDENTITY

    def to_dict(self) -> dict:
        """Serialize state to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'WalletState':
        """Deserialize state from dictionary"""
        return cls(owner=data['owner'], unlock_time=int(data['unlock_time']))


class WalletStorage(Protocol):
    """Persistence collaborator holding the single wallet record"""

    def load(self) -> WalletState: ...

    def save(self, state: WalletState) -> None: ...


class HostContext(Protocol):
    """Ambient capabilities supplied by the ledger for one call"""

    caller: str
    value: int
    timestamp: int

    def self_balance(self) -> int: ...

    def transfer(self, to: str, amount: int) -> None: ...

    def emit(self, event) -> None: ...


class TimelockWallet:
    """
    Time-locked custody of a single pool for one owner.

    State is read from storage at the start of every operation and written
    back only after all checks pass. Atomicity across storage, ledger and
    emitted events is the host's responsibility.
    """

    def __init__(self, storage: WalletStorage, context: HostContext):
        self.storage = storage
        self.context = context

    def init(self, unlock_time: int) -> None:
        """One-time initialiser: caller becomes owner"""
        check_uint256(unlock_time, "unlock_time")
        state = self.storage.load()
        guards.require_uninitialized(state)

        state.owner = normalize_identity(self.context.caller)
        state.unlock_time = unlock_time
        self.storage.save(state)
        logger.debug("Initialized wallet owner=%s unlock_time=%d", state.owner, unlock_time)

    def deposit(self) -> None:
        """Record value attached to the call; any caller may deposit"""
        state = self.storage.load()
        guards.require_initialized(state)

        self.context.emit(Deposit(sender=normalize_identity(self.context.caller),
                                  amount=self.context.value))

    def withdraw(self, to: str) -> None:
        """Send the whole pool to `to` once the lock has expired"""
        state = self.storage.load()
        guards.require_initialized(state)
        guards.require_owner(state, self.context.caller)
        guards.require_unlocked(state, self.context.timestamp)
        to = normalize_identity(to)

        # Balance is only queried once every other check has passed
        balance = self.context.self_balance()
        guards.require_balance(balance)

        self.context.transfer(to, balance)
        self.context.emit(Withdrawal(to=to, amount=balance))
        logger.debug("Withdrew %d to %s", balance, to)

    def extend_lock(self, new_unlock: int) -> None:
        """Push the unlock time strictly later"""
        check_uint256(new_unlock, "new_unlock")
        state = self.storage.load()
        guards.require_initialized(state)
        guards.require_owner(state, self.context.caller)
        guards.require_later_unlock(state, new_unlock)

        state.unlock_time = new_unlock
        self.storage.save(state)

    def owner(self) -> str:
        return self.storage.load().owner

    def unlock_time(self) -> int:
        return self.storage.load().unlock_time

    def lock_status(self) -> guards.LockStatus:
        return guards.lock_status(self.storage.load(), self.context.timestamp)
