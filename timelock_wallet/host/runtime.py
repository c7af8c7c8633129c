"""
Contract host - dispatches calls to the wallet inside all-or-nothing transactions
"""

import hashlib
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, List, Optional

from . import abi
from ..errors import AbiError, ErrorKind, HostError, NonPayable, WalletError
from ..guards import LockStatus, lock_status
from ..identity import normalize_identity
from ..wallet import TimelockWallet, WalletState
from .ledger import InMemoryLedger
from .storage import MemoryStorage

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_ADDRESS = "0x" + hashlib.sha3_256(b"TIMELOCK_WALLET_V1").digest()[-20:].hex()


@dataclass
class CallResult:
    """Outcome of a structured call"""
    method: str
    success: bool
    value: Any = None
    error: Optional[ErrorKind] = None
    revert_reason: Optional[str] = None
    events: List[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {'success': self.success, 'method': self.method}
        if self.success:
            data['result'] = self.value
            data['events'] = [e.to_dict() for e in self.events]
        else:
            data['error'] = self.error.value if self.error else self.revert_reason
        return data


@dataclass
class RawCallResult:
    """Outcome of a binary call: return data on success, revert data otherwise"""
    success: bool
    return_data: bytes = b""
    logs: List[abi.LogRecord] = field(default_factory=list)
    revert_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'return_data': "0x" + self.return_data.hex(),
            'logs': [log.to_dict() for log in self.logs],
            'revert_reason': self.revert_reason
        }


class CallContext:
    """Per-call view of the ledger handed to the wallet"""

    def __init__(self, ledger: InMemoryLedger, contract: str, caller: str, value: int):
        self._ledger = ledger
        self.contract = contract
        self.caller = normalize_identity(caller)
        self.value = value
        self.timestamp = ledger.now()
        self.events = []

    def self_balance(self) -> int:
        return self._ledger.balance_of(self.contract)

    def transfer(self, to: str, amount: int) -> None:
        self._ledger.transfer(self.contract, to, amount)

    def emit(self, event) -> None:
        self.events.append(event)


class ContractHost:
    """Single deployed wallet instance on a ledger"""

    def __init__(self, ledger: InMemoryLedger = None, storage=None,
                 address: str = DEFAULT_CONTRACT_ADDRESS):
        self.ledger = ledger or InMemoryLedger()
        self.storage = storage or MemoryStorage()
        self.address = normalize_identity(address)
        self._lock = threading.RLock()

    @contextmanager
    def locked(self):
        """Hold the call lock so ledger and storage cannot change underneath"""
        with self._lock:
            yield self

    @contextmanager
    def transaction(self):
        """Snapshot ledger and storage; restore both if the body raises"""
        ledger_snapshot = self.ledger.snapshot()
        storage_snapshot = self.storage.snapshot()
        try:
            yield
        except BaseException:
            self.ledger.restore(ledger_snapshot)
            self.storage.restore(storage_snapshot)
            raise

    def call(self, caller: str, method: str, *args, value: int = 0) -> CallResult:
        """Execute one entry point; wallet and host failures become failed results"""
        with self._lock:
            try:
                with self.transaction():
                    result, events = self._execute(caller, method, args, value)
            except WalletError as e:
                logger.info("Call %s by %s reverted: %s", method, caller, e.kind.value)
                return CallResult(method, False, error=e.kind, revert_reason=e.kind.value)
            except (HostError, ValueError) as e:
                logger.info("Call %s by %s failed: %s", method, caller, e)
                return CallResult(method, False, revert_reason=str(e))

        logger.debug("Call %s by %s committed with %d event(s)", method, caller, len(events))
        return CallResult(method, True, value=result, events=events)

    def _execute(self, caller: str, method: str, args: tuple, value: int):
        spec = abi.get_method(method)

        if len(args) != len(spec.arg_types):
            raise AbiError(f"{spec.signature} takes {len(spec.arg_types)} argument(s), got {len(args)}")
        if value < 0:
            raise ValueError("Attached value cannot be negative")
        if value and not spec.payable:
            raise NonPayable(f"{spec.name} does not accept value")

        context = CallContext(self.ledger, self.address, caller, value)

        # Attached value reaches the pool before the handler runs
        if value:
            self.ledger.transfer(context.caller, self.address, value)

        wallet = TimelockWallet(self.storage, context)
        result = getattr(wallet, spec.name)(*args)

        self.ledger.append_logs([abi.encode_event(self.address, e) for e in context.events])
        return result, list(context.events)

    def call_raw(self, caller: str, calldata: bytes, value: int = 0) -> RawCallResult:
        """Decode call data, execute, and encode the outcome"""
        try:
            spec, args = abi.decode_call(calldata)
        except (AbiError, HostError) as e:
            logger.info("Rejected call data from %s: %s", caller, e)
            return RawCallResult(False, revert_reason=str(e))

        result = self.call(caller, spec.name, *args, value=value)

        if result.success:
            logs = [abi.encode_event(self.address, e) for e in result.events]
            return RawCallResult(True, abi.encode_return(spec, result.value), logs)

        if result.error is not None:
            return RawCallResult(False, abi.encode_error(result.error), revert_reason=result.revert_reason)

        return RawCallResult(False, revert_reason=result.revert_reason)

    # Ledger administration, under the same lock as calls

    def fund(self, account: str, amount: int) -> int:
        with self._lock:
            return self.ledger.fund(account, amount)

    def advance_time(self, seconds: int) -> int:
        with self._lock:
            return self.ledger.advance_time(seconds)

    # Read-only views used by the web interface and demos

    def state(self) -> WalletState:
        with self._lock:
            return self.storage.load()

    def balance(self) -> int:
        return self.balance_of(self.address)

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self.ledger.balance_of(account)

    def now(self) -> int:
        with self._lock:
            return self.ledger.now()

    def lock_status(self) -> LockStatus:
        with self._lock:
            return lock_status(self.storage.load(), self.ledger.now())

    def events(self) -> List[Any]:
        with self._lock:
            return [abi.decode_event(r) for r in self.ledger.get_logs(self.address)]
