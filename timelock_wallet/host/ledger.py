"""
In-memory ledger standing in for the chain that hosts the wallet
"""

import logging
import time
from typing import Dict, List, Optional, Set

from ..errors import InsufficientFunds, TransferFailed
from ..identity import normalize_identity
from .abi import LogRecord

logger = logging.getLogger(__name__)


class InMemoryLedger:
    """Account balances, block clock and append-only log"""

    def __init__(self, timestamp: Optional[int] = None):
        self.timestamp = int(time.time()) if timestamp is None else timestamp
        self._balances: Dict[str, int] = {}
        self._logs: List[LogRecord] = []
        self._rejecting: Set[str] = set()

    # Clock

    def now(self) -> int:
        return self.timestamp

    def set_time(self, timestamp: int) -> None:
        if timestamp < self.timestamp:
            raise ValueError(f"Ledger time cannot go backwards: {timestamp} < {self.timestamp}")
        self.timestamp = timestamp

    def advance_time(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("Cannot advance by a negative amount")
        self.timestamp += seconds
        return self.timestamp

    # Balances

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_identity(account), 0)

    def fund(self, account: str, amount: int) -> int:
        """Faucet: mint value into an account"""
        if amount < 0:
            raise ValueError("Cannot fund a negative amount")
        account = normalize_identity(account)
        self._balances[account] = self.balance_of(account) + amount
        logger.debug("Funded %s with %d", account, amount)
        return self._balances[account]

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        sender = normalize_identity(sender)
        recipient = normalize_identity(recipient)

        if amount < 0:
            raise TransferFailed("Negative transfer amount")
        if recipient in self._rejecting:
            raise TransferFailed(f"Recipient {recipient} rejected the transfer")

        sender_balance = self.balance_of(sender)
        if sender_balance < amount:
            raise InsufficientFunds(f"{sender} has {sender_balance}, needs {amount}")

        self._balances[sender] = sender_balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def reject_transfers_to(self, account: str, rejecting: bool = True) -> None:
        """Make an account refuse incoming value, as a reverting receiver would"""
        account = normalize_identity(account)
        if rejecting:
            self._rejecting.add(account)
        else:
            self._rejecting.discard(account)

    # Logs

    def append_logs(self, records: List[LogRecord]) -> None:
        self._logs.extend(records)

    def get_logs(self, address: Optional[str] = None) -> List[LogRecord]:
        if address is None:
            return self._logs.copy()
        address = normalize_identity(address)
        return [r for r in self._logs if r.address == address]

    # Transactions

    def snapshot(self) -> dict:
        return {
            'balances': dict(self._balances),
            'log_length': len(self._logs),
            'timestamp': self.timestamp
        }

    def restore(self, snapshot: dict) -> None:
        self._balances = dict(snapshot['balances'])
        del self._logs[snapshot['log_length']:]
        self.timestamp = snapshot['timestamp']
