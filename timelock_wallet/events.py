"""
Notifications emitted by the timelock wallet
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Deposit:
    """Value credited to the pool by any caller"""
    sender: str  # identity (0x hex)
    amount: int

    name = "Deposit"
    signature = "Deposit(address,uint256)"

    @property
    def indexed(self) -> str:
        return self.sender

    def to_dict(self) -> dict:
        return {'event': self.name, 'from': self.sender, 'amount': self.amount}


@dataclass(frozen=True)
class Withdrawal:
    """Entire pool released to a recipient"""
    to: str  # identity (0x hex)
    amount: int

    name = "Withdrawal"
    signature = "Withdrawal(address,uint256)"

    @property
    def indexed(self) -> str:
        return self.to

    def to_dict(self) -> dict:
        return {'event': self.name, 'to': self.to, 'amount': self.amount}


EVENT_TYPES = (Deposit, Withdrawal)
