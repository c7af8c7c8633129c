"""
Local contract host - ledger, storage and binary codec around the wallet
"""

from .ledger import InMemoryLedger
from .runtime import CallContext, CallResult, ContractHost, RawCallResult
from .storage import JsonFileStorage, MemoryStorage

__all__ = [
    "InMemoryLedger",
    "CallContext",
    "CallResult",
    "ContractHost",
    "RawCallResult",
    "JsonFileStorage",
    "MemoryStorage"
]
