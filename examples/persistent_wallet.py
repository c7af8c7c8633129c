#!/usr/bin/env python3
"""
Example: Wallet state persisted to disk across host restarts
"""

import os
import tempfile

from timelock_wallet.host import ContractHost, InMemoryLedger, JsonFileStorage
from timelock_wallet.identity import AccountKey


def main():
    print("=== Persistent Timelock Wallet ===")
    print()

    state_file = os.path.join(tempfile.mkdtemp(), "wallet.json")
    owner = AccountKey()
    ledger = InMemoryLedger(timestamp=100)

    print(f"💾 State file: {state_file}")
    print()

    # First host process initializes the wallet
    host = ContractHost(ledger, JsonFileStorage(state_file))
    result = host.call(owner.address, "init", 3_600)
    print(f"🏗️  init(3600): {'OK' if result.success else result.revert_reason}")

    with open(state_file, 'r', encoding='utf-8') as f:
        print(f"   On disk: {f.read().strip()}")
    print()

    # A fresh host reads the same record
    restarted = ContractHost(ledger, JsonFileStorage(state_file))
    print("🔄 Restarted host")
    print(f"   Owner matches: {restarted.state().owner == owner.address}")
    print(f"   Unlock time: {restarted.state().unlock_time}")

    result = restarted.call(owner.address, "init", 10)
    print(f"   Re-init attempt: {result.revert_reason}")

    result = restarted.call(owner.address, "extend_lock", 7_200)
    print(f"   extend_lock(7200): {'OK' if result.success else result.revert_reason}")
    print(f"   Unlock time: {JsonFileStorage(state_file).load().unlock_time}")


if __name__ == "__main__":
    main()
