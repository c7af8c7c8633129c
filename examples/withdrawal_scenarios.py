#!/usr/bin/env python3
"""
Example: Previewing and executing withdrawal scenarios
"""

from timelock_wallet.guards import check_withdrawal
from timelock_wallet.host import ContractHost, InMemoryLedger
from timelock_wallet.identity import AccountKey


def main():
    print("=== Testing Withdrawal Scenarios ===")
    print()

    # Setup wallet
    print("🏗️  Setting up test wallet...")

    keys = {name: AccountKey() for name in ["Alice", "Bob", "Carol"]}
    alice, bob, carol = (keys[n].address for n in ["Alice", "Bob", "Carol"])

    ledger = InMemoryLedger(timestamp=1_000)
    ledger.fund(bob, 10_000)
    host = ContractHost(ledger)
    host.call(alice, "init", 1_500)

    print(f"   Owner: {alice}")
    print(f"   Unlock time: {host.state().unlock_time}")
    print()

    scenarios = [
        {'name': 'Owner before unlock, empty pool', 'caller': alice, 'time': 1_200, 'deposit': 0,
         'should_pass': False},
        {'name': 'Stranger after unlock', 'caller': bob, 'time': 1_600, 'deposit': 2_500,
         'should_pass': False},
        {'name': 'Owner after unlock', 'caller': alice, 'time': 1_700, 'deposit': 0,
         'should_pass': True},
        {'name': 'Owner after pool drained', 'caller': alice, 'time': 1_800, 'deposit': 0,
         'should_pass': False},
    ]

    for i, scenario in enumerate(scenarios, 1):
        print(f"📝 Test {i}: {scenario['name']}")
        ledger.set_time(scenario['time'])

        if scenario['deposit']:
            host.call(bob, "deposit", value=scenario['deposit'])
            print(f"   Bob deposited {scenario['deposit']:,}")

        # Preview first, then execute
        allowed, reason = check_withdrawal(host.state(), scenario['caller'], ledger.now(), host.balance())
        print(f"   Preview: {reason}")

        result = host.call(scenario['caller'], "withdraw", carol)
        outcome = "✅ PASSED" if result.success else f"❌ FAILED ({result.revert_reason})"
        print(f"   Result: {outcome}")

        if result.success != scenario['should_pass'] or result.success != allowed:
            print("   ⚠️  Unexpected outcome!")

        print(f"   Pool: {host.balance():,}  Carol: {ledger.balance_of(carol):,}")
        print()


if __name__ == "__main__":
    main()
