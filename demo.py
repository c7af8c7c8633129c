#!/usr/bin/env python3
"""
Complete demo of the Timelock Wallet system
"""

from timelock_wallet.config import configure_logging
from timelock_wallet.host import ContractHost, InMemoryLedger
from timelock_wallet.host import abi
from timelock_wallet.identity import AccountKey


def show(result) -> None:
    if result.success:
        print(f"   ✅ {result.method}: OK")
        for event in result.events:
            print(f"   📣 Event: {event.to_dict()}")
    else:
        print(f"   ❌ {result.method}: {result.revert_reason}")


def main():
    configure_logging("WARNING")

    print("=" * 60)
    print("⏳ TIMELOCK WALLET - COMPLETE DEMO")
    print("=" * 60)
    print()

    # Step 1: Setup
    print("🔧 STEP 1: Setting up accounts")
    print("-" * 40)

    ledger = InMemoryLedger(timestamp=500)
    host = ContractHost(ledger)

    accounts = {}
    for name in ("Alice", "Bob", "Carol"):
        key = AccountKey()
        accounts[name] = key.address
        print(f"✅ {name}: {key.address}")

    ledger.fund(accounts["Bob"], 1_000)
    print(f"✅ Contract: {host.address}")
    print()

    # Step 2: Initialize
    print("🏗️  STEP 2: Alice initializes the wallet (unlock at t=1000)")
    print("-" * 40)
    show(host.call(accounts["Alice"], "init", 1000))
    print(f"   Owner: {host.state().owner}")
    print(f"   Unlock time: {host.state().unlock_time}")
    print(f"   Status: {host.lock_status().value}")
    print()

    print("Trying to initialize again as Bob")
    show(host.call(accounts["Bob"], "init", 10))
    print()

    # Step 3: Deposit
    print("💰 STEP 3: Bob deposits 50")
    print("-" * 40)
    show(host.call(accounts["Bob"], "deposit", value=50))
    print(f"   Pool balance: {host.balance()}")
    print()

    # Step 4: Locked withdrawal
    print("🔒 STEP 4: Alice withdraws to Carol at t=800")
    print("-" * 40)
    ledger.set_time(800)
    show(host.call(accounts["Alice"], "withdraw", accounts["Carol"]))
    print(f"   Pool balance: {host.balance()}")
    print()

    print("Bob tries to withdraw")
    show(host.call(accounts["Bob"], "withdraw", accounts["Bob"]))
    print()

    # Step 5: Extend the lock
    print("⏩ STEP 5: Alice extends the lock to t=2000")
    print("-" * 40)
    show(host.call(accounts["Alice"], "extend_lock", 2000))
    print(f"   Unlock time: {host.state().unlock_time}")
    print("Trying to shorten it to t=1500")
    show(host.call(accounts["Alice"], "extend_lock", 1500))
    print()

    # Step 6: Unlocked withdrawal
    print("🔓 STEP 6: Alice withdraws to Carol at t=2100")
    print("-" * 40)
    ledger.set_time(2100)
    print(f"   Status: {host.lock_status().value}")
    show(host.call(accounts["Alice"], "withdraw", accounts["Carol"]))
    print(f"   Pool balance: {host.balance()}")
    print(f"   Carol balance: {ledger.balance_of(accounts['Carol'])}")
    print()

    print("Withdrawing again at t=2200")
    ledger.set_time(2200)
    show(host.call(accounts["Alice"], "withdraw", accounts["Carol"]))
    print()

    # Step 7: Binary interface
    print("🧾 STEP 7: Binary call data")
    print("-" * 40)
    for name, spec in abi.METHODS.items():
        print(f"   {spec.signature:<22} selector 0x{spec.selector.hex()}")

    raw = host.call_raw(accounts["Bob"], abi.encode_call("owner"))
    print(f"   owner() -> {abi.decode_return(abi.METHODS['owner'], raw.return_data)}")

    raw = host.call_raw(accounts["Bob"], abi.encode_call("extend_lock", 5000))
    print(f"   extend_lock(5000) by Bob -> revert {abi.decode_error(raw.return_data).value}")
    print()

    # Summary
    print("=" * 60)
    print("📜 EVENT LOG")
    print("=" * 60)
    for event in host.events():
        print(f"   {event.to_dict()}")


if __name__ == "__main__":
    main()
