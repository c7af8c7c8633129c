import unittest
from timelock_wallet import guards
from timelock_wallet.errors import ErrorKind, WalletError
from timelock_wallet.guards import LockStatus
from timelock_wallet.identity import AccountKey, ZERO_IDENTITY
from timelock_wallet.wallet import WalletState


class TestGuards(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.owner = AccountKey().address
        self.stranger = AccountKey().address
        self.state = WalletState(self.owner, 1000)
        self.fresh = WalletState()

    def assertKind(self, kind, func, *args):
        with self.assertRaises(WalletError) as cm:
            func(*args)
        self.assertEqual(cm.exception.kind, kind)

    def test_initialization_guards(self):
        guards.require_initialized(self.state)
        guards.require_uninitialized(self.fresh)

        self.assertKind(ErrorKind.NOT_INITIALIZED, guards.require_initialized, self.fresh)
        self.assertKind(ErrorKind.ALREADY_INITIALIZED, guards.require_uninitialized, self.state)

    def test_owner_guard(self):
        guards.require_owner(self.state, self.owner)
        guards.require_owner(self.state, self.owner.upper().replace("0X", "0x"))

        self.assertKind(ErrorKind.NOT_OWNER, guards.require_owner, self.state, self.stranger)
        self.assertKind(ErrorKind.NOT_OWNER, guards.require_owner, self.fresh, self.stranger)

    def test_time_guards(self):
        """Unlock is inclusive; extension must be strictly later"""
        guards.require_unlocked(self.state, 1000)
        self.assertKind(ErrorKind.FUNDS_LOCKED, guards.require_unlocked, self.state, 999)

        guards.require_later_unlock(self.state, 1001)
        self.assertKind(ErrorKind.FUNDS_LOCKED, guards.require_later_unlock, self.state, 1000)

    def test_balance_guard(self):
        guards.require_balance(1)
        self.assertKind(ErrorKind.ZERO_BALANCE, guards.require_balance, 0)

    def test_lock_status(self):
        self.assertEqual(guards.lock_status(self.fresh, 5), LockStatus.UNINITIALIZED)
        self.assertEqual(guards.lock_status(self.state, 999), LockStatus.LOCKED)
        self.assertEqual(guards.lock_status(self.state, 1000), LockStatus.UNLOCKABLE)

    def test_seconds_until_unlock(self):
        self.assertEqual(guards.seconds_until_unlock(self.state, 400), 600)
        self.assertEqual(guards.seconds_until_unlock(self.state, 4000), 0)

    def test_check_withdrawal_order(self):
        """Preview reports the first failing check, in withdraw order"""
        cases = [
            (self.fresh, self.stranger, 0, 0, "NotInitialized"),
            (self.state, self.stranger, 0, 0, "NotOwner"),
            (self.state, self.owner, 999, 0, "FundsLocked"),
            (self.state, self.owner, 1000, 0, "ZeroBalance"),
        ]
        for state, caller, now, balance, reason in cases:
            is_valid, got = guards.check_withdrawal(state, caller, now, balance)
            self.assertFalse(is_valid)
            self.assertEqual(got, reason)

        is_valid, reason = guards.check_withdrawal(self.state, self.owner, 1000, 10)
        self.assertTrue(is_valid)
        self.assertEqual(reason, "Withdrawal allowed")

    def test_error_tags(self):
        self.assertEqual(
            {k.value for k in ErrorKind},
            {"NotOwner", "FundsLocked", "ZeroBalance", "AlreadyInitialized", "NotInitialized"}
        )
        self.assertEqual(ErrorKind.NOT_OWNER.signature, "NotOwner()")
        self.assertEqual(WalletError(ErrorKind.ZERO_BALANCE), WalletError(ErrorKind.ZERO_BALANCE))
        self.assertEqual(str(WalletError(ErrorKind.FUNDS_LOCKED)), "FundsLocked")
        self.assertNotEqual(ZERO_IDENTITY, self.owner)


if __name__ == '__main__':
    unittest.main()
