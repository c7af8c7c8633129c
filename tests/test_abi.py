import unittest
from timelock_wallet.errors import AbiError, ErrorKind, UnknownMethod
from timelock_wallet.events import Deposit, Withdrawal
from timelock_wallet.host import abi
from timelock_wallet.identity import AccountKey


class TestAbiCodec(unittest.TestCase):

    def setUp(self):
        self.address = AccountKey().address

    def test_method_table(self):
        """Six entry points; only deposit is payable"""
        self.assertEqual(
            sorted(abi.METHODS),
            ["deposit", "extend_lock", "init", "owner", "unlock_time", "withdraw"]
        )
        self.assertEqual(abi.METHODS["withdraw"].signature, "withdraw(address)")
        self.assertEqual(abi.METHODS["deposit"].signature, "deposit()")
        self.assertEqual([n for n, s in abi.METHODS.items() if s.payable], ["deposit"])
        self.assertEqual(
            sorted(n for n, s in abi.METHODS.items() if s.read_only),
            ["owner", "unlock_time"]
        )

    def test_selectors_stable_and_distinct(self):
        selectors = [spec.selector for spec in abi.METHODS.values()]
        self.assertEqual(len(set(selectors)), len(selectors))
        self.assertTrue(all(len(s) == 4 for s in selectors))
        self.assertEqual(abi.selector("init(uint256)"), abi.METHODS["init"].selector)

        error_selectors = {abi.encode_error(kind) for kind in ErrorKind}
        self.assertEqual(len(error_selectors), len(ErrorKind))

    def test_call_encoding(self):
        data = abi.encode_call("extend_lock", 2000)
        self.assertEqual(len(data), 4 + 32)

        spec, args = abi.decode_call(data)
        self.assertEqual(spec.name, "extend_lock")
        self.assertEqual(args, (2000,))

        spec, args = abi.decode_call(abi.encode_call("withdraw", self.address.upper().replace("0X", "0x")))
        self.assertEqual(args, (self.address,))

    def test_call_decoding_rejects_malformed(self):
        with self.assertRaises(AbiError):
            abi.decode_call(b"\x01\x02")

        with self.assertRaises(UnknownMethod):
            abi.decode_call(b"\x00\x00\x00\x00")

        with self.assertRaises(UnknownMethod):
            abi.get_method(["init"])

        data = abi.encode_call("init", 5)
        with self.assertRaises(AbiError):
            abi.decode_call(data[:-1])
        with self.assertRaises(AbiError):
            abi.decode_call(data + b"\x00")

        word = abi.encode_address(self.address)
        with self.assertRaises(AbiError):
            abi.decode_address(b"\x01" + word[1:])

    def test_uint256_bounds(self):
        self.assertEqual(abi.decode_uint256(abi.encode_uint256(2 ** 256 - 1)), 2 ** 256 - 1)
        with self.assertRaises(AbiError):
            abi.encode_uint256(2 ** 256)
        with self.assertRaises(AbiError):
            abi.encode_uint256(-1)
        with self.assertRaises(AbiError):
            abi.encode_uint256(True)

    def test_errors(self):
        for kind in ErrorKind:
            data = abi.encode_error(kind)
            self.assertEqual(len(data), 4)
            self.assertEqual(abi.decode_error(data), kind)

        with self.assertRaises(AbiError):
            abi.decode_error(b"\xff\xff\xff\xff")

    def test_returns(self):
        owner_spec = abi.METHODS["owner"]
        self.assertEqual(abi.decode_return(owner_spec, abi.encode_return(owner_spec, self.address)),
                         self.address)
        self.assertEqual(abi.encode_return(abi.METHODS["init"], None), b"")

        with self.assertRaises(AbiError):
            abi.decode_return(abi.METHODS["deposit"], b"\x00")

    def test_event_logs(self):
        """Topic0 identifies the event, topic1 holds the indexed address"""
        record = abi.encode_event(self.address, Withdrawal(self.address, 99))

        self.assertEqual(record.topics[0], abi.event_topic("Withdrawal(address,uint256)"))
        self.assertEqual(abi.decode_address(record.topics[1]), self.address)
        self.assertEqual(abi.decode_uint256(record.data), 99)
        self.assertEqual(abi.decode_event(record), Withdrawal(self.address, 99))

        deposit = abi.encode_event(self.address, Deposit(self.address, 1))
        self.assertNotEqual(deposit.topics[0], record.topics[0])
        self.assertTrue(deposit.to_dict()['data'].startswith("0x"))


if __name__ == '__main__':
    unittest.main()
