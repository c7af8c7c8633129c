import unittest
from timelock_wallet.identity import (
    AccountKey, ZERO_IDENTITY, address_from_public_key, is_zero_identity,
    normalize_identity, verify_signature
)


class TestIdentity(unittest.TestCase):

    def test_normalize(self):
        raw = bytes(range(1, 21))
        expected = "0x" + raw.hex()

        self.assertEqual(normalize_identity(raw), expected)
        self.assertEqual(normalize_identity(raw.hex()), expected)
        self.assertEqual(normalize_identity("0X" + raw.hex().upper()), expected)

        for bad in ("0x1234", "zz" * 20, b"\x00" * 19, 42):
            with self.assertRaises(ValueError):
                normalize_identity(bad)

    def test_zero_identity(self):
        self.assertTrue(is_zero_identity(ZERO_IDENTITY))
        self.assertTrue(is_zero_identity(bytes(20)))
        self.assertFalse(is_zero_identity(AccountKey().address))


class TestAccountKey(unittest.TestCase):

    def setUp(self):
        self.key = AccountKey()

    def test_address_derivation(self):
        """Address is deterministic in the public key"""
        address = self.key.address
        self.assertEqual(len(address), 42)
        self.assertEqual(address, address_from_public_key(self.key.get_public_key_hex()))

        restored = AccountKey.from_hex(self.key.get_private_key_hex())
        self.assertEqual(restored.address, address)
        self.assertNotEqual(AccountKey().address, address)

    def test_sign_and_verify(self):
        message = b"withdraw to carol"
        signature = self.key.sign_message(message)
        pubkey = self.key.get_public_key_hex()

        self.assertTrue(verify_signature(message, signature, pubkey))
        self.assertFalse(verify_signature(b"withdraw to mallory", signature, pubkey))
        self.assertFalse(verify_signature(message, signature, AccountKey().get_public_key_hex()))
        self.assertFalse(verify_signature(message, "not-hex", pubkey))

    def test_generate_key_pair(self):
        private_hex, public_hex = AccountKey.generate_key_pair()
        self.assertEqual(len(bytes.fromhex(private_hex)), 32)
        self.assertEqual(len(bytes.fromhex(public_hex)), 64)
        self.assertEqual(AccountKey.from_hex(private_hex).get_public_key_hex(), public_hex)

    def test_bad_public_key(self):
        with self.assertRaises(ValueError):
            address_from_public_key("00" * 33)


if __name__ == '__main__':
    unittest.main()
