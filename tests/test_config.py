import os
import unittest
from unittest import mock
from timelock_wallet.config import DEFAULT_HTTP_PORT, HostConfig


class TestHostConfig(unittest.TestCase):

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = HostConfig.from_env()

        self.assertEqual(config.port, DEFAULT_HTTP_PORT)
        self.assertIsNone(config.state_file)
        self.assertEqual(config.log_level, "INFO")
        self.assertGreater(config.genesis_time, 0)

    def test_environment_overrides(self):
        env = {
            "PORT": "8081",
            "TIMELOCK_STATE_FILE": "/tmp/wallet.json",
            "TIMELOCK_GENESIS_TIME": "1000",
            "TIMELOCK_FAUCET_AMOUNT": "25",
            "TIMELOCK_LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = HostConfig.from_env()

        self.assertEqual(config.port, 8081)
        self.assertEqual(config.state_file, "/tmp/wallet.json")
        self.assertEqual(config.genesis_time, 1000)
        self.assertEqual(config.faucet_amount, 25)
        self.assertEqual(config.log_level, "DEBUG")

    def test_invalid_integer(self):
        with mock.patch.dict(os.environ, {"PORT": "eighty"}, clear=True):
            with self.assertRaises(ValueError) as cm:
                HostConfig.from_env()
        self.assertIn("PORT", str(cm.exception))


if __name__ == '__main__':
    unittest.main()
