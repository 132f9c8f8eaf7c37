"""Environment-driven configuration parsing and validation."""

import unittest
from dataclasses import replace

from web3 import Web3

from multi_send.config import Config, validate_recipient
from multi_send.errors import ConfigurationError
from multi_send.tests.fakes import RECIPIENT


class ConfigFromEnvTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = Config.from_env({})
        self.assertEqual(config.rpc_urls, ())
        self.assertEqual(config.tx_count, 1)
        self.assertEqual(config.amount_mode, "fixed")
        self.assertEqual(config.private_keys_file, "privateKeys.json")
        self.assertEqual(config.default_gas_limit, 21_000)
        self.assertEqual(config.confirmation_timeout, 120.0)
        self.assertFalse(config.rotate_on_connection_error)

    def test_reads_values(self) -> None:
        config = Config.from_env(
            {
                "RPC_URLS": "http://a, http://b,,",
                "RECIPIENT": RECIPIENT,
                "TX_COUNT": "5",
                "AMOUNT_MODE": "Random",
                "AMOUNT_MIN": "0.001",
                "AMOUNT_MAX": "0.002",
                "CONFIRMATION_TIMEOUT": "30",
                "ROTATE_ON_CONNECTION_ERROR": "yes",
                "EXPLORER_URL": "https://explorer.example",
            }
        )
        self.assertEqual(config.rpc_urls, ("http://a", "http://b"))
        self.assertEqual(config.tx_count, 5)
        self.assertEqual(config.confirmation_timeout, 30.0)
        self.assertTrue(config.rotate_on_connection_error)
        self.assertEqual(
            config.amount_policy(), {"mode": "random", "min": "0.001", "max": "0.002"}
        )

    def test_fixed_policy(self) -> None:
        config = Config.from_env({"AMOUNT": "0.01"})
        self.assertEqual(config.amount_policy(), {"mode": "fixed", "value": "0.01"})

    def test_malformed_values(self) -> None:
        for env in (
            {"TX_COUNT": "three"},
            {"CONFIRMATION_TIMEOUT": "soon"},
            {"ROTATE_ON_CONNECTION_ERROR": "maybe"},
        ):
            with self.assertRaises(ConfigurationError):
                Config.from_env(env)


class ConfigValidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = Config(rpc_urls=("http://a",), recipient=RECIPIENT, tx_count=2)

    def test_valid(self) -> None:
        self.config.validate()

    def test_invalid(self) -> None:
        for changes in (
            {"rpc_urls": ()},
            {"tx_count": 0},
            {"recipient": None},
            {"recipient": "0xnotanaddress"},
            {"confirmation_timeout": 0},
        ):
            with self.assertRaises(ConfigurationError):
                replace(self.config, **changes).validate()

    def test_validate_recipient_checksums(self) -> None:
        expected = Web3.to_checksum_address(RECIPIENT)
        self.assertEqual(validate_recipient(" " + RECIPIENT + " "), expected)
        self.assertEqual(validate_recipient(expected), expected)


if __name__ == "__main__":
    unittest.main()
