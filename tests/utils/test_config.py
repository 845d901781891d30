import os
from unittest import TestCase
from unittest.mock import patch

from tokenswap.config import string_to_bool, get_program_id, get_log_level_label, get_logging_enabled, \
    get_log_root_directory, get_audit_log_enabled, DEFAULT_PROGRAM_ID


class TestConfig(TestCase):

    def test_string_to_bool(self):
        self.assertTrue(string_to_bool("yes", False))
        self.assertTrue(string_to_bool(" TRUE ", False))
        self.assertFalse(string_to_bool("0", True))
        self.assertTrue(string_to_bool(None, True))
        self.assertRaises(ValueError, string_to_bool, "maybe", False)

    def test_program_id_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_program_id(), bytes.fromhex(DEFAULT_PROGRAM_ID))

    def test_program_id_override(self):
        with patch.dict(os.environ, {"TOKENSWAP_PROGRAM_ID": "ab" * 32}):
            self.assertEqual(get_program_id(), b'\xab' * 32)
        with patch.dict(os.environ, {"TOKENSWAP_PROGRAM_ID": "ab" * 31}):
            self.assertRaises(ValueError, get_program_id)
        with patch.dict(os.environ, {"TOKENSWAP_PROGRAM_ID": "not hex"}):
            self.assertRaises(ValueError, get_program_id)

    def test_logging_settings(self):
        with patch.dict(os.environ, {"TOKENSWAP_LOG_LEVEL": "debug", "TOKENSWAP_LOGGING_ENABLED": "1",
                                     "TOKENSWAP_LOG_DIRECTORY": "/tmp/tokenswap-logs"}):
            self.assertEqual(get_log_level_label(), "DEBUG")
            self.assertTrue(get_logging_enabled())
            self.assertFalse(get_audit_log_enabled())
            self.assertEqual(get_log_root_directory(), "/tmp/tokenswap-logs")
