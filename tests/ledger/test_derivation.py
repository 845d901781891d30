from unittest import TestCase

from tokenswap.ledger.derivation import create_program_address, derive_offer_key, derive_vault_key, \
    derive_associated_token_address, offer_seeds, MAX_SEEDS
from tokenswap.ledger.types import Address

MAKER = Address(b'\x01' * 32)
PROGRAM_ID = Address(b'\x02' * 32)
MINT = Address(b'\x03' * 32)


class TestDerivation(TestCase):

    def test_offer_key_known_answer(self):
        # sha256(b"offer" || maker || le64(1) || program_id || b"ProgramDerivedAddress")
        expected = Address('bd2f1768c10c1bd03506722a7349a0d00ac4ab5f628bf6203f5eee66fad0029a')
        self.assertEqual(derive_offer_key(MAKER, 1, PROGRAM_ID), expected)

    def test_offer_id_little_endian(self):
        seeds = offer_seeds(MAKER, 0x0102)
        self.assertEqual(seeds[0], b"offer")
        self.assertEqual(seeds[1], bytes(MAKER))
        self.assertEqual(seeds[2], b'\x02\x01\x00\x00\x00\x00\x00\x00')

    def test_offer_key_deterministic(self):
        self.assertEqual(derive_offer_key(MAKER, 77, PROGRAM_ID), derive_offer_key(MAKER, 77, PROGRAM_ID))

    def test_offer_key_distinct_inputs(self):
        other_maker = Address(b'\x04' * 32)
        keys = {
            derive_offer_key(MAKER, 1, PROGRAM_ID),
            derive_offer_key(MAKER, 2, PROGRAM_ID),
            derive_offer_key(other_maker, 1, PROGRAM_ID),
            derive_offer_key(MAKER, 1, Address(b'\x05' * 32)),
        }
        self.assertEqual(len(keys), 4)

    def test_vault_key_is_associated_token_address_of_offer(self):
        offer_key = derive_offer_key(MAKER, 1, PROGRAM_ID)
        vault = derive_vault_key(offer_key, MINT)
        self.assertEqual(vault, derive_associated_token_address(offer_key, MINT))
        self.assertNotEqual(vault, derive_vault_key(offer_key, Address(b'\x06' * 32)))
        self.assertNotEqual(vault, derive_vault_key(derive_offer_key(MAKER, 2, PROGRAM_ID), MINT))

    def test_seed_limits(self):
        self.assertRaises(ValueError, create_program_address, [b'x' * 33], PROGRAM_ID)
        self.assertRaises(ValueError, create_program_address, [b'x'] * (MAX_SEEDS + 1), PROGRAM_ID)
        create_program_address([b'x' * 32] * MAX_SEEDS, PROGRAM_ID)

    def test_address_parsing(self):
        self.assertEqual(Address('0x' + '01' * 32), MAKER)
        self.assertEqual(Address(1), Address(b'\x00' * 31 + b'\x01'))
        self.assertEqual(str(MAKER), '0x' + '01' * 32)
        self.assertRaises(ValueError, Address, b'\x01' * 31)
