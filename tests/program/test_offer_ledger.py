from unittest import TestCase

from tokenswap.ledger.errors import DuplicateOffer, InvalidAmount, InvalidOfferId, VaultNotFound
from tokenswap.ledger.derivation import create_program_address
from tokenswap.ledger.ledger import Ledger
from tokenswap.ledger.types import Address, U64_MAX
from tokenswap.program.offer_ledger import OfferLedger, Offer

PROGRAM_ID = Address(b'\x09' * 32)
ALICE = Address(b'\x01' * 32)
BOB = Address(b'\x02' * 32)
MINT_A = Address(b'\x10' * 32)
MINT_B = Address(b'\x20' * 32)


class TestOfferLedger(TestCase):

    def setUp(self):
        self.ledger = Ledger(PROGRAM_ID)
        self.offers = OfferLedger(self.ledger)

    def test_create_and_get(self):
        offer = self.offers.create(ALICE, 7, MINT_A, MINT_B, 300)
        self.assertEqual(offer.offer_key, self.offers.derive_offer_key(ALICE, 7))
        self.assertEqual(self.offers.get(offer.offer_key), offer)
        self.assertEqual(offer.maker, ALICE)
        self.assertEqual(offer.token_mint_a, MINT_A)
        self.assertEqual(offer.token_mint_b, MINT_B)
        self.assertEqual(offer.token_b_wanted_amount, 300)

    def test_seeds_derive_offer_key(self):
        offer = self.offers.create(ALICE, 7, MINT_A, MINT_B, 300)
        self.assertEqual(offer.seeds(), [b"offer", bytes(ALICE), (7).to_bytes(8, 'little')])
        self.assertEqual(create_program_address(offer.seeds(), PROGRAM_ID), offer.offer_key)

    def test_offer_id_bytes_and_int_agree(self):
        self.assertEqual(self.offers.derive_offer_key(ALICE, (7).to_bytes(8, 'little')),
                         self.offers.derive_offer_key(ALICE, 7))

    def test_duplicate_rejected_not_overwritten(self):
        first = self.offers.create(ALICE, 7, MINT_A, MINT_B, 300)
        self.assertRaises(DuplicateOffer, self.offers.create, ALICE, 7, MINT_B, MINT_A, 999)
        self.assertEqual(self.offers.get(first.offer_key).token_b_wanted_amount, 300)

    def test_same_id_for_different_makers(self):
        a = self.offers.create(ALICE, 7, MINT_A, MINT_B, 300)
        b = self.offers.create(BOB, 7, MINT_A, MINT_B, 300)
        self.assertNotEqual(a.offer_key, b.offer_key)

    def test_invalid_amount(self):
        for amount in [0, -1, U64_MAX + 1, True, 1.5]:
            self.assertRaises(InvalidAmount, self.offers.create, ALICE, 7, MINT_A, MINT_B, amount)
        self.assertEqual(list(self.offers.iter_offers()), [])

    def test_invalid_offer_id(self):
        self.assertRaises(InvalidOfferId, self.offers.create, ALICE, -1, MINT_A, MINT_B, 1)
        self.assertRaises(InvalidOfferId, self.offers.create, ALICE, 2**64, MINT_A, MINT_B, 1)
        self.assertRaises(InvalidOfferId, self.offers.create, ALICE, b'\x00' * 7, MINT_A, MINT_B, 1)

    def test_close(self):
        offer = self.offers.create(ALICE, 7, MINT_A, MINT_B, 300)
        self.assertEqual(self.offers.close(offer.offer_key), offer)
        self.assertIsNone(self.offers.get(offer.offer_key))
        self.assertRaises(VaultNotFound, self.offers.close, offer.offer_key)

    def test_iter_offers_by_maker(self):
        self.offers.create(ALICE, 1, MINT_A, MINT_B, 300)
        self.offers.create(ALICE, 2, MINT_A, MINT_B, 300)
        self.offers.create(BOB, 1, MINT_A, MINT_B, 300)
        self.assertEqual(len(list(self.offers.iter_offers())), 3)
        self.assertEqual(sorted(o.offer_id for o in self.offers.iter_offers(ALICE)), [1, 2])

    def test_offer_fields_type_checked(self):
        self.assertRaises(TypeError, Offer, ALICE, "alice", 1, MINT_A, MINT_B, 300)
