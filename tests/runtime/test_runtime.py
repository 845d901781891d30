from unittest import TestCase

from tokenswap.ledger.errors import AmountMismatch, DuplicateOffer, VaultNotFound
from tokenswap.ledger.ledger import Ledger
from tokenswap.runtime.handles import OfferHandle
from tokenswap.runtime.runtime import Runtime, Account

TOKEN_A_OFFER_AMOUNT = 1_000_000
TOKEN_B_WANTED_AMOUNT = 1_000_000


class TestRuntime(TestCase):

    def setUp(self):
        self.runtime = Runtime(Ledger())
        (self.alice, self.bob), (self.mint_a, self.mint_b) = \
            self.runtime.create_accounts_mints_and_token_accounts([
                # Alice's token balances
                [1_000_000_000, 0],
                # Bob's token balances
                [0, 1_000_000_000],
            ])

    def make_offer(self, offer_id=b'\x11' * 8) -> OfferHandle:
        return self.runtime.make_offer(offer_id, self.mint_a, self.mint_b, TOKEN_A_OFFER_AMOUNT,
                                       TOKEN_B_WANTED_AMOUNT, sender=self.alice)

    def balances(self):
        return [self.runtime.balance_of(user.address, mint)
                for user in (self.alice, self.bob) for mint in (self.mint_a, self.mint_b)]

    def test_accounts_and_mints(self):
        self.assertEqual(self.balances(), [1_000_000_000, 0, 0, 1_000_000_000])
        self.assertNotEqual(self.alice, self.bob)
        self.assertEqual(self.alice, Account(self.alice.secret_key))
        self.assertEqual(self.runtime.ledger.token_bank.get_mint(self.mint_a).decimals, 6)

    def test_make_offer_puts_tokens_into_vault(self):
        offer = self.make_offer()
        self.assertEqual(offer.vault_balance, TOKEN_A_OFFER_AMOUNT)
        self.assertEqual(offer.maker, self.alice.address)
        self.assertEqual(offer.token_mint_a, self.mint_a)
        self.assertEqual(offer.token_mint_b, self.mint_b)
        self.assertEqual(offer.token_b_wanted_amount, TOKEN_B_WANTED_AMOUNT)
        self.assertEqual(offer.offer_id, int.from_bytes(b'\x11' * 8, 'little'))
        self.assertEqual(offer, self.runtime.get_offer_handle(self.alice.address, b'\x11' * 8))

    def test_take_offer_swaps_tokens(self):
        offer = self.make_offer()
        vault = offer.vault
        offer.take(TOKEN_B_WANTED_AMOUNT, sender=self.bob)
        self.assertEqual(self.runtime.balance_of(self.bob.address, self.mint_a), TOKEN_A_OFFER_AMOUNT)
        self.assertEqual(self.runtime.balance_of(self.alice.address, self.mint_b), TOKEN_B_WANTED_AMOUNT)
        self.assertFalse(offer.exists)
        self.assertEqual(offer.vault_balance, 0)
        self.assertIsNone(self.runtime.ledger.token_bank.find_account(vault))
        with self.assertRaises(VaultNotFound):
            offer.maker

    def test_take_offer_wrong_amount(self):
        offer = self.make_offer()
        before = self.balances()
        with self.assertLogs('tokenswap.runtime.runtime', level='WARNING') as logs:
            self.assertRaises(AmountMismatch, offer.take, 999_999, sender=self.bob)
        self.assertIn("AmountMismatch", logs.output[0])
        self.assertEqual(self.balances(), before)
        self.assertEqual(offer.vault_balance, TOKEN_A_OFFER_AMOUNT)

    def test_take_offer_twice(self):
        offer = self.make_offer()
        offer.take(TOKEN_B_WANTED_AMOUNT, sender=self.bob)
        before = self.balances()
        self.assertRaises(VaultNotFound, offer.take, TOKEN_B_WANTED_AMOUNT, sender=self.bob)
        self.assertEqual(self.balances(), before)

    def test_duplicate_offer(self):
        offer = self.make_offer()
        self.assertRaises(DuplicateOffer, self.make_offer)
        self.assertEqual(offer.vault_balance, TOKEN_A_OFFER_AMOUNT)
        self.assertEqual(self.runtime.balance_of(self.alice.address, self.mint_a), 999_000_000)

    def test_refund(self):
        offer = self.make_offer()
        result = offer.refund(sender=self.alice)
        self.assertEqual(result.to_dict()["token_a_amount"], TOKEN_A_OFFER_AMOUNT)
        self.assertEqual(self.balances(), [1_000_000_000, 0, 0, 1_000_000_000])

    def test_handle_unknown_member(self):
        offer = self.make_offer()
        self.assertRaises(AttributeError, getattr, offer, "price")

    def test_settlement_is_audited(self):
        offer = self.make_offer()
        with self.assertLogs('tokenswap.audit', level='INFO') as logs:
            result = offer.take(TOKEN_B_WANTED_AMOUNT, sender=self.bob)
        self.assertIn("settled offer=" + str(result.offer_key), logs.output[0])
        self.assertEqual(result.to_dict()["taker"], str(self.bob.address))
