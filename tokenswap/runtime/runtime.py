import hashlib
import secrets
from typing import Callable, List, Optional, Tuple, TypeVar

from tokenswap.ledger.errors import SwapError
from tokenswap.ledger.ledger import Ledger
from tokenswap.ledger.token_bank import Signer
from tokenswap.ledger.types import Address
from tokenswap.program.custody import SettlementResult, RefundResult
from tokenswap.program.swap import SwapProgram
from tokenswap.runtime.handles import OfferHandle
from tokenswap.tokenswap_logging import getLogger
from tokenswap.utils.data_logging import data_context, time_measure
from tokenswap.utils.general import short_hex

logger = getLogger(__name__)

R = TypeVar('R')


class Account:
    def __init__(self, secret_key: bytes):
        self.secret_key = secret_key
        self.address = Address(hashlib.sha256(secret_key).digest())

    def signer(self) -> Signer:
        return Signer(self.address)

    def __eq__(self, other):
        return isinstance(other, Account) and self.secret_key == other.secret_key and self.address == other.address

    def __hash__(self):
        return hash(self.address)


class Runtime:
    """
    Client-side view of a ledger: creates accounts and mints, and submits swap program calls on behalf of a sender
    """

    def __init__(self, ledger: Ledger, program: Optional[SwapProgram] = None):
        self.ledger = ledger
        self.program = program if program is not None else SwapProgram(ledger)

    ############
    # ACCOUNTS #
    ############

    def new_user_account(self) -> Account:
        account = Account(secrets.token_bytes(32))
        logger.info("created new user with address %s", short_hex(account.address))
        return account

    def create_mint(self, decimals: int, sender: Account) -> Address:
        mint_address = Address(secrets.token_bytes(32))
        with self.ledger.transaction():
            self.ledger.token_bank.create_mint(mint_address, decimals, sender.signer())
        return mint_address

    def create_token_account(self, mint: Address, owner: Address) -> Address:
        with self.ledger.transaction():
            account = self.ledger.token_bank.create_associated_account(owner, mint)
        logger.info("created token account %s of %s for mint %s", short_hex(account.address), short_hex(owner),
                    short_hex(mint))
        return account.address

    def token_account_address(self, owner: Address, mint: Address) -> Address:
        return self.ledger.token_bank.associated_address(owner, mint)

    def mint_to(self, mint: Address, owner: Address, amount: int, sender: Account):
        with self.ledger.transaction():
            self.ledger.token_bank.mint_to(mint, self.token_account_address(owner, mint), amount, sender.signer())

    def balance_of(self, owner: Address, mint: Address) -> int:
        return self.ledger.balance(self.token_account_address(owner, mint))

    def create_accounts_mints_and_token_accounts(self, balances: List[List[int]], decimals: int = 6) \
            -> Tuple[List[Account], List[Address]]:
        """
        Creates one user per row of "balances" and one mint per column, gives every user a token account for every
        mint and funds entry [i][j] of mint j to user i.

        Returns: the users and the mints
        """
        authority = self.new_user_account()
        nof_mints = len(balances[0]) if balances else 0
        mints = [self.create_mint(decimals, authority) for _ in range(nof_mints)]
        users = []
        for row in balances:
            if len(row) != nof_mints:
                raise ValueError("every user needs a balance for every mint")
            user = self.new_user_account()
            for mint, amount in zip(mints, row):
                self.create_token_account(mint, user.address)
                if amount > 0:
                    self.mint_to(mint, user.address, amount, authority)
            users.append(user)
        return users, mints

    ##########
    # OFFERS #
    ##########

    def get_offer_handle(self, maker: Address, offer_id: 'bytes | int') -> OfferHandle:
        return OfferHandle(self, self.program.offers.derive_offer_key(maker, offer_id))

    def make_offer(self, offer_id: 'bytes | int', token_mint_a: Address, token_mint_b: Address,
                   token_a_offer_amount: int, token_b_wanted_amount: int, sender: Account) -> OfferHandle:
        offer = self.call_function("make_offer", sender, self.program.make_offer, sender.signer(), offer_id,
                                   token_mint_a, token_mint_b, token_a_offer_amount, token_b_wanted_amount)
        return OfferHandle(self, offer.offer_key)

    def take_offer(self, offer_key: Address, token_b_amount: int, sender: Account) -> SettlementResult:
        return self.call_function("take_offer", sender, self.program.take_offer, sender.signer(), offer_key,
                                  token_b_amount)

    def refund_offer(self, offer_key: Address, sender: Account) -> RefundResult:
        return self.call_function("refund_offer", sender, self.program.refund_offer, sender.signer(), offer_key)

    def call_function(self, function_name: str, sender: Account, function: Callable[..., R], *args) -> R:
        with data_context(function_name):
            logger.info("sending %s from %s...", function_name, short_hex(sender.address))
            try:
                with time_measure("execute"):
                    ret = function(*args)
            except SwapError as e:
                logger.warning("ledger rejected %s from %s: %s (%s)", function_name, short_hex(sender.address),
                               str(e), type(e).__name__)
                raise
            logger.info("successfully accepted %s at ledger", function_name)
            return ret
