from typing import List, Optional

from tokenswap.ledger.errors import AccountNotFound, Unauthorized, VaultNotFound
from tokenswap.ledger.instruction import Instruction
from tokenswap.ledger.ledger import Ledger
from tokenswap.ledger.token_bank import Signer
from tokenswap.ledger.types import Address, check_positive_amount, normalize_offer_id
from tokenswap.program.custody import CustodyVaultManager, SettlementResult, RefundResult, Vault
from tokenswap.program.offer_ledger import Offer, OfferLedger
from tokenswap.tokenswap_logging import getLogger

logger = getLogger(__name__)


class SwapProgram:
    """
    The escrow program: a maker locks asset A in a vault with make_offer, a taker paying exactly the wanted amount of
    asset B receives the whole vault with take_offer, and the maker can reclaim an untaken offer with refund_offer.

    Each entry point runs as a single ledger transaction.
    """

    def __init__(self, ledger: Ledger):
        self.ledger = ledger
        self.offers = OfferLedger(ledger)
        self.vaults = CustodyVaultManager(ledger, self.offers)

    @property
    def program_id(self) -> Address:
        return self.ledger.program_id

    def make_offer(self, maker: Signer, offer_id: 'bytes | int', token_mint_a: Address, token_mint_b: Address,
                   token_a_offer_amount: int, token_b_wanted_amount: int) -> Offer:
        check_positive_amount(token_a_offer_amount, "token_a_offer_amount")
        check_positive_amount(token_b_wanted_amount, "token_b_wanted_amount")
        offer_id = normalize_offer_id(offer_id)
        instruction = Instruction(self.program_id, "make_offer", maker.address, {
            "offer_id": offer_id,
            "token_mint_a": token_mint_a,
            "token_mint_b": token_mint_b,
            "token_a_offer_amount": token_a_offer_amount,
            "token_b_wanted_amount": token_b_wanted_amount,
        })

        def apply() -> Offer:
            bank = self.ledger.token_bank
            for mint in (token_mint_a, token_mint_b):
                bank.get_mint(mint)
                if bank.find_account(bank.associated_address(maker.address, mint)) is None:
                    raise AccountNotFound(f"maker {maker.address} has no token account for mint {mint}")
            offer = self.offers.create(maker.address, offer_id, token_mint_a, token_mint_b, token_b_wanted_amount)
            self.vaults.open_and_fund(offer, maker, token_a_offer_amount)
            return offer

        offer = self.ledger.execute(instruction, apply)
        logger.info("maker %s opened offer %s: %d of %s for %d of %s", maker.address, offer.offer_key,
                    token_a_offer_amount, token_mint_a, token_b_wanted_amount, token_mint_b)
        return offer

    def take_offer(self, taker: Signer, offer_key: Address, token_b_amount: int) -> SettlementResult:
        instruction = Instruction(self.program_id, "take_offer", taker.address, {
            "offer": offer_key,
            "token_b_amount": token_b_amount,
        })

        def apply() -> SettlementResult:
            offer = self._require_offer(offer_key)
            return self.vaults.settle(offer, taker, token_b_amount)

        result = self.ledger.execute(instruction, apply)
        logger.info("taker %s took offer %s", taker.address, offer_key)
        return result

    def refund_offer(self, maker: Signer, offer_key: Address) -> RefundResult:
        instruction = Instruction(self.program_id, "refund_offer", maker.address, {"offer": offer_key})

        def apply() -> RefundResult:
            offer = self._require_offer(offer_key)
            return self.vaults.refund(offer, maker)

        result = self.ledger.execute(instruction, apply)
        logger.info("maker %s refunded offer %s", maker.address, offer_key)
        return result

    #########
    # VIEWS #
    #########

    def get_offer(self, offer_key: Address) -> Optional[Offer]:
        return self.offers.get(offer_key)

    def get_offer_for(self, maker: Address, offer_id: 'bytes | int') -> Optional[Offer]:
        return self.offers.get(self.offers.derive_offer_key(maker, offer_id))

    def list_offers(self, maker: Optional[Address] = None) -> List[Offer]:
        return list(self.offers.iter_offers(maker))

    def get_vault(self, offer_key: Address) -> Optional[Vault]:
        offer = self.get_offer(offer_key)
        if offer is None:
            return None
        return self.vaults.get_vault(offer)

    def _require_offer(self, offer_key: Address) -> Offer:
        offer = self.offers.get(offer_key)
        if offer is None:
            raise VaultNotFound(f"offer {offer_key} was already taken, refunded or never existed")
        if self.offers.derive_offer_key(offer.maker, offer.offer_id) != offer_key:
            raise Unauthorized(f"record at {offer_key} is not a valid offer of this program")
        return offer
