from typing import Dict, Iterable, List, Optional

from enforce_typing import enforce_types

from tokenswap.ledger.derivation import derive_offer_key, offer_seeds
from tokenswap.ledger.errors import DuplicateOffer, VaultNotFound
from tokenswap.ledger.ledger import Ledger
from tokenswap.ledger.types import Address, check_positive_amount, normalize_offer_id
from tokenswap.tokenswap_logging import getLogger

logger = getLogger(__name__)


class Offer:
    """
    Terms of one open offer. Never mutated: it is created by make_offer and removed when the offer is taken or
    refunded.
    """

    @enforce_types
    def __init__(self, offer_key: Address, maker: Address, offer_id: int, token_mint_a: Address, token_mint_b: Address,
                 token_b_wanted_amount: int):
        self.offer_key = offer_key
        self.maker = maker
        self.offer_id = offer_id
        self.token_mint_a = token_mint_a
        self.token_mint_b = token_mint_b
        self.token_b_wanted_amount = token_b_wanted_amount

    def seeds(self) -> List[bytes]:
        return offer_seeds(self.maker, self.offer_id)

    def to_dict(self) -> Dict:
        return {
            "offer_key": str(self.offer_key),
            "maker": str(self.maker),
            "offer_id": self.offer_id,
            "token_mint_a": str(self.token_mint_a),
            "token_mint_b": str(self.token_mint_b),
            "token_b_wanted_amount": self.token_b_wanted_amount,
        }

    def __eq__(self, other):
        return isinstance(other, Offer) and self.to_dict() == other.to_dict()

    def __str__(self):
        return f"Offer({self.offer_key}, maker={self.maker}, id={self.offer_id}, wants {self.token_b_wanted_amount})"


class OfferLedger:
    """
    Authoritative record of open offers, keyed by the address derived from (maker, offer_id)
    """

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def derive_offer_key(self, maker: Address, offer_id: 'bytes | int') -> Address:
        return derive_offer_key(maker, normalize_offer_id(offer_id), self.ledger.program_id)

    def create(self, maker: Address, offer_id: 'bytes | int', token_mint_a: Address, token_mint_b: Address,
               token_b_wanted_amount: int) -> Offer:
        check_positive_amount(token_b_wanted_amount, "token_b_wanted_amount")
        offer_id = normalize_offer_id(offer_id)
        offer_key = self.derive_offer_key(maker, offer_id)
        offer = Offer(offer_key, maker, offer_id, token_mint_a, token_mint_b, token_b_wanted_amount)
        if not self.ledger.insert_record(offer_key, offer):
            raise DuplicateOffer(f"maker {maker} already has an offer with id {offer_id} at {offer_key}")
        logger.info("recorded offer %s", offer)
        return offer

    def get(self, offer_key: Address) -> Optional[Offer]:
        record = self.ledger.get_record(offer_key)
        return record if isinstance(record, Offer) else None

    def iter_offers(self, maker: Optional[Address] = None) -> Iterable[Offer]:
        for record in self.ledger.list_records():
            if isinstance(record, Offer) and (maker is None or record.maker == maker):
                yield record

    def close(self, offer_key: Address) -> Offer:
        offer = self.get(offer_key)
        if offer is None:
            raise VaultNotFound(f"no open offer at {offer_key}")
        self.ledger.remove_record(offer_key)
        logger.info("closed offer %s", offer_key)
        return offer
