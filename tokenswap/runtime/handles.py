from typing import TYPE_CHECKING, Optional

from tokenswap.ledger.errors import VaultNotFound
from tokenswap.ledger.types import Address

if TYPE_CHECKING:
    from tokenswap.program.custody import SettlementResult, RefundResult
    from tokenswap.program.offer_ledger import Offer
    from tokenswap.runtime.runtime import Runtime, Account

OFFER_FIELDS = ("maker", "offer_id", "token_mint_a", "token_mint_b", "token_b_wanted_amount")


class OfferHandle:
    """
    Live reference to an offer: field reads go to the ledger, so they fail once the offer is taken or refunded
    """

    def __init__(self, runtime: 'Runtime', offer_key: Address):
        self._hdl_runtime = runtime
        self._hdl_offer_key = offer_key

    def __getattr__(self, item):
        if item.startswith("_hdl_"):
            # normal read
            return super().__getattribute__(item)
        elif item in OFFER_FIELDS:
            return getattr(self._hdl_load(), item)
        else:
            raise AttributeError(f"Offer has no member {item}")

    @property
    def address(self) -> Address:
        return self._hdl_offer_key

    @property
    def exists(self) -> bool:
        return self._hdl_runtime.program.get_offer(self._hdl_offer_key) is not None

    @property
    def vault(self) -> Address:
        """
        Address of the vault; derivable from the offer key and mint A alone
        """
        offer = self._hdl_load()
        return self._hdl_runtime.program.vaults.derive_vault_key(offer.offer_key, offer.token_mint_a)

    @property
    def vault_balance(self) -> int:
        """
        Returns: the amount of asset A in custody, 0 once the offer is closed
        """
        vault = self._hdl_runtime.program.get_vault(self._hdl_offer_key)
        return vault.amount if vault is not None else 0

    def take(self, token_b_amount: int, sender: 'Account') -> 'SettlementResult':
        return self._hdl_runtime.take_offer(self._hdl_offer_key, token_b_amount, sender=sender)

    def refund(self, sender: 'Account') -> 'RefundResult':
        return self._hdl_runtime.refund_offer(self._hdl_offer_key, sender=sender)

    def _hdl_load(self) -> 'Offer':
        offer: Optional['Offer'] = self._hdl_runtime.program.get_offer(self._hdl_offer_key)
        if offer is None:
            raise VaultNotFound(f"offer {self._hdl_offer_key} is closed")
        return offer

    def __eq__(self, other):
        return isinstance(other, OfferHandle) and self._hdl_offer_key == other._hdl_offer_key

    def __hash__(self):
        return hash(self._hdl_offer_key)

    def __repr__(self):
        return f"OfferHandle({self._hdl_offer_key})"
