from typing import Dict, Optional

from tokenswap.ledger.derivation import create_program_address, derive_vault_key
from tokenswap.ledger.errors import AccountInUse, AccountNotFound, AmountMismatch, InsufficientFunds, Unauthorized, \
    VaultNotFound
from tokenswap.ledger.ledger import Ledger
from tokenswap.ledger.token_bank import Signer, TokenAccount
from tokenswap.ledger.types import Address, check_positive_amount, is_u64
from tokenswap.program.offer_ledger import Offer, OfferLedger
from tokenswap.tokenswap_logging import getLogger, getAuditLogger

logger = getLogger(__name__)
audit = getAuditLogger()


class Vault:
    """
    Read-only view of the token account holding an offer's asset A
    """

    def __init__(self, address: Address, offer_key: Address, mint: Address, amount: int):
        self.address = address
        self.offer_key = offer_key
        self.mint = mint
        self.amount = amount

    @staticmethod
    def from_token_account(account: TokenAccount) -> 'Vault':
        return Vault(account.address, account.owner, account.mint, account.amount)


class SettlementResult:

    def __init__(self, offer: Offer, vault: Address, taker: Address, token_a_amount: int, token_b_amount: int):
        self.offer_key = offer.offer_key
        self.vault = vault
        self.maker = offer.maker
        self.taker = taker
        self.token_mint_a = offer.token_mint_a
        self.token_mint_b = offer.token_mint_b
        self.token_a_amount = token_a_amount
        self.token_b_amount = token_b_amount

    def to_dict(self) -> Dict:
        return {k: str(v) if isinstance(v, bytes) else v for k, v in self.__dict__.items()}


class RefundResult:

    def __init__(self, offer: Offer, vault: Address, token_a_amount: int):
        self.offer_key = offer.offer_key
        self.vault = vault
        self.maker = offer.maker
        self.token_mint_a = offer.token_mint_a
        self.token_a_amount = token_a_amount

    def to_dict(self) -> Dict:
        return {k: str(v) if isinstance(v, bytes) else v for k, v in self.__dict__.items()}


class CustodyVaultManager:
    """
    Creates, funds and empties the per-offer vaults.

    A vault is owned by its offer's derived address. Transfers out of it need a Signer for that address, which only
    "_offer_signer" hands out, and only for an offer whose key it can re-derive from the offer's seeds.
    """

    def __init__(self, ledger: Ledger, offer_ledger: OfferLedger):
        self.ledger = ledger
        self.offer_ledger = offer_ledger

    @property
    def bank(self):
        return self.ledger.token_bank

    def derive_vault_key(self, offer_key: Address, token_mint_a: Address) -> Address:
        return derive_vault_key(offer_key, token_mint_a)

    def get_vault(self, offer: Offer) -> Optional[Vault]:
        account = self.ledger.find_token_account(self.derive_vault_key(offer.offer_key, offer.token_mint_a))
        return Vault.from_token_account(account) if account is not None else None

    def open_and_fund(self, offer: Offer, maker: Signer, amount: int) -> Vault:
        check_positive_amount(amount, "token_a_offer_amount")
        with self.ledger.transaction():
            if maker.address != offer.maker:
                raise Unauthorized(f"only the maker {offer.maker} can fund the vault of {offer.offer_key}")
            maker_account_a = self._require_account(offer.maker, offer.token_mint_a, "maker's asset A")
            if maker_account_a.amount < amount:
                raise InsufficientFunds(f"maker holds {maker_account_a.amount} of asset A, offers {amount}")

            vault_key = self.derive_vault_key(offer.offer_key, offer.token_mint_a)
            if self.bank.find_account(vault_key) is not None:
                raise AccountInUse(f"vault address {vault_key} of offer {offer.offer_key} is already initialized")
            self.bank.create_account(vault_key, offer.token_mint_a, offer.offer_key)
            mint_a = self.bank.get_mint(offer.token_mint_a)
            self.bank.transfer_checked(maker_account_a.address, offer.token_mint_a, vault_key, amount,
                                       mint_a.decimals, maker)
            logger.info("funded vault %s of offer %s with %d", vault_key, offer.offer_key, amount)
            return Vault(vault_key, offer.offer_key, offer.token_mint_a, amount)

    def settle(self, offer: Offer, taker: Signer, taker_asset_b_amount: int) -> SettlementResult:
        with self.ledger.transaction():
            # preconditions (no state is touched before all of them hold)
            if not is_u64(taker_asset_b_amount) or taker_asset_b_amount != offer.token_b_wanted_amount:
                raise AmountMismatch(
                    f"offer {offer.offer_key} wants {offer.token_b_wanted_amount} of asset B, got {taker_asset_b_amount!r}")
            vault = self._require_funded_vault(offer)
            taker_account_b = self._require_account(taker.address, offer.token_mint_b, "taker's asset B")
            if taker_account_b.amount < taker_asset_b_amount:
                raise InsufficientFunds(
                    f"taker holds {taker_account_b.amount} of asset B, needs {taker_asset_b_amount}")
            taker_account_a = self._require_account(taker.address, offer.token_mint_a, "taker's asset A")
            maker_account_b = self._require_account(offer.maker, offer.token_mint_b, "maker's asset B")

            mint_a = self.bank.get_mint(offer.token_mint_a)
            mint_b = self.bank.get_mint(offer.token_mint_b)
            offer_signer = self._offer_signer(offer)
            token_a_amount = vault.amount

            self.bank.transfer_checked(taker_account_b.address, offer.token_mint_b, maker_account_b.address,
                                       taker_asset_b_amount, mint_b.decimals, taker)
            self.bank.transfer_checked(vault.address, offer.token_mint_a, taker_account_a.address,
                                       token_a_amount, mint_a.decimals, offer_signer)
            self.bank.close_account(vault.address, offer_signer)
            self.offer_ledger.close(offer.offer_key)

        result = SettlementResult(offer, vault.address, taker.address, token_a_amount, taker_asset_b_amount)
        audit.info("settled offer=%s maker=%s taker=%s a=%d b=%d", offer.offer_key, offer.maker, taker.address,
                   token_a_amount, taker_asset_b_amount)
        return result

    def refund(self, offer: Offer, maker: Signer) -> RefundResult:
        with self.ledger.transaction():
            if maker.address != offer.maker:
                raise Unauthorized(f"only the maker {offer.maker} can refund offer {offer.offer_key}")
            vault = self._require_funded_vault(offer)
            maker_account_a = self._require_account(offer.maker, offer.token_mint_a, "maker's asset A")

            mint_a = self.bank.get_mint(offer.token_mint_a)
            offer_signer = self._offer_signer(offer)
            token_a_amount = vault.amount

            self.bank.transfer_checked(vault.address, offer.token_mint_a, maker_account_a.address,
                                       token_a_amount, mint_a.decimals, offer_signer)
            self.bank.close_account(vault.address, offer_signer)
            self.offer_ledger.close(offer.offer_key)

        audit.info("refunded offer=%s maker=%s a=%d", offer.offer_key, offer.maker, token_a_amount)
        return RefundResult(offer, vault.address, token_a_amount)

    ###########
    # HELPERS #
    ###########

    def _offer_signer(self, offer: Offer) -> Signer:
        expected = create_program_address(offer.seeds(), self.ledger.program_id)
        if expected != offer.offer_key:
            raise Unauthorized(f"offer key {offer.offer_key} is not derived from its maker and id")
        return Signer(expected)

    def _require_funded_vault(self, offer: Offer) -> TokenAccount:
        vault_key = self.derive_vault_key(offer.offer_key, offer.token_mint_a)
        vault = self.bank.find_account(vault_key)
        if vault is None or vault.amount == 0:
            raise VaultNotFound(f"vault {vault_key} of offer {offer.offer_key} is missing or empty")
        if vault.owner != offer.offer_key or vault.mint != offer.token_mint_a:
            raise Unauthorized(f"account {vault_key} is not the vault of offer {offer.offer_key}")
        return vault

    def _require_account(self, owner: Address, mint: Address, label: str) -> TokenAccount:
        account = self.bank.find_account(self.bank.associated_address(owner, mint))
        if account is None:
            raise AccountNotFound(f"{label} account of {owner} does not exist")
        return account
