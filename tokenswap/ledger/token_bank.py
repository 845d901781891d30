from typing import Dict, Optional, Tuple

from enforce_typing import enforce_types

from tokenswap.ledger.derivation import derive_associated_token_address, TOKEN_PROGRAM_ID
from tokenswap.ledger.errors import AccountInUse, AccountNotFound, InsufficientFunds, InvalidAmount, MintMismatch, \
    Unauthorized
from tokenswap.ledger.types import Address, is_u64, U64_MAX
from tokenswap.tokenswap_logging import getLogger

logger = getLogger(__name__)


class Signer:
    """
    Authority to act as "address": held by users for their own address and produced by the swap program for the
    addresses it derives
    """

    def __init__(self, address: Address):
        self.address = address

    def __repr__(self):
        return f"Signer({self.address})"


class Mint:

    @enforce_types
    def __init__(self, address: Address, decimals: int, mint_authority: Address, supply: int = 0):
        if not 0 <= decimals <= 255:
            raise ValueError(f"decimals must fit into one byte, got {decimals}")
        self.address = address
        self.decimals = decimals
        self.mint_authority = mint_authority
        self.supply = supply

    def copy(self) -> 'Mint':
        return Mint(self.address, self.decimals, self.mint_authority, self.supply)


class TokenAccount:

    @enforce_types
    def __init__(self, address: Address, mint: Address, owner: Address, amount: int = 0):
        self.address = address
        self.mint = mint
        self.owner = owner
        self.amount = amount

    def copy(self) -> 'TokenAccount':
        return TokenAccount(self.address, self.mint, self.owner, self.amount)

    def __str__(self):
        return f"TokenAccount({self.address}, mint={self.mint}, owner={self.owner}, amount={self.amount})"


class TokenBank:
    """
    Mints, token accounts and balances. Only the owner of a token account (proven by a matching Signer) can move funds
    out of it or close it.
    """

    def __init__(self, token_program_id: Address = TOKEN_PROGRAM_ID):
        self.token_program_id = token_program_id
        self.mints: Dict[Address, Mint] = {}
        self.accounts: Dict[Address, TokenAccount] = {}

    #########
    # MINTS #
    #########

    def create_mint(self, address: Address, decimals: int, authority: Signer) -> Mint:
        if address in self.mints or address in self.accounts:
            raise AccountInUse(f"address {address} is already in use")
        mint = Mint(address, decimals, authority.address)
        self.mints[address] = mint
        logger.info("created mint %s with %d decimals", address, decimals)
        return mint

    def get_mint(self, address: Address) -> Mint:
        if address not in self.mints:
            raise AccountNotFound(f"unknown mint {address}")
        return self.mints[address]

    def mint_to(self, mint_address: Address, destination: Address, amount: int, authority: Signer):
        mint = self.get_mint(mint_address)
        account = self.get_account(destination)
        if authority.address != mint.mint_authority:
            raise Unauthorized(f"{authority.address} is not the mint authority of {mint_address}")
        if account.mint != mint_address:
            raise MintMismatch(f"account {destination} does not hold mint {mint_address}")
        if not is_u64(amount) or mint.supply + amount > U64_MAX:
            raise InvalidAmount(f"cannot mint {amount!r} of {mint_address}")
        mint.supply += amount
        account.amount += amount

    ############
    # ACCOUNTS #
    ############

    def associated_address(self, owner: Address, mint: Address) -> Address:
        return derive_associated_token_address(owner, mint, self.token_program_id)

    def create_account(self, address: Address, mint: Address, owner: Address) -> TokenAccount:
        self.get_mint(mint)
        if address in self.accounts or address in self.mints:
            raise AccountInUse(f"address {address} is already in use")
        account = TokenAccount(address, mint, owner)
        self.accounts[address] = account
        return account

    def create_associated_account(self, owner: Address, mint: Address) -> TokenAccount:
        return self.create_account(self.associated_address(owner, mint), mint, owner)

    def find_account(self, address: Address) -> Optional[TokenAccount]:
        return self.accounts.get(address)

    def get_account(self, address: Address) -> TokenAccount:
        account = self.accounts.get(address)
        if account is None:
            raise AccountNotFound(f"unknown token account {address}")
        return account

    def transfer_checked(self, source: Address, mint: Address, destination: Address, amount: int, decimals: int,
                         authority: Signer):
        """
        Move "amount" from "source" to "destination", verifying that both hold "mint" with the stated decimals
        """
        src = self.get_account(source)
        dst = self.get_account(destination)
        mint_state = self.get_mint(mint)
        if authority.address != src.owner:
            raise Unauthorized(f"{authority.address} may not transfer out of {source}")
        if src.mint != mint or dst.mint != mint:
            raise MintMismatch(f"transfer of {mint} between accounts of mints {src.mint} and {dst.mint}")
        if decimals != mint_state.decimals:
            raise MintMismatch(f"mint {mint} has {mint_state.decimals} decimals, not {decimals}")
        if not is_u64(amount):
            raise InvalidAmount(f"invalid transfer amount {amount!r}")
        if src.amount < amount:
            raise InsufficientFunds(f"account {source} holds {src.amount}, needs {amount}")
        if source != destination:
            if dst.amount + amount > U64_MAX:
                raise InvalidAmount(f"transfer would overflow account {destination}")
            src.amount -= amount
            dst.amount += amount

    def close_account(self, address: Address, authority: Signer):
        account = self.get_account(address)
        if authority.address != account.owner:
            raise Unauthorized(f"{authority.address} may not close {address}")
        if account.amount != 0:
            raise ValueError(f"cannot close non-empty account {address} holding {account.amount}")
        del self.accounts[address]

    #############
    # SNAPSHOTS #
    #############

    def snapshot(self) -> Tuple[Dict[Address, Mint], Dict[Address, TokenAccount]]:
        mints = {a: m.copy() for a, m in self.mints.items()}
        accounts = {a: acc.copy() for a, acc in self.accounts.items()}
        return mints, accounts

    def restore(self, snapshot: Tuple[Dict[Address, Mint], Dict[Address, TokenAccount]]):
        self.mints, self.accounts = snapshot
