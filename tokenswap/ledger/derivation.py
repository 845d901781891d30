"""
Deterministic address derivation.

Every address the swap program controls is a hash of stable public inputs, so makers, takers and auditors can all
recompute which offer record and which vault belong to a given (maker, offer_id) without asking the program.
"""
import hashlib
from typing import Sequence, List

from tokenswap.ledger.types import Address, OFFER_ID_LENGTH
from tokenswap.utils.general import to_le_bytes

MAX_SEED_LENGTH = 32
MAX_SEEDS = 16
PDA_MARKER = b"ProgramDerivedAddress"
OFFER_SEED = b"offer"

# sha256(b"token-program") and sha256(b"associated-token-program")
TOKEN_PROGRAM_ID = Address('4244728fe64d60c534eb9c1e08b3ab985d00b614d926c02eee1c6c64bb12bc4c')
ASSOCIATED_TOKEN_PROGRAM_ID = Address('b0921878c299935a4733a3e0ef4a77f11f5d52902ff80d4a471fe90470d7344c')


def create_program_address(seeds: Sequence[bytes], program_id: Address) -> Address:
    if len(seeds) > MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS} seeds allowed, got {len(seeds)}")
    h = hashlib.sha256()
    for seed in seeds:
        if len(seed) > MAX_SEED_LENGTH:
            raise ValueError(f"seed exceeds {MAX_SEED_LENGTH} bytes: {len(seed)}")
        h.update(seed)
    h.update(program_id)
    h.update(PDA_MARKER)
    return Address(h.digest())


def offer_seeds(maker: Address, offer_id: int) -> List[bytes]:
    return [OFFER_SEED, bytes(maker), to_le_bytes(offer_id, OFFER_ID_LENGTH)]


def derive_offer_key(maker: Address, offer_id: int, program_id: Address) -> Address:
    return create_program_address(offer_seeds(maker, offer_id), program_id)


def derive_associated_token_address(owner: Address, mint: Address,
                                    token_program_id: Address = TOKEN_PROGRAM_ID) -> Address:
    """
    The canonical token account of "owner" for "mint"
    """
    return create_program_address([bytes(owner), bytes(token_program_id), bytes(mint)], ASSOCIATED_TOKEN_PROGRAM_ID)


def derive_vault_key(offer_key: Address, token_mint_a: Address) -> Address:
    # the vault is the offer's own token account for the offered mint
    return derive_associated_token_address(offer_key, token_mint_a)
