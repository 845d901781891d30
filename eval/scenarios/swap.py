import secrets
from typing import Dict

from tokenswap.ledger.ledger import Ledger
from tokenswap.runtime.runtime import Runtime

# META-NAME Swap
# META-DESC Alice offers token A for token B, Bob takes the offer.

TOKEN_A_OFFER_AMOUNT = 1_000_000
TOKEN_B_WANTED_AMOUNT = 1_000_000


def run_swap(ledger: Ledger) -> Dict[str, int]:
    runtime = Runtime(ledger)
    (alice, bob), (mint_a, mint_b) = runtime.create_accounts_mints_and_token_accounts([
        # Alice's token balances
        [1_000_000_000, 0],
        # Bob's token balances
        [0, 1_000_000_000],
    ])

    offer_id = secrets.token_bytes(8)
    offer = runtime.make_offer(offer_id, mint_a, mint_b, TOKEN_A_OFFER_AMOUNT, TOKEN_B_WANTED_AMOUNT, sender=alice)
    vault_balance = offer.vault_balance

    offer.take(TOKEN_B_WANTED_AMOUNT, sender=bob)

    return {
        "vault_balance_after_make": vault_balance,
        "bob_token_a": runtime.balance_of(bob.address, mint_a),
        "alice_token_b": runtime.balance_of(alice.address, mint_b),
        "offer_open_after_take": int(offer.exists),
    }
