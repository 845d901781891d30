from typing import Dict

from tokenswap.ledger.ledger import Ledger
from tokenswap.runtime.runtime import Runtime

# META-NAME Refund
# META-DESC Alice offers token A, nobody takes it, Alice reclaims her deposit.


def run_refund(ledger: Ledger) -> Dict[str, int]:
    runtime = Runtime(ledger)
    (alice,), (mint_a, mint_b) = runtime.create_accounts_mints_and_token_accounts([[5_000, 0]])

    offer = runtime.make_offer(1, mint_a, mint_b, 2_000, 300, sender=alice)
    balance_while_open = runtime.balance_of(alice.address, mint_a)
    offer.refund(sender=alice)

    return {
        "alice_token_a_while_open": balance_while_open,
        "alice_token_a_after_refund": runtime.balance_of(alice.address, mint_a),
        "offer_open_after_refund": int(offer.exists),
    }
