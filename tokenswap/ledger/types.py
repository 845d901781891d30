from tokenswap.ledger.errors import InvalidAmount, InvalidOfferId

ADDRESS_LENGTH = 32
OFFER_ID_LENGTH = 8
U64_MAX = 2**64 - 1



class Address(bytes):
    """
    32-byte identity of a user, mint, token account or program-derived account
    """

    def __new__(cls, value: 'bytes | str | int'):
        if isinstance(value, str):
            value = bytes.fromhex(value[2:] if value.startswith('0x') else value)
        elif isinstance(value, int):
            value = value.to_bytes(ADDRESS_LENGTH, 'big')
        value = bytes(value)
        if len(value) != ADDRESS_LENGTH:
            raise ValueError(f"address must be {ADDRESS_LENGTH} bytes, got {len(value)}")
        return super().__new__(cls, value)

    def __str__(self):
        return '0x' + self.hex()

    def __repr__(self):
        return f"Address({str(self)})"


def is_u64(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= U64_MAX


def check_positive_amount(amount, label: str) -> int:
    if not is_u64(amount) or amount == 0:
        raise InvalidAmount(f"{label} must be a positive 64-bit integer, got {amount!r}")
    return amount


def normalize_offer_id(offer_id: 'bytes | int') -> int:
    """
    Offer ids are caller-supplied 8-byte values; both the raw bytes (little endian) and the integer form are accepted
    """
    if isinstance(offer_id, (bytes, bytearray)):
        if len(offer_id) != OFFER_ID_LENGTH:
            raise InvalidOfferId(f"offer id must be {OFFER_ID_LENGTH} bytes, got {len(offer_id)}")
        return int.from_bytes(offer_id, 'little')
    if not is_u64(offer_id):
        raise InvalidOfferId(f"offer id must fit into {OFFER_ID_LENGTH} bytes, got {offer_id!r}")
    return offer_id
