class SwapError(Exception):
    """
    Base class of all typed rejections. An operation raising it leaves the ledger exactly as it was before the operation
    """

    def __init__(self, msg: str):
        super().__init__(msg)


class DuplicateOffer(SwapError):
    """
    An offer already exists for this (maker, offer_id); choose a new offer id
    """


class InvalidAmount(SwapError):
    """
    An amount is not a positive integer representable in 64 bits
    """


class InvalidOfferId(SwapError):
    """
    An offer id is neither an 8-byte value nor an integer in [0, 2^64)
    """


class InsufficientFunds(SwapError):
    pass


class VaultNotFound(SwapError):
    """
    The vault of an offer is missing or empty, i.e., the offer was already taken or refunded
    """


class AmountMismatch(SwapError):
    """
    The amount supplied by a taker differs from the amount wanted by the maker
    """


class AccountNotFound(SwapError):
    pass


class MintMismatch(SwapError):
    pass


class Unauthorized(SwapError):
    """
    A signer does not hold the authority it tries to exercise
    """


class AccountInUse(SwapError):
    """
    An account or mint already exists at the address to be initialized
    """
