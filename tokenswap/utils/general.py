def to_le_bytes(x: int, length: int) -> bytes:
    return x.to_bytes(length, 'little')


def short_hex(b: bytes, length: int = 8) -> str:
    """
    Abbreviated hex rendering for log messages, e.g. "0x1a2b3c4d.."
    """
    return '0x' + b[:length // 2].hex() + '..'
