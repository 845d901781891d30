import logging

# Example:
# 2026-10-17_20-38-19 [WARNING, tokenswap.program.swap]: rejected take_offer: ...
full_formatter = logging.Formatter('%(asctime)s [%(levelname)7s, %(name)s]: %(message)s', datefmt="%Y-%m-%d_%H-%M-%S")

# Example:
# [   INFO, tokenswap.runtime.runtime] created new user with address 0x1a2b...
standard_formatter = logging.Formatter('[%(levelname)7s, %(name)s] %(message)s')

# Example:
# 2026-10-17T20:38:19 settled offer=0x.. maker=0x.. taker=0x.. a=1000000 b=1000000
audit_formatter = logging.Formatter('%(asctime)s %(message)s', datefmt="%Y-%m-%dT%H:%M:%S")
