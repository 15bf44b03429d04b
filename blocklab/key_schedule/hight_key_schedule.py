"""
HIGHT Key Schedule

HIGHT uses eight whitening key bytes and up to 128 subkey bytes. Subkeys are
key bytes, taken in a rotating order, added modulo 256 to round constants
produced by a 7-bit LFSR.
"""

import logging
from functools import lru_cache
from typing import List, Tuple

logger = logging.getLogger(__name__)

HIGHT_MAX_ROUNDS = 32

# LFSR seed for the first round constant
RC_SEED = 0x5a


@lru_cache(maxsize=None)
def round_constants() -> Tuple[int, ...]:
    """
    Generate the 128 HIGHT round constants.

    The LFSR has connection polynomial x^7 + x^3 + 1: each step shifts the
    state right and feeds the XOR of bits 3 and 0 back into bit 6.

    Returns:
        Tuple of 128 byte constants
    """
    constants = []
    s = RC_SEED
    for _ in range(128):
        constants.append(s)
        s = (((s << 3) ^ (s << 6)) & 0x40) | (s >> 1)
    return tuple(constants)


def whitening_keys(master_key: bytes) -> bytes:
    """WK0..WK3 = key[12..15], WK4..WK7 = key[0..3]."""
    return bytes(master_key[12:16] + master_key[0:4])


def expand_key(master_key: bytes, num_rounds: int = HIGHT_MAX_ROUNDS) -> Tuple[bytes, bytes]:
    """
    Derive whitening keys and the subkeys needed for num_rounds rounds.

    Args:
        master_key: The 16-byte key
        num_rounds: Number of rounds (1 .. 32)

    Returns:
        A tuple of (8 whitening key bytes, 4 * num_rounds subkey bytes)
    """
    if len(master_key) != 16:
        raise ValueError("Master key must be 16 bytes (128 bits)")

    rc = round_constants()
    subkeys: List[int] = [0] * 128
    for i in range(8):
        for j in range(8):
            subkeys[16 * i + j] = (master_key[(j - i) % 8] + rc[16 * i + j]) & 0xff
        for j in range(8):
            subkeys[16 * i + j + 8] = (master_key[(j - i) % 8 + 8] + rc[16 * i + j + 8]) & 0xff

    logger.debug("Expanded HIGHT key into 8 whitening and %d subkey bytes", 4 * num_rounds)
    return whitening_keys(master_key), bytes(subkeys[:4 * num_rounds])
