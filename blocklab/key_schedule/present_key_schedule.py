"""
PRESENT-80 Key Schedule

The 80-bit key is kept in a register (a Python int masked to 80 bits). Each
round the register is rotated, its top nibble is passed through the PRESENT
S-box and the round counter is XORed in; the round key is the register's
upper 64 bits.
"""

import logging
from typing import List

from ..sbox_gen.tables import PRESENT_SBOX

logger = logging.getLogger(__name__)

PRESENT_MAX_ROUNDS = 31

KEY_BITS = 80
KEY_MASK = (1 << KEY_BITS) - 1
# Register with its top nibble cleared
KEY_LOW_MASK = (1 << (KEY_BITS - 4)) - 1


def rotate_key_register(register: int, shift: int) -> int:
    """Rotate the 80-bit key register left by ``shift`` bits."""
    return ((register << shift) | (register >> (KEY_BITS - shift))) & KEY_MASK


def update_key_register(register: int, round_counter: int) -> int:
    """
    Apply one PRESENT-80 key register update.

    Args:
        register: Current 80-bit register value
        round_counter: Round number (1 .. 31), XORed into bits 15 .. 19

    Returns:
        The updated register
    """
    register = rotate_key_register(register, 61)
    register = (register & KEY_LOW_MASK) | (PRESENT_SBOX[register >> 76] << 76)
    return register ^ (round_counter << 15)


def expand_key(master_key: bytes, num_rounds: int = PRESENT_MAX_ROUNDS) -> List[int]:
    """
    Expand a 10-byte key into num_rounds + 1 64-bit round keys.

    Args:
        master_key: The 80-bit key, big-endian
        num_rounds: Number of rounds (1 .. 31)

    Returns:
        A list of 64-bit round keys, index = round number
    """
    if len(master_key) != 10:
        raise ValueError("Master key must be 10 bytes (80 bits)")

    register = int.from_bytes(master_key, byteorder='big')
    round_keys = [register >> 16]
    for r in range(1, num_rounds + 1):
        register = update_key_register(register, r)
        round_keys.append(register >> 16)
    logger.debug("Expanded PRESENT-80 key into %d round keys", len(round_keys))
    return round_keys
