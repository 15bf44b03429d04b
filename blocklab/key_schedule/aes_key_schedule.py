"""
AES-128 Key Schedule

This module expands a 128-bit AES key into the round keys for rounds
0 .. R and provides the GF(2^8) arithmetic shared with the cipher's
MixColumns layer.
"""

import logging
from functools import lru_cache
from typing import List, Tuple

from ..sbox_gen.tables import AES_SBOX

logger = logging.getLogger(__name__)

# Irreducible polynomial x^8 + x^4 + x^3 + x + 1
AES_POLYNOMIAL = 0x11b

AES_MAX_ROUNDS = 10


def gf_multiply(a: int, b: int) -> int:
    """
    Multiply two elements of GF(2^8) modulo x^8 + x^4 + x^3 + x + 1.

    Args:
        a: First operand (0 .. 255)
        b: Second operand (0 .. 255)

    Returns:
        The field product
    """
    c = 0
    bit = 0x80
    while bit:
        c <<= 1
        if c & 0x100:
            c ^= AES_POLYNOMIAL
        if b & bit:
            c ^= a
        bit >>= 1
    return c


@lru_cache(maxsize=None)
def multiplication_table(factor: int) -> Tuple[int, ...]:
    """Products factor * x for every byte x, computed once per factor."""
    return tuple(gf_multiply(factor, x) for x in range(256))


@lru_cache(maxsize=None)
def round_constants(count: int = AES_MAX_ROUNDS) -> Tuple[int, ...]:
    """
    Round constants 1, 2, 4, ... obtained by repeated doubling in GF(2^8).

    Args:
        count: Number of constants to generate

    Returns:
        Tuple of round constants for rounds 1 .. count
    """
    rcon = []
    value = 1
    for _ in range(count):
        rcon.append(value)
        value = gf_multiply(2, value)
    return tuple(rcon)


def expand_key(master_key: bytes, num_rounds: int = AES_MAX_ROUNDS) -> List[bytes]:
    """
    Expand a 16-byte key into num_rounds + 1 round keys.

    Round key r is laid out column-major like the cipher state, so it can be
    XORed byte by byte into the block.

    Args:
        master_key: The 16-byte key
        num_rounds: Number of rounds (1 .. 10)

    Returns:
        A list of 16-byte round keys, index = round number
    """
    if len(master_key) != 16:
        raise ValueError("Master key must be 16 bytes (128 bits)")

    # Four 4-byte columns
    columns = [list(master_key[i:i + 4]) for i in range(0, 16, 4)]
    rcon = round_constants()

    round_keys = [bytes(master_key)]
    for r in range(1, num_rounds + 1):
        # Column 0: rotated, substituted last column plus round constant
        last = columns[3]
        first = columns[0]
        first[0] ^= AES_SBOX[last[1]] ^ rcon[r - 1]
        first[1] ^= AES_SBOX[last[2]]
        first[2] ^= AES_SBOX[last[3]]
        first[3] ^= AES_SBOX[last[0]]

        # Columns 1 .. 3: XOR chain
        for c in range(1, 4):
            for i in range(4):
                columns[c][i] ^= columns[c - 1][i]

        round_keys.append(bytes(b for column in columns for b in column))

    logger.debug("Expanded AES-128 key into %d round keys", len(round_keys))
    return round_keys
