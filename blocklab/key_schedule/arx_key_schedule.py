"""
ARX Helpers and Threefish-256 Key Schedule

This module provides the word rotations used by the ARX (Addition, Rotation,
XOR) ciphers and the Threefish-256 key schedule, which builds every subkey
from an extended key and an extended tweak using only additions.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)

THREEFISH_MAX_ROUNDS = 18

# Key schedule parity constant C240
KEY_PARITY = 0x1BD11BDAA9FC1A22

MASK64 = (1 << 64) - 1


def rotate_left(value: int, shift: int, size: int = 32) -> int:
    """
    Rotate a value left by the specified number of bits.

    Args:
        value: The value to rotate
        shift: The number of bits to rotate by
        size: The bit size of the value

    Returns:
        The rotated value
    """
    shift %= size
    return ((value << shift) | (value >> (size - shift))) & ((1 << size) - 1)


def rotate_right(value: int, shift: int, size: int = 32) -> int:
    """
    Rotate a value right by the specified number of bits.

    Args:
        value: The value to rotate
        shift: The number of bits to rotate by
        size: The bit size of the value

    Returns:
        The rotated value
    """
    shift %= size
    return ((value >> shift) | (value << (size - shift))) & ((1 << size) - 1)


def pack_words_le(data: bytes, count: int, offset: int = 0) -> List[int]:
    """Read ``count`` little-endian 64-bit words starting at ``offset``."""
    return [int.from_bytes(data[offset + 8 * i:offset + 8 * i + 8], byteorder='little')
            for i in range(count)]


def unpack_words_le(words: List[int]) -> bytes:
    """Write 64-bit words as little-endian bytes."""
    return b''.join(w.to_bytes(8, byteorder='little') for w in words)


def expand_key(key_and_tweak: bytes, num_rounds: int = THREEFISH_MAX_ROUNDS) -> List[List[int]]:
    """
    Compute the Threefish-256 subkeys for injections 0 .. num_rounds.

    Args:
        key_and_tweak: 32-byte key followed by a 16-byte tweak
        num_rounds: Number of rounds (1 .. 18)

    Returns:
        A list of num_rounds + 1 subkeys, each a list of four 64-bit words
    """
    if len(key_and_tweak) != 48:
        raise ValueError("Key and tweak must be 48 bytes (256 + 128 bits)")

    k = pack_words_le(key_and_tweak, 4)
    k.append(KEY_PARITY ^ k[0] ^ k[1] ^ k[2] ^ k[3])

    t = pack_words_le(key_and_tweak, 2, offset=32)
    t.append(t[0] ^ t[1])

    subkeys = []
    for s in range(num_rounds + 1):
        subkeys.append([
            k[s % 5],
            (k[(s + 1) % 5] + t[s % 3]) & MASK64,
            (k[(s + 2) % 5] + t[(s + 1) % 3]) & MASK64,
            (k[(s + 3) % 5] + s) & MASK64,
        ])
    logger.debug("Expanded Threefish-256 key and tweak into %d subkeys", len(subkeys))
    return subkeys
