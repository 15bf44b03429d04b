"""
PRESENT-80 Block Cipher

This module implements Bogdanov et al.'s PRESENT lightweight block cipher
with an 80-bit key: a 64-bit substitution-permutation network with a 4-bit
S-box layer and a bit permutation layer.
"""

from functools import lru_cache
from typing import List, Tuple

from .block_cipher import BlockCipher
from ..key_schedule.present_key_schedule import PRESENT_MAX_ROUNDS, expand_key
from ..sbox_gen.tables import PRESENT_SBOX, inverse_sbox, present_permutation, inverse_permutation


@lru_cache(maxsize=None)
def _nibble_permutation_table(perm: Tuple[int, ...]) -> Tuple[Tuple[int, ...], ...]:
    """
    Precompute a bit permutation one nibble at a time.

    Entry [k][v] is the 64-bit word obtained by permuting the value v placed
    at nibble position k, so a full permutation is the OR of 16 lookups.
    """
    table = []
    for k in range(16):
        row = []
        for v in range(16):
            word = 0
            for b in range(4):
                if (v >> b) & 1:
                    word |= 1 << perm[4 * k + b]
            row.append(word)
        table.append(tuple(row))
    return tuple(table)


def sbox_layer(state: int, sbox: Tuple[int, ...]) -> int:
    """Substitute each of the 16 nibbles of a 64-bit word."""
    result = 0
    for i in range(0, 64, 4):
        result |= sbox[(state >> i) & 0xf] << i
    return result


def permutation_layer(state: int, perm: Tuple[int, ...]) -> int:
    """Move bit i of a 64-bit word to bit perm[i]."""
    table = _nibble_permutation_table(perm)
    result = 0
    for k in range(16):
        result |= table[k][(state >> (4 * k)) & 0xf]
    return result


class Present80(BlockCipher):
    """
    PRESENT with an 80-bit key: 8-byte block, 10-byte key, 31 rounds.

    Round r is S-box layer, permutation layer, XOR with round key r; round
    key 0 is XORed in before the first round.
    """

    def block_size(self) -> int:
        return 8

    def key_size(self) -> int:
        return 10

    def num_rounds(self) -> int:
        return PRESENT_MAX_ROUNDS

    def _expand_key(self, key: bytes) -> List[int]:
        return expand_key(key, self.rounds)

    def _encrypt(self, block: bytearray, schedule: List[int]) -> None:
        perm = present_permutation()
        data = int.from_bytes(block, byteorder='big')

        data ^= schedule[0]
        for r in range(1, self.rounds + 1):
            data = sbox_layer(data, PRESENT_SBOX)
            data = permutation_layer(data, perm)
            data ^= schedule[r]

        block[:] = data.to_bytes(8, byteorder='big')

    def _decrypt(self, block: bytearray, schedule: List[int]) -> None:
        inv_perm = inverse_permutation(present_permutation())
        inv_sbox = inverse_sbox(PRESENT_SBOX)
        data = int.from_bytes(block, byteorder='big')

        for r in range(self.rounds, 0, -1):
            data ^= schedule[r]
            data = permutation_layer(data, inv_perm)
            data = sbox_layer(data, inv_sbox)
        data ^= schedule[0]

        block[:] = data.to_bytes(8, byteorder='big')
