"""
Threefish-256 Block Cipher

This module implements Ferguson et al.'s Threefish-256 tweakable block
cipher, an ARX design over four 64-bit words. The key argument carries the
256-bit key followed by the 128-bit tweak.

One round here is one subkey injection followed by four MIX/permute layers,
so the full cipher's 72 MIX layers and 19 injections are 18 rounds plus the
final subkey.
"""

from typing import List

from .block_cipher import BlockCipher
from ..key_schedule.arx_key_schedule import (THREEFISH_MAX_ROUNDS, MASK64, expand_key,
                                             pack_words_le, unpack_words_le,
                                             rotate_left, rotate_right)

# Rotation constants R(d, j) for the four layers of even and odd rounds.
ROTATIONS = (
    ((14, 16), (52, 57), (23, 40), (5, 37)),
    ((25, 33), (46, 12), (58, 22), (32, 32)),
)

# Word pairs mixed in each layer; the permutation between layers swaps
# words 1 and 3.
MIX_PAIRS = (((0, 1), (2, 3)), ((0, 3), (2, 1)))


def mix(words: List[int], a: int, b: int, rotation: int) -> None:
    """
    Threefish MIX on words a and b, in place.

    Args:
        words: The four state words
        a: Index of the word that absorbs the sum
        b: Index of the word that is rotated and XORed
        rotation: Left rotation amount
    """
    words[a] = (words[a] + words[b]) & MASK64
    words[b] = words[a] ^ rotate_left(words[b], rotation, 64)


def inverse_mix(words: List[int], a: int, b: int, rotation: int) -> None:
    """Undo mix(): XOR, rotate right, then subtract."""
    words[b] = rotate_right(words[a] ^ words[b], rotation, 64)
    words[a] = (words[a] - words[b]) & MASK64


class Threefish256(BlockCipher):
    """
    Threefish-256: 32-byte block, 48-byte key (key || tweak), 18 rounds.
    """

    def block_size(self) -> int:
        return 32

    def key_size(self) -> int:
        return 48

    def num_rounds(self) -> int:
        return THREEFISH_MAX_ROUNDS

    def _expand_key(self, key: bytes) -> List[List[int]]:
        return expand_key(key, self.rounds)

    def _encrypt(self, block: bytearray, schedule: List[List[int]]) -> None:
        words = pack_words_le(block, 4)

        for s in range(self.rounds):
            self._add_subkey(words, schedule[s])
            rotations = ROTATIONS[s % 2]
            for layer in range(4):
                (a0, b0), (a1, b1) = MIX_PAIRS[layer % 2]
                mix(words, a0, b0, rotations[layer][0])
                mix(words, a1, b1, rotations[layer][1])
        self._add_subkey(words, schedule[self.rounds])

        block[:] = unpack_words_le(words)

    def _decrypt(self, block: bytearray, schedule: List[List[int]]) -> None:
        words = pack_words_le(block, 4)

        self._subtract_subkey(words, schedule[self.rounds])
        for s in range(self.rounds - 1, -1, -1):
            rotations = ROTATIONS[s % 2]
            for layer in range(3, -1, -1):
                (a0, b0), (a1, b1) = MIX_PAIRS[layer % 2]
                inverse_mix(words, a1, b1, rotations[layer][1])
                inverse_mix(words, a0, b0, rotations[layer][0])
            self._subtract_subkey(words, schedule[s])

        block[:] = unpack_words_le(words)

    @staticmethod
    def _add_subkey(words: List[int], subkey: List[int]) -> None:
        """Inject a subkey by word-wise addition modulo 2**64."""
        for i in range(4):
            words[i] = (words[i] + subkey[i]) & MASK64

    @staticmethod
    def _subtract_subkey(words: List[int], subkey: List[int]) -> None:
        """Remove an injected subkey."""
        for i in range(4):
            words[i] = (words[i] - subkey[i]) & MASK64
