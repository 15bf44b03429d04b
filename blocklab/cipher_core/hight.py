"""
HIGHT Block Cipher

This module implements Hong et al.'s HIGHT lightweight block cipher: a
byte-oriented generalized Feistel network with a 64-bit block and a 128-bit
key.

Blocks and keys are stored byte 0 first (P0..P7, MK0..MK15), so the hex
strings printed in the HIGHT paper, which list the most significant byte
MK15 or P7 first, appear here byte-reversed.
"""

from functools import lru_cache
from typing import Tuple

from .block_cipher import BlockCipher
from ..key_schedule.arx_key_schedule import rotate_left
from ..key_schedule.hight_key_schedule import HIGHT_MAX_ROUNDS, expand_key


@lru_cache(maxsize=None)
def _f0_table() -> Tuple[int, ...]:
    """F0 for every byte value."""
    return tuple(rotate_left(x, 1, 8) ^ rotate_left(x, 2, 8) ^ rotate_left(x, 7, 8)
                 for x in range(256))


@lru_cache(maxsize=None)
def _f1_table() -> Tuple[int, ...]:
    """F1 for every byte value."""
    return tuple(rotate_left(x, 3, 8) ^ rotate_left(x, 4, 8) ^ rotate_left(x, 6, 8)
                 for x in range(256))


def f0(x: int) -> int:
    """F0(x) = (x <<< 1) ^ (x <<< 2) ^ (x <<< 7)"""
    return _f0_table()[x]


def f1(x: int) -> int:
    """F1(x) = (x <<< 3) ^ (x <<< 4) ^ (x <<< 6)"""
    return _f1_table()[x]


class Hight(BlockCipher):
    """
    HIGHT: 8-byte block, 16-byte key, 32 rounds.

    Each round updates the odd-indexed bytes from the even-indexed ones and
    then rotates the state left by one byte; the last round does not rotate.
    F0 and F1 are never inverted, decryption only undoes the additions and
    XORs they feed into.
    """

    def block_size(self) -> int:
        return 8

    def key_size(self) -> int:
        return 16

    def num_rounds(self) -> int:
        return HIGHT_MAX_ROUNDS

    def _expand_key(self, key: bytes) -> Tuple[bytes, bytes]:
        return expand_key(key, self.rounds)

    def _encrypt(self, block: bytearray, schedule: Tuple[bytes, bytes]) -> None:
        wk, sk = schedule

        # Initial transformation
        block[0] = (block[0] + wk[0]) & 0xff
        block[2] ^= wk[1]
        block[4] = (block[4] + wk[2]) & 0xff
        block[6] ^= wk[3]

        for i in range(self.rounds - 1):
            self._feistel(block, sk, i)
            block[:] = block[7:] + block[:7]
        self._feistel(block, sk, self.rounds - 1)

        # Final transformation
        block[0] = (block[0] + wk[4]) & 0xff
        block[2] ^= wk[5]
        block[4] = (block[4] + wk[6]) & 0xff
        block[6] ^= wk[7]

    def _decrypt(self, block: bytearray, schedule: Tuple[bytes, bytes]) -> None:
        wk, sk = schedule

        block[0] = (block[0] - wk[4]) & 0xff
        block[2] ^= wk[5]
        block[4] = (block[4] - wk[6]) & 0xff
        block[6] ^= wk[7]

        self._inverse_feistel(block, sk, self.rounds - 1)
        for i in range(self.rounds - 2, -1, -1):
            block[:] = block[1:] + block[:1]
            self._inverse_feistel(block, sk, i)

        block[0] = (block[0] - wk[0]) & 0xff
        block[2] ^= wk[1]
        block[4] = (block[4] - wk[2]) & 0xff
        block[6] ^= wk[3]

    @staticmethod
    def _feistel(block: bytearray, sk: bytes, i: int) -> None:
        """
        One HIGHT round without the byte rotation.

        Args:
            block: The 8-byte state, updated in place
            sk: Subkey bytes
            i: Round index; subkeys 4i .. 4i+3 are used
        """
        block[7] ^= (f0(block[6]) + sk[4 * i + 3]) & 0xff
        block[1] = (block[1] + (f1(block[0]) ^ sk[4 * i])) & 0xff
        block[3] ^= (f0(block[2]) + sk[4 * i + 1]) & 0xff
        block[5] = (block[5] + (f1(block[4]) ^ sk[4 * i + 2])) & 0xff

    @staticmethod
    def _inverse_feistel(block: bytearray, sk: bytes, i: int) -> None:
        """Undo _feistel() for round i."""
        block[7] ^= (f0(block[6]) + sk[4 * i + 3]) & 0xff
        block[1] = (block[1] - (f1(block[0]) ^ sk[4 * i])) & 0xff
        block[3] ^= (f0(block[2]) + sk[4 * i + 1]) & 0xff
        block[5] = (block[5] - (f1(block[4]) ^ sk[4 * i + 2])) & 0xff
