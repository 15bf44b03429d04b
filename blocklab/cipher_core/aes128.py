"""
AES-128 Block Cipher

This module implements the NIST AES block cipher with a 128-bit key and a
configurable number of rounds.

The 4x4 state matrix is stored as a 16-byte array in column-major order:

    s00 s01 s02 s03        s[0] s[4] s[ 8] s[12]
    s10 s11 s12 s13  --->  s[1] s[5] s[ 9] s[13]
    s20 s21 s22 s23        s[2] s[6] s[10] s[14]
    s30 s31 s32 s33        s[3] s[7] s[11] s[15]
"""

from typing import List

from .block_cipher import BlockCipher
from ..key_schedule.aes_key_schedule import AES_MAX_ROUNDS, expand_key, multiplication_table
from ..sbox_gen.tables import AES_SBOX, inverse_sbox

# ShiftRows as a gather: new_state[i] = state[SHIFT_ROWS[i]]
SHIFT_ROWS = tuple((i + 4 * (i % 4)) % 16 for i in range(16))
INV_SHIFT_ROWS = tuple((i - 4 * (i % 4)) % 16 for i in range(16))


def _add_round_key(state: bytearray, round_key: bytes) -> None:
    """
    XOR the state with the round key, in place.

    Args:
        state: The current 16-byte state
        round_key: The round key to add
    """
    for i in range(16):
        state[i] ^= round_key[i]


def _sub_bytes(state: bytearray, sbox) -> None:
    """
    Apply the S-box substitution to each byte of the state.

    Args:
        state: The current 16-byte state
        sbox: The S-box, or the inverse S-box for decryption
    """
    for i in range(16):
        state[i] = sbox[state[i]]


def _shift_rows(state: bytearray, table) -> None:
    """Permute the state bytes by SHIFT_ROWS or INV_SHIFT_ROWS."""
    state[:] = bytes(state[j] for j in table)



def _mix_columns(state: bytearray) -> None:
    """Multiply each column by the MDS matrix [2 3 1 1; 1 2 3 1; 1 1 2 3; 3 1 1 2]."""
    m2 = multiplication_table(2)
    m3 = multiplication_table(3)
    for c in range(0, 16, 4):
        a, b, d, e = state[c], state[c + 1], state[c + 2], state[c + 3]
        state[c] = m2[a] ^ m3[b] ^ d ^ e
        state[c + 1] = a ^ m2[b] ^ m3[d] ^ e
        state[c + 2] = a ^ b ^ m2[d] ^ m3[e]
        state[c + 3] = m3[a] ^ b ^ d ^ m2[e]


def _inv_mix_columns(state: bytearray) -> None:
    """Multiply each column by the inverse matrix [14 11 13 9; 9 14 11 13; ...]."""
    m9 = multiplication_table(9)
    m11 = multiplication_table(11)
    m13 = multiplication_table(13)
    m14 = multiplication_table(14)
    for c in range(0, 16, 4):
        a, b, d, e = state[c], state[c + 1], state[c + 2], state[c + 3]
        state[c] = m14[a] ^ m11[b] ^ m13[d] ^ m9[e]
        state[c + 1] = m9[a] ^ m14[b] ^ m11[d] ^ m13[e]
        state[c + 2] = m13[a] ^ m9[b] ^ m14[d] ^ m11[e]
        state[c + 3] = m11[a] ^ m13[b] ^ m9[d] ^ m14[e]


class AES128(BlockCipher):
    """
    AES with a 128-bit key: 16-byte block, 16-byte key, 10 rounds.

    A round-reduced instance with R rounds runs AddRoundKey(0), R - 1 full
    rounds and a final round without MixColumns, exactly like the full
    cipher does for R = 10.
    """

    def block_size(self) -> int:
        return 16

    def key_size(self) -> int:
        return 16

    def num_rounds(self) -> int:
        return AES_MAX_ROUNDS

    def _expand_key(self, key: bytes) -> List[bytes]:
        return expand_key(key, self.rounds)

    def _encrypt(self, block: bytearray, schedule: List[bytes]) -> None:
        rounds = self.rounds
        _add_round_key(block, schedule[0])
        for r in range(1, rounds):
            _sub_bytes(block, AES_SBOX)
            _shift_rows(block, SHIFT_ROWS)
            _mix_columns(block)
            _add_round_key(block, schedule[r])
        _sub_bytes(block, AES_SBOX)
        _shift_rows(block, SHIFT_ROWS)
        _add_round_key(block, schedule[rounds])

    def _decrypt(self, block: bytearray, schedule: List[bytes]) -> None:
        rounds = self.rounds
        inv_sbox = inverse_sbox(AES_SBOX)
        _add_round_key(block, schedule[rounds])
        _shift_rows(block, INV_SHIFT_ROWS)
        _sub_bytes(block, inv_sbox)
        for r in range(rounds - 1, 0, -1):
            _add_round_key(block, schedule[r])
            _inv_mix_columns(block)
            _shift_rows(block, INV_SHIFT_ROWS)
            _sub_bytes(block, inv_sbox)
        _add_round_key(block, schedule[0])
