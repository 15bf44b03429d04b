import random

from blocklab.cipher_core import Threefish256
from blocklab.cipher_core.threefish256 import ROTATIONS, inverse_mix, mix
from blocklab.key_schedule.arx_key_schedule import (KEY_PARITY, MASK64, expand_key,
                                                    pack_words_le, rotate_left,
                                                    rotate_right, unpack_words_le)


def test_zero_vector():
    cipher = Threefish256()
    cipher.set_key(bytes(48))
    block = bytearray(32)
    cipher.encrypt(block)
    assert block.hex() == '84da2a1f8beaee947066ae3e3103f1ad536db1f4a1192495116b9f3ce6133fd8'
    cipher.decrypt(block)
    assert block == bytearray(32)


def test_rotation_schedule():
    flat = [r for layer in ROTATIONS for pair in layer for r in pair]
    assert flat == [14, 16, 52, 57, 23, 40, 5, 37, 25, 33, 46, 12, 58, 22, 32, 32]


def test_key_schedule_extension_words():
    rng = random.Random(256)
    key = bytes(rng.getrandbits(8) for _ in range(48))
    k = pack_words_le(key, 4)
    t = pack_words_le(key, 2, offset=32)
    k4 = KEY_PARITY ^ k[0] ^ k[1] ^ k[2] ^ k[3]
    t2 = t[0] ^ t[1]

    subkeys = expand_key(key)
    assert len(subkeys) == 19
    assert subkeys[0] == [k[0], (k[1] + t[0]) & MASK64, (k[2] + t[1]) & MASK64, k[3]]
    assert subkeys[4] == [k4, (k[0] + t[1]) & MASK64, (k[1] + t2) & MASK64, (k[2] + 4) & MASK64]
    assert subkeys[18][3] == (k[(18 + 3) % 5] + 18) & MASK64
    assert expand_key(key, 5) == subkeys[:6]


def test_mix_is_invertible():
    rng = random.Random(72)
    for rotation in (5, 32, 57):
        words = [rng.getrandbits(64) for _ in range(4)]
        original = list(words)
        mix(words, 0, 3, rotation)
        assert words != original
        inverse_mix(words, 0, 3, rotation)
        assert words == original


def test_word_packing_is_little_endian():
    data = bytes(range(32))
    words = pack_words_le(data, 4)
    assert words[0] == 0x0706050403020100
    assert unpack_words_le(words) == data


def test_rotations():
    assert rotate_left(1 << 63, 1, 64) == 1
    assert rotate_right(1, 1, 64) == 1 << 63
    assert rotate_left(0x80, 1, 8) == 0x01
    assert rotate_left(0x12345678, 0) == 0x12345678


def test_odd_round_counts_roundtrip():
    rng = random.Random(3)
    key = bytes(rng.getrandbits(8) for _ in range(48))
    plaintext = bytes(rng.getrandbits(8) for _ in range(32))
    for rounds in (1, 3, 9, 17):
        cipher = Threefish256(rounds)
        cipher.set_key(key)
        block = bytearray(plaintext)
        cipher.encrypt(block)
        cipher.decrypt(block)
        assert bytes(block) == plaintext


def test_tweak_changes_ciphertext():
    key = bytes(32)
    outputs = set()
    for tweak in (bytes(16), bytes([1]) + bytes(15)):
        cipher = Threefish256()
        cipher.set_key(key + tweak)
        block = bytearray(32)
        cipher.encrypt(block)
        outputs.add(bytes(block))
    assert len(outputs) == 2
