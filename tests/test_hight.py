from blocklab.cipher_core import Hight
from blocklab.cipher_core.hight import f0, f1
from blocklab.key_schedule.hight_key_schedule import expand_key, round_constants, whitening_keys

KEY = bytes.fromhex('00112233445566778899aabbccddeeff')


def _rol8(x, n):
    return ((x << n) | (x >> (8 - n))) & 0xff


def test_round_constants_prefix():
    rc = round_constants()
    assert len(rc) == 128
    assert list(rc[:8]) == [0x5a, 0x6d, 0x36, 0x1b, 0x0d, 0x06, 0x03, 0x41]
    assert all(0 <= c < 0x80 for c in rc)


def test_feistel_functions_are_rotation_xors():
    for x in range(256):
        assert f0(x) == _rol8(x, 1) ^ _rol8(x, 2) ^ _rol8(x, 7)
        assert f1(x) == _rol8(x, 3) ^ _rol8(x, 4) ^ _rol8(x, 6)
    assert f0(0x80) == 0x01 ^ 0x02 ^ 0x40


def test_whitening_keys():
    assert whitening_keys(KEY).hex() == 'ccddeeff00112233'


def test_subkeys():
    rc = round_constants()
    wk, sk = expand_key(KEY)
    assert len(wk) == 8
    assert len(sk) == 128
    assert sk[0] == (KEY[0] + rc[0]) & 0xff
    assert sk[8] == (KEY[8] + rc[8]) & 0xff
    # Second group uses the key bytes rotated by one position
    assert sk[16] == (KEY[7] + rc[16]) & 0xff
    assert sk[24] == (KEY[15] + rc[24]) & 0xff
    assert expand_key(KEY, 3)[1] == sk[:12]


def test_single_round_has_no_byte_rotation():
    wk, sk = expand_key(KEY, 1)
    x = [0x10, 0x21, 0x32, 0x43, 0x54, 0x65, 0x76, 0x87]

    x[0] = (x[0] + wk[0]) & 0xff
    x[2] ^= wk[1]
    x[4] = (x[4] + wk[2]) & 0xff
    x[6] ^= wk[3]
    x[7] ^= (f0(x[6]) + sk[3]) & 0xff
    x[1] = (x[1] + (f1(x[0]) ^ sk[0])) & 0xff
    x[3] ^= (f0(x[2]) + sk[1]) & 0xff
    x[5] = (x[5] + (f1(x[4]) ^ sk[2])) & 0xff
    x[0] = (x[0] + wk[4]) & 0xff
    x[2] ^= wk[5]
    x[4] = (x[4] + wk[6]) & 0xff
    x[6] ^= wk[7]

    cipher = Hight(1)
    cipher.set_key(KEY)
    block = bytearray.fromhex('1021324354657687')
    cipher.encrypt(block)
    assert list(block) == x


def test_roundtrip_full_rounds():
    cipher = Hight()
    cipher.set_key(KEY)
    block = bytearray(8)
    cipher.encrypt(block)
    assert block != bytearray(8)
    cipher.decrypt(block)
    assert block == bytearray(8)


def test_paper_vector():
    # The paper prints MK15..MK0 and P7..P0
    key = bytes.fromhex('00112233445566778899aabbccddeeff')[::-1]
    cipher = Hight()
    cipher.set_key(key)
    block = bytearray(8)
    cipher.encrypt(block)
    assert block[::-1].hex() == '00f418aed94f03f2'
    cipher.decrypt(block)
    assert block == bytearray(8)


def test_f1_subkeys_follow_byte_position():
    # Byte 1 takes SK[4i] and byte 5 takes SK[4i+2]
    wk, sk = expand_key(KEY, 1)
    cipher = Hight(1)
    cipher.set_key(KEY)
    block = bytearray(8)
    cipher.encrypt(block)

    x1 = f1(wk[0]) ^ sk[0]
    x5 = f1(wk[2]) ^ sk[2]
    assert block[1] == x1
    assert block[5] == x5
    assert sk[0] != sk[2]
