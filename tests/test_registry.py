import pytest

from blocklab.cipher_core import (AES128, CipherType, Hight, InvalidParameterError, Present80,
                                  Threefish256, UnsupportedCipherError, available_ciphers,
                                  create_cipher, decrypt_block, encrypt_block,
                                  verify_known_answers)


def test_available_ciphers():
    assert available_ciphers() == ['aes128', 'present80', 'hight', 'threefish256']


@pytest.mark.parametrize("name, cls", [
    ('aes128', AES128),
    ('PRESENT80', Present80),
    ('hight', Hight),
    (CipherType.THREEFISH256, Threefish256),
])
def test_create_cipher(name, cls):
    cipher = create_cipher(name, 2)
    assert isinstance(cipher, cls)
    assert cipher.rounds == 2


def test_create_cipher_defaults_to_full_rounds():
    assert create_cipher('present80').rounds == 31


def test_unknown_cipher():
    with pytest.raises(UnsupportedCipherError) as excinfo:
        create_cipher('des')
    assert 'aes128' in str(excinfo.value)


def test_invalid_rounds_through_registry():
    with pytest.raises(InvalidParameterError):
        create_cipher('hight', 33)


def test_convenience_functions():
    key = bytes.fromhex('000102030405060708090a0b0c0d0e0f')
    plaintext = bytes.fromhex('00112233445566778899aabbccddeeff')
    ciphertext = encrypt_block(plaintext, key, 'aes128')
    assert ciphertext.hex() == '69c4e0d86a7b0430d8cdb78070b4c55a'
    assert decrypt_block(ciphertext, key, 'aes128') == plaintext
    assert decrypt_block(encrypt_block(plaintext, key, 'aes128', 4), key, 'aes128', 4) == plaintext


def test_known_answers_all_pass():
    results = verify_known_answers()
    assert len(results) == 8
    assert all(result.passed for result in results)


def test_known_answers_single_cipher():
    results = verify_known_answers('present80')
    assert len(results) == 4
    assert {result.vector.cipher for result in results} == {CipherType.PRESENT80}
    hight = verify_known_answers('hight')
    assert len(hight) == 1
    assert hight[0].passed
