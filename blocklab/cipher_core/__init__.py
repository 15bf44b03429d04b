"""
Cipher Core Package

This package implements the block cipher contract, the concrete ciphers
(AES-128, PRESENT-80, HIGHT, Threefish-256), the name-based cipher registry
and the known-answer test vectors.
"""

from .block_cipher import (BlockCipher, InvalidParameterError, UnsupportedCipherError,
                           encrypt_block, decrypt_block)
from .aes128 import AES128
from .present80 import Present80
from .hight import Hight
from .threefish256 import Threefish256
from .registry import CipherType, available_ciphers, create_cipher, resolve_cipher_type
from .test_vectors import KNOWN_ANSWERS, verify_known_answers

__all__ = ['BlockCipher', 'InvalidParameterError', 'UnsupportedCipherError',
           'encrypt_block', 'decrypt_block', 'AES128', 'Present80', 'Hight',
           'Threefish256', 'CipherType', 'available_ciphers', 'create_cipher',
           'resolve_cipher_type', 'KNOWN_ANSWERS', 'verify_known_answers']
