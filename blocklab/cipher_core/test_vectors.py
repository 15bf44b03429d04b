"""
Known-Answer Tests

Published test vectors for the full-round ciphers and a helper that checks
an implementation against them.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .registry import CipherType, create_cipher, resolve_cipher_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KnownAnswer:
    """A single test vector; all fields except ``cipher`` are hex strings."""
    cipher: CipherType
    key: str
    plaintext: str
    ciphertext: str


@dataclass(frozen=True)
class KnownAnswerResult:
    vector: KnownAnswer
    encrypted: str
    decrypted: str

    @property
    def passed(self) -> bool:
        return (self.encrypted == self.vector.ciphertext
                and self.decrypted == self.vector.plaintext)


KNOWN_ANSWERS = (
    # FIPS-197 Appendix B
    KnownAnswer(CipherType.AES128,
                '2b7e151628aed2a6abf7158809cf4f3c',
                '3243f6a8885a308d313198a2e0370734',
                '3925841d02dc09fbdc118597196a0b32'),
    # FIPS-197 Appendix C.1
    KnownAnswer(CipherType.AES128,
                '000102030405060708090a0b0c0d0e0f',
                '00112233445566778899aabbccddeeff',
                '69c4e0d86a7b0430d8cdb78070b4c55a'),
    # PRESENT paper, Appendix I
    KnownAnswer(CipherType.PRESENT80,
                '00000000000000000000', '0000000000000000', '5579c1387b228445'),
    KnownAnswer(CipherType.PRESENT80,
                'ffffffffffffffffffff', '0000000000000000', 'e72c46c0f5945049'),
    KnownAnswer(CipherType.PRESENT80,
                '00000000000000000000', 'ffffffffffffffff', 'a112ffc72f68417b'),
    KnownAnswer(CipherType.PRESENT80,
                'ffffffffffffffffffff', 'ffffffffffffffff', '3333dcd3213210d2'),
    # Skein 1.3 reference, Threefish-256 with zero key, tweak and plaintext
    KnownAnswer(CipherType.THREEFISH256,
                '00' * 48, '00' * 32,
                '84da2a1f8beaee947066ae3e3103f1ad536db1f4a1192495116b9f3ce6133fd8'),
    # HIGHT paper, first vector; stored MK0..MK15 and P0..P7, the reverse of
    # the byte order printed in the paper
    KnownAnswer(CipherType.HIGHT,
                'ffeeddccbbaa99887766554433221100', '0000000000000000', 'f2034fd9ae18f400'),
)


def check_known_answer(vector: KnownAnswer) -> KnownAnswerResult:
    """
    Encrypt and decrypt one test vector with a full-round cipher.

    Args:
        vector: The test vector

    Returns:
        The encrypted and decrypted texts as hex strings
    """
    cipher = create_cipher(vector.cipher)
    cipher.set_key(bytes.fromhex(vector.key))
    text = bytearray.fromhex(vector.plaintext)
    cipher.encrypt(text)
    encrypted = text.hex()
    cipher.decrypt(text)
    return KnownAnswerResult(vector, encrypted, text.hex())


def verify_known_answers(cipher: Optional[str] = None) -> List[KnownAnswerResult]:
    """
    Check the known-answer vectors, optionally for a single cipher.

    Args:
        cipher: Cipher name to restrict the check to (default: all)

    Returns:
        One result per vector checked
    """
    selected = resolve_cipher_type(cipher) if cipher is not None else None
    results = []
    for vector in KNOWN_ANSWERS:
        if selected is not None and vector.cipher is not selected:
            continue
        result = check_known_answer(vector)
        if result.passed:
            logger.debug("%s KAT passed: %s", vector.cipher.value, vector.ciphertext)
        else:
            logger.warning("%s KAT failed: expected %s, got %s",
                           vector.cipher.value, vector.ciphertext, result.encrypted)
        results.append(result)
    return results
