"""
Block Cipher Contract

This module defines the capability set shared by every block cipher in the
library: fixed block and key sizes, a canonical round count, a key setup
step and in-place encryption/decryption of a single block.

Each concrete cipher is constructed with an explicit number of rounds so that
round-reduced variants can be studied with exactly the same code as the full
cipher.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union


class InvalidParameterError(ValueError):
    """Raised when a cipher or analysis is used outside its contract."""


class UnsupportedCipherError(ValueError):
    """Raised when a cipher is requested by a name that is not registered."""


class BlockCipher(ABC):
    """
    Abstract block cipher parameterized by round count.

    Subclasses provide the algorithm through ``block_size``, ``key_size``,
    ``num_rounds``, ``_expand_key``, ``_encrypt`` and ``_decrypt``. All
    argument checking happens here so that every cipher rejects bad input the
    same way.
    """

    def __init__(self, rounds: Optional[int] = None):
        """
        Initialize the cipher with the given number of rounds.

        Args:
            rounds: Number of rounds (1 .. num_rounds()). Defaults to the
                full round count of the algorithm.
        """
        max_rounds = self.num_rounds()
        if rounds is None:
            rounds = max_rounds
        if isinstance(rounds, bool) or not isinstance(rounds, int) \
                or not 1 <= rounds <= max_rounds:
            raise InvalidParameterError(
                f"{self.name}(): rounds = {rounds!r} illegal, "
                f"must be in 1 .. {max_rounds}")
        self._rounds = rounds
        self._schedule = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def rounds(self) -> int:
        """Number of rounds this instance was constructed with."""
        return self._rounds

    @abstractmethod
    def block_size(self) -> int:
        """Block size in bytes."""

    @abstractmethod
    def key_size(self) -> int:
        """Key size in bytes."""

    @abstractmethod
    def num_rounds(self) -> int:
        """Full (canonical) number of rounds of the algorithm."""

    @abstractmethod
    def _expand_key(self, key: bytes):
        """Derive the key schedule for rounds 0 .. self.rounds."""

    @abstractmethod
    def _encrypt(self, block: bytearray, schedule) -> None:
        """Encrypt a validated block in place."""

    @abstractmethod
    def _decrypt(self, block: bytearray, schedule) -> None:
        """Decrypt a validated block in place."""

    def set_key(self, key: Union[bytes, bytearray]) -> None:
        """
        Set the key for this cipher.

        The whole key schedule is recomputed from ``key``; any previous
        schedule is discarded.

        Args:
            key: Key bytes, exactly key_size() long

        Raises:
            InvalidParameterError: If the key has the wrong length
        """
        if len(key) != self.key_size():
            raise InvalidParameterError(
                f"{self.name}.set_key(): key must be {self.key_size()} bytes")
        self._schedule = self._expand_key(bytes(key))

    def encrypt(self, block: bytearray) -> None:
        """
        Encrypt a block in place with the key from the latest set_key() call.

        Args:
            block: Plaintext on input, ciphertext on output

        Raises:
            InvalidParameterError: If the block is not a bytearray of
                block_size() bytes or no key has been set
        """
        self._check_block(block, "encrypt")
        self._encrypt(block, self._schedule)

    def decrypt(self, block: bytearray) -> None:
        """
        Decrypt a block in place with the key from the latest set_key() call.

        Args:
            block: Ciphertext on input, plaintext on output

        Raises:
            InvalidParameterError: If the block is not a bytearray of
                block_size() bytes or no key has been set
        """
        self._check_block(block, "decrypt")
        self._decrypt(block, self._schedule)

    def _check_block(self, block: bytearray, operation: str) -> None:
        """
        Reject a block that cannot be processed in place.

        Args:
            block: The text passed to encrypt or decrypt
            operation: Operation name used in the error message

        Raises:
            InvalidParameterError: If the block is not a bytearray of
                block_size() bytes, or no key has been set
        """
        if not isinstance(block, bytearray):
            raise InvalidParameterError(
                f"{self.name}.{operation}(): text must be a bytearray, "
                f"got {type(block).__name__}")
        if len(block) != self.block_size():
            raise InvalidParameterError(
                f"{self.name}.{operation}(): text must be "
                f"{self.block_size()} bytes")
        if self._schedule is None:
            raise InvalidParameterError(
                f"{self.name}.{operation}(): no key has been set")

    def __repr__(self) -> str:
        return f"{self.name}(rounds={self._rounds})"


def encrypt_block(plaintext: bytes, key: bytes, cipher: str,
                  rounds: Optional[int] = None) -> bytes:
    """
    Convenience function to encrypt a single block.

    Args:
        plaintext: The plaintext block to encrypt
        key: The key
        cipher: Registered cipher name (e.g. 'aes128')
        rounds: Number of rounds (default: full rounds)

    Returns:
        The encrypted ciphertext block
    """
    from .registry import create_cipher

    instance = create_cipher(cipher, rounds)
    instance.set_key(key)
    block = bytearray(plaintext)
    instance.encrypt(block)
    return bytes(block)


def decrypt_block(ciphertext: bytes, key: bytes, cipher: str,
                  rounds: Optional[int] = None) -> bytes:
    """
    Convenience function to decrypt a single block.

    Args:
        ciphertext: The ciphertext block to decrypt
        key: The key
        cipher: Registered cipher name (e.g. 'aes128')
        rounds: Number of rounds (default: full rounds)

    Returns:
        The decrypted plaintext block
    """
    from .registry import create_cipher

    instance = create_cipher(cipher, rounds)
    instance.set_key(key)
    block = bytearray(ciphertext)
    instance.decrypt(block)
    return bytes(block)
