"""
Cipher Registry

Maps cipher names to factories so tools can select an algorithm at run time
from a string without reflection.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from .block_cipher import BlockCipher, UnsupportedCipherError
from .aes128 import AES128
from .hight import Hight
from .present80 import Present80
from .threefish256 import Threefish256


class CipherType(str, Enum):
    """Closed set of supported block ciphers."""
    AES128 = 'aes128'
    PRESENT80 = 'present80'
    HIGHT = 'hight'
    THREEFISH256 = 'threefish256'


CIPHER_FACTORIES: Dict[CipherType, Callable[[Optional[int]], BlockCipher]] = {
    CipherType.AES128: AES128,
    CipherType.PRESENT80: Present80,
    CipherType.HIGHT: Hight,
    CipherType.THREEFISH256: Threefish256,
}


def available_ciphers() -> List[str]:
    """Names of all registered ciphers, in registry order."""
    return [cipher_type.value for cipher_type in CIPHER_FACTORIES]


def resolve_cipher_type(name: Union[str, CipherType]) -> CipherType:
    """
    Look up a cipher type by name (case-insensitive).

    Raises:
        UnsupportedCipherError: If no cipher is registered under ``name``
    """
    if isinstance(name, CipherType):
        return name
    try:
        return CipherType(str(name).lower())
    except ValueError:
        raise UnsupportedCipherError(
            f"Unknown cipher {name!r}; supported ciphers: "
            f"{', '.join(available_ciphers())}") from None


def create_cipher(name: Union[str, CipherType], rounds: Optional[int] = None) -> BlockCipher:
    """
    Create a new, unkeyed cipher instance.

    Args:
        name: Registered cipher name or CipherType
        rounds: Number of rounds (default: the cipher's full round count)

    Returns:
        A fresh BlockCipher instance
    """
    return CIPHER_FACTORIES[resolve_cipher_type(name)](rounds)
