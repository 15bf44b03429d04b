"""
S-box Property Analysis

This module measures the cryptographic quality of an n-bit S-box, focusing
on differential uniformity and linear bias, the two properties that bound
the probability of differential and linear characteristics through the
substitution layer of an SPN cipher.
"""

import logging
from typing import Dict, Sequence

import numpy as np

from ..cipher_core.block_cipher import InvalidParameterError
from .tables import is_permutation

logger = logging.getLogger(__name__)


def _sbox_bits(sbox: Sequence[int]) -> int:
    """
    Validate an S-box and return its input width.

    Args:
        sbox: Lookup table with 2**n entries

    Returns:
        n, the number of input bits
    """
    size = len(sbox)
    bits = size.bit_length() - 1
    if size < 2 or size != 1 << bits:
        raise InvalidParameterError(
            f"S-box must have a power-of-two number of entries, got {size}")
    if not is_permutation(sbox):
        raise InvalidParameterError("S-box must be a bijection")
    return bits


def _parity(values: np.ndarray) -> np.ndarray:
    """Parity (0 or 1) of each entry of a non-negative integer array."""
    # Fold the bits of each entry down into bit 0
    values = values.copy()
    shift = 1
    while shift < 32:
        values ^= values >> shift
        shift <<= 1
    return values & 1


def difference_distribution_table(sbox: Sequence[int]) -> np.ndarray:
    """
    Calculate the difference distribution table (DDT) of an S-box.

    Entry [dx, dy] counts the inputs x with S(x) ^ S(x ^ dx) == dy.

    Args:
        sbox: The S-box to evaluate

    Returns:
        A (2^n, 2^n) integer array
    """
    bits = _sbox_bits(sbox)
    size = 1 << bits
    table = np.asarray(sbox, dtype=np.int64)
    x = np.arange(size, dtype=np.int64)

    ddt = np.zeros((size, size), dtype=np.int64)
    for dx in range(size):
        dy = table[x] ^ table[x ^ dx]
        ddt[dx] = np.bincount(dy, minlength=size)
    return ddt


def linear_approximation_table(sbox: Sequence[int]) -> np.ndarray:
    """
    Calculate the linear approximation table (LAT) of an S-box.

    Entry [a, b] is the number of inputs x for which the parity of a & x
    equals the parity of b & S(x), minus 2^(n-1). Zero means no bias.

    Args:
        sbox: The S-box to evaluate

    Returns:
        A (2^n, 2^n) integer array
    """
    bits = _sbox_bits(sbox)
    size = 1 << bits
    table = np.asarray(sbox, dtype=np.int64)
    masks = np.arange(size, dtype=np.int64)

    # (-1)^(a.x) and (-1)^(b.S(x)); their product summed over x is the
    # Walsh correlation, i.e. twice the LAT entry.
    sign_in = 1 - 2 * _parity(masks[:, None] & masks[None, :])
    sign_out = 1 - 2 * _parity(masks[:, None] & table[None, :])
    return (sign_in @ sign_out.T) // 2


def differential_uniformity(sbox: Sequence[int]) -> int:
    """
    Maximum DDT entry over non-zero input differences.

    Lower values indicate better resistance to differential cryptanalysis.
    """
    ddt = difference_distribution_table(sbox)
    return int(np.max(ddt[1:, :]))


def linear_bias(sbox: Sequence[int]) -> float:
    """
    Maximum absolute LAT entry over non-zero masks, normalized to [0, 1].

    Lower values indicate better resistance to linear cryptanalysis.
    """
    lat = linear_approximation_table(sbox)
    half = len(sbox) // 2
    return float(np.max(np.abs(lat[1:, 1:]))) / half


def evaluate_sbox(sbox: Sequence[int]) -> Dict[str, float]:
    """
    Evaluate an S-box for cryptographic properties.

    Args:
        sbox: The S-box to evaluate

    Returns:
        A dictionary with the S-box width, differential uniformity,
        maximum differential probability and linear bias
    """
    bits = _sbox_bits(sbox)
    diff_score = differential_uniformity(sbox)
    linear_score = linear_bias(sbox)
    logger.debug("Evaluated %d-bit S-box: uniformity=%d, bias=%.4f",
                 bits, diff_score, linear_score)

    return {
        'bits': bits,
        'differential': diff_score,
        'differential_probability': diff_score / float(1 << bits),
        'linear': linear_score,
    }
