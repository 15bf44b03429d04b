"""
S-box Package

This package holds the static substitution and permutation tables used by
the SPN ciphers and tools for measuring the cryptographic properties of
S-boxes.
"""

from .tables import (AES_SBOX, PRESENT_SBOX, inverse_sbox, present_permutation,
                     inverse_permutation)
from .properties import (difference_distribution_table, linear_approximation_table,
                         differential_uniformity, linear_bias, evaluate_sbox)

__all__ = ['AES_SBOX', 'PRESENT_SBOX', 'inverse_sbox', 'present_permutation',
           'inverse_permutation', 'difference_distribution_table',
           'linear_approximation_table', 'differential_uniformity',
           'linear_bias', 'evaluate_sbox']
