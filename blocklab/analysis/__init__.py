"""
Analysis Package

This package implements the avalanche statistical test for round-reduced
block ciphers and the histogram / chi-square machinery it relies on.
"""

from .histogram import Histogram, binomial_probabilities
from .avalanche import (AVALANCHE_DEFAULTS, AvalancheReport, AvalancheTest, RoundResult,
                        hamming_distance, run_avalanche_test)

__all__ = ['Histogram', 'binomial_probabilities', 'AVALANCHE_DEFAULTS',
           'AvalancheReport', 'AvalancheTest', 'RoundResult', 'hamming_distance',
           'run_avalanche_test']
