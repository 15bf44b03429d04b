"""
Histogram with Chi-Square Goodness-of-Fit Test

This module accumulates observed counts in integer buckets and compares them
against a model distribution supplied as a per-bucket probability function.
"""

import math
from typing import Callable, List

import numpy as np
from scipy import stats

from ..cipher_core.block_cipher import InvalidParameterError


def binomial_probabilities(n: int, p: float = 0.5) -> np.ndarray:
    """
    Probabilities of 0 .. n successes in n Bernoulli(p) trials.

    Args:
        n: Number of trials
        p: Success probability

    Returns:
        Array of n + 1 probabilities
    """
    return stats.binom.pmf(np.arange(n + 1), n, p)


class Histogram:
    """
    Observed counts for buckets 0 .. size - 1 plus the expected bucket
    probabilities of the null model.
    """

    def __init__(self, size: int, expected_prob: Callable[[int], float]):
        """
        Initialize an empty histogram.

        Args:
            size: Number of buckets
            expected_prob: Function giving the model probability of bucket i
        """
        if size < 2:
            raise InvalidParameterError(f"Histogram needs at least 2 buckets, got {size}")
        self.size = size
        self._counts = np.zeros(size, dtype=np.int64)
        self._probabilities = np.array([expected_prob(i) for i in range(size)],
                                       dtype=np.float64)

    @classmethod
    def binomial(cls, n: int, p: float = 0.5) -> 'Histogram':
        """Histogram over 0 .. n whose model is binomial(n, p)."""
        probabilities = binomial_probabilities(n, p)
        return cls(n + 1, lambda i: probabilities[i])

    def accumulate(self, x: int) -> None:
        """Add one observation of bucket ``x``."""
        if not 0 <= x < self.size:
            raise InvalidParameterError(
                f"Histogram.accumulate(): x = {x} out of range 0 .. {self.size - 1}")
        self._counts[x] += 1

    def count(self, i: int) -> int:
        """Number of observations in bucket i."""
        return int(self._counts[i])

    def counts(self) -> List[int]:
        """Observed counts for every bucket."""
        return [int(c) for c in self._counts]

    def total(self) -> int:
        """Total number of observations."""
        return int(self._counts.sum())

    def expected_prob(self, i: int) -> float:
        """Model probability of bucket i."""
        return float(self._probabilities[i])

    def expected_count(self, i: int) -> float:
        """Expected count of bucket i given the current total."""
        return self.total() * float(self._probabilities[i])

    def expected_counts(self) -> List[float]:
        """Expected counts for every bucket given the current total."""
        return [float(e) for e in self.total() * self._probabilities]

    def chisqr(self) -> float:
        """
        Chi-square statistic of the observed counts against the model.

        Buckets with zero expected count contribute nothing when empty; an
        observation in such a bucket makes the statistic infinite.
        """
        expected = self.total() * self._probabilities
        observed = self._counts.astype(np.float64)
        impossible = expected <= 0.0
        if np.any(observed[impossible] > 0):
            return math.inf
        possible = ~impossible
        diff = observed[possible] - expected[possible]
        return float(np.sum(diff * diff / expected[possible]))

    def pvalue(self, chisqr: float) -> float:
        """
        Probability that a chi-square variable with size - 1 degrees of
        freedom is at least ``chisqr``.
        """
        p = float(stats.chi2.sf(chisqr, self.size - 1))
        return min(1.0, max(0.0, p))
