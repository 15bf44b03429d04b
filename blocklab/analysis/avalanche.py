"""
Avalanche Test

This module performs a statistical test of a block cipher's diffusion. It
examines a series of plaintexts, each of which differs from its predecessor
in exactly one bit, encrypts them, and records the Hamming distance between
each ciphertext and the PREVIOUS ciphertext. For an ideal cipher those
distances follow a binomial(N, 0.5) distribution, N being the block size in
bits, and a chi-square test measures how far the observed histogram is from
that. The test is repeated for the cipher reduced to 1, 2, ... rounds up to
its full round count.
"""

import logging
import multiprocessing as mp
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from ..cipher_core.block_cipher import InvalidParameterError
from ..cipher_core.registry import CipherType, create_cipher, resolve_cipher_type
from .histogram import Histogram

logger = logging.getLogger(__name__)

# Default parameters for the avalanche test
AVALANCHE_DEFAULTS = {
    'alpha': 0.01,    # Significance threshold
    'samples': 1000,  # Ciphertext samples per round count
    'workers': 1,     # Processes used to analyze round counts
}


def default_workers() -> int:
    """Worker count from BLOCKLAB_WORKERS, falling back to the default."""
    value = os.environ.get('BLOCKLAB_WORKERS')
    if not value:
        return AVALANCHE_DEFAULTS['workers']
    try:
        workers = int(value)
    except ValueError:
        raise InvalidParameterError(
            f"BLOCKLAB_WORKERS must be an integer, got {value!r}") from None
    if workers < 1:
        raise InvalidParameterError(f"BLOCKLAB_WORKERS must be at least 1, got {workers}")
    return workers


def hamming_distance(a: bytes, b: bytes) -> int:
    """
    Number of bit positions in which two equal-length byte strings differ.
    """
    diff = np.bitwise_xor(np.frombuffer(bytes(a), dtype=np.uint8),
                          np.frombuffer(bytes(b), dtype=np.uint8))
    return int(np.unpackbits(diff).sum())


def flip_position(i: int) -> int:
    """Index of the lowest set bit of i (the number of trailing zeros)."""
    return (i & -i).bit_length() - 1


@dataclass(frozen=True)
class RoundResult:
    """Outcome of the avalanche test for one round count."""
    rounds: int
    chisqr: float
    pvalue: float
    counts: Tuple[int, ...]
    expected: Tuple[float, ...]
    alpha: float = AVALANCHE_DEFAULTS['alpha']

    @property
    def rejected(self) -> bool:
        """True if the ideal-cipher hypothesis is rejected at level alpha."""
        return self.pvalue < self.alpha

    @property
    def samples(self) -> int:
        return sum(self.counts)


@dataclass(frozen=True)
class AvalancheReport:
    """Results of a full sweep, ordered by round count."""
    cipher: str
    samples: int
    alpha: float
    results: Tuple[RoundResult, ...]

    def first_passing_round(self) -> Optional[int]:
        """Smallest round count from which no later round count is rejected."""
        passing = None
        for result in reversed(self.results):
            if result.rejected:
                break
            passing = result.rounds
        return passing


class AvalancheTest:
    """
    Avalanche test of one cipher for a fixed key, plaintext and sample count.

    The object holds only the test parameters; every call to analyze() builds
    its own cipher instance and histogram, so round counts can be analyzed
    independently and in any order.
    """

    def __init__(self, cipher: Union[str, CipherType], key: bytes, plaintext: bytes,
                 samples: int = AVALANCHE_DEFAULTS['samples'],
                 alpha: float = AVALANCHE_DEFAULTS['alpha'],
                 workers: Optional[int] = None):
        """
        Initialize and validate the test parameters.

        Args:
            cipher: Registered cipher name
            key: Key, exactly key_size() bytes for the cipher
            plaintext: Reference plaintext, exactly block_size() bytes
            samples: Number of ciphertext samples per round count
            alpha: Significance threshold
            workers: Number of processes (default: BLOCKLAB_WORKERS or 1)

        Raises:
            UnsupportedCipherError: If the cipher name is not registered
            InvalidParameterError: If any other parameter is out of range
        """
        self.cipher_type = resolve_cipher_type(cipher)
        prototype = create_cipher(self.cipher_type)
        self.block_size = prototype.block_size()
        self.bits = 8 * self.block_size
        self.max_rounds = prototype.num_rounds()

        if len(key) != prototype.key_size():
            raise InvalidParameterError(f"Key must be {prototype.key_size()} bytes")
        if len(plaintext) != self.block_size:
            raise InvalidParameterError(f"Plaintext must be {self.block_size} bytes")
        if isinstance(samples, bool) or not isinstance(samples, int) or samples < 1:
            raise InvalidParameterError(f"Samples must be a positive integer, got {samples!r}")
        if samples >= 1 << self.bits:
            raise InvalidParameterError(f"Samples must be less than 2^{self.bits}")
        if not 0.0 < alpha < 1.0:
            raise InvalidParameterError(f"Alpha must be in (0, 1), got {alpha}")
        if workers is None:
            workers = default_workers()
        if workers < 1:
            raise InvalidParameterError(f"Workers must be at least 1, got {workers}")

        self.key = bytes(key)
        self.plaintext = bytes(plaintext)
        self.samples = samples
        self.alpha = alpha
        self.workers = workers

    def analyze(self, rounds: int) -> RoundResult:
        """
        Run the differential sampling experiment for one round count.

        Args:
            rounds: Number of rounds (1 .. full round count)

        Returns:
            The histogram, chi-square statistic and p-value for that count
        """
        cipher = create_cipher(self.cipher_type, rounds)
        cipher.set_key(self.key)

        plaintext = bytearray(self.plaintext)
        previous = bytearray(plaintext)
        cipher.encrypt(previous)

        hist = Histogram.binomial(self.bits)
        for i in range(1, self.samples + 1):
            j = flip_position(i)
            plaintext[j // 8] ^= 1 << (j % 8)

            current = bytearray(plaintext)
            cipher.encrypt(current)
            hist.accumulate(hamming_distance(current, previous))
            previous = current

        chisqr = hist.chisqr()
        pvalue = hist.pvalue(chisqr)
        logger.info("%s R=%d: chi^2=%.4e pvalue=%.4e%s", self.cipher_type.value,
                    rounds, chisqr, pvalue, " (rejected)" if pvalue < self.alpha else "")
        return RoundResult(rounds=rounds, chisqr=chisqr, pvalue=pvalue,
                           counts=tuple(hist.counts()),
                           expected=tuple(hist.expected_counts()),
                           alpha=self.alpha)

    def run(self, rounds: Optional[List[int]] = None) -> AvalancheReport:
        """
        Analyze round-reduced versions of the cipher.

        Args:
            rounds: Round counts to analyze (default: 1 .. full round count)

        Returns:
            An AvalancheReport with results ordered by round count
        """
        if rounds is None:
            rounds = list(range(1, self.max_rounds + 1))
        else:
            rounds = sorted(set(rounds))
        for r in rounds:
            if not 1 <= r <= self.max_rounds:
                raise InvalidParameterError(
                    f"Round count {r} out of range 1 .. {self.max_rounds}")

        logger.info("Avalanche test of %s: %d samples per round, rounds %d .. %d",
                    self.cipher_type.value, self.samples, rounds[0], rounds[-1])
        workers = min(self.workers, len(rounds))
        if workers > 1:
            with mp.Pool(workers) as pool:
                results = pool.map(self.analyze, rounds)
        else:
            results = [self.analyze(r) for r in rounds]

        return AvalancheReport(cipher=self.cipher_type.value, samples=self.samples,
                               alpha=self.alpha, results=tuple(results))


def run_avalanche_test(cipher: Union[str, CipherType], key: bytes, plaintext: bytes,
                       samples: int = AVALANCHE_DEFAULTS['samples'],
                       alpha: float = AVALANCHE_DEFAULTS['alpha'],
                       workers: Optional[int] = None) -> AvalancheReport:
    """
    Convenience function to run the full avalanche sweep.

    Args:
        cipher: Registered cipher name
        key: Key bytes
        plaintext: Reference plaintext
        samples: Samples per round count
        alpha: Significance threshold
        workers: Number of processes

    Returns:
        The AvalancheReport for rounds 1 .. full round count
    """
    return AvalancheTest(cipher, key, plaintext, samples, alpha, workers).run()
