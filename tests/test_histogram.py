import math

import pytest

from blocklab.analysis import Histogram, binomial_probabilities
from blocklab.cipher_core import InvalidParameterError


@pytest.mark.parametrize("n", [8, 64, 128, 256])
def test_binomial_probabilities_sum_to_one(n):
    probabilities = binomial_probabilities(n)
    assert len(probabilities) == n + 1
    assert math.isclose(float(probabilities.sum()), 1.0, rel_tol=1e-9)
    assert probabilities[n // 2] == max(probabilities)


def test_accumulate_and_totals():
    hist = Histogram.binomial(4)
    for x in (0, 2, 2, 3, 4, 2):
        hist.accumulate(x)
    assert hist.size == 5
    assert hist.counts() == [1, 0, 3, 1, 1]
    assert hist.total() == 6
    assert hist.count(2) == 3
    assert math.isclose(hist.expected_prob(2), 6 / 16)
    assert math.isclose(hist.expected_count(2), 6 * 6 / 16)
    assert math.isclose(sum(hist.expected_counts()), 6.0)


def test_accumulate_out_of_range():
    hist = Histogram.binomial(4)
    with pytest.raises(InvalidParameterError):
        hist.accumulate(5)
    with pytest.raises(InvalidParameterError):
        hist.accumulate(-1)


def test_perfect_fit_has_zero_statistic():
    hist = Histogram(4, lambda i: 0.25)
    for x in range(4):
        for _ in range(10):
            hist.accumulate(x)
    assert hist.chisqr() == 0.0
    assert hist.pvalue(0.0) == 1.0


def test_chisqr_value():
    hist = Histogram(2, lambda i: 0.5)
    for _ in range(30):
        hist.accumulate(0)
    for _ in range(10):
        hist.accumulate(1)
    # (30 - 20)^2 / 20 + (10 - 20)^2 / 20
    assert math.isclose(hist.chisqr(), 10.0)
    p = hist.pvalue(hist.chisqr())
    assert 0.0 < p < 0.01


def test_impossible_bucket_gives_infinite_statistic():
    hist = Histogram(3, lambda i: 0.0 if i == 2 else 0.5)
    hist.accumulate(2)
    assert math.isinf(hist.chisqr())
    assert hist.pvalue(hist.chisqr()) == 0.0


def test_empty_impossible_bucket_is_ignored():
    hist = Histogram(3, lambda i: 0.0 if i == 2 else 0.5)
    hist.accumulate(0)
    hist.accumulate(1)
    assert hist.chisqr() == 0.0


def test_too_few_buckets():
    with pytest.raises(InvalidParameterError):
        Histogram(1, lambda i: 1.0)
