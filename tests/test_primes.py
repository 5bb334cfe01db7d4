# pylint: disable=protected-access,missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

import pytest
import sympy

from rsacore import primes
from rsacore.errors import PrimeGenerationError

base_primetest_cases = [
    # Edge Cases (neither)
    (0, False),
    (1, False),
    # Known Primes
    (2, True),
    (3, True),
    (101, True),
    (3571, True),
    (9973, True),
    # Composite
    (4, False),
    (6, False),
    (9, False),
    # Fermat Pseudoprimes (numbers that fool naive tests)
    (341, False),  # 11 * 31
    (561, False),  # 3 * 11 * 17 (Carmichael number)
    (1105, False),  # 5 * 13 * 17 (Carmichael number)
    # Strong pseudoprimes to base 2
    (2047, False),
    (3277, False),
    (52633, False),
]

large_primetest_cases = [
    # Mersenne primes
    (2**61 - 1, True),
    (2**127 - 1, True),
    (2**521 - 1, True),
    (2**1279 - 1, True),
    pytest.param(2**4423 - 1, True, marks=pytest.mark.slow, id="LargeInt-Mersenne4423"),
    # Composites with no small factors
    ((2**61 - 1) * (2**89 - 1), False),
    ((2**127 - 1) * (2**521 - 1), False),
    (2**128 + 1, False),  # Fermat number F7
    # Composites with a small factor
    ((2**521 - 1) * 3, False),
    ((2**1279 - 1) * 9973, False),
]

prime_sizes = [2, 3, 8, 16, 32, 33, 64, 256, 512, 1024, pytest.param(2048, marks=pytest.mark.slow)]


def id_generator(param):
    if isinstance(param, int) and param > 1000000:
        return f"LargeInt-{param.bit_length()}bits"
    return str(param)


@pytest.mark.parametrize("n", [0, 1, 2, 20, 50, 1000, 5000, 10000])
def test_sieve_sane(n):
    assert primes._sieve(n) == list(sympy.primerange(0, n + 1))


@pytest.mark.parametrize("n,expected", [(10**5, 9592), (10**6, 78498)])
def test_sieve_large_approx(n, expected):
    assert len(primes._sieve(n)) == expected


@pytest.mark.parametrize("n", [-27358709381728, -10, -1])
def test_get_pre_primes_errors(n):
    with pytest.raises(ValueError):
        primes.get_pre_primes(n)


def test_get_pre_primes_caches(mocker):
    mocked_primes = [2, 3, 5, 7, 11]
    mocker.patch("rsacore.primes._sieve", return_value=mocked_primes)
    mocker.patch("rsacore.primes._SMALL_PRIMES", [])
    mocker.patch("rsacore.primes._SMALL_PRIMES_CAP", 0)

    rs = primes.get_pre_primes(50)
    primes._sieve.assert_called_once_with(50)
    assert rs == mocked_primes


@pytest.mark.parametrize("n", [25, 50])
def test_get_pre_primes_cache_hit(mocker, n):
    mocked_primes = [2, 3, 5, 7, 11]
    mocker.patch("rsacore.primes._sieve")
    mocker.patch("rsacore.primes._SMALL_PRIMES", mocked_primes)
    mocker.patch("rsacore.primes._SMALL_PRIMES_CAP", 50)

    rs = primes.get_pre_primes(n)
    primes._sieve.assert_not_called()
    assert rs == mocked_primes


def test_get_pre_primes_cache_miss(mocker):
    greater_mocked_primes = [2, 3, 5, 7, 11, 13, 17, 19, 23]
    mocker.patch("rsacore.primes._sieve", return_value=greater_mocked_primes)
    mocker.patch("rsacore.primes._SMALL_PRIMES", [2, 3, 5, 7, 11])
    mocker.patch("rsacore.primes._SMALL_PRIMES_CAP", 50)

    rs = primes.get_pre_primes(75)
    primes._sieve.assert_called_once_with(75)
    assert rs == greater_mocked_primes


def test_get_pre_primes_cache_forced(mocker):
    mocked_primes = [2, 3, 5, 7, 11]
    mocker.patch("rsacore.primes._sieve", return_value=mocked_primes)
    mocker.patch("rsacore.primes._SMALL_PRIMES", [2, 3, 5, 7, 11, 13, 17, 19, 23])
    mocker.patch("rsacore.primes._SMALL_PRIMES_CAP", 75)

    rs = primes.get_pre_primes(50, change=True)
    primes._sieve.assert_called_with(50)
    assert rs == mocked_primes


@pytest.mark.parametrize("num,expected", [(0, False), (1, False), (2, True), (97, True), (9973 * 9973, False),
                                          (2**127 - 1, True), ((2**127 - 1) * 3, False)],
                         ids=id_generator)
def test_trial_division(num, expected):
    assert primes._trial_division(num) == expected


@pytest.mark.parametrize("n,expected", base_primetest_cases + large_primetest_cases, ids=id_generator)
def test_miller_rabin(n, expected):
    assert primes._miller_rabin(n, 20) == expected


@pytest.mark.parametrize("n,expected", base_primetest_cases + large_primetest_cases, ids=id_generator)
def test_check_prime(n, expected):
    assert primes.check_prime(n) == expected


@pytest.mark.parametrize("bits,rounds", [(32, 50), (512, 50), (513, 56), (1024, 56), (1536, 64), (2048, 70),
                                         (4096, 74)])
def test_check_prime_default_rounds(mocker, bits, rounds):
    mocker.patch("rsacore.primes._trial_division", return_value=True)
    mr = mocker.patch("rsacore.primes._miller_rabin", return_value=True)
    candidate = (1 << bits - 1) | 1
    assert primes.check_prime(candidate)
    mr.assert_called_once_with(candidate, rounds)


@pytest.mark.parametrize("size", prime_sizes)
def test_random_prime_size(size):
    p = primes.random_prime(size)
    assert p.bit_length() == size
    assert p >> (size - 2) == 0b11


@pytest.mark.parametrize("size", prime_sizes)
def test_random_prime_isprime(size):
    assert sympy.isprime(primes.random_prime(size))


@pytest.mark.parametrize("size", [-5, 0, 1])
def test_random_prime_validates(size):
    with pytest.raises(ValueError):
        primes.random_prime(size)


def test_random_prime_redraws(mocker):
    # 8-bit candidates are masked with 0b11000001: 2 -> 195 = 3 * 5 * 13, 4 -> 197 (prime).
    mocker.patch("secrets.randbits", side_effect=[2, 4])
    assert primes.random_prime(8) == 197
    assert secrets.randbits.call_count == 2


def test_random_prime_faulty(mocker):
    mocker.patch("rsacore.primes.check_prime", return_value=False)
    with pytest.raises(PrimeGenerationError, match="Check system random number generator"):
        primes.random_prime(256)
    with pytest.raises(RuntimeError):
        primes.random_prime(256)


def test_random_prime_entropy_failure_propagates(mocker):
    mocker.patch("secrets.randbits", side_effect=OSError("entropy source unavailable"))
    with pytest.raises(OSError, match="entropy source unavailable"):
        primes.random_prime(64)
