"""Prime number provider used by key generation.

Supplies random probable primes of an exact bit length. Candidates are screened by trial division against a cached
table of small primes, then confirmed with a Miller-Rabin test roughly following FIPS 186-5. All randomness comes
from `secrets`.

Typical usage example:

    p = random_prime(1024)
    check_prime(p)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets

from rsacore.errors import PrimeGenerationError

_log = logging.getLogger(__name__)

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes over odd numbers only, sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, sieving them if necessary.

    The module-level `_SMALL_PRIMES` list acts as a cache. It is rebuilt when the requested range exceeds the cached
    one, when `change` forces it, or when the cache is empty.

    Args:
        n: The number up to which primes are needed. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order, covering at least up to `n` unless `change` is True.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check `no` against the known small primes.

    Args:
         no: The number to check. Must be a non-negative integer.
         n: Upper bound of the small-prime table, passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int) -> bool:
    """Perform the Miller-Rabin primality test.

    Args:
        w: Odd integer to be tested.
        iters: Number of Miller-Rabin rounds to perform.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    if w % 2 == 0:
        return False
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def _default_rounds(bits: int) -> int:
    # Worst-case error per round is 1/4, so 50 rounds already give 2^-100.
    if bits <= 512:
        return 50
    if bits <= 1024:
        return 56
    if bits <= 1536:
        return 64
    if bits <= 2048:
        return 70
    return 74


def check_prime(candidate: int, iters: int | None = None, n: int = 10000) -> bool:
    """Composite primality test: trial division by small primes, then Miller-Rabin.

    Args:
        candidate: The candidate prime to test.
        iters: Number of Miller-Rabin rounds. If not provided, picked from the bit length of the candidate so that
            the error probability stays at or below 2^-100.
        n: Upper bound of the small primes used for trial division. Defaults to 10000.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate, n):
        return False
    if iters is None:
        iters = _default_rounds(candidate.bit_length())
    return _miller_rabin(candidate, iters)


def random_prime(bits: int) -> int:
    """Draw a random probable prime of exactly `bits` bits.

    The two most significant bits of every candidate are set. That pins the bit length of the prime and makes the
    product of two such primes exactly as long as the sum of their lengths.

    Args:
        bits: Bit length of the prime. Must be at least 2.

    Returns:
        A probable prime with `bit_length() == bits`.

    Raises:
        ValueError: If `bits` is below 2.
        PrimeGenerationError: If no prime turns up after an implausible number of draws.
    """
    if bits < 2:
        raise ValueError("Prime size must be at least 2 bits.")
    msk = (1 << bits - 1) | (1 << bits - 2) | 1
    rep_cap = max(bits, 64) * 10
    for _ in range(rep_cap):
        candidate = secrets.randbits(bits) | msk
        if check_prime(candidate):
            return candidate
    _log.debug("No %d-bit prime after %d draws", bits, rep_cap)
    raise PrimeGenerationError(
        f"Ran an improbable {rep_cap} draws with no prime found. Check system random number generator.")
