"""RSA key pair generation.

Searches for two primes whose predecessors are coprime with the public exponent, checks that their product has
exactly the requested bit length, derives the private exponent and fills the CRT values before the key is
returned. Candidates that fail any check are thrown away and drawn again. A caller never sees a half-built key.

Only the Fermat numbers 3, 5, 17, 257 and 65537 are accepted as public exponents. Textbook RSA would allow any
odd exponent coprime with the totient. This library deliberately allows fewer.

Typical usage example:

    pair = generate_key_pair(2048)
    p, q = generate_primes(1024, 65537)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math

from rsacore import primes
from rsacore.errors import InvalidExponentError
from rsacore.errors import InvalidParameterError
from rsacore.errors import KeyGenerationExhaustedError
from rsacore.keys import check_public_key
from rsacore.keys import MAX_PUBLIC_EXPONENT
from rsacore.keys import MIN_PUBLIC_EXPONENT
from rsacore.keys import RSAKeyPair
from rsacore.keys import RSAPrivKey

_log = logging.getLogger(__name__)

DEFAULT_BITS: int = 2048
DEFAULT_EXPONENT: int = 65537
MIN_BITS: int = 64
FERMAT_EXPONENTS: frozenset[int] = frozenset({3, 5, 17, 257, 65537})
_MAX_ATTEMPTS: int = 128


def check_public_exponent(exponent: int) -> None:
    """Validate a public exponent.

    Args:
        exponent: The candidate public exponent.

    Raises:
        InvalidExponentError: If `exponent` is outside `[2, 2^31 - 1]` or not one of the accepted Fermat numbers.
    """
    if not MIN_PUBLIC_EXPONENT <= exponent <= MAX_PUBLIC_EXPONENT:
        raise InvalidExponentError(
            f"Public exponent {exponent} outside [{MIN_PUBLIC_EXPONENT}, {MAX_PUBLIC_EXPONENT}].")
    if exponent not in FERMAT_EXPONENTS:
        raise InvalidExponentError(
            f"Public exponent {exponent} is not one of {', '.join(map(str, sorted(FERMAT_EXPONENTS)))}.")


def _coprime_prime(size: int, exponent: int) -> int:
    """Draw primes of `size` bits until one satisfies `gcd(exponent, p - 1) == 1`.

    Raises:
        KeyGenerationExhaustedError: If `_MAX_ATTEMPTS` primes in a row fail the check.
    """
    for _ in range(_MAX_ATTEMPTS):
        p = primes.random_prime(size)
        if math.gcd(exponent, p - 1) == 1:
            return p
        _log.debug("Discarded %d-bit prime sharing a factor with exponent %d", size, exponent)
    raise KeyGenerationExhaustedError(f"No {size}-bit prime coprime with {exponent} after {_MAX_ATTEMPTS} draws.")


def generate_primes(bits: int, exponent: int = DEFAULT_EXPONENT) -> tuple[int, int]:
    """Generate a pair of distinct primes suitable for a `bits`-bit modulus.

    The first prime gets `bits // 2` bits and the second gets the rest, so the second may be one bit longer.

    Args:
        bits: Target modulus size.
        exponent: Public exponent the primes have to be compatible with.

    Returns:
        A pair `(p, q)` of distinct primes with `gcd(exponent, p - 1) == gcd(exponent, q - 1) == 1`.

    Raises:
        KeyGenerationExhaustedError: If no distinct pair turns up within `_MAX_ATTEMPTS` tries.
    """
    for _ in range(_MAX_ATTEMPTS):
        p = _coprime_prime(bits // 2, exponent)
        q = _coprime_prime(bits - bits // 2, exponent)
        if p != q:  # (Un)Likely story.
            return p, q
        _log.debug("Drew identical primes, restarting")
    raise KeyGenerationExhaustedError(f"No distinct prime pair after {_MAX_ATTEMPTS} tries.")


def generate_private_key(bits: int = DEFAULT_BITS, exponent: int = DEFAULT_EXPONENT) -> RSAPrivKey:
    """Generate an RSA private key, with its CRT values already filled in.

    Args:
        bits: Exact bit length of the modulus. Must be at least 64.
        exponent: Public exponent, one of 3, 5, 17, 257, 65537.

    Returns:
        The new private key.

    Raises:
        InvalidParameterError: If `bits` is below 64.
        InvalidExponentError: If `exponent` is not accepted.
        KeyGenerationExhaustedError: If valid key material could not be assembled. Should never happen.
        PrimeGenerationError: If the prime source failed.
    """
    if bits < MIN_BITS:
        raise InvalidParameterError(f"Too few bits to generate an RSA key: {bits} < {MIN_BITS}.")
    check_public_exponent(exponent)
    for attempt in range(1, _MAX_ATTEMPTS + 1):
        p, q = generate_primes(bits, exponent)
        n = p * q
        if n.bit_length() != bits:
            _log.debug("Attempt %d: modulus has %d bits instead of %d, restarting", attempt, n.bit_length(), bits)
            continue
        phi = (p - 1) * (q - 1)
        try:
            d = pow(exponent, -1, phi)
        except ValueError:
            _log.debug("Attempt %d: exponent has no inverse modulo the totient, restarting", attempt)
            continue
        key = RSAPrivKey(n, exponent, d, p, q)
        key.precompute()
        _log.debug("Generated %d-bit key with exponent %d after %d attempt(s)", bits, exponent, attempt)
        return key
    raise KeyGenerationExhaustedError(f"Could not assemble a {bits}-bit key after {_MAX_ATTEMPTS} attempts.")


def generate_key_pair(bits: int = DEFAULT_BITS, exponent: int = DEFAULT_EXPONENT) -> RSAKeyPair:
    """Generates an RSA key pair.

    Args:
        bits: Exact bit length of the modulus. Defaults to 2048, must be at least 64.
        exponent: Public exponent. Defaults to 65537, must be one of 3, 5, 17, 257, 65537.

    Returns:
        A key pair whose private key carries populated CRT values.

    Raises:
        InvalidParameterError: If `bits` is below 64.
        InvalidExponentError: If `exponent` is not accepted.
        KeyGenerationExhaustedError: If valid key material could not be assembled.
    """
    pair = RSAKeyPair(generate_private_key(bits, exponent))
    check_public_key(pair.pub)
    return pair
