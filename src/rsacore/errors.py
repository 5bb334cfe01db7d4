"""Exceptions raised across rsacore.

Every error derives from `RSAError`, and additionally from the builtin exception closest to its meaning, so callers
may catch either the library-specific class or the generic `ValueError`/`RuntimeError`.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all rsacore errors."""


class InvalidParameterError(RSAError, ValueError):
    """A key generation parameter (bit size, modulus) is unusable."""


class InvalidExponentError(RSAError, ValueError):
    """The public exponent is out of range or not an accepted Fermat number."""


class EmptyMessageError(RSAError, ValueError):
    """Zero-length plaintext handed to encryption."""


class EmptyCiphertextError(RSAError, ValueError):
    """Zero-length ciphertext handed to decryption."""


class MessageTooLargeError(RSAError, ValueError):
    """Plaintext representative is not smaller than the modulus."""


class CiphertextTooLargeError(RSAError, ValueError):
    """Ciphertext representative is not smaller than the modulus."""


class KeyGenerationExhaustedError(RSAError, RuntimeError):
    """Key generation discarded too many candidates without producing a valid key."""


class PrimeGenerationError(RSAError, RuntimeError):
    """The random prime source failed to produce a prime. Usually a broken random number generator."""
