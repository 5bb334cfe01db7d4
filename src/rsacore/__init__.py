"""Textbook RSA in an Academic Sense.

Provides RSA key pair generation from random primes, plus unpadded encryption and decryption. Decryption uses the
Chinese Remainder Theorem when the private key carries its CRT values. Nothing here is padded or constant-time,
so it is not fit for protecting real secrets.

Typical usage example:

    pair = generate_key_pair(2048)
    c = encrypt(b"Hi there!", pair.pub)
    r = decrypt(c, pair.priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from rsacore.cipher import decrypt
from rsacore.cipher import encrypt
from rsacore.errors import CiphertextTooLargeError
from rsacore.errors import EmptyCiphertextError
from rsacore.errors import EmptyMessageError
from rsacore.errors import InvalidExponentError
from rsacore.errors import InvalidParameterError
from rsacore.errors import KeyGenerationExhaustedError
from rsacore.errors import MessageTooLargeError
from rsacore.errors import PrimeGenerationError
from rsacore.errors import RSAError
from rsacore.keygen import check_public_exponent
from rsacore.keygen import generate_key_pair
from rsacore.keygen import generate_primes
from rsacore.keygen import generate_private_key
from rsacore.keys import check_public_key
from rsacore.keys import RSAKeyPair
from rsacore.keys import RSAPrivKey
from rsacore.keys import RSAPubKey
from rsacore.primes import check_prime
from rsacore.primes import random_prime

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "RSAKeyPair",
    "RSAPrivKey",
    "RSAPubKey",
    "check_public_key",
    "check_public_exponent",
    "generate_key_pair",
    "generate_private_key",
    "generate_primes",
    "check_prime",
    "random_prime",
    "encrypt",
    "decrypt",
    "RSAError",
    "InvalidParameterError",
    "InvalidExponentError",
    "EmptyMessageError",
    "EmptyCiphertextError",
    "MessageTooLargeError",
    "CiphertextTooLargeError",
    "KeyGenerationExhaustedError",
    "PrimeGenerationError",
]
