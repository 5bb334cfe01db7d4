"""Textbook RSA encryption and decryption of byte strings.

Messages and ciphertexts are read as unsigned big-endian integers and raised to the key exponent. There is no
padding, so encryption is deterministic and malleable, and the exponentiation is not constant-time. Use for study
only.

Typical usage example:

    pair = generate_key_pair(2048)
    c = encrypt(b"secret", pair.pub)
    m = decrypt(c, pair.priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import typing

from rsacore.errors import CiphertextTooLargeError
from rsacore.errors import EmptyCiphertextError
from rsacore.errors import EmptyMessageError
from rsacore.errors import MessageTooLargeError

if typing.TYPE_CHECKING:
    from rsacore.keys import RSAPrivKey
    from rsacore.keys import RSAPubKey


def encrypt(message: bytes, public_key: "RSAPubKey") -> bytes:
    """Encrypts a message with the public key.

    The caller is responsible for splitting longer messages into blocks of at most `public_key.size() - 1` bytes.

    Args:
        message: The plaintext. Must be non-empty and, read as an integer, smaller than the modulus.
        public_key: The key to encrypt with.

    Returns:
        The ciphertext in minimal-length big-endian form.

    Raises:
        EmptyMessageError: If `message` is empty.
        MessageTooLargeError: If `message` does not fit below the modulus.
    """
    if not message:
        raise EmptyMessageError("Message must not be empty.")
    m = bytes_to_integer(message)
    if m >= public_key.mod:
        raise MessageTooLargeError(f"Message too large for a {public_key.mod.bit_length()}-bit modulus.")
    return integer_to_bytes(public_key.c_rsa(m))


def decrypt(ciphertext: bytes, private_key: "RSAPrivKey") -> bytes:
    """Decrypts a ciphertext with the private key.

    Uses the CRT values of the key when they are present, which is the case for every generated key.

    Args:
        ciphertext: The ciphertext. Must be non-empty and, read as an integer, smaller than the modulus.
        private_key: The key to decrypt with.

    Returns:
        The plaintext in minimal-length big-endian form. Leading zero bytes of the original message are not
        recovered.

    Raises:
        EmptyCiphertextError: If `ciphertext` is empty.
        CiphertextTooLargeError: If `ciphertext` does not fit below the modulus.
    """
    if not ciphertext:
        raise EmptyCiphertextError("Ciphertext must not be empty.")
    c = bytes_to_integer(ciphertext)
    if c >= private_key.mod:
        raise CiphertextTooLargeError(f"Ciphertext too large for a {private_key.mod.bit_length()}-bit modulus.")
    return integer_to_bytes(private_key.c_rsa(c))


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an unsigned big-endian integer.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts a non-negative integer to its unsigned big-endian byte string.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string. If omitted the shortest encoding is used, and zero is
            encoded as the single byte `b"\\x00"`.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        OverflowError: If `msg` does not fit in `fixedlen` bytes.
    """
    if fixedlen is None:
        fixedlen = max(1, (msg.bit_length() + 7) // 8)
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)
