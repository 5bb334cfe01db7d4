"""RSA key model: public key, private key and the key pair that ties them together.

A private key is composed around its public key rather than derived from it. It carries the prime factors, the
private exponent and, once `precompute()` has run, the CRT values that speed up decryption.

Typical usage example:

    pk = RSAPrivKey(n, e, d, p, q)
    pk.precompute()
    pair = RSAKeyPair(pk)
    c = pair.pub.encrypt(b"Hi there!")
    r = pair.priv.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore import cipher
from rsacore.errors import InvalidExponentError
from rsacore.errors import InvalidParameterError

MIN_PUBLIC_EXPONENT = 2
MAX_PUBLIC_EXPONENT = 2**31 - 1


class RSAPubKey:
    """RSA Public Key.

    Attributes:
        mod: The modulus of the keypair.
        expo: The public exponent.
        bsize: Byte capacity of the modulus, the upper bound on a message block.
    """

    def __init__(self, mod: int, expo: int) -> None:
        self.mod = mod
        self.expo = expo
        self.bsize = (self.mod.bit_length() + 7) // 8

    def __repr__(self) -> str:
        return f"RSAPubKey(bits={self.mod.bit_length()}, expo={self.expo})"

    def size(self) -> int:
        """Byte capacity of the modulus, `ceil(bitlength(mod) / 8)`."""
        return self.bsize

    def c_rsa(self, message: int) -> int:
        """Performs the core RSA public operation.

        Args:
            message: The int-marshalled message to encrypt.

        Returns:
            The encrypted message representative.

        Raises:
            ValueError: If the message is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        return pow(message, self.expo, self.mod)

    def encrypt(self, message: bytes) -> bytes:
        """Encrypt `message` with this key. See `rsacore.cipher.encrypt`."""
        return cipher.encrypt(message, self)


class RSAPrivKey:
    """RSA Private Key.

    Holds the public half as `pub` and adds the secret values. The CRT values are optional. Without them
    decryption falls back to a plain exponentiation with the private exponent.

    Attributes:
        pub: The public key belonging to this private key.
        expo: The private exponent.
        p: Private prime 1.
        q: Private prime 2.
        exp1: CRT component, `expo mod (p - 1)`.
        exp2: CRT component, `expo mod (q - 1)`.
        coeff: CRT component, `q^-1 mod p`.
    """

    def __init__(self,
                 mod: int,
                 pub_exp: int,
                 priv_exp: int,
                 p: int | None = None,
                 q: int | None = None,
                 exp1: int | None = None,
                 exp2: int | None = None,
                 coeff: int | None = None) -> None:
        """Initialize the RSA Private Key.

        The CRT values are taken as given. Call `precompute()` to derive any that are missing.

        Args:
            mod: The modulus of the keypair.
            pub_exp: The public exponent of the key.
            priv_exp: The private exponent of the key.
            p: The private prime 1.
            q: The private prime 2.
            exp1: CRT Component dmp1.
            exp2: CRT Component dmq1.
            coeff: CRT Component iqmp.
        """
        self.pub: RSAPubKey = RSAPubKey(mod, pub_exp)
        self.expo = priv_exp
        self.p = p
        self.q = q
        self.exp1 = exp1
        self.exp2 = exp2
        self.coeff = coeff

    def __repr__(self) -> str:
        # Secret values stay out of reprs and logs.
        return f"RSAPrivKey(bits={self.mod.bit_length()}, pub_exp={self.pub.expo}, crt={self.has_crt})"

    @property
    def mod(self) -> int:
        return self.pub.mod

    @property
    def bsize(self) -> int:
        return self.pub.bsize

    def size(self) -> int:
        """Byte capacity of the modulus."""
        return self.pub.size()

    @property
    def has_crt(self) -> bool:
        """Whether the CRT values are all present."""
        return None not in (self.p, self.q, self.exp1, self.exp2, self.coeff)

    def precompute(self) -> None:
        """Derive the CRT values from the primes and the private exponent.

        Does nothing if they are already present, so it is safe to call repeatedly. Must run before the key is
        shared between threads.

        Raises:
            ValueError: If the prime factors of the key are unknown.
        """
        if self.has_crt:
            return
        if not self.p or not self.q:
            raise ValueError("CRT values need both prime factors of the modulus.")
        self.exp1 = self.expo % (self.p - 1)
        self.exp2 = self.expo % (self.q - 1)
        self.coeff = pow(self.q, -1, self.p)

    def _direct(self, message: int) -> int:
        return pow(message, self.expo, self.mod)

    def _crt(self, message: int) -> int:
        m_1 = pow(message, self.exp1, self.p)
        m_2 = pow(message, self.exp2, self.q)
        # Python's % already lands in [0, p) for a negative difference.
        h = (self.coeff * (m_1 - m_2)) % self.p
        return m_2 + h * self.q

    def c_rsa(self, message: int) -> int:
        """Performs the core RSA private operation, accelerated with CRT when possible.

        Not constant-time. Timing depends on the secret values.

        Args:
            message: The int-marshalled ciphertext to decrypt.

        Returns:
            The decrypted message representative.

        Raises:
            ValueError: If the message is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        if self.has_crt:
            return self._crt(message)
        return self._direct(message)

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Decrypt `ciphertext` with this key. See `rsacore.cipher.decrypt`."""
        return cipher.decrypt(ciphertext, self)


class RSAKeyPair:
    """A generated key pair.

    Owns exactly one private key. The public key is not a separate object, it is the one embedded in the private
    key.

    Attributes:
        priv: The private key.
    """

    def __init__(self, priv: RSAPrivKey) -> None:
        self.priv = priv

    def __repr__(self) -> str:
        return f"RSAKeyPair({self.priv!r})"

    @property
    def pub(self) -> RSAPubKey:
        return self.priv.pub


def check_public_key(pub: RSAPubKey) -> None:
    """Sanity check the public half of a key before it is issued.

    Args:
        pub: The public key to check.

    Raises:
        InvalidParameterError: If the modulus is not positive.
        InvalidExponentError: If the exponent is outside `[2, 2^31 - 1]`.
    """
    if pub.mod <= 0:
        raise InvalidParameterError("Public modulus must be positive.")
    if pub.expo < MIN_PUBLIC_EXPONENT:
        raise InvalidExponentError("Public exponent too small.")
    if pub.expo > MAX_PUBLIC_EXPONENT:
        raise InvalidExponentError("Public exponent too large.")
