"""Provides textbook RSA over single byte values, as used by the demonstration.

Every byte of a message is encrypted on its own, giving one ciphertext integer per byte. There is no padding and no
blocking, so this is unfit for anything but teaching: equal bytes encrypt to equal ciphertexts.

Typical usage example:

    pk = RSAPrivKey.generate(512)
    c = pk.pub.encrypt(b"HELLO")
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable
import warnings

from rsademo import keygen
from rsademo.arith import modexp


class RSAKey:
    """The overall RSA key class implementation.

    Holds the components strictly mandatory in both a public and a private key.

    Attributes:
        mod: The modulus of the keypair.
        expo: The exponent of the key, whether private or public.
    """

    def __init__(self, mod: int, expo: int) -> None:
        self.mod = mod
        self.expo = expo

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encrypt/Decrypt)

        Args:
            message: The int-marshalled message.

        Returns:
            The message raised to the key exponent, modulo the modulus.

        Raises:
            ValueError: If the message is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        return modexp(message, self.expo, self.mod)


class RSAPubKey(RSAKey):
    """Public half of a key pair; consists solely of a modulus and exponent."""

    def encrypt(self, message: bytes) -> list[int]:
        """Use the public key to encrypt the message byte by byte.

        Args:
            message: The message to encrypt.

        Returns:
            One ciphertext integer per byte of `message`.
        """
        warnings.warn("Per-byte textbook encryption is unsecure! Please use with care.", RuntimeWarning)
        return [self.c_rsa(byte) for byte in message]


class RSAPrivKey(RSAKey):
    """RSA Private Key class implementation.

    Attributes:
        mod: The modulus of the keypair.
        expo: The private exponent of the key.
        pub: The public key of the key.
    """

    def __init__(self, mod: int, pub_exp: int, priv_exp: int) -> None:
        super().__init__(mod, priv_exp)
        self.pub: RSAPubKey = RSAPubKey(mod, pub_exp)

    def decrypt(self, ciphertext: Iterable[int]) -> bytes:
        """Decrypts per-byte ciphertexts using the private key.

        Each ciphertext maps back to exactly one byte. A value decrypting to more than one byte was not produced by
        `RSAPubKey.encrypt` under this key and is rejected rather than cut down.

        Args:
            ciphertext: One ciphertext integer per message byte.

        Returns:
            The decrypted message.

        Raises:
            ValueError: If a ciphertext is out of range or decrypts to a value above 255.
        """
        return bytes(_single_byte(self.c_rsa(c)) for c in ciphertext)

    def to_keypair(self) -> keygen.Keypair:
        """Exports the key as a plain key pair.

        Returns:
            The (modulus, public exponent, private exponent) key pair.
        """
        return keygen.Keypair(self.mod, self.pub.expo, self.expo)

    @classmethod
    def from_keypair(cls, keypair: keygen.Keypair) -> "RSAPrivKey":
        """Builds a private key, and its public key, from a key pair.

        Args:
            keypair: The key pair to wrap.

        Returns:
            The matching RSA Private Key.
        """
        return cls(keypair.modulus, keypair.public_exponent, keypair.private_exponent)

    @classmethod
    def generate(cls, size: int, rng: keygen.RandomSource | None = None) -> "RSAPrivKey":
        """Generates an RSA Private Key, and its respective Public Key.

        Args:
            size: The size of the RSA Key in bits.
            rng: Source of randomness. Defaults to the system CSPRNG.

        Returns:
            A new generated RSA Private Key.
        """
        return cls.from_keypair(keygen.generate_keypair(size, rng))


def _single_byte(value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"Decrypted value {value} does not fit in a single byte.")
    return value


def text_to_values(text: str, encoding: str = "utf-8") -> list[int]:
    """Converts a string to its byte values.

    Args:
        text: The string to convert.
        encoding: Encoding used to get the bytes.

    Returns:
        One integer per encoded byte.
    """
    return list(text.encode(encoding))


def values_to_text(values: Iterable[int], encoding: str = "utf-8") -> str:
    """Converts byte values back to a string.

    Args:
        values: One integer per byte, each in range [0, 255].
        encoding: Encoding used to decode the bytes.

    Returns:
        The decoded string.

    Raises:
        ValueError: If a value does not fit in a single byte, or the bytes are invalid for `encoding`.
    """
    return bytes(_single_byte(v) for v in values).decode(encoding)
