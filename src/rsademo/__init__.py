"""Textbook RSA in an Academic Sense.

Provides the number theory behind a classroom RSA demonstration: modular exponentiation, the Extended Euclidean
Algorithm and modular inverse, Miller-Rabin primality testing, and key pair generation from two random primes.
On top of that sits a per-byte encryption layer and an interactive demo (`python -m rsademo`).

Typical usage example:

    kp = generate_keypair(512)
    c = modexp(72, kp.public_exponent, kp.modulus)
    m = modexp(c, kp.private_exponent, kp.modulus)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsademo.arith import extended_gcd
from rsademo.arith import modexp
from rsademo.arith import modular_inverse
from rsademo.keygen import generate_keypair
from rsademo.keygen import generate_prime
from rsademo.keygen import is_probable_prime
from rsademo.keygen import Keypair
from rsademo.keygen import RandomSource
from rsademo.rsa import RSAPrivKey
from rsademo.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "Keypair",
    "RandomSource",
    "RSAPrivKey",
    "RSAPubKey",
    "modexp",
    "extended_gcd",
    "modular_inverse",
    "is_probable_prime",
    "generate_prime",
    "generate_keypair",
]
