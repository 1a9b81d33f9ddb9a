"""Integer arithmetic underpinning textbook RSA.

Square-and-multiply modular exponentiation, the Extended Euclidean Algorithm and the modular inverse derived from it.
Everything here is pure and works on Python's arbitrary precision integers.

Typical usage example:

    modexp(72, 65537, n)
    g, x, y = extended_gcd(35, 15)
    d = modular_inverse(65537, phi)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def modexp(base: int, exp: int, modulus: int) -> int:
    """Computes `base**exp % modulus` by square-and-multiply.

    Walks the bits of `exp` from least to most significant, so only O(log exp) multiplications are needed.

    Args:
        base: The base. Any integer, reduced modulo `modulus` up front.
        exp: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        The residue in range [0, modulus - 1].

    Raises:
        ValueError: If `exp` is negative or `modulus` is smaller than 1.
    """
    if exp < 0:
        raise ValueError("exp must be >= 0")
    if modulus < 1:
        raise ValueError("modulus must be >= 1")
    if modulus == 1:
        return 0
    result = 1
    base %= modulus
    while exp > 0:
        if exp & 1:
            result = (result * base) % modulus
        exp >>= 1
        base = (base * base) % modulus
    return result


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g = gcd(a, b). The coefficients match the textbook recursion
    `egcd(0, b) = (b, 0, 1)`, `egcd(a, b) = (g, y1 - (b // a) * x1, x1)` where `(g, x1, y1) = egcd(b % a, a)`,
    but the recursion is unrolled onto a stack of quotients so operand size never hits the recursion limit.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        Greatest common divisor of the two integers (never negative), as well as the Bezout coefficients.
    """
    quotients = []
    while a != 0:
        quotients.append(b // a)
        a, b = b % a, a
    x, y = 0, 1
    for q in reversed(quotients):
        x, y = y - q * x, x
    if b < 0:
        return -b, -x, -y
    return b, x, y


def modular_inverse(a: int, m: int) -> int | None:
    """Finds the inverse of `a` modulo `m`.

    Args:
        a: The number to invert.
        m: The modulus. Must be >= 1.

    Returns:
        The inverse in range [0, m - 1], or None if `a` and `m` are not coprime.

    Raises:
        ValueError: If `m` is smaller than 1.
    """
    if m < 1:
        raise ValueError("m must be >= 1")
    g, x, _ = extended_gcd(a, m)
    if g != 1:
        return None
    # x may be negative.
    return ((x % m) + m) % m
