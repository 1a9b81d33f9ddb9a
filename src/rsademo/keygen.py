"""Core Key Generation Utility, focusing on random probable primes and the textbook RSA key pair built on them.

Primality is certified probabilistically with Miller-Rabin. All randomness is drawn from a `RandomSource` that callers
may pass in, defaulting to the operating system CSPRNG, so that tests can substitute a seeded generator.

Typical usage example:

    is_probable_prime(7919, 10)
    p = generate_prime(256)
    kp = generate_keypair(512)
    c = modexp(72, kp.public_exponent, kp.modulus)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets
from typing import NamedTuple, Protocol

from rsademo.arith import modexp
from rsademo.arith import modular_inverse

DEFAULT_PUBLIC_EXPONENT: int = 65537
DEFAULT_PRIME_ROUNDS: int = 10
MINIMUM_KEY_BITS: int = 8

log = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything able to hand out uniform random integers.

    Both `random.Random` and `secrets.SystemRandom` satisfy it; only the latter is fit for real key material.
    """

    def randrange(self, start: int, stop: int) -> int:
        ...

    def getrandbits(self, k: int) -> int:
        ...


_system_random: RandomSource = secrets.SystemRandom()


class Keypair(NamedTuple):
    """A textbook RSA key pair.

    Attributes:
        modulus: The modulus `p * q`.
        public_exponent: The public exponent, coprime to the totient.
        private_exponent: The inverse of the public exponent modulo the totient.
    """
    modulus: int
    public_exponent: int
    private_exponent: int

    def public(self) -> tuple[int, int]:
        """The public half as (modulus, exponent)."""
        return self.modulus, self.public_exponent

    def private(self) -> tuple[int, int]:
        """The private half as (modulus, exponent)."""
        return self.modulus, self.private_exponent


def is_probable_prime(n: int, rounds: int = DEFAULT_PRIME_ROUNDS, rng: RandomSource | None = None) -> bool:
    """Perform Miller-Rabin primality test.

    Small and even inputs are settled directly. Otherwise writes `n - 1 = d * 2**r` with `d` odd and runs `rounds`
    rounds against random witnesses. A composite slips through with probability at most `4**-rounds`.

    Args:
        n: The candidate to test.
        rounds: Number of Miller-Rabin rounds to perform. Must be >= 0.
        rng: Source of the witnesses. Defaults to the system CSPRNG.

    Returns:
        True if `n` is probably prime, False if it is definitely composite.

    Raises:
        ValueError: If `rounds` is negative.
    """
    if rounds < 0:
        raise ValueError("rounds must be >= 0")
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0:
        return False
    rng = rng or _system_random
    d = n - 1
    r = 0
    while d % 2 == 0:
        d //= 2
        r += 1
    for _ in range(rounds):
        a = rng.randrange(2, n - 1)
        x = modexp(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = modexp(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(bits: int,
                   rng: RandomSource | None = None,
                   rounds: int = DEFAULT_PRIME_ROUNDS,
                   max_attempts: int | None = None) -> int:
    """Generate a probable prime of exactly `bits` bits.

    Draws random candidates with the top and bottom bits forced on, so every candidate is odd and of full length,
    until one passes `is_probable_prime`.

    Args:
        bits: The size of the prime in bits. Must be >= 2.
        rng: Source of candidates and witnesses. Defaults to the system CSPRNG.
        rounds: Miller-Rabin rounds per candidate.
        max_attempts: Optional cap on the number of candidates. Unbounded if None.

    Returns:
        A probable prime.

    Raises:
        ValueError: If `bits` is smaller than 2.
        RuntimeError: If `max_attempts` candidates were drawn with no prime found.
    """
    if bits < 2:
        raise ValueError("bits must be >= 2")
    rng = rng or _system_random
    msk = (1 << bits - 1) | 1
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = rng.getrandbits(bits) | msk
        if is_probable_prime(candidate, rounds, rng):
            log.debug("Found %d-bit prime after %d candidates.", bits, attempts)
            return candidate
    raise RuntimeError(f"Tried {max_attempts} candidates with no {bits}-bit prime found.")


def generate_keypair(bits: int, rng: RandomSource | None = None) -> Keypair:
    """Generates a textbook RSA key pair.

    Two primes of `bits // 2` bits each, the modulus and totient from them, the fixed public exponent 65537 and the
    private exponent as its inverse modulo the totient.

    Args:
        bits: The key size. Must be >= `MINIMUM_KEY_BITS`.
        rng: Source of randomness. Defaults to the system CSPRNG.

    Returns:
        The generated key pair.

    Raises:
        ValueError: If `bits` is too small.
        RuntimeError: If the public exponent has no inverse modulo the totient.
    """
    if bits < MINIMUM_KEY_BITS:
        raise ValueError(f"bits must be >= {MINIMUM_KEY_BITS}")
    rng = rng or _system_random
    log.info("Step 1: generating primes p and q of %d bits...", bits // 2)
    p = generate_prime(bits // 2, rng)
    q = generate_prime(bits // 2, rng)
    while p == q:
        q = generate_prime(bits // 2, rng)
    log.info("p: %d bits, q: %d bits", p.bit_length(), q.bit_length())
    n = p * q
    log.info("Step 2: n = p * q = %d", n)
    phi = (p - 1) * (q - 1)
    log.info("Step 3: phi(n) = (p - 1) * (q - 1) = %d", phi)
    e = DEFAULT_PUBLIC_EXPONENT
    log.info("Step 4: public exponent e = %d", e)
    d = modular_inverse(e, phi)
    if d is None:
        raise RuntimeError(f"Public exponent {e} has no inverse modulo phi(n).")
    log.info("Step 5: private exponent d computed (%d bits)", d.bit_length())
    return Keypair(n, e, d)
