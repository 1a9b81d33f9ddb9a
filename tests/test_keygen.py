# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random

from cryptography.hazmat.primitives.asymmetric import rsa
import pytest
import sympy

from rsademo import keygen
from rsademo.arith import modexp

base_primetest_cases = [
    # Edge Cases (neither)
    (-7, False),
    (0, False),
    (1, False),
    # Known Primes
    (2, True),
    (3, True),
    (5, True),
    (97, True),
    (7919, True),
    (2**61 - 1, True),
    (2**127 - 1, True),
    # Composite
    (4, False),
    (9, False),
    (100, False),
    # Fermat Pseudoprimes (numbers that fool naive tests)
    (341, False),  # 11 * 31
    (561, False),  # 3 * 11 * 17 (Carmichael number)
    (1105, False),  # 5 * 13 * 17 (Carmichael number)
    # Strong pseudoprimes to base 2
    (2047, False),
    (3277, False),
    (4033, False),
    (2**61 - 1 + 2, False),
    ((2**61 - 1) * (2**31 - 1), False),
]

test_sizes = [
    64,
    256,
    512,
    pytest.param(1024, marks=pytest.mark.slow),
    pytest.param(2048, marks=pytest.mark.extreme),
]


def id_generator(param):
    if isinstance(param, int) and param > 1000000:
        return f"LargeInt-{param.bit_length()}bits"
    return str(param)


@pytest.mark.parametrize("n,expected", base_primetest_cases, ids=id_generator)
def test_is_probable_prime(n, expected):
    assert keygen.is_probable_prime(n, 20) == expected


@pytest.mark.parametrize("n", [2, 3, 5, 97, 7919])
@pytest.mark.parametrize("rounds", [1, 2, 10])
def test_known_primes_any_rounds(n, rounds, rng):
    assert keygen.is_probable_prime(n, rounds, rng)


@pytest.mark.parametrize("n", [4, 9, 100, 561])
@pytest.mark.parametrize("rounds", [5, 10])
def test_known_composites(n, rounds):
    assert not keygen.is_probable_prime(n, rounds)


def test_is_probable_prime_against_sympy(rng):
    for n in range(-5, 5000):
        assert keygen.is_probable_prime(n, 20, rng) == sympy.isprime(n), n


def test_is_probable_prime_rejects_rounds():
    with pytest.raises(ValueError):
        keygen.is_probable_prime(97, -1)


def test_is_probable_prime_zero_rounds_draws_nothing(mocker):
    source = mocker.Mock()
    assert keygen.is_probable_prime(91, 0, source)
    source.randrange.assert_not_called()


def test_is_probable_prime_witness_range(mocker):
    source = mocker.Mock(wraps=random.Random(7))
    keygen.is_probable_prime(7919, 4, source)
    assert source.randrange.call_count == 4
    for call in source.randrange.call_args_list:
        assert call.args == (2, 7918)


def test_is_probable_prime_stops_on_witness(mocker):
    # 2 is a witness for 561.
    source = mocker.Mock()
    source.randrange.return_value = 2
    assert not keygen.is_probable_prime(561, 10, source)
    source.randrange.assert_called_once()


def test_is_probable_prime_liar(mocker):
    # 2 is a strong liar for 2047 = 23 * 89.
    source = mocker.Mock()
    source.randrange.return_value = 2
    assert keygen.is_probable_prime(2047, 3, source)
    source.randrange.return_value = 3
    assert not keygen.is_probable_prime(2047, 3, source)


def test_is_probable_prime_default_source(mocker):
    spy = mocker.spy(keygen._system_random, "randrange")
    assert keygen.is_probable_prime(7919, 3)
    assert spy.call_count == 3


@pytest.mark.parametrize("size", test_sizes)
def test_generate_prime_size(size, rng):
    p = keygen.generate_prime(size, rng)
    assert p.bit_length() == size
    assert p % 2 == 1
    assert keygen.is_probable_prime(p, 10, rng)
    assert sympy.isprime(p)


@pytest.mark.parametrize("size,choices", [(2, {3}), (3, {5, 7}), (4, {11, 13})])
def test_generate_prime_tiny(size, choices, rng):
    for _ in range(20):
        assert keygen.generate_prime(size, rng) in choices


def test_generate_prime_forces_bits(mocker):
    source = mocker.Mock(wraps=random.Random(1))
    # 0 -> 0b1001 (9, composite), 2 -> 0b1011 (11).
    source.getrandbits.side_effect = [0, 2]
    assert keygen.generate_prime(4, source) == 11
    source.getrandbits.assert_called_with(4)


def test_generate_prime_retries(mocker):
    mocker.patch("rsademo.keygen.is_probable_prime", side_effect=[False, False, True])
    source = mocker.Mock()
    source.getrandbits.side_effect = [0, 2, 4]
    assert keygen.generate_prime(8, source) == 0b10000101
    assert source.getrandbits.call_count == 3


def test_generate_prime_faulty(mocker):
    mocker.patch("rsademo.keygen.is_probable_prime", return_value=False)
    with pytest.raises(RuntimeError):
        keygen.generate_prime(64, max_attempts=50)
    assert keygen.is_probable_prime.call_count == 50


@pytest.mark.parametrize("bits", [-1, 0, 1])
def test_generate_prime_validates(bits):
    with pytest.raises(ValueError):
        keygen.generate_prime(bits)


@pytest.mark.parametrize("size", test_sizes)
def test_generate_keypair_roundcryption(size, rng):
    kp = keygen.generate_keypair(size, rng)
    for message in [0, 1, 72, 255, kp.modulus - 1, rng.randrange(0, kp.modulus)]:
        ciphertext = modexp(message, kp.public_exponent, kp.modulus)
        assert modexp(ciphertext, kp.private_exponent, kp.modulus) == message


def test_generate_keypair_end_to_end():
    kp = keygen.generate_keypair(512)
    ciphertext = modexp(72, kp.public_exponent, kp.modulus)
    assert modexp(ciphertext, kp.private_exponent, kp.modulus) == 72


def test_generate_keypair_structure(rng):
    kp = keygen.generate_keypair(256, rng)
    p, q = rsa.rsa_recover_prime_factors(kp.modulus, kp.public_exponent, kp.private_exponent)
    assert p * q == kp.modulus
    assert p != q
    assert p.bit_length() == q.bit_length() == 128
    assert sympy.isprime(p) and sympy.isprime(q)
    phi = (p - 1) * (q - 1)
    assert math.gcd(kp.public_exponent, phi) == 1
    assert (kp.public_exponent * kp.private_exponent) % phi == 1
    assert 0 < kp.private_exponent < phi
    assert kp.public() == (kp.modulus, 65537)
    assert kp.private() == (kp.modulus, kp.private_exponent)


def test_generate_keypair_immutable(rng):
    kp = keygen.generate_keypair(64, rng)
    with pytest.raises(AttributeError):
        kp.modulus = 15


def test_generate_keypair_deterministic():
    assert keygen.generate_keypair(128, random.Random(5)) == keygen.generate_keypair(128, random.Random(5))


def test_generate_keypair_functional(mocker):
    src_p, src_q = sympy.prime(10**5), sympy.prime(10**5 + 1)
    mocker.patch("rsademo.keygen.generate_prime", side_effect=[src_p, src_q])
    kp = keygen.generate_keypair(42)
    keygen.generate_prime.assert_called_with(21, mocker.ANY)
    assert kp.modulus == src_p * src_q
    assert kp.public_exponent == 65537
    assert kp.private_exponent == pow(65537, -1, (src_p - 1) * (src_q - 1))


def test_generate_keypair_distinct_primes(mocker):
    mocker.patch("rsademo.keygen.generate_prime", side_effect=[1009, 1009, 1009, 1013])
    kp = keygen.generate_keypair(20)
    assert kp.modulus == 1009 * 1013
    assert keygen.generate_prime.call_count == 4


def test_generate_keypair_no_inverse(mocker):
    mocker.patch("rsademo.keygen.generate_prime", side_effect=[1009, 1013])
    mocker.patch("rsademo.keygen.modular_inverse", return_value=None)
    with pytest.raises(RuntimeError):
        keygen.generate_keypair(40)


@pytest.mark.parametrize("bits", [0, 4, 7])
def test_generate_keypair_validates(bits):
    with pytest.raises(ValueError):
        keygen.generate_keypair(bits)


def test_generate_keypair_logs_steps(caplog, rng):
    with caplog.at_level("INFO", logger="rsademo.keygen"):
        keygen.generate_keypair(64, rng)
    steps = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Step")]
    assert [s.split(":")[0] for s in steps] == ["Step 1", "Step 2", "Step 3", "Step 4", "Step 5"]
