from __future__ import annotations

import random

import gmpy2
import pytest
import sympy

from bigprime import WITNESSES, BigInt4096, ZeroModulus, is_prime, mod_exp, split_power_of_two


def _trial_division(n: int) -> bool:
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


def test_mod_exp_worked_example() -> None:
    assert str(mod_exp(BigInt4096(4), BigInt4096(13), BigInt4096(497))) == "445"


def test_mod_exp_matches_brute_force_multiplication() -> None:
    rng = random.Random(0)
    for _ in range(40):
        base = rng.randrange(0, 10**6)
        exp = rng.randrange(0, 300)
        mod = rng.randrange(2, 10**6)
        expected = 1
        for _ in range(exp):
            expected = (expected * base) % mod
        assert int(mod_exp(base, exp, mod)) == expected


def test_mod_exp_matches_gmpy2_for_multi_word_moduli() -> None:
    rng = random.Random(1)
    for bits in (64, 128, 521):
        for _ in range(2):
            mod = rng.getrandbits(bits) | 1
            base = rng.getrandbits(bits + 7)
            exp = rng.getrandbits(48)
            assert int(mod_exp(base, exp, mod)) == int(gmpy2.powmod(base, exp, mod))


def test_mod_exp_zero_exponent_returns_one_unreduced() -> None:
    assert mod_exp(12345, 0, 7) == 1
    # the running result starts at 1 and is only reduced after a multiply
    assert mod_exp(12345, 0, 1) == 1
    assert mod_exp(12345, 3, 1) == 0


def test_mod_exp_zero_modulus_raises() -> None:
    base, exp, mod = BigInt4096(4), BigInt4096(13), BigInt4096(0)
    with pytest.raises(ZeroModulus):
        mod_exp(base, exp, mod)
    with pytest.raises(ZeroDivisionError):
        mod_exp(base, exp, mod)
    assert (base, exp, mod) == (4, 13, 0)


def test_mod_exp_does_not_consume_callers_exponent() -> None:
    exp = BigInt4096(13)
    mod_exp(4, exp, 497)
    assert exp == 13


def test_split_power_of_two() -> None:
    d, r = split_power_of_two(BigInt4096(96))
    assert (d, r) == (3, 5)
    d, r = split_power_of_two(BigInt4096(1) << 4095)
    assert (d, r) == (1, 4095)
    with pytest.raises(ValueError):
        split_power_of_two(0)


def test_is_prime_small_cases() -> None:
    assert is_prime(BigInt4096(97))
    assert not is_prime(BigInt4096(100))
    assert [n for n in range(0, 14) if is_prime(n)] == [2, 3, 5, 7, 11, 13]


def test_witnesses_equal_to_n_are_skipped() -> None:
    # 5, 7 and 11 are themselves witnesses; a^d mod n would be 0 for them.
    for p in WITNESSES:
        assert is_prime(p)


def test_is_prime_agrees_with_trial_division_below_5000() -> None:
    for n in range(0, 5001):
        assert is_prime(n) == _trial_division(n), n


@pytest.mark.slow
def test_is_prime_agrees_with_trial_division_below_100000() -> None:
    for n in range(0, 100_001):
        assert is_prime(n) == _trial_division(n), n


def test_is_prime_on_random_64_bit_values_matches_sympy() -> None:
    rng = random.Random(2)
    for _ in range(200):
        n = rng.getrandbits(64)
        assert is_prime(n) == sympy.isprime(n), n


def test_is_prime_on_multi_word_values() -> None:
    m89 = (1 << 89) - 1
    assert is_prime(m89)
    assert not is_prime(((1 << 61) - 1) * ((1 << 31) - 1))
    assert not is_prime(m89 * 3)


@pytest.mark.parametrize(
    "n,rounds",
    [
        (2047, 1),
        (1373653, 2),
        (25326001, 3),
        (3215031751, 4),
        (2152302898747, 5),
    ],
)
def test_known_strong_pseudoprimes_pass_the_witness_prefix(n: int, rounds: int) -> None:
    # Known limitation: composites that are strong pseudoprimes to every
    # witness used are reported prime.
    assert not sympy.isprime(n)
    assert is_prime(n, rounds)


def test_one_more_round_exposes_the_weaker_pseudoprimes() -> None:
    assert not is_prime(2047, 2)
    assert not is_prime(1373653, 3)
    assert not is_prime(25326001, 4)
    assert not is_prime(3215031751, 5)


def test_rounds_out_of_range_rejected() -> None:
    with pytest.raises(ValueError):
        is_prime(97, 6)
    with pytest.raises(ValueError):
        is_prime(97, -1)


def test_zero_rounds_only_filters_trivial_cases() -> None:
    assert is_prime(91, 0)
    assert not is_prime(90, 0)
    assert not is_prime(1, 0)
