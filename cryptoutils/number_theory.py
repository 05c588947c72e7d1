#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Number theory and modular arithmetic functions.

Extended Euclidean algorithm, Legendre and Jacobi symbols,
modular square roots, continued fractions and their convergents.

Modular square roots are computed with the cheapest method
allowed by the structure of p - 1:

* p = 3 (mod 4): a^((p+1)/4)
* p = 5 (mod 8): Atkin's variant
* p - 1 divisible by a large power of two: Tonelli-Shanks
* otherwise: the Handbook of Cryptography algorithm
  (Koblitz, pp. 48-49), whose cost grows with the
  2-adic valuation of p - 1
"""

from fractions import Fraction
from math import isqrt
from typing import Callable, List, Sequence, Tuple

from sympy import isprime

from cryptoutils.alias import RandomSource
from cryptoutils.exceptions import (
    GeneratorSamplingExhaustedError,
    InvalidArgumentError,
    InvalidModulusError,
    NoInverseError,
    NoSquareRootError,
    SamplingExhaustedError,
)
from cryptoutils.utils import int_repr, random_source

# (p - 1) % TONELLI_SHANKS_POWER == 0 selects Tonelli-Shanks
TONELLI_SHANKS_POWER = 2 ** 100

# sampling budget for non-residues and generators
DEFAULT_MAX_TRIES = 1000


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    based on Extended Euclidean Algorithm, see
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a (mod m). m does not have to be a prime.

    If a and m are not coprime, NoInverseError is raised
    carrying gcd(a, m) as factor.
    """

    a %= m
    g, x, _ = xgcd(a, m)
    if g == 1:
        return x % m
    raise NoInverseError(g, f"no inverse for {int_repr(a)} mod {int_repr(m)}")


def _require_odd_prime(p: int) -> None:
    if p < 3 or p % 2 == 0 or not isprime(p):
        raise InvalidModulusError(f"not an odd prime: {int_repr(p)}")


def legendre(a: int, p: int) -> int:
    """Return the Legendre symbol (a|p) using Euler's criterion.

    p must be an odd prime.
    It returns 1 if a is a non-zero square modulo p,
    -1 if it is not a square, 0 if p divides a.
    """

    _require_odd_prime(p)
    ls = pow(a, (p - 1) // 2, p)
    return -1 if ls == p - 1 else ls


def jacobi(n: int, k: int) -> int:
    """Return the Jacobi symbol (n|k).

    k must be a positive odd integer, not necessarily prime.
    The result is 0 if and only if gcd(n, k) != 1.
    """

    if k < 1 or k % 2 == 0:
        raise InvalidArgumentError(f"k must be positive and odd: {int_repr(k)}")

    n %= k
    t = 1
    while n != 0:
        while n % 2 == 0:
            n //= 2
            if k % 8 in (3, 5):
                t = -t
        # quadratic reciprocity
        n, k = k, n
        if n % 4 == 3 and k % 4 == 3:
            t = -t
        n %= k
    return t if k == 1 else 0


def is_quadratic_residue(a: int, p: int) -> bool:
    """Return True if x^2 = a (mod p) has solutions.

    Every residue is a square modulo 2, and so is zero modulo any p.
    """

    if p == 2:
        return True
    if a % p == 0:
        return True
    return jacobi(a, p) == 1


def find_quadratic_non_residue(
    p: int, rng: RandomSource = None, max_tries: int = DEFAULT_MAX_TRIES
) -> int:
    """Return a random quadratic non-residue modulo the odd p.

    Candidates are sampled uniformly from [2, p-1] until one
    with Jacobi symbol -1 is found: for a prime p half of them are.
    """

    if p < 3 or p % 2 == 0:
        raise InvalidArgumentError(f"p must be odd and greater than 2: {int_repr(p)}")
    rng = random_source(rng)
    for _ in range(max_tries):
        qnr = rng.randint(2, p - 1)
        if jacobi(qnr, p) == -1:
            return qnr
    raise SamplingExhaustedError(
        f"no quadratic non-residue mod {int_repr(p)} in {max_tries} tries"
    )


def _sqrt_p_even(a: int, p: int, rng: RandomSource = None) -> int:
    return a


def _sqrt_p_3_mod_4(a: int, p: int, rng: RandomSource = None) -> int:
    return pow(a, (p + 1) // 4, p)


def _sqrt_p_5_mod_8(a: int, p: int, rng: RandomSource = None) -> int:
    d = pow(a, (p - 1) // 4, p)
    if d == 1:
        return pow(a, (p + 3) // 8, p)
    # d == p - 1
    return 2 * a * pow(4 * a, (p - 5) // 8, p) % p


def two_adic_split(m: int) -> Tuple[int, int]:
    "Return (s, t) such that m = 2^s * t with t odd; m must be positive."
    if m < 1:
        raise InvalidArgumentError(f"not a positive integer: {m}")
    s = 0
    while m % 2 == 0:
        m //= 2
        s += 1
    return s, m


def tonelli_shanks(a: int, p: int, rng: RandomSource = None) -> int:
    """Return a square root of a (mod p) with the Tonelli-Shanks algorithm.

    p must be an odd prime and a a quadratic residue modulo p.
    """

    a %= p
    if a == 0:
        return 0
    b = find_quadratic_non_residue(p, rng)
    s, t = two_adic_split(p - 1)

    c = pow(b, t, p)
    r = pow(a, (t + 1) // 2, p)
    t = pow(a, t, p)
    while t != 1:
        # find the lowest i such that t^(2^i) = 1
        i = 1
        t2i = t * t % p
        while t2i != 1:
            t2i = t2i * t2i % p
            i += 1
        b = pow(c, 1 << (s - i - 1), p)
        s = i
        c = b * b % p
        t = t * c % p
        r = r * b % p
    return r


def hoc_sqrt(a: int, p: int, rng: RandomSource = None) -> int:
    """Return a square root of a (mod p), p being an odd prime.

    Algorithm from the Handbook of Cryptography (Koblitz, pp. 48-49);
    running time depends on alpha, for p - 1 = 2^alpha * s with s odd.
    a must be a non-zero quadratic residue.
    """

    a %= p
    if a == 0:
        return 0
    n = find_quadratic_non_residue(p, rng)
    alpha, s = two_adic_split(p - 1)

    inv_a = mod_inv(a, p)
    b = pow(n, s, p)
    r = pow(a, (s + 1) // 2, p)
    r_sqr = r * r % p
    expon = 1 << (alpha - 1)
    for _ in range(alpha - 1):
        expon >>= 1
        d = pow(inv_a * r_sqr, expon, p)
        if d == p - 1:
            r = r * b % p
            r_sqr = r * r % p
        b = b * b % p
    return r


# ordered (condition on p, method) table: the first match is used,
# hoc_sqrt otherwise
_SQRT_METHODS: Sequence[Tuple[Callable[[int], bool], Callable[..., int]]] = (
    (lambda p: p % 2 == 0, _sqrt_p_even),
    (lambda p: p % 4 == 3, _sqrt_p_3_mod_4),
    (lambda p: p % 8 == 5, _sqrt_p_5_mod_8),
    (lambda p: (p - 1) % TONELLI_SHANKS_POWER == 0, tonelli_shanks),
)


def sqrt_mod_prime(a: int, p: int, rng: RandomSource = None) -> int:
    """Return a square root of a (mod p); p must be a prime.

    Solve the equation:
        x^2 = a mod p

    and return x. Note that p - x is also a root.

    >>> sqrt_mod_prime(33 * 33, 73) in (33, 73 - 33)
    True
    """

    if p < 2 or not isprime(p):
        raise InvalidModulusError(f"not a prime: {int_repr(p)}")
    a %= p
    if not is_quadratic_residue(a, p):
        raise NoSquareRootError(f"no root for {int_repr(a)} mod {int_repr(p)}")
    if a == 0:
        return 0

    for condition, method in _SQRT_METHODS:
        if condition(p):
            return method(a, p, rng)
    return hoc_sqrt(a, p, rng)


def continued_fraction(a: int, b: int) -> List[int]:
    """Return the continued fraction of the rational a/b.

    >>> continued_fraction(31, 73)
    [0, 2, 2, 1, 4, 2]
    """

    if b == 0:
        raise InvalidArgumentError("zero denominator")
    if b < 0:
        a, b = -a, -b

    fraction: List[int] = []
    while b != 0:
        q = a // b
        fraction.append(q)
        a, b = b, a - q * b
    return fraction


def convergents_from_continued_fraction(fraction: Sequence[int]) -> List[Fraction]:
    "Return the convergents of a continued fraction."

    nums = [0, 1]
    dens = [1, 0]
    result: List[Fraction] = []
    for a in fraction:
        nums.append(a * nums[-1] + nums[-2])
        dens.append(a * dens[-1] + dens[-2])
        result.append(Fraction(nums[-1], dens[-1]))
    return result


def convergents(a: int, b: int) -> List[Fraction]:
    """Return the convergents of the rational a/b.

    >>> [str(c) for c in convergents(31, 73)]
    ['0', '1/2', '2/5', '3/7', '14/33', '31/73']
    """

    return convergents_from_continued_fraction(continued_fraction(a, b))


def solve_quadratic(a: int, b: int, c: int) -> Tuple[int, int]:
    """Return the solutions of a*x^2 + b*x + c = 0.

    The solutions are assumed to be integers.
    """

    if a == 0:
        raise InvalidArgumentError("not a quadratic equation: a = 0")
    delta = b * b - 4 * a * c
    if delta < 0:
        raise InvalidArgumentError(f"negative discriminant: {delta}")
    d = isqrt(delta)
    return (-b + d) // (2 * a), (-b - d) // (2 * a)


def iroot(n: int, k: int) -> int:
    "Return the largest integer r such that r^k <= n."

    if n < 0:
        raise InvalidArgumentError(f"negative radicand: {n}")
    if k < 0:
        raise InvalidArgumentError(f"negative root index: {k}")
    if k == 0:
        return 1
    if k == 1 or n < 2:
        return n

    # r^k <= n < (r+1)^k with r < 2^(ceil(bit_length/k))
    low, high = 0, 1 << -(-n.bit_length() // k)
    while high - low > 1:
        mid = (low + high) // 2
        if mid ** k <= n:
            low = mid
        else:
            high = mid
    return low


def is_generator(g: int, q: int, factors: Sequence[int]) -> bool:
    """Return True if g is a generator of Z_q.

    q must be an odd prime and factors the distinct prime factors of q-1.

    >>> q = 2 ** 7 * 5 + 1
    >>> is_generator(2, q, [2, 5]), is_generator(3, q, [2, 5])
    (False, True)
    """

    _require_odd_prime(q)
    n = q - 1
    return all(pow(g, n // factor, q) != 1 for factor in factors)


def safe_prime_generator(
    q: int, rng: RandomSource = None, max_tries: int = DEFAULT_MAX_TRIES
) -> int:
    "Return a random generator of Z_q, with q = 2p + 1 a safe prime."

    _require_odd_prime(q)
    if not isprime((q - 1) // 2):
        raise InvalidModulusError(f"not a safe prime: {int_repr(q)}")
    factors = sorted({2, (q - 1) // 2})
    rng = random_source(rng)
    for _ in range(max_tries):
        g = rng.randint(1, q - 1)
        if is_generator(g, q, factors):
            return g
    raise GeneratorSamplingExhaustedError(
        f"no generator of Z_{int_repr(q)} in {max_tries} tries"
    )
