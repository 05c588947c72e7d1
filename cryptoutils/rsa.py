#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Classical attacks on RSA moduli.

* factor_with_ed: factor n = p*q given a matching (e, d) exponent pair
  (Stinson, Cryptography Theory and Practice, algorithm 5.10)
* wiener: Wiener's low private exponent attack,
  with Dujella's extension for exponents slightly above n^(1/4)
  (https://bib.irb.hr/datoteka/383127.dujececc.pdf)
"""

import logging
from math import gcd, isqrt
from typing import List, Optional, Tuple

from cryptoutils.alias import Factors, RandomSource
from cryptoutils.exceptions import FactorizationExhaustedError, InvalidArgumentError
from cryptoutils.number_theory import convergents, solve_quadratic, two_adic_split
from cryptoutils.utils import int_repr, random_source

logger = logging.getLogger(__name__)

DEFAULT_DUJELLA_BOUND = 20
DEFAULT_MAX_ITERATIONS = 1000


def factor_with_ed(
    n: int,
    e: int,
    d: int,
    rng: RandomSource = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Factors:
    """Factor n = p*q given (e, d) such that e*d = 1 mod phi(n).

    Each random witness w reveals a factor with probability
    at least 1/2; after max_iterations unlucky witnesses
    FactorizationExhaustedError is raised.
    """

    if n < 4:
        raise InvalidArgumentError(f"modulus too small: {n}")
    k = e * d - 1
    if k < 1:
        raise InvalidArgumentError(f"e*d - 1 not positive: {k}")

    # k = 2^s * r, with r odd
    s, r = two_adic_split(k)
    rng = random_source(rng)
    for _ in range(max_iterations):
        w = rng.randint(2, n - 1)
        x = gcd(w, n)
        if 1 < x < n:
            return x, n // x

        v = pow(w, r, n)
        if v == 1:
            continue
        for _ in range(s):
            v0 = v
            v = v * v % n
            if v == 1:
                break
        else:
            # w^(e*d-1) != 1: not a valid exponent pair for w
            continue

        if v0 == n - 1:
            continue
        x = gcd(v0 + 1, n)
        if 1 < x < n:
            return x, n // x

    err_msg = f"no factor of {int_repr(n)} in {max_iterations} iterations"
    raise FactorizationExhaustedError(err_msg)


def dujella_pairs(bound: int) -> List[Tuple[int, int]]:
    "Return the coprime pairs (r, s) with 1 <= s <= r <= bound."
    return [
        (r, s) for r in range(1, bound + 1) for s in range(1, r + 1) if gcd(r, s) == 1
    ]


def _factors_from_phi(n: int, e: int, k: int, d: int) -> Optional[Factors]:
    "Return p, q from the candidate phi(n) = (e*d - 1) / k, if consistent."

    if k == 0 or (e * d - 1) % k != 0:
        return None
    phi = (e * d - 1) // k
    # p and q are the roots of x^2 - (n - phi + 1)*x + n
    b = phi - n - 1
    if b * b - 4 * n < 0:
        return None
    p, q = solve_quadratic(1, b, n)
    return (p, q) if p * q == n else None


def wiener(
    n: int,
    e: int,
    dujella_bound: int = DEFAULT_DUJELLA_BOUND,
    max_convergents: Optional[int] = None,
    rng: RandomSource = None,
) -> Optional[Factors]:
    """Factor the semiprime n, assuming Wiener's attack holds.

    That is d < n^(1/4), where d*e = 1 mod phi(n).

    The Dujella extension is used: increasing dujella_bound
    slows the running time but increases chances of finding
    the correct d in case d ~ n^(1/4).

    Return None if no factorization is found within
    the first max_convergents convergents (all of them by default).
    """

    if n < 4:
        raise InvalidArgumentError(f"modulus too small: {n}")

    # k/d approximated by e/(n + 1 - 2*sqrt(n)) better than by e/n;
    # the first convergent 0/1 is useless
    fractions = convergents(e, n + 1 - 2 * isqrt(n))[1:]
    if max_convergents is not None:
        fractions = fractions[:max_convergents]

    # ciphertext to test the candidate decryption exponents
    test_cipher = pow(2, e, n)
    pairs_rs = dujella_pairs(dujella_bound)

    old_d = 1
    for fraction in fractions:
        k, d = fraction.numerator, fraction.denominator

        # regular Wiener attack
        if pow(test_cipher, d, n) == 2:
            factors = _factors_from_phi(n, e, k, d)
            if factors is not None:
                logger.debug("Wiener attack succeeded with d = %d", d)
                return factors

        # Dujella extension
        for r, s in pairs_rs:
            dujella = r * d + s * old_d
            if pow(test_cipher, dujella, n) == 2:
                try:
                    factors = factor_with_ed(n, e, dujella, rng)
                except FactorizationExhaustedError:
                    logger.debug("false positive exponent: %d", dujella)
                    continue
                logger.debug("Dujella extension succeeded with d = %d", dujella)
                return factors

        old_d = d

    logger.debug("no factorization found for %s", int_repr(n))
    return None
