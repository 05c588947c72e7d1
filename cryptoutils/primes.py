#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Prime number generation.

Random primes are found by rejection sampling,
using sympy's probabilistic primality test.
Every search has a finite budget of candidates:
unless max_tries is given, it is DEFAULT_TRIES_PER_BIT * bitsize.
"""

import logging
from math import ceil, log
from typing import List, Optional, Tuple

from sympy import isprime, primerange

from cryptoutils.alias import RandomSource
from cryptoutils.exceptions import InvalidArgumentError, SamplingExhaustedError
from cryptoutils.utils import random_source

logger = logging.getLogger(__name__)

DEFAULT_TRIES_PER_BIT = 100


def _budget(bitsize: int, max_tries: Optional[int]) -> int:
    return DEFAULT_TRIES_PER_BIT * bitsize if max_tries is None else max_tries


def random_prime(
    bitsize: int, rng: RandomSource = None, max_tries: Optional[int] = None
) -> int:
    """Return a random prime with exactly bitsize bits.

    >>> random_prime(42).bit_length()
    42
    """

    if bitsize < 2:
        raise InvalidArgumentError(f"bitsize too low: {bitsize}")

    rng = random_source(rng)
    lo, hi = 1 << (bitsize - 1), 1 << bitsize
    for _ in range(_budget(bitsize, max_tries)):
        n = rng.randrange(lo, hi)
        if isprime(n):
            return n
    raise SamplingExhaustedError(f"no {bitsize}-bit prime found")


def safe_prime(
    bitsize: int, rng: RandomSource = None, max_tries: Optional[int] = None
) -> int:
    """Return a random safe prime q = 2p + 1 with bitsize bits.

    p is prime too.
    """

    if bitsize < 3:
        raise InvalidArgumentError(f"bitsize too low: {bitsize}")

    rng = random_source(rng)
    tries = _budget(bitsize, max_tries)
    for i in range(tries):
        q = 2 * random_prime(bitsize - 1, rng) + 1
        if isprime(q):
            logger.debug("%d-bit safe prime found after %d tries", bitsize, i + 1)
            return q
    raise SamplingExhaustedError(f"no {bitsize}-bit safe prime in {tries} tries")


def tower_two_prime(
    bitsize: int,
    tower_len: int,
    rng: RandomSource = None,
    max_tries: Optional[int] = None,
) -> int:
    """Return a random prime 2^tower_len * q + 1 with bitsize bits.

    q is prime too.
    """

    if tower_len < 0:
        raise InvalidArgumentError(f"negative tower length: {tower_len}")
    if bitsize - tower_len < 2:
        err_msg = f"bitsize too low for a tower of length {tower_len}: {bitsize}"
        raise InvalidArgumentError(err_msg)

    rng = random_source(rng)
    tower = 1 << tower_len
    tries = _budget(bitsize, max_tries)
    for i in range(tries):
        n = tower * random_prime(bitsize - tower_len, rng) + 1
        if isprime(n):
            logger.debug("%d-bit tower prime found after %d tries", bitsize, i + 1)
            return n
    raise SamplingExhaustedError(f"no {bitsize}-bit tower prime in {tries} tries")


def twin_primes(
    bitsize: int, rng: RandomSource = None, max_tries: Optional[int] = None
) -> Tuple[int, int]:
    """Return a pair of primes p, p + 2 with bitsize bits.

    This might take a while to run.
    """

    rng = random_source(rng)
    tries = _budget(bitsize, max_tries)
    for i in range(tries):
        p = random_prime(bitsize, rng)
        if isprime(p + 2):
            logger.debug("%d-bit twin primes found after %d tries", bitsize, i + 1)
            return p, p + 2
    raise SamplingExhaustedError(f"no {bitsize}-bit twin primes in {tries} tries")


def first_primes(k: int) -> List[int]:
    """Return the first k prime numbers.

    >>> first_primes(10)
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    """

    if k <= 0:
        return []
    # the k-th prime is less than k * (ln k + ln ln k) for k >= 6
    ln_k = log(k + 1)
    hi = max(3, ceil((k + 1) * (ln_k + log(ln_k))))
    return list(primerange(2, hi + 1))[:k]
