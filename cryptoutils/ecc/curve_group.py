#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Elliptic curve group law over Z_n.

The curve is the set of points (x, y) that are solutions
to the Weierstrass equation y^2 = x^3 + a*x + b (mod n),
together with the point at infinity INF.

The modulus n is conventionally a prime, but it does not have to be:
over a composite n the group law is not always defined,
and the failure reveals a factor of n.
This is reported raising NoInverseError, whose factor attribute
is the non-trivial gcd found while inverting.

Points are values: operations never modify their inputs.
"""

from typing import NamedTuple, Union

from cryptoutils.alias import Integer
from cryptoutils.exceptions import (
    InvalidArgumentError,
    InvalidModulusError,
    NoInverseError,
    NoSquareRootError,
)
from cryptoutils.number_theory import sqrt_mod_prime, xgcd
from cryptoutils.utils import hex_string, int_from_integer, int_repr

HEX_THRESHOLD = 0xFFFFFFFF


class AffinePoint(NamedTuple):
    x: int
    y: int


class InfinityPoint:
    """The point at infinity, i.e. the neutral element of the group.

    There is only one instance: INF.
    """

    _instance = None

    def __new__(cls) -> "InfinityPoint":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INF"

    def __reduce__(self) -> str:
        return "INF"


INF = InfinityPoint()

EllipticPoint = Union[AffinePoint, InfinityPoint]


def is_infinity(P: EllipticPoint) -> bool:
    "Return True if the point is the point at infinity."
    return isinstance(P, InfinityPoint)


class EllipticCurve:
    """Group of the points of an elliptic curve over Z_n.

    The curve is immutable: a, b, and n are read-only,
    with a and b reduced modulo n.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0 (mod n).
    """

    def __init__(self, a: Integer, b: Integer, n: Integer) -> None:

        n = int_from_integer(n)
        if n <= 3:
            raise InvalidModulusError(f"modulus not greater than 3: {n}")
        self._n = n
        self._a = int_from_integer(a) % n
        self._b = int_from_integer(b) % n

        d = 4 * self._a * self._a * self._a + 27 * self._b * self._b
        if d % n == 0:
            raise InvalidArgumentError("zero discriminant")

    @property
    def a(self) -> int:
        return self._a

    @property
    def b(self) -> int:
        return self._b

    @property
    def n(self) -> int:
        return self._n

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EllipticCurve):
            return NotImplemented
        return (self._a, self._b, self._n) == (other._a, other._b, other._n)

    def __hash__(self) -> int:
        return hash((self._a, self._b, self._n))

    def __str__(self) -> str:
        result = "EllipticCurve"
        if self._n > HEX_THRESHOLD:
            result += f"\n n   = {hex_string(self._n)}"
        else:
            result += f"\n n   = {self._n}"

        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f"\n a   = {hex_string(self._a)}"
            result += f"\n b   = {hex_string(self._b)}"
        else:
            result += f"\n a   = {self._a}"
            result += f"\n b   = {self._b}"

        return result

    def __repr__(self) -> str:
        result = "EllipticCurve("
        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f"'{hex_string(self._a)}', '{hex_string(self._b)}'"
        else:
            result += f"{self._a}, {self._b}"
        result += f", {int_repr(self._n)}"
        result += ")"
        return result

    def _inverse(self, a: int) -> int:
        "Return the inverse of a non-zero a (mod n), or raise NoInverseError."
        g, inv, _ = xgcd(a, self._n)
        if g != 1:
            err_msg = f"no inverse for {int_repr(a)} mod {int_repr(self._n)}"
            raise NoInverseError(g, err_msg)
        return inv

    def negate(self, P: EllipticPoint) -> EllipticPoint:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """
        if is_infinity(P):
            return INF
        return AffinePoint(P[0], (self._n - P[1]) % self._n)

    def double(self, P: EllipticPoint) -> EllipticPoint:
        """Return 2*P.

        The input point is not checked to be on the curve.
        """

        if is_infinity(P):
            return INF

        two_y = 2 * P[1] % self._n
        if two_y == 0:  # vertical tangent
            return INF

        lam = (3 * P[0] * P[0] + self._a) * self._inverse(two_y)
        x = (lam * lam - 2 * P[0]) % self._n
        y = (lam * (P[0] - x) - P[1]) % self._n
        return AffinePoint(x, y)

    def add(self, P: EllipticPoint, Q: EllipticPoint) -> EllipticPoint:
        """Return the sum of two points.

        The input points are not checked to be on the curve.
        """

        if is_infinity(P):
            return Q
        if is_infinity(Q):
            return P

        if P[0] == Q[0] and P[1] == Q[1]:
            return self.double(P)

        delta_x = (Q[0] - P[0]) % self._n
        if delta_x == 0:  # vertical line
            return INF

        lam = (Q[1] - P[1]) * self._inverse(delta_x)
        x = (lam * lam - P[0] - Q[0]) % self._n
        y = (lam * (P[0] - x) - P[1]) % self._n
        return AffinePoint(x, y)

    def _y2(self, x: int) -> int:
        return ((x * x + self._a) * x + self._b) % self._n

    def y(self, x: int) -> int:
        """Return one of the y coordinates associated to x.

        The other one is n - y. The modulus must be a prime.
        """
        if not 0 <= x < self._n:
            raise InvalidArgumentError(f"x-coordinate not in 0..n-1: {int_repr(x)}")
        try:
            return sqrt_mod_prime(self._y2(x), self._n)
        except NoSquareRootError as e:
            err_msg = f"invalid x-coordinate: {int_repr(x)}"
            raise NoSquareRootError(err_msg) from e

    def is_on_curve(self, P: EllipticPoint) -> bool:
        "Return True if the point is on the curve."
        if is_infinity(P):
            return True
        if len(P) != 2:
            raise InvalidArgumentError("point must be a tuple[int, int]")
        if not (0 <= P[0] < self._n and 0 <= P[1] < self._n):
            return False
        return self._y2(P[0]) == P[1] * P[1] % self._n

    def require_on_curve(self, P: EllipticPoint) -> None:
        """Require the input curve point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(P):
            raise InvalidArgumentError("point not on curve")


def double(P: EllipticPoint, ec: EllipticCurve) -> EllipticPoint:
    "Return 2*P on the curve ec."
    return ec.double(P)


def add(P: EllipticPoint, Q: EllipticPoint, ec: EllipticCurve) -> EllipticPoint:
    "Return P+Q on the curve ec."
    return ec.add(P, Q)


def multiply(k: int, P: EllipticPoint, ec: EllipticCurve) -> EllipticPoint:
    """Scalar multiplication of a curve point.

    This implementation uses
    'double & add' algorithm,
    'left-to-right' binary decomposition of the k coefficient,
    affine coordinates.

    A NoInverseError raised along the way aborts the computation,
    e.g. when a factor of a composite modulus is found.
    The input point is not checked to be on the curve.
    """

    if k < 0:
        raise InvalidArgumentError(f"negative k: {hex(k)}")

    Q: EllipticPoint = INF
    for bit in bin(k)[2:]:
        Q = ec.double(Q)
        if bit == "1":
            Q = ec.add(Q, P)
    return Q
