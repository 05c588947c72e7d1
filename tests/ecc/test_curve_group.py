#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"Tests for the `cryptoutils.ecc.curve_group` module."

import pickle
from typing import Dict, Tuple

import pytest

from cryptoutils.ecc.curve_group import (
    INF,
    AffinePoint,
    EllipticCurve,
    InfinityPoint,
    add,
    double,
    is_infinity,
    multiply,
)
from cryptoutils.exceptions import (
    InvalidArgumentError,
    InvalidModulusError,
    NoInverseError,
    NoSquareRootError,
)

# test curves: very low cardinality
# name: (curve, generator, order of the generator)
low_card_curves: Dict[str, Tuple[EllipticCurve, AffinePoint, int]] = {}
# 13 % 4 = 1; 13 % 8 = 5
low_card_curves["ec13_11"] = (EllipticCurve(7, 6, 13), AffinePoint(1, 1), 11)
low_card_curves["ec13_19"] = (EllipticCurve(0, 2, 13), AffinePoint(1, 9), 19)
# 17 % 4 = 1; 17 % 8 = 1
low_card_curves["ec17_13"] = (EllipticCurve(6, 8, 17), AffinePoint(0, 12), 13)
low_card_curves["ec17_23"] = (EllipticCurve(3, 5, 17), AffinePoint(1, 14), 23)
# 19 % 4 = 3; 19 % 8 = 3
low_card_curves["ec19_13"] = (EllipticCurve(0, 2, 19), AffinePoint(4, 16), 13)
low_card_curves["ec19_23"] = (EllipticCurve(2, 9, 19), AffinePoint(0, 16), 23)
# 23 % 4 = 3; 23 % 8 = 7
low_card_curves["ec23_19"] = (EllipticCurve(9, 7, 23), AffinePoint(5, 4), 19)
low_card_curves["ec23_31"] = (EllipticCurve(5, 1, 23), AffinePoint(0, 1), 31)


def test_infinity() -> None:
    assert is_infinity(INF)
    assert InfinityPoint() is INF
    assert repr(INF) == "INF"
    assert pickle.loads(pickle.dumps(INF)) is INF
    assert not is_infinity(AffinePoint(0, 0))
    # no sentinel coordinates
    assert not is_infinity(AffinePoint(-1, -1))
    assert INF != AffinePoint(0, 0)
    assert INF != (-1, -1)


def test_exceptions() -> None:

    # good curve
    EllipticCurve(0, 2, 13)

    for n in (-13, 0, 1, 2, 3):
        with pytest.raises(InvalidModulusError, match="modulus not greater than 3: "):
            EllipticCurve(0, 2, n)

    with pytest.raises(InvalidArgumentError, match="zero discriminant"):
        EllipticCurve(0, 0, 13)
    # 4*(-3)^3 + 27*2^2 = 0
    with pytest.raises(InvalidArgumentError, match="zero discriminant"):
        EllipticCurve(-3, 2, 13)

    ec = EllipticCurve(0, 2, 13)
    with pytest.raises(InvalidArgumentError, match="point must be a tuple"):
        ec.is_on_curve((1, 1, 1))  # type: ignore
    with pytest.raises(InvalidArgumentError, match="point not on curve"):
        ec.require_on_curve(AffinePoint(1, 1))
    with pytest.raises(InvalidArgumentError, match="x-coordinate not in 0..n-1: "):
        ec.y(13)
    with pytest.raises(InvalidArgumentError, match="negative k: "):
        multiply(-1, AffinePoint(1, 9), ec)


def test_curve() -> None:
    ec = EllipticCurve(-3, 7, 13)
    assert ec.a == 10
    assert ec.b == 7
    assert ec.n == 13
    assert ec == EllipticCurve(10, 20, 13)
    assert ec != EllipticCurve(10, 7, 17)
    assert hash(ec) == hash(EllipticCurve(10, 7, 13))
    with pytest.raises(AttributeError):
        ec.n = 17  # type: ignore

    assert str(ec) == "EllipticCurve\n n   = 13\n a   = 10\n b   = 7"
    assert repr(ec) == "EllipticCurve(10, 7, 13)"

    p = 2 ** 256 - 2 ** 32 - 977
    ec = EllipticCurve(0, 7, p)
    assert repr(ec) == f"EllipticCurve(0, 7, '{'FFFFFFFF ' * 6}FFFFFFFE FFFFFC2F')"
    assert "n   = FFFFFFFF" in str(ec)
    # input conventions
    assert ec == EllipticCurve("00", "07", hex(p))


def test_negate_and_y() -> None:
    for ec, G, _ in low_card_curves.values():
        assert ec.negate(INF) == INF
        minus_G = ec.negate(G)
        assert ec.is_on_curve(minus_G)
        assert ec.add(G, minus_G) == INF
        assert ec.negate(minus_G) == G
        y = ec.y(G.x)
        assert y in (G.y, ec.n - G.y)

    ec = EllipticCurve(0, 2, 13)
    # 0^3 + 2 = 2 is not a square mod 13
    with pytest.raises(NoSquareRootError, match="invalid x-coordinate: "):
        ec.y(0)


def test_is_on_curve() -> None:
    for ec, G, _ in low_card_curves.values():
        assert ec.is_on_curve(INF)
        assert ec.is_on_curve(G)
        assert not ec.is_on_curve(AffinePoint(G.x, (G.y + 1) % ec.n))
        assert not ec.is_on_curve(AffinePoint(G.x + ec.n, G.y))
        assert not ec.is_on_curve(AffinePoint(-1, -1))
        ec.require_on_curve(G)


def test_identity() -> None:
    for ec, G, order in low_card_curves.values():
        for k in range(order):
            P = multiply(k, G, ec)
            assert add(P, INF, ec) == P
            assert add(INF, P, ec) == P
    ec, G, _ = low_card_curves["ec13_11"]
    assert double(INF, ec) == INF
    assert add(INF, INF, ec) == INF


def test_double() -> None:
    for ec, G, order in low_card_curves.values():
        for k in range(order):
            P = multiply(k, G, ec)
            assert add(P, P, ec) == double(P, ec)
            assert double(P, ec) == multiply(2 * k, G, ec)
            assert ec.is_on_curve(double(P, ec))


def test_add() -> None:
    for ec, G, order in low_card_curves.values():
        points = [multiply(k, G, ec) for k in range(order)]
        for i, P in enumerate(points):
            assert ec.is_on_curve(P)
            # opposite points: vertical line
            assert add(P, ec.negate(P), ec) == INF
            for j, Q in enumerate(points):
                R = add(P, Q, ec)
                assert R == add(Q, P, ec)
                assert R == points[(i + j) % order]


def test_add_does_not_modify_inputs() -> None:
    ec, G, _ = low_card_curves["ec23_31"]
    P = AffinePoint(G.x, G.y)
    Q = double(P, ec)
    add(P, Q, ec)
    multiply(7, P, ec)
    assert P == G
    assert Q == double(G, ec)


def test_multiply() -> None:
    for ec, G, order in low_card_curves.values():
        assert multiply(0, G, ec) == INF
        assert multiply(0, INF, ec) == INF
        assert multiply(1, INF, ec) == INF
        assert multiply(1, G, ec) == G
        assert multiply(2, G, ec) == add(G, G, ec)
        assert multiply(order - 1, G, ec) == ec.negate(G)
        assert multiply(order, G, ec) == INF
        assert multiply(order + 1, G, ec) == G

        # scalar multiplication distributes over scalar addition
        for k1 in range(order + 3):
            for k2 in (0, 1, 2, 5, order - 1, order + 1):
                K = add(multiply(k1, G, ec), multiply(k2, G, ec), ec)
                assert multiply(k1 + k2, G, ec) == K

        # repeated addition
        P = INF
        for k in range(2 * order):
            assert multiply(k, G, ec) == P
            P = add(P, G, ec)


def test_composite_modulus() -> None:
    n = 5 * 7
    ec = EllipticCurve(1, 1, n)

    # 2*y shares the factor 5 with the modulus
    with pytest.raises(NoInverseError, match="no inverse for ") as excinfo:
        double(AffinePoint(1, 5), ec)
    assert excinfo.value.factor == 5

    # delta_x shares the factor 7 with the modulus
    with pytest.raises(NoInverseError) as excinfo:
        add(AffinePoint(1, 2), AffinePoint(8, 3), ec)
    assert excinfo.value.factor == 7

    # 2*y = 0 mod n
    assert double(AffinePoint(3, 0), ec) == INF
    # same x, different y
    assert add(AffinePoint(3, 1), AffinePoint(3, 2), ec) == INF

    # the first failure aborts the scalar multiplication
    with pytest.raises(NoInverseError) as excinfo:
        multiply(2, AffinePoint(1, 5), ec)
    assert excinfo.value.factor == 5
    with pytest.raises(NoInverseError):
        multiply(6, AffinePoint(1, 5), ec)
    # no doubling of the affine point takes place
    assert multiply(1, AffinePoint(1, 5), ec) == AffinePoint(1, 5)
