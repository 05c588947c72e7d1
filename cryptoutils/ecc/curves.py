#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Named elliptic curves over prime fields.

Each curve comes with its generator G and the order of G.
"""

from typing import Dict, NamedTuple

from cryptoutils.ecc.curve_group import AffinePoint, EllipticCurve


class NamedCurve(NamedTuple):
    ec: EllipticCurve
    G: AffinePoint
    order: int


# NIST P-256, also known as secp256r1 and prime256v1
P256 = NamedCurve(
    EllipticCurve(
        -3,
        41058363725152142129326129780047268409114441015993725554835256314039467401291,
        2 ** 256 - 2 ** 224 + 2 ** 192 + 2 ** 96 - 1,
    ),
    AffinePoint(
        48439561293906451759052585252797914202762949526041747995844080717082404635286,
        36134250956749795798585127919587881956611106672985015071877198253568414405109,
    ),
    0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
)

# SEC 2 secp256k1
SECP256K1 = NamedCurve(
    EllipticCurve(0, 7, 2 ** 256 - 2 ** 32 - 977),
    AffinePoint(
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    ),
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)

CURVES: Dict[str, NamedCurve] = {
    "P-256": P256,
    "secp256k1": SECP256K1,
}
