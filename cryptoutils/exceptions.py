#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Exception classes.

These are meant to discriminate between Exceptions being raised
by cryptoutils from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError and RuntimeError from which the cryptoutils versions are derived.
"""


class InvalidArgumentError(ValueError):
    pass


class InvalidModulusError(InvalidArgumentError):
    pass


class NoInverseError(ValueError):
    """No modular inverse exists.

    The non-trivial gcd found by the extended Euclidean algorithm
    is available as the factor attribute: when the modulus is composite
    it is a factor of the modulus.
    """

    def __init__(self, factor: int, msg: str = "") -> None:
        self.factor = factor
        super().__init__(msg or f"no inverse, common factor: {factor}")


class NoSquareRootError(ValueError):
    pass


class SamplingExhaustedError(RuntimeError):
    pass


class FactorizationExhaustedError(SamplingExhaustedError):
    pass


class GeneratorSamplingExhaustedError(SamplingExhaustedError):
    pass
