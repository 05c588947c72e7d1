#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from random import Random
from typing import Optional, Tuple, Union

# bytes or text string (not hex-string)
#
# text strings are converted to bytes using encode()
String = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Source of randomness for the randomized algorithms.
# None stands for the shared secrets.SystemRandom instance,
# use random.Random(seed) for reproducible runs
RandomSource = Optional[Random]

# Factorization n = p * q of a semiprime
Factors = Tuple[int, int]
