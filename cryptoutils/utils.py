#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Assorted conversion utilities.

Integers are converted to and from their base-256 big-endian
representation, i.e. the usual way a text message becomes an RSA plaintext.
"""

import secrets
from random import Random

from cryptoutils.alias import Integer, RandomSource, String
from cryptoutils.exceptions import InvalidArgumentError

_SYSTEM_RANDOM = secrets.SystemRandom()


def random_source(rng: RandomSource = None) -> Random:
    "Return the given random source or the shared SystemRandom one."
    return _SYSTEM_RANDOM if rng is None else rng


def int_from_integer(i: Integer) -> int:
    """Return an int from many possible integer representations.

    Allowed integer representations are:

    * 3735928559
    * -3735928559
    * "0xdeadbeef"
    * "-0xdeadbeef"
    * "deadbeef"
    * b'\xde\xad\xbe\xef'
    """

    if isinstance(i, int):
        return i

    if isinstance(i, str):
        i = i.strip().lower()
        if i.startswith("0x") or i.startswith("-0x"):
            return int(i, 16)
        i = bytes.fromhex(i)

    # must be bytes
    return int.from_bytes(i, "big", signed=False)


def hex_string(i: Integer) -> str:
    """Return a hex-string from many positive integer representations.

    Negative integers are not allowed.

    The resulting hex-string has an even number of hex-digits and
    includes a space every four bytes (i.e. every eight hex-digits).
    """

    int_ = int_from_integer(i)
    if int_ < 0:
        raise InvalidArgumentError(f"negative integer: {int_}")
    a_str = hex(int_)[2:]
    if len(a_str) % 2 != 0:
        a_str = "0" + a_str

    indx = list(reversed(range(len(a_str), 0, -8)))
    lresult = [(a_str[max(0, i - 8) : i]) for i in indx]
    result = " ".join(lresult)
    return result.upper()


def int_repr(i: int) -> str:
    "Render an int for error messages: hex-string when large."
    return f"'{hex_string(i)}'" if i > 0xFFFFFFFF else f"{i}"


def bytes_from_int(n: int) -> bytes:
    """Return the base-256 big-endian digits of a non-negative int.

    Zero has no digits, i.e. it is converted to the empty byte string.

    >>> bytes_from_int(22405534230753963835153736737)
    b'Hello world!'
    """

    if n < 0:
        raise InvalidArgumentError(f"negative integer: {n}")
    return n.to_bytes((n.bit_length() + 7) // 8, byteorder="big", signed=False)


def int_from_bytes(data: String) -> int:
    """Return the int whose base-256 big-endian digits are the input bytes.

    Text strings are encoded to bytes first.

    >>> int_from_bytes("Hello world!")
    22405534230753963835153736737
    """

    if isinstance(data, str):
        data = data.encode()
    return int.from_bytes(data, byteorder="big", signed=False)
