#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"__init__ module for the cryptoutils package."

name = "cryptoutils"
__version__ = "2022.5.3"
__author__ = "The cryptoutils developers"
__author_email__ = "devs@cryptoutils.org"
__copyright__ = "Copyright (C) 2020-2022 The cryptoutils developers"
__license__ = "MIT License"
