#!/usr/bin/env python3

# Copyright (C) 2020-2022 The cryptoutils developers
#
# This file is part of cryptoutils. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cryptoutils including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"__init__ module for the cryptoutils.ecc package."
