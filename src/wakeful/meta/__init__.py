#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
This package implements the markers and the small metaprogramming helpers
that the rest of the library is built on.
"""

from ._exports import (
    export as export,
)
from ._functions import (
    replaces as replaces,
)
from ._markers import (
    DEFAULT as DEFAULT,
    MISSING as MISSING,
    DefaultType as DefaultType,
    MissingType as MissingType,
    SingletonEnum as SingletonEnum,
)

# prepare for external use
export(globals())
