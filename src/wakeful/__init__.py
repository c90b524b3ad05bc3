#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
Interruptible background workers for Python threads

This package implements a cooperative worker-interrupt primitive: a
:class:`Worker` publishes the values of an integer range one by one from its
own thread, sleeping between publications, and a :class:`Controller` wakes it
early and filters what it reads. The pieces it is built from can also be used
on their own:

* :class:`Published` - a value written by one thread and safely read by others
* :class:`CancelToken` - a latched "stop looping" signal
* :mod:`wakeful.lowlevel` - interruptible single-use waiters and the original
  (not monkey patched) thread primitives
"""

__author__: str = "Ilya Egorov <0x42005e1f@gmail.com>"

from . import (  # noqa: F401
    lowlevel,
    meta,
)
from ._controller import (
    Controller as Controller,
    Observation as Observation,
    is_even as is_even,
)
from ._published import (
    Published as Published,
)
from ._token import (
    CancelToken as CancelToken,
)
from ._version import (
    version as __version__,
    version_tuple as __version_tuple__,
)
from ._worker import (
    Worker as Worker,
    WorkerStateError as WorkerStateError,
)

# prepare for external use
meta.export(globals())
