#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
This package implements the building blocks of the worker: the thread
primitives taken from the unpatched :mod:`_thread` module, the clock, and the
single-use waiters that make a sleep interruptible.
"""

from ._thread import (
    ThreadLock as ThreadLock,
    create_thread_lock as create_thread_lock,
    current_thread_ident as current_thread_ident,
    start_new_thread as start_new_thread,
)
from ._time import (
    long_wait as long_wait,
    normalize_seconds as normalize_seconds,
    thread_clock as thread_clock,
    thread_seconds_per_timeout as thread_seconds_per_timeout,
)
from ._waiters import (
    ThreadWaiter as ThreadWaiter,
    create_thread_waiter as create_thread_waiter,
)
from wakeful.meta import export as _export

# prepare for external use
_export(globals())

del _export
