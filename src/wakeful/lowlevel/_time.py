#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import platform
import sys

from math import inf, isinf, isnan
from typing import TYPE_CHECKING, Final, TypeVar

from wakeful._monkey import import_original

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

_T = TypeVar("_T")

# We cannot rely on _thread.TIMEOUT_MAX because it includes INFINITE until
# Python 3.11 (see python/cpython#28673).
if platform.system() != "Windows":
    # due to _PyTime_FromSecondsObject(): SEC_TO_NS (~292 years)
    _MAXIMUM_SECONDS_PER_TIMEOUT: Final[float] = float((2**63 - 1) // 10**9)
else:
    # due to milliseconds < ULONG_MAX (~50 days)
    _MAXIMUM_SECONDS_PER_TIMEOUT: Final[float] = (2**32 - 2) / 10**3

if sys.version_info >= (3, 13) or platform.system() != "Windows":
    thread_clock: Callable[[], float] = import_original("time", "monotonic")
else:  # see python/cpython#88494
    thread_clock: Callable[[], float] = import_original("time", "perf_counter")


def thread_seconds_per_timeout() -> float:
    """
    Return the longest timeout that a single lock acquisition can take.

    Longer waits are split into several acquisitions.
    """

    return _MAXIMUM_SECONDS_PER_TIMEOUT


def normalize_seconds(seconds: float | None, /, *, name: str) -> float | None:
    """
    Validate a duration and convert it to a float, or to :data:`None` for an
    infinite one.

    Raises:
      TypeError:
        if *seconds* is not a real number.
      ValueError:
        if *seconds* is NaN or negative.

    Example:
      >>> normalize_seconds(1, name='timeout')
      1.0
      >>> normalize_seconds(float('inf'), name='timeout') is None
      True
      >>> normalize_seconds(-1, name='timeout')
      Traceback (most recent call last):
      ValueError: timeout must be non-negative
    """

    if seconds is None:
        return None

    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        msg = f"{name} must be a real number: {seconds!r}"
        raise TypeError(msg)

    if isinstance(seconds, int):
        try:
            seconds = float(seconds)
        except OverflowError:
            seconds = (-1 if seconds < 0 else 1) * inf

    if isnan(seconds):
        msg = f"{name} must be non-NaN"
        raise ValueError(msg)

    if seconds < 0:
        msg = f"{name} must be non-negative"
        raise ValueError(msg)

    if isinf(seconds):
        return None

    return seconds


def long_wait(
    wait: Callable[[float], _T],
    seconds: float,
    /,
    seconds_per_wait: float,
    *,
    clock: Callable[[], float] = thread_clock,
) -> _T:
    """
    Call ``wait(timeout)`` as many times as needed to cover *seconds*, and stop
    as soon as it returns a true value.
    """

    if seconds > seconds_per_wait:
        deadline = clock() + seconds

        while True:
            result = wait(seconds_per_wait)

            if result:
                return result

            seconds = deadline - clock()

            if seconds <= 0:
                return result

            if seconds <= seconds_per_wait:
                break

    return wait(seconds)
