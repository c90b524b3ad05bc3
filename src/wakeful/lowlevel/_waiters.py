#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from typing import Any, NoReturn, final

from ._thread import create_thread_lock
from ._time import (
    long_wait,
    normalize_seconds,
    thread_clock,
    thread_seconds_per_timeout,
)


@final
class ThreadWaiter:
    """
    A single-use sleep that another thread can end early.

    The waiter holds an acquired primitive lock; :meth:`wait` blocks on a
    second acquisition and :meth:`wake` releases it. Either the first
    :meth:`wake` or the first timeout settles the waiter for good: a woken
    waiter stays woken, and a waiter that timed out can no longer be woken.
    Create a new one for each sleep.
    """

    __slots__ = (
        "__weakref__",
        "_lock",
        "_pending",
        "_timed_out",
    )

    def __init__(self, /) -> None:
        self._lock = create_thread_lock()
        self._lock.acquire()

        self._pending = [None]  # popped by whoever settles the waiter
        self._timed_out = False

    def __init_subclass__(cls, /, **kwargs: Any) -> NoReturn:
        bcs = ThreadWaiter
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        if self._pending:
            extra = "waiting"
        elif self._timed_out:
            extra = "timed out"
        else:
            extra = "woken"

        return f"<{cls_repr} object at {id(self):#x} [{extra}]>"

    def __bool__(self, /) -> bool:
        """
        Returns :data:`True` if the waiter has been woken.
        """

        return not self._lock.locked()

    def wait(self, /, timeout: float | None = None) -> bool:
        """
        Block until :meth:`wake` is called or *timeout* seconds pass.

        Returns :data:`True` if the waiter was woken and :data:`False` on
        timeout. Being woken is the expected way for the sleep to end early
        and is never reported as an error.

        Raises:
          TypeError:
            if *timeout* is not a real number.
          ValueError:
            if *timeout* is NaN or negative.
        """

        timeout = normalize_seconds(timeout, name="timeout")

        if timeout is None:
            success = self._lock.acquire()
        elif timeout:
            success = long_wait(
                self._wait_with_timeout,
                timeout,
                thread_seconds_per_timeout(),
                clock=thread_clock,
            )
        else:
            success = self._lock.acquire(False)

        if not success:
            try:
                self._pending.pop()
            except IndexError:
                if self._timed_out:  # settled by an earlier wait()
                    return False

                # wake() won the race and is about to release the lock
                success = self._lock.acquire()
            else:
                self._timed_out = True

                return False

        self._lock.release()

        return success

    def _wait_with_timeout(self, /, timeout: float) -> bool:
        return self._lock.acquire(True, timeout)

    def wake(self, /) -> bool:
        """
        End the sleep. Returns :data:`True` if this call woke the waiter.

        Waking a waiter that is already woken or has timed out does nothing
        and returns :data:`False`.
        """

        try:
            self._pending.pop()
        except IndexError:
            return False

        self._lock.release()

        return True


def create_thread_waiter() -> ThreadWaiter:
    """
    Create a new waiter for the current thread.
    """

    return ThreadWaiter()
