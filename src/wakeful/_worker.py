#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import os
import sys

from collections import deque
from itertools import count as _count
from logging import Logger, getLogger
from math import inf
from typing import TYPE_CHECKING, Final, NoReturn

from ._published import Published
from ._token import CancelToken
from .lowlevel import (
    create_thread_lock,
    create_thread_waiter,
    current_thread_ident,
    long_wait,
    normalize_seconds,
    start_new_thread,
    thread_clock,
    thread_seconds_per_timeout,
)
from .meta import DEFAULT, MISSING, DefaultType

if TYPE_CHECKING:
    from types import TracebackType

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

LOGGER: Final[Logger] = getLogger(__name__)

_FALLBACK_INTERVAL: Final[float] = 1.0


def _read_default_interval() -> float:
    value = os.getenv("WAKEFUL_DEFAULT_INTERVAL", "")

    if not value:
        return _FALLBACK_INTERVAL

    try:
        seconds = normalize_seconds(float(value), name="interval")
    except ValueError:
        LOGGER.warning(
            "Ignoring WAKEFUL_DEFAULT_INTERVAL=%r, using %s seconds",
            value,
            _FALLBACK_INTERVAL,
        )

        return _FALLBACK_INTERVAL

    if seconds is None:
        return inf

    return seconds


_DEFAULT_INTERVAL: Final[float] = _read_default_interval()

_next_worker_number = _count(1).__next__


class WorkerStateError(RuntimeError):
    """
    Raised when a worker is used in a way its lifecycle does not allow, such
    as starting it twice or joining it before it is started.
    """


class Worker:
    """
    A background thread that publishes every integer of ``range(start,
    start + count)`` in turn and sleeps for *interval* seconds after each
    publication.

    The sleep can be cut short from any thread with :meth:`wake`; the worker
    then publishes the next value immediately. :meth:`wake` is edge-triggered:
    it only affects a sleep that is in progress and is never remembered for a
    later one. Stopping the loop is a separate signal, :meth:`cancel`, which
    the worker checks before every publication.

    The current value is held in a :class:`Published` container, so it can be
    read from any thread with :meth:`get_current_result`. Before the first
    publication it is *initial* (zero by default).

    If *interval* is :data:`~wakeful.meta.DEFAULT`, the value of the
    ``WAKEFUL_DEFAULT_INTERVAL`` environment variable at import time is used,
    or one second if it is not set. An infinite interval means that the
    worker only advances when woken.

    Example:
      >>> with Worker(1, 3, interval=0) as worker:
      ...     worker.join()
      True
      >>> worker.get_current_result()
      3
    """

    __slots__ = (
        "__weakref__",
        "_count",
        "_done",
        "_finished",
        "_ident",
        "_interval",
        "_name",
        "_published",
        "_start",
        "_token",
        "_unstarted",
        "_waiters",
    )

    def __init__(
        self,
        start: int,
        count: int,
        /,
        interval: float | DefaultType = DEFAULT,
        *,
        initial: int = 0,
        name: str | None = None,
    ) -> None:
        """
        Raises:
          TypeError:
            if *start* or *count* is not an integer, or *interval* is not a
            real number.
          ValueError:
            if *count* is negative, or *interval* is negative or NaN.
        """

        for arg_name, arg_value in (("start", start), ("count", count)):
            if isinstance(arg_value, bool) or not isinstance(arg_value, int):
                msg = f"{arg_name} must be an integer: {arg_value!r}"
                raise TypeError(msg)

        if count < 0:
            msg = "count must be non-negative"
            raise ValueError(msg)

        if interval is DEFAULT:
            interval = _DEFAULT_INTERVAL

        self._interval = normalize_seconds(interval, name="interval")

        if name is None:
            name = f"Worker-{_next_worker_number()}"

        self._start = start
        self._count = count
        self._name = name

        self._published = Published(initial)
        self._token = CancelToken()

        self._waiters = deque()  # at most one waiter, while sleeping
        self._unstarted = [None]  # popped by start()

        self._done = create_thread_lock()
        self._finished = False
        self._ident = None

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        object_repr = f"{cls_repr}({self._start!r}, {self._count!r})"

        if self._unstarted:
            status = "initial"
        elif self._finished:
            status = "finished"
        elif self._waiters:
            status = "sleeping"
        else:
            status = "running"

        if self._token:
            status = f"{status}, cancelled"

        extra = f"{status}, result={self._published.get()!r}"

        return f"<{object_repr} {self._name!r} at {id(self):#x} [{extra}]>"

    def __enter__(self, /) -> Self:
        self.start()

        return self

    def __exit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.cancel()
        self.join()

    def start(self, /) -> None:
        """
        Start the worker thread.

        Raises:
          WorkerStateError:
            if the worker has already been started.
        """

        msg = "workers can only be started once"

        # held while running, so a concurrent join() never sees it free
        if not self._done.acquire(False):
            raise WorkerStateError(msg)

        try:
            self._unstarted.pop()
        except IndexError:
            self._done.release()
            raise WorkerStateError(msg) from None

        try:
            self._ident = start_new_thread(self._bootstrap)
        except BaseException:
            self._finished = True
            self._done.release()
            raise

        LOGGER.debug(
            "%s started on range(%d, %d)",
            self._name,
            self._start,
            self._start + self._count,
        )

    def _bootstrap(self, /) -> None:
        try:
            self._run()
        except Exception:
            LOGGER.exception("%s stopped by an unexpected error", self._name)
        finally:
            self._finished = True
            self._done.release()

    def _run(self, /) -> None:
        for value in range(self._start, self._start + self._count):
            if self._token:
                LOGGER.debug("%s cancelled before publishing", self._name)
                return

            version = self._published.set(value)

            LOGGER.debug(
                "%s published %d (version %d)",
                self._name,
                value,
                version,
            )

            self._sleep()

        LOGGER.debug("%s finished", self._name)

    def _sleep(self, /) -> None:
        if self._interval == 0:
            return

        waiter = create_thread_waiter()

        self._waiters.append(waiter)

        try:
            # cancel() may have woken nobody just before the append
            if self._token:
                return

            woken = waiter.wait(self._interval)
        finally:
            try:
                self._waiters.remove(waiter)
            except ValueError:  # already popped by wake()
                pass

        if woken:
            LOGGER.debug("%s woken early", self._name)

    def wake(self, /) -> bool:
        """
        End the worker's current sleep, if any.

        Returns :data:`True` if a sleep was in progress and this call ended
        it. Otherwise (not started yet, between sleeps, or finished) the call
        has no effect at all, and in particular it does not make the next
        sleep shorter.
        """

        try:
            waiter = self._waiters.popleft()
        except IndexError:
            return False

        return waiter.wake()

    def cancel(self, /, reason: object = MISSING) -> bool:
        """
        Ask the worker to stop before its next publication, and wake it.

        Returns :data:`True` for the call that actually cancelled the worker.
        A worker cancelled before :meth:`start` publishes nothing.
        """

        success = self._token.cancel(reason)

        self.wake()

        if success:
            LOGGER.debug("%s cancellation requested", self._name)

        return success

    def cancelled(self, /) -> bool:
        """
        Return :data:`True` if :meth:`cancel` has been called.
        """

        return self._token.cancelled()

    def get_current_result(self, /) -> int:
        """
        Return the most recently published value without blocking.

        Before the first publication, returns the initial value (zero by
        default). After the worker finishes, keeps returning the last value
        of the range (or the last one published before cancellation).
        """

        return self._published.get()

    def started(self, /) -> bool:
        """
        Return :data:`True` if :meth:`start` has been called.
        """

        return not self._unstarted

    def is_alive(self, /) -> bool:
        """
        Return :data:`True` if the worker thread has been started and has not
        finished yet.
        """

        return not self._unstarted and not self._finished

    def sleeping(self, /) -> bool:
        """
        Return :data:`True` if the worker is currently suspended, that is, if
        :meth:`wake` would end a sleep right now.
        """

        return bool(self._waiters)

    def join(self, /, timeout: float | None = None) -> bool:
        """
        Wait until the worker thread finishes, or until *timeout* seconds
        pass. Returns :data:`True` if the thread has finished.

        Raises:
          WorkerStateError:
            if the worker has not been started, or if called from the worker
            thread itself.
          ValueError:
            if *timeout* is negative or NaN.
        """

        if self._unstarted:
            msg = "cannot join a worker before it is started"
            raise WorkerStateError(msg)

        if self._ident is not None and self._ident == current_thread_ident():
            msg = "cannot join the current thread"
            raise WorkerStateError(msg)

        timeout = normalize_seconds(timeout, name="timeout")

        if timeout is None:
            success = self._done.acquire()
        elif timeout:
            success = long_wait(
                self._join_with_timeout,
                timeout,
                thread_seconds_per_timeout(),
                clock=thread_clock,
            )
        else:
            success = self._done.acquire(False)

        if success:
            self._done.release()

        return success

    def _join_with_timeout(self, /, timeout: float) -> bool:
        return self._done.acquire(True, timeout)

    @property
    def start_value(self, /) -> int:
        """
        The first value of the range.
        """

        return self._start

    @property
    def count(self, /) -> int:
        """
        The number of values in the range.
        """

        return self._count

    @property
    def stop_value(self, /) -> int:
        """
        The value just past the end of the range, ``start + count``.
        """

        return self._start + self._count

    @property
    def interval(self, /) -> float:
        """
        The sleep interval in seconds (:data:`math.inf` if the worker only
        advances when woken).
        """

        if self._interval is None:
            return inf

        return self._interval

    @property
    def name(self, /) -> str:
        return self._name

    @property
    def ident(self, /) -> int | None:
        """
        The identifier of the worker thread, or :data:`None` before
        :meth:`start`.
        """

        return self._ident

    @property
    def published(self, /) -> Published[int]:
        """
        The container the worker publishes its values to.
        """

        return self._published

    @property
    def token(self, /) -> CancelToken:
        """
        The token :meth:`cancel` sets.
        """

        return self._token
