#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from logging import Logger, getLogger
from typing import TYPE_CHECKING, Any, Final, NamedTuple, NoReturn

if TYPE_CHECKING:
    from ._worker import Worker

    if sys.version_info >= (3, 9):
        from collections.abc import Callable, Iterable, Iterator
    else:
        from typing import Callable, Iterable, Iterator

LOGGER: Final[Logger] = getLogger(__name__)


def is_even(value: int, /) -> bool:
    """
    Return :data:`True` if *value* is even. The default filter of
    :class:`Controller`.

    Example:
      >>> is_even(4), is_even(3)
      (True, False)
    """

    return value % 2 == 0


class Observation(NamedTuple):
    """
    What a controller saw at one probe.
    """

    probe: Any
    value: int
    emitted: bool
    woke: bool


class Controller:
    """
    Drives a :class:`~wakeful.Worker` by waking it once per probe, and emits
    the published values that pass a filter.

    For each item of *probes*, in order, the controller calls
    :meth:`Worker.wake`, then :meth:`Worker.get_current_result`, then applies
    *predicate* to the value it read; if the predicate holds, the value is
    emitted. The controller never waits for the worker, so whether a read sees
    the value triggered by the preceding wake depends on scheduling, and the
    same value may be read (and emitted) several times.

    Every processed probe is recorded in :attr:`observations`.

    If *until_done* is true, probing stops after the first probe that finds
    the worker started and no longer alive. A worker that has not been
    started yet is probed as usual.

    Example:
      >>> from wakeful import Worker
      >>> worker = Worker(1, 6, interval=0)
      >>> worker.start()
      >>> worker.join()
      True
      >>> Controller(worker, range(3)).run()
      [6, 6, 6]
    """

    __slots__ = (
        "__weakref__",
        "_observations",
        "_predicate",
        "_probes",
        "_until_done",
        "_worker",
    )

    def __init__(
        self,
        worker: Worker,
        probes: Iterable[Any],
        /,
        predicate: Callable[[int], object] = is_even,
        *,
        until_done: bool = False,
    ) -> None:
        """
        Raises:
          TypeError:
            if *predicate* is not callable.
        """

        if not callable(predicate):
            msg = f"predicate must be callable: {predicate!r}"
            raise TypeError(msg)

        self._worker = worker
        self._probes = iter(probes)
        self._predicate = predicate
        self._until_done = until_done
        self._observations = []

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        object_repr = f"{cls_repr}({self._worker!r}, ...)"
        extra = f"observed={len(self._observations)}"

        return f"<{object_repr} at {id(self):#x} [{extra}]>"

    def __iter__(self, /) -> Iterator[int]:
        return self.emit()

    def emit(self, /) -> Iterator[int]:
        """
        Process the remaining probes lazily, yielding each emitted value.
        """

        worker = self._worker
        predicate = self._predicate

        for probe in self._probes:
            woke = worker.wake()
            value = worker.get_current_result()
            emitted = bool(predicate(value))

            self._observations.append(
                Observation(probe, value, emitted, woke),
            )

            if emitted:
                yield value

            if self._until_done and worker.started() and not worker.is_alive():
                LOGGER.debug(
                    "%s is done, stopping at probe %r",
                    worker.name,
                    probe,
                )

                break

    def run(self, /) -> list[int]:
        """
        Process all remaining probes and return the emitted values.
        """

        return list(self.emit())

    @property
    def observations(self, /) -> list[Observation]:
        """
        One record per processed probe, in probe order.
        """

        return self._observations

    @property
    def worker(self, /) -> Worker:
        return self._worker
