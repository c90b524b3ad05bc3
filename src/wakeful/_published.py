#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any, Generic

from .lowlevel import create_thread_lock

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

_T = TypeVar("_T", default=int)


class Published(Generic[_T]):
    """
    A value written by one thread and read by any number of others.

    Both :meth:`set` and :meth:`get` go through a primitive lock, which gives
    the memory-visibility guarantee that a plain attribute shared between
    threads lacks: a read that happens after a write observes that write.
    Every :meth:`set` also increments :attr:`version`, so readers can tell a
    re-published value from the absence of a publication.
    """

    __slots__ = (
        "__weakref__",
        "_lock",
        "_value",
        "_version",
    )

    def __new__(cls, /, initial: _T = 0) -> Self:
        """..."""

        self = object.__new__(cls)

        self._lock = create_thread_lock()
        self._value = initial
        self._version = 0

        return self

    def __getnewargs__(self, /) -> tuple[Any, ...]:
        """
        Returns arguments that can be used to create new instances with the
        same current value (the version starts over).

        Example:
            >>> orig = Published(3)
            >>> orig.set(4)
            1
            >>> copy = Published(*orig.__getnewargs__())
            >>> copy.get(), copy.version
            (4, 0)
        """

        return (self.get(),)

    def __getstate__(self, /) -> None:
        """
        Disables the use of internal state for pickling and copying.
        """

        return None

    def __copy__(self, /) -> Self:
        return self.__class__(self.get())

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        with self._lock:
            value = self._value
            version = self._version

        return f"<{cls_repr}({value!r}) at {id(self):#x} [version={version}]>"

    def get(self, /) -> _T:
        """
        Return the most recently published value. Never blocks for longer
        than a concurrent :meth:`set` takes.

        Example:
            >>> result = Published()
            >>> result.get()
            0
            >>> result.get() == result.get()
            True
        """

        with self._lock:
            return self._value

    def set(self, /, value: _T) -> int:
        """
        Publish *value* and return the new version.
        """

        with self._lock:
            self._value = value
            self._version += 1

            return self._version

    def snapshot(self, /) -> tuple[_T, int]:
        """
        Return the value and the version it was published with, atomically.
        """

        with self._lock:
            return (self._value, self._version)

    @property
    def version(self, /) -> int:
        """
        The number of publications so far; zero before the first one.
        """

        with self._lock:
            return self._version
