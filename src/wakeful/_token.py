#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any

from .meta import MISSING, MissingType

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable


class CancelToken:
    """
    A one-shot flag that asks a worker to stop looping.

    Unlike a wake signal, cancellation is latched: once :meth:`cancel` has
    been called, the token stays cancelled, and the worker checks it before
    every iteration. The first call may attach a *reason* that
    :meth:`reason` returns later.

    The state is a list of at most one one-element tuple holding the reason,
    so that :meth:`cancel` and :meth:`cancelled` rely only on atomic list
    operations.
    """

    __slots__ = (
        "__weakref__",
        "_reasons",
    )

    def __new__(cls, /, reason: object = MISSING) -> Self:
        """
        Create a token, already cancelled if *reason* is passed.
        """

        self = object.__new__(cls)

        if reason is not MISSING:
            self._reasons = [(reason,)]
        else:
            self._reasons = []

        return self

    def __getnewargs__(self, /) -> tuple[Any, ...]:
        """
        Returns arguments that can be used to create new instances with the
        same state.

        Used by:

        * The :mod:`pickle` module for pickling.
        * The :mod:`copy` module for copying.

        Example:
            >>> orig = CancelToken()
            >>> orig.cancel('shutdown')
            True
            >>> copy = CancelToken(*orig.__getnewargs__())
            >>> copy.reason()
            'shutdown'
        """

        reason = self._first()

        if reason is MISSING:
            return ()

        return (reason,)

    def __getstate__(self, /) -> None:
        """
        Disables the use of internal state for pickling and copying.
        """

        return None

    def __copy__(self, /) -> Self:
        return self.__class__(self._first())

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        reason = self._first()

        if reason is MISSING:
            return f"{cls_repr}()"

        return f"{cls_repr}({reason!r})"

    def __bool__(self, /) -> bool:
        """
        Returns :data:`True` if the token is cancelled.

        Example:
            >>> token = CancelToken()
            >>> bool(token)
            False
            >>> token.cancel()
            True
            >>> bool(token)
            True
        """

        return bool(self._reasons)

    def _first(self, /) -> object:
        if self._reasons:
            try:
                return self._reasons[0][0]
            except IndexError:
                pass

        return MISSING

    def cancelled(self, /) -> bool:
        """
        Return :data:`True` if the token is cancelled.
        """

        return bool(self._reasons)

    def cancel(self, /, reason: object = MISSING) -> bool:
        """
        Cancel the token.

        Returns :data:`True` only for the call that actually cancelled it;
        concurrent and later calls return :data:`False` and do not change the
        stored reason.
        """

        reasons = self._reasons

        if reason is MISSING:
            reason = None

        if not reasons:
            # a fresh tuple per call tells concurrent callers apart even when
            # they pass the same reason
            reasons.append(entry := (reason,))

            if len(reasons) > 1:
                del reasons[1:]

            try:
                return reasons[0] is entry
            except IndexError:
                pass

        return False

    @overload
    def reason(self, /, default: object | MissingType = MISSING) -> object: ...
    @overload
    def reason(
        self,
        /,
        *,
        default_factory: Callable[[], object],
    ) -> object: ...
    def reason(self, /, default=MISSING, *, default_factory=MISSING):
        """
        Return the reason the token was cancelled with.

        Raises:
          LookupError:
            if the token is not cancelled and no default is given.
        """

        reason = self._first()

        if reason is not MISSING:
            return reason

        if default is not MISSING:
            return default

        if default_factory is not MISSING:
            return default_factory()

        raise LookupError(self)
