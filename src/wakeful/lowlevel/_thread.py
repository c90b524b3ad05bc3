#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any

from wakeful._monkey import import_original

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

# third-party patchers can break the original objects from the threading
# module, so we need to use the _thread module in the first place

ThreadLock = import_original("_thread", "LockType")

__allocate_lock = import_original("_thread", "allocate_lock")
__start_new_thread = import_original("_thread", "start_new_thread")

current_thread_ident: Callable[[], int] = import_original(
    "_thread",
    "get_ident",
)


def create_thread_lock() -> ThreadLock:
    """
    Create a new instance of a primitive lock that blocks threads.

    The same as :class:`threading.Lock`, but not affected by monkey patching.
    """

    return __allocate_lock()


def start_new_thread(
    target: Callable[..., object],
    args: tuple[Any, ...] = (),
    /,
) -> int:
    """
    Start a new OS thread running ``target(*args)`` and return its identifier.

    The same as :func:`_thread.start_new_thread`, but not affected by monkey
    patching. The thread is not registered in :mod:`threading`, so callers are
    responsible for joining it (see :class:`wakeful.Worker`).

    Raises:
      TypeError:
        if *target* is not callable or *args* is not a tuple.
    """

    if not callable(target):
        msg = "target must be callable"
        raise TypeError(msg)

    if not isinstance(args, tuple):
        msg = "args must be a tuple"
        raise TypeError(msg)

    return __start_new_thread(target, args)
