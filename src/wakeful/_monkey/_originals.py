#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from importlib import import_module
from types import ModuleType

from wrapt import when_imported

from wakeful.meta import replaces

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

# The worker must always run on a real OS thread: gevent and eventlet replace
# `_thread` and `threading` with greenlet-based versions, so the originals are
# looked up through the patchers themselves once they have been imported.


def _eventlet_patched(module_name: str, /) -> bool:
    return False


@when_imported("eventlet.patcher")
def _(_):
    @replaces(globals())
    def _eventlet_patched(module_name, /):
        from eventlet.patcher import already_patched

        mapping = {
            "_thread": "thread",
            "threading": "thread",
            "time": "time",
        }

        return mapping.get(module_name, module_name) in already_patched


def _gevent_patched(module_name: str, /) -> bool:
    return False


@when_imported("gevent.monkey")
def _(_):
    @replaces(globals())
    def _gevent_patched(module_name, /):
        from gevent.monkey import is_module_patched

        return is_module_patched(module_name)


def patched(module_name: str, /) -> bool:
    """
    Return :data:`True` if *module_name* has been monkey patched by gevent or
    eventlet.
    """

    return _gevent_patched(module_name) or _eventlet_patched(module_name)


def _import_one(module: ModuleType, name: str, /) -> object:
    try:
        return getattr(module, name)
    except AttributeError:
        pass

    msg = f"cannot import name {name!r} from {module.__name__!r}"
    exc = ImportError(msg)
    exc.name = module.__name__

    try:
        raise exc
    finally:
        del exc  # break reference cycles


def _import_original_module(module_name: str, /) -> ModuleType:
    if _eventlet_patched(module_name):
        from eventlet.patcher import original

        return original(module_name)

    if _gevent_patched(module_name):
        from gevent.monkey import get_original

        names = dir(import_module(module_name))

        module = ModuleType(module_name)
        vars(module).update(zip(names, get_original(module_name, names)))

        return module

    return import_module(module_name)


@overload
def import_original(module_name: str, /) -> ModuleType: ...
@overload
def import_original(module_name: str, name0: str, /) -> object: ...
@overload
def import_original(
    module_name: str,
    name0: str,
    name1: str,
    /,
    *names: str,
) -> tuple[object, ...]: ...
def import_original(module_name, /, *names):
    """
    Import the unpatched *module_name* (or the given *names* from it).

    Raises:
      ImportError:
        if any given name is not in the module.

    Example:
      >>> get_ident = import_original('_thread', 'get_ident')
      >>> get_ident() == import_original('threading').get_ident()
      True
    """

    module = _import_original_module(module_name)

    if not names:
        return module

    if len(names) == 1:
        return _import_one(module, names[0])

    return tuple(_import_one(module, name) for name in names)
