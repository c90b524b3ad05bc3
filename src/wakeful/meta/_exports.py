#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from types import FunctionType, ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import MutableMapping
    else:
        from typing import MutableMapping


def _issubmodule(module_name: str | None, package_name: str, /) -> bool:
    return module_name is not None and (
        module_name == package_name
        or module_name.startswith(f"{package_name}.")
    )


def _export_one(package_name: str, value: object, /) -> None:
    if isinstance(value, type):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        # copy the namespace so that it works in case of parallel calls
        for attr_name, attr_value in {**vars(value)}.items():
            if attr_name.startswith("_"):
                continue

            if isinstance(attr_value, FunctionType):
                if _issubmodule(attr_value.__module__, package_name):
                    attr_value.__module__ = package_name

        value.__module__ = package_name
    elif isinstance(value, FunctionType):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        value.__module__ = package_name


def export(namespace: MutableMapping[str, object], /) -> None:
    """
    Make public classes and functions of the package in *namespace* look like
    they are defined in the package itself.

    Private submodules are an implementation detail, so objects re-exported
    from them get their ``__module__`` attribute updated. This gives stable
    :func:`repr` values and lets :mod:`pickle` find classes by their public
    path.

    Also sets ``__all__`` if it is not already defined.

    Example:
      >>> import wakeful
      >>> wakeful.Worker.__module__
      'wakeful'
    """

    package_name = namespace["__name__"]

    names = []

    for name, value in {**namespace}.items():
        if name.startswith("_") or isinstance(value, ModuleType):
            continue

        if isinstance(value, (type, FunctionType)):
            _export_one(package_name, value)

        names.append(name)

    namespace.setdefault("__all__", tuple(names))
