#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

from copy import copy, deepcopy

import pytest

import wakeful.meta


class _TestMarker:
    def test_base(self, /):
        assert type(self.value)() is self.value  # singleton
        assert repr(self.value) == self.name
        assert str(self.value) == self.name
        assert not self.value

    def test_attrs(self, /):
        with pytest.raises(AttributeError):
            self.value.nonexistent_attribute  # noqa: B018
        with pytest.raises(AttributeError):
            self.value.nonexistent_attribute = 42

    def test_copying(self, /):
        assert copy(self.value) is self.value
        assert deepcopy(self.value) is self.value

    def test_inheritance(self, /):
        with pytest.raises(TypeError):

            class MarkerType(type(self.value)):
                pass


class TestDefault(_TestMarker):
    name = "wakeful.meta.DEFAULT"
    value = wakeful.meta.DEFAULT


class TestMissing(_TestMarker):
    name = "wakeful.meta.MISSING"
    value = wakeful.meta.MISSING


def test_markers_differ():
    assert wakeful.meta.DEFAULT is not wakeful.meta.MISSING
    assert wakeful.meta.DEFAULT != wakeful.meta.MISSING


def test_singleton_enum_slots():
    class SingletonType(wakeful.meta.SingletonEnum):
        __slots__ = ("_x",)

        SINGLETON = "SINGLETON"

    singleton = SingletonType()

    assert singleton is SingletonType.SINGLETON

    singleton._x = 1  # declared

    with pytest.raises(AttributeError):
        singleton._y = 2
