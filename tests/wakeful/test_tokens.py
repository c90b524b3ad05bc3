#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import gc
import pickle
import time
import weakref

from copy import copy, deepcopy

import pytest

import wakeful


class TestCancelToken:
    factory = wakeful.CancelToken

    def test_base(self, /):
        assert not self.factory()
        assert not self.factory().cancelled()
        assert self.factory(None)
        assert self.factory("reason").cancelled()

        pkg = "wakeful"
        assert repr(self.factory()) == f"{pkg}.CancelToken()"
        assert repr(self.factory(None)) == f"{pkg}.CancelToken(None)"
        assert repr(self.factory("stop")) == f"{pkg}.CancelToken('stop')"

    def test_attrs(self, /):
        token = self.factory()

        with pytest.raises(AttributeError):
            token.nonexistent_attribute  # noqa: B018
        with pytest.raises(AttributeError):
            token.nonexistent_attribute = 42

    def test_cancel(self, /):
        token = self.factory()

        assert token.cancel()
        assert not token.cancel()
        assert not token.cancel("later")

        assert token
        assert token.reason() is None

    def test_reason(self, /):
        token = self.factory()

        with pytest.raises(LookupError):
            token.reason()
        assert token.reason(None) is None
        assert token.reason(default="default") == "default"
        assert token.reason(default_factory=list) == []

        token.cancel(marker := object())

        assert token.reason() is marker
        assert token.reason(None) is marker
        assert token.reason(default_factory=list) is marker

    def test_copying(self, /):
        token = self.factory()

        assert not copy(token)
        assert not deepcopy(token)

        token.cancel("stop")

        assert copy(token).reason() == "stop"
        assert deepcopy(token).reason() == "stop"
        assert copy(token) is not token

    def test_pickling(self, /):
        token = self.factory()
        clone = pickle.loads(pickle.dumps(token))

        assert not clone

        clone.cancel()

        assert not token
        assert clone

        token.cancel("stop")
        clone = pickle.loads(pickle.dumps(token))

        assert clone.reason() == "stop"

    def test_weakrefing(self, /):
        token = self.factory()
        token_ref = weakref.ref(token)

        assert token_ref() is token

        del token
        gc.collect()

        assert token_ref() is None

    def test_cancel_threadsafe(self, test_thread_safety):
        tokens = [self.factory()]

        def a():
            token = tokens[0]

            if token.cancel(marker := object()):
                assert token.reason() is marker
            else:
                assert token.reason(None) is not marker

        def b():
            tokens[0] = self.factory()
            time.sleep(0)

        test_thread_safety(a, a, b)
