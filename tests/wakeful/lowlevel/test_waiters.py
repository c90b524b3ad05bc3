#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import pickle
import threading
import time

import pytest

import wakeful.lowlevel


class TestThreadWaiter:
    factory = staticmethod(wakeful.lowlevel.create_thread_waiter)

    def test_base(self, /):
        waiter = self.factory()

        assert not waiter
        assert "waiting" in repr(waiter)

        assert waiter.wake()
        assert not waiter.wake()

        assert waiter
        assert "woken" in repr(waiter)

    def test_wait_after_wake(self, /):
        waiter = self.factory()
        waiter.wake()

        assert waiter.wait(0)
        assert waiter.wait(0)  # stays woken
        assert waiter.wait()

    def test_wait_timeout(self, /):
        waiter = self.factory()

        start = time.monotonic()

        assert not waiter.wait(0.05)
        assert time.monotonic() - start >= 0.04
        assert not waiter.wait(0)
        assert not waiter
        assert "timed out" in repr(waiter)

    def test_wake_after_timeout(self, /):
        waiter = self.factory()

        assert not waiter.wait(0.01)
        assert not waiter.wake()
        assert not waiter.wait(0)
        assert not waiter

    def test_wait_after_wake_race(self, /):
        waiter = self.factory()

        # a wake() that settled the waiter but has not released it yet
        waiter._pending.pop()
        timer = threading.Timer(0.05, waiter._lock.release)
        timer.start()

        try:
            assert waiter.wait(0)
            assert waiter
        finally:
            timer.join()

    def test_wake_from_another_thread(self, /):
        waiter = self.factory()
        timer = threading.Timer(0.05, waiter.wake)
        timer.start()

        try:
            start = time.monotonic()

            assert waiter.wait(10)
            assert time.monotonic() - start < 5
        finally:
            timer.cancel()
            timer.join()

    def test_wake_forever(self, /):
        waiter = self.factory()
        timer = threading.Timer(0.05, waiter.wake)
        timer.start()

        try:
            assert waiter.wait(float("inf"))
        finally:
            timer.join()

    def test_bad_timeout(self, /):
        waiter = self.factory()

        with pytest.raises(ValueError):
            waiter.wait(-1)
        with pytest.raises(ValueError):
            waiter.wait(float("nan"))
        with pytest.raises(TypeError):
            waiter.wait("1")
        with pytest.raises(TypeError):
            waiter.wait(True)

    def test_inheritance(self, /):
        with pytest.raises(TypeError):

            class Waiter(wakeful.lowlevel.ThreadWaiter):
                pass

    def test_pickling(self, /):
        with pytest.raises(TypeError):
            pickle.dumps(self.factory())
