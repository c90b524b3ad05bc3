#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import inspect
import sys
import threading

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from contextlib import contextmanager

import pytest

from wrapt import decorator

import wakeful

if sys.version_info >= (3, 11):
    WaitTimeout = TimeoutError
else:
    from concurrent.futures import TimeoutError as WaitTimeout

# how long the functions of a thread-safety test keep running concurrently
THREAD_SAFETY_DURATION = 6


@contextmanager
def _test_thread_safety_cm(*functions):
    with ThreadPoolExecutor(len(functions) + 1) as executor:
        barrier = threading.Barrier(len(functions) + 1)
        stopped = wakeful.CancelToken()

        @decorator
        def _loop_wrapper(wrapped, instance, args, kwargs):
            barrier.wait()

            if "stopped" in inspect.signature(wrapped).parameters:
                while True:
                    result = wrapped(*args, stopped=stopped, **kwargs)

                    if stopped:
                        break
            else:
                while True:
                    result = wrapped(*args, **kwargs)

                    if stopped:
                        break

            return result

        interval = sys.getswitchinterval()
        sys.setswitchinterval(min(1e-6, interval))

        try:
            outer_future = Future()
            inner_futures = {
                executor.submit(_loop_wrapper(f)) for f in functions
            }

            @executor.submit
            def _wait():
                try:
                    barrier.wait()

                    for future in as_completed(
                        inner_futures,
                        timeout=THREAD_SAFETY_DURATION,
                    ):
                        future.result()  # reraise
                except WaitTimeout:
                    outer_future.set_result(True)
                except BaseException as exc:  # noqa: BLE001
                    outer_future.set_exception(exc)
                else:
                    outer_future.set_result(False)
                finally:
                    stopped.cancel()

            yield outer_future
        finally:
            sys.setswitchinterval(interval)


@pytest.fixture
def test_thread_safety():
    """
    Run the given functions in a loop, each in its own thread, for a fixed
    time, and re-raise the first exception any of them raises.
    """

    def _impl(*functions):
        with _test_thread_safety_cm(*functions) as future:
            return future.result()

    return _impl


def pytest_addoption(parser):
    parser.addoption(
        "--thread-safety",
        action="store_true",
        default=False,
        help="run thread-safety tests",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "threadsafe: mark test as thread-safety test",
    )


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "test_thread_safety" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.threadsafe)

        if "threadsafe" in item.keywords:
            if not config.getoption("--thread-safety"):
                item.add_marker(
                    pytest.mark.skip(
                        reason="need --thread-safety option to run",
                    )
                )
