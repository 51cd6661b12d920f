"""
Unit tests for single_instance.py - Instance lock and second-launch handling.
"""
import socket
import threading
import pytest

from gemini_translation.utils.single_instance import (
    is_already_running,
    listen_for_second_instance,
    notify_running_instance,
)


@pytest.fixture
def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class TestLock:
    """Tests for is_already_running."""

    def test_first_instance_gets_lock(self, free_port):
        running, lock_socket = is_already_running(free_port)
        try:
            assert running is False
            assert lock_socket is not None
        finally:
            lock_socket.close()

    def test_second_instance_detected(self, free_port):
        _, lock_socket = is_already_running(free_port)
        try:
            running, second = is_already_running(free_port)
            assert running is True
            assert second is None
        finally:
            lock_socket.close()


class TestSecondInstance:
    """Tests for the show-settings request."""

    def test_notify_reaches_listener(self, free_port):
        _, lock_socket = is_already_running(free_port)
        shown = threading.Event()
        try:
            listen_for_second_instance(lock_socket, shown.set)

            assert notify_running_instance(free_port) is True
            assert shown.wait(timeout=5)
        finally:
            lock_socket.close()

    def test_notify_without_instance(self, free_port):
        assert notify_running_instance(free_port) is False
