"""
Single instance lock for Gemini Translation.
Prevents multiple instances from running simultaneously; a second launch
asks the running instance to open its Settings window.
"""
import socket
import logging
import threading
from typing import Callable, Tuple, Optional

from gemini_translation.constants import LOCK_PORT, SHOW_SETTINGS_MESSAGE


def is_already_running(port: int = LOCK_PORT) -> Tuple[bool, Optional[socket.socket]]:
    """Check if another instance is already running using socket lock."""
    try:
        lock_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        lock_socket.bind(('127.0.0.1', port))
        lock_socket.listen(1)
        return False, lock_socket
    except socket.error:
        return True, None


def notify_running_instance(port: int = LOCK_PORT) -> bool:
    """Ask the running instance to show its Settings window."""
    try:
        with socket.create_connection(('127.0.0.1', port), timeout=2.0) as conn:
            conn.sendall(SHOW_SETTINGS_MESSAGE)
        return True
    except OSError as e:
        logging.warning(f"Could not reach running instance: {e}")
        return False


def listen_for_second_instance(lock_socket: socket.socket,
                               on_second_instance: Callable[[], None]) -> threading.Thread:
    """Accept connections on the lock socket and call on_second_instance per request."""
    def accept_loop():
        while True:
            try:
                conn, _ = lock_socket.accept()
            except OSError:
                break  # Lock socket closed on quit
            with conn:
                try:
                    data = conn.recv(64)
                except OSError:
                    continue
            if data == SHOW_SETTINGS_MESSAGE:
                logging.info("Second instance launched, showing settings")
                on_second_instance()

    thread = threading.Thread(target=accept_loop, daemon=True, name="SingleInstance")
    thread.start()
    return thread
