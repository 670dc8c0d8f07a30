"""Shared channel between the dispatcher and its child processes."""

from __future__ import annotations

import multiprocessing
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Settings:
    """Default limits and file locations of a dispatch run."""

    consumer_count: int = 10
    adjust: int = 1
    buffer_size: int = 1024
    max_line_length: int = 256
    book_path: str = "Data/mobydick.txt"
    config_path: str = "Data/config_10_10000.txt"
    sent_log_path: str = "Data/sentlinespar.txt"
    child_log_path: str = "Data/sentlineschild.txt"


class Channel:
    """A shared line buffer with one wake-up semaphore per child and one reply semaphore.

    The channel may be handed to child processes created from ``context``.
    """

    def __init__(
        self,
        consumer_count: int = Settings.consumer_count,
        buffer_size: int = Settings.buffer_size,
        *,
        context: Any = None,
        timeout: float | None = None,
    ) -> None:
        if consumer_count < 1:
            raise ValueError("consumer_count must be at least 1")
        if buffer_size < 2:
            raise ValueError("buffer_size must be at least 2")
        self.context = context or multiprocessing.get_context()
        self.consumer_count = consumer_count
        self.buffer_size = buffer_size
        self.timeout = timeout
        self._wake = [self.context.Semaphore(0) for _ in range(consumer_count)]
        self._done = self.context.Semaphore(0)
        self._buffer = self.context.Array("c", buffer_size, lock=False)
        self._terminate = self.context.Array("i", consumer_count, lock=False)
        self._loop = self.context.Value("l", 0, lock=False)

    def __getstate__(self) -> dict:
        state = self.__dict__.copy()
        state["context"] = self.context.get_start_method()
        return state

    def __setstate__(self, state: dict) -> None:
        state["context"] = multiprocessing.get_context(state["context"])
        self.__dict__.update(state)

    def _check(self, index: int) -> None:
        if not 0 <= index < self.consumer_count:
            raise IndexError(f"child index {index} out of range")

    def _acquire(self, semaphore: Any) -> None:
        if not semaphore.acquire(timeout=self.timeout):
            raise TimeoutError("timed out waiting on the channel")

    @property
    def loop(self) -> int:
        """The dispatcher's current loop number."""
        return self._loop.value

    def send(self, index: int, line: str) -> None:
        """Place a line in the buffer, truncated to fit, and wake child ``index``."""
        self._check(index)
        self._buffer.value = line.encode("utf-8")[: self.buffer_size - 1]
        self._wake[index].release()

    def request_termination(self, index: int) -> None:
        """Tell child ``index`` to finish and wake it."""
        self._check(index)
        self._terminate[index] = 1
        self._wake[index].release()

    def receive(self, index: int) -> str | None:
        """Wait to be woken; return the buffered line, or None when asked to finish."""
        self._check(index)
        self._acquire(self._wake[index])
        if self._terminate[index]:
            self._terminate[index] = 0
            return None
        return self._buffer.value.decode("utf-8", errors="replace")

    def acknowledge(self) -> None:
        """Signal the dispatcher that the child has finished its step."""
        self._done.release()

    def wait_acknowledgement(self) -> None:
        """Block until a child acknowledges."""
        self._acquire(self._done)

    def advance_loop(self) -> int:
        """Move to the next loop and return its number."""
        self._loop.value += 1
        return self._loop.value