"""The dispatcher: spawns children and hands them random lines of a book."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Callable, Iterable, Iterator
from os import PathLike
from pathlib import Path
from typing import Any, TextIO

from linedispatch.channel import Channel, Settings
from linedispatch.child import child_main
from linedispatch.config import Action, Command, ConfigError, read_commands


class LineIndex:
    """Random access to the lines of a text file.

    Lines longer than ``max_length - 1`` bytes are split into several entries.
    """

    def __init__(self, path: str | PathLike, max_length: int = Settings.max_line_length) -> None:
        if max_length < 2:
            raise ValueError("max_length must be at least 2")
        self._data = Path(path).read_bytes()
        self._spans = list(self._scan(max_length - 1))

    def _scan(self, chunk: int) -> Iterator[tuple[int, int]]:
        offset, size = 0, len(self._data)
        while offset < size:
            newline = self._data.find(b"\n", offset, offset + chunk)
            end = newline + 1 if newline != -1 else min(offset + chunk, size)
            yield offset, end
            offset = end

    def __len__(self) -> int:
        return len(self._spans)

    def line(self, number: int) -> str:
        """Return line ``number``, counted from zero, with its newline."""
        if not 0 <= number < len(self._spans):
            raise IndexError(f"line {number} out of range")
        start, end = self._spans[number]
        return self._data[start:end].decode("utf-8", errors="replace")


class Dispatcher:
    """Runs configuration commands and feeds random lines to active children."""

    def __init__(
        self,
        lines: LineIndex,
        channel: Channel,
        sent_log: TextIO,
        child_log_path: str | PathLike,
        *,
        adjust: int = Settings.adjust,
        rng: random.Random | None = None,
        start_child: Callable[[int], Any] | None = None,
    ) -> None:
        self.lines = lines
        self.channel = channel
        self.sent_log = sent_log
        self.child_log_path = child_log_path
        self.adjust = adjust
        self.rng = rng or random.Random()
        self._start_child = start_child or self._start_process
        self._active: dict[int, Any] = {}

    def _start_process(self, index: int) -> Any:
        process = self.channel.context.Process(
            target=child_main, args=(index, self.channel, self.child_log_path)
        )
        process.start()
        return process

    def _index(self, number: int) -> int:
        index = number - self.adjust
        if not 0 <= index < self.channel.consumer_count:
            raise ValueError(f"child number {number} out of range")
        return index

    def spawn(self, number: int) -> bool:
        """Start child ``number`` unless it is already running."""
        index = self._index(number)
        if index in self._active:
            return False
        handle = self._start_child(index)
        self.channel.wait_acknowledgement()
        self._active[index] = handle
        return True

    def terminate(self, number: int) -> bool:
        """Stop child ``number`` if it is running; raise if it exits with failure."""
        index = self._index(number)
        handle = self._active.pop(index, None)
        if handle is None:
            return False
        self.channel.request_termination(index)
        self.channel.wait_acknowledgement()
        handle.join()
        if handle.exitcode != 0:
            raise RuntimeError(f"child {index} had a failure")
        return True

    def dispatch_random_line(self) -> tuple[int, str] | None:
        """Send a random line to a random active child; None if none is active."""
        if not self._active:
            return None
        if not len(self.lines):
            raise ValueError("the book has no lines to send")
        line = self.lines.line(self.rng.randrange(len(self.lines)))
        index = self.rng.choice(sorted(self._active))
        self.sent_log.write(f"Sending following line to Child {index}:\n{line} ")
        self.channel.send(index, line)
        self.channel.wait_acknowledgement()
        return index, line

    def run(self, commands: Iterable[Command]) -> int:
        """Run until the exit command; return the loop at which it fell due."""
        pending = iter(commands)
        command = next(pending, None)
        while True:
            while command is not None and command.loop <= self.channel.loop:
                if command.action is Action.EXIT:
                    print("Parent beginning to exit...", flush=True)
                    self.shutdown()
                    return self.channel.loop
                if command.action is Action.SPAWN:
                    self.spawn(command.child)
                else:
                    self.terminate(command.child)
                command = next(pending, None)
            if command is None:
                self.shutdown()
                raise ConfigError("configuration ends without an exit command")
            self.dispatch_random_line()
            self.channel.advance_loop()

    def shutdown(self) -> None:
        """Stop every running child, one after another."""
        for index in sorted(self._active):
            self.channel.request_termination(index)
            self.channel.wait_acknowledgement()
            self._active[index].join()
        self._active.clear()


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    defaults = Settings()
    parser = argparse.ArgumentParser(
        prog="linedispatch", description="Hand random lines of a book to child processes."
    )
    parser.add_argument("--book", default=defaults.book_path)
    parser.add_argument("--config", default=defaults.config_path)
    parser.add_argument("--sent-log", default=defaults.sent_log_path)
    parser.add_argument("--child-log", default=defaults.child_log_path)
    parser.add_argument("--consumers", type=int, default=defaults.consumer_count)
    parser.add_argument("--adjust", type=int, default=defaults.adjust)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    try:
        lines = LineIndex(args.book, defaults.max_line_length)
        with open(args.config, encoding="utf-8") as config:
            commands = list(read_commands(config))
        Path(args.child_log).write_text("", encoding="utf-8")
        channel = Channel(args.consumers, defaults.buffer_size)
        with open(args.sent_log, "w", encoding="utf-8") as sent:
            dispatcher = Dispatcher(
                lines,
                channel,
                sent,
                args.child_log,
                adjust=args.adjust,
                rng=random.Random(args.seed),
            )
            dispatcher.run(commands)
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"linedispatch: {exc}", file=sys.stderr)
        return 1
    print("All children exited Parent exiting now...")
    return 0