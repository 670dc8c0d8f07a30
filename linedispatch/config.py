"""Parsing of the dispatcher's configuration commands."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class ConfigError(ValueError):
    """Raised when a configuration line cannot be understood."""


class Action(Enum):
    """What the dispatcher does when a command falls due."""

    SPAWN = "spawn"
    TERMINATE = "terminate"
    EXIT = "exit"


@dataclass(frozen=True)
class Command:
    """One configuration command: act on a child at a given loop."""

    loop: int
    action: Action
    child: int | None = None


def parse_command(line: str) -> Command:
    """Parse a line such as ``"12 C3 S"``, ``"40 C3 T"`` or ``"90 EXIT"``."""
    fields = line.split()
    if not fields:
        raise ConfigError("empty command line")
    try:
        loop = int(fields[0])
    except ValueError:
        raise ConfigError(f"invalid loop number {fields[0]!r}") from None
    if len(fields) < 2:
        raise ConfigError(f"missing command after loop {loop}")
    if fields[1].startswith("E"):
        return Command(loop, Action.EXIT)
    if len(fields) < 3:
        raise ConfigError(f"missing action for {fields[1]!r}")
    try:
        child = int(fields[1].replace("C", ""))
    except ValueError:
        raise ConfigError(f"invalid child number {fields[1]!r}") from None
    action = Action.SPAWN if fields[2].startswith("S") else Action.TERMINATE
    return Command(loop, action, child)


def read_commands(lines: Iterable[str]) -> Iterator[Command]:
    """Yield the commands of a configuration, skipping blank lines."""
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield parse_command(line)
        except ConfigError as exc:
            raise ConfigError(f"line {number}: {exc}") from None