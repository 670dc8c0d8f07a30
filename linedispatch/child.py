"""The child side of a dispatch run: receive lines and log them."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike

from linedispatch.channel import Channel


@dataclass(frozen=True)
class ChildReport:
    """How many lines a child received and for how many loops it ran."""

    index: int
    messages: int
    loops: int

    def __str__(self) -> str:
        return (
            f"Process {self.index} terminated - Total messages received-> "
            f"{self.messages} - Total Loops->{self.loops}"
        )


def run_child(index: int, channel: Channel, output_path: str | PathLike) -> ChildReport:
    """Announce readiness, log every line received until told to finish.

    The final acknowledgement of termination is left to the caller.
    """
    start = channel.loop
    messages = 0
    with open(output_path, "a", encoding="utf-8") as out:
        channel.acknowledge()
        while (line := channel.receive(index)) is not None:
            messages += 1
            out.write(f"Parent sent this line to child {index}:\n {line}")
            channel.acknowledge()
    return ChildReport(index, messages, channel.loop - start)


def child_main(index: int, channel: Channel, output_path: str | PathLike) -> int:
    """Run a child to completion, print its report and confirm its exit."""
    report = run_child(index, channel, output_path)
    print(report, flush=True)
    channel.acknowledge()
    return 0