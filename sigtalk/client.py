"""Send a text message to a server process, one signal per bit."""

from __future__ import annotations

import os
import signal
import sys
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from .protocol import InvalidPidError, message_bits, parse_pid

_POLL_INTERVAL = 50e-6
_RECEIPT_TEXT = "vu....... \u2714\ufe0f\n"
_USAGE = "Usage: ./client <PID> <message>\n"


@dataclass
class _Acknowledgements:
    acked: bool = False
    received: bool = False

    def on_signal(self, signum: int, frame: object) -> None:
        if signum == signal.SIGUSR1:
            self.acked = True
        elif signum == signal.SIGUSR2:
            self.received = True


@contextmanager
def _installed(state: _Acknowledgements, signums: Sequence[int]) -> Iterator[None]:
    previous = {signum: signal.signal(signum, state.on_signal) for signum in signums}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)


def send_message(pid: int, message: str | bytes, *, wait_for_receipt: bool = False) -> bool:
    """Send ``message`` to ``pid`` bit by bit, waiting for each acknowledgement.

    A one bit is sent as SIGUSR2, a zero bit as SIGUSR1; the server answers
    every bit with SIGUSR1. With ``wait_for_receipt`` set, a SIGUSR2 from the
    server marks the message as received. Returns whether a receipt came.
    """
    state = _Acknowledgements()
    signums = (signal.SIGUSR1, signal.SIGUSR2) if wait_for_receipt else (signal.SIGUSR1,)
    with _installed(state, signums):
        for bit in message_bits(message):
            state.acked = False
            os.kill(pid, signal.SIGUSR2 if bit else signal.SIGUSR1)
            while not state.acked:
                time.sleep(_POLL_INTERVAL)
    return state.received


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: ``[--receipt] <PID> <message>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    wait = bool(args) and args[0] == "--receipt"
    if wait:
        args = args[1:]
    if len(args) != 2:
        sys.stderr.write(_USAGE)
        return 1
    try:
        pid = parse_pid(args[0])
    except InvalidPidError:
        sys.stderr.write("Invalid PID\n")
        return 1
    try:
        received = send_message(pid, os.fsencode(args[1]), wait_for_receipt=wait)
    except OSError as exc:
        sys.stderr.write(f"Cannot signal {pid}: {exc.strerror or exc}\n")
        return 1
    if received:
        sys.stdout.write(_RECEIPT_TEXT)
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())